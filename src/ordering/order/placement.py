"""Order placement (checkout): command and handler.

Reads the buyer's cart, snapshots it into a pending Order and clears the
cart. Stock is not re-checked here; it was checked when items were added.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.access import Action, Actor, Role, authorize
from ordering.cart.cart import ShoppingCart
from ordering.domain import ordering
from ordering.exceptions import EmptyCartError
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    actor_id = Identifier(required=True)
    actor_role = String(required=True, choices=Role)


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        actor = Actor.of(command.actor_id, command.actor_role)
        authorize(actor, Action.PLACE_ORDER)

        cart_repo = current_domain.repository_for(ShoppingCart)
        cart = cart_repo.find_by_user_id(actor.user_id)
        if cart is None or not cart.items:
            raise EmptyCartError()

        order = Order.place(
            user_id=actor.user_id,
            items_data=cart.snapshot(),
            total_amount=cart.subtotal,
        )
        current_domain.repository_for(Order).add(order)

        cart_repo.clear(actor.user_id)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=actor.user_id,
            total_amount=order.total_amount,
        )
        return order
