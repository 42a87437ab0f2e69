"""Order status management: admin command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.access import Action, Actor, Role, authorize
from ordering.domain import ordering
from ordering.exceptions import OrderNotFoundError
from ordering.order.order import Order, OrderStatus

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    actor_id = Identifier(required=True)
    actor_role = String(required=True, choices=Role)
    order_id = Identifier(required=True)
    status = String(required=True, choices=OrderStatus)


@ordering.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        authorize(Actor.of(command.actor_id, command.actor_role), Action.UPDATE_ORDER_STATUS)

        repo = current_domain.repository_for(Order)
        order = repo.find_by_id(command.order_id)
        if order is None:
            raise OrderNotFoundError(command.order_id)

        previous_status = order.status
        order.transition_to(OrderStatus(command.status))
        repo.add(order)

        logger.info(
            "Order status changed",
            order_id=str(order.id),
            previous_status=previous_status,
            new_status=order.status,
        )
        return order
