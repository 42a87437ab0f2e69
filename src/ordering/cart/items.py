"""Cart item management: commands and handler.

Every command is scoped to the acting buyer's own cart; there is no way to
address another user's cart.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.access import Action, Actor, Role, authorize
from ordering.cart.cart import MAX_LINE_QUANTITY, ShoppingCart
from ordering.catalogue.product import Product
from ordering.domain import ordering
from ordering.exceptions import CartItemNotFoundError, ProductNotFoundError

logger = structlog.get_logger(__name__)


@ordering.command(part_of="ShoppingCart")
class AddToCart:
    actor_id = Identifier(required=True)
    actor_role = String(required=True, choices=Role)
    product_id = Identifier(required=True)
    quantity = Integer(default=1, min_value=1, max_value=MAX_LINE_QUANTITY)


@ordering.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    actor_id = Identifier(required=True)
    actor_role = String(required=True, choices=Role)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1, max_value=MAX_LINE_QUANTITY)


@ordering.command(part_of="ShoppingCart")
class RemoveFromCart:
    actor_id = Identifier(required=True)
    actor_role = String(required=True, choices=Role)
    product_id = Identifier(required=True)


def _product(product_id):
    product = current_domain.repository_for(Product).find_by_id(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return product


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        actor = Actor.of(command.actor_id, command.actor_role)
        authorize(actor, Action.MANAGE_CART)

        product = _product(command.product_id)

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_or_create(actor.user_id)
        cart.add_item(product, quantity=command.quantity or 1)
        repo.add(cart)

        logger.info(
            "Item added to cart",
            user_id=actor.user_id,
            product_id=str(product.id),
            item_count=cart.item_count,
        )
        return cart

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        actor = Actor.of(command.actor_id, command.actor_role)
        authorize(actor, Action.MANAGE_CART)

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_by_user_id(actor.user_id)
        if cart is None or cart.line_for(command.product_id) is None:
            raise CartItemNotFoundError(command.product_id)

        cart.update_item_quantity(_product(command.product_id), command.quantity)
        repo.add(cart)

        logger.info(
            "Cart quantity updated",
            user_id=actor.user_id,
            product_id=str(command.product_id),
            quantity=command.quantity,
        )
        return cart

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        actor = Actor.of(command.actor_id, command.actor_role)
        authorize(actor, Action.MANAGE_CART)

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_by_user_id(actor.user_id)
        if cart is None:
            raise CartItemNotFoundError(command.product_id)

        cart.remove_item(command.product_id)
        repo.add(cart)

        logger.info("Item removed from cart", user_id=actor.user_id, product_id=str(command.product_id))
        return cart


def fetch_cart(actor: Actor) -> ShoppingCart:
    """Return the actor's cart, creating an empty one on first access."""
    authorize(actor, Action.MANAGE_CART)
    return current_domain.repository_for(ShoppingCart).find_or_create(actor.user_id)
