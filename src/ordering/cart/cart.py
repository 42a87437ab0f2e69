"""Shopping Cart aggregate: one per buyer, converted to an Order at checkout.

The cart is a standard CQRS aggregate (not event sourced). Each line copies
the product's name, price and image at the moment it is added; stock is
only checked, never reserved, so the check is advisory.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from ordering.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from ordering.domain import ordering
from ordering.exceptions import CartItemNotFoundError

MAX_LINE_QUANTITY = 99


def _insufficient_stock(product):
    return ValidationError({"quantity": [f"Insufficient stock for {product.name}: {product.stock} available"]})


@ordering.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=200)
    price = Integer(required=True, min_value=0)  # Captured when added
    image_url = String(max_length=500)
    quantity = Integer(required=True, min_value=1, max_value=MAX_LINE_QUANTITY)
    added_at = DateTime()

    @property
    def line_total(self):
        return self.price * self.quantity


@ordering.aggregate
class ShoppingCart:
    user_id = Identifier(required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_product(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in a cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(
            user_id=user_id,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Derived totals
    # -------------------------------------------------------------------
    @property
    def subtotal(self):
        return sum(item.line_total for item in self.items)

    @property
    def item_count(self):
        return sum(item.quantity for item in self.items)

    def line_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product, quantity=1):
        """Add ``quantity`` units of ``product`` (or grow its existing line).

        The combined quantity already in the cart plus ``quantity`` must fit
        into the product's current stock.
        """
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        existing = self.line_for(product.id)
        in_cart = existing.quantity if existing else 0
        new_quantity = in_cart + quantity

        if not product.can_supply(new_quantity):
            raise _insufficient_stock(product)
        if new_quantity > MAX_LINE_QUANTITY:
            raise ValidationError({"quantity": [f"At most {MAX_LINE_QUANTITY} units per product"]})

        now = datetime.now(UTC)

        if existing:
            existing.quantity = new_quantity
        else:
            self.add_items(
                CartItem(
                    product_id=str(product.id),
                    product_name=product.name,
                    price=product.price,
                    image_url=product.image_url,
                    quantity=quantity,
                    added_at=now,
                )
            )

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                product_id=str(product.id),
                quantity=quantity,
                line_quantity=new_quantity,
            )
        )

    def update_item_quantity(self, product, quantity):
        """Set the quantity of an existing line, re-checked against live stock."""
        item = self.line_for(product.id)
        if item is None:
            raise CartItemNotFoundError(product.id)
        if quantity < 1 or quantity > MAX_LINE_QUANTITY:
            raise ValidationError({"quantity": [f"Quantity must be between 1 and {MAX_LINE_QUANTITY}"]})
        if quantity > product.stock:
            raise _insufficient_stock(product)

        previous_quantity = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product.id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, product_id):
        item = self.line_for(product_id)
        if item is None:
            raise CartItemNotFoundError(product_id)

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                product_id=str(product_id),
            )
        )

    # -------------------------------------------------------------------
    # Checkout support
    # -------------------------------------------------------------------
    def snapshot(self):
        """Order-ready copy of the lines: image and timestamps are cart-only."""
        return [
            {
                "product_id": str(item.product_id),
                "product_name": item.product_name,
                "price": item.price,
                "quantity": item.quantity,
            }
            for item in self.items
        ]

    def clear(self):
        items = list(self.items)
        for item in items:
            self.remove_items(item)

        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                items_removed=len(items),
                cleared_at=now,
            )
        )


@ordering.repository(part_of=ShoppingCart)
class CartRepository:
    def find_by_user_id(self, user_id) -> ShoppingCart | None:
        carts = self._dao.query.filter(user_id=str(user_id)).all().items
        return carts[0] if carts else None

    def create_for(self, user_id) -> ShoppingCart:
        cart = ShoppingCart.create(user_id=str(user_id))
        self.add(cart)
        return cart

    def find_or_create(self, user_id) -> ShoppingCart:
        return self.find_by_user_id(user_id) or self.create_for(user_id)

    def clear(self, user_id) -> None:
        cart = self.find_by_user_id(user_id)
        if cart is not None:
            cart.clear()
            self.add(cart)
