"""Order aggregate: the permanent record of a checkout.

Line items are captured once, when the order is placed, and never change
afterwards; only ``status`` and ``updated_at`` move.

State Machine (5 states):
    PENDING → CONFIRMED → SHIPPED → DELIVERED
    CANCELLED (from PENDING, CONFIRMED)
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from ordering.domain import ordering
from ordering.exceptions import EmptyCartError, InvalidTransitionError
from ordering.order.events import OrderPlaced, OrderStatusChanged


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# State machine transition map
VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A purchased line: product identity and price as they were at checkout."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=200)
    price = Integer(required=True, min_value=0)
    quantity = Integer(required=True, min_value=1)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    total_amount = Integer(required=True, min_value=0)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, items_data, total_amount):
        """Create a pending order from a cart snapshot.

        Args:
            user_id: The buyer placing the order.
            items_data: List of dicts with product_id, product_name, price,
                        quantity.
            total_amount: The cart subtotal at checkout time.
        """
        if not items_data:
            raise EmptyCartError()

        now = datetime.now(UTC)
        order = cls(
            user_id=str(user_id),
            total_amount=total_amount,
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        for item in items_data:
            order.add_items(
                OrderItem(
                    product_id=item["product_id"],
                    product_name=item["product_name"],
                    price=item["price"],
                    quantity=item["quantity"],
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                total_amount=total_amount,
                item_count=sum(item["quantity"] for item in items_data),
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def can_transition_to(self, target_status):
        return target_status in VALID_TRANSITIONS.get(OrderStatus(self.status), set())

    def transition_to(self, target_status):
        """Move the order one edge along the status graph.

        Self-transitions and skipped states are rejected: neither appears in
        the transition map.
        """
        target_status = OrderStatus(target_status)
        current = OrderStatus(self.status)
        if not self.can_transition_to(target_status):
            raise InvalidTransitionError(current.value, target_status.value)

        now = datetime.now(UTC)
        self.status = target_status.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=current.value,
                new_status=target_status.value,
                changed_at=now,
            )
        )

    def confirm(self):
        self.transition_to(OrderStatus.CONFIRMED)

    def ship(self):
        self.transition_to(OrderStatus.SHIPPED)

    def deliver(self):
        self.transition_to(OrderStatus.DELIVERED)

    def cancel(self):
        self.transition_to(OrderStatus.CANCELLED)

    @property
    def is_terminal(self):
        return not VALID_TRANSITIONS[OrderStatus(self.status)]


@ordering.repository(part_of=Order)
class OrderRepository:
    def find_by_id(self, order_id) -> Order | None:
        try:
            return self.get(order_id)
        except ObjectNotFoundError:
            return None

    def _query(self, user_id=None, status=None):
        criteria = {}
        if user_id is not None:
            criteria["user_id"] = str(user_id)
        if status is not None:
            criteria["status"] = status
        return self._dao.query.filter(**criteria) if criteria else self._dao.query

    def find_all(self, user_id=None, status=None, offset=0, limit=20) -> list[Order]:
        """Orders matching the filter, newest first."""
        return self._query(user_id, status).order_by("-created_at").offset(offset).limit(limit).all().items

    def count(self, user_id=None, status=None) -> int:
        return self._query(user_id, status).all().total
