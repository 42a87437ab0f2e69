"""Domain events for the Order aggregate.

Events are immutable facts; nothing in the context subscribes to them yet, but
they are raised so that downstream consumers (notifications, fulfillment) can
be attached without touching the aggregate.
"""

from protean.fields import DateTime, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A buyer checked out their cart and a new order was created."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    total_amount = Integer(required=True)
    item_count = Integer(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """The order moved one edge along the status graph."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)
