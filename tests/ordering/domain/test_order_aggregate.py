"""Tests for Order placement: snapshot of cart lines into a pending order."""

import pytest
from ordering.exceptions import EmptyCartError
from ordering.order.events import OrderPlaced
from ordering.order.order import Order, OrderItem, OrderStatus
from protean.exceptions import ValidationError

ITEMS = [
    {"product_id": "prod-001", "product_name": "Espresso Machine", "price": 3000, "quantity": 2},
    {"product_id": "prod-002", "product_name": "Beans", "price": 1500, "quantity": 1},
]


def _place():
    return Order.place(user_id="buyer-001", items_data=ITEMS, total_amount=7500)


class TestOrderPlacement:
    def test_order_starts_pending(self):
        order = _place()
        assert order.status == OrderStatus.PENDING.value
        assert order.user_id == "buyer-001"
        assert order.total_amount == 7500

    def test_items_are_copied(self):
        order = _place()
        assert len(order.items) == 2
        first = order.items[0]
        assert isinstance(first, OrderItem)
        assert first.product_id == "prod-001"
        assert first.product_name == "Espresso Machine"
        assert first.price == 3000
        assert first.quantity == 2

    def test_timestamps_are_set(self):
        order = _place()
        assert order.created_at is not None
        assert order.updated_at == order.created_at

    def test_raises_order_placed(self):
        order = _place()
        assert len(order._events) == 1
        event = order._events[0]
        assert isinstance(event, OrderPlaced)
        assert event.order_id == str(order.id)
        assert event.total_amount == 7500
        assert event.item_count == 3

    def test_empty_items_are_rejected(self):
        with pytest.raises(EmptyCartError):
            Order.place(user_id="buyer-001", items_data=[], total_amount=0)

    def test_empty_cart_error_is_a_validation_error(self):
        with pytest.raises(ValidationError) as exc:
            Order.place(user_id="buyer-001", items_data=[], total_amount=0)
        assert "cart" in exc.value.messages


class TestOrderItem:
    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            OrderItem(product_id="prod-001", product_name="Beans", price=1500, quantity=0)

    def test_price_cannot_be_negative(self):
        with pytest.raises(ValidationError):
            OrderItem(product_id="prod-001", product_name="Beans", price=-1, quantity=1)
