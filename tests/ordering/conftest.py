from datetime import UTC, datetime

import pytest
from ordering.access import Actor, Role
from ordering.catalogue.product import Product
from ordering.order.order import Order
from protean import current_domain


@pytest.fixture()
def buyer():
    return Actor.of("buyer-001", Role.BUYER)


@pytest.fixture()
def other_buyer():
    return Actor.of("buyer-002", Role.BUYER)


@pytest.fixture()
def admin():
    return Actor.of("admin-001", Role.ADMIN)


@pytest.fixture()
def make_product():
    """Persist a product directly through its repository and return it."""

    def _make(name="Espresso Machine", price=3000, stock=5, image_url=None, status=None):
        product = Product.create(name=name, price=price, stock=stock, image_url=image_url)
        if status is not None:
            product.change_status(status)
        current_domain.repository_for(Product).add(product)
        return product

    return _make


@pytest.fixture()
def make_order():
    """Persist a pending order with a fixed creation time."""

    def _make(user_id="buyer-001", created_at=None, price=1000, quantity=1):
        order = Order.place(
            user_id=user_id,
            items_data=[
                {
                    "product_id": "prod-001",
                    "product_name": "Pour-over Kettle",
                    "price": price,
                    "quantity": quantity,
                }
            ],
            total_amount=price * quantity,
        )
        if created_at is not None:
            order.created_at = created_at
            order.updated_at = created_at
        current_domain.repository_for(Order).add(order)
        return order

    return _make


@pytest.fixture()
def timestamps():
    """Five strictly increasing creation times, oldest first."""
    return [datetime(2024, 1, day, 12, 0, tzinfo=UTC) for day in range(1, 6)]
