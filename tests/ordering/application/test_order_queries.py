"""Application tests for order reads: ownership and pagination."""

import pytest
from ordering.exceptions import OrderNotFoundError
from ordering.order.order import Order
from ordering.order.queries import MAX_PAGE_SIZE, get_order, list_orders
from protean import current_domain
from protean.exceptions import ValidationError


class TestGetOrder:
    def test_owner_sees_order(self, buyer, make_order):
        order = make_order(user_id=buyer.user_id)
        assert get_order(order.id, buyer).id == order.id

    def test_other_buyer_gets_not_found(self, other_buyer, make_order):
        order = make_order(user_id="buyer-001")
        with pytest.raises(OrderNotFoundError):
            get_order(order.id, other_buyer)

    def test_admin_sees_any_order(self, admin, make_order):
        order = make_order(user_id="buyer-001")
        assert get_order(order.id, admin).user_id == "buyer-001"

    def test_missing_order(self, buyer):
        with pytest.raises(OrderNotFoundError) as exc:
            get_order("missing-order", buyer)
        assert "order_id" in exc.value.messages


class TestListOrders:
    def test_buyer_sees_only_own_orders(self, buyer, make_order):
        make_order(user_id=buyer.user_id)
        make_order(user_id=buyer.user_id)
        make_order(user_id="buyer-002")

        page = list_orders(buyer)
        assert page.total == 2
        assert {o.user_id for o in page.orders} == {buyer.user_id}

    def test_buyer_filter_for_other_user_is_ignored(self, buyer, make_order):
        make_order(user_id=buyer.user_id)
        make_order(user_id="buyer-002")

        page = list_orders(buyer, user_id="buyer-002")
        assert page.total == 1
        assert page.orders[0].user_id == buyer.user_id

    def test_admin_sees_all_orders(self, admin, make_order):
        make_order(user_id="buyer-001")
        make_order(user_id="buyer-002")

        assert list_orders(admin).total == 2

    def test_admin_filters_by_user(self, admin, make_order):
        make_order(user_id="buyer-001")
        make_order(user_id="buyer-002")

        page = list_orders(admin, user_id="buyer-002")
        assert page.total == 1
        assert page.orders[0].user_id == "buyer-002"

    def test_filters_by_status(self, admin, make_order):
        confirmed = make_order()
        confirmed.confirm()
        current_domain.repository_for(Order).add(confirmed)
        make_order()

        page = list_orders(admin, status="confirmed")
        assert page.total == 1
        assert page.orders[0].id == confirmed.id

    def test_newest_first(self, buyer, make_order, timestamps):
        created = [make_order(user_id=buyer.user_id, created_at=ts) for ts in timestamps]

        page = list_orders(buyer)
        assert [o.id for o in page.orders] == [o.id for o in reversed(created)]

    def test_pagination(self, buyer, make_order, timestamps):
        created = [make_order(user_id=buyer.user_id, created_at=ts) for ts in timestamps]
        newest_first = [o.id for o in reversed(created)]

        first = list_orders(buyer, page=1, limit=2)
        assert first.total == 5
        assert first.total_pages == 3
        assert [o.id for o in first.orders] == newest_first[:2]

        last = list_orders(buyer, page=3, limit=2)
        assert [o.id for o in last.orders] == newest_first[4:]

        beyond = list_orders(buyer, page=4, limit=2)
        assert beyond.orders == []
        assert beyond.total == 5

    def test_no_orders(self, buyer):
        page = list_orders(buyer)
        assert page.orders == []
        assert page.total == 0
        assert page.total_pages == 0
        assert page.page == 1
        assert page.limit == 20

    def test_max_limit_is_accepted(self, buyer):
        assert list_orders(buyer, limit=MAX_PAGE_SIZE).limit == MAX_PAGE_SIZE

    @pytest.mark.parametrize(
        ("kwargs", "field"),
        [
            ({"page": 0}, "page"),
            ({"limit": 0}, "limit"),
            ({"limit": MAX_PAGE_SIZE + 1}, "limit"),
            ({"status": "lost"}, "status"),
        ],
    )
    def test_invalid_arguments(self, buyer, kwargs, field):
        with pytest.raises(ValidationError) as exc:
            list_orders(buyer, **kwargs)
        assert field in exc.value.messages
