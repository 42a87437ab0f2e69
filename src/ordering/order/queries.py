"""Order reads: single order lookup and the paginated order list."""

from dataclasses import dataclass

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from ordering.access import Action, Actor, authorize, is_allowed
from ordering.exceptions import OrderNotFoundError
from ordering.order.order import Order, OrderStatus
from ordering.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, offset_for, page_errors, total_pages

__all__ = ["DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE", "OrderPage", "get_order", "list_orders"]


@dataclass(frozen=True)
class OrderPage:
    orders: list
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.limit)


def get_order(order_id, actor: Actor) -> Order:
    """Fetch one order.

    A buyer asking for someone else's order gets the same error as for an
    order that does not exist.
    """
    order = current_domain.repository_for(Order).find_by_id(order_id)
    if order is None or not is_allowed(actor, Action.VIEW_ORDER, order):
        raise OrderNotFoundError(order_id)
    return order


def list_orders(
    actor: Actor,
    user_id=None,
    status=None,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
) -> OrderPage:
    """Page through orders, newest first.

    Buyers always see only their own orders, whatever ``user_id`` they pass.
    Admins see everything unless they filter by ``user_id``.
    """
    authorize(actor, Action.LIST_ORDERS)

    errors = page_errors(page, limit)
    if status is not None and status not in {s.value for s in OrderStatus}:
        errors["status"] = [f"Unknown order status: {status}"]
    if errors:
        raise ValidationError(errors)

    if not actor.is_admin:
        user_id = actor.user_id

    repo = current_domain.repository_for(Order)
    orders = repo.find_all(user_id=user_id, status=status, offset=offset_for(page, limit), limit=limit)
    total = repo.count(user_id=user_id, status=status)

    return OrderPage(orders=orders, page=page, limit=limit, total=total)
