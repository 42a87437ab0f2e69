"""Access policy: who may do what to which cart, order or product.

Every role check in the context goes through ``is_allowed``/``authorize``
instead of comparing role strings inline.
"""

from dataclasses import dataclass
from enum import Enum

from ordering.exceptions import ForbiddenError


class Role(Enum):
    BUYER = "buyer"
    ADMIN = "admin"


class Action(Enum):
    MANAGE_CART = "manage_cart"
    PLACE_ORDER = "place_order"
    VIEW_ORDER = "view_order"
    LIST_ORDERS = "list_orders"
    UPDATE_ORDER_STATUS = "update_order_status"
    MANAGE_CATALOGUE = "manage_catalogue"
    BROWSE_CATALOGUE = "browse_catalogue"


@dataclass(frozen=True)
class Actor:
    """The authenticated caller on whose behalf an operation runs."""

    user_id: str
    role: Role

    @classmethod
    def of(cls, user_id, role) -> "Actor":
        return cls(user_id=str(user_id), role=Role(role))

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


_ROLE_PERMISSIONS = {
    Role.BUYER: {
        Action.MANAGE_CART,
        Action.PLACE_ORDER,
        Action.VIEW_ORDER,
        Action.LIST_ORDERS,
        Action.BROWSE_CATALOGUE,
    },
    Role.ADMIN: {
        Action.VIEW_ORDER,
        Action.LIST_ORDERS,
        Action.UPDATE_ORDER_STATUS,
        Action.MANAGE_CATALOGUE,
        Action.BROWSE_CATALOGUE,
    },
}


def is_allowed(actor: Actor, action: Action, resource=None) -> bool:
    """Decide whether ``actor`` may perform ``action`` on ``resource``.

    Admins are never restricted by ownership. For buyers, a resource that
    carries a ``user_id`` must belong to them.
    """
    if action not in _ROLE_PERMISSIONS.get(actor.role, set()):
        return False

    if actor.is_admin or resource is None:
        return True

    owner_id = getattr(resource, "user_id", None)
    return owner_id is None or str(owner_id) == actor.user_id


def authorize(actor: Actor, action: Action, resource=None) -> None:
    if not is_allowed(actor, action, resource):
        raise ForbiddenError(actor, action)
