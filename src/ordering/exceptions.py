"""Domain errors raised by the Ordering context.

Everything builds on Protean's exception hierarchy so callers can catch the
broad kind (``ObjectNotFoundError``, ``ValidationError``) or the specific one.
Every error carries ``messages`` as ``{field: [message, ...]}``.
"""

from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError


class NotFoundError(ObjectNotFoundError):
    def __init__(self, messages):
        super().__init__(messages)
        self.messages = messages


class ProductNotFoundError(NotFoundError):
    def __init__(self, product_id):
        self.product_id = str(product_id)
        super().__init__({"product_id": [f"Product {product_id} does not exist"]})


class CartItemNotFoundError(NotFoundError):
    def __init__(self, product_id):
        self.product_id = str(product_id)
        super().__init__({"product_id": [f"Product {product_id} is not in the cart"]})


class OrderNotFoundError(NotFoundError):
    """Raised for missing orders, and for orders the requester may not see."""

    def __init__(self, order_id):
        self.order_id = str(order_id)
        super().__init__({"order_id": [f"Order {order_id} does not exist"]})


class EmptyCartError(ValidationError):
    def __init__(self):
        super().__init__({"cart": ["Cannot place an order from an empty cart"]})


class InvalidTransitionError(ValidationError):
    def __init__(self, current_status, target_status):
        self.current_status = current_status
        self.target_status = target_status
        super().__init__({"status": [f"Cannot transition from {current_status} to {target_status}"]})


class ForbiddenError(InvalidOperationError):
    def __init__(self, actor, action):
        self.actor = actor
        self.action = action
        self.message = f"Role {actor.role.value} may not {action.value}"
        super().__init__(self.message)
        self.messages = {"actor": [self.message]}
