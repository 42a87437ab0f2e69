"""Ordering bounded context: Catalogue lookup, Shopping Cart and Orders.

Handles per-buyer cart management with stock-aware quantity limits, the
checkout flow that converts a cart into an order, and the order status
lifecycle driven by admins.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
