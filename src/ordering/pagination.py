"""Page arguments shared by the order and product listings."""

import math

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def page_errors(page: int, limit: int) -> dict[str, list[str]]:
    """Validation messages for a 1-indexed ``page`` and a ``limit`` of 1..MAX_PAGE_SIZE."""
    errors = {}
    if page < 1:
        errors["page"] = ["Page must be at least 1"]
    if limit < 1 or limit > MAX_PAGE_SIZE:
        errors["limit"] = [f"Limit must be between 1 and {MAX_PAGE_SIZE}"]
    return errors


def offset_for(page: int, limit: int) -> int:
    return (page - 1) * limit


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if total else 0
