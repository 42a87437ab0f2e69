"""Catalogue reads.

Buyers only see published products. Drafts and archived products are
reported to them exactly like products that do not exist.
"""

from dataclasses import dataclass

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from ordering.access import Action, Actor, authorize
from ordering.catalogue.product import Product, ProductStatus
from ordering.exceptions import ProductNotFoundError
from ordering.pagination import DEFAULT_PAGE_SIZE, offset_for, page_errors, total_pages


@dataclass(frozen=True)
class ProductPage:
    products: list
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.limit)


def find_product(product_id) -> Product:
    """Any product regardless of status; used where the caller is trusted."""
    product = current_domain.repository_for(Product).find_by_id(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return product


def view_product(product_id, actor: Actor) -> Product:
    authorize(actor, Action.BROWSE_CATALOGUE)

    product = find_product(product_id)
    if not actor.is_admin and not product.is_published:
        raise ProductNotFoundError(product_id)
    return product


def browse_products(
    actor: Actor,
    status=None,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
) -> ProductPage:
    """Page through the catalogue, newest first.

    Admins may filter by any status or see everything; buyers always get
    published products only.
    """
    authorize(actor, Action.BROWSE_CATALOGUE)

    errors = page_errors(page, limit)
    if status is not None and status not in {s.value for s in ProductStatus}:
        errors["status"] = [f"Unknown product status: {status}"]
    if errors:
        raise ValidationError(errors)

    if not actor.is_admin:
        status = ProductStatus.PUBLISHED.value

    repo = current_domain.repository_for(Product)
    products = repo.find_all(status=status, offset=offset_for(page, limit), limit=limit)
    total = repo.count(status=status)

    return ProductPage(products=products, page=page, limit=limit, total=total)
