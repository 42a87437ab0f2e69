"""Product aggregate: the catalogue entry a cart line is priced and stock-checked against.

Carts never hold a reference to a Product; they copy name, price and image at
the moment an item is added, and re-read stock on every quantity change.

New products start as drafts. Buyers only ever see published products;
admins see every status.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Integer, String

from ordering.catalogue.events import ProductListed, ProductStatusChanged, ProductUpdated
from ordering.domain import ordering

# Marks an argument that was not passed, so ``None`` can clear optional fields
_UNSET = object()


class ProductStatus(Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


@ordering.aggregate
class Product:
    name = String(required=True, max_length=200)
    description = String(max_length=2000)
    price = Integer(required=True, min_value=0)  # Minor currency unit
    stock = Integer(default=0, min_value=0)
    image_url = String(max_length=500)
    status = String(choices=ProductStatus, default=ProductStatus.DRAFT.value)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, name, price, stock=0, description=None, image_url=None):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            price=price,
            stock=stock,
            image_url=image_url,
            status=ProductStatus.DRAFT.value,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductListed(
                product_id=str(product.id),
                name=name,
                price=price,
                stock=stock,
                listed_at=now,
            )
        )
        return product

    def update(self, name=_UNSET, price=_UNSET, stock=_UNSET, description=_UNSET, image_url=_UNSET):
        """Partial update.

        Arguments left out keep their current value. ``description`` and
        ``image_url`` are optional, so passing ``None`` clears them.
        """
        if name is not _UNSET:
            self.name = name
        if price is not _UNSET:
            self.price = price
        if stock is not _UNSET:
            self.stock = stock
        if description is not _UNSET:
            self.description = description
        if image_url is not _UNSET:
            self.image_url = image_url

        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            ProductUpdated(
                product_id=str(self.id),
                name=self.name,
                price=self.price,
                stock=self.stock,
                updated_at=now,
            )
        )

    def change_status(self, status):
        """Move the product to ``status``. Any status may follow any other."""
        status = ProductStatus(status)
        previous = self.status

        now = datetime.now(UTC)
        self.status = status.value
        self.updated_at = now

        self.raise_(
            ProductStatusChanged(
                product_id=str(self.id),
                previous_status=previous,
                new_status=status.value,
                changed_at=now,
            )
        )

    @property
    def is_published(self):
        return self.status == ProductStatus.PUBLISHED.value

    def can_supply(self, quantity):
        """True when ``quantity`` units fit into the current stock."""
        return self.stock > 0 and quantity <= self.stock


@ordering.repository(part_of=Product)
class ProductRepository:
    def find_by_id(self, product_id) -> Product | None:
        try:
            return self.get(product_id)
        except ObjectNotFoundError:
            return None

    def _query(self, status=None):
        return self._dao.query.filter(status=status) if status is not None else self._dao.query

    def find_all(self, status=None, offset=0, limit=20) -> list[Product]:
        """Products matching the filter, newest first."""
        return self._query(status).order_by("-created_at").offset(offset).limit(limit).all().items

    def count(self, status=None) -> int:
        return self._query(status).all().total

    def delete_product(self, product) -> None:
        self._dao.delete(product)
