"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Product")
class ProductListed:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Integer(required=True)
    stock = Integer(required=True)
    listed_at = DateTime(required=True)


@ordering.event(part_of="Product")
class ProductUpdated:
    """Name, price, stock, description or image of a product changed."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Integer(required=True)
    stock = Integer(required=True)
    updated_at = DateTime(required=True)


@ordering.event(part_of="Product")
class ProductStatusChanged:
    """The product moved between draft, published and archived."""

    __version__ = 1

    product_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)
