"""Catalogue management: admin commands and handler."""

import structlog
from protean import handle
from protean.fields import Boolean, Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.access import Action, Actor, Role, authorize
from ordering.catalogue.product import Product, ProductStatus
from ordering.domain import ordering
from ordering.exceptions import ProductNotFoundError

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Product")
class ListProduct:
    actor_id = Identifier(required=True)
    actor_role = String(required=True, choices=Role)
    name = String(required=True, max_length=200)
    description = String(max_length=2000)
    price = Integer(required=True, min_value=0)
    stock = Integer(default=0, min_value=0)
    image_url = String(max_length=500)


@ordering.command(part_of="Product")
class UpdateProduct:
    """Partial update: fields left unset keep their current value.

    ``description`` and ``image_url`` are removed with the ``clear_*`` flags.
    """

    actor_id = Identifier(required=True)
    actor_role = String(required=True, choices=Role)
    product_id = Identifier(required=True)
    name = String(max_length=200)
    description = String(max_length=2000)
    price = Integer(min_value=0)
    stock = Integer(min_value=0)
    image_url = String(max_length=500)
    clear_description = Boolean(default=False)
    clear_image_url = Boolean(default=False)


@ordering.command(part_of="Product")
class UpdateProductStatus:
    actor_id = Identifier(required=True)
    actor_role = String(required=True, choices=Role)
    product_id = Identifier(required=True)
    status = String(required=True, choices=ProductStatus)


@ordering.command(part_of="Product")
class DeleteProduct:
    actor_id = Identifier(required=True)
    actor_role = String(required=True, choices=Role)
    product_id = Identifier(required=True)


def _existing(repo, product_id):
    product = repo.find_by_id(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return product


@ordering.command_handler(part_of=Product)
class ManageCatalogueHandler:
    @handle(ListProduct)
    def list_product(self, command):
        authorize(Actor.of(command.actor_id, command.actor_role), Action.MANAGE_CATALOGUE)

        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            stock=command.stock or 0,
            image_url=command.image_url,
        )
        current_domain.repository_for(Product).add(product)

        logger.info("Product listed", product_id=str(product.id), stock=product.stock)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        authorize(Actor.of(command.actor_id, command.actor_role), Action.MANAGE_CATALOGUE)

        repo = current_domain.repository_for(Product)
        product = _existing(repo, command.product_id)

        changes = {
            field: getattr(command, field)
            for field in ("name", "description", "price", "stock", "image_url")
            if getattr(command, field) is not None
        }
        if command.clear_description:
            changes["description"] = None
        if command.clear_image_url:
            changes["image_url"] = None

        product.update(**changes)
        repo.add(product)

        logger.info("Product updated", product_id=str(product.id), fields=sorted(changes))
        return product

    @handle(UpdateProductStatus)
    def update_product_status(self, command):
        authorize(Actor.of(command.actor_id, command.actor_role), Action.MANAGE_CATALOGUE)

        repo = current_domain.repository_for(Product)
        product = _existing(repo, command.product_id)

        previous_status = product.status
        product.change_status(command.status)
        repo.add(product)

        logger.info(
            "Product status changed",
            product_id=str(product.id),
            previous_status=previous_status,
            new_status=product.status,
        )
        return product

    @handle(DeleteProduct)
    def delete_product(self, command):
        authorize(Actor.of(command.actor_id, command.actor_role), Action.MANAGE_CATALOGUE)

        repo = current_domain.repository_for(Product)
        product = _existing(repo, command.product_id)
        repo.delete_product(product)

        logger.info("Product deleted", product_id=str(command.product_id))
        return str(command.product_id)
