"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands and aggregates.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from ordering.cart.cart import MAX_LINE_QUANTITY


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(default=1, ge=1, le=MAX_LINE_QUANTITY)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "b2c3d4e5-f6a7-8901-bcde-f12345678901",
                    "quantity": 2,
                }
            ]
        }
    }


class UpdateCartQuantityRequest(BaseModel):
    quantity: int = Field(ge=1, le=MAX_LINE_QUANTITY)


class CartItemResponse(BaseModel):
    product_id: str
    product_name: str
    price: int
    image_url: str | None = None
    quantity: int
    line_total: int


class CartResponse(BaseModel):
    cart_id: str
    user_id: str
    items: list[CartItemResponse]
    subtotal: int
    item_count: int

    @classmethod
    def from_cart(cls, cart) -> "CartResponse":
        return cls(
            cart_id=str(cart.id),
            user_id=str(cart.user_id),
            items=[
                CartItemResponse(
                    product_id=str(item.product_id),
                    product_name=item.product_name,
                    price=item.price,
                    image_url=item.image_url,
                    quantity=item.quantity,
                    line_total=item.line_total,
                )
                for item in cart.items
            ],
            subtotal=cart.subtotal,
            item_count=cart.item_count,
        )


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class UpdateOrderStatusRequest(BaseModel):
    status: str

    model_config = {"json_schema_extra": {"examples": [{"status": "confirmed"}]}}


class OrderItemResponse(BaseModel):
    product_id: str
    product_name: str
    price: int
    quantity: int


class OrderResponse(BaseModel):
    order_id: str
    user_id: str
    items: list[OrderItemResponse]
    total_amount: int
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        return cls(
            order_id=str(order.id),
            user_id=str(order.user_id),
            items=[
                OrderItemResponse(
                    product_id=str(item.product_id),
                    product_name=item.product_name,
                    price=item.price,
                    quantity=item.quantity,
                )
                for item in order.items
            ],
            total_amount=order.total_amount,
            status=order.status,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def from_page(cls, page) -> "OrderListResponse":
        return cls(
            orders=[OrderResponse.from_order(order) for order in page.orders],
            page=page.page,
            limit=page.limit,
            total=page.total,
            total_pages=page.total_pages,
        )


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class ListProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    price: int = Field(ge=0)
    stock: int = Field(default=0, ge=0)
    image_url: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Espresso Machine",
                    "description": "15-bar pump, steam wand",
                    "price": 3000,
                    "stock": 5,
                    "image_url": None,
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    """Fields left out are unchanged; an explicit null clears description or image_url."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    price: int | None = Field(default=None, ge=0)
    stock: int | None = Field(default=None, ge=0)
    image_url: str | None = None


class UpdateProductStatusRequest(BaseModel):
    status: str

    model_config = {"json_schema_extra": {"examples": [{"status": "published"}]}}


class ProductIdResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "b2c3d4e5-f6a7-8901-bcde-f12345678901"}]}}

    product_id: str


class ProductResponse(BaseModel):
    product_id: str
    name: str
    description: str | None = None
    price: int
    stock: int
    image_url: str | None = None
    status: str

    @classmethod
    def from_product(cls, product) -> "ProductResponse":
        return cls(
            product_id=str(product.id),
            name=product.name,
            description=product.description,
            price=product.price,
            stock=product.stock,
            image_url=product.image_url,
            status=product.status,
        )


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def from_page(cls, page) -> "ProductListResponse":
        return cls(
            products=[ProductResponse.from_product(product) for product in page.products],
            page=page.page,
            limit=page.limit,
            total=page.total,
            total_pages=page.total_pages,
        )


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class ErrorResponse(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"error": "not_found", "messages": {"order_id": ["Order 42 does not exist"]}}]
        }
    }

    error: str
    messages: dict[str, list[str]] = {}
