"""FastAPI routes for the Ordering domain: cart, orders and products."""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from ordering.access import Actor
from ordering.api.deps import current_actor
from ordering.api.schemas import (
    AddToCartRequest,
    CartResponse,
    ErrorResponse,
    ListProductRequest,
    OrderListResponse,
    OrderResponse,
    ProductIdResponse,
    ProductListResponse,
    ProductResponse,
    UpdateCartQuantityRequest,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
    UpdateProductStatusRequest,
)
from ordering.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity, fetch_cart
from ordering.catalogue.management import DeleteProduct, ListProduct, UpdateProduct, UpdateProductStatus
from ordering.catalogue.queries import browse_products, view_product
from ordering.order.placement import PlaceOrder
from ordering.order.queries import DEFAULT_PAGE_SIZE, get_order, list_orders
from ordering.order.status import UpdateOrderStatus

# Error bodies share one shape; documented once for every router
ERROR_RESPONSES = {status_code: {"model": ErrorResponse} for status_code in (400, 401, 403, 404, 409)}

# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"], responses=ERROR_RESPONSES)


@cart_router.get("", response_model=CartResponse)
async def get_cart(actor: Actor = Depends(current_actor)) -> CartResponse:
    return CartResponse.from_cart(fetch_cart(actor))


@cart_router.post("/items", response_model=CartResponse)
async def add_cart_item(body: AddToCartRequest, actor: Actor = Depends(current_actor)) -> CartResponse:
    command = AddToCart(
        actor_id=actor.user_id,
        actor_role=actor.role.value,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    cart = current_domain.process(command, asynchronous=False)
    return CartResponse.from_cart(cart)


@cart_router.put("/items/{product_id}", response_model=CartResponse)
async def update_cart_item_quantity(
    product_id: str, body: UpdateCartQuantityRequest, actor: Actor = Depends(current_actor)
) -> CartResponse:
    command = UpdateCartQuantity(
        actor_id=actor.user_id,
        actor_role=actor.role.value,
        product_id=product_id,
        quantity=body.quantity,
    )
    cart = current_domain.process(command, asynchronous=False)
    return CartResponse.from_cart(cart)


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(product_id: str, actor: Actor = Depends(current_actor)) -> CartResponse:
    command = RemoveFromCart(
        actor_id=actor.user_id,
        actor_role=actor.role.value,
        product_id=product_id,
    )
    cart = current_domain.process(command, asynchronous=False)
    return CartResponse.from_cart(cart)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"], responses=ERROR_RESPONSES)


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(actor: Actor = Depends(current_actor)) -> OrderResponse:
    """Check out the caller's cart.

    The cart is snapshotted into a pending order and emptied.
    """
    command = PlaceOrder(actor_id=actor.user_id, actor_role=actor.role.value)
    order = current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(order)


@order_router.get("", response_model=OrderListResponse)
async def browse_orders(
    actor: Actor = Depends(current_actor),
    user_id: str | None = None,
    status: str | None = None,
    page: int = Query(default=1),
    limit: int = Query(default=DEFAULT_PAGE_SIZE),
) -> OrderListResponse:
    result = list_orders(actor, user_id=user_id, status=status, page=page, limit=limit)
    return OrderListResponse.from_page(result)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def show_order(order_id: str, actor: Actor = Depends(current_actor)) -> OrderResponse:
    return OrderResponse.from_order(get_order(order_id, actor))


@order_router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str, body: UpdateOrderStatusRequest, actor: Actor = Depends(current_actor)
) -> OrderResponse:
    command = UpdateOrderStatus(
        actor_id=actor.user_id,
        actor_role=actor.role.value,
        order_id=order_id,
        status=body.status,
    )
    order = current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(order)


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"], responses=ERROR_RESPONSES)


@product_router.get("", response_model=ProductListResponse)
async def list_products(
    actor: Actor = Depends(current_actor),
    status: str | None = None,
    page: int = Query(default=1),
    limit: int = Query(default=DEFAULT_PAGE_SIZE),
) -> ProductListResponse:
    """Admins see every product and may filter by status; buyers see published ones."""
    result = browse_products(actor, status=status, page=page, limit=limit)
    return ProductListResponse.from_page(result)


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: ListProductRequest, actor: Actor = Depends(current_actor)) -> ProductIdResponse:
    command = ListProduct(
        actor_id=actor.user_id,
        actor_role=actor.role.value,
        name=body.name,
        description=body.description,
        price=body.price,
        stock=body.stock,
        image_url=body.image_url,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("/{product_id}", response_model=ProductResponse)
async def show_product(product_id: str, actor: Actor = Depends(current_actor)) -> ProductResponse:
    return ProductResponse.from_product(view_product(product_id, actor))


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str, body: UpdateProductRequest, actor: Actor = Depends(current_actor)
) -> ProductResponse:
    sent = body.model_fields_set
    command = UpdateProduct(
        actor_id=actor.user_id,
        actor_role=actor.role.value,
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        stock=body.stock,
        image_url=body.image_url,
        clear_description="description" in sent and body.description is None,
        clear_image_url="image_url" in sent and body.image_url is None,
    )
    product = current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(product)


@product_router.patch("/{product_id}/status", response_model=ProductResponse)
async def update_product_status(
    product_id: str, body: UpdateProductStatusRequest, actor: Actor = Depends(current_actor)
) -> ProductResponse:
    command = UpdateProductStatus(
        actor_id=actor.user_id,
        actor_role=actor.role.value,
        product_id=product_id,
        status=body.status,
    )
    product = current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(product)


@product_router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: str, actor: Actor = Depends(current_actor)) -> None:
    command = DeleteProduct(actor_id=actor.user_id, actor_role=actor.role.value, product_id=product_id)
    current_domain.process(command, asynchronous=False)
