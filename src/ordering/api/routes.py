"""FastAPI routes for the Ordering domain: carts and orders.

Behind the gateway, the caller's verified identity arrives in the
``X-User-Phone`` and ``X-User-Type`` headers.
"""

from datetime import date

from fastapi import APIRouter, Depends, Header
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    AddCartItemRequest,
    CartMessageResponse,
    CartResponse,
    MessageResponse,
    OrderDetailResponse,
    OrderListResponse,
    OrderMessageResponse,
    OrderStatusRequest,
    PlacedOrderResponse,
    PlaceOrderRequest,
    UpdateCartItemRequest,
)
from ordering.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartItem, get_cart
from ordering.order.order import Order
from ordering.order.placement import change_order_status, find_order, place_order
from shared.errors import AuthenticationError, AuthorizationError
from shared.web import pagination

cart_router = APIRouter(prefix="/cart", tags=["cart"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


def caller_phone(x_user_phone: str | None = Header(default=None)) -> str:
    if not x_user_phone:
        raise AuthenticationError("User authentication required")
    return x_user_phone


def admin_caller(x_user_type: str | None = Header(default=None), x_user_id: str | None = Header(default=None)) -> str:
    if x_user_type != "admin":
        raise AuthorizationError("Admin access required", user_id=x_user_id)
    return x_user_id or ""


def _status_filter(status: str | None) -> int | None:
    """``2`` or no value lists every order."""
    if status in (None, "", "2"):
        return None
    if status not in ("0", "1"):
        raise ValidationError({"status": ["Invalid status value"]})
    return int(status)


# --- Cart endpoints ---


@cart_router.get("/{user_id}", response_model=CartResponse)
async def read_cart(user_id: str) -> CartResponse:
    return CartResponse(cart=get_cart(user_id))


@cart_router.post("/{user_id}/items", response_model=CartMessageResponse)
async def add_cart_item(user_id: str, body: AddCartItemRequest) -> CartMessageResponse:
    command = AddToCart(
        user_id=user_id,
        product_id=body.product_id,
        quantity=body.quantity,
        note=body.note,
    )
    cart = current_domain.process(command, asynchronous=False)
    return CartMessageResponse(message="Item added to cart successfully", cart=cart)


@cart_router.put("/{user_id}/items/{product_id}", response_model=CartMessageResponse)
async def update_cart_item(user_id: str, product_id: int, body: UpdateCartItemRequest) -> CartMessageResponse:
    command = UpdateCartItem(
        user_id=user_id,
        product_id=product_id,
        quantity=body.quantity,
        note=body.note,
    )
    cart = current_domain.process(command, asynchronous=False)
    return CartMessageResponse(message="Cart item updated successfully", cart=cart)


@cart_router.delete("/{user_id}/items/{product_id}", response_model=CartMessageResponse)
async def remove_cart_item(user_id: str, product_id: int) -> CartMessageResponse:
    cart = current_domain.process(RemoveFromCart(user_id=user_id, product_id=product_id), asynchronous=False)
    return CartMessageResponse(message="Item removed from cart successfully", cart=cart)


@cart_router.delete("/{user_id}", response_model=MessageResponse)
async def clear_cart(user_id: str) -> MessageResponse:
    current_domain.process(ClearCart(user_id=user_id), asynchronous=False)
    return MessageResponse(message="Cart cleared successfully")


# --- Order endpoints ---


# Plain def: pricing and inventory may call the product service over blocking
# HTTP, so these run in the threadpool rather than on the event loop.
@order_router.post("", status_code=201, response_model=PlacedOrderResponse)
def create_order(body: PlaceOrderRequest, phone: str = Depends(caller_phone)) -> PlacedOrderResponse:
    order = place_order(
        customer_phone=phone,
        delivery_method=body.delivery_method,
        delivery_date=body.delivery_date,
        recipient_name=body.recipient_name,
        recipient_phone=body.recipient_phone,
        items=[
            {"product_id": i.product_id, "quantity": i.quantity, "note": i.note, "price": i.price} for i in body.items
        ],
        delivery_address=body.delivery_address,
        delivery_time_slot=body.delivery_time_slot,
        note=body.note,
        reported_total=body.reported_total,
    )
    return PlacedOrderResponse(
        message="Order created successfully",
        order=order.to_dict(),
        total_mismatch=order.total_mismatch,
    )


@order_router.get("/user/{phone}", response_model=OrderListResponse)
async def customer_orders(phone: str, page: int = 1, limit: int = 10) -> OrderListResponse:
    page, limit = max(page, 1), max(limit, 1)
    orders, total = current_domain.repository_for(Order).for_customer(phone, page=page, limit=limit)
    return OrderListResponse(orders=[o.to_dict() for o in orders], pagination=pagination(page, limit, total))


@order_router.get("", response_model=OrderListResponse)
async def list_orders(
    status: str | None = None,
    search: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    page: int = 1,
    limit: int = 10,
    admin_id: str = Depends(admin_caller),
) -> OrderListResponse:
    page, limit = max(page, 1), max(limit, 1)
    orders, total = current_domain.repository_for(Order).search(
        status=_status_filter(status),
        text=search,
        start_date=start_date,
        end_date=end_date,
        page=page,
        limit=limit,
    )
    return OrderListResponse(orders=[o.to_dict() for o in orders], pagination=pagination(page, limit, total))


@order_router.get("/{order_id}", response_model=OrderDetailResponse)
async def get_order(order_id: str) -> OrderDetailResponse:
    return OrderDetailResponse(order=find_order(order_id).to_dict())


@order_router.put("/{order_id}/status", response_model=OrderMessageResponse)
def update_order_status(
    order_id: str, body: OrderStatusRequest, admin_id: str = Depends(admin_caller)
) -> OrderMessageResponse:
    order = change_order_status(order_id, body.status)
    return OrderMessageResponse(message="Order status updated successfully", order=order.to_dict())
