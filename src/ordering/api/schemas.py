"""Pydantic request/response schemas for the Ordering API.

Field aliases are the storefront's wire names (``soluong``, ``tenguoinhan``
and so on); the Python names are used inside the service.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ordering.order.pricing import parse_delivery_method

# --- Cart Schemas ---


class CartLine(BaseModel):
    id: int
    soluong: int
    note: str


class AddCartItemRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"examples": [{"id": 7, "soluong": 1, "note": "Ít cay"}]},
    )

    product_id: int = Field(..., alias="id")
    quantity: int = Field(..., alias="soluong", ge=1)
    note: str | None = None


class UpdateCartItemRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"examples": [{"soluong": 3}]},
    )

    quantity: int = Field(..., alias="soluong")
    note: str | None = None


class CartResponse(BaseModel):
    cart: list[CartLine]


class CartMessageResponse(BaseModel):
    message: str
    cart: list[CartLine]


class MessageResponse(BaseModel):
    message: str


# --- Order Schemas ---


class OrderItemRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: int = Field(..., alias="id")
    quantity: int = Field(..., alias="soluong", ge=1)
    note: str | None = None
    price: int | None = Field(None, ge=0)


class PlaceOrderRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "hinhthucgiao": "Giao tận nơi",
                    "ngaygiaohang": "2024-05-01",
                    "thoigiangiao": "18:00",
                    "ghichu": "Gọi trước khi giao",
                    "tenguoinhan": "Nguyễn Văn An",
                    "sdtnhan": "0901234567",
                    "diachinhan": "12 Lê Lợi, Quận 1",
                    "items": [{"id": 7, "soluong": 2, "note": "Không hành"}],
                }
            ]
        },
    )

    delivery_method: str = Field(..., alias="hinhthucgiao")
    delivery_date: date = Field(..., alias="ngaygiaohang")
    delivery_time_slot: str | None = Field(None, alias="thoigiangiao")
    note: str | None = Field(None, alias="ghichu")
    recipient_name: str = Field(..., alias="tenguoinhan")
    recipient_phone: str = Field(..., alias="sdtnhan")
    delivery_address: str | None = Field(None, alias="diachinhan")
    items: list[OrderItemRequest] = Field(..., min_length=1)
    reported_total: int | None = Field(None, alias="tongtien")

    @field_validator("delivery_method")
    @classmethod
    def known_delivery_method(cls, value: str) -> str:
        return parse_delivery_method(value)


class OrderStatusRequest(BaseModel):
    status: int


class OrderLine(BaseModel):
    id: int
    soluong: int
    price: int
    note: str


class OrderResponse(BaseModel):
    id: str
    khachhang: str
    hinhthucgiao: str
    ngaygiaohang: str | None = None
    thoigiangiao: str
    ghichu: str
    tenguoinhan: str
    sdtnhan: str
    diachinhan: str
    tongtien: int
    trangthai: int
    items: list[OrderLine]
    createdAt: str | None = None


class PlacedOrderResponse(BaseModel):
    message: str
    order: OrderResponse
    total_mismatch: bool = False


class OrderDetailResponse(BaseModel):
    order: OrderResponse


class OrderMessageResponse(BaseModel):
    message: str
    order: OrderResponse


class PaginationResponse(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    pagination: PaginationResponse
