"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# --- Product Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "title": "Cơm chiên hải sản",
                    "category": "Món mặn",
                    "price": 55000,
                    "img": "./assets/img/products/com-chien-hai-san.jpeg",
                    "desc": "Cơm chiên với tôm, mực và rau củ tươi.",
                    "inventory": 100,
                }
            ]
        },
    )

    title: str = Field(..., min_length=3, max_length=255)
    category: str
    price: int = Field(..., ge=0)
    image: str = Field(..., alias="img", max_length=500)
    description: str = Field(..., alias="desc", min_length=10)
    inventory: int | None = Field(None, ge=0)


class UpdateProductRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"examples": [{"price": 60000, "status": 1}]},
    )

    title: str | None = Field(None, min_length=3, max_length=255)
    category: str | None = None
    price: int | None = Field(None, ge=0)
    image: str | None = Field(None, alias="img", max_length=500)
    description: str | None = Field(None, alias="desc", min_length=10)
    status: int | None = Field(None, ge=0, le=1)
    inventory: int | None = Field(None, ge=0)


class RecordSaleRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"quantity": 2}]}}

    quantity: int = Field(..., ge=1)


# --- Response Schemas ---


class ProductResponse(BaseModel):
    id: int
    title: str
    category: str
    price: int
    img: str
    desc: str
    status: int
    inventory: int
    sold: int
    createdAt: str | None = None


class PaginationResponse(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    pagination: PaginationResponse


class ProductDetailResponse(BaseModel):
    product: ProductResponse


class ProductMessageResponse(BaseModel):
    message: str
    product: ProductResponse


class CategoriesResponse(BaseModel):
    categories: list[str]


class MessageResponse(BaseModel):
    message: str
