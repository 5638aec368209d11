"""FastAPI endpoints for the Catalogue domain."""

from fastapi import APIRouter, Depends
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.api.schemas import (
    CategoriesResponse,
    CreateProductRequest,
    MessageResponse,
    ProductDetailResponse,
    ProductListResponse,
    ProductMessageResponse,
    RecordSaleRequest,
    UpdateProductRequest,
)
from catalogue.product.creation import CreateProduct
from catalogue.product.details import UpdateProduct
from catalogue.product.lifecycle import DeactivateProduct, RecordSale
from catalogue.product.product import Product
from shared.errors import NotFoundError
from shared.web import admin_claims, pagination

product_router = APIRouter(prefix="/products", tags=["products"])


def _load_product(product_id: int) -> Product:
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError as exc:
        raise NotFoundError("Product not found", product_id=product_id) from exc


# --- Queries ---


@product_router.get("", response_model=ProductListResponse)
async def list_products(
    category: str | None = None,
    status: str = "1",
    search: str | None = None,
    page: int = 1,
    limit: int = 12,
    sortBy: str = "createdAt",
    sortOrder: str = "desc",
) -> ProductListResponse:
    page, limit = max(page, 1), max(limit, 1)
    is_active = None if status == "all" else status == "1"

    products, total = current_domain.repository_for(Product).search(
        category=None if category in (None, "", "all") else category,
        is_active=is_active,
        text=search,
        sort_by=sortBy,
        descending=sortOrder != "asc",
        page=page,
        limit=limit,
    )
    return ProductListResponse(
        products=[product.to_dict() for product in products],
        pagination=pagination(page, limit, total),
    )


# Declared before /{product_id} so the literal path wins
@product_router.get("/categories/list", response_model=CategoriesResponse)
async def list_categories() -> CategoriesResponse:
    return CategoriesResponse(categories=current_domain.repository_for(Product).active_categories())


@product_router.get("/{product_id}", response_model=ProductDetailResponse)
async def get_product(product_id: int) -> ProductDetailResponse:
    return ProductDetailResponse(product=_load_product(product_id).to_dict())


# --- Admin commands ---


@product_router.post("", status_code=201, response_model=ProductMessageResponse)
async def create_product(body: CreateProductRequest, claims: dict = Depends(admin_claims)) -> ProductMessageResponse:
    command = CreateProduct(
        title=body.title,
        category=body.category,
        price=body.price,
        image=body.image,
        description=body.description,
        inventory=body.inventory,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ProductMessageResponse(
        message="Product created successfully",
        product=_load_product(product_id).to_dict(),
    )


@product_router.put("/{product_id}", response_model=ProductMessageResponse)
async def update_product(
    product_id: int, body: UpdateProductRequest, claims: dict = Depends(admin_claims)
) -> ProductMessageResponse:
    _load_product(product_id)
    command = UpdateProduct(
        product_id=product_id,
        title=body.title,
        category=body.category,
        price=body.price,
        image=body.image,
        description=body.description,
        is_active=None if body.status is None else body.status == 1,
        inventory=body.inventory,
    )
    current_domain.process(command, asynchronous=False)
    return ProductMessageResponse(
        message="Product updated successfully",
        product=_load_product(product_id).to_dict(),
    )


@product_router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: int, claims: dict = Depends(admin_claims)) -> MessageResponse:
    _load_product(product_id)
    current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
    return MessageResponse(message="Product deleted successfully")


# --- Service-to-service ---


@product_router.patch("/{product_id}/inventory", response_model=ProductMessageResponse)
async def record_sale(product_id: int, body: RecordSaleRequest) -> ProductMessageResponse:
    _load_product(product_id)
    current_domain.process(RecordSale(product_id=product_id, quantity=body.quantity), asynchronous=False)
    return ProductMessageResponse(
        message="Inventory updated successfully",
        product=_load_product(product_id).to_dict(),
    )
