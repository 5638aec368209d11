"""Repository for the Product aggregate."""

from protean.utils.query import Q

from catalogue.domain import catalogue
from catalogue.product.product import Product, ProductCategory

# Wire sort keys to model fields
SORT_FIELDS = {
    "createdAt": "created_at",
    "created_at": "created_at",
    "price": "price",
    "title": "title",
}


@catalogue.repository(part_of=Product)
class ProductRepository:
    """Menu queries on top of the standard CRUD operations."""

    def next_product_id(self) -> int:
        """Products are numbered sequentially from 1."""
        latest = self._dao.query.order_by("-product_id").limit(1).all().first
        return (latest.product_id + 1) if latest else 1

    def search(
        self,
        category: str | None = None,
        is_active: bool | None = True,
        text: str | None = None,
        sort_by: str = "createdAt",
        descending: bool = True,
        page: int = 1,
        limit: int = 12,
    ):
        """Return ``(products, total)`` for one page of the menu."""
        query = self._dao.query
        if category:
            query = query.filter(category=category)
        if is_active is not None:
            query = query.filter(is_active=is_active)
        if text:
            query = query.filter(Q(title__icontains=text) | Q(description__icontains=text))

        field = SORT_FIELDS.get(sort_by, "created_at")
        query = query.order_by(f"-{field}" if descending else field)

        result = query.offset((page - 1) * limit).limit(limit).all()
        return result.items, result.total

    def active_categories(self) -> list[str]:
        """Categories with at least one active product, in menu order."""
        present = {product.category for product in self._dao.query.filter(is_active=True).all().items}
        return [category.value for category in ProductCategory if category.value in present]
