"""Product aggregate: a dish on the menu, priced in whole VND."""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Integer, String, Text

from catalogue.domain import catalogue
from catalogue.product.events import (
    ProductCreated,
    ProductDeactivated,
    ProductSold,
    ProductUpdated,
)


class ProductCategory(Enum):
    """Fixed menu categories."""

    SAVORY = "Món mặn"
    VEGETARIAN = "Món chay"
    HOTPOT = "Món lẩu"
    DESSERT = "Món tráng miệng"
    GRILLED = "Món nướng"
    COMBO = "Combo"


# Fields an administrator may change through UpdateProduct
EDITABLE_FIELDS = ("title", "category", "price", "image", "description", "is_active", "inventory")


@catalogue.aggregate
class Product:
    """A menu item that customers can add to their cart.

    Products are identified by a small integer (the number carts and orders
    refer to). ``inventory`` and ``sold`` only move through ``record_sale``.
    """

    product_id: Integer(identifier=True)
    title: String(required=True, max_length=255)
    category: String(required=True, choices=ProductCategory)
    price: Integer(required=True, min_value=0)
    image: String(required=True, max_length=500)
    description: Text(required=True)
    is_active: Boolean(default=True)
    inventory: Integer(default=100, min_value=0)
    sold: Integer(default=0, min_value=0)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def title_must_have_at_least_three_characters(self):
        if self.title is not None and len(self.title.strip()) < 3:
            raise ValidationError({"title": ["Title must be at least 3 characters long"]})

    @invariant.post
    def description_must_have_at_least_ten_characters(self):
        if self.description is not None and len(self.description.strip()) < 10:
            raise ValidationError({"description": ["Description must be at least 10 characters long"]})

    @classmethod
    def create(cls, product_id, title, category, price, image, description, inventory=None):
        now = datetime.now(UTC)
        product = cls(
            product_id=product_id,
            title=title,
            category=category,
            price=price,
            image=image,
            description=description,
            inventory=100 if inventory is None else inventory,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product_id,
                title=title,
                category=category,
                price=price,
                created_at=now,
            )
        )
        return product

    def update(self, **changes):
        """Apply a partial update; ``None`` values are ignored."""
        applied = {}
        for field, value in changes.items():
            if field not in EDITABLE_FIELDS:
                raise ValidationError({field: ["Field cannot be updated"]})
            if value is None:
                continue
            setattr(self, field, value)
            applied[field] = value

        if not applied:
            return

        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProductUpdated(
                product_id=self.product_id,
                changed_fields=",".join(sorted(applied)),
                price=self.price,
                is_active=self.is_active,
            )
        )

    def deactivate(self):
        if not self.is_active:
            raise ValidationError({"status": ["Product is already inactive"]})

        self.is_active = False
        self.updated_at = datetime.now(UTC)
        self.raise_(ProductDeactivated(product_id=self.product_id))

    def record_sale(self, quantity):
        """Move ``quantity`` units from inventory to sold.

        Inventory never goes below zero; the shortfall is reported on the event.
        """
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        decremented = min(quantity, self.inventory or 0)
        self.inventory = (self.inventory or 0) - decremented
        self.sold = (self.sold or 0) + quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductSold(
                product_id=self.product_id,
                quantity=quantity,
                shortfall=quantity - decremented,
                remaining_inventory=self.inventory,
            )
        )

    def to_dict(self):
        return {
            "id": self.product_id,
            "title": self.title,
            "category": self.category,
            "price": self.price,
            "img": self.image,
            "desc": self.description,
            "status": 1 if self.is_active else 0,
            "inventory": self.inventory,
            "sold": self.sold,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
