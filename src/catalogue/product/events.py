"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Integer, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductCreated:
    """A new dish was added to the menu."""

    __version__ = 1

    product_id: Integer(required=True)
    title: String(required=True)
    category: String(required=True)
    price: Integer(required=True)
    created_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductUpdated:
    __version__ = 1

    product_id: Integer(required=True)
    changed_fields: String(required=True)
    price: Integer(required=True)
    is_active: Boolean(required=True)


@catalogue.event(part_of="Product")
class ProductDeactivated:
    """The product was taken off the menu (soft delete)."""

    __version__ = 1

    product_id: Integer(required=True)


@catalogue.event(part_of="Product")
class ProductSold:
    """Units of the product were sold.

    ``shortfall`` is the part of ``quantity`` that inventory could not cover.
    """

    __version__ = 1

    product_id: Integer(required=True)
    quantity: Integer(required=True)
    shortfall: Integer(default=0)
    remaining_inventory: Integer(required=True)
