"""Cart aggregate: a per-user list of line items with a sliding expiry.

A cart is keyed by ``user_id`` and behaves as a set keyed by product id:
adding a product that is already present sums the quantities. Every write
pushes ``expires_at`` forward by the cart TTL; once that moment passes the
cart reads as empty and the next write starts from scratch.
"""

import os
from datetime import UTC, datetime, timedelta

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Integer, String, Text

from ordering.cart.events import (
    CartCleared,
    CartExpired,
    CartItemAdded,
    CartItemRemoved,
    CartItemUpdated,
)
from ordering.domain import ordering

DEFAULT_NOTE = "Không có ghi chú"
DEFAULT_CART_TTL_SECONDS = 3600


def cart_ttl() -> timedelta:
    """Idle lifetime of a cart, ``CART_TTL_SECONDS`` (default one hour)."""
    return timedelta(seconds=int(os.environ.get("CART_TTL_SECONDS", DEFAULT_CART_TTL_SECONDS)))


def normalize_note(note) -> str:
    return note.strip() if note and note.strip() else DEFAULT_NOTE


@ordering.entity(part_of="Cart")
class CartItem:
    product_id = Integer(required=True)
    quantity = Integer(required=True, min_value=1)
    note = Text(default=DEFAULT_NOTE)

    def to_dict(self):
        return {"id": self.product_id, "soluong": self.quantity, "note": self.note}


@ordering.aggregate
class Cart:
    user_id = String(required=True, max_length=255, unique=True)
    items = HasMany(CartItem)
    expires_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=str(user_id), expires_at=now + cart_ttl(), updated_at=now)

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def is_expired(self, now=None) -> bool:
        if self.expires_at is None:
            return False
        return (now or datetime.now(UTC)) >= self.expires_at

    def find(self, product_id):
        return next((i for i in self.items if i.product_id == int(product_id)), None)

    def lines(self) -> list[dict]:
        """The cart's line items in wire form; empty once expired."""
        if self.is_expired():
            return []
        return [item.to_dict() for item in self.items]

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def _touch(self):
        now = datetime.now(UTC)
        self.updated_at = now
        self.expires_at = now + cart_ttl()

    def _discard_if_expired(self):
        if not self.is_expired() or not self.items:
            return

        discarded = list(self.items)
        self.remove_items(discarded)
        self.raise_(
            CartExpired(
                cart_id=str(self.id),
                user_id=self.user_id,
                items_discarded=len(discarded),
            )
        )

    def add_item(self, product_id, quantity, note=None):
        """Add ``quantity`` of a product, merging with an existing line."""
        if quantity is None or quantity < 1:
            raise ValidationError({"soluong": ["Quantity must be a positive integer"]})

        self._discard_if_expired()

        note = normalize_note(note)
        existing = self.find(product_id)
        if existing:
            existing.quantity += quantity
            existing.note = note
            new_quantity = existing.quantity
        else:
            self.add_items(CartItem(product_id=int(product_id), quantity=quantity, note=note))
            new_quantity = quantity

        self._touch()
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_id=self.user_id,
                product_id=int(product_id),
                quantity=quantity,
                new_quantity=new_quantity,
                note=note,
            )
        )

    def update_item(self, product_id, quantity, note=None) -> bool:
        """Set an absolute quantity; zero or less removes the line.

        Returns False when a positive quantity targets a product that is not
        in the cart.
        """
        if quantity is None or quantity <= 0:
            self.remove_item(product_id)
            return True

        self._discard_if_expired()

        item = self.find(product_id)
        if item is None:
            return False

        previous_quantity = item.quantity
        item.quantity = quantity
        if note:
            item.note = normalize_note(note)

        self._touch()
        self.raise_(
            CartItemUpdated(
                cart_id=str(self.id),
                user_id=self.user_id,
                product_id=int(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )
        return True

    def remove_item(self, product_id):
        """Remove a product's line. Removing an absent product is a no-op."""
        self._discard_if_expired()

        item = self.find(product_id)
        self._touch()
        if item is None:
            return

        self.remove_items(item)
        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                user_id=self.user_id,
                product_id=int(product_id),
            )
        )

    def clear(self):
        removed = list(self.items)
        if removed:
            self.remove_items(removed)

        self._touch()
        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                user_id=self.user_id,
                items_removed=len(removed),
            )
        )
