"""Order aggregate: a priced, numbered request to prepare food.

Orders are immutable once placed except for their status flag, which an
administrator moves between pending (``0``) and completed (``1``). The total
is always derived from the captured unit prices; a total reported by the
client is stored only for auditing.
"""

import json
import re
from datetime import UTC, datetime
from enum import IntEnum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Date, DateTime, HasMany, Integer, String, Text

from ordering.cart.cart import DEFAULT_NOTE
from ordering.domain import ordering
from ordering.order.events import OrderCompleted, OrderPlaced, OrderReopened
from ordering.order.pricing import DeliveryMethod, delivery_label, order_total

PHONE_PATTERN = re.compile(r"^\d{10}$")


class OrderStatus(IntEnum):
    PENDING = 0
    COMPLETED = 1


@ordering.entity(part_of="Order")
class OrderItem:
    """A line of an order with the unit price captured at placement."""

    product_id = Integer(required=True)
    quantity = Integer(required=True, min_value=1)
    unit_price = Integer(required=True, min_value=0)
    note = Text(default=DEFAULT_NOTE)

    def to_dict(self):
        return {
            "id": self.product_id,
            "soluong": self.quantity,
            "price": self.unit_price,
            "note": self.note,
        }


@ordering.aggregate
class Order:
    order_number = String(required=True, max_length=20, unique=True)
    customer_phone = String(required=True, max_length=20)
    delivery_method = String(required=True, choices=DeliveryMethod)
    delivery_date = Date(required=True)
    delivery_time_slot = String(max_length=100, default="")
    note = Text(default="")
    recipient_name = String(required=True, max_length=255)
    recipient_phone = String(required=True, max_length=10)
    delivery_address = Text(default="")
    items = HasMany(OrderItem)
    total_amount = Integer(required=True, min_value=0)
    reported_total = Integer()
    status = Integer(default=OrderStatus.PENDING.value)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def recipient_phone_must_have_ten_digits(self):
        if not PHONE_PATTERN.match(self.recipient_phone or ""):
            raise ValidationError({"sdtnhan": ["Recipient phone must be exactly 10 digits"]})

    @invariant.post
    def recipient_name_must_be_present(self):
        if not (self.recipient_name or "").strip():
            raise ValidationError({"tenguoinhan": ["Recipient name is required"]})

    @invariant.post
    def delivery_requires_an_address(self):
        if self.delivery_method == DeliveryMethod.DELIVERY.value and not (self.delivery_address or "").strip():
            raise ValidationError({"diachinhan": ["Delivery address is required for home delivery"]})

    @invariant.post
    def order_must_have_items(self):
        if not self.items:
            raise ValidationError({"items": ["Order must contain at least one item"]})

    @invariant.post
    def total_must_match_items(self):
        if self.total_amount != self.computed_total():
            raise ValidationError({"tongtien": ["Total does not match the order items"]})

    @invariant.post
    def status_must_be_known(self):
        if self.status not in (OrderStatus.PENDING, OrderStatus.COMPLETED):
            raise ValidationError({"status": ["Invalid status value"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        order_number,
        customer_phone,
        delivery_method,
        delivery_date,
        recipient_name,
        recipient_phone,
        items_data,
        delivery_address=None,
        delivery_time_slot=None,
        note=None,
        reported_total=None,
    ):
        """Create an order from priced lines.

        Args:
            items_data: list of dicts with product_id, quantity, unit_price, note.
        """
        now = datetime.now(UTC)
        items = [
            OrderItem(
                product_id=item["product_id"],
                quantity=item["quantity"],
                unit_price=item["unit_price"],
                note=item.get("note") or DEFAULT_NOTE,
            )
            for item in items_data
        ]
        total = order_total(((i.unit_price, i.quantity) for i in items), delivery_method)

        order = cls(
            order_number=order_number,
            customer_phone=customer_phone,
            delivery_method=delivery_method,
            delivery_date=delivery_date,
            delivery_time_slot=delivery_time_slot or "",
            note=note or "",
            recipient_name=recipient_name,
            recipient_phone=recipient_phone,
            delivery_address=delivery_address or "",
            items=items,
            total_amount=total,
            reported_total=reported_total,
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order_number,
                customer_phone=customer_phone,
                delivery_method=delivery_method,
                items=json.dumps([i.to_dict() for i in items]),
                total_amount=total,
                created_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def computed_total(self) -> int:
        return order_total(((i.unit_price, i.quantity) for i in self.items), self.delivery_method)

    @property
    def total_mismatch(self) -> bool:
        return self.reported_total is not None and self.reported_total != self.total_amount

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    def change_status(self, status) -> bool:
        """Set the status flag; returns True when it actually changed."""
        if status not in (OrderStatus.PENDING, OrderStatus.COMPLETED):
            raise ValidationError({"status": ["Invalid status value"]})
        if status == self.status:
            return False

        now = datetime.now(UTC)
        self.status = int(status)
        self.updated_at = now

        if status == OrderStatus.COMPLETED:
            self.raise_(OrderCompleted(order_id=str(self.id), order_number=self.order_number, completed_at=now))
        else:
            self.raise_(OrderReopened(order_id=str(self.id), order_number=self.order_number))
        return True

    def to_dict(self):
        return {
            "id": self.order_number,
            "khachhang": self.customer_phone,
            "hinhthucgiao": delivery_label(self.delivery_method),
            "ngaygiaohang": self.delivery_date.isoformat() if self.delivery_date else None,
            "thoigiangiao": self.delivery_time_slot,
            "ghichu": self.note,
            "tenguoinhan": self.recipient_name,
            "sdtnhan": self.recipient_phone,
            "diachinhan": self.delivery_address,
            "tongtien": self.total_amount,
            "trangthai": self.status,
            "items": [item.to_dict() for item in self.items],
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
