"""Order pricing rules shared by the order service and its clients."""

from enum import Enum

# Whole VND
SHIPPING_FEE = 30000
DEFAULT_UNIT_PRICE = 50000


class DeliveryMethod(Enum):
    DELIVERY = "delivery"
    PICKUP = "pickup"


# Labels used on the wire by the storefront
DELIVERY_LABELS = {
    DeliveryMethod.DELIVERY.value: "Giao tận nơi",
    DeliveryMethod.PICKUP.value: "Tự đến lấy",
}


def parse_delivery_method(value) -> str:
    """Accept either the canonical value or its wire label."""
    if isinstance(value, DeliveryMethod):
        return value.value
    for method, label in DELIVERY_LABELS.items():
        if value in (method, label):
            return method
    raise ValueError(f"Unknown delivery method: {value!r}")


def delivery_label(method: str) -> str:
    return DELIVERY_LABELS.get(method, method)


def subtotal(lines) -> int:
    """Sum of ``unit_price * quantity`` over ``(unit_price, quantity)`` pairs."""
    return sum(unit_price * quantity for unit_price, quantity in lines)


def order_total(lines, delivery_method: str) -> int:
    total = subtotal(lines)
    if delivery_method == DeliveryMethod.DELIVERY.value:
        total += SHIPPING_FEE
    return total
