"""Order application services: placing orders and changing their status.

Prices are resolved and inventory is booked here, outside the order's unit
of work, because both go through the catalogue adapter.
"""

import json

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from ordering.catalogue import CatalogueLookupError, get_catalogue
from ordering.order.creation import PlaceOrder
from ordering.order.inventory import InventoryPolicy, apply_policy
from ordering.order.order import Order, OrderStatus
from ordering.order.pricing import DEFAULT_UNIT_PRICE, parse_delivery_method
from ordering.order.status import UpdateOrderStatus
from shared.errors import NotFoundError
from shared.logging import get_logger

logger = get_logger(__name__)


def resolve_unit_price(product_id: int, supplied_price: int | None = None) -> int:
    """Caller-supplied price first, then the catalogue, then ``DEFAULT_UNIT_PRICE``."""
    if supplied_price is not None:
        return supplied_price
    try:
        return get_catalogue().unit_price(product_id)
    except CatalogueLookupError as exc:
        logger.warning(
            "Price lookup failed, using default price",
            product_id=product_id,
            default_price=DEFAULT_UNIT_PRICE,
            error=str(exc),
        )
        return DEFAULT_UNIT_PRICE


def _validate_items(items) -> None:
    if not items:
        raise ValidationError({"items": ["Order must contain at least one item"]})
    for item in items:
        if item.get("product_id") is None:
            raise ValidationError({"items": ["Every item needs a product id"]})
        if not isinstance(item.get("quantity"), int) or item["quantity"] < 1:
            raise ValidationError({"items": ["Item quantity must be a positive integer"]})
        if item.get("price") is not None and item["price"] < 0:
            raise ValidationError({"items": ["Item price cannot be negative"]})


def place_order(
    customer_phone: str,
    delivery_method: str,
    delivery_date,
    recipient_name: str,
    recipient_phone: str,
    items: list[dict],
    delivery_address: str | None = None,
    delivery_time_slot: str | None = None,
    note: str | None = None,
    reported_total: int | None = None,
) -> Order:
    """Price, number and persist a new order.

    Args:
        items: list of dicts with product_id, quantity, and optional note and price.
        reported_total: the total the client computed; only compared, never used.

    Raises:
        ValidationError: malformed input or a violated order invariant.
    """
    try:
        method = parse_delivery_method(delivery_method)
    except ValueError as exc:
        raise ValidationError({"hinhthucgiao": [str(exc)]}) from exc
    _validate_items(items)

    priced = [
        {
            "product_id": int(item["product_id"]),
            "quantity": item["quantity"],
            "unit_price": resolve_unit_price(int(item["product_id"]), item.get("price")),
            "note": item.get("note"),
        }
        for item in items
    ]

    command = PlaceOrder(
        customer_phone=customer_phone,
        delivery_method=method,
        delivery_date=delivery_date,
        delivery_time_slot=delivery_time_slot,
        note=note,
        recipient_name=recipient_name,
        recipient_phone=recipient_phone,
        delivery_address=delivery_address,
        items=json.dumps(priced),
        reported_total=reported_total,
    )
    order_number = current_domain.process(command, asynchronous=False)
    order = find_order(order_number)

    apply_policy(InventoryPolicy.ON_ORDER, order.order_number, [(i.product_id, i.quantity) for i in order.items])
    return order


def find_order(reference: str) -> Order:
    """Load an order by display number or identity.

    Raises:
        NotFoundError: no such order.
    """
    order = current_domain.repository_for(Order).by_reference(reference)
    if order is None:
        raise NotFoundError("Order not found", order_reference=reference)
    return order


def change_order_status(reference: str, status) -> Order:
    if status not in (OrderStatus.PENDING, OrderStatus.COMPLETED):
        raise ValidationError({"status": ["Invalid status value"]})

    order = find_order(reference)
    changed = current_domain.process(
        UpdateOrderStatus(order_number=order.order_number, status=int(status)),
        asynchronous=False,
    )
    order = find_order(order.order_number)

    if changed and order.status == OrderStatus.COMPLETED:
        apply_policy(
            InventoryPolicy.ON_COMPLETION,
            order.order_number,
            [(i.product_id, i.quantity) for i in order.items],
        )
    return order
