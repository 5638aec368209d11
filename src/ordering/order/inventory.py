"""When placed orders draw down catalogue inventory.

``INVENTORY_POLICY`` selects the moment:

- ``none``: inventory is never touched (the default)
- ``on_order``: when the order is placed
- ``on_completion``: when the order is marked completed

A failed decrement is logged and never undoes the order.
"""

import os
from enum import Enum

from protean.exceptions import ValidationError

from ordering.catalogue import CatalogueLookupError, get_catalogue
from shared.logging import get_logger

logger = get_logger(__name__)


class InventoryPolicy(Enum):
    NONE = "none"
    ON_ORDER = "on_order"
    ON_COMPLETION = "on_completion"


def current_policy() -> InventoryPolicy:
    value = os.environ.get("INVENTORY_POLICY", InventoryPolicy.NONE.value).strip().lower()
    try:
        return InventoryPolicy(value)
    except ValueError:
        logger.warning("Unknown inventory policy, inventory will not be decremented", policy=value)
        return InventoryPolicy.NONE


def decrement_inventory(order_number: str, lines) -> int:
    """Book each ``(product_id, quantity)`` line as sold; returns how many succeeded."""
    catalogue = get_catalogue()
    booked = 0
    for product_id, quantity in lines:
        try:
            catalogue.record_sale(product_id, quantity)
            booked += 1
        except (CatalogueLookupError, ValidationError) as exc:
            logger.warning(
                "Inventory decrement failed",
                order_number=order_number,
                product_id=product_id,
                quantity=quantity,
                error=str(exc),
            )
    return booked


def apply_policy(trigger: InventoryPolicy, order_number: str, lines) -> bool:
    """Decrement inventory if ``trigger`` is the configured policy."""
    if current_policy() is not trigger:
        return False
    booked = decrement_inventory(order_number, lines)
    logger.info("Inventory decremented", order_number=order_number, policy=trigger.value, lines=booked)
    return True
