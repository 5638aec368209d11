"""Order placement: command and handler."""

import json

from protean import handle
from protean.fields import Date, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order
from shared.logging import get_logger

logger = get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    """Persist an order whose lines already carry their unit prices."""

    customer_phone = String(required=True, max_length=20)
    delivery_method = String(required=True, max_length=20)
    delivery_date = Date(required=True)
    delivery_time_slot = String(max_length=100)
    note = Text()
    recipient_name = String(required=True, max_length=255)
    recipient_phone = String(required=True, max_length=20)
    delivery_address = Text()
    items = Text(required=True)  # JSON: list of {product_id, quantity, unit_price, note}
    reported_total = Integer()


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items
        repo = current_domain.repository_for(Order)

        order = Order.place(
            order_number=repo.next_order_number(),
            customer_phone=command.customer_phone,
            delivery_method=command.delivery_method,
            delivery_date=command.delivery_date,
            recipient_name=command.recipient_name,
            recipient_phone=command.recipient_phone,
            items_data=items_data,
            delivery_address=command.delivery_address,
            delivery_time_slot=command.delivery_time_slot,
            note=command.note,
            reported_total=command.reported_total,
        )
        if order.total_mismatch:
            logger.warning(
                "Client total ignored",
                order_number=order.order_number,
                reported_total=order.reported_total,
                computed_total=order.total_amount,
            )

        repo.add(order)
        logger.info(
            "Order placed",
            order_number=order.order_number,
            customer_phone=order.customer_phone,
            total=order.total_amount,
        )
        return order.order_number
