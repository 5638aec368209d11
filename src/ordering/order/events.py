"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A customer placed an order; ``items`` is a JSON list of priced lines."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    customer_phone = String(required=True)
    delivery_method = String(required=True)
    items = Text(required=True)
    total_amount = Integer(required=True)
    created_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCompleted:
    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    completed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderReopened:
    """A completed order was set back to pending."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
