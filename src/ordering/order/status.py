"""Order status changes: command and handler."""

from protean import handle
from protean.fields import Integer, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    """Mark an order pending (``0``) or completed (``1``)."""

    order_number = String(required=True, max_length=20)
    status = Integer(required=True)


@ordering.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.by_number(command.order_number)
        changed = order.change_status(command.status)
        repo.add(order)
        return changed
