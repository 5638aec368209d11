"""Fake orders adapter: a fixed set of orders for tests and development."""

from payments.orders.port import PENDING, OrderLookupError, OrderSummary, OrdersPort


class FakeOrders(OrdersPort):
    def __init__(self, orders: list[OrderSummary] | None = None):
        self.orders = {order.order_number: order for order in orders or []}
        self.should_succeed = True

    def add(self, order_number: str, customer_phone: str, total_amount: int, status: int = PENDING) -> OrderSummary:
        order = OrderSummary(order_number, customer_phone, total_amount, status)
        self.orders[order_number] = order
        return order

    def configure(self, should_succeed: bool = True):
        """Configure the fake orders behavior for testing."""
        self.should_succeed = should_succeed

    def find(self, order_reference: str) -> OrderSummary:
        if not self.should_succeed:
            raise OrderLookupError("Order store unavailable")
        try:
            return self.orders[order_reference]
        except KeyError as exc:
            raise OrderLookupError(f"Unknown order {order_reference}") from exc
