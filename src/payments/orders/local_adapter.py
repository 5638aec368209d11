"""Local orders adapter: reads the ordering domain in the same process."""

from payments.orders.port import OrderLookupError, OrderSummary, OrdersPort


class LocalOrders(OrdersPort):
    """Runs order lookups inside the ordering domain context.

    The ordering domain must be initialized (``ordering.init()``) before use.
    """

    def find(self, order_reference: str) -> OrderSummary:
        from ordering.domain import ordering
        from ordering.order.order import Order

        with ordering.domain_context():
            order = ordering.repository_for(Order).by_reference(order_reference)
            if order is None:
                raise OrderLookupError(f"Unknown order {order_reference}")
            return OrderSummary(
                order_number=order.order_number,
                customer_phone=order.customer_phone,
                total_amount=order.total_amount,
                status=order.status,
            )
