"""Orders adapter factory.

Provides get_orders() / set_orders() to swap implementations:
- LocalOrders: the ordering domain in the same process (default)
- FakeOrders: in-memory orders for testing
"""

import os

from payments.orders.port import OrderLookupError, OrderSummary, OrdersPort

_orders_instance: OrdersPort | None = None


def get_orders() -> OrdersPort:
    """Return the configured orders adapter (singleton), chosen by ``ORDER_LOOKUP_ADAPTER``."""
    global _orders_instance
    if _orders_instance is None:
        adapter = os.environ.get("ORDER_LOOKUP_ADAPTER", "local")
        if adapter == "local":
            from payments.orders.local_adapter import LocalOrders

            _orders_instance = LocalOrders()
        elif adapter == "fake":
            from payments.orders.fake_adapter import FakeOrders

            _orders_instance = FakeOrders()
        else:
            raise ValueError(f"Unknown orders adapter: {adapter}")
    return _orders_instance


def set_orders(orders: OrdersPort) -> None:
    """Override the active orders adapter (useful for tests)."""
    global _orders_instance
    _orders_instance = orders


def reset_orders() -> None:
    """Reset the orders singleton (useful for testing)."""
    global _orders_instance
    _orders_instance = None


__all__ = ["OrderLookupError", "OrderSummary", "OrdersPort", "get_orders", "reset_orders", "set_orders"]
