"""HTTP surface of the cart and order services."""

from ordering.api.routes import cart_router, order_router

__all__ = ["cart_router", "order_router"]
