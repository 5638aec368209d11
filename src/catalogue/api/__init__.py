"""HTTP surface of the product service."""

from catalogue.api.routes import product_router

__all__ = ["product_router"]
