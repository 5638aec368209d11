"""HTTP surface of the user service."""

from identity.api.routes import router

__all__ = ["router"]
