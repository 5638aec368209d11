"""API gateway in front of the storefront services."""

from api_gateway.app import create_gateway
from api_gateway.config import GatewaySettings

__all__ = ["GatewaySettings", "create_gateway"]
