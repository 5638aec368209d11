"""Gateway configuration loaded from ``GATEWAY_*`` environment variables."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GatewaySettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="GATEWAY_")

    user_service_url: str = "http://localhost:8000"
    product_service_url: str = "http://localhost:8000"
    cart_service_url: str = "http://localhost:8000"
    order_service_url: str = "http://localhost:8000"
    payment_service_url: str = "http://localhost:8000"

    # Shared with the identity service, which signs the tokens
    jwt_secret: str = Field(
        "change-me-in-production",
        validation_alias=AliasChoices("GATEWAY_JWT_SECRET", "JWT_SECRET"),
    )
    jwt_algorithm: str = Field("HS256", validation_alias=AliasChoices("GATEWAY_JWT_ALGORITHM", "JWT_ALGORITHM"))

    upstream_timeout: float = 10.0

    def routes(self) -> dict[str, tuple[str, bool]]:
        """Public path segment -> (upstream base URL, token required)."""
        return {
            "users": (self.user_service_url, False),
            "products": (self.product_service_url, False),
            "cart": (self.cart_service_url, True),
            "orders": (self.order_service_url, True),
            "payments": (self.payment_service_url, True),
        }
