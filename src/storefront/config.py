"""Storefront client configuration loaded from ``STOREFRONT_*`` environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class StorefrontSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STOREFRONT_")

    gateway_url: str = "http://localhost:3000"
    api_prefix: str = "/api"

    # Seconds
    request_timeout: float = 8.0
    order_timeout: float = 10.0

    # Whole VND; mirror the order service's pricing
    shipping_fee: int = 30000
    default_unit_price: int = 50000
    placeholder_product_name: str = "Sản phẩm"

    # None keeps the cache in memory only
    cache_path: str | None = "storefront-cache.json"
