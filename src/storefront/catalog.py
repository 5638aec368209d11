"""Cached snapshot of the product catalogue used for display pricing."""

import structlog

from storefront import cache as keys
from storefront.cache import LocalCache
from storefront.client import StorefrontClient
from storefront.config import StorefrontSettings
from storefront.errors import RemoteUnavailable

logger = structlog.get_logger(__name__)


class CatalogSnapshot:
    def __init__(self, cache: LocalCache, settings: StorefrontSettings | None = None):
        self.cache = cache
        self.settings = settings or StorefrontSettings()

    def products(self) -> list[dict]:
        return self.cache.get(keys.PRODUCTS, [])

    def find(self, product_id) -> dict | None:
        return next((p for p in self.products() if str(p.get("id")) == str(product_id)), None)

    def price_for(self, product_id) -> int:
        product = self.find(product_id)
        if product is None or product.get("price") is None:
            return self.settings.default_unit_price
        return int(product["price"])

    def name_for(self, product_id) -> str:
        product = self.find(product_id)
        if product is None or not product.get("title"):
            return self.settings.placeholder_product_name
        return product["title"]

    def refresh(self, client: StorefrontClient, limit: int = 100) -> bool:
        """Pull the active menu into the cache; on failure the old snapshot stays."""
        try:
            products = client.products(limit=limit)
        except RemoteUnavailable as exc:
            logger.warning("Catalogue refresh failed, keeping cached snapshot", error=exc.message)
            return False
        self.cache.set(keys.PRODUCTS, products)
        return True
