"""Catalogue adapter factory.

Provides get_catalogue() / set_catalogue() to swap implementations:
- LocalCatalogue: the catalogue domain in the same process (default)
- HttpCatalogue: the product service over HTTP (``PRODUCT_SERVICE_URL``)
- FakeCatalogue: fixed price list for testing
"""

import os

from ordering.catalogue.port import CatalogueLookupError, CataloguePort

_catalogue_instance: CataloguePort | None = None


def get_catalogue() -> CataloguePort:
    """Return the configured catalogue adapter (singleton), chosen by ``CATALOGUE_ADAPTER``."""
    global _catalogue_instance
    if _catalogue_instance is None:
        adapter = os.environ.get("CATALOGUE_ADAPTER", "local")
        if adapter == "local":
            from ordering.catalogue.local_adapter import LocalCatalogue

            _catalogue_instance = LocalCatalogue()
        elif adapter == "http":
            from ordering.catalogue.http_adapter import HttpCatalogue

            _catalogue_instance = HttpCatalogue(os.environ.get("PRODUCT_SERVICE_URL", "http://localhost:8000"))
        elif adapter == "fake":
            from ordering.catalogue.fake_adapter import FakeCatalogue

            _catalogue_instance = FakeCatalogue()
        else:
            raise ValueError(f"Unknown catalogue adapter: {adapter}")
    return _catalogue_instance


def set_catalogue(catalogue: CataloguePort) -> None:
    """Override the active catalogue adapter (useful for tests)."""
    global _catalogue_instance
    _catalogue_instance = catalogue


def reset_catalogue() -> None:
    """Reset the catalogue singleton (useful for testing)."""
    global _catalogue_instance
    _catalogue_instance = None


__all__ = ["CatalogueLookupError", "CataloguePort", "get_catalogue", "reset_catalogue", "set_catalogue"]
