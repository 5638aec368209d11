"""Storefront client: cart reconciliation, pricing and checkout."""

from storefront.cache import LocalCache
from storefront.cart import CartReconciler, SyncState
from storefront.catalog import CatalogSnapshot
from storefront.checkout import Checkout, CheckoutForm, CheckoutState, DeliveryMethod, Quote
from storefront.client import StorefrontClient
from storefront.config import StorefrontSettings
from storefront.errors import CheckoutSubmissionError, CheckoutValidationError, RemoteUnavailable, SessionExpired

__all__ = [
    "CartReconciler",
    "CatalogSnapshot",
    "Checkout",
    "CheckoutForm",
    "CheckoutState",
    "CheckoutSubmissionError",
    "CheckoutValidationError",
    "DeliveryMethod",
    "LocalCache",
    "Quote",
    "RemoteUnavailable",
    "SessionExpired",
    "StorefrontClient",
    "StorefrontSettings",
    "SyncState",
]
