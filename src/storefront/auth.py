"""Signing in and out: token and user snapshot kept in the local cache."""

import structlog

from storefront import cache as keys
from storefront.cache import LocalCache
from storefront.client import StorefrontClient

logger = structlog.get_logger(__name__)


def sign_in(client: StorefrontClient, cache: LocalCache, phone: str, password: str) -> dict:
    """Log in and remember the session; returns the user record."""
    body = client.login(phone, password)
    cache.set(keys.TOKEN, body["token"])
    cache.set(keys.CURRENT_USER, body["user"])
    logger.info("Signed in", user_id=body["user"].get("id"))
    return body["user"]


def sign_out(client: StorefrontClient, cache: LocalCache) -> None:
    client.logout()
    cache.delete(keys.TOKEN, keys.CURRENT_USER)


def expire_session(client: StorefrontClient, cache: LocalCache, status_code: int | None = None) -> None:
    """Forget a token the gateway no longer accepts."""
    logger.warning("Session rejected by the gateway, signing out", status_code=status_code)
    sign_out(client, cache)


def restore_session(client: StorefrontClient, cache: LocalCache) -> dict | None:
    """Hand the cached token to the client; returns the cached user, if any."""
    user = current_user(cache)
    if user:
        client.token = cache.get(keys.TOKEN)
    return user


def current_user(cache: LocalCache) -> dict | None:
    return cache.get(keys.CURRENT_USER) if cache.get(keys.TOKEN) else None


def cart_owner(user: dict | None) -> str | None:
    """The id carts are filed under: the user id, else the phone."""
    if not user:
        return None
    return str(user.get("id") or user.get("phone") or "") or None
