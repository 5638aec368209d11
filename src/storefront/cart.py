"""Cart reconciliation between memory, the local cache and the Cart Store.

Every mutation goes through ``reconcile()``:

- signed in and the Cart Store answers: the remote cart is re-read and
  overwrites memory and cache (``SYNCED``)
- signed in but the call fails: the change is applied locally and cached
  (``STALE``) until the next successful sync
- the gateway rejects the token: the session is dropped and the change
  stays local (``LOCAL_ONLY``)
- anonymous: memory and cache only (``LOCAL_ONLY``)

A clear that never reached the Cart Store is remembered in the cache and
sent ahead of the next remote call, so an ordered cart cannot come back.
"""

from collections.abc import Callable
from enum import Enum

import structlog

from storefront import cache as keys
from storefront.auth import cart_owner, expire_session, restore_session
from storefront.cache import LocalCache
from storefront.client import StorefrontClient
from storefront.errors import RemoteUnavailable, SessionExpired

logger = structlog.get_logger(__name__)

DEFAULT_NOTE = "Không có ghi chú"


class SyncState(Enum):
    SYNCED = "synced"
    LOCAL_ONLY = "local_only"
    STALE = "stale"


def _note(note: str | None) -> str:
    return note.strip() if note and note.strip() else DEFAULT_NOTE


class CartReconciler:
    def __init__(self, client: StorefrontClient, cache: LocalCache):
        self.client = client
        self.cache = cache
        self.items: list[dict] = [dict(line) for line in cache.get(keys.CART, [])]
        self.state = SyncState.LOCAL_ONLY

    @property
    def owner(self) -> str | None:
        return cart_owner(restore_session(self.client, self.cache))

    def _persist(self) -> None:
        self.cache.set(keys.CART, self.items)

    def _find(self, product_id) -> dict | None:
        return next((line for line in self.items if int(line["id"]) == int(product_id)), None)

    def count(self) -> int:
        return sum(line["soluong"] for line in self.items)

    # -------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------
    def load(self) -> list[dict]:
        """Read the cart: remote when signed in, else (or on failure) the cache."""
        owner = self.owner
        if owner is None:
            return self._use_cache(SyncState.LOCAL_ONLY)

        try:
            self._send_pending_clear(owner)
            self.items = self.client.get_cart(owner)
        except SessionExpired as exc:
            expire_session(self.client, self.cache, exc.status_code)
            return self._use_cache(SyncState.LOCAL_ONLY)
        except RemoteUnavailable as exc:
            logger.warning("Cart Store unreachable, using cached cart", user_id=owner, error=exc.message)
            return self._use_cache(SyncState.STALE)

        self._persist()
        self.state = SyncState.SYNCED
        return self.items

    def _use_cache(self, state: SyncState) -> list[dict]:
        self.items = [dict(line) for line in self.cache.get(keys.CART, [])]
        self.state = state
        return self.items

    def _send_pending_clear(self, owner: str) -> None:
        if self.cache.get(keys.PENDING_CLEAR) != owner:
            return
        self.client.clear_cart(owner)
        self.cache.delete(keys.PENDING_CLEAR)
        logger.info("Delivered pending cart clear", user_id=owner)

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add(self, product_id: int, quantity: int = 1, note: str | None = None) -> list[dict]:
        if quantity < 1:
            raise ValueError("Quantity must be a positive integer")

        def local():
            line = self._find(product_id)
            if line:
                line["soluong"] += quantity
                line["note"] = _note(note)
            else:
                self.items.append({"id": int(product_id), "soluong": quantity, "note": _note(note)})

        return self.reconcile(lambda owner: self.client.add_cart_item(owner, product_id, quantity, note), local)

    def update(self, product_id: int, quantity: int, note: str | None = None) -> list[dict]:
        """Set an absolute quantity; zero or less removes the line."""
        if quantity <= 0:
            return self.remove(product_id)

        def local():
            line = self._find(product_id)
            if line:
                line["soluong"] = quantity
                if note:
                    line["note"] = _note(note)

        return self.reconcile(lambda owner: self.client.update_cart_item(owner, product_id, quantity, note), local)

    def remove(self, product_id: int) -> list[dict]:
        def local():
            self.items = [line for line in self.items if int(line["id"]) != int(product_id)]

        return self.reconcile(lambda owner: self.client.remove_cart_item(owner, product_id), local)

    def clear(self) -> list[dict]:
        def local():
            self.items = []
            owner = self.owner
            if owner is not None:
                self.cache.set(keys.PENDING_CLEAR, owner)

        return self.reconcile(lambda owner: self.client.clear_cart(owner), local)

    # -------------------------------------------------------------------
    # Reconciliation
    # -------------------------------------------------------------------
    def reconcile(self, remote: Callable[[str], object], local: Callable[[], None]) -> list[dict]:
        """Apply one mutation and settle the three copies of the cart."""
        owner = self.owner
        if owner is None:
            return self._apply_locally(local, SyncState.LOCAL_ONLY)

        try:
            self._send_pending_clear(owner)
            remote(owner)
            self.items = self.client.get_cart(owner)
        except SessionExpired as exc:
            expire_session(self.client, self.cache, exc.status_code)
            return self._apply_locally(local, SyncState.LOCAL_ONLY)
        except RemoteUnavailable as exc:
            logger.warning("Cart sync failed, applying change locally", user_id=owner, error=exc.message)
            return self._apply_locally(local, SyncState.STALE)

        self._persist()
        self.state = SyncState.SYNCED
        return self.items

    def _apply_locally(self, local: Callable[[], None], state: SyncState) -> list[dict]:
        local()
        self._persist()
        self.state = state
        return self.items
