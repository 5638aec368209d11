"""Local persistent cache, the storefront's stand-in for browser storage.

Values are stored as one JSON document. Without a path the cache lives in
memory only.
"""

import json
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

CART = "cart"
CURRENT_USER = "currentuser"
TOKEN = "token"
PRODUCTS = "products"
ORDERS = "order"
# Owner whose post-order clear has not reached the Cart Store yet
PENDING_CLEAR = "pendingclear"


class LocalCache:
    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path else None
        self._data: dict = self._load()

    def _load(self) -> dict:
        if self.path is None or not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Local cache unreadable, starting empty", path=str(self.path), error=str(exc))
            return {}
        return data if isinstance(data, dict) else {}

    def _flush(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._data, ensure_ascii=False, indent=2), encoding="utf-8")

    def get(self, key: str, default=None):
        return self._data.get(key, default)

    def set(self, key: str, value) -> None:
        self._data[key] = value
        self._flush()

    def delete(self, *keys: str) -> None:
        for key in keys:
            self._data.pop(key, None)
        self._flush()
