"""HTTP client for the storefront services, spoken through the API gateway."""

import httpx
import structlog

from storefront.config import StorefrontSettings
from storefront.errors import RemoteUnavailable, SessionExpired

logger = structlog.get_logger(__name__)


class StorefrontClient:
    """Thin wrapper over ``httpx.Client``.

    Every failure (transport error, timeout, non-2xx status or an unreadable
    body) surfaces as ``RemoteUnavailable`` so callers have a single thing to
    fall back on. A 401 or 403 on a request that carried a token is the
    narrower ``SessionExpired``.
    """

    def __init__(self, settings: StorefrontSettings | None = None, http: httpx.Client | None = None):
        self.settings = settings or StorefrontSettings()
        self.http = http or httpx.Client(base_url=self.settings.gateway_url, timeout=self.settings.request_timeout)
        self.token: str | None = None

    def close(self) -> None:
        self.http.close()

    def _request(self, method: str, path: str, timeout: float | None = None, **kwargs) -> dict:
        url = f"{self.settings.api_prefix}{path}"
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = self.http.request(
                method,
                url,
                headers=headers,
                timeout=timeout or self.settings.request_timeout,
                **kwargs,
            )
        except httpx.HTTPError as exc:
            logger.warning("Remote call failed", method=method, url=url, error_type=type(exc).__name__)
            raise RemoteUnavailable(f"{method} {url} failed: {exc}") from exc

        if response.is_error:
            message = _error_message(response)
            logger.warning("Remote call rejected", method=method, url=url, status_code=response.status_code)
            if response.status_code in (401, 403) and "Authorization" in headers:
                raise SessionExpired(message, status_code=response.status_code)
            raise RemoteUnavailable(message, status_code=response.status_code)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            logger.warning("Remote answered with a non-JSON body", method=method, url=url)
            raise RemoteUnavailable(
                f"{method} {url} returned an unreadable body", status_code=response.status_code
            ) from exc

    # --- Users ---

    def register(self, fullname: str, phone: str, password: str, email: str | None = None, address: str | None = None):
        payload = {"fullname": fullname, "phone": phone, "password": password}
        if email:
            payload["email"] = email
        if address:
            payload["address"] = address
        body = self._request("POST", "/users/register", json=payload)
        self.token = body.get("token")
        return body

    def login(self, phone: str, password: str) -> dict:
        body = self._request("POST", "/users/login", json={"phone": phone, "password": password})
        self.token = body.get("token")
        return body

    def logout(self) -> None:
        self.token = None

    # --- Products ---

    def products(self, **params) -> list[dict]:
        return self._request("GET", "/products", params=params).get("products", [])

    # --- Cart ---

    def get_cart(self, user_id: str) -> list[dict]:
        return self._request("GET", f"/cart/{user_id}").get("cart", [])

    def add_cart_item(self, user_id: str, product_id: int, quantity: int, note: str | None = None) -> list[dict]:
        payload = {"id": product_id, "soluong": quantity}
        if note:
            payload["note"] = note
        return self._request("POST", f"/cart/{user_id}/items", json=payload).get("cart", [])

    def update_cart_item(self, user_id: str, product_id: int, quantity: int, note: str | None = None) -> list[dict]:
        payload = {"soluong": quantity}
        if note:
            payload["note"] = note
        return self._request("PUT", f"/cart/{user_id}/items/{product_id}", json=payload).get("cart", [])

    def remove_cart_item(self, user_id: str, product_id: int) -> list[dict]:
        return self._request("DELETE", f"/cart/{user_id}/items/{product_id}").get("cart", [])

    def clear_cart(self, user_id: str) -> None:
        self._request("DELETE", f"/cart/{user_id}")

    # --- Orders ---

    def place_order(self, payload: dict) -> dict:
        body = self._request("POST", "/orders", json=payload, timeout=self.settings.order_timeout)
        return body.get("order", {})

    def orders_for(self, phone: str, page: int = 1, limit: int = 10) -> list[dict]:
        return self._request("GET", f"/orders/user/{phone}", params={"page": page, "limit": limit}).get("orders", [])


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP {response.status_code}"
