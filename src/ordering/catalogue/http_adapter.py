"""HTTP catalogue adapter: calls the product service's REST API."""

import httpx

from ordering.catalogue.port import CatalogueLookupError, CataloguePort

DEFAULT_TIMEOUT = 8.0


class HttpCatalogue(CataloguePort):
    """Reads prices from ``GET /products/{id}`` and books sales with
    ``PATCH /products/{id}/inventory``.

    Calls block; only use it from sync routes or worker threads. Pointed at
    the same process, a call made on the event loop waits out the timeout.
    """

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT, transport: httpx.BaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def _request(self, method: str, path: str, **kwargs) -> dict:
        try:
            with httpx.Client(base_url=self.base_url, timeout=self.timeout, transport=self.transport) as client:
                response = client.request(method, path, **kwargs)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPError as exc:
            raise CatalogueLookupError(f"{method} {path} failed: {exc}") from exc

    def unit_price(self, product_id: int) -> int:
        body = self._request("GET", f"/products/{int(product_id)}")
        try:
            return int(body["product"]["price"])
        except (KeyError, TypeError, ValueError) as exc:
            raise CatalogueLookupError(f"Malformed product response for {product_id}") from exc

    def record_sale(self, product_id: int, quantity: int) -> None:
        self._request("PATCH", f"/products/{int(product_id)}/inventory", json={"quantity": quantity})
