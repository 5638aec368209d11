"""Fixtures wiring the storefront client to the gateway and the services in one process.

storefront client -> TestClient(gateway) -> ASGITransport(services app)
"""

import httpx
import pytest
from api_gateway import create_gateway
from fastapi.testclient import TestClient
from storefront import CartReconciler, CatalogSnapshot, Checkout, LocalCache, StorefrontClient, StorefrontSettings

GATEWAY_URL = "http://gateway"


class SwitchableTransport(httpx.AsyncBaseTransport):
    """Routes upstream calls into the services app; services in ``down`` refuse connections."""

    def __init__(self, app):
        self.inner = httpx.ASGITransport(app=app)
        self.down: set[str] = set()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        service = request.url.path.strip("/").split("/")[0]
        if service in self.down:
            raise httpx.ConnectError("Connection refused", request=request)
        return await self.inner.handle_async_request(request)


@pytest.fixture()
def upstream(services_app):
    return SwitchableTransport(services_app)


@pytest.fixture()
def gateway(upstream):
    return create_gateway(transport=upstream)


@pytest.fixture()
def settings():
    return StorefrontSettings(gateway_url=GATEWAY_URL, cache_path=None)


@pytest.fixture()
def cache():
    return LocalCache()


@pytest.fixture()
def client(gateway, settings):
    http = TestClient(gateway, base_url=GATEWAY_URL)
    yield StorefrontClient(settings=settings, http=http)
    http.close()


@pytest.fixture()
def reconciler(client, cache):
    return CartReconciler(client, cache)


@pytest.fixture()
def checkout(reconciler, client, cache, settings):
    return Checkout(reconciler, CatalogSnapshot(cache, settings), client, cache, settings)
