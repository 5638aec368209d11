"""Storefront fixtures: a client backed by an in-memory fake of the gateway."""

import json
import re

import httpx
import pytest
from storefront import CartReconciler, CatalogSnapshot, Checkout, LocalCache, StorefrontClient, StorefrontSettings
from storefront import cache as keys

SIGNED_IN_USER = {"id": "user-001", "fullname": "Nguyễn Văn An", "phone": "0901234567", "userType": "customer"}


class FakeGateway:
    """Just enough of the cart and order endpoints to drive the client.

    Setting ``down`` makes every call fail as a refused connection;
    ``refused`` does the same for single ``(method, path)`` pairs.
    ``order_status`` answers order submissions with that error status. Cart
    and order routes want a bearer token from ``valid_tokens``: none gives
    401, an unknown one 403.
    """

    def __init__(self):
        self.carts: dict[str, list[dict]] = {}
        self.orders: list[dict] = []
        self.down = False
        self.order_status: int | None = None
        self.refused: set[tuple[str, str]] = set()
        self.valid_tokens = {"token-001"}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if self.down or (request.method, path) in self.refused:
            raise httpx.ConnectError("Connection refused", request=request)

        if path.startswith(("/api/cart", "/api/orders")):
            authorization = request.headers.get("authorization")
            if not authorization:
                return httpx.Response(401, json={"error": "Access token required"})
            if authorization.removeprefix("Bearer ") not in self.valid_tokens:
                return httpx.Response(403, json={"error": "Invalid token"})

        body = json.loads(request.content) if request.content else {}

        if match := re.fullmatch(r"/api/cart/([^/]+)", path):
            user = match.group(1)
            if request.method == "GET":
                return httpx.Response(200, json={"cart": self.carts.get(user, [])})
            self.carts[user] = []
            return httpx.Response(200, json={"message": "Cart cleared successfully"})

        if match := re.fullmatch(r"/api/cart/([^/]+)/items", path):
            cart = self.carts.setdefault(match.group(1), [])
            line = next((line for line in cart if line["id"] == body["id"]), None)
            if line:
                line["soluong"] += body["soluong"]
            else:
                cart.append({"id": body["id"], "soluong": body["soluong"], "note": body.get("note", "Không có ghi chú")})
            return httpx.Response(200, json={"cart": cart})

        if match := re.fullmatch(r"/api/cart/([^/]+)/items/(\d+)", path):
            cart = self.carts.setdefault(match.group(1), [])
            product_id = int(match.group(2))
            if request.method == "DELETE":
                cart[:] = [line for line in cart if line["id"] != product_id]
            else:
                for line in cart:
                    if line["id"] == product_id:
                        line["soluong"] = body["soluong"]
            return httpx.Response(200, json={"cart": cart})

        if path == "/api/orders" and request.method == "POST":
            if self.order_status:
                return httpx.Response(self.order_status, json={"error": "Order service failed"})
            order = {**body, "id": f"DH{len(self.orders) + 1}", "khachhang": SIGNED_IN_USER["phone"]}
            self.orders.append(order)
            return httpx.Response(201, json={"message": "Order created successfully", "order": order})

        if match := re.fullmatch(r"/api/orders/user/(\d+)", path):
            orders = [o for o in self.orders if o["khachhang"] == match.group(1)]
            return httpx.Response(200, json={"orders": orders})

        if path == "/api/products":
            return httpx.Response(200, json={"products": [{"id": 7, "title": "Cơm gà xối mỡ", "price": 25000}]})

        return httpx.Response(404, json={"error": "Route not found"})


@pytest.fixture()
def gateway():
    return FakeGateway()


@pytest.fixture()
def settings():
    return StorefrontSettings(gateway_url="http://gateway", cache_path=None)


@pytest.fixture()
def client(gateway, settings):
    http = httpx.Client(base_url=settings.gateway_url, transport=httpx.MockTransport(gateway))
    yield StorefrontClient(settings=settings, http=http)
    http.close()


@pytest.fixture()
def cache():
    return LocalCache()


@pytest.fixture()
def signed_in(cache):
    cache.set(keys.TOKEN, "token-001")
    cache.set(keys.CURRENT_USER, SIGNED_IN_USER)
    return SIGNED_IN_USER


@pytest.fixture()
def reconciler(client, cache):
    return CartReconciler(client, cache)


@pytest.fixture()
def catalog(cache, settings):
    cache.set(keys.PRODUCTS, [{"id": 7, "title": "Cơm gà xối mỡ", "price": 25000}])
    return CatalogSnapshot(cache, settings)


@pytest.fixture()
def checkout(reconciler, catalog, client, cache, settings):
    return Checkout(reconciler, catalog, client, cache, settings)
