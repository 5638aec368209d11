"""Integration tests for the cart and order endpoints via TestClient."""

import inspect

import httpx
import pytest
from fastapi.testclient import TestClient
from ordering.api.routes import create_order, update_order_status
from ordering.catalogue import set_catalogue
from ordering.catalogue.http_adapter import HttpCatalogue
from ordering.order.order import Order
from protean import current_domain

CUSTOMER = {"X-User-Id": "user-001", "X-User-Phone": "0901234567", "X-User-Type": "customer"}
ADMIN = {"X-User-Id": "admin-1", "X-User-Phone": "0900000000", "X-User-Type": "admin"}

ORDER = {
    "hinhthucgiao": "Giao tận nơi",
    "ngaygiaohang": "2024-05-01",
    "thoigiangiao": "18:00",
    "tenguoinhan": "Nguyễn Văn An",
    "sdtnhan": "0901234567",
    "diachinhan": "12 Lê Lợi, Quận 1",
    "items": [{"id": 3, "soluong": 1}],
}


@pytest.fixture()
def client(services_app):
    return TestClient(services_app)


def _place(client, **overrides):
    response = client.post("/orders", json={**ORDER, **overrides}, headers=CUSTOMER)
    assert response.status_code == 201, response.text
    return response.json()


class TestCartEndpoints:
    def test_empty_cart(self, client):
        assert client.get("/cart/user-001").json() == {"cart": []}

    def test_add_merge_update_remove(self, client):
        client.post("/cart/user-001/items", json={"id": 7, "soluong": 1})
        response = client.post("/cart/user-001/items", json={"id": 7, "soluong": 2, "note": "Ít cay"})
        assert response.json()["cart"] == [{"id": 7, "soluong": 3, "note": "Ít cay"}]

        response = client.put("/cart/user-001/items/7", json={"soluong": 1})
        assert response.json()["cart"][0]["soluong"] == 1

        response = client.delete("/cart/user-001/items/7")
        assert response.json()["cart"] == []

    def test_add_rejects_zero_quantity(self, client):
        response = client.post("/cart/user-001/items", json={"id": 7, "soluong": 0})
        assert response.status_code == 400

    def test_update_missing_item(self, client):
        response = client.put("/cart/user-001/items/7", json={"soluong": 2})
        assert response.status_code == 404
        assert response.json() == {"error": "Item not found in cart"}

    def test_clear(self, client):
        client.post("/cart/user-001/items", json={"id": 7, "soluong": 1})
        assert client.delete("/cart/user-001").status_code == 200
        assert client.get("/cart/user-001").json() == {"cart": []}


class TestPlaceOrderEndpoint:
    def test_requires_caller_identity(self, client):
        response = client.post("/orders", json=ORDER)
        assert response.status_code == 401

    def test_server_computes_total(self, client):
        body = _place(client, tongtien=1)
        assert body["order"]["id"] == "DH1"
        assert body["order"]["tongtien"] == 55000
        assert body["order"]["khachhang"] == "0901234567"
        assert body["order"]["items"][0]["price"] == 25000
        assert body["total_mismatch"] is True

        stored = current_domain.repository_for(Order).by_number("DH1")
        assert stored.total_amount == 55000

    def test_prices_through_the_http_catalogue(self, client):
        def product_service(request):
            return httpx.Response(200, json={"product": {"id": 3, "price": 42000}})

        set_catalogue(HttpCatalogue("http://products", transport=httpx.MockTransport(product_service)))
        body = _place(client, hinhthucgiao="Tự đến lấy", diachinhan="")
        assert body["order"]["tongtien"] == 42000

    def test_write_routes_run_off_the_event_loop(self):
        assert not inspect.iscoroutinefunction(create_order)
        assert not inspect.iscoroutinefunction(update_order_status)

    def test_delivery_without_address(self, client):
        response = client.post("/orders", json={**ORDER, "diachinhan": ""}, headers=CUSTOMER)
        assert response.status_code == 400

    def test_bad_recipient_phone(self, client):
        response = client.post("/orders", json={**ORDER, "sdtnhan": "12345"}, headers=CUSTOMER)
        assert response.status_code == 400

    def test_unknown_delivery_method(self, client):
        response = client.post("/orders", json={**ORDER, "hinhthucgiao": "Bay tới"}, headers=CUSTOMER)
        assert response.status_code == 400

    def test_empty_items(self, client):
        response = client.post("/orders", json={**ORDER, "items": []}, headers=CUSTOMER)
        assert response.status_code == 400


class TestOrderQueries:
    def test_customer_history(self, client):
        _place(client)
        _place(client)
        body = client.get("/orders/user/0901234567").json()
        assert body["pagination"]["total"] == 2
        assert {o["id"] for o in body["orders"]} == {"DH1", "DH2"}

    def test_get_by_number(self, client):
        _place(client)
        assert client.get("/orders/DH1").json()["order"]["id"] == "DH1"
        assert client.get("/orders/DH404").status_code == 404

    def test_admin_list_filters(self, client):
        _place(client)
        _place(client, tenguoinhan="Trần Thị Bình")
        client.put("/orders/DH1/status", json={"status": 1}, headers=ADMIN)

        body = client.get("/orders", params={"status": "1"}, headers=ADMIN).json()
        assert [o["id"] for o in body["orders"]] == ["DH1"]

        body = client.get("/orders", params={"status": "2"}, headers=ADMIN).json()
        assert body["pagination"]["total"] == 2

        body = client.get("/orders", params={"search": "Bình"}, headers=ADMIN).json()
        assert [o["id"] for o in body["orders"]] == ["DH2"]

    def test_admin_list_rejects_unknown_status(self, client):
        response = client.get("/orders", params={"status": "7"}, headers=ADMIN)
        assert response.status_code == 400

    def test_list_requires_admin(self, client):
        response = client.get("/orders", headers=CUSTOMER)
        assert response.status_code == 403


class TestOrderStatusEndpoint:
    def test_admin_completes_order(self, client):
        _place(client)
        response = client.put("/orders/DH1/status", json={"status": 1}, headers=ADMIN)
        assert response.status_code == 200
        assert response.json()["order"]["trangthai"] == 1

    def test_invalid_status(self, client):
        _place(client)
        response = client.put("/orders/DH1/status", json={"status": 3}, headers=ADMIN)
        assert response.status_code == 400

    def test_customer_cannot_change_status(self, client):
        _place(client)
        response = client.put("/orders/DH1/status", json={"status": 1}, headers=CUSTOMER)
        assert response.status_code == 403
