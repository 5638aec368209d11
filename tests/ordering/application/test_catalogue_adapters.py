"""Tests for the catalogue adapters the ordering context prices orders with."""

import json

import httpx
import pytest
from ordering.catalogue import CatalogueLookupError, get_catalogue, reset_catalogue
from ordering.catalogue.fake_adapter import FakeCatalogue
from ordering.catalogue.http_adapter import HttpCatalogue
from ordering.catalogue.local_adapter import LocalCatalogue


class TestAdapterSelection:
    @pytest.mark.parametrize(
        "name, adapter_class",
        [("fake", FakeCatalogue), ("local", LocalCatalogue), ("http", HttpCatalogue)],
    )
    def test_adapter_from_environment(self, monkeypatch, name, adapter_class):
        monkeypatch.setenv("CATALOGUE_ADAPTER", name)
        reset_catalogue()
        assert isinstance(get_catalogue(), adapter_class)

    def test_unknown_adapter(self, monkeypatch):
        monkeypatch.setenv("CATALOGUE_ADAPTER", "carrier-pigeon")
        reset_catalogue()
        with pytest.raises(ValueError):
            get_catalogue()


class TestLocalCatalogue:
    @pytest.fixture()
    def product_id(self, catalogue_bed, reset_data):
        from catalogue.domain import catalogue
        from catalogue.product.creation import CreateProduct

        with catalogue.domain_context():
            product_id = catalogue.process(
                CreateProduct(
                    title="Bò nướng lá lốt",
                    category="Món nướng",
                    price=65000,
                    image="./assets/img/products/bo-la-lot.jpeg",
                    description="Bò cuốn lá lốt nướng than hoa.",
                    inventory=10,
                ),
                asynchronous=False,
            )
        yield product_id
        reset_data(catalogue)

    def test_price_and_sale(self, product_id):
        from catalogue.domain import catalogue
        from catalogue.product.product import Product

        adapter = LocalCatalogue()
        assert adapter.unit_price(product_id) == 65000

        adapter.record_sale(product_id, 3)
        with catalogue.domain_context():
            assert catalogue.repository_for(Product).get(product_id).inventory == 7

    def test_unknown_product(self, catalogue_bed):
        with pytest.raises(CatalogueLookupError):
            LocalCatalogue().unit_price(404)


class TestHttpCatalogue:
    def test_reads_price_from_product_service(self):
        def handler(request):
            assert request.url.path == "/products/7"
            return httpx.Response(200, json={"product": {"id": 7, "price": 25000}})

        adapter = HttpCatalogue("http://products", transport=httpx.MockTransport(handler))
        assert adapter.unit_price(7) == 25000

    def test_books_sale(self):
        seen = []

        def handler(request):
            seen.append((request.method, request.url.path, json.loads(request.content)))
            return httpx.Response(200, json={"message": "Inventory updated successfully"})

        HttpCatalogue("http://products", transport=httpx.MockTransport(handler)).record_sale(7, 2)
        assert seen == [("PATCH", "/products/7/inventory", {"quantity": 2})]

    def test_missing_product(self):
        adapter = HttpCatalogue(
            "http://products",
            transport=httpx.MockTransport(lambda request: httpx.Response(404, json={"error": "Product not found"})),
        )
        with pytest.raises(CatalogueLookupError):
            adapter.unit_price(7)

    def test_unreachable_service(self):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        with pytest.raises(CatalogueLookupError):
            HttpCatalogue("http://products", transport=httpx.MockTransport(handler)).unit_price(7)
