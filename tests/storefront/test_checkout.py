"""Tests for storefront pricing and order submission."""

from datetime import date

import pytest
from storefront import (
    CheckoutForm,
    CheckoutState,
    CheckoutSubmissionError,
    CheckoutValidationError,
    DeliveryMethod,
    SyncState,
)
from storefront import cache as keys

FORM = CheckoutForm(
    recipient_name="Nguyễn Văn An",
    recipient_phone="0901234567",
    delivery_address="12 Lê Lợi, Quận 1",
    delivery_date=date(2024, 5, 1),
    time_slot="18:00",
)


class TestQuote:
    def test_delivery_adds_shipping_fee(self, checkout, reconciler):
        reconciler.add(7, 1)
        quote = checkout.quote()
        assert quote.subtotal == 25000
        assert quote.shipping_fee == 30000
        assert quote.total == 55000

    def test_pickup_has_no_fee(self, checkout, reconciler):
        reconciler.add(7, 3)
        quote = checkout.choose_delivery(DeliveryMethod.PICKUP)
        assert quote.shipping_fee == 0
        assert quote.total == 75000

    def test_unknown_product_uses_placeholder_and_default_price(self, checkout, reconciler):
        reconciler.add(99, 1)
        line = checkout.quote().lines[0]
        assert line.name == "Sản phẩm"
        assert line.unit_price == 50000

    def test_toggling_does_not_refetch(self, checkout, reconciler, gateway, signed_in):
        reconciler.add(7, 1)
        calls = len(gateway.requests)
        checkout.choose_delivery(DeliveryMethod.PICKUP)
        checkout.choose_delivery(DeliveryMethod.DELIVERY)
        assert len(gateway.requests) == calls


class TestValidation:
    def test_everything_missing(self, checkout):
        with pytest.raises(CheckoutValidationError) as exc:
            checkout.validate(CheckoutForm())
        assert set(exc.value.messages) == {"tenguoinhan", "sdtnhan", "diachinhan", "items", "user"}

    def test_pickup_needs_no_address(self, checkout, reconciler, signed_in):
        reconciler.add(7, 1)
        checkout.choose_delivery(DeliveryMethod.PICKUP)
        checkout.validate(CheckoutForm(recipient_name="An", recipient_phone="0901234567"))


class TestSubmit:
    def test_successful_order_clears_the_cart(self, checkout, reconciler, gateway, cache, signed_in):
        reconciler.add(7, 2, "Không hành")

        order = checkout.submit(FORM)
        assert checkout.state is CheckoutState.CONFIRMED
        assert order["id"] == "DH1"
        assert reconciler.items == []
        assert gateway.carts["user-001"] == []
        assert cache.get(keys.ORDERS) == [order]

    def test_payload_carries_no_item_prices(self, checkout, reconciler, gateway, signed_in):
        reconciler.add(7, 2)
        checkout.submit(FORM)

        sent = gateway.orders[0]
        assert sent["hinhthucgiao"] == "Giao tận nơi"
        assert sent["ngaygiaohang"] == "2024-05-01"
        assert sent["items"] == [{"id": 7, "soluong": 2, "note": "Không có ghi chú"}]
        assert sent["tongtien"] == 80000

    def test_failed_submission_keeps_the_cart(self, checkout, reconciler, gateway, signed_in):
        reconciler.add(7, 1)
        gateway.order_status = 500

        with pytest.raises(CheckoutSubmissionError) as exc:
            checkout.submit(FORM)
        assert exc.value.status_code == 500
        assert checkout.state is CheckoutState.FAILED
        assert gateway.carts["user-001"] == [{"id": 7, "soluong": 1, "note": "Không có ghi chú"}]
        assert reconciler.items == gateway.carts["user-001"]

    def test_invalid_form_sends_nothing(self, checkout, reconciler, gateway, signed_in):
        reconciler.add(7, 1)
        with pytest.raises(CheckoutValidationError):
            checkout.submit(CheckoutForm(recipient_phone="0901234567", delivery_address="1 Pasteur"))
        assert gateway.orders == []

    def test_ordered_cart_stays_cleared_after_reconnect(self, checkout, reconciler, gateway, signed_in):
        reconciler.add(7, 2)
        gateway.refused = {("DELETE", "/api/cart/user-001")}

        checkout.submit(FORM)
        assert checkout.state is CheckoutState.CONFIRMED
        assert reconciler.items == []
        assert reconciler.state is SyncState.STALE

        gateway.refused = set()
        assert reconciler.load() == []
        assert gateway.carts["user-001"] == []
        assert len(gateway.orders) == 1

    def test_rejected_session_fails_submission_and_signs_out(self, checkout, reconciler, cache, gateway, signed_in):
        reconciler.add(7, 1)
        gateway.valid_tokens = {"token-rotated"}

        with pytest.raises(CheckoutSubmissionError) as exc:
            checkout.submit(FORM)
        assert exc.value.status_code == 403
        assert checkout.state is CheckoutState.FAILED
        assert cache.get(keys.TOKEN) is None
        assert gateway.orders == []


class TestOrderHistory:
    def test_history_from_order_store(self, checkout, reconciler, signed_in):
        reconciler.add(7, 1)
        checkout.submit(FORM)
        assert [o["id"] for o in checkout.order_history()] == ["DH1"]

    def test_history_falls_back_to_cache(self, checkout, reconciler, gateway, signed_in):
        reconciler.add(7, 1)
        checkout.submit(FORM)

        gateway.down = True
        assert [o["id"] for o in checkout.order_history()] == ["DH1"]

    def test_anonymous_history_is_empty(self, checkout):
        assert checkout.order_history() == []


class TestCatalogueRefresh:
    def test_refresh_replaces_snapshot(self, checkout, cache):
        cache.set(keys.PRODUCTS, [])
        assert checkout.refresh_products() is True
        assert checkout.catalog.price_for(7) == 25000

    def test_failed_refresh_keeps_previous_snapshot(self, checkout, gateway, cache):
        cache.set(keys.PRODUCTS, [{"id": 7, "title": "Cơm gà xối mỡ", "price": 27000}])
        gateway.down = True
        assert checkout.refresh_products() is False
        assert checkout.catalog.price_for(7) == 27000
