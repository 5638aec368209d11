"""Tests for the Payment aggregate: starting states, status moves and refunds."""

import re

import pytest
from payments.payment.events import PaymentInitiated, PaymentRefunded, PaymentStatusChanged
from payments.payment.payment import Payment, PaymentStatus, mask_card_number
from protean.exceptions import ValidationError

CARD = {"card_number": "4111 1111 1111 1234", "card_holder_name": "NGUYEN VAN AN"}


def _initiate(method="cash", **overrides):
    defaults = {"order_number": "DH1", "user_id": "user-001", "amount": 80000, "method": method}
    if method == "credit_card":
        defaults["details"] = CARD
    defaults.update(overrides)
    return Payment.initiate(**defaults)


class TestInitiation:
    def test_cash_settles_immediately(self):
        payment = _initiate("cash")
        assert payment.status == PaymentStatus.COMPLETED.value
        assert payment.transaction_id.startswith("CASH_")
        assert payment.processed_at is not None

    def test_card_waits_for_the_processor(self):
        payment = _initiate("credit_card")
        assert payment.status == PaymentStatus.PROCESSING.value
        assert payment.transaction_id.startswith("CC_")
        assert payment.processed_at is None

    @pytest.mark.parametrize("method, prefix", [("momo", "MOMO_"), ("bank_transfer", "BANK_TRANSFER_")])
    def test_other_methods_stay_pending(self, method, prefix):
        payment = _initiate(method)
        assert payment.status == PaymentStatus.PENDING.value
        assert payment.transaction_id.startswith(prefix)

    def test_payment_number_format(self):
        assert re.fullmatch(r"PAY\d{13}[0-9A-F]{5}", _initiate().payment_number)

    def test_payment_numbers_differ(self):
        assert _initiate().payment_number != _initiate().payment_number

    def test_currency_is_vnd(self):
        assert _initiate().currency == "VND"

    def test_card_number_is_masked(self):
        payment = _initiate("credit_card")
        assert payment.details.card_number == "************1234"
        assert payment.details.card_holder_name == "NGUYEN VAN AN"

    def test_card_needs_holder_name(self):
        with pytest.raises(ValidationError) as exc:
            _initiate("credit_card", details={"card_number": "4111111111111234"})
        assert "paymentDetails" in exc.value.messages

    def test_unknown_method(self):
        with pytest.raises(ValidationError) as exc:
            _initiate("cheque")
        assert "paymentMethod" in exc.value.messages

    def test_negative_amount(self):
        with pytest.raises(ValidationError):
            _initiate(amount=-1)

    def test_initiated_event(self):
        event = _initiate("momo")._events[0]
        assert isinstance(event, PaymentInitiated)
        assert event.order_number == "DH1"
        assert event.status == "pending"

    @pytest.mark.parametrize("number, masked", [("1234", "1234"), ("", ""), (None, None), ("98765", "*8765")])
    def test_mask_card_number(self, number, masked):
        assert mask_card_number(number) == masked


class TestStatus:
    def test_card_completes(self):
        payment = _initiate("credit_card")
        assert payment.change_status("completed", transaction_id="STRIPE-1") is True
        assert payment.status == "completed"
        assert payment.transaction_id == "STRIPE-1"
        assert payment.processed_at is not None

        event = payment._events[-1]
        assert isinstance(event, PaymentStatusChanged)
        assert event.previous_status == "processing"

    def test_failure_records_reason(self):
        payment = _initiate("momo")
        payment.change_status("failed", failure_reason="Wallet declined")
        assert payment.failure_reason == "Wallet declined"
        assert payment.processed_at is not None
        assert payment.is_closed

    def test_same_status_only_updates_fields(self):
        payment = _initiate("momo")
        assert payment.change_status("pending", transaction_id="MOMO-42") is False
        assert payment.transaction_id == "MOMO-42"

    def test_completed_payment_cannot_fail(self):
        with pytest.raises(ValidationError):
            _initiate("cash").change_status("failed")

    def test_refunded_only_through_refund(self):
        with pytest.raises(ValidationError):
            _initiate("cash").change_status("refunded")

    def test_unknown_status(self):
        with pytest.raises(ValidationError):
            _initiate("momo").change_status("lost")


class TestRefund:
    def test_full_refund_by_default(self):
        payment = _initiate("cash")
        assert payment.refund() == 80000
        assert payment.status == "refunded"
        assert payment.refund_amount == 80000
        assert payment.refunded_at is not None

        event = payment._events[-1]
        assert isinstance(event, PaymentRefunded)
        assert event.fully_refunded is True

    def test_partial_refunds_accumulate(self):
        payment = _initiate("cash")
        payment.refund(30000, reason="Món bị thiếu")
        assert payment.status == "completed"
        assert payment.refund_amount == 30000
        assert payment.refund_reason == "Món bị thiếu"

        assert payment.refund() == 50000
        assert payment.status == "refunded"

    def test_refund_above_balance(self):
        payment = _initiate("cash")
        payment.refund(70000)
        with pytest.raises(ValidationError) as exc:
            payment.refund(20000)
        assert exc.value.messages["amount"] == ["Refund amount exceeds available balance"]

    def test_only_completed_payments(self):
        with pytest.raises(ValidationError) as exc:
            _initiate("momo").refund()
        assert exc.value.messages["status"] == ["Can only refund completed payments"]


class TestSerialization:
    def test_card_number_never_leaves(self):
        data = _initiate("credit_card").to_dict()
        assert data["paymentMethod"] == "credit_card"
        assert data["paymentDetails"] == {
            "cardHolderName": "NGUYEN VAN AN",
            "bankName": None,
            "phoneNumber": None,
        }
        assert "cardNumber" not in data["paymentDetails"]

    def test_wire_names(self):
        payment = _initiate()
        data = payment.to_dict()
        assert data["paymentId"] == payment.payment_number
        assert data["orderId"] == "DH1"
        assert data["refundAmount"] == 0
