"""Domain events for the Payment aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from payments.domain import payments


@payments.event(part_of="Payment")
class PaymentInitiated:
    __version__ = 1

    payment_id = Identifier(required=True)
    payment_number = String(required=True)
    order_number = String(required=True)
    user_id = String(required=True)
    amount = Integer(required=True)
    currency = String(required=True)
    method = String(required=True)
    status = String(required=True)
    initiated_at = DateTime(required=True)


@payments.event(part_of="Payment")
class PaymentStatusChanged:
    """Raised on every status move except refunds."""

    __version__ = 1

    payment_id = Identifier(required=True)
    payment_number = String(required=True)
    order_number = String(required=True)
    previous_status = String(required=True)
    status = String(required=True)
    transaction_id = String()
    failure_reason = Text()
    changed_at = DateTime(required=True)


@payments.event(part_of="Payment")
class PaymentRefunded:
    """``refund_amount`` is the running total; ``fully_refunded`` means nothing is left."""

    __version__ = 1

    payment_id = Identifier(required=True)
    payment_number = String(required=True)
    order_number = String(required=True)
    amount = Integer(required=True)
    refund_amount = Integer(required=True)
    fully_refunded = Boolean(default=False)
    reason = Text()
    refunded_at = DateTime(required=True)
