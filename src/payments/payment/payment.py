"""Payment aggregate: one attempt to pay for an order.

State machine:
    PENDING → PROCESSING → COMPLETED → REFUNDED
    PENDING/PROCESSING → FAILED or CANCELLED

The starting state depends on the method: cash settles immediately, a card
waits for the processor and every other method waits for a status update.
REFUNDED is reached only through ``refund``, once the whole amount has been
paid back; partial refunds leave the payment COMPLETED.
"""

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Integer, String, Text, ValueObject

from payments.domain import payments
from payments.payment.events import PaymentInitiated, PaymentRefunded, PaymentStatusChanged

CURRENCY = "VND"


class PaymentMethod(Enum):
    CASH = "cash"
    CREDIT_CARD = "credit_card"
    BANK_TRANSFER = "bank_transfer"
    MOMO = "momo"
    ZALOPAY = "zalopay"


class PaymentStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


_VALID_TRANSITIONS = {
    PaymentStatus.PENDING: {
        PaymentStatus.PROCESSING,
        PaymentStatus.COMPLETED,
        PaymentStatus.FAILED,
        PaymentStatus.CANCELLED,
    },
    PaymentStatus.PROCESSING: {PaymentStatus.COMPLETED, PaymentStatus.FAILED, PaymentStatus.CANCELLED},
    PaymentStatus.COMPLETED: set(),  # refunds go through refund()
    PaymentStatus.FAILED: set(),
    PaymentStatus.CANCELLED: set(),
    PaymentStatus.REFUNDED: set(),
}

# Payments in these states no longer hold the order
CLOSED_STATUSES = {PaymentStatus.FAILED.value, PaymentStatus.CANCELLED.value}

_TRANSACTION_PREFIX = {PaymentMethod.CASH: "CASH", PaymentMethod.CREDIT_CARD: "CC"}


def _millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def new_payment_number(moment: datetime) -> str:
    """``PAY`` + epoch milliseconds + five random upper-case characters."""
    return f"PAY{_millis(moment)}{uuid4().hex[:5].upper()}"


def mask_card_number(card_number: str | None) -> str | None:
    if not card_number:
        return card_number
    digits = card_number.replace(" ", "")
    if len(digits) <= 4:
        return digits
    return "*" * (len(digits) - 4) + digits[-4:]


@payments.value_object(part_of="Payment")
class PaymentDetails:
    """What the customer told us about the instrument; the card number is stored masked."""

    card_number = String(max_length=30)
    card_holder_name = String(max_length=255)
    bank_name = String(max_length=255)
    phone_number = String(max_length=20)

    def to_dict(self):
        return {
            "cardHolderName": self.card_holder_name,
            "bankName": self.bank_name,
            "phoneNumber": self.phone_number,
        }


def _details(values: dict) -> PaymentDetails | None:
    if not any(values.values()):
        return None
    return PaymentDetails(
        card_number=mask_card_number(values.get("card_number")),
        card_holder_name=values.get("card_holder_name"),
        bank_name=values.get("bank_name"),
        phone_number=values.get("phone_number"),
    )


@payments.aggregate
class Payment:
    payment_number = String(required=True, max_length=30, unique=True)
    order_number = String(required=True, max_length=50)
    user_id = String(required=True, max_length=255)
    amount = Integer(required=True, min_value=0)
    currency = String(max_length=3, default=CURRENCY)
    method = String(required=True, choices=PaymentMethod)
    status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    transaction_id = String(max_length=255)
    details = ValueObject(PaymentDetails)
    reference_code = String(max_length=255)
    ip_address = String(max_length=64)
    user_agent = Text()
    failure_reason = Text()
    processed_at = DateTime()
    refunded_at = DateTime()
    refund_amount = Integer(default=0, min_value=0)
    refund_reason = Text()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def refunds_cannot_exceed_the_amount(self):
        if (self.refund_amount or 0) > self.amount:
            raise ValidationError({"refundAmount": ["Refund amount exceeds available balance"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def initiate(
        cls,
        order_number: str,
        user_id: str,
        amount: int,
        method: str,
        details: dict | None = None,
        reference_code: str | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ):
        """Record a payment and move it to the state its method starts in.

        Args:
            details: card_number, card_holder_name, bank_name, phone_number;
                all optional except the card fields for credit cards.
        """
        try:
            payment_method = PaymentMethod(method)
        except ValueError as exc:
            raise ValidationError({"paymentMethod": [f"Unknown payment method: {method}"]}) from exc

        details = details or {}
        if payment_method is PaymentMethod.CREDIT_CARD and not (
            details.get("card_number") and details.get("card_holder_name")
        ):
            raise ValidationError({"paymentDetails": ["Card number and card holder name are required"]})

        now = datetime.now(UTC)
        if payment_method is PaymentMethod.CASH:
            status = PaymentStatus.COMPLETED
        elif payment_method is PaymentMethod.CREDIT_CARD:
            status = PaymentStatus.PROCESSING
        else:
            status = PaymentStatus.PENDING
        prefix = _TRANSACTION_PREFIX.get(payment_method, payment_method.value.upper())

        payment = cls(
            payment_number=new_payment_number(now),
            order_number=order_number,
            user_id=user_id,
            amount=amount,
            currency=CURRENCY,
            method=payment_method.value,
            status=status.value,
            transaction_id=f"{prefix}_{_millis(now)}",
            details=_details(details),
            reference_code=reference_code,
            ip_address=ip_address,
            user_agent=user_agent,
            processed_at=now if status is PaymentStatus.COMPLETED else None,
            refund_amount=0,
            created_at=now,
            updated_at=now,
        )
        payment.raise_(
            PaymentInitiated(
                payment_id=str(payment.id),
                payment_number=payment.payment_number,
                order_number=order_number,
                user_id=user_id,
                amount=amount,
                currency=CURRENCY,
                method=payment_method.value,
                status=status.value,
                initiated_at=now,
            )
        )
        return payment

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    @property
    def is_closed(self) -> bool:
        return self.status in CLOSED_STATUSES

    @property
    def refundable_amount(self) -> int:
        return self.amount - (self.refund_amount or 0)

    def _assert_can_transition(self, target: PaymentStatus) -> None:
        current = PaymentStatus(self.status)
        if target not in _VALID_TRANSITIONS[current]:
            raise ValidationError({"status": [f"Cannot change payment from {current.value} to {target.value}"]})

    def change_status(self, status=None, transaction_id=None, failure_reason=None) -> bool:
        """Move to ``status`` and/or record the processor's transaction id and failure reason.

        Returns True when the status itself changed.
        """
        target = None
        if status is not None:
            try:
                target = PaymentStatus(status)
            except ValueError as exc:
                raise ValidationError({"status": [f"Unknown payment status: {status}"]}) from exc
            if target.value == self.status:
                target = None
            else:
                self._assert_can_transition(target)

        now = datetime.now(UTC)
        previous = self.status
        if transaction_id:
            self.transaction_id = transaction_id
        if failure_reason:
            self.failure_reason = failure_reason
        self.updated_at = now
        if target is None:
            return False

        self.status = target.value
        if target in (PaymentStatus.COMPLETED, PaymentStatus.FAILED):
            self.processed_at = now
        self.raise_(
            PaymentStatusChanged(
                payment_id=str(self.id),
                payment_number=self.payment_number,
                order_number=self.order_number,
                previous_status=previous,
                status=target.value,
                transaction_id=self.transaction_id,
                failure_reason=self.failure_reason,
                changed_at=now,
            )
        )
        return True

    def refund(self, amount: int | None = None, reason: str | None = None) -> int:
        """Pay back ``amount`` (the whole remaining balance when omitted); returns the amount refunded."""
        if self.status != PaymentStatus.COMPLETED.value:
            raise ValidationError({"status": ["Can only refund completed payments"]})
        if amount is None:
            amount = self.refundable_amount
        if amount <= 0:
            raise ValidationError({"amount": ["Refund amount must be positive"]})
        if amount > self.refundable_amount:
            raise ValidationError({"amount": ["Refund amount exceeds available balance"]})

        now = datetime.now(UTC)
        self.refund_amount = (self.refund_amount or 0) + amount
        self.refunded_at = now
        self.updated_at = now
        fully_refunded = self.refund_amount >= self.amount
        if fully_refunded:
            self.status = PaymentStatus.REFUNDED.value
        if reason:
            self.refund_reason = reason

        self.raise_(
            PaymentRefunded(
                payment_id=str(self.id),
                payment_number=self.payment_number,
                order_number=self.order_number,
                amount=amount,
                refund_amount=self.refund_amount,
                fully_refunded=fully_refunded,
                reason=reason,
                refunded_at=now,
            )
        )
        return amount

    def to_dict(self):
        """Wire form; the masked card number is never returned."""
        return {
            "paymentId": self.payment_number,
            "orderId": self.order_number,
            "userId": self.user_id,
            "amount": self.amount,
            "currency": self.currency,
            "paymentMethod": self.method,
            "status": self.status,
            "transactionId": self.transaction_id,
            "paymentDetails": self.details.to_dict() if self.details else {},
            "referenceCode": self.reference_code,
            "failureReason": self.failure_reason,
            "processedAt": self.processed_at.isoformat() if self.processed_at else None,
            "refundedAt": self.refunded_at.isoformat() if self.refunded_at else None,
            "refundAmount": self.refund_amount or 0,
            "refundReason": self.refund_reason,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
