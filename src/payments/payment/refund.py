"""Payment refunds: command and handler."""

from protean import handle
from protean.fields import Integer, String, Text
from protean.utils.globals import current_domain

from payments.domain import logger, payments
from payments.payment.payment import Payment
from shared.errors import NotFoundError


@payments.command(part_of="Payment")
class RefundPayment:
    """Refund part or all of a completed payment; no amount means whatever is left."""

    payment_number = String(required=True, max_length=30)
    amount = Integer(min_value=1)
    reason = Text()
    requested_by = String(max_length=255)


@payments.command_handler(part_of=Payment)
class RefundHandler:
    @handle(RefundPayment)
    def refund_payment(self, command):
        repo = current_domain.repository_for(Payment)
        payment = repo.by_number(command.payment_number)
        if payment is None:
            raise NotFoundError("Payment not found", payment_number=command.payment_number)
        refunded = payment.refund(amount=command.amount, reason=command.reason)
        repo.add(payment)
        logger.info(
            "Payment refunded",
            payment_number=payment.payment_number,
            amount=refunded,
            refund_amount=payment.refund_amount,
            requested_by=command.requested_by,
        )
        return payment
