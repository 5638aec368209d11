"""Payment status updates: command and handler."""

from protean import handle
from protean.fields import String, Text
from protean.utils.globals import current_domain

from payments.domain import payments
from payments.payment.payment import Payment
from shared.errors import NotFoundError


@payments.command(part_of="Payment")
class UpdatePaymentStatus:
    """Report what the processor said; every field but the number is optional."""

    payment_number = String(required=True, max_length=30)
    status = String(max_length=20)
    transaction_id = String(max_length=255)
    failure_reason = Text()


@payments.command_handler(part_of=Payment)
class UpdatePaymentStatusHandler:
    @handle(UpdatePaymentStatus)
    def update_status(self, command):
        repo = current_domain.repository_for(Payment)
        payment = repo.by_number(command.payment_number)
        if payment is None:
            raise NotFoundError("Payment not found", payment_number=command.payment_number)
        payment.change_status(
            status=command.status,
            transaction_id=command.transaction_id,
            failure_reason=command.failure_reason,
        )
        repo.add(payment)
        return payment
