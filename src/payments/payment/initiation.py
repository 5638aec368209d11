"""Payment initiation: command and handler.

The order is checked through the orders adapter before anything is stored:
it must exist, belong to the caller, still be pending and cost exactly the
amount offered, and no earlier payment may still hold it.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Integer, String, Text
from protean.utils.globals import current_domain

from payments.domain import logger, payments
from payments.orders import OrderLookupError, get_orders
from payments.payment.payment import Payment


@payments.command(part_of="Payment")
class InitiatePayment:
    order_number = String(required=True, max_length=50)
    user_id = String(required=True, max_length=255)
    user_phone = String(max_length=20)
    amount = Integer(required=True, min_value=0)
    method = String(required=True, max_length=20)
    card_number = String(max_length=30)
    card_holder_name = String(max_length=255)
    bank_name = String(max_length=255)
    phone_number = String(max_length=20)
    reference_code = String(max_length=255)
    ip_address = String(max_length=64)
    user_agent = Text()


@payments.command_handler(part_of=Payment)
class InitiatePaymentHandler:
    @handle(InitiatePayment)
    def initiate_payment(self, command):
        try:
            order = get_orders().find(command.order_number)
        except OrderLookupError as exc:
            logger.warning("Order lookup failed", order_number=command.order_number, error=str(exc))
            raise ValidationError({"orderId": ["Invalid order ID or order not found"]}) from exc
        if command.user_phone and order.customer_phone != command.user_phone:
            raise ValidationError({"orderId": ["Invalid order ID or order not found"]})
        if not order.is_pending:
            raise ValidationError({"orderId": ["Order is not in pending status"]})
        if command.amount != order.total_amount:
            raise ValidationError({"amount": ["Payment amount does not match order total"]})

        repo = current_domain.repository_for(Payment)
        if repo.active_for_order(order.order_number) is not None:
            raise ValidationError({"orderId": ["Payment already exists for this order"]})

        payment = Payment.initiate(
            order_number=order.order_number,
            user_id=command.user_id,
            amount=command.amount,
            method=command.method,
            details={
                "card_number": command.card_number,
                "card_holder_name": command.card_holder_name,
                "bank_name": command.bank_name,
                "phone_number": command.phone_number,
            },
            reference_code=command.reference_code,
            ip_address=command.ip_address,
            user_agent=command.user_agent,
        )
        repo.add(payment)
        logger.info(
            "Payment recorded",
            payment_number=payment.payment_number,
            order_number=payment.order_number,
            method=payment.method,
            status=payment.status,
        )
        return payment
