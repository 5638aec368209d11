"""Repository for the Payment aggregate."""

from payments.domain import payments
from payments.payment.payment import CLOSED_STATUSES, Payment


@payments.repository(part_of=Payment)
class PaymentRepository:
    """Payment lookups by display number, order and owner."""

    def by_number(self, payment_number: str, user_id: str | None = None) -> Payment | None:
        """Find a payment by ``PAY...`` number, optionally only among one user's payments."""
        query = self._dao.query.filter(payment_number=payment_number)
        if user_id is not None:
            query = query.filter(user_id=user_id)
        return query.all().first

    def active_for_order(self, order_number: str) -> Payment | None:
        """The order's payment that still holds it (anything not failed or cancelled)."""
        for payment in self._dao.query.filter(order_number=order_number).all().items:
            if payment.status not in CLOSED_STATUSES:
                return payment
        return None

    def for_order(self, order_number: str, user_id: str) -> list[Payment]:
        """A user's payments for one order, newest first."""
        return (
            self._dao.query.filter(order_number=order_number, user_id=user_id).order_by("-created_at").all().items
        )

    def for_user(self, user_id: str, status: str | None = None, page: int = 1, limit: int = 10):
        """Return ``(payments, total)`` for one page of a user's payment history, newest first."""
        query = self._dao.query.filter(user_id=user_id)
        if status:
            query = query.filter(status=status)
        result = query.order_by("-created_at").offset((page - 1) * limit).limit(limit).all()
        return result.items, result.total
