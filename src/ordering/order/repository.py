"""Repository for the Order aggregate."""

from datetime import UTC, date, datetime, time

from protean.utils.query import Q

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.repository(part_of=Order)
class OrderRepository:
    """Order lookups by display number, customer and admin filters."""

    def by_number(self, order_number: str) -> Order | None:
        return self._dao.query.filter(order_number=order_number).all().first

    def by_reference(self, reference: str) -> Order | None:
        """Find an order by display number (``DH12``) or by identity."""
        order = self.by_number(reference)
        if order is None:
            order = self._dao.query.filter(id=reference).all().first
        return order

    def count(self) -> int:
        return self._dao.query.all().total

    def number_taken(self, order_number: str) -> bool:
        return self.by_number(order_number) is not None

    def next_order_number(self) -> str:
        """``DH<n>`` starting at ``count + 1`` and probing upward while taken.

        Gaps below the count are never filled.
        """
        n = self.count() + 1
        while self.number_taken(f"DH{n}"):
            n += 1
        return f"DH{n}"

    def for_customer(self, phone: str, page: int = 1, limit: int = 10):
        """Return ``(orders, total)`` for one page of a customer's orders, newest first."""
        result = (
            self._dao.query.filter(customer_phone=phone)
            .order_by("-created_at")
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return result.items, result.total

    def search(
        self,
        status: int | None = None,
        text: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        page: int = 1,
        limit: int = 10,
    ):
        """Return ``(orders, total)`` for the admin order list, newest first."""
        query = self._dao.query
        if status is not None:
            query = query.filter(status=status)
        if text:
            query = query.filter(
                Q(order_number__icontains=text) | Q(recipient_name__icontains=text) | Q(customer_phone__icontains=text)
            )
        if start_date:
            query = query.filter(created_at__gte=_start_of(start_date))
        if end_date:
            query = query.filter(created_at__lte=_end_of(end_date))

        result = query.order_by("-created_at").offset((page - 1) * limit).limit(limit).all()
        return result.items, result.total


def _start_of(day: date) -> datetime:
    if isinstance(day, datetime):
        return day
    return datetime.combine(day, time.min, tzinfo=UTC)


def _end_of(day: date) -> datetime:
    if isinstance(day, datetime):
        return day
    return datetime.combine(day, time.max, tzinfo=UTC)
