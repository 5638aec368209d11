"""Repository for the User aggregate."""

from protean.utils.query import Q

from identity.domain import identity
from identity.user.user import AccountType, User


@identity.repository(part_of=User)
class UserRepository:
    def by_phone(self, phone: str) -> User | None:
        return self._dao.query.filter(phone=phone).all().first

    def customers(self, is_active: bool | None = None, text: str | None = None, page: int = 1, limit: int = 10):
        """Return ``(users, total)`` for one page of customer accounts, newest first."""
        query = self._dao.query.filter(account_type=AccountType.CUSTOMER.value)
        if is_active is not None:
            query = query.filter(is_active=is_active)
        if text:
            query = query.filter(Q(full_name__icontains=text) | Q(phone__contains=text))

        result = query.order_by("-registered_at").offset((page - 1) * limit).limit(limit).all()
        return result.items, result.total
