"""User aggregate: a customer or administrator account, keyed by phone number."""

import re
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String, Text

from identity.domain import identity
from identity.user.events import ProfileUpdated, UserBlocked, UserRegistered, UserUnblocked
from identity.user.passwords import hash_password, verify_password

PHONE_PATTERN = re.compile(r"^\d{10}$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class AccountType(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


@identity.aggregate
class User:
    """A person who can sign in to the storefront.

    The phone number doubles as the login name and is what orders are filed
    under. Blocked accounts (``is_active`` false) cannot sign in.
    """

    phone: String(required=True, max_length=10, unique=True)
    password_hash: String(required=True, max_length=255)
    full_name: String(required=True, max_length=100)
    email: String(max_length=254, default="")
    address: Text(default="")
    account_type: String(choices=AccountType, default=AccountType.CUSTOMER.value)
    is_active: Boolean(default=True)
    registered_at: DateTime()

    @invariant.post
    def phone_must_have_ten_digits(self):
        if not PHONE_PATTERN.match(self.phone or ""):
            raise ValidationError({"phone": ["Phone number must be exactly 10 digits"]})

    @invariant.post
    def full_name_must_have_at_least_three_characters(self):
        if len((self.full_name or "").strip()) < 3:
            raise ValidationError({"full_name": ["Full name must be at least 3 characters long"]})

    @invariant.post
    def email_must_be_well_formed(self):
        if self.email and not EMAIL_PATTERN.match(self.email):
            raise ValidationError({"email": ["Invalid email address"]})

    @classmethod
    def register(cls, phone, password, full_name, email=None, address=None, account_type=None):
        if not password or len(password) < 6:
            raise ValidationError({"password": ["Password must be at least 6 characters long"]})

        now = datetime.now(UTC)
        user = cls(
            phone=phone,
            password_hash=hash_password(password),
            full_name=full_name,
            email=email or "",
            address=address or "",
            account_type=account_type or AccountType.CUSTOMER.value,
            registered_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                phone=phone,
                full_name=full_name,
                account_type=user.account_type,
                registered_at=now,
            )
        )
        return user

    @property
    def is_admin(self) -> bool:
        return self.account_type == AccountType.ADMIN.value

    def check_password(self, password: str) -> bool:
        return verify_password(password, self.password_hash)

    def update_profile(self, full_name=None, email=None, address=None):
        if full_name is not None:
            self.full_name = full_name
        if email is not None:
            self.email = email
        if address is not None:
            self.address = address

        self.raise_(
            ProfileUpdated(
                user_id=self.id,
                full_name=self.full_name,
                email=self.email,
                address=self.address,
            )
        )

    def block(self):
        if not self.is_active:
            return
        self.is_active = False
        self.raise_(UserBlocked(user_id=self.id))

    def unblock(self):
        if self.is_active:
            return
        self.is_active = True
        self.raise_(UserUnblocked(user_id=self.id))

    def to_dict(self):
        return {
            "id": str(self.id),
            "fullname": self.full_name,
            "phone": self.phone,
            "email": self.email,
            "address": self.address,
            "userType": self.account_type,
            "status": 1 if self.is_active else 0,
            "createdAt": self.registered_at.isoformat() if self.registered_at else None,
        }
