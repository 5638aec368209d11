"""Tests for the User aggregate."""

import pytest
from identity.user.events import ProfileUpdated, UserBlocked, UserRegistered, UserUnblocked
from identity.user.user import AccountType, User
from protean.exceptions import ValidationError


def _register(**overrides):
    defaults = {
        "phone": "0901234567",
        "password": "secret123",
        "full_name": "Nguyễn Văn An",
        "email": "an@example.com",
        "address": "12 Lê Lợi, Quận 1",
    }
    defaults.update(overrides)
    return User.register(**defaults)


class TestRegistration:
    def test_register_creates_active_customer(self):
        user = _register()
        assert user.phone == "0901234567"
        assert user.account_type == AccountType.CUSTOMER.value
        assert user.is_active is True
        assert user.registered_at is not None

    def test_password_is_hashed(self):
        user = _register()
        assert user.password_hash != "secret123"
        assert user.check_password("secret123")
        assert not user.check_password("wrong-password")

    def test_register_raises_event(self):
        user = _register()
        assert len(user._events) == 1
        event = user._events[0]
        assert isinstance(event, UserRegistered)
        assert event.phone == "0901234567"
        assert event.account_type == "customer"

    def test_register_admin(self):
        user = _register(account_type=AccountType.ADMIN.value)
        assert user.is_admin

    def test_short_password_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _register(password="12345")
        assert "password" in exc.value.messages


class TestInvariants:
    @pytest.mark.parametrize("phone", ["090123456", "09012345678", "09012345ab", ""])
    def test_phone_must_have_ten_digits(self, phone):
        with pytest.raises(ValidationError):
            _register(phone=phone)

    def test_full_name_must_have_three_characters(self):
        with pytest.raises(ValidationError) as exc:
            _register(full_name="An")
        assert "full_name" in exc.value.messages

    def test_malformed_email_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _register(email="not-an-email")
        assert "email" in exc.value.messages

    def test_email_is_optional(self):
        user = _register(email=None)
        assert user.email == ""


class TestProfile:
    def test_update_profile_changes_only_given_fields(self):
        user = _register()
        user.update_profile(address="99 Nguyễn Huệ")
        assert user.address == "99 Nguyễn Huệ"
        assert user.full_name == "Nguyễn Văn An"
        assert isinstance(user._events[-1], ProfileUpdated)


class TestBlocking:
    def test_block_and_unblock(self):
        user = _register()
        user.block()
        assert user.is_active is False
        assert isinstance(user._events[-1], UserBlocked)

        user.unblock()
        assert user.is_active is True
        assert isinstance(user._events[-1], UserUnblocked)

    def test_block_is_idempotent(self):
        user = _register()
        user.block()
        events_before = len(user._events)
        user.block()
        assert len(user._events) == events_before


class TestSerialization:
    def test_to_dict_uses_wire_names(self):
        data = _register().to_dict()
        assert data["fullname"] == "Nguyễn Văn An"
        assert data["userType"] == "customer"
        assert data["status"] == 1
        assert "password_hash" not in data
        assert "password" not in data
