"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from identity.domain import identity


@identity.event(part_of="User")
class UserRegistered:
    """A new account was created."""

    __version__ = 1

    user_id: Identifier(required=True)
    phone: String(required=True)
    full_name: String(required=True)
    account_type: String(required=True)
    registered_at: DateTime(required=True)


@identity.event(part_of="User")
class ProfileUpdated:
    __version__ = 1

    user_id: Identifier(required=True)
    full_name: String(required=True)
    email: String()
    address: String()


@identity.event(part_of="User")
class UserBlocked:
    __version__ = 1

    user_id: Identifier(required=True)


@identity.event(part_of="User")
class UserUnblocked:
    __version__ = 1

    user_id: Identifier(required=True)
