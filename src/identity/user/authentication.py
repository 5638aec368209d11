"""Credential checks and token issuance."""

from protean.utils.globals import current_domain

from identity.user.user import User
from shared.errors import AuthenticationError, AuthorizationError
from shared.logging import get_logger
from shared.tokens import issue_token

logger = get_logger(__name__)


def token_for(user: User) -> str:
    return issue_token(user_id=str(user.id), phone=user.phone, user_type=user.account_type)


def authenticate(phone: str, password: str) -> tuple[User, str]:
    """Verify a phone/password pair and return the user with a fresh token.

    Raises:
        AuthenticationError: unknown phone or wrong password.
        AuthorizationError: the account is blocked.
    """
    user = current_domain.repository_for(User).by_phone(phone)
    if user is None:
        logger.info("Login rejected", reason="unknown_phone")
        raise AuthenticationError("Invalid credentials")

    if not user.is_active:
        logger.info("Login rejected", reason="blocked", user_id=str(user.id))
        raise AuthorizationError("Account is blocked", user_id=str(user.id))

    if not user.check_password(password):
        logger.info("Login rejected", reason="bad_password", user_id=str(user.id))
        raise AuthenticationError("Invalid credentials")

    logger.info("User logged in", user_id=str(user.id))
    return user, token_for(user)
