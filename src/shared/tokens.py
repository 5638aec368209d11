"""Bearer token encoding and verification (HS256 JWT).

The identity context issues tokens; the gateway and the services verify
them with the same secret.
"""

import os
from datetime import UTC, datetime, timedelta

import jwt

from shared.errors import AuthenticationError, AuthorizationError

TOKEN_TTL = timedelta(hours=24)


def jwt_secret() -> str:
    return os.environ.get("JWT_SECRET", "change-me-in-production")


def jwt_algorithm() -> str:
    return os.environ.get("JWT_ALGORITHM", "HS256")


def issue_token(
    user_id: str,
    phone: str,
    user_type: str,
    secret: str | None = None,
    algorithm: str | None = None,
    ttl: timedelta = TOKEN_TTL,
) -> str:
    """Sign a token carrying ``{id, phone, userType}`` that expires after ``ttl``."""
    now = datetime.now(UTC)
    claims = {
        "id": str(user_id),
        "phone": phone,
        "userType": user_type,
        "iat": now,
        "exp": now + ttl,
    }
    return jwt.encode(claims, secret or jwt_secret(), algorithm=algorithm or jwt_algorithm())


def decode_token(token: str, secret: str | None = None, algorithm: str | None = None) -> dict:
    """Verify ``token`` and return its claims.

    Raises:
        AuthorizationError: the token is malformed, forged or expired.
    """
    try:
        return jwt.decode(token, secret or jwt_secret(), algorithms=[algorithm or jwt_algorithm()])
    except jwt.ExpiredSignatureError as exc:
        raise AuthorizationError("Invalid token", reason="expired") from exc
    except jwt.PyJWTError as exc:
        raise AuthorizationError("Invalid token", reason=type(exc).__name__) from exc


def bearer_token(authorization: str | None) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header value."""
    parts = (authorization or "").split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
        raise AuthenticationError("Access token required")
    return parts[1]
