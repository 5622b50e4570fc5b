"""JWT token creation and verification.

Access tokens are short-lived (60 minutes by default) and carry the
user id as `sub` plus the email for convenience. There is no refresh
token: clients log in again when the token expires.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from taskboard.config import settings


class TokenError(Exception):
    """Raised when token verification fails."""


def create_access_token(
    user_id: int,
    email: Optional[str] = None,
    expires_minutes: Optional[int] = None,
) -> str:
    """Create a signed JWT access token bound to a user id."""
    now = datetime.now(timezone.utc)
    expires = now + timedelta(
        minutes=expires_minutes or settings.access_token_expire_minutes
    )
    payload = {
        "sub": str(user_id),
        "type": "access",
        "exp": expires,
        "iat": now,
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> dict:
    """Verify and decode a JWT access token.

    Returns the payload dict on success.
    Raises TokenError on failure.
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise TokenError("Token has expired")
    except jwt.InvalidTokenError:
        raise TokenError("Invalid token")

    if payload.get("type") != "access" or not str(payload.get("sub", "")).isdigit():
        raise TokenError("Invalid token")
    return payload
