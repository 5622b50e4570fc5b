"""FastAPI auth dependencies.

Used as Depends() in route handlers to resolve the caller's identity
from the bearer token. Verification is stateless apart from one lookup:
a token whose user has since been deleted is rejected.
"""

from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.auth.jwt import TokenError, verify_token
from taskboard.db.engine import get_db
from taskboard.db.models import MAX_ID, User
from taskboard.errors import AuthError

_CHALLENGE = {"WWW-Authenticate": "Bearer"}


class CurrentIdentity:
    """The authenticated user making the request.

    All authorization checks downstream key off `user_id`.
    """

    def __init__(self, user_id: int, email: Optional[str] = None):
        self.user_id = user_id
        self.email = email

    def __repr__(self) -> str:
        return f"CurrentIdentity(user_id={self.user_id})"


async def get_current_user(
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
) -> CurrentIdentity:
    """Resolve the caller from `Authorization: Bearer <token>` (401 otherwise)."""
    scheme, _, token = (authorization or "").partition(" ")
    token = token.strip()
    # Scheme names are case-insensitive (RFC 7235)
    if scheme.lower() != "bearer" or not token:
        raise AuthError("Unauthorized", headers=_CHALLENGE)

    try:
        payload = verify_token(token)
    except TokenError as e:
        raise AuthError(str(e), headers=_CHALLENGE)

    user_id = int(payload["sub"])
    user = await db.get(User, user_id) if user_id <= MAX_ID else None
    if not user:
        raise AuthError("Invalid token", headers=_CHALLENGE)

    return CurrentIdentity(user_id=user.id, email=user.email)
