"""Auth service — registration and credential checks.

Login failures never reveal whether the email exists: an unknown email
and a wrong password raise the same AuthError with the same message.
"""

import structlog
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.auth.jwt import create_access_token
from taskboard.auth.password import dummy_hash, hash_password, verify_password
from taskboard.db.models import User
from taskboard.errors import AuthError, ConflictError, ValidationError
from taskboard.schemas.auth import PASSWORD_MIN_LENGTH

logger = structlog.get_logger()

INVALID_CREDENTIALS = "Invalid email or password"
DUPLICATE_USER = "Email or username already exists"


class AuthService:
    """Register users and exchange credentials for bearer tokens."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def register(self, username: str, email: str, password: str) -> tuple[User, str]:
        """Create a user and issue their first token."""
        if len(password) < PASSWORD_MIN_LENGTH:
            raise ValidationError(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
            )

        result = await self.db.execute(
            select(User.id).where(or_(User.email == email, User.username == username))
        )
        if result.first():
            raise ConflictError(DUPLICATE_USER)

        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration
            await self.db.rollback()
            raise ConflictError(DUPLICATE_USER)

        logger.info("user.registered", user_id=user.id)
        return user, create_access_token(user.id, user.email)

    async def login(self, email: str, password: str) -> tuple[User, str]:
        result = await self.db.execute(select(User).where(User.email == email))
        user = result.scalars().first()

        # An unknown email costs one bcrypt check, same as a wrong password
        password_hash = user.password_hash if user else dummy_hash()
        if not verify_password(password, password_hash) or not user:
            logger.info("user.login_failed")
            raise AuthError(INVALID_CREDENTIALS)

        logger.info("user.logged_in", user_id=user.id)
        return user, create_access_token(user.id, user.email)

    async def get_user(self, user_id: int) -> User | None:
        return await self.db.get(User, user_id)
