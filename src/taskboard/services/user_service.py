"""User directory — lets team creators find people to add."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.db.models import User


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_users(self) -> list[tuple[int, str]]:
        result = await self.db.execute(
            select(User.id, User.username).order_by(User.id)
        )
        return [(row.id, row.username) for row in result]
