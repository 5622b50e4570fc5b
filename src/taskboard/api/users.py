"""User directory API — GET /users lists everyone as {id, username}."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.db.engine import get_db
from taskboard.schemas.auth import UserSummary
from taskboard.services.user_service import UserService

router = APIRouter(prefix="/users")


@router.get("", response_model=list[UserSummary])
async def list_users(db: AsyncSession = Depends(get_db)):
    """All users, for picking whom to add to a team."""
    users = await UserService(db).list_users()
    return [{"id": user_id, "username": username} for user_id, username in users]
