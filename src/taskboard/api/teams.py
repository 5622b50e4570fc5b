"""Team and membership API routes.

Routes translate HTTP to service calls. Authorization failures and missing
rows are raised by the services as domain errors and rendered by
api/error_handlers.py.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.auth.dependencies import CurrentIdentity, get_current_user
from taskboard.db.engine import get_db
from taskboard.db.models import MAX_ID
from taskboard.schemas.team import MemberAdd, MemberRead, TeamCreate, TeamRead
from taskboard.services.membership_service import MembershipService
from taskboard.services.team_service import TeamService

router = APIRouter(prefix="/teams")

TeamId = Annotated[int, Path(ge=1, le=MAX_ID)]


def _svc(db: AsyncSession = Depends(get_db)) -> TeamService:
    return TeamService(db)


def _members(db: AsyncSession = Depends(get_db)) -> MembershipService:
    return MembershipService(db)


# ─── Teams ──────────────────────────────────────────────

@router.post("", response_model=TeamRead, status_code=201)
async def create_team(
    body: TeamCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: TeamService = Depends(_svc),
):
    """Create a team. The caller becomes its owner and first member."""
    return await svc.create_team(name=body.name, owner_id=identity.user_id)


@router.get("", response_model=list[TeamRead])
async def list_teams(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: TeamService = Depends(_svc),
):
    """Teams the caller belongs to."""
    return await svc.list_teams(identity.user_id)


@router.delete("/{team_id}")
async def delete_team(
    team_id: TeamId,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: TeamService = Depends(_svc),
):
    """Delete a team, its memberships and its tasks. Creator only."""
    await svc.delete_team(team_id=team_id, requester_id=identity.user_id)
    return {"message": "Team deleted"}


# ─── Members ────────────────────────────────────────────

@router.get("/{team_id}/members", response_model=list[MemberRead])
async def list_members(
    team_id: TeamId,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: MembershipService = Depends(_members),
):
    members = await svc.list_members(team_id=team_id, requester_id=identity.user_id)
    return [{"id": user_id, "username": username} for user_id, username in members]


@router.post("/{team_id}/members")
async def add_member(
    team_id: TeamId,
    body: MemberAdd,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: MembershipService = Depends(_members),
):
    """Add an existing user to the team. Creator only."""
    await svc.add_member(
        team_id=team_id,
        user_id=body.user_id,
        requester_id=identity.user_id,
    )
    return {"message": "Member added"}
