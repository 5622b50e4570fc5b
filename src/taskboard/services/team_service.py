"""Team service — creating, listing and deleting teams.

Two operations here touch more than one table and must never leave a
partial state behind:

- create_team writes the team and the creator's membership in one
  transaction, so no team ever exists without a member.
- delete_team removes memberships, then tasks, then the team in one
  transaction, so no reader sees a team with tasks but no members (or
  orphaned tasks pointing at a missing team).
"""

import structlog
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.db.models import Membership, Task, Team
from taskboard.errors import InternalError, NotFoundError
from taskboard.services.authorization import AuthorizationGuard
from taskboard.services.membership_service import create_initial_membership

logger = structlog.get_logger()


class TeamService:
    """Business logic for team management."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.guard = AuthorizationGuard(db)

    async def create_team(self, name: str, owner_id: int) -> Team:
        """Create a team owned by `owner_id`, who becomes its first member."""
        team = Team(name=name, created_by=owner_id)
        try:
            self.db.add(team)
            await self.db.flush()  # need team.id for the membership row
            await create_initial_membership(self.db, team.id, owner_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("team.create_failed", owner_id=owner_id, error=str(e))
            raise InternalError("Failed to create team") from e

        logger.info("team.created", team_id=team.id, owner_id=owner_id)
        return team

    async def list_teams(self, caller_id: int) -> list[Team]:
        """Teams the caller is a member of."""
        result = await self.db.execute(
            select(Team)
            .join(Membership, Membership.team_id == Team.id)
            .where(Membership.user_id == caller_id)
            .order_by(Team.id)
        )
        return list(result.scalars().all())

    async def get_team(self, team_id: int) -> Team | None:
        return await self.db.get(Team, team_id)

    async def delete_team(self, team_id: int, requester_id: int) -> None:
        """Delete a team with all its memberships and tasks. Creator only.

        Raises:
            NotFoundError: team does not exist
            PermissionDeniedError: requester is not the team creator
            InternalError: storage failure; nothing was deleted
        """
        team = await self.get_team(team_id)
        if not team:
            raise NotFoundError("Team not found")

        await self.guard.require_owner(requester_id, team_id, "delete team")

        try:
            memberships = await self.db.execute(
                delete(Membership).where(Membership.team_id == team_id)
            )
            tasks = await self.db.execute(
                delete(Task).where(Task.team_id == team_id)
            )
            await self.db.execute(delete(Team).where(Team.id == team_id))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("team.delete_failed", team_id=team_id, error=str(e))
            raise InternalError("Failed to delete team") from e

        logger.info(
            "team.deleted",
            team_id=team_id,
            deleted_by=requester_id,
            memberships=memberships.rowcount,
            tasks=tasks.rowcount,
        )
