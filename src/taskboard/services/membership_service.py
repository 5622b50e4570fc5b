"""Membership service — the user/team association.

A Membership row is the only thing that makes a user able to see or
touch a team's tasks. Rows are created in two places:

1. With the team itself (the creator becomes the first member), inside
   the team-creation transaction. See create_initial_membership().
2. When the team creator adds another user, via add_member().

There is no leave/remove operation; rows go away only when their team
is deleted.
"""

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.db.models import Membership, Team, User
from taskboard.errors import ConflictError, NotFoundError
from taskboard.services.authorization import AuthorizationGuard

logger = structlog.get_logger()


async def create_initial_membership(
    db: AsyncSession, team_id: int, owner_id: int
) -> Membership:
    """Add the creator's membership to a team that is being created.

    Only flushes. The caller owns the transaction and commits the team and
    this row together.
    """
    membership = Membership(team_id=team_id, user_id=owner_id)
    db.add(membership)
    await db.flush()
    return membership


class MembershipService:
    """Business logic for team membership."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.guard = AuthorizationGuard(db)

    async def add_member(self, team_id: int, user_id: int, requester_id: int) -> Membership:
        """Add a user to a team. Only the team creator may do this.

        Raises:
            NotFoundError: team or user does not exist
            PermissionDeniedError: requester is not the team creator
            ConflictError: user is already a member (also when a concurrent
                request wins the race to the unique constraint)
        """
        team = await self.db.get(Team, team_id)
        if not team:
            raise NotFoundError("Team not found")

        await self.guard.require_owner(requester_id, team_id, "add members")

        user = await self.db.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")

        if await self.guard.can_act_on_team(user_id, team_id):
            raise ConflictError("User is already a member of this team")

        membership = Membership(team_id=team_id, user_id=user_id)
        self.db.add(membership)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("User is already a member of this team")

        logger.info(
            "membership.added",
            team_id=team_id,
            user_id=user_id,
            added_by=requester_id,
        )
        return membership

    async def list_members(self, team_id: int, requester_id: int) -> list[tuple[int, str]]:
        """Members of a team as (user id, username), oldest membership first."""
        await self.guard.require_member(requester_id, team_id)

        result = await self.db.execute(
            select(User.id, User.username)
            .join(Membership, Membership.user_id == User.id)
            .where(Membership.team_id == team_id)
            .order_by(Membership.id)
        )
        return [(row.id, row.username) for row in result]
