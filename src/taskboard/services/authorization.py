"""Authorization guard — who may act on which team.

Three predicates, each a read-only lookup against the current rows:

- can_act_on_team: caller has a Membership in the team. Gates every task
  operation and the member listing.
- is_team_owner: caller is the team's creator. Gates add-member and
  delete-team.
- can_assign: the candidate assignee is a member of the team. Checked
  whenever a task is created or updated with an assignee.

Nothing is cached. Each request re-reads the membership and team rows, so
a revoked right takes effect on the very next call.

The require_* variants raise the matching domain error and are what the
services call.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.db.models import Membership, Team
from taskboard.errors import PermissionDeniedError, ValidationError


class AuthorizationGuard:
    """Membership and ownership checks for teams and their tasks."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Predicates ─────────────────────────────────────

    async def can_act_on_team(self, caller_id: int, team_id: int) -> bool:
        return await self._is_member(team_id, caller_id)

    async def is_team_owner(self, caller_id: int, team_id: int) -> bool:
        result = await self.db.execute(
            select(Team.created_by).where(Team.id == team_id)
        )
        owner_id = result.scalar_one_or_none()
        return owner_id is not None and owner_id == caller_id

    async def can_assign(self, team_id: int, candidate_user_id: int) -> bool:
        return await self._is_member(team_id, candidate_user_id)

    # ─── Raising variants ───────────────────────────────

    async def require_member(self, caller_id: int, team_id: int) -> None:
        if not await self.can_act_on_team(caller_id, team_id):
            raise PermissionDeniedError("You are not a member of this team")

    async def require_owner(self, caller_id: int, team_id: int, action: str) -> None:
        if not await self.is_team_owner(caller_id, team_id):
            raise PermissionDeniedError(f"Only team creator can {action}")

    async def require_assignable(self, team_id: int, candidate_user_id: int) -> None:
        if not await self.can_assign(team_id, candidate_user_id):
            raise ValidationError("Assigned user must be a member of the team")

    async def _is_member(self, team_id: int, user_id: int) -> bool:
        result = await self.db.execute(
            select(Membership.id)
            .where(Membership.team_id == team_id, Membership.user_id == user_id)
            .limit(1)
        )
        return result.first() is not None
