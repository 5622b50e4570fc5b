"""Task service — team-scoped task CRUD.

Every operation is gated by team membership (AuthorizationGuard):

- create/update/delete require the caller to be a member of the task's team
- listing only ever returns tasks of teams the caller belongs to
- an assignee must be a member of the task's team at assignment time; a
  later membership change does not touch existing assignments

Status is a free three-value field ("To Do", "In Progress", "Done"): any
member may move a task to any value.
"""

from datetime import datetime
from typing import Any, Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.db.models import STATUS_TODO, Membership, Task
from taskboard.errors import NotFoundError
from taskboard.services.authorization import AuthorizationGuard

logger = structlog.get_logger()

UPDATABLE_FIELDS = ("title", "description", "assigned_to_id", "due_date", "status")


class TaskService:
    """Business logic for task management."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.guard = AuthorizationGuard(db)

    # ─── Create ──────────────────────────────────────────

    async def create_task(
        self,
        creator_id: int,
        team_id: int,
        title: str,
        description: Optional[str] = None,
        assigned_to_id: Optional[int] = None,
        due_date: Optional[datetime] = None,
        status: str = STATUS_TODO,
    ) -> Task:
        """Create a task in a team the creator belongs to.

        When an assignee is given they must be a team member, and the
        creator is recorded as the assigner.
        """
        await self.guard.require_member(creator_id, team_id)
        if assigned_to_id is not None:
            await self.guard.require_assignable(team_id, assigned_to_id)

        task = Task(
            title=title,
            description=description,
            team_id=team_id,
            assigned_to_id=assigned_to_id,
            assigned_by_id=creator_id if assigned_to_id is not None else None,
            created_by=creator_id,
            due_date=due_date,
            status=status or STATUS_TODO,
        )
        self.db.add(task)
        await self.db.commit()

        logger.info(
            "task.created",
            task_id=task.id,
            team_id=team_id,
            created_by=creator_id,
            assigned_to_id=assigned_to_id,
        )
        return task

    # ─── Read ────────────────────────────────────────────

    async def get_task(self, task_id: int) -> Optional[Task]:
        return await self.db.get(Task, task_id)

    async def list_tasks(
        self,
        caller_id: int,
        team_id: Optional[int] = None,
        assigned_to_id: Optional[int] = None,
    ) -> list[Task]:
        """List tasks visible to the caller, optionally narrowed.

        Visibility comes from the membership join, so filters can only
        narrow the result, never widen it. Asking for a specific team the
        caller is not in is refused outright rather than answered with an
        empty list.
        """
        if team_id is not None:
            await self.guard.require_member(caller_id, team_id)

        query = (
            select(Task)
            .join(Membership, Membership.team_id == Task.team_id)
            .where(Membership.user_id == caller_id)
            .order_by(Task.id)
        )
        if team_id is not None:
            query = query.where(Task.team_id == team_id)
        if assigned_to_id is not None:
            query = query.where(Task.assigned_to_id == assigned_to_id)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    # ─── Update ──────────────────────────────────────────

    async def update_task(
        self,
        task_id: int,
        requester_id: int,
        changes: dict[str, Any],
    ) -> Task:
        """Apply a partial update. Only keys present in `changes` are written.

        Raises:
            NotFoundError: task does not exist
            PermissionDeniedError: requester is not a member of the task's team
            ValidationError: new assignee is not a member of the task's team
        """
        task = await self.get_task(task_id)
        if not task:
            raise NotFoundError("Task not found")

        await self.guard.require_member(requester_id, task.team_id)

        changes = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
        new_assignee = changes.get("assigned_to_id")
        if new_assignee is not None:
            await self.guard.require_assignable(task.team_id, new_assignee)

        for field, value in changes.items():
            setattr(task, field, value)
        if "assigned_to_id" in changes:
            task.assigned_by_id = requester_id if new_assignee is not None else None

        await self.db.commit()

        if changes:
            logger.info(
                "task.updated",
                task_id=task_id,
                updated_by=requester_id,
                fields=sorted(changes),
            )
        return task

    # ─── Delete ──────────────────────────────────────────

    async def delete_task(self, task_id: int, requester_id: int) -> None:
        task = await self.get_task(task_id)
        if not task:
            raise NotFoundError("Task not found")

        await self.guard.require_member(requester_id, task.team_id)

        await self.db.delete(task)
        await self.db.commit()
        logger.info("task.deleted", task_id=task_id, deleted_by=requester_id)
