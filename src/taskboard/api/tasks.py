"""Task API routes.

Paths keep the established client contract:
- POST /tasks/create-task
- GET /tasks/get-task?team_id=&assigned_to_id=
- PUT /tasks/{id} (partial: only fields present in the body change)
- DELETE /tasks/{id}
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.auth.dependencies import CurrentIdentity, get_current_user
from taskboard.db.engine import get_db
from taskboard.db.models import MAX_ID
from taskboard.schemas.task import TaskCreate, TaskRead, TaskUpdate
from taskboard.services.task_service import TaskService

router = APIRouter(prefix="/tasks")

TaskId = Annotated[int, Path(ge=1, le=MAX_ID)]


def _task_svc(db: AsyncSession = Depends(get_db)) -> TaskService:
    return TaskService(db)


@router.post("/create-task", response_model=TaskRead, status_code=201)
async def create_task(
    body: TaskCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    """Create a task in one of the caller's teams."""
    return await svc.create_task(
        creator_id=identity.user_id,
        team_id=body.team_id,
        title=body.title,
        description=body.description,
        assigned_to_id=body.assigned_to_id,
        due_date=body.due_date,
        status=body.status,
    )


@router.get("/get-task", response_model=list[TaskRead])
async def list_tasks(
    team_id: Optional[int] = Query(None, ge=1, le=MAX_ID, description="Only tasks of this team"),
    assigned_to_id: Optional[int] = Query(None, ge=1, le=MAX_ID, description="Only tasks assigned to this user"),
    identity: CurrentIdentity = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    """Tasks across the caller's teams, optionally filtered."""
    return await svc.list_tasks(
        caller_id=identity.user_id,
        team_id=team_id,
        assigned_to_id=assigned_to_id,
    )


@router.put("/{task_id}", response_model=TaskRead)
async def update_task(
    task_id: TaskId,
    body: TaskUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    return await svc.update_task(
        task_id=task_id,
        requester_id=identity.user_id,
        changes=body.changes(),
    )


@router.delete("/{task_id}")
async def delete_task(
    task_id: TaskId,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    await svc.delete_task(task_id=task_id, requester_id=identity.user_id)
    return {"message": "Task deleted"}
