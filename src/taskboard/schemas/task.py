"""Pydantic schemas for tasks.

- TaskCreate: what you POST to create a task
- TaskUpdate: what you PUT to modify a task (partial; only sent fields apply)
- TaskRead: what the API returns
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from taskboard.db.models import MAX_ID

TaskStatusLiteral = Literal["To Do", "In Progress", "Done"]


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    team_id: int = Field(..., ge=1, le=MAX_ID)
    description: Optional[str] = None
    assigned_to_id: Optional[int] = Field(None, ge=1, le=MAX_ID)
    due_date: Optional[datetime] = None
    status: TaskStatusLiteral = "To Do"

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v


class TaskUpdate(BaseModel):
    """Partial update — only fields present in the request body are applied.

    `assigned_to_id`, `description` and `due_date` may be sent as null to
    clear them. `title` and `status` may be omitted but never nulled.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    assigned_to_id: Optional[int] = Field(None, ge=1, le=MAX_ID)
    due_date: Optional[datetime] = None
    status: Optional[TaskStatusLiteral] = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v

    @model_validator(mode="after")
    def reject_null_required_fields(self):
        for field in ("title", "status"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def changes(self) -> dict:
        """The fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class TaskRead(BaseModel):
    id: int
    title: str
    description: Optional[str]
    team_id: int
    assigned_to_id: Optional[int]
    assigned_by_id: Optional[int]
    created_by: int
    due_date: Optional[datetime]
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
