"""Pydantic schemas for teams and memberships."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from taskboard.db.models import MAX_ID


class TeamCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class TeamRead(BaseModel):
    id: int
    name: str
    created_by: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MemberAdd(BaseModel):
    """Body of POST /teams/{teamId}/members. Clients send `userId`."""
    user_id: int = Field(..., alias="userId", ge=1, le=MAX_ID)

    model_config = {"populate_by_name": True}


class MemberRead(BaseModel):
    id: int
    username: str

    model_config = {"from_attributes": True}
