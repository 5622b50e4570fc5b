"""Pydantic schemas for registration, login, and users."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

PASSWORD_MIN_LENGTH = 6


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class UserRead(BaseModel):
    id: int
    username: str
    email: str

    model_config = {"from_attributes": True}


class UserSummary(BaseModel):
    """Public view of a user: what other members get to see."""
    id: int
    username: str

    model_config = {"from_attributes": True}


class UserDetail(UserRead):
    created_at: datetime


class AuthResponse(BaseModel):
    """Returned by register and login: the user plus a bearer token."""
    user: UserRead
    token: str
    token_type: str = "bearer"
