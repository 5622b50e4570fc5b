"""Auth API — registration, login, logout.

- POST /auth/register → create a user, returns {user, token}
- POST /auth/login → email/password → {user, token}
- POST /auth/logout → acknowledges; tokens are stateless, the client drops it
- GET /auth/me → current user info
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.auth.dependencies import CurrentIdentity, get_current_user
from taskboard.db.engine import get_db
from taskboard.errors import NotFoundError
from taskboard.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserDetail,
)
from taskboard.services.auth_service import AuthService

router = APIRouter(prefix="/auth")


def _svc(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(body: RegisterRequest, svc: AuthService = Depends(_svc)):
    """Create a new user account and log them in."""
    user, token = await svc.register(
        username=body.username,
        email=body.email,
        password=body.password,
    )
    return {"user": user, "token": token}


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, svc: AuthService = Depends(_svc)):
    """Login with email and password → bearer token."""
    user, token = await svc.login(email=body.email, password=body.password)
    return {"user": user, "token": token}


@router.post("/logout")
async def logout(identity: CurrentIdentity = Depends(get_current_user)):
    """Nothing to revoke server-side: the token simply expires."""
    return {"success": True}


@router.get("/me", response_model=UserDetail)
async def get_me(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: AuthService = Depends(_svc),
):
    """Get the current authenticated user's info."""
    user = await svc.get_user(identity.user_id)
    if not user:
        raise NotFoundError("User not found")
    return user
