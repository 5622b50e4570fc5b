"""API route aggregation.

All routers registered here get mounted in main.py.

Auth is applied at the include_router level using FastAPI's
dependencies parameter, so every route in a protected router requires a
valid bearer token. Handlers that need the caller also declare
get_current_user; FastAPI resolves it once per request. Health and auth
routers are open (/auth/logout and /auth/me guard themselves).
"""

from fastapi import APIRouter, Depends

from taskboard.api.auth import router as auth_router
from taskboard.api.health import router as health_router
from taskboard.api.tasks import router as tasks_router
from taskboard.api.teams import router as teams_router
from taskboard.api.users import router as users_router
from taskboard.auth.dependencies import get_current_user

# All protected routers require authentication
_auth = [Depends(get_current_user)]

api_router = APIRouter()

# Open routes — no auth required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])

# Protected routes — require a valid bearer token
api_router.include_router(teams_router, tags=["teams"], dependencies=_auth)
api_router.include_router(tasks_router, tags=["tasks"], dependencies=_auth)
api_router.include_router(users_router, tags=["users"], dependencies=_auth)
