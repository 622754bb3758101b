"""API routers."""

from app.routers.auth import router as auth_router
from app.routers.sessions import router as sessions_router
from app.routers.users import router as users_router

__all__ = ["auth_router", "sessions_router", "users_router"]
