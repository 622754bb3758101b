"""Session Auth - session-based authentication service."""

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.config import get_settings
from app.database import SessionLocal
from app.dependencies import REFRESH_PATH, clear_auth_cookies
from app.errors import AppError
from app.rate_limit import limiter
from app.routers import auth_router, sessions_router, users_router
from app.services.cleanup import PurgeResult, purge_expired_records

# Logging
logger = logging.getLogger("session_auth")
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# Overridden in tests to point the expired-record sweeps at the test database
_session_factory: Callable[[], Session] | None = None


def _sweep_once() -> PurgeResult:
    db = (_session_factory or SessionLocal)()
    try:
        return purge_expired_records(db)
    finally:
        db.close()


async def sweep_expired_records_periodically(interval_seconds: float) -> None:
    """Purge expired rows every ``interval_seconds`` until cancelled."""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            await run_in_threadpool(_sweep_once)
        except SQLAlchemyError:
            logger.exception("Expired record sweep failed")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Report configuration problems, then sweep expired rows now and on an interval."""
    settings = get_settings()
    for warning in settings.validate():
        logger.warning("CONFIG %s", warning)
    _sweep_once()

    sweeper = asyncio.create_task(sweep_expired_records_periodically(settings.SWEEP_INTERVAL_MINUTES * 60))
    try:
        yield
    finally:
        sweeper.cancel()
        with suppress(asyncio.CancelledError):
            await sweeper


app = FastAPI(title="Session Auth", version="0.1.0", lifespan=lifespan)
app.state.limiter = limiter


# --- Security headers middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Cache-Control"] = "no-store"
        return response


# --- Audit logging middleware ---
class AuditLogMiddleware(BaseHTTPMiddleware):
    AUDIT_PATHS = ("/auth/", "/sessions")

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.time()
        response = await call_next(request)
        duration_ms = (time.time() - start) * 1000

        # Log sensitive operations
        path = request.url.path
        method = request.method
        if method in ("POST", "DELETE") and path.startswith(self.AUDIT_PATHS):
            logger.info(
                "AUDIT %s %s -> %d (%.0fms) from %s",
                method,
                path,
                response.status_code,
                duration_ms,
                request.client.host if request.client else "unknown",
            )

        return response


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(AuditLogMiddleware)

# API routers
app.include_router(auth_router)
app.include_router(sessions_router)
app.include_router(users_router)


# --- Application error handler ---
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render business-rule failures. A failed refresh also drops the stale cookies."""
    response = JSONResponse(status_code=exc.status_code, content=exc.to_dict())
    if request.url.path == REFRESH_PATH:
        clear_auth_cookies(response)
    return response


# --- Rate limit error handler ---
@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit exceeded."""
    return JSONResponse(
        status_code=429,
        content={"detail": "Too many requests. Please try again later."},
    )


# --- Health check ---
@app.get("/health")
def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "healthy", "app": "session-auth", "version": "0.1.0"}
