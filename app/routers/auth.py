"""Authentication API endpoints."""

import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.dependencies import (
    REFRESH_COOKIE_NAME,
    clear_auth_cookies,
    get_access_token,
    set_auth_cookies,
)
from app.rate_limit import limiter
from app.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
)
from app.schemas.user import UserResponse
from app.services.auth import PASSWORD_RESET_SENT, get_auth_service

logger = logging.getLogger("session_auth")

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=UserResponse, status_code=201)
def register(
    request: Request,
    response: Response,
    body: RegisterRequest,
    db: Session = Depends(get_db),
) -> UserResponse:
    """Register a new account and sign it in."""
    auth_service = get_auth_service()
    result = auth_service.register(db, body.email, body.password, request.headers.get("user-agent"))
    set_auth_cookies(response, result.tokens)
    return UserResponse.model_validate(result.user)


@router.post("/login", response_model=MessageResponse)
def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Authenticate and receive session cookies."""
    auth_service = get_auth_service()
    tokens = auth_service.login(db, body.email, body.password, request.headers.get("user-agent"))
    set_auth_cookies(response, tokens)
    return MessageResponse(message="Login successful")


@router.get("/logout", response_model=MessageResponse)
def logout(request: Request, response: Response, db: Session = Depends(get_db)) -> MessageResponse:
    """End the current session. The client is always logged out locally."""
    auth_service = get_auth_service()
    auth_service.logout(db, get_access_token(request))
    clear_auth_cookies(response)
    return MessageResponse(message="Logout successful")


@router.get("/refresh", response_model=MessageResponse)
def refresh(request: Request, response: Response, db: Session = Depends(get_db)) -> MessageResponse:
    """Rotate the token pair using the refresh cookie."""
    auth_service = get_auth_service()
    tokens = auth_service.refresh(db, request.cookies.get(REFRESH_COOKIE_NAME))
    set_auth_cookies(response, tokens)
    return MessageResponse(message="Access token refreshed")


@router.get("/email/verify/{code}", response_model=MessageResponse)
def verify_email(code: str, db: Session = Depends(get_db)) -> MessageResponse:
    """Confirm an email address from the link sent at registration."""
    auth_service = get_auth_service()
    auth_service.verify_email(db, code)
    return MessageResponse(message="Email verified successfully.")


@router.post("/password/forgot", response_model=MessageResponse)
@limiter.limit(get_settings().PASSWORD_RESET_RATE_LIMIT)
def forgot_password(request: Request, body: ForgotPasswordRequest, db: Session = Depends(get_db)) -> MessageResponse:
    """Request a password reset link. The response never reveals whether the account exists."""
    auth_service = get_auth_service()
    url = auth_service.send_password_reset(db, body.email)

    if url and get_settings().is_development:
        logger.info("PASSWORD RESET: %s", url)

    return MessageResponse(message=PASSWORD_RESET_SENT)


@router.post("/password/reset", response_model=MessageResponse)
def reset_password(response: Response, body: ResetPasswordRequest, db: Session = Depends(get_db)) -> MessageResponse:
    """Set a new password from a reset code. Every session of the account is ended."""
    auth_service = get_auth_service()
    auth_service.reset_password(db, body.verification_code, body.new_password)
    clear_auth_cookies(response)
    return MessageResponse(message="Password was reset successfully")
