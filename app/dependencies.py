"""Authentication dependencies and cookie helpers for FastAPI routes."""

from dataclasses import dataclass

from fastapi import Request, Response

from app.config import get_settings
from app.errors import AppErrorCode, app_assert
from app.services.auth import TokenPair
from app.services.jwt import TokenKind, get_jwt_service

ACCESS_COOKIE_NAME = "accessToken"
REFRESH_COOKIE_NAME = "refreshToken"
REFRESH_PATH = "/auth/refresh"


@dataclass
class CurrentSession:
    """Authenticated caller context."""

    user_id: str
    session_id: str


def get_access_token(request: Request) -> str | None:
    """Read the access token from a Bearer header, falling back to the cookie."""
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[7:]
    return request.cookies.get(ACCESS_COOKIE_NAME)


def get_current_session(request: Request) -> CurrentSession:
    """Validate the access token. Raises 401 so the client knows to refresh."""
    token = get_access_token(request)
    app_assert(token, 401, "Not authorized", AppErrorCode.INVALID_ACCESS_TOKEN)

    payload = get_jwt_service().verify(TokenKind.ACCESS, token)
    app_assert(payload, 401, "Invalid or expired token", AppErrorCode.INVALID_ACCESS_TOKEN)

    return CurrentSession(user_id=payload["userId"], session_id=payload["sessionId"])


def _cookie_defaults() -> dict:
    return {
        "httponly": True,
        "samesite": "strict",
        "secure": not get_settings().is_development,
    }


def set_auth_cookies(response: Response, tokens: TokenPair) -> None:
    """Attach both tokens as cookies. The refresh cookie is only sent to the refresh endpoint."""
    jwt_service = get_jwt_service()
    response.set_cookie(
        key=ACCESS_COOKIE_NAME,
        value=tokens.access_token,
        max_age=int(jwt_service.lifetime(TokenKind.ACCESS).total_seconds()),
        path="/",
        **_cookie_defaults(),
    )
    response.set_cookie(
        key=REFRESH_COOKIE_NAME,
        value=tokens.refresh_token,
        max_age=int(jwt_service.lifetime(TokenKind.REFRESH).total_seconds()),
        path=REFRESH_PATH,
        **_cookie_defaults(),
    )


def clear_auth_cookies(response: Response) -> None:
    """Clear both authentication cookies."""
    response.delete_cookie(key=ACCESS_COOKIE_NAME, path="/", **_cookie_defaults())
    response.delete_cookie(key=REFRESH_COOKIE_NAME, path=REFRESH_PATH, **_cookie_defaults())
