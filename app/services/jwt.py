"""JWT Token Service."""

from datetime import timedelta
from enum import Enum
from typing import Any

from jose import JWTError, jwt

from app.config import get_settings
from app.utils.dates import utcnow


class TokenKind(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"


# Claims each kind must carry to be accepted.
REQUIRED_CLAIMS = {
    TokenKind.ACCESS: ("userId", "sessionId"),
    TokenKind.REFRESH: ("sessionId",),
}


class JWTService:
    """Signs and verifies access and refresh tokens.

    The two kinds use independent secrets and lifetimes. Verification never
    raises: a malformed, expired, wrong-audience or wrong-secret token is
    reported as ``None`` with no hint about which check failed.
    """

    def __init__(self) -> None:
        settings = get_settings()
        self.algorithm = settings.JWT_ALGORITHM
        self.audience = settings.JWT_AUDIENCE
        self._secrets = {
            TokenKind.ACCESS: settings.JWT_SECRET_KEY,
            TokenKind.REFRESH: settings.JWT_REFRESH_SECRET_KEY,
        }
        self._lifetimes = {
            TokenKind.ACCESS: timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            TokenKind.REFRESH: timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        }

    def lifetime(self, kind: TokenKind) -> timedelta:
        """How long a token of this kind stays valid."""
        return self._lifetimes[kind]

    def sign(self, kind: TokenKind, payload: dict[str, Any]) -> str:
        """Sign ``payload`` as a token of the given kind."""
        now = utcnow()
        claims = {
            **payload,
            "aud": [self.audience],
            "iat": now,
            "exp": now + self._lifetimes[kind],
        }
        return jwt.encode(claims, self._secrets[kind], algorithm=self.algorithm)

    def verify(self, kind: TokenKind, token: str | None) -> dict[str, Any] | None:
        """Decode and validate a token. Returns None if invalid."""
        if not token:
            return None
        try:
            claims = jwt.decode(token, self._secrets[kind], algorithms=[self.algorithm], audience=self.audience)
        except JWTError:
            return None
        if not all(isinstance(claims.get(name), str) for name in REQUIRED_CLAIMS[kind]):
            return None
        return {name: claims[name] for name in REQUIRED_CLAIMS[kind]}

    def sign_access_token(self, user_id: str, session_id: str) -> str:
        return self.sign(TokenKind.ACCESS, {"userId": user_id, "sessionId": session_id})

    def sign_refresh_token(self, session_id: str) -> str:
        return self.sign(TokenKind.REFRESH, {"sessionId": session_id})


_jwt_service: JWTService | None = None


def get_jwt_service() -> JWTService:
    """Get singleton JWT service instance."""
    global _jwt_service
    if _jwt_service is None:
        _jwt_service = JWTService()
    return _jwt_service
