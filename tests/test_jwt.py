"""Tests for access and refresh token signing and verification."""

from datetime import timedelta

import pytest
from jose import jwt

from app.config import get_settings
from app.services.jwt import JWTService, TokenKind
from app.utils.dates import utcnow


@pytest.fixture(name="jwt_service")
def jwt_service_fixture() -> JWTService:
    return JWTService()


def _sign_at(monkeypatch, jwt_service: JWTService, kind: TokenKind, payload: dict, issued_at) -> str:
    monkeypatch.setattr("app.services.jwt.utcnow", lambda: issued_at)
    token = jwt_service.sign(kind, payload)
    monkeypatch.setattr("app.services.jwt.utcnow", utcnow)
    return token


class TestSignAndVerify:
    """Tests for issuing and reading back tokens."""

    def test_access_token_round_trip(self, jwt_service: JWTService):
        token = jwt_service.sign_access_token("user-1", "session-1")
        assert jwt_service.verify(TokenKind.ACCESS, token) == {"userId": "user-1", "sessionId": "session-1"}

    def test_refresh_token_round_trip(self, jwt_service: JWTService):
        token = jwt_service.sign_refresh_token("session-1")
        assert jwt_service.verify(TokenKind.REFRESH, token) == {"sessionId": "session-1"}

    def test_refresh_token_carries_no_user_id(self, jwt_service: JWTService):
        token = jwt_service.sign_refresh_token("session-1")
        claims = jwt.get_unverified_claims(token)
        assert "userId" not in claims
        assert claims["aud"] == ["user"]

    def test_lifetimes(self, jwt_service: JWTService):
        assert jwt_service.lifetime(TokenKind.ACCESS) == timedelta(minutes=30)
        assert jwt_service.lifetime(TokenKind.REFRESH) == timedelta(days=30)


class TestUniformFailure:
    """Every failure cause comes back as the same None."""

    def test_access_token_rejected_as_refresh(self, jwt_service: JWTService):
        token = jwt_service.sign_access_token("user-1", "session-1")
        assert jwt_service.verify(TokenKind.REFRESH, token) is None

    def test_refresh_token_rejected_as_access(self, jwt_service: JWTService):
        token = jwt_service.sign_refresh_token("session-1")
        assert jwt_service.verify(TokenKind.ACCESS, token) is None

    @pytest.mark.parametrize("token", ["", None, "not-a-jwt", "a.b.c"])
    def test_malformed(self, jwt_service: JWTService, token):
        assert jwt_service.verify(TokenKind.ACCESS, token) is None

    def test_tampered_signature(self, jwt_service: JWTService):
        token = jwt_service.sign_access_token("user-1", "session-1")
        head, body, signature = token.split(".")
        tampered = ".".join([head, body, signature[::-1]])
        assert jwt_service.verify(TokenKind.ACCESS, tampered) is None

    def test_wrong_audience(self, jwt_service: JWTService):
        settings = get_settings()
        token = jwt.encode(
            {"userId": "user-1", "sessionId": "session-1", "aud": ["admin"], "exp": utcnow() + timedelta(minutes=5)},
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
        assert jwt_service.verify(TokenKind.ACCESS, token) is None

    def test_missing_claims(self, jwt_service: JWTService):
        token = jwt_service.sign(TokenKind.ACCESS, {"sessionId": "session-1"})
        assert jwt_service.verify(TokenKind.ACCESS, token) is None


class TestExpiry:
    """Tests for token lifetimes at the boundary."""

    def test_valid_just_inside_lifetime(self, monkeypatch, jwt_service: JWTService):
        issued_at = utcnow() - timedelta(minutes=29)
        token = _sign_at(monkeypatch, jwt_service, TokenKind.ACCESS, {"userId": "u", "sessionId": "s"}, issued_at)
        assert jwt_service.verify(TokenKind.ACCESS, token) is not None

    def test_invalid_just_after_lifetime(self, monkeypatch, jwt_service: JWTService):
        issued_at = utcnow() - timedelta(minutes=31)
        token = _sign_at(monkeypatch, jwt_service, TokenKind.ACCESS, {"userId": "u", "sessionId": "s"}, issued_at)
        assert jwt_service.verify(TokenKind.ACCESS, token) is None

    def test_refresh_token_outlives_access_window(self, monkeypatch, jwt_service: JWTService):
        issued_at = utcnow() - timedelta(days=29)
        token = _sign_at(monkeypatch, jwt_service, TokenKind.REFRESH, {"sessionId": "s"}, issued_at)
        assert jwt_service.verify(TokenKind.REFRESH, token) == {"sessionId": "s"}
