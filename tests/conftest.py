"""Pytest configuration and fixtures."""

from dataclasses import dataclass, field

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.models.session import Session as LoginSession  # noqa: F401
from app.models.user import User  # noqa: F401
from app.models.verification_code import VerificationCode  # noqa: F401
from app.services.email import SendResult

TEST_EMAIL = "test@example.com"
TEST_PASSWORD = "correct-horse-battery"


@dataclass
class FakeEmailService:
    """Records outgoing mail instead of calling Resend."""

    fail: bool = False
    sent: list[dict] = field(default_factory=list)

    def send(self, to, subject: str, text: str, html: str) -> SendResult:
        self.sent.append({"to": to, "subject": subject, "text": text, "html": html})
        if self.fail:
            return SendResult(error="503: service unavailable")
        return SendResult(data={"id": f"email-{len(self.sent)}"})


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(name="db_session")
def db_session_fixture(engine):
    testing_session_local = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(name="email_outbox", autouse=True)
def email_outbox_fixture(monkeypatch):
    """Replace the email collaborator everywhere the auth service looks it up."""
    outbox = FakeEmailService()
    monkeypatch.setattr("app.services.auth.get_email_service", lambda: outbox)
    return outbox


@pytest.fixture(name="client")
def client_fixture(engine, db_session: Session):
    """Create a test client with overridden DB dependency and disabled rate limiting."""
    import main as main_module
    from app.rate_limit import limiter
    from main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    # Point the startup sweep at the test database
    main_module._session_factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    app.dependency_overrides[get_db] = override_get_db
    limiter.enabled = False
    with TestClient(app) as c:
        yield c
    limiter.enabled = True
    limiter.reset()
    app.dependency_overrides.clear()
    main_module._session_factory = None


@pytest.fixture(name="test_user")
def test_user_fixture(client: TestClient):
    """Register a user through the API. The client keeps its session cookies."""
    response = client.post(
        "/auth/register",
        json={"email": TEST_EMAIL, "password": TEST_PASSWORD, "confirmPassword": TEST_PASSWORD},
        headers={"User-Agent": "pytest-browser"},
    )
    assert response.status_code == 201
    data = response.json()
    return {
        "user_id": data["id"],
        "email": data["email"],
        "password": TEST_PASSWORD,
        "access_token": response.cookies["accessToken"],
        "refresh_token": response.cookies["refreshToken"],
    }
