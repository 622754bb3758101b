"""Tests for the user profile endpoint."""

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.models.user import User


class TestGetUser:
    """Tests for the profile endpoint."""

    def test_get_profile(self, client: TestClient, test_user: dict):
        response = client.get("/user")
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == test_user["user_id"]
        assert data["email"] == test_user["email"]
        assert data["verified"] is False
        assert "password_hash" not in data

    def test_bearer_header(self, client: TestClient, test_user: dict):
        client.cookies.clear()
        response = client.get("/user", headers={"Authorization": f"Bearer {test_user['access_token']}"})
        assert response.status_code == 200
        assert response.json()["email"] == test_user["email"]

    def test_requires_auth(self, client: TestClient):
        response = client.get("/user")
        assert response.status_code == 401

    def test_refresh_token_is_not_an_access_token(self, client: TestClient, test_user: dict):
        client.cookies.clear()
        response = client.get("/user", headers={"Authorization": f"Bearer {test_user['refresh_token']}"})
        assert response.status_code == 401

    def test_missing_user(self, client: TestClient, test_user: dict, db_session: Session):
        db_session.query(User).delete()
        db_session.commit()

        response = client.get("/user")
        assert response.status_code == 404
        assert response.json() == {"detail": "User not found"}
