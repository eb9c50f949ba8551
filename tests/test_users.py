"""Tests for users API endpoints and token authentication."""

from datetime import UTC, datetime, timedelta

import jwt
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from bloomcrux import models
from bloomcrux.config import get_settings


def _token(**claims: object) -> str:
    payload: dict[str, object] = {
        "sub": "provider|new-learner",
        "email": "new@example.com",
        "aud": "authenticated",
        "exp": datetime.now(UTC) + timedelta(minutes=5),
    }
    payload.update(claims)
    return jwt.encode(payload, get_settings().AUTH_JWT_SECRET, algorithm="HS256")


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class TestGetMe:
    """Test suite for GET /users/me endpoint."""

    def test_returns_current_user(self, client: TestClient, test_user: models.User) -> None:
        response = client.get("/api/v1/users/me")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["id"] == test_user.id
        assert data["external_id"] == "provider|test-user"
        assert data["email"] == "learner@example.com"


class TestTokenAuthentication:
    def test_missing_token(self, unauth_client: TestClient) -> None:
        response = unauth_client.get("/api/v1/users/me")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.headers["www-authenticate"] == "Bearer"

    def test_malformed_token(self, unauth_client: TestClient) -> None:
        response = unauth_client.get("/api/v1/users/me", headers=_auth("not-a-jwt"))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_wrong_audience(self, unauth_client: TestClient) -> None:
        response = unauth_client.get("/api/v1/users/me", headers=_auth(_token(aud="other-app")))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_expired_token(self, unauth_client: TestClient) -> None:
        expired = _token(exp=datetime.now(UTC) - timedelta(minutes=1))

        response = unauth_client.get("/api/v1/users/me", headers=_auth(expired))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_wrong_signing_key(self, unauth_client: TestClient) -> None:
        forged = jwt.encode(
            {"sub": "provider|intruder", "aud": "authenticated"},
            "another-secret-that-is-long-enough-for-hs256",
            algorithm="HS256",
        )

        response = unauth_client.get("/api/v1/users/me", headers=_auth(forged))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_token_without_subject(self, unauth_client: TestClient) -> None:
        response = unauth_client.get("/api/v1/users/me", headers=_auth(_token(sub="")))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_first_request_provisions_user(
        self, unauth_client: TestClient, db_session: Session
    ) -> None:
        first = unauth_client.get("/api/v1/users/me", headers=_auth(_token()))
        second = unauth_client.get("/api/v1/users/me", headers=_auth(_token()))

        assert first.status_code == status.HTTP_200_OK
        assert first.json()["external_id"] == "provider|new-learner"
        assert second.json()["id"] == first.json()["id"]
        assert (
            db_session.query(models.User).filter_by(external_id="provider|new-learner").count()
            == 1
        )

    def test_email_follows_token(self, unauth_client: TestClient) -> None:
        unauth_client.get("/api/v1/users/me", headers=_auth(_token()))

        response = unauth_client.get(
            "/api/v1/users/me", headers=_auth(_token(email="renamed@example.com"))
        )

        assert response.json()["email"] == "renamed@example.com"

    def test_token_reaches_protected_routes(self, unauth_client: TestClient) -> None:
        response = unauth_client.get("/api/v1/decks", headers=_auth(_token()))

        assert response.status_code == status.HTTP_200_OK
