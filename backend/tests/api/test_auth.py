"""
Tests for the request gate (JWT authentication dependency).
"""

import time

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_token_service
from api.middleware.auth import get_current_user, get_user_from_claims
from modules.auth.service import TokenService
from shared.models import AuthenticatedUser


@pytest.fixture
def tokens(test_settings):
    return TokenService(settings=test_settings)


@pytest.fixture
def client(tokens):
    app = create_app()

    @app.get("/api/test/whoami")
    async def whoami(user: AuthenticatedUser = Depends(get_current_user)):
        return {"user_id": user.id}

    app.dependency_overrides[get_token_service] = lambda: tokens
    return TestClient(app)


class TestGetUserFromClaims:
    def test_maps_claims(self, tokens):
        claims = tokens.verify(tokens.issue_access_token("user-123"))

        user = get_user_from_claims(claims)

        assert user.id == "user-123"
        assert int(user.issued_at.timestamp()) == claims.iat
        assert int(user.expires_at.timestamp()) == claims.exp


class TestRequestGate:
    def test_valid_token(self, client, tokens):
        token = tokens.issue_access_token("user-123")

        response = client.get("/api/test/whoami", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json() == {"user_id": "user-123"}

    def test_missing_auth_header(self, client):
        """Request without auth header should return 401."""
        response = client.get("/api/test/whoami")

        assert response.status_code == 401
        assert response.json()["error"] == "MISSING_TOKEN"
        assert response.headers["www-authenticate"] == "Bearer"

    @pytest.mark.parametrize("header", ["Token abc", "Bearer", "abc", "Basic dXNlcjpwYXNz"])
    def test_malformed_auth_header(self, client, header):
        response = client.get("/api/test/whoami", headers={"Authorization": header})

        assert response.status_code == 401
        assert response.json()["error"] == "MISSING_TOKEN"

    def test_invalid_token(self, client):
        response = client.get("/api/test/whoami", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 403
        assert response.json()["error"] == "INVALID_TOKEN"

    def test_refresh_token_rejected(self, client, tokens):
        token = tokens.issue_refresh_token("user-123")

        response = client.get("/api/test/whoami", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403

    def test_expired_token(self, client, test_settings):
        old = TokenService(settings=test_settings, clock=lambda: time.time() - 60 * 60)
        token = old.issue_access_token("user-123")

        response = client.get("/api/test/whoami", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403
        assert response.json()["error"] == "TOKEN_EXPIRED"
