"""
Tests for bearer token authentication.
"""

import time

import jwt
import pytest

from shared.config.settings import JWT_AUDIENCE, JWT_ISSUER
from shared.security.auth import current_user_context, get_bearer_token, sign_jwt, verify_jwt
from shared.utils.exceptions import AuthenticationError


class TestJwt:
    """Test token signing and verification."""

    def test_round_trip_claims(self):
        token = sign_jwt({"sub": "42", "email": "ops@indostore.local"})
        payload = verify_jwt(token)
        assert payload["sub"] == "42"
        assert payload["email"] == "ops@indostore.local"
        assert payload["iss"] == JWT_ISSUER
        assert payload["aud"] == JWT_AUDIENCE
        assert "jti" in payload

    def test_expired_token_rejected(self):
        token = sign_jwt({"sub": "1"}, ttl_seconds=-10)
        with pytest.raises(AuthenticationError) as exc:
            verify_jwt(token)
        assert exc.value.status_code == 401
        assert exc.value.detail == "Token has expired"

    def test_wrong_secret_rejected(self):
        now = int(time.time())
        token = jwt.encode(
            {"sub": "1", "iss": JWT_ISSUER, "aud": JWT_AUDIENCE, "exp": now + 60},
            "not-the-secret",
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError) as exc:
            verify_jwt(token)
        assert exc.value.detail == "Invalid token"

    def test_missing_subject_rejected(self):
        token = sign_jwt({"email": "nobody@indostore.local"})
        with pytest.raises(AuthenticationError):
            verify_jwt(token)

    def test_non_numeric_subject_rejected(self):
        token = sign_jwt({"sub": "abc"})
        with pytest.raises(AuthenticationError) as exc:
            verify_jwt(token)
        assert "malformed" in exc.value.detail


class TestBearerHeader:
    """Test Authorization header parsing."""

    @pytest.mark.parametrize("header", [None, "", "   "])
    def test_missing_or_blank(self, header):
        with pytest.raises(AuthenticationError) as exc:
            get_bearer_token(header)
        assert exc.value.detail == "Missing Authorization header"

    def test_wrong_scheme(self):
        with pytest.raises(AuthenticationError):
            get_bearer_token("Basic dXNlcjpwYXNz")

    def test_empty_bearer(self):
        with pytest.raises(AuthenticationError):
            get_bearer_token("Bearer    ")

    def test_extracts_token(self):
        assert get_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"

    def test_user_context(self):
        token = sign_jwt({"sub": "9", "email": "ops@indostore.local"})
        ctx = current_user_context(authorization=f"Bearer {token}")
        assert ctx == {"sub": 9, "email": "ops@indostore.local"}


class TestAuthEndpoints:
    """Every resource endpoint rejects requests without a valid token."""

    @pytest.mark.parametrize(
        "method,path",
        [
            ("get", "/api/provinces"),
            ("post", "/api/provinces"),
            ("get", "/api/provinces/1"),
            ("put", "/api/provinces/1"),
            ("delete", "/api/provinces/1"),
            ("get", "/api/provinces/search?name=x"),
            ("get", "/api/provinces/search/stores?name=x"),
            ("get", "/api/branches"),
            ("get", "/api/stores"),
            ("get", "/api/whitelist-stores"),
            ("delete", "/api/whitelist-stores/1"),
            ("get", "/api/audit-logs"),
        ],
    )
    def test_missing_header_is_401(self, client, method, path):
        kwargs = {"json": {"name": "X"}} if method in ("post", "put") else {}
        response = getattr(client, method)(path, **kwargs)
        assert response.status_code == 401
        body = response.json()
        assert body["message"] == "Unauthorized"
        assert body["error"] == "Missing Authorization header"

    def test_blank_header_is_401(self, client):
        response = client.get("/api/provinces", headers={"Authorization": ""})
        assert response.status_code == 401

    def test_invalid_token_is_401(self, client):
        response = client.get("/api/provinces", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid token"

    def test_auth_checked_before_service_logic(self, client, db_session):
        """An unauthenticated create writes nothing."""
        from rest_api.models import AuditLog, Province

        response = client.post("/api/provinces", json={"name": "Bali"})
        assert response.status_code == 401
        assert db_session.query(Province).count() == 0
        assert db_session.query(AuditLog).count() == 0
