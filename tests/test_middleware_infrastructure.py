"""
Tests for middleware and infrastructure components.
"""

import logging
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from rest_api.core.errors import register_exception_handlers
from rest_api.core.lifespan import check_configuration
from rest_api.core.middlewares import (
    SecurityHeadersMiddleware,
    ContentTypeValidationMiddleware,
)
from shared.infrastructure.correlation import (
    CorrelationIdMiddleware,
    CorrelationIdFilter,
    get_request_id,
    request_id_var,
)
from shared.config.settings import Settings, settings
from shared.infrastructure.db import safe_commit, transaction
from shared.utils.exceptions import NotFoundError


# =============================================================================
# SecurityHeadersMiddleware Tests
# =============================================================================

class TestSecurityHeadersMiddleware:
    """Tests for security headers middleware."""

    @pytest.fixture
    def client(self):
        app = FastAPI()
        app.add_middleware(SecurityHeadersMiddleware)

        @app.get("/test")
        def test_endpoint():
            return {"message": "ok"}

        return TestClient(app)

    def test_adds_security_headers(self, client):
        response = client.get("/test")
        assert response.headers.get("X-Content-Type-Options") == "nosniff"
        assert response.headers.get("X-Frame-Options") == "DENY"
        assert response.headers.get("Referrer-Policy") == "strict-origin-when-cross-origin"
        assert "default-src 'none'" in response.headers.get("Content-Security-Policy")

    def test_no_hsts_outside_production(self, client):
        response = client.get("/test")
        assert "Strict-Transport-Security" not in response.headers


# =============================================================================
# ContentTypeValidationMiddleware Tests
# =============================================================================

class TestContentTypeValidationMiddleware:
    """Tests for content-type validation middleware."""

    @pytest.fixture
    def client(self):
        app = FastAPI()
        app.add_middleware(ContentTypeValidationMiddleware)

        @app.post("/test")
        def test_endpoint(data: dict):
            return {"received": data}

        return TestClient(app)

    def test_accepts_json(self, client):
        response = client.post("/test", json={"name": "Bali"})
        assert response.status_code == 200

    def test_rejects_form_data(self, client):
        response = client.post("/test", data={"name": "Bali"})
        assert response.status_code == 415
        assert response.json() == {
            "message": "Unsupported Media Type",
            "error": "Use application/json",
        }


# =============================================================================
# Correlation ID Tests
# =============================================================================

class TestCorrelationId:
    """Tests for request correlation."""

    @pytest.fixture
    def client(self):
        app = FastAPI()
        app.add_middleware(CorrelationIdMiddleware)

        @app.get("/test")
        def test_endpoint():
            return {"request_id": get_request_id()}

        return TestClient(app)

    def test_echoes_incoming_request_id(self, client):
        response = client.get("/test", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"
        assert response.json()["request_id"] == "abc-123"

    def test_generates_request_id(self, client):
        response = client.get("/test")
        assert len(response.headers["X-Request-ID"]) == 36

    def test_replaces_malformed_request_id(self, client):
        response = client.get("/test", headers={"X-Request-ID": "x" * 200})
        assert response.headers["X-Request-ID"] != "x" * 200
        assert len(response.headers["X-Request-ID"]) == 36

    def test_filter_adds_request_id(self):
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)
        token = request_id_var.set("req-1")
        try:
            assert CorrelationIdFilter().filter(record) is True
        finally:
            request_id_var.reset(token)
        assert record.request_id == "req-1"

    def test_filter_placeholder_without_request(self):
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)
        CorrelationIdFilter().filter(record)
        assert record.request_id == "-"


# =============================================================================
# Exception Handler Tests
# =============================================================================

class TestExceptionHandlers:
    """Errors escaping a route use the error envelope."""

    @pytest.fixture
    def client(self):
        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/missing")
        def missing():
            raise NotFoundError("Province", 1)

        @app.get("/typed")
        def typed(page: int):
            return {"page": page}

        return TestClient(app)

    def test_http_exception_envelope(self, client):
        response = client.get("/missing")
        assert response.status_code == 404
        assert response.json() == {"message": "Not Found", "error": "Province not found"}

    def test_validation_error_is_400(self, client):
        response = client.get("/typed?page=abc")
        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Invalid request"
        assert "page" in body["error"]

    def test_unknown_route_envelope(self, client):
        response = client.get("/nowhere")
        assert response.status_code == 404
        assert response.json()["message"] == "Not Found"


# =============================================================================
# Database Helper Tests
# =============================================================================

class TestDatabaseHelpers:
    """Tests for commit helpers."""

    def test_safe_commit_rolls_back_on_failure(self):
        db = MagicMock()
        db.commit.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError):
            safe_commit(db)
        db.rollback.assert_called_once()

    def test_transaction_commits_on_success(self):
        db = MagicMock()
        with transaction(db):
            pass
        db.commit.assert_called_once()
        db.rollback.assert_not_called()

    def test_transaction_rolls_back_and_reraises(self):
        db = MagicMock()
        with pytest.raises(ValueError):
            with transaction(db):
                raise ValueError("bad")
        db.rollback.assert_called_once()
        db.commit.assert_not_called()


# =============================================================================
# Startup Configuration Tests
# =============================================================================

class TestConfigurationCheck:
    """Tests for the startup configuration check."""

    def test_unsafe_settings_fatal_in_production(self, monkeypatch):
        monkeypatch.setattr(settings, "environment", "production")
        with pytest.raises(RuntimeError) as exc:
            check_configuration()
        assert "JWT_SECRET" in str(exc.value)

    def test_unsafe_settings_tolerated_in_development(self, monkeypatch):
        monkeypatch.setattr(settings, "environment", "development")
        check_configuration()

    def test_production_ready_settings(self):
        ready = Settings(
            jwt_secret="x" * 40,
            debug=False,
            allowed_origins="https://admin.indostore.id, https://indostore.id",
            database_url="postgresql+psycopg://app@db/indostore",
            environment="production",
        )
        assert ready.validate_production_secrets() == []
        assert ready.cors_origin_list == ["https://admin.indostore.id", "https://indostore.id"]
