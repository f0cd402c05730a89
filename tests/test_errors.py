"""Tests for error responses and bounded database waits."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from src.api.dependencies import get_list_service
from src.api.errors import http_reason
from src.config import get_settings
from src.database import engine_options
from src.main import app


class LockNotAvailable(Exception):
    pgcode = "55P03"


class TestRoutingErrors:
    """Errors raised by the router itself use the same body as application errors."""

    def test_unknown_route(self, client):
        response = client.get("/api/v1/nope")
        assert response.status_code == 404
        assert response.json() == {"error": "not-found", "message": "Not Found"}

    def test_wrong_method(self, client, auth_headers):
        response = client.patch("/api/v1/lists", headers=auth_headers)
        assert response.status_code == 405
        assert response.json()["error"] == "method-not-allowed"
        assert "GET" in response.headers["allow"]

    @pytest.mark.parametrize(
        "status_code,reason",
        [
            (404, "not-found"),
            (405, "method-not-allowed"),
            (429, "too-many-requests"),
            (799, "http-error"),
        ],
    )
    def test_http_reason(self, status_code, reason):
        assert http_reason(status_code) == reason


class TestStoreErrors:
    """Database failures come back quickly as 503s."""

    def failing_service(self, orig: Exception) -> MagicMock:
        service = MagicMock()
        service.get_lists_for.side_effect = OperationalError("SELECT 1", {}, orig)
        return service

    def test_lock_timeout(self, client, auth_headers):
        service = self.failing_service(LockNotAvailable("canceling statement due to lock timeout"))
        app.dependency_overrides[get_list_service] = lambda: service

        response = client.get("/api/v1/lists", headers=auth_headers)
        assert response.status_code == 503
        assert response.json()["error"] == "store-timeout"

    def test_other_operational_error(self, client, auth_headers):
        service = self.failing_service(Exception("database is locked"))
        app.dependency_overrides[get_list_service] = lambda: service

        response = client.get("/api/v1/lists", headers=auth_headers)
        assert response.status_code == 503
        assert response.json()["error"] == "store-unavailable"


class TestEngineOptions:
    """Every wait on the store has a limit."""

    def test_postgres_sets_statement_and_lock_timeouts(self):
        settings = get_settings()
        options = engine_options("postgresql://user:pass@db:5432/swipelist")

        assert options["pool_timeout"] == settings.db_pool_timeout
        assert options["connect_args"]["connect_timeout"] == settings.db_connect_timeout
        assert f"statement_timeout={settings.db_statement_timeout_ms}" in (
            options["connect_args"]["options"]
        )
        assert f"lock_timeout={settings.db_lock_timeout_ms}" in options["connect_args"]["options"]

    def test_sqlite_sets_busy_timeout(self):
        options = engine_options("sqlite:///./test.db")
        assert options["connect_args"]["timeout"] == get_settings().db_connect_timeout
        assert "options" not in options["connect_args"]
