"""Unit tests for main FastAPI application configuration."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from main import app


@pytest.fixture
def client() -> TestClient:
    """Client that does not run the lifespan, so no engine is created."""
    return TestClient(app)


class TestHealthEndpoints:
    def test_health_returns_ok(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_db_health_reports_connection_failure(self, client: TestClient) -> None:
        engine = MagicMock()
        engine.connect.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))

        with patch("main.get_write_engine", return_value=engine):
            response = client.get("/health/db")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "error"
        assert body["connected"] is False

    def test_db_health_reports_connected(self, client: TestClient) -> None:
        conn = MagicMock()
        conn.execute = AsyncMock()
        connect_ctx = MagicMock()
        connect_ctx.__aenter__ = AsyncMock(return_value=conn)
        connect_ctx.__aexit__ = AsyncMock(return_value=False)
        engine = MagicMock()
        engine.connect.return_value = connect_ctx

        with patch("main.get_write_engine", return_value=engine):
            response = client.get("/health/db")

        assert response.json() == {"status": "ok", "connected": True}
        conn.execute.assert_awaited_once()


class TestRouteRegistration:
    def test_membership_routes_are_mounted(self) -> None:
        paths = {route.path for route in app.routes}

        assert "/membership/events/{event_id}/membership" in paths
        assert "/membership/events/{event_id}/membership/check-in" in paths
        assert "/membership/events/{event_id}/participants" in paths

    def test_openapi_schema_lists_membership_tag(self, client: TestClient) -> None:
        schema = client.get("/openapi.json").json()

        tags = {
            tag
            for operations in schema["paths"].values()
            for operation in operations.values()
            for tag in operation.get("tags", [])
        }
        assert "membership" in tags
