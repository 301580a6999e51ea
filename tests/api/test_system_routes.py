"""HTTP tests for the system router (/, /health, /config)."""

from unittest.mock import AsyncMock, patch

import pytest


@pytest.mark.api
class TestSystemRoutes:
    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "operational"

    def test_health_ok(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "database": "ok"}

    def test_health_database_down(self, client):
        with patch(
            "src.infrastructure.persistence.database.Database.check_connection",
            new=AsyncMock(return_value=False),
        ):
            response = client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    def test_config_hidden_outside_development(self, client):
        response = client.get("/config")

        assert response.status_code == 403

    def test_trace_header_on_every_response(self, client):
        assert client.get("/").headers["X-Trace-Id"]
