"""Integration tests for version and health check endpoints."""

from pathlib import Path
from unittest.mock import patch

from flask.testing import FlaskClient

from openclaw_desktop.config import Config


class TestVersion:
    """Tests for GET /api/version."""

    def test_lists_commands(self, client: FlaskClient) -> None:
        """The version endpoint should report the available commands."""
        response = client.get("/api/version")

        assert response.status_code == 200
        data = response.get_json()
        assert data["version"] == "0.1.0"
        assert "create_agent" in data["commands"]
        assert data["commands"] == sorted(data["commands"])


class TestHealth:
    """Tests for GET /api/health."""

    def test_health_ok(self, client: FlaskClient) -> None:
        """Liveness should always report ok."""
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.get_json()["status"] == "ok"


class TestReady:
    """Tests for GET /api/ready."""

    def test_ready_with_database(self, client: FlaskClient) -> None:
        """Readiness should pass when the store file is usable."""
        response = client.get("/api/ready")

        assert response.status_code == 200
        data = response.get_json()
        assert data["status"] == "ready"
        assert data["checks"]["database"]["status"] == "ok"

    def test_not_ready_when_directory_missing(self, client: FlaskClient, tmp_path: Path) -> None:
        """Readiness should fail with 503 when the store cannot be reached."""
        missing = tmp_path / "gone" / "openclaw.db"
        with patch.object(Config, "DATABASE_PATH", missing):
            response = client.get("/api/ready")

        assert response.status_code == 503
        data = response.get_json()
        assert data["status"] == "not_ready"
        assert "does not exist" in data["checks"]["database"]["message"]
