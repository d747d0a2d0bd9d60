"""Shared pytest fixtures for OpenClaw desktop store tests."""

from __future__ import annotations

import os
import re
import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest
from flask import Flask
from flask.testing import FlaskClient

if TYPE_CHECKING:
    from openclaw_desktop.db.models import Database

# Set test environment variables before importing app modules
os.environ["APP_ENV"] = "testing"
os.environ["OPENCLAW_DATA_DIR"] = tempfile.mkdtemp(prefix="openclaw-test-")
os.environ["LOG_LEVEL"] = "INFO"


# -----------------------------------------------------------------------------
# Database fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(scope="session")
def temp_db_dir() -> Generator[Path]:
    """Create a temporary directory for test databases."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_db_path(temp_db_dir: Path, request: pytest.FixtureRequest) -> Path:
    """Create unique database path for each test."""
    # Use the full node id so same-named tests in different classes don't share a file
    test_name = re.sub(r"[^A-Za-z0-9_.-]", "_", request.node.nodeid)
    return temp_db_dir / f"{test_name}.db"


@pytest.fixture
def test_database(test_db_path: Path) -> Generator[Database]:
    """Create isolated test database for each test."""
    from openclaw_desktop.db.models import Database

    db = Database(db_path=test_db_path)
    yield db
    db.close()


# -----------------------------------------------------------------------------
# Flask app fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def app(test_database: Database, test_db_path: Path) -> Generator[Flask]:
    """Create the bridge app with the isolated test database.

    Commands resolve the shared database through get_database(), so patching it
    in the command module routes every bridge call to test_database.
    """
    from openclaw_desktop.config import Config

    with patch("openclaw_desktop.api.commands.get_database", return_value=test_database):
        with patch.object(Config, "DATABASE_PATH", test_db_path):
            from openclaw_desktop.app import create_app

            flask_app = create_app()
            flask_app.config["TESTING"] = True
            yield flask_app


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create Flask test client."""
    return app.test_client()
