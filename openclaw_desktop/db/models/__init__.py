"""Database models package.

This package provides the Database class and all related dataclasses.
The Database class is composed of mixins for the different record types.

Usage:
    from openclaw_desktop.db.models import Database, get_database

    # Use the shared instance (opened on first use)
    agents = get_database().list_agents()

    # Or create your own instance
    custom_db = Database(custom_path)
"""

import threading
from pathlib import Path

from openclaw_desktop.db.models.agent import AgentMixin
from openclaw_desktop.db.models.approval import ApprovalMixin
from openclaw_desktop.db.models.base import DatabaseBase
from openclaw_desktop.db.models.dataclasses import Agent, ApprovalItem, ExecutionLog
from openclaw_desktop.db.models.execution_log import ExecutionLogMixin
from openclaw_desktop.db.models.helpers import check_database_connectivity
from openclaw_desktop.db.models.settings import SettingsMixin


class Database(
    DatabaseBase,
    AgentMixin,
    ExecutionLogMixin,
    SettingsMixin,
    ApprovalMixin,
):
    """Main database class combining all mixins.

    Provides all store operations through a unified interface.
    All access goes through one connection guarded by one lock.
    """

    def __init__(self, db_path: Path | None = None) -> None:
        """Initialize the database.

        Args:
            db_path: Optional path to the database file.
                    Defaults to Config.DATABASE_PATH.
        """
        super().__init__(db_path)


_database: Database | None = None
_database_lock = threading.Lock()


def get_database() -> Database:
    """Get the shared database instance, opening it on first use."""
    global _database
    with _database_lock:
        if _database is None:
            _database = Database()
        return _database


def reset_database() -> None:
    """Close and forget the shared database instance (for testing)."""
    global _database
    with _database_lock:
        if _database is not None:
            _database.close()
        _database = None


# Re-export all public symbols
__all__ = [
    # Database class and shared instance
    "Database",
    "get_database",
    "reset_database",
    # Dataclasses
    "Agent",
    "ExecutionLog",
    "ApprovalItem",
    # Helper functions
    "check_database_connectivity",
]
