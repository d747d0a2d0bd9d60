"""Shared helper functions for database operations.

This module contains utility functions used across the store mixins:
- Record identifiers and timestamps
- Database connectivity checks
"""

import os
import sqlite3
import uuid
from datetime import UTC, datetime
from pathlib import Path

from openclaw_desktop.config import Config
from openclaw_desktop.utils.logging import get_logger

logger = get_logger(__name__)


# ============================================================================
# Identifier and Timestamp Helpers
# ============================================================================


def new_record_id() -> str:
    """Generate an opaque unique identifier for a new record."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def format_timestamp(value: datetime) -> str:
    """Format a datetime for storage.

    Always includes microseconds so every stored value has the same width and
    lexical order matches chronological order.
    """
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def parse_timestamp(value: str) -> datetime:
    """Parse a stored timestamp back into an aware datetime.

    Naive values are assumed to be UTC.
    """
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


# ============================================================================
# Connectivity
# ============================================================================


def check_database_connectivity(db_path: Path | None = None) -> tuple[bool, str | None]:
    """Check if the database is accessible.

    Checks directory existence, permissions, and performs a simple query test.

    Args:
        db_path: Optional path to database file. Uses Config.DATABASE_PATH if not provided.

    Returns:
        Tuple of (success: bool, error_message: str | None)
    """
    db_path = db_path or Config.DATABASE_PATH
    logger.debug("Checking database connectivity", extra={"db_path": str(db_path)})

    parent_dir = db_path.parent
    if not parent_dir.exists():
        error = f"Database directory does not exist: {parent_dir}"
        logger.error("Database connectivity check failed", extra={"error": error})
        return False, error

    if not os.access(parent_dir, os.W_OK):
        error = f"Database directory is not writable: {parent_dir}"
        logger.error("Database connectivity check failed", extra={"error": error})
        return False, error

    if db_path.exists() and not os.access(db_path, os.R_OK | os.W_OK):
        error = f"Database file is not readable/writable: {db_path}"
        logger.error("Database connectivity check failed", extra={"error": error})
        return False, error

    try:
        conn = sqlite3.connect(db_path)
        try:
            conn.execute("SELECT 1")
        finally:
            conn.close()
    except sqlite3.OperationalError as e:
        error_msg = str(e)
        if "unable to open database file" in error_msg:
            error = f"Cannot open database file: {db_path}. Check file permissions."
        elif "database is locked" in error_msg:
            error = f"Database is locked: {db_path}. Another process may be using it."
        elif "disk I/O error" in error_msg:
            error = f"Disk I/O error accessing database: {db_path}. Check disk health."
        else:
            error = f"Database error: {error_msg}"
        logger.error("Database connectivity check failed", extra={"error": error})
        return False, error
    except sqlite3.Error as e:
        error = f"Unexpected database error: {e}"
        logger.error("Database connectivity check failed", extra={"error": error}, exc_info=True)
        return False, error

    logger.debug("Database connectivity check passed", extra={"db_path": str(db_path)})
    return True, None
