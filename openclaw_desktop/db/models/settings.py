"""Settings database operations mixin.

Contains methods for application-wide key/value settings.
"""

from __future__ import annotations

import sqlite3
from typing import TYPE_CHECKING, Any

from openclaw_desktop.utils.logging import get_logger

if TYPE_CHECKING:
    from openclaw_desktop.utils.connection_guard import ConnectionGuard

logger = get_logger(__name__)


class SettingsMixin:
    """Mixin providing settings database operations."""

    _guard: ConnectionGuard

    def _execute_with_timing(
        self,
        conn: sqlite3.Connection,
        query: str,
        params: tuple[Any, ...] = (),
    ) -> sqlite3.Cursor:
        """Execute query with timing (defined in base class)."""
        raise NotImplementedError

    def get_setting(self, key: str) -> str | None:
        """Get a setting by key.

        Args:
            key: The setting key

        Returns:
            The setting value, or None if not found
        """
        with self._guard.get_connection("get_setting") as conn:
            row = self._execute_with_timing(
                conn,
                "SELECT value FROM settings WHERE key = ?",
                (key,),
            ).fetchone()

            return row["value"] if row else None

    def set_setting(self, key: str, value: str) -> None:
        """Set a setting, replacing any existing value.

        Args:
            key: The setting key
            value: The setting value (use JSON for complex values)
        """
        with self._guard.get_connection("set_setting") as conn:
            self._execute_with_timing(
                conn,
                "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)",
                (key, value),
            )
            conn.commit()
            # Values may hold API keys, so only the key is logged
            logger.debug("Setting updated", extra={"key": key})

    def delete_setting(self, key: str) -> None:
        """Delete a setting. Missing keys are ignored."""
        with self._guard.get_connection("delete_setting") as conn:
            self._execute_with_timing(
                conn,
                "DELETE FROM settings WHERE key = ?",
                (key,),
            )
            conn.commit()
