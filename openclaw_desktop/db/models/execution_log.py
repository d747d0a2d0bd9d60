"""Execution log database operations mixin.

Logs are append-only: no operation updates or deletes them.
"""

from __future__ import annotations

import sqlite3
from typing import TYPE_CHECKING, Any

from openclaw_desktop.config import Config
from openclaw_desktop.db.models.dataclasses import ExecutionLog
from openclaw_desktop.db.models.helpers import format_timestamp, parse_timestamp, utc_now

if TYPE_CHECKING:
    from openclaw_desktop.utils.connection_guard import ConnectionGuard


class ExecutionLogMixin:
    """Mixin providing execution log database operations."""

    _guard: ConnectionGuard

    def _execute_with_timing(
        self,
        conn: sqlite3.Connection,
        query: str,
        params: tuple[Any, ...] = (),
    ) -> sqlite3.Cursor:
        """Execute query with timing (defined in base class)."""
        raise NotImplementedError

    def _row_to_log(self, row: sqlite3.Row) -> ExecutionLog:
        """Convert a database row to an ExecutionLog object."""
        return ExecutionLog(
            id=row["id"],
            agent_id=row["agent_id"] or "",
            action=row["action"],
            status=row["status"],
            output=row["output"] or "",
            error=row["error"] or "",
            created_at=parse_timestamp(row["created_at"]),
        )

    def add_log(self, agent_id: str, action: str, status: str, output: str, error: str) -> None:
        """Append an execution log entry.

        The numeric id is assigned by SQLite and not returned.
        """
        with self._guard.get_connection("add_log") as conn:
            self._execute_with_timing(
                conn,
                """
                INSERT INTO execution_logs (agent_id, action, status, output, error, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (agent_id, action, status, output, error, format_timestamp(utc_now())),
            )
            conn.commit()

    def get_logs(self, limit: int | None = None) -> list[ExecutionLog]:
        """Get the most recent execution logs, newest first.

        Args:
            limit: Maximum number of entries. Defaults to Config.DEFAULT_LOG_LIMIT.
                Passed to SQLite as-is, so a negative limit means no limit.

        Returns:
            List of ExecutionLog objects
        """
        if limit is None:
            limit = Config.DEFAULT_LOG_LIMIT

        with self._guard.get_connection("get_logs") as conn:
            rows = self._execute_with_timing(
                conn,
                """
                SELECT id, agent_id, action, status, output, error, created_at
                FROM execution_logs
                ORDER BY created_at DESC, id DESC
                LIMIT ?
                """,
                (limit,),
            ).fetchall()
            return [self._row_to_log(row) for row in rows]
