"""Approval queue database operations mixin.

Approval items are created as "pending" and later given whatever status the
approver chooses. No transition is validated and items are never deleted.
"""

from __future__ import annotations

import sqlite3
from typing import TYPE_CHECKING, Any

from openclaw_desktop.constants import APPROVAL_STATUS_PENDING
from openclaw_desktop.db.models.dataclasses import ApprovalItem
from openclaw_desktop.db.models.helpers import (
    format_timestamp,
    new_record_id,
    parse_timestamp,
    utc_now,
)
from openclaw_desktop.utils.logging import get_logger

if TYPE_CHECKING:
    from openclaw_desktop.utils.connection_guard import ConnectionGuard

logger = get_logger(__name__)


class ApprovalMixin:
    """Mixin providing approval queue database operations."""

    _guard: ConnectionGuard

    def _execute_with_timing(
        self,
        conn: sqlite3.Connection,
        query: str,
        params: tuple[Any, ...] = (),
    ) -> sqlite3.Cursor:
        """Execute query with timing (defined in base class)."""
        raise NotImplementedError

    def _row_to_approval(self, row: sqlite3.Row) -> ApprovalItem:
        """Convert a database row to an ApprovalItem object."""
        return ApprovalItem(
            id=row["id"],
            agent_id=row["agent_id"] or "",
            action_type=row["action_type"],
            content_preview=row["content_preview"] or "",
            status=row["status"] or APPROVAL_STATUS_PENDING,
            created_at=parse_timestamp(row["created_at"]),
        )

    def add_approval(self, agent_id: str, action_type: str, content_preview: str) -> ApprovalItem:
        """Queue a new approval item.

        Args:
            agent_id: The requesting agent's id (not checked against agents)
            action_type: Kind of action awaiting approval
            content_preview: Preview of the content to approve

        Returns:
            The created ApprovalItem, always with status "pending"
        """
        item = ApprovalItem(
            id=new_record_id(),
            agent_id=agent_id,
            action_type=action_type,
            content_preview=content_preview,
            status=APPROVAL_STATUS_PENDING,
            created_at=utc_now(),
        )

        with self._guard.get_connection("add_approval") as conn:
            self._execute_with_timing(
                conn,
                """
                INSERT INTO approval_queue
                    (id, agent_id, action_type, content_preview, status, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    item.id,
                    item.agent_id,
                    item.action_type,
                    item.content_preview,
                    item.status,
                    format_timestamp(item.created_at),
                ),
            )
            conn.commit()

        logger.info(
            "Approval queued",
            extra={"approval_id": item.id, "agent_id": agent_id, "action_type": action_type},
        )
        return item

    def update_approval(self, approval_id: str, status: str) -> None:
        """Set an approval item's status. Unknown ids are ignored."""
        with self._guard.get_connection("update_approval") as conn:
            cursor = self._execute_with_timing(
                conn,
                "UPDATE approval_queue SET status = ? WHERE id = ?",
                (status, approval_id),
            )
            conn.commit()
            logger.debug(
                "Approval status updated",
                extra={
                    "approval_id": approval_id,
                    "status": status,
                    "matched": cursor.rowcount > 0,
                },
            )

    def get_approvals(self) -> list[ApprovalItem]:
        """List all approval items, newest first."""
        with self._guard.get_connection("get_approvals") as conn:
            rows = self._execute_with_timing(
                conn,
                """
                SELECT id, agent_id, action_type, content_preview, status, created_at
                FROM approval_queue
                ORDER BY created_at DESC, rowid DESC
                """,
            ).fetchall()
            return [self._row_to_approval(row) for row in rows]
