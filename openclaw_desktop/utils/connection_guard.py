"""Single shared SQLite connection behind an exclusive lock.

The desktop store serializes all database access process-wide: one connection,
one mutex, held for the full duration of every operation. No pool, no
read/write split and no transactions spanning operations.

Usage:
    guard = ConnectionGuard("/path/to/openclaw.db")

    with guard.get_connection("list_agents") as conn:
        conn.execute("SELECT * FROM agents")

    # Call guard.close() on shutdown
"""

import sqlite3
import threading
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from openclaw_desktop.config import Config
from openclaw_desktop.db.exceptions import DatabaseError, LockAcquisitionError
from openclaw_desktop.utils.logging import get_logger

logger = get_logger(__name__)


class ConnectionGuard:
    """Exclusive access to one SQLite connection.

    Lock acquisition is bounded so a stuck holder surfaces as an error in the
    waiting caller instead of a hang. A connection that stops answering is
    replaced the next time the lock is taken.
    """

    def __init__(
        self,
        db_path: Path | str,
        lock_timeout: float | None = None,
        busy_timeout: float | None = None,
    ) -> None:
        """Initialize the guard. The connection itself is opened lazily.

        Args:
            db_path: Path to the SQLite database file
            lock_timeout: Seconds to wait for the lock.
                Defaults to Config.DB_LOCK_TIMEOUT_SECONDS.
            busy_timeout: Seconds SQLite waits on file locks held by other processes.
                Defaults to Config.DB_BUSY_TIMEOUT_SECONDS.
        """
        self.db_path = Path(db_path) if isinstance(db_path, str) else db_path
        self.lock_timeout = (
            lock_timeout if lock_timeout is not None else Config.DB_LOCK_TIMEOUT_SECONDS
        )
        self.busy_timeout = (
            busy_timeout if busy_timeout is not None else Config.DB_BUSY_TIMEOUT_SECONDS
        )
        self._lock = threading.Lock()
        self._conn: sqlite3.Connection | None = None
        logger.debug(
            "Connection guard created",
            extra={"db_path": str(self.db_path), "lock_timeout": self.lock_timeout},
        )

    def _create_connection(self) -> sqlite3.Connection:
        """Create a new connection with standard settings."""
        conn = sqlite3.connect(
            self.db_path,
            # Shared across request threads; the lock provides the synchronization
            check_same_thread=False,
            timeout=self.busy_timeout,
        )
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        # Foreign keys stay off: agent_id columns are free strings, not references
        logger.debug("Opened database connection", extra={"db_path": str(self.db_path)})
        return conn

    def _ensure_connection(self) -> sqlite3.Connection:
        """Return the shared connection, reopening it if it is broken.

        Must be called with self._lock held.
        """
        if self._conn is not None:
            try:
                self._conn.execute("SELECT 1")
                return self._conn
            except sqlite3.Error:
                logger.warning(
                    "Shared connection was broken, creating new one",
                    extra={"db_path": str(self.db_path)},
                )
                try:
                    self._conn.close()
                except sqlite3.Error:
                    pass
                self._conn = None

        self._conn = self._create_connection()
        return self._conn

    @contextmanager
    def get_connection(self, operation: str | None = None) -> Generator[sqlite3.Connection]:
        """Hold the lock and yield the shared connection.

        The lock is released when the block exits, on success or failure.
        Uncommitted work is rolled back on failure.

        Args:
            operation: Name of the calling store operation, for logs and errors

        Yields:
            The shared connection, configured with row_factory=sqlite3.Row

        Raises:
            LockAcquisitionError: The lock was not acquired within lock_timeout
            DatabaseError: SQLite failed while opening or using the connection
        """
        if not self._lock.acquire(timeout=self.lock_timeout):
            logger.warning(
                "Timed out waiting for database lock",
                extra={"operation": operation, "lock_timeout": self.lock_timeout},
            )
            raise LockAcquisitionError(
                f"Timed out after {self.lock_timeout}s waiting for the database lock",
                operation=operation,
            )
        try:
            try:
                conn = self._ensure_connection()
            except sqlite3.Error as e:
                logger.error(
                    "Failed to open database",
                    extra={"operation": operation, "db_path": str(self.db_path), "error": str(e)},
                )
                raise DatabaseError(str(e), operation=operation) from e

            try:
                yield conn
            except (sqlite3.Error, OverflowError) as e:
                self._rollback(conn)
                logger.error(
                    "Database operation failed",
                    extra={"operation": operation, "error": str(e)},
                )
                raise DatabaseError(str(e), operation=operation) from e
            except Exception:
                self._rollback(conn)
                raise
        finally:
            self._lock.release()

    @staticmethod
    def _rollback(conn: sqlite3.Connection) -> None:
        try:
            conn.rollback()
        except sqlite3.Error:
            pass

    def close(self) -> None:
        """Close the shared connection.

        Call this on application shutdown.
        """
        with self._lock:
            if self._conn is not None:
                try:
                    self._conn.close()
                except sqlite3.Error:
                    pass
                self._conn = None

        logger.info("Database connection closed", extra={"db_path": str(self.db_path)})

    def is_open(self) -> bool:
        """Return True if the shared connection is currently open."""
        with self._lock:
            return self._conn is not None
