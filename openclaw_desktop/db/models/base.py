"""Base database infrastructure.

Contains the core Database class with initialization, the connection guard and
timed query execution. The Database class is extended via mixins defined in
other modules.
"""

import sqlite3
import time
from pathlib import Path
from typing import Any

from yoyo import get_backend, read_migrations

from openclaw_desktop.config import Config
from openclaw_desktop.constants import MILLISECONDS_PER_SECOND
from openclaw_desktop.db.exceptions import DatabaseError
from openclaw_desktop.utils.connection_guard import ConnectionGuard
from openclaw_desktop.utils.logging import get_logger

logger = get_logger(__name__)

# Path to migrations directory
MIGRATIONS_DIR = Path(__file__).parent.parent.parent.parent / "migrations"

QUERY_SNIPPET_MAX_LENGTH = 200


def query_logging_enabled() -> bool:
    """Queries are timed in development mode or when LOG_LEVEL is DEBUG."""
    return Config.LOG_LEVEL == "DEBUG" or Config.is_development()


class DatabaseBase:
    """Base database class with core infrastructure.

    Provides the guarded connection, query execution with timing, and migration
    support. Extended via mixins for specific entity operations.
    """

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path or Config.DATABASE_PATH
        self._should_log_queries = query_logging_enabled()
        self._slow_query_threshold_ms: float = Config.SLOW_QUERY_THRESHOLD_MS
        self._guard = ConnectionGuard(self.db_path)
        self._init_db()

    def close(self) -> None:
        """Close the shared connection.

        Call this on application shutdown.
        """
        self._guard.close()

    def _execute_with_timing(
        self,
        conn: sqlite3.Connection,
        query: str,
        params: tuple[Any, ...] = (),
    ) -> sqlite3.Cursor:
        """Execute a query, timing it when query logging is enabled."""
        if not self._should_log_queries:
            return conn.execute(query, params)

        start_time = time.perf_counter()
        cursor = conn.execute(query, params)
        elapsed_ms = (time.perf_counter() - start_time) * MILLISECONDS_PER_SECOND
        self._log_query(query, len(params), elapsed_ms)
        return cursor

    def _log_query(self, query: str, param_count: int, elapsed_ms: float) -> None:
        # Parameter values are never logged: settings may hold API keys
        query_snippet = " ".join(query.split())
        if len(query_snippet) > QUERY_SNIPPET_MAX_LENGTH:
            query_snippet = query_snippet[:QUERY_SNIPPET_MAX_LENGTH] + "..."

        extra = {
            "query_snippet": query_snippet,
            "param_count": param_count,
            "elapsed_ms": round(elapsed_ms, 2),
            "db_path": str(self.db_path),
        }
        if elapsed_ms >= self._slow_query_threshold_ms:
            logger.warning(
                "Slow query detected",
                extra={**extra, "threshold_ms": self._slow_query_threshold_ms},
            )
        else:
            logger.debug("Query executed", extra=extra)

    def _init_db(self) -> None:
        """Create the data directory and run yoyo migrations.

        Safe on every startup: applied migrations are skipped and the schema
        itself only uses CREATE TABLE IF NOT EXISTS.
        """
        logger.debug("Initializing database", extra={"db_path": str(self.db_path)})
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            backend = get_backend(f"sqlite:///{self.db_path}")
        except sqlite3.Error as e:
            raise DatabaseError(str(e), operation="init_db") from e
        migrations = read_migrations(str(MIGRATIONS_DIR))
        try:
            with backend.lock():
                migrations_to_apply = backend.to_apply(migrations)
                if migrations_to_apply:
                    logger.info(
                        "Applying database migrations", extra={"count": len(migrations_to_apply)}
                    )
                backend.apply_migrations(migrations_to_apply)
        except sqlite3.Error as e:
            logger.error(
                "Database migration failed",
                extra={"db_path": str(self.db_path), "error": str(e)},
            )
            raise DatabaseError(str(e), operation="init_db") from e
        finally:
            backend.connection.close()
