"""Unit tests for query timing and structured log output."""

import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from unittest.mock import patch

import pytest

from openclaw_desktop.config import Config
from openclaw_desktop.constants import LOG_FILE_NAME
from openclaw_desktop.db.models import Database
from openclaw_desktop.utils.logging import (
    JSONFormatter,
    log_command_arguments,
    redact_arguments,
    request_id_var,
    setup_logging,
)

BASE_LOGGER = "openclaw_desktop.db.models.base"


class TestExecuteWithTiming:
    """Tests for Database._execute_with_timing()."""

    def test_no_records_when_disabled(
        self, test_database: Database, caplog: pytest.LogCaptureFixture
    ) -> None:
        """With query logging off, queries should run without timing records."""
        test_database._should_log_queries = False
        test_database._slow_query_threshold_ms = 0

        with caplog.at_level(logging.DEBUG, logger=BASE_LOGGER):
            test_database.set_setting("theme", "dark")

        assert test_database.get_setting("theme") == "dark"
        assert not [r for r in caplog.records if hasattr(r, "query_snippet")]

    def test_slow_query_logged(
        self, test_database: Database, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Queries at or over the threshold should log a warning with a snippet."""
        test_database._should_log_queries = True
        test_database._slow_query_threshold_ms = 0

        with caplog.at_level(logging.WARNING, logger=BASE_LOGGER):
            test_database.get_setting("theme")

        records = [r for r in caplog.records if r.getMessage() == "Slow query detected"]
        assert len(records) == 1
        assert records[0].query_snippet == "SELECT value FROM settings WHERE key = ?"  # type: ignore[attr-defined]
        assert records[0].param_count == 1  # type: ignore[attr-defined]
        assert records[0].db_path == str(test_database.db_path)  # type: ignore[attr-defined]

    def test_parameter_values_not_logged(
        self, test_database: Database, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Setting values bound as parameters should never appear in query records."""
        test_database._should_log_queries = True
        test_database._slow_query_threshold_ms = 0

        with caplog.at_level(logging.DEBUG, logger=BASE_LOGGER):
            test_database.set_setting("openai_api_key", "sk-very-secret-value")

        records = [r for r in caplog.records if hasattr(r, "query_snippet")]
        assert records
        for record in records:
            assert "sk-very-secret-value" not in json.dumps(record.__dict__, default=str)

    def test_fast_query_not_warned(
        self, test_database: Database, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Queries under the threshold should log at DEBUG, not WARNING."""
        test_database._should_log_queries = True
        test_database._slow_query_threshold_ms = 60_000

        with caplog.at_level(logging.DEBUG, logger=BASE_LOGGER):
            test_database.list_agents()

        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]
        assert [r for r in caplog.records if r.getMessage() == "Query executed"]


class TestQueryLoggingConfig:
    """Tests for how a Database decides whether to time queries."""

    def test_disabled_outside_development(self, tmp_path: Path) -> None:
        """Query timing should be off in testing at INFO level."""
        with patch.object(Config, "APP_ENV", "testing"), patch.object(Config, "LOG_LEVEL", "INFO"):
            db = Database(db_path=tmp_path / "store.db")
        db.close()

        assert db._should_log_queries is False

    def test_enabled_in_development(self, tmp_path: Path) -> None:
        """Development mode should turn on query timing."""
        with patch.object(Config, "APP_ENV", "development"):
            db = Database(db_path=tmp_path / "store.db")
        db.close()

        assert db._should_log_queries is True
        assert db._slow_query_threshold_ms == Config.SLOW_QUERY_THRESHOLD_MS

    def test_enabled_at_debug_level(self, tmp_path: Path) -> None:
        """DEBUG logging should turn on query timing in any environment."""
        with patch.object(Config, "APP_ENV", "production"), patch.object(
            Config, "LOG_LEVEL", "DEBUG"
        ):
            db = Database(db_path=tmp_path / "store.db")
        db.close()

        assert db._should_log_queries is True


class TestJSONFormatter:
    """Tests for JSONFormatter output."""

    def _record(self, **extra: object) -> logging.LogRecord:
        record = logging.LogRecord(
            name="openclaw_desktop.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Agent created",
            args=(),
            exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_basic_fields(self) -> None:
        """Every line should carry level, logger and message."""
        data = json.loads(JSONFormatter().format(self._record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "openclaw_desktop.test"
        assert data["message"] == "Agent created"
        assert "timestamp" in data

    def test_extra_fields_included(self) -> None:
        """Fields passed via extra should appear at the top level."""
        data = json.loads(JSONFormatter().format(self._record(agent_id="abc")))

        assert data["agent_id"] == "abc"

    def test_request_id_included(self) -> None:
        """The current request ID should be attached when set."""
        token = request_id_var.set("req-123")
        try:
            data = json.loads(JSONFormatter().format(self._record()))
        finally:
            request_id_var.reset(token)

        assert data["request_id"] == "req-123"

    def test_exception_serialized(self) -> None:
        """Exception info should be rendered as a structured object."""
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = self._record()
            record.exc_info = sys.exc_info()

        data = json.loads(JSONFormatter().format(record))

        assert data["exception"]["type"] == "RuntimeError"
        assert data["exception"]["message"] == "boom"


class TestCommandArgumentLogging:
    """Tests for redacted argument logging."""

    def test_setting_values_redacted(self) -> None:
        """Setting values should never reach the logs."""
        redacted = redact_arguments({"key": "openai_api_key", "value": "sk-secret"})

        assert redacted == {"key": "openai_api_key", "value": "***"}

    def test_other_arguments_kept(self) -> None:
        """Non-sensitive arguments should be logged as given."""
        args = {"agentId": "a1", "actionType": "publish"}

        assert redact_arguments(args) == args

    def test_snippet_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        """At DEBUG level the redacted snippet should be attached to the record."""
        logger = logging.getLogger("openclaw_desktop.test.bridge")
        with caplog.at_level(logging.DEBUG, logger="openclaw_desktop.test.bridge"):
            log_command_arguments(logger, "set_setting", {"key": "k", "value": "secret"})

        records = [r for r in caplog.records if r.getMessage() == "Invoking command"]
        assert len(records) == 1
        assert records[0].command == "set_setting"  # type: ignore[attr-defined]
        assert "secret" not in records[0].args_snippet  # type: ignore[attr-defined]


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_file_logging(self, tmp_path: Path) -> None:
        """With LOG_TO_FILE, records should also land in the data dir's log file."""
        root = logging.getLogger()
        saved_handlers = root.handlers[:]
        saved_level = root.level
        try:
            with patch.object(Config, "LOG_TO_FILE", True), patch.object(
                Config, "DATA_DIR", tmp_path
            ):
                setup_logging()
            logging.getLogger("openclaw_desktop.test.file").warning(
                "Written to file", extra={"agent_id": "a1"}
            )
            file_handlers = [h for h in root.handlers if isinstance(h, RotatingFileHandler)]
            assert len(file_handlers) == 1
            file_handlers[0].flush()

            lines = (tmp_path / "logs" / LOG_FILE_NAME).read_text().splitlines()
            data = json.loads(lines[-1])
            assert data["message"] == "Written to file"
            assert data["agent_id"] == "a1"
        finally:
            for handler in root.handlers[:]:
                root.removeHandler(handler)
                if isinstance(handler, RotatingFileHandler):
                    handler.close()
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)
