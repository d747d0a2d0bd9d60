"""Structured logging with JSON output.

Every log line is a single JSON object. Records emitted while serving a bridge
request carry a request_id field for correlation.

Logs go to stderr, and with LOG_TO_FILE enabled also to a rotating file under
<data dir>/logs/.
"""

import json
import logging
import sys
import traceback
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from typing import Any, cast

from flask import g, has_request_context

from openclaw_desktop.constants import (
    LOG_FILE_BACKUP_COUNT,
    LOG_FILE_MAX_BYTES,
    LOG_FILE_NAME,
    REDACTED_ARGUMENTS,
)

# Context variable to store request ID per request
request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

# Attributes every LogRecord has; anything else on a record came from extra={...}
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
}


def get_request_id() -> str | None:
    """Get the current request ID from context."""
    # Flask's g is set by the bridge middleware
    if has_request_context() and hasattr(g, "request_id"):
        return cast(str | None, g.request_id)
    return request_id_var.get()


def set_request_id(request_id: str) -> None:
    """Set the request ID in context."""
    request_id_var.set(request_id)
    if has_request_context():
        g.request_id = request_id


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = get_request_id()
        if request_id:
            log_data["request_id"] = request_id

        if record.exc_info:
            log_data["exception"] = self._exception_fields(record.exc_info)

        log_data.update(self._extra_fields(record))

        return json.dumps(log_data, default=str)

    @staticmethod
    def _exception_fields(exc_info: Any) -> dict[str, Any]:
        exc_type, exc_value, _ = exc_info
        return {
            "type": exc_type.__name__ if exc_type else None,
            "message": str(exc_value) if exc_value else None,
            "traceback": traceback.format_exception(*exc_info),
        }

    @staticmethod
    def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
        return {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }


def _file_handler(level: int) -> RotatingFileHandler:
    from openclaw_desktop.config import Config

    log_dir = Config.DATA_DIR / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging() -> None:
    """Configure structured logging for the application."""
    from openclaw_desktop.config import Config

    log_level = getattr(logging, Config.LOG_LEVEL, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        if isinstance(handler, RotatingFileHandler):
            handler.close()

    # stderr keeps stdout free for the desktop shell
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(console_handler)

    if Config.LOG_TO_FILE:
        root_logger.addHandler(_file_handler(log_level))

    # werkzeug logs every request line; yoyo logs every migration step
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("yoyo").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)


def redact_arguments(args: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of command arguments that is safe to log.

    Setting values may hold API keys, so they are masked.
    """
    return {key: "***" if key in REDACTED_ARGUMENTS else value for key, value in args.items()}


def log_command_arguments(
    logger: logging.Logger, command: str, args: dict[str, Any], max_length: int = 500
) -> None:
    """Log a truncated, redacted snapshot of a command's arguments at DEBUG level.

    Args:
        logger: The logger instance
        command: Command name
        args: Named arguments as received
        max_length: Maximum length of the snippet
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return
    try:
        args_str = json.dumps(redact_arguments(args), default=str)
    except (TypeError, ValueError):
        logger.debug("Failed to serialize command arguments", extra={"command": command})
        return
    if len(args_str) > max_length:
        args_str = args_str[:max_length] + "..."
    logger.debug("Invoking command", extra={"command": command, "args_snippet": args_str})
