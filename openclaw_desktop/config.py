import os
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

APP_DIR_NAME = "openclaw-desktop"


def platform_data_dir() -> Path:
    """Return the per-user application data directory for this platform.

    Windows uses %APPDATA%, macOS uses ~/Library/Application Support and
    everything else follows the XDG base directory spec.
    """
    if sys.platform == "win32":
        appdata = os.getenv("APPDATA")
        if appdata:
            return Path(appdata)
        return Path.home() / "AppData" / "Roaming"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    xdg_data_home = os.getenv("XDG_DATA_HOME")
    if xdg_data_home:
        return Path(xdg_data_home)
    return Path.home() / ".local" / "share"


def _resolve_data_dir() -> Path:
    override = os.getenv("OPENCLAW_DATA_DIR", "")
    if override:
        return Path(override).expanduser()
    return platform_data_dir() / APP_DIR_NAME


class Config:
    # Storage location
    DATA_DIR: Path = _resolve_data_dir()
    DATABASE_FILENAME: str = os.getenv("DATABASE_FILENAME", "openclaw.db")
    DATABASE_PATH: Path = DATA_DIR / DATABASE_FILENAME

    # Environment
    APP_ENV: str = os.getenv("APP_ENV", "production").lower()

    # Local request bridge (never bound to a public interface by default)
    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = int(os.getenv("PORT", "17310"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_TO_FILE: bool = os.getenv("LOG_TO_FILE", "false").lower() == "true"

    # Slow query logging (only active in development/debug mode)
    SLOW_QUERY_THRESHOLD_MS: int = int(os.getenv("SLOW_QUERY_THRESHOLD_MS", "100"))

    # Connection guard
    DB_LOCK_TIMEOUT_SECONDS: float = float(
        os.getenv("DB_LOCK_TIMEOUT_SECONDS", "10")
    )  # Max wait for the shared connection lock
    DB_BUSY_TIMEOUT_SECONDS: float = float(
        os.getenv("DB_BUSY_TIMEOUT_SECONDS", "5")
    )  # SQLite file lock wait

    # Execution logs
    DEFAULT_LOG_LIMIT: int = int(os.getenv("DEFAULT_LOG_LIMIT", "100"))

    @classmethod
    def is_development(cls) -> bool:
        """Check if running in development mode."""
        return cls.APP_ENV == "development"

    @classmethod
    def ensure_data_dir(cls) -> Path:
        """Create the data directory if it does not exist yet."""
        cls.DATA_DIR.mkdir(parents=True, exist_ok=True)
        return cls.DATA_DIR

    @classmethod
    def validate(cls) -> list[str]:
        """Validate configuration. Returns list of errors with clear guidance."""
        errors: list[str] = []

        valid_envs = {"development", "testing", "production"}
        if cls.APP_ENV not in valid_envs:
            errors.append(
                f"APP_ENV '{cls.APP_ENV}' is not valid. "
                f"Valid environments: {', '.join(sorted(valid_envs))}"
            )

        if cls.PORT < 1 or cls.PORT > 65535:
            errors.append(f"PORT must be between 1 and 65535, got {cls.PORT}")

        if not cls.DATABASE_FILENAME:
            errors.append("DATABASE_FILENAME must not be empty")

        if cls.DB_LOCK_TIMEOUT_SECONDS <= 0:
            errors.append(
                f"DB_LOCK_TIMEOUT_SECONDS must be positive, got {cls.DB_LOCK_TIMEOUT_SECONDS}"
            )

        if cls.DB_BUSY_TIMEOUT_SECONDS < 0:
            errors.append(
                f"DB_BUSY_TIMEOUT_SECONDS must not be negative, got {cls.DB_BUSY_TIMEOUT_SECONDS}"
            )

        if cls.DEFAULT_LOG_LIMIT < 1:
            errors.append(f"DEFAULT_LOG_LIMIT must be at least 1, got {cls.DEFAULT_LOG_LIMIT}")

        # Validate log level
        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if cls.LOG_LEVEL not in valid_log_levels:
            errors.append(
                f"LOG_LEVEL '{cls.LOG_LEVEL}' is not valid. "
                f"Valid levels: {', '.join(sorted(valid_log_levels))}"
            )

        return errors
