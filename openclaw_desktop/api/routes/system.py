"""System routes: version and health checks."""

from typing import Any

from apiflask import APIBlueprint
from flask import current_app

from openclaw_desktop.api.commands import COMMANDS
from openclaw_desktop.config import Config
from openclaw_desktop.db.models import check_database_connectivity
from openclaw_desktop.utils.logging import get_logger

logger = get_logger(__name__)

api = APIBlueprint("system", __name__, url_prefix="/api", tag="System")


@api.route("/version", methods=["GET"])
def get_version() -> dict[str, Any]:
    """Get the store version and the commands it understands."""
    return {
        "version": current_app.config.get("APP_VERSION"),
        "commands": sorted(COMMANDS),
    }


@api.route("/health", methods=["GET"])
def health_check() -> tuple[dict[str, Any], int]:
    """Liveness probe - checks if the bridge process is responding.

    Does NOT check the database. Use /api/ready for that.
    """
    return {
        "status": "ok",
        "version": current_app.config.get("APP_VERSION"),
    }, 200


@api.route("/ready", methods=["GET"])
@api.doc(responses=[503])
def readiness_check() -> tuple[dict[str, Any], int]:
    """Readiness probe - checks if the database file is usable.

    Returns:
        200: Store is ready to serve commands
        503: Database is not accessible
    """
    db_ok, db_error = check_database_connectivity(Config.DATABASE_PATH)
    checks = {
        "database": {
            "status": "ok" if db_ok else "error",
            "message": "Connected" if db_ok else db_error,
        }
    }

    if db_ok:
        logger.debug("Readiness check passed")
    else:
        logger.warning("Readiness check failed", extra={"checks": checks})

    return {
        "status": "ready" if db_ok else "not_ready",
        "checks": checks,
        "version": current_app.config.get("APP_VERSION"),
    }, 200 if db_ok else 503
