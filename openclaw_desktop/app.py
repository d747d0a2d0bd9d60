import sys
import uuid
from typing import Any

from apiflask import APIFlask, HTTPError
from flask import Response, g, request

from openclaw_desktop.api.errors import create_error_response
from openclaw_desktop.api.routes import register_blueprints
from openclaw_desktop.config import Config
from openclaw_desktop.db.exceptions import StoreError
from openclaw_desktop.db.models import get_database, reset_database
from openclaw_desktop.utils.logging import get_logger, set_request_id, setup_logging

APP_TITLE = "OpenClaw Desktop Store"
APP_VERSION = "0.1.0"


def create_app() -> APIFlask:
    """Create and configure the bridge application."""
    setup_logging()
    logger = get_logger(__name__)
    logger.info(
        "Bridge app created",
        extra={
            "environment": Config.APP_ENV,
            "log_level": Config.LOG_LEVEL,
        },
    )

    app = APIFlask(__name__, title=APP_TITLE, version=APP_VERSION)
    app.config["APP_VERSION"] = APP_VERSION

    # Request ID middleware - must be before blueprints
    @app.before_request
    def add_request_id() -> None:
        """Generate and store request ID for correlation."""
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        set_request_id(request_id)
        g.request_id = request_id

    @app.before_request
    def log_request() -> None:
        """Log incoming requests."""
        logger.info(
            "Incoming request",
            extra={
                "method": request.method,
                "path": request.path,
            },
        )

    @app.after_request
    def log_response(response: Response) -> Response:
        """Log outgoing responses and echo the request ID."""
        response.headers["X-Request-ID"] = g.get("request_id", "")
        logger.info(
            "Outgoing response",
            extra={
                "method": request.method,
                "path": request.path,
                "status_code": response.status_code,
                "content_length": response.content_length,
            },
        )
        return response

    @app.error_processor
    def bridge_error(error: HTTPError) -> tuple[dict[str, Any], int, Any]:
        """Render framework errors (404, 405, 500) in the bridge's error shape."""
        return create_error_response(error.message), error.status_code, error.headers

    register_blueprints(app)

    return app


def main() -> None:
    """Main entry point."""
    setup_logging()
    logger = get_logger(__name__)

    errors = Config.validate()
    if errors:
        logger.error("Configuration validation failed", extra={"errors": errors})
        print("Configuration errors:")
        for error in errors:
            print(f"  - {error}")
        sys.exit(1)

    # Open the store and create the schema before accepting requests
    Config.ensure_data_dir()
    try:
        get_database()
    except StoreError as e:
        logger.error(
            "Failed to open database",
            extra={"db_path": str(Config.DATABASE_PATH), "error": str(e)},
        )
        print(f"Failed to open database at {Config.DATABASE_PATH}: {e}")
        sys.exit(1)

    app = create_app()
    logger.info(
        "Starting OpenClaw Desktop Store",
        extra={
            "host": Config.HOST,
            "port": Config.PORT,
            "environment": Config.APP_ENV,
            "db_path": str(Config.DATABASE_PATH),
        },
    )
    try:
        app.run(host=Config.HOST, port=Config.PORT, debug=Config.is_development())
    finally:
        reset_database()


if __name__ == "__main__":
    main()
