"""Error response utilities for the request bridge.

Errors reach the UI as a single human-readable string:

    {"error": "Timed out after 10.0s waiting for the database lock"}

The UI shows the string verbatim or maps it to a generic failure message.
Messages are not guaranteed to be stable across versions.
"""

from typing import Any


def create_error_response(message: str) -> dict[str, Any]:
    """Create an error response body."""
    return {"error": message}


def validation_error(message: str) -> tuple[dict[str, Any], int]:
    """Create a validation error response (400)."""
    return create_error_response(message), 400


def not_found_error(message: str) -> tuple[dict[str, Any], int]:
    """Create a not found error response (404)."""
    return create_error_response(message), 404


def server_error(message: str) -> tuple[dict[str, Any], int]:
    """Create a store failure response (500)."""
    return create_error_response(message), 500


def invalid_json_error() -> tuple[dict[str, Any], int]:
    """Create an invalid JSON error response (400)."""
    return create_error_response("Request body must be a JSON object of named arguments"), 400
