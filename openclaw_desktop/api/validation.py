"""Argument validation utilities using Pydantic.

Converts pydantic validation errors into the single human-readable string
that the command layer reports to callers.
"""

from pydantic import ValidationError

from openclaw_desktop.utils.logging import get_logger

logger = get_logger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "


def pydantic_to_error_message(error: ValidationError) -> str:
    """Convert a pydantic ValidationError to a readable message.

    Only the first error is reported. Its location becomes a dot-separated
    field path prefixed to the message, e.g. "limit: Input should be a valid
    integer".
    """
    first_error = error.errors()[0]

    loc = first_error.get("loc", ())
    field = ".".join(str(x) for x in loc) if loc else None

    message = first_error.get("msg", "Invalid input")

    # Custom validators produce "Value error, <message>"
    if message.startswith(_VALUE_ERROR_PREFIX):
        message = message[len(_VALUE_ERROR_PREFIX) :]

    logger.debug(
        "Pydantic validation failed",
        extra={
            "field": field,
            "message": message,
            "error_count": error.error_count(),
        },
    )

    return f"{field}: {message}" if field else message
