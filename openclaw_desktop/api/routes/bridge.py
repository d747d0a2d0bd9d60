"""Command bridge route: the UI's request/response channel into the store.

The UI calls POST /api/invoke/<command> with a JSON object of named arguments
and receives either {"data": <payload>} or {"error": "<message>"}.
"""

from __future__ import annotations

from typing import Any

from apiflask import APIBlueprint
from flask import request

from openclaw_desktop.api.commands import (
    CommandError,
    InvalidArgumentsError,
    UnknownCommandError,
    invoke,
)
from openclaw_desktop.api.errors import (
    invalid_json_error,
    not_found_error,
    server_error,
    validation_error,
)
from openclaw_desktop.utils.logging import get_logger, log_command_arguments

logger = get_logger(__name__)

api = APIBlueprint("bridge", __name__, url_prefix="/api", tag="Bridge")


def _read_arguments() -> dict[str, Any] | None:
    """Read named arguments from the request body.

    An empty body means no arguments. Returns None if the body is not a JSON object.
    """
    if not request.get_data(cache=True):
        return {}
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        return None
    return data


@api.route("/invoke/<command>", methods=["POST"])
@api.doc(responses=[400, 404, 500])
def invoke_command(command: str) -> tuple[dict[str, Any], int]:
    """Invoke a named store command.

    Returns:
        200: {"data": payload}
        400: Invalid JSON body or invalid arguments
        404: Unknown command
        500: Store failure
    """
    args = _read_arguments()
    if args is None:
        return invalid_json_error()

    log_command_arguments(logger, command, args)

    try:
        payload = invoke(command, args)
    except UnknownCommandError as e:
        return not_found_error(str(e))
    except InvalidArgumentsError as e:
        return validation_error(str(e))
    except CommandError as e:
        return server_error(str(e))

    return {"data": payload}, 200
