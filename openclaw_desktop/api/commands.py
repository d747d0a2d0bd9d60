"""Named command handlers: the request surface of the store.

Each command takes named arguments, validates them against a pydantic schema,
calls the matching Database operation and returns a JSON-serializable payload.
Every failure is raised as a CommandError carrying a readable message, which the
bridge passes to the UI verbatim.

Usage:
    from openclaw_desktop.api.commands import invoke

    agent = invoke("create_agent", {"name": "Bot1", "role": "writer"})
    invoke("delete_agent", {"id": agent["id"]})
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import ValidationError

from openclaw_desktop.api.schemas import (
    AddApprovalArgs,
    AddLogArgs,
    CommandArgs,
    CreateAgentArgs,
    DeleteAgentArgs,
    GetLogsArgs,
    NoArgs,
    SetSettingArgs,
    SettingKeyArgs,
    UpdateApprovalArgs,
)
from openclaw_desktop.api.validation import pydantic_to_error_message
from openclaw_desktop.db.exceptions import StoreError
from openclaw_desktop.db.models import Agent, ApprovalItem, Database, ExecutionLog, get_database
from openclaw_desktop.db.models.helpers import format_timestamp
from openclaw_desktop.utils.logging import get_logger

logger = get_logger(__name__)


class CommandError(Exception):
    """A command failed. The message is meant to be shown to the user."""


class UnknownCommandError(CommandError):
    """No command is registered under the requested name."""


class InvalidArgumentsError(CommandError):
    """The named arguments did not match the command's schema."""


@dataclass(frozen=True)
class Command:
    """A registered command: its name, argument schema and handler."""

    name: str
    args_model: type[CommandArgs]
    handler: Callable[[Database, Any], Any]


COMMANDS: dict[str, Command] = {}

T = TypeVar("T", bound=CommandArgs)


def command(
    name: str, args_model: type[T]
) -> Callable[[Callable[[Database, T], Any]], Callable[[Database, T], Any]]:
    """Register a handler under a command name."""

    def decorator(f: Callable[[Database, T], Any]) -> Callable[[Database, T], Any]:
        COMMANDS[name] = Command(name=name, args_model=args_model, handler=f)
        return f

    return decorator


# ============================================================================
# Serialization Helpers
# ============================================================================


def _agent_to_response(agent: Agent) -> dict[str, Any]:
    """Convert an Agent object to response dict."""
    return {
        "id": agent.id,
        "name": agent.name,
        "role": agent.role,
        "goal": agent.goal,
        "tools": agent.tools,
        "schedule": agent.schedule,
        "config_json": agent.config_json,
        "sandbox": agent.sandbox,
        "created_at": format_timestamp(agent.created_at),
    }


def _log_to_response(log: ExecutionLog) -> dict[str, Any]:
    """Convert an ExecutionLog object to response dict."""
    return {
        "id": log.id,
        "agent_id": log.agent_id,
        "action": log.action,
        "status": log.status,
        "output": log.output,
        "error": log.error,
        "created_at": format_timestamp(log.created_at),
    }


def _approval_to_response(item: ApprovalItem) -> dict[str, Any]:
    """Convert an ApprovalItem object to response dict."""
    return {
        "id": item.id,
        "agent_id": item.agent_id,
        "action_type": item.action_type,
        "content_preview": item.content_preview,
        "status": item.status,
        "created_at": format_timestamp(item.created_at),
    }


# ============================================================================
# Agents
# ============================================================================


@command("create_agent", CreateAgentArgs)
def create_agent(db: Database, args: CreateAgentArgs) -> dict[str, Any]:
    agent = db.create_agent(
        name=args.name,
        role=args.role,
        goal=args.goal,
        tools=args.tools,
        schedule=args.schedule,
        sandbox=args.sandbox,
    )
    return _agent_to_response(agent)


@command("list_agents", NoArgs)
def list_agents(db: Database, args: NoArgs) -> list[dict[str, Any]]:
    return [_agent_to_response(agent) for agent in db.list_agents()]


@command("delete_agent", DeleteAgentArgs)
def delete_agent(db: Database, args: DeleteAgentArgs) -> None:
    db.delete_agent(args.id)


# ============================================================================
# Execution Logs
# ============================================================================


@command("add_log", AddLogArgs)
def add_log(db: Database, args: AddLogArgs) -> None:
    db.add_log(
        agent_id=args.agent_id,
        action=args.action,
        status=args.status,
        output=args.output,
        error=args.error,
    )


@command("get_logs", GetLogsArgs)
def get_logs(db: Database, args: GetLogsArgs) -> list[dict[str, Any]]:
    return [_log_to_response(log) for log in db.get_logs(args.limit)]


# ============================================================================
# Settings
# ============================================================================


@command("get_setting", SettingKeyArgs)
def get_setting(db: Database, args: SettingKeyArgs) -> str | None:
    return db.get_setting(args.key)


@command("set_setting", SetSettingArgs)
def set_setting(db: Database, args: SetSettingArgs) -> None:
    db.set_setting(args.key, args.value)


@command("delete_setting", SettingKeyArgs)
def delete_setting(db: Database, args: SettingKeyArgs) -> None:
    db.delete_setting(args.key)


# ============================================================================
# Approvals
# ============================================================================


@command("add_approval", AddApprovalArgs)
def add_approval(db: Database, args: AddApprovalArgs) -> dict[str, Any]:
    item = db.add_approval(
        agent_id=args.agent_id,
        action_type=args.action_type,
        content_preview=args.content_preview,
    )
    return _approval_to_response(item)


@command("update_approval", UpdateApprovalArgs)
def update_approval(db: Database, args: UpdateApprovalArgs) -> None:
    db.update_approval(args.id, args.status)


@command("get_approvals", NoArgs)
def get_approvals(db: Database, args: NoArgs) -> list[dict[str, Any]]:
    return [_approval_to_response(item) for item in db.get_approvals()]


# ============================================================================
# Dispatch
# ============================================================================


def invoke(name: str, args: dict[str, Any] | None = None, db: Database | None = None) -> Any:
    """Run a command by name.

    Args:
        name: Command name, e.g. "create_agent"
        args: Named arguments (camelCase or snake_case)
        db: Database to use. Defaults to the shared instance.

    Returns:
        The command's JSON-serializable payload (None for commands with no result)

    Raises:
        UnknownCommandError: No command has this name
        InvalidArgumentsError: The arguments failed validation
        CommandError: The store operation failed
    """
    cmd = COMMANDS.get(name)
    if cmd is None:
        raise UnknownCommandError(f"Unknown command: {name}")

    try:
        validated = cmd.args_model.model_validate(args or {})
    except ValidationError as e:
        raise InvalidArgumentsError(pydantic_to_error_message(e)) from e

    try:
        database = db if db is not None else get_database()
        return cmd.handler(database, validated)
    except StoreError as e:
        logger.error(
            "Command failed",
            extra={"command": name, "operation": e.operation, "error": str(e)},
        )
        raise CommandError(str(e)) from e
