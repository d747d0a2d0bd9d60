"""Pydantic schemas for command arguments.

Each command takes named arguments. The UI sends camelCase names (agentId,
actionType, contentPreview); snake_case names are accepted as well. Optional
text arguments default to the same values the UI sends when a field is left
empty.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from openclaw_desktop.constants import DEFAULT_AGENT_TOOLS, SQLITE_INTEGER_MAX, SQLITE_INTEGER_MIN


class CommandArgs(BaseModel):
    """Base schema for command arguments."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NoArgs(CommandArgs):
    """Schema for commands that take no arguments (list_agents, get_approvals)."""


# -----------------------------------------------------------------------------
# Agent Schemas
# -----------------------------------------------------------------------------


class CreateAgentArgs(CommandArgs):
    """Schema for create_agent.

    tools and schedule are free text and are not validated.
    """

    name: str
    role: str = ""
    goal: str = ""
    tools: str = DEFAULT_AGENT_TOOLS
    schedule: str = ""
    sandbox: bool = False


class DeleteAgentArgs(CommandArgs):
    """Schema for delete_agent."""

    id: str


# -----------------------------------------------------------------------------
# Execution Log Schemas
# -----------------------------------------------------------------------------


class AddLogArgs(CommandArgs):
    """Schema for add_log."""

    agent_id: str
    action: str
    status: str
    output: str = ""
    error: str = ""


class GetLogsArgs(CommandArgs):
    """Schema for get_logs.

    A missing or null limit means the configured default. A negative limit
    returns every entry.
    """

    limit: int | None = Field(None, ge=SQLITE_INTEGER_MIN, le=SQLITE_INTEGER_MAX)


# -----------------------------------------------------------------------------
# Settings Schemas
# -----------------------------------------------------------------------------


class SettingKeyArgs(CommandArgs):
    """Schema for get_setting and delete_setting."""

    key: str


class SetSettingArgs(CommandArgs):
    """Schema for set_setting."""

    key: str
    value: str


# -----------------------------------------------------------------------------
# Approval Schemas
# -----------------------------------------------------------------------------


class AddApprovalArgs(CommandArgs):
    """Schema for add_approval."""

    agent_id: str
    action_type: str
    content_preview: str = ""


class UpdateApprovalArgs(CommandArgs):
    """Schema for update_approval. Any status string is accepted."""

    id: str
    status: str
