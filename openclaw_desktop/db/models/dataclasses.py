"""Database model dataclasses.

These dataclasses represent the records stored in the database.
They are returned by Database methods and serialized by the command layer.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Agent:
    """A named automation configuration.

    Nothing in this package executes agents. schedule and sandbox are stored
    as given and never interpreted.
    """

    id: str
    name: str
    role: str
    goal: str
    tools: str  # Serialized tool list, stored verbatim
    schedule: str  # Cron-like expression, uninterpreted
    config_json: str  # JSON snapshot of the creation inputs
    sandbox: bool
    created_at: datetime


@dataclass
class ExecutionLog:
    """An append-only record of a past action's outcome."""

    id: int
    agent_id: str  # Free string, may name a non-agent source such as "system"
    action: str
    status: str
    output: str
    error: str
    created_at: datetime


@dataclass
class ApprovalItem:
    """An action waiting for human sign-off.

    status starts as "pending" and is set by the approver to any string.
    """

    id: str
    agent_id: str
    action_type: str
    content_preview: str
    status: str
    created_at: datetime
