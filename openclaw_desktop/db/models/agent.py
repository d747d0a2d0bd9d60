"""Agent database operations mixin.

Agents are plain configuration records: created, listed and deleted. The
schedule and sandbox fields are stored as given and never interpreted here.
"""

from __future__ import annotations

import json
import sqlite3
from typing import TYPE_CHECKING, Any

from openclaw_desktop.db.models.dataclasses import Agent
from openclaw_desktop.db.models.helpers import (
    format_timestamp,
    new_record_id,
    parse_timestamp,
    utc_now,
)
from openclaw_desktop.utils.logging import get_logger

if TYPE_CHECKING:
    from openclaw_desktop.utils.connection_guard import ConnectionGuard

logger = get_logger(__name__)

AGENT_COLUMNS = "id, name, role, goal, tools, schedule, config_json, sandbox, created_at"


def build_agent_config(
    name: str, role: str, goal: str, tools: str, schedule: str, sandbox: bool
) -> str:
    """Serialize the creation inputs into the compact, key-sorted config_json snapshot."""
    return json.dumps(
        {
            "name": name,
            "role": role,
            "goal": goal,
            "tools": tools,
            "schedule": schedule,
            "sandbox": sandbox,
        },
        separators=(",", ":"),
        ensure_ascii=False,
        sort_keys=True,
    )


class AgentMixin:
    """Mixin providing Agent-related database operations."""

    _guard: ConnectionGuard

    def _execute_with_timing(
        self,
        conn: sqlite3.Connection,
        query: str,
        params: tuple[Any, ...] = (),
    ) -> sqlite3.Cursor:
        """Execute query with timing (defined in base class)."""
        raise NotImplementedError

    def _row_to_agent(self, row: sqlite3.Row) -> Agent:
        """Convert a database row to an Agent object."""
        return Agent(
            id=row["id"],
            name=row["name"],
            role=row["role"] or "",
            goal=row["goal"] or "",
            tools=row["tools"] or "",
            schedule=row["schedule"] or "",
            config_json=row["config_json"] or "",
            sandbox=bool(row["sandbox"]),
            created_at=parse_timestamp(row["created_at"]),
        )

    def create_agent(
        self,
        name: str,
        role: str,
        goal: str,
        tools: str,
        schedule: str,
        sandbox: bool,
    ) -> Agent:
        """Create a new agent record.

        Names are not unique; creating two agents with the same name yields
        two records with different ids.

        Args:
            name: Display name
            role: Free-text role
            goal: Free-text description of what the agent is for
            tools: Serialized tool list, stored verbatim
            schedule: Cron-like expression, stored verbatim
            sandbox: Sandbox flag, stored verbatim

        Returns:
            The created Agent object
        """
        agent = Agent(
            id=new_record_id(),
            name=name,
            role=role,
            goal=goal,
            tools=tools,
            schedule=schedule,
            config_json=build_agent_config(name, role, goal, tools, schedule, sandbox),
            sandbox=sandbox,
            created_at=utc_now(),
        )

        logger.debug("Creating agent", extra={"agent_id": agent.id, "agent_name": name})

        with self._guard.get_connection("create_agent") as conn:
            self._execute_with_timing(
                conn,
                f"INSERT INTO agents ({AGENT_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    agent.id,
                    agent.name,
                    agent.role,
                    agent.goal,
                    agent.tools,
                    agent.schedule,
                    agent.config_json,
                    1 if agent.sandbox else 0,
                    format_timestamp(agent.created_at),
                ),
            )
            conn.commit()

        logger.info("Agent created", extra={"agent_id": agent.id})
        return agent

    def list_agents(self) -> list[Agent]:
        """List all agents, newest first."""
        with self._guard.get_connection("list_agents") as conn:
            rows = self._execute_with_timing(
                conn,
                f"SELECT {AGENT_COLUMNS} FROM agents ORDER BY created_at DESC, rowid DESC",
            ).fetchall()
            return [self._row_to_agent(row) for row in rows]

    def delete_agent(self, agent_id: str) -> None:
        """Delete an agent. Unknown ids are ignored."""
        with self._guard.get_connection("delete_agent") as conn:
            cursor = self._execute_with_timing(
                conn,
                "DELETE FROM agents WHERE id = ?",
                (agent_id,),
            )
            conn.commit()
            logger.debug(
                "Agent delete executed",
                extra={"agent_id": agent_id, "deleted": cursor.rowcount > 0},
            )
