"""
Initial database schema.

Creates the five store tables. Every statement uses IF NOT EXISTS so databases
created before migrations were tracked are left untouched.
"""

from yoyo import step

steps = [
    step(
        """
        CREATE TABLE IF NOT EXISTS agents (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            role TEXT DEFAULT '',
            goal TEXT DEFAULT '',
            tools TEXT DEFAULT '[]',
            schedule TEXT DEFAULT '',
            config_json TEXT DEFAULT '{}',
            sandbox INTEGER DEFAULT 0,
            created_at TEXT NOT NULL
        )
        """,
        "DROP TABLE IF EXISTS agents",
    ),
    step(
        """
        CREATE TABLE IF NOT EXISTS execution_logs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            agent_id TEXT DEFAULT '',
            action TEXT NOT NULL,
            status TEXT NOT NULL,
            output TEXT DEFAULT '',
            error TEXT DEFAULT '',
            created_at TEXT NOT NULL
        )
        """,
        "DROP TABLE IF EXISTS execution_logs",
    ),
    step(
        """
        CREATE TABLE IF NOT EXISTS settings (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        )
        """,
        "DROP TABLE IF EXISTS settings",
    ),
    step(
        """
        CREATE TABLE IF NOT EXISTS approval_queue (
            id TEXT PRIMARY KEY,
            agent_id TEXT DEFAULT '',
            action_type TEXT NOT NULL,
            content_preview TEXT DEFAULT '',
            status TEXT DEFAULT 'pending',
            created_at TEXT NOT NULL
        )
        """,
        "DROP TABLE IF EXISTS approval_queue",
    ),
    # Reserved for agent scheduling; nothing reads or writes it yet
    step(
        """
        CREATE TABLE IF NOT EXISTS schedules (
            id TEXT PRIMARY KEY,
            agent_id TEXT DEFAULT '',
            cron_expr TEXT NOT NULL,
            description TEXT DEFAULT '',
            enabled INTEGER DEFAULT 1,
            last_run TEXT DEFAULT '',
            next_run TEXT DEFAULT ''
        )
        """,
        "DROP TABLE IF EXISTS schedules",
    ),
]
