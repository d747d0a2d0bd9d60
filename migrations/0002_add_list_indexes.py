"""
Add indexes for newest-first listings.

list_agents, get_logs and get_approvals all order by created_at DESC.
"""

from yoyo import step

steps = [
    step(
        "CREATE INDEX IF NOT EXISTS idx_agents_created_at ON agents(created_at)",
        "DROP INDEX IF EXISTS idx_agents_created_at",
    ),
    step(
        "CREATE INDEX IF NOT EXISTS idx_execution_logs_created_at ON execution_logs(created_at)",
        "DROP INDEX IF EXISTS idx_execution_logs_created_at",
    ),
    step(
        "CREATE INDEX IF NOT EXISTS idx_approval_queue_created_at ON approval_queue(created_at)",
        "DROP INDEX IF EXISTS idx_approval_queue_created_at",
    ),
]
