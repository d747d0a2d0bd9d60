"""True constants - record defaults, log file rotation and unit conversions.

These values are part of the stored data contract and should never need to change.
For developer-configurable values, see config.py.
"""

# =============================================================================
# Record Defaults
# =============================================================================

# Status every new approval item starts with
APPROVAL_STATUS_PENDING = "pending"

# Default serialized tool list for agents created without tools
DEFAULT_AGENT_TOOLS = "[]"

# =============================================================================
# Time Constants (Base Units)
# =============================================================================

MILLISECONDS_PER_SECOND = 1000

# =============================================================================
# Log Files
# =============================================================================

LOG_FILE_NAME = "openclaw-desktop.log"
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 3

# Command arguments masked before they are logged
REDACTED_ARGUMENTS = frozenset({"value"})

# =============================================================================
# SQLite Limits
# =============================================================================

# Range of a SQLite INTEGER (signed 64-bit)
SQLITE_INTEGER_MIN = -(2**63)
SQLITE_INTEGER_MAX = 2**63 - 1
