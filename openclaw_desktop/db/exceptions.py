"""Store error taxonomy.

Every failure of a store operation is raised as a StoreError whose message is a
human-readable description. Not-found conditions are never errors: they are
modelled as None results or silent no-ops.
"""


class StoreError(Exception):
    """Base class for store failures."""

    def __init__(self, message: str, operation: str | None = None) -> None:
        self.operation = operation
        super().__init__(message)


class LockAcquisitionError(StoreError):
    """The shared connection lock could not be acquired in time."""


class DatabaseError(StoreError):
    """SQLite reported an I/O, constraint or query failure."""
