"""Exception types raised by the health tracker core."""
from typing import Dict


class HealthTrackerError(Exception):
    """Base class for all health tracker errors."""


class RecordNotFoundError(HealthTrackerError, KeyError):
    """Raised when a store operation references an id that is not live."""

    def __init__(self, record_id: int):
        self.record_id = record_id
        super().__init__(f"No health record with id {record_id}")

    def __str__(self) -> str:
        return self.args[0]


class RecordValidationError(HealthTrackerError, ValueError):
    """Raised by validate_or_raise when a draft fails one or more field checks."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Invalid health record fields: {fields}")


class PersistenceError(HealthTrackerError):
    """Stored data is malformed or the storage backend is unavailable."""


class PersistenceConflictError(PersistenceError):
    """Stored data was changed by another writer since it was last read."""
