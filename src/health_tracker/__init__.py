"""
Health Tracker core.

Validation, storage and statistics for daily health records (steps, workout
minutes, average heart rate).
"""

from .aggregator import (
    ConsistencyThresholds,
    HeartRateZones,
    SummaryOptions,
    classify_heart_rate,
    rate_workout_consistency,
    summarize,
    weekly_series,
)
from .errors import (
    HealthTrackerError,
    PersistenceConflictError,
    PersistenceError,
    RecordNotFoundError,
    RecordValidationError,
)
from .models import (
    ConsistencyRating,
    HealthRecord,
    HealthSummary,
    HeartRateZone,
    NormalizedRecord,
    RecordDraft,
    WeeklyBucket,
)
from .persistence import MemoryStorage, PersistenceBridge, SqliteStorage
from .store import RecordStore
from .validator import ValidationPolicy, ValidationResult, check_record, validate, validate_or_raise

__all__ = [
    "ConsistencyRating",
    "ConsistencyThresholds",
    "HealthRecord",
    "HealthSummary",
    "HealthTrackerError",
    "HeartRateZone",
    "HeartRateZones",
    "MemoryStorage",
    "NormalizedRecord",
    "PersistenceBridge",
    "PersistenceConflictError",
    "PersistenceError",
    "RecordDraft",
    "RecordNotFoundError",
    "RecordStore",
    "RecordValidationError",
    "SqliteStorage",
    "SummaryOptions",
    "ValidationPolicy",
    "ValidationResult",
    "WeeklyBucket",
    "check_record",
    "classify_heart_rate",
    "rate_workout_consistency",
    "summarize",
    "validate",
    "validate_or_raise",
    "weekly_series",
]
