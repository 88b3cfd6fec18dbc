"""
Record validation for health record form drafts.

Each field is checked independently so that every offending input can be
annotated at once. Validation never reads the clock: the caller supplies
"today".
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from .errors import RecordValidationError
from .models import HealthRecord, NormalizedRecord, RecordDraft

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class ValidationPolicy:
    """Field bounds applied by validate()."""

    max_steps: int = 100_000
    max_workout_minutes: int = 1_440
    heart_rate_min: int = 30
    heart_rate_max: int = 220


DEFAULT_POLICY = ValidationPolicy()


@dataclass
class ValidationResult:
    """Outcome of validate(): a normalized record or a field -> message mapping."""

    record: Optional[NormalizedRecord] = None
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.record is not None and not self.errors


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_int(value: Any, label: str) -> Tuple[Optional[int], Optional[str]]:
    """Coerce a raw form value to an int, returning (value, error)."""
    if _is_blank(value):
        return None, f"{label} is required"
    # Raw values reach here unconverted through the model_construct fallback.
    if isinstance(value, bool):
        return None, f"{label} must be a number"
    if isinstance(value, int):
        return value, None
    if isinstance(value, float):
        number = value
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return None, f"{label} must be a number"
    if number != number or number in (float("inf"), float("-inf")):
        return None, f"{label} must be a number"
    if not number.is_integer():
        return None, f"{label} must be a whole number"
    return int(number), None


def _check_date(value: Any, today: date) -> Tuple[Optional[date], Optional[str]]:
    if _is_blank(value):
        return None, "Date is required"
    if isinstance(value, datetime):
        parsed = value.date()
    elif isinstance(value, date):
        parsed = value
    else:
        try:
            parsed = datetime.strptime(str(value).strip(), DATE_FORMAT).date()
        except ValueError:
            return None, "Date must be a valid calendar date (YYYY-MM-DD)"
    if parsed > today:
        return None, "Date cannot be in the future"
    return parsed, None


def _check_steps(value: Any, policy: ValidationPolicy) -> Tuple[Optional[int], Optional[str]]:
    steps, error = _parse_int(value, "Step count")
    if error:
        return None, error
    if steps < 0:
        return None, "Steps cannot be negative"
    if steps > policy.max_steps:
        return None, f"Steps value seems too high (max {policy.max_steps:,})"
    return steps, None


def _check_workout(value: Any, policy: ValidationPolicy) -> Tuple[Optional[int], Optional[str]]:
    minutes, error = _parse_int(value, "Workout duration")
    if error:
        return None, error
    if minutes < 0:
        return None, "Duration cannot be negative"
    if minutes > policy.max_workout_minutes:
        return None, f"Duration cannot exceed {policy.max_workout_minutes} minutes"
    return minutes, None


def _check_heart_rate(value: Any, policy: ValidationPolicy) -> Tuple[Optional[int], Optional[str]]:
    bpm, error = _parse_int(value, "Heart rate")
    if error:
        return None, error
    if bpm < policy.heart_rate_min or bpm > policy.heart_rate_max:
        return None, (
            f"Heart rate should be between {policy.heart_rate_min}-"
            f"{policy.heart_rate_max} bpm"
        )
    return bpm, None


def _coerce_draft(candidate: Union[RecordDraft, Mapping[str, Any]]) -> RecordDraft:
    if isinstance(candidate, RecordDraft):
        return candidate
    try:
        return RecordDraft.model_validate(dict(candidate))
    except ValidationError:
        # Unusable raw values are reported field by field below.
        raw = dict(candidate)
        return RecordDraft.model_construct(
            date=raw.get("date"),
            steps=raw.get("steps"),
            workout_duration=raw.get("workoutDuration", raw.get("workout_duration")),
            heart_rate=raw.get("heartRate", raw.get("heart_rate")),
        )


def validate(
    candidate: Union[RecordDraft, Mapping[str, Any]],
    today: date,
    policy: ValidationPolicy = DEFAULT_POLICY,
) -> ValidationResult:
    """
    Validate a raw record draft against the field bounds.

    Args:
        candidate: RecordDraft or a mapping using either camelCase or
            snake_case field names
        today: The local current date; records may not be dated after it
        policy: Field bounds to apply

    Returns:
        ValidationResult holding either the normalized record or a mapping
        of field name (camelCase) to message. Never both.
    """
    draft = _coerce_draft(candidate)
    errors: Dict[str, str] = {}

    record_date, error = _check_date(draft.date, today)
    if error:
        errors["date"] = error
    steps, error = _check_steps(draft.steps, policy)
    if error:
        errors["steps"] = error
    workout, error = _check_workout(draft.workout_duration, policy)
    if error:
        errors["workoutDuration"] = error
    heart_rate, error = _check_heart_rate(draft.heart_rate, policy)
    if error:
        errors["heartRate"] = error

    if errors:
        logger.debug(f"[VALIDATOR] Rejected draft: {errors}")
        return ValidationResult(errors=errors)

    return ValidationResult(
        record=NormalizedRecord(
            date=record_date,
            steps=steps,
            workout_duration=workout,
            heart_rate=heart_rate,
        )
    )


def validate_or_raise(
    candidate: Union[RecordDraft, Mapping[str, Any]],
    today: date,
    policy: ValidationPolicy = DEFAULT_POLICY,
) -> NormalizedRecord:
    """Like validate() but raise RecordValidationError on failure."""
    result = validate(candidate, today, policy)
    if not result.ok:
        raise RecordValidationError(result.errors)
    return result.record


def check_record(
    record: Union[NormalizedRecord, HealthRecord],
    today: Optional[date] = None,
    policy: ValidationPolicy = DEFAULT_POLICY,
) -> Dict[str, str]:
    """
    Re-check an already typed record against the field bounds.

    Args:
        record: Record that did not necessarily come from validate()
        today: Latest allowed date; None skips the date check

    Returns:
        Field name -> message for each violated bound (empty if admissible)
    """
    candidate = {
        "date": record.date,
        "steps": record.steps,
        "workoutDuration": record.workout_duration,
        "heartRate": record.heart_rate,
    }
    return validate(candidate, today or date.max, policy).errors
