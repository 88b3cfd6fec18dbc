"""Pydantic models for health records and dashboard summaries.

Attribute names are snake_case; the serialized (storage and API) names are
camelCase so stored blobs keep the ``id, date, steps, workoutDuration,
heartRate, createdAt, updatedAt`` layout.
"""
from datetime import date, datetime
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

RawValue = Union[int, float, str, None]
RawDate = Union[date, str, None]


class RecordDraft(BaseModel):
    """Raw, unvalidated form input for a health record."""

    model_config = ConfigDict(populate_by_name=True)

    date: RawDate = None
    steps: RawValue = None
    workout_duration: RawValue = Field(default=None, alias="workoutDuration")
    heart_rate: RawValue = Field(default=None, alias="heartRate")


class NormalizedRecord(BaseModel):
    """The user-editable fields of a record after validation."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    date: date
    steps: int
    workout_duration: int = Field(alias="workoutDuration")
    heart_rate: int = Field(alias="heartRate")


class HealthRecord(BaseModel):
    """One day's logged health metrics as held by the record store."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    date: date
    steps: int
    workout_duration: int = Field(alias="workoutDuration")
    heart_rate: int = Field(alias="heartRate")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    def fields(self) -> NormalizedRecord:
        """Return the mutable fields of this record."""
        return NormalizedRecord(
            date=self.date,
            steps=self.steps,
            workout_duration=self.workout_duration,
            heart_rate=self.heart_rate,
        )


class HeartRateZone(str, Enum):
    """Heart-rate classification shared by list badges and dashboard status."""

    NO_DATA = "no_data"
    LOW = "low"
    NORMAL = "normal"
    ELEVATED = "elevated"


class ConsistencyRating(str, Enum):
    """Workout consistency derived from average daily workout minutes."""

    NO_DATA = "no_data"
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    NEEDS_WORK = "needs_work"


class WeeklyBucket(BaseModel):
    """Steps logged on one calendar day of the weekly series."""

    model_config = ConfigDict(populate_by_name=True)

    date: date
    day: str
    steps: int = 0
    percentage: float = 0.0


class HealthSummary(BaseModel):
    """Aggregated statistics over the current record list."""

    model_config = ConfigDict(populate_by_name=True)

    record_count: int = Field(default=0, alias="recordCount")
    total_steps: int = Field(default=0, alias="totalSteps")
    total_workout_minutes: int = Field(default=0, alias="totalWorkoutMinutes")
    average_heart_rate: int = Field(default=0, alias="averageHeartRate")
    daily_average_steps: int = Field(default=0, alias="dailyAverageSteps")
    average_workout_minutes: int = Field(default=0, alias="averageWorkoutMinutes")
    step_goal_progress: float = Field(default=0.0, alias="stepGoalProgress")
    workout_consistency: ConsistencyRating = Field(
        default=ConsistencyRating.NO_DATA, alias="workoutConsistency"
    )
    heart_rate_zone: HeartRateZone = Field(default=HeartRateZone.NO_DATA, alias="heartRateZone")
    weekly_series: List[WeeklyBucket] = Field(default_factory=list, alias="weeklySeries")
    insights: List[str] = Field(default_factory=list)
