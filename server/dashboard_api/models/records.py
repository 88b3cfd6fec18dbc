"""Record list row models."""
from datetime import date
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

from health_tracker import HealthRecord, HeartRateZone, classify_heart_rate
from health_tracker.aggregator import HeartRateZones
from health_tracker.formatting import format_number, format_record_date


class RecordRow(BaseModel):
    """Health record as shown in the records table."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    date: date
    display_date: str = Field(serialization_alias="displayDate")
    steps: int
    display_steps: str = Field(serialization_alias="displaySteps")
    workout_duration: int = Field(serialization_alias="workoutDuration")
    heart_rate: int = Field(serialization_alias="heartRate")
    heart_rate_zone: HeartRateZone = Field(serialization_alias="heartRateZone")

    @classmethod
    def from_record(cls, record: HealthRecord, zones: HeartRateZones) -> "RecordRow":
        return cls(
            id=record.id,
            date=record.date,
            display_date=format_record_date(record.date),
            steps=record.steps,
            display_steps=format_number(record.steps),
            workout_duration=record.workout_duration,
            heart_rate=record.heart_rate,
            heart_rate_zone=classify_heart_rate(record.heart_rate, zones),
        )


class ValidationErrorResponse(BaseModel):
    """Field name -> message for each rejected input."""

    errors: Dict[str, str]
