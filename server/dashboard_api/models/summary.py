"""Dashboard summary response model."""
from pydantic import BaseModel, ConfigDict, Field

from health_tracker import HealthSummary
from health_tracker.formatting import format_duration, format_large_number


class SummaryDisplay(BaseModel):
    """Pre-formatted strings for the summary cards."""

    model_config = ConfigDict(populate_by_name=True)

    total_steps: str = Field(serialization_alias="totalSteps")
    daily_average_steps: str = Field(serialization_alias="dailyAverageSteps")
    total_workout: str = Field(serialization_alias="totalWorkout")
    step_goal_progress: str = Field(serialization_alias="stepGoalProgress")

    @classmethod
    def from_summary(cls, summary: HealthSummary) -> "SummaryDisplay":
        return cls(
            total_steps=format_large_number(summary.total_steps),
            daily_average_steps=format_large_number(summary.daily_average_steps),
            total_workout=format_duration(summary.total_workout_minutes),
            step_goal_progress=f"{summary.step_goal_progress:.0f}%",
        )


class DashboardSummary(BaseModel):
    """Complete dashboard summary: statistics plus their display strings."""

    summary: HealthSummary
    display: SummaryDisplay
