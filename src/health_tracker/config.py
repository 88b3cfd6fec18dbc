"""Tracker configuration loaded from environment variables."""
from functools import lru_cache

from pydantic_settings import BaseSettings

from .aggregator import ConsistencyThresholds, HeartRateZones, SummaryOptions
from .persistence import DEFAULT_STORAGE_KEY, PersistenceBridge, SqliteStorage
from .validator import ValidationPolicy


class TrackerSettings(BaseSettings):
    """Validation bounds, dashboard goals and storage location."""

    # Validation
    max_steps: int = 100_000
    max_workout_minutes: int = 1_440
    heart_rate_min: int = 30
    heart_rate_max: int = 220

    # Dashboard
    daily_step_goal: int = 10_000
    weekly_days: int = 7
    consistency_excellent_minutes: float = 30
    consistency_good_minutes: float = 20
    consistency_fair_minutes: float = 10
    heart_rate_low: int = 60
    heart_rate_high: int = 100

    # Storage
    storage_path: str = "health_records.db"
    storage_key: str = DEFAULT_STORAGE_KEY
    seed_sample_data: bool = True
    detect_conflicts: bool = False

    def validation_policy(self) -> ValidationPolicy:
        return ValidationPolicy(
            max_steps=self.max_steps,
            max_workout_minutes=self.max_workout_minutes,
            heart_rate_min=self.heart_rate_min,
            heart_rate_max=self.heart_rate_max,
        )

    def summary_options(self) -> SummaryOptions:
        return SummaryOptions(
            daily_goal=self.daily_step_goal,
            weekly_days=self.weekly_days,
            consistency=ConsistencyThresholds(
                excellent=self.consistency_excellent_minutes,
                good=self.consistency_good_minutes,
                fair=self.consistency_fair_minutes,
            ),
            heart_rate_zones=HeartRateZones(low=self.heart_rate_low, high=self.heart_rate_high),
        )

    def persistence_bridge(self) -> PersistenceBridge:
        return PersistenceBridge(
            SqliteStorage(self.storage_path),
            key=self.storage_key,
            detect_conflicts=self.detect_conflicts,
        )

    class Config:
        env_prefix = "HEALTH_TRACKER_"


@lru_cache
def get_settings() -> TrackerSettings:
    return TrackerSettings()
