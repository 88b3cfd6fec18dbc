"""
Statistics aggregation for the health dashboard.

Pure functions over a record list: totals, averages, goal progress, the
workout consistency rating and the trailing weekly step series. "Today" is
always passed in explicitly.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Sequence

from .formatting import weekday_label
from .models import (
    ConsistencyRating,
    HealthRecord,
    HealthSummary,
    HeartRateZone,
    WeeklyBucket,
)


@dataclass(frozen=True)
class HeartRateZones:
    """Bounds for heart-rate classification: below low is LOW, above high is ELEVATED."""

    low: int = 60
    high: int = 100


@dataclass(frozen=True)
class ConsistencyThresholds:
    """Minimum average daily workout minutes for each rating."""

    excellent: float = 30
    good: float = 20
    fair: float = 10


@dataclass(frozen=True)
class SummaryOptions:
    """Configuration for summarize()."""

    daily_goal: int = 10_000
    weekly_days: int = 7
    consistency: ConsistencyThresholds = ConsistencyThresholds()
    heart_rate_zones: HeartRateZones = HeartRateZones()


DEFAULT_OPTIONS = SummaryOptions()

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return int((value * 2 + 1) // 2)


def classify_heart_rate(bpm: float, zones: HeartRateZones = HeartRateZones()) -> HeartRateZone:
    """
    Classify a heart rate in beats per minute.

    A zero or negative value means no data was logged.
    """
    if bpm <= 0:
        return HeartRateZone.NO_DATA
    if bpm < zones.low:
        return HeartRateZone.LOW
    if bpm <= zones.high:
        return HeartRateZone.NORMAL
    return HeartRateZone.ELEVATED


def rate_workout_consistency(
    total_minutes: int,
    days: int,
    thresholds: ConsistencyThresholds = ConsistencyThresholds(),
) -> ConsistencyRating:
    """Rate average daily workout minutes against the configured thresholds."""
    if days <= 0:
        return ConsistencyRating.NO_DATA
    avg_per_day = total_minutes / days
    if avg_per_day >= thresholds.excellent:
        return ConsistencyRating.EXCELLENT
    if avg_per_day >= thresholds.good:
        return ConsistencyRating.GOOD
    if avg_per_day >= thresholds.fair:
        return ConsistencyRating.FAIR
    return ConsistencyRating.NEEDS_WORK


def goal_percentage(steps: int, goal: int) -> float:
    """Percentage of a step goal achieved, capped at 100."""
    if goal <= 0:
        return 100.0
    return min(100.0 * steps / goal, 100.0)


def _recency_key(record: HealthRecord):
    stamp = record.updated_at or record.created_at
    if stamp is None:
        stamp = _EPOCH
    elif stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp, record.id


def latest_by_date(records: Iterable[HealthRecord]) -> Dict[date, HealthRecord]:
    """Pick one record per date: the most recently updated, then the highest id."""
    chosen: Dict[date, HealthRecord] = {}
    for record in records:
        current = chosen.get(record.date)
        if current is None or _recency_key(record) > _recency_key(current):
            chosen[record.date] = record
    return chosen


def weekly_series(
    records: Iterable[HealthRecord],
    today: date,
    daily_goal: int = DEFAULT_OPTIONS.daily_goal,
    days: int = DEFAULT_OPTIONS.weekly_days,
) -> List[WeeklyBucket]:
    """
    Build the trailing step series ending at today, oldest day first.

    Days without a record are zero-filled, so the series always has
    ``days`` buckets.
    """
    by_date = latest_by_date(records)
    series = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        record = by_date.get(day)
        steps = record.steps if record else 0
        series.append(
            WeeklyBucket(
                date=day,
                day=weekday_label(day),
                steps=steps,
                percentage=goal_percentage(steps, daily_goal),
            )
        )
    return series


def _insights(daily_average_steps: int, avg_workout: float, options: SummaryOptions) -> List[str]:
    messages = []
    if daily_average_steps >= options.daily_goal:
        messages.append("Great job! You're meeting the daily step goal!")
    if avg_workout >= options.consistency.excellent:
        messages.append(
            f"Excellent! You're maintaining {options.consistency.excellent:g}+ "
            "minutes of daily exercise!"
        )
    return messages


def summarize(
    records: Sequence[HealthRecord],
    today: date,
    options: Optional[SummaryOptions] = None,
) -> HealthSummary:
    """
    Compute dashboard statistics for a record list.

    Args:
        records: Current records, in any order
        today: Last day of the weekly series
        options: Goal, threshold and window configuration

    Returns:
        HealthSummary. An empty list yields zeroed statistics and a
        zero-filled weekly series.
    """
    options = options or DEFAULT_OPTIONS
    series = weekly_series(records, today, options.daily_goal, options.weekly_days)

    count = len(records)
    if count == 0:
        return HealthSummary(weekly_series=series)

    total_steps = sum(r.steps for r in records)
    total_workout = sum(r.workout_duration for r in records)
    average_heart_rate = round_half_up(sum(r.heart_rate for r in records) / count)
    daily_average_steps = round_half_up(total_steps / count)
    avg_workout = total_workout / count

    return HealthSummary(
        record_count=count,
        total_steps=total_steps,
        total_workout_minutes=total_workout,
        average_heart_rate=average_heart_rate,
        daily_average_steps=daily_average_steps,
        average_workout_minutes=round_half_up(avg_workout),
        step_goal_progress=goal_percentage(total_steps, options.daily_goal * count),
        workout_consistency=rate_workout_consistency(total_workout, count, options.consistency),
        heart_rate_zone=classify_heart_rate(average_heart_rate, options.heart_rate_zones),
        weekly_series=series,
        insights=_insights(daily_average_steps, avg_workout, options),
    )
