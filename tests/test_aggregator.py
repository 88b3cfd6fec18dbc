"""
Unit tests for the Statistics Aggregator.

These tests verify:
1. Totals, rounded averages and goal progress
2. Empty input never divides by zero and still yields 7 weekly buckets
3. Weekly bucketing, zero-fill and duplicate-date tie-breaking
4. Shared heart-rate zone and workout consistency classification

Usage:
    pytest tests/test_aggregator.py -v
"""
import pytest
from datetime import date, datetime, timedelta, timezone

from health_tracker import (
    ConsistencyRating,
    ConsistencyThresholds,
    HealthRecord,
    HeartRateZone,
    HeartRateZones,
    SummaryOptions,
    classify_heart_rate,
    rate_workout_consistency,
    summarize,
    weekly_series,
)
from health_tracker.aggregator import goal_percentage, round_half_up

from conftest import SAMPLE_ROWS, TODAY


def make_records(rows=SAMPLE_ROWS):
    return [
        HealthRecord.model_validate({"id": index + 1, **row})
        for index, row in enumerate(rows)
    ]


class TestSummaryTotals:
    """Totals and averages over the sample days."""

    def test_sample_totals(self):
        summary = summarize(make_records(), TODAY)

        assert summary.record_count == 3
        assert summary.total_steps == 26500
        assert summary.total_workout_minutes == 135
        assert summary.average_heart_rate == 72
        assert summary.daily_average_steps == 8833
        assert summary.average_workout_minutes == 45

    def test_step_goal_progress(self):
        summary = summarize(make_records(), TODAY)
        assert summary.step_goal_progress == pytest.approx(26500 / 30000 * 100)

    def test_step_goal_progress_capped(self):
        records = make_records([{"date": "2026-01-12", "steps": 25000, "workoutDuration": 0, "heartRate": 70}])
        assert summarize(records, TODAY).step_goal_progress == 100.0

    def test_custom_daily_goal(self):
        summary = summarize(make_records(), TODAY, SummaryOptions(daily_goal=5000))
        assert summary.step_goal_progress == 100.0
        assert summary.weekly_series[-1].percentage == 100.0

    def test_consistency_and_zone(self):
        summary = summarize(make_records(), TODAY)
        assert summary.workout_consistency == ConsistencyRating.EXCELLENT
        assert summary.heart_rate_zone == HeartRateZone.NORMAL

    def test_insights(self):
        summary = summarize(make_records(), TODAY)
        # 8833 average steps is below the goal; 45 minutes is excellent.
        assert len(summary.insights) == 1
        assert "30+ minutes" in summary.insights[0]

    def test_order_does_not_matter(self):
        forward = summarize(make_records(), TODAY)
        backward = summarize(list(reversed(make_records())), TODAY)
        assert forward == backward

    def test_serializes_with_camel_case(self):
        data = summarize(make_records(), TODAY).model_dump(by_alias=True, mode="json")

        assert data["totalSteps"] == 26500
        assert data["totalWorkoutMinutes"] == 135
        assert data["averageHeartRate"] == 72
        assert data["dailyAverageSteps"] == 8833
        assert data["workoutConsistency"] == "excellent"
        assert data["weeklySeries"][0]["date"] == "2026-01-06"


class TestEmptySummary:
    """summarize([]) is all zeros and never raises."""

    def test_zeroed_totals(self):
        summary = summarize([], TODAY)

        assert summary.record_count == 0
        assert summary.total_steps == 0
        assert summary.total_workout_minutes == 0
        assert summary.average_heart_rate == 0
        assert summary.daily_average_steps == 0
        assert summary.step_goal_progress == 0.0
        assert summary.workout_consistency == ConsistencyRating.NO_DATA
        assert summary.heart_rate_zone == HeartRateZone.NO_DATA
        assert summary.insights == []

    def test_seven_zero_buckets(self):
        series = summarize([], TODAY).weekly_series

        assert len(series) == 7
        assert all(bucket.steps == 0 and bucket.percentage == 0 for bucket in series)
        assert series[0].date == TODAY - timedelta(days=6)
        assert series[-1].date == TODAY


class TestWeeklySeries:
    """Trailing weekly bucketing."""

    def test_chronological_and_zero_filled(self):
        series = weekly_series(make_records(), TODAY)

        assert [b.date for b in series] == [TODAY - timedelta(days=n) for n in range(6, -1, -1)]
        assert [b.steps for b in series] == [0, 0, 0, 0, 8500, 10200, 7800]
        assert series[5].percentage == 100.0
        assert series[4].percentage == pytest.approx(85.0)

    def test_day_labels(self):
        series = weekly_series([], TODAY)
        # 2026-01-12 is a Monday.
        assert [b.day for b in series] == ["Tue", "Wed", "Thu", "Fri", "Sat", "Sun", "Mon"]

    def test_records_outside_window_ignored(self):
        records = make_records([
            {"date": "2026-01-01", "steps": 9000, "workoutDuration": 10, "heartRate": 70},
        ])
        series = weekly_series(records, TODAY)
        assert sum(b.steps for b in series) == 0

    def test_window_follows_today(self):
        series = weekly_series(make_records(), date(2026, 1, 10))
        assert series[-1].steps == 8500
        assert all(b.date <= date(2026, 1, 10) for b in series)

    def test_custom_window_length(self):
        assert len(weekly_series([], TODAY, days=14)) == 14

    def test_duplicate_dates_pick_most_recently_updated(self):
        created = datetime(2026, 1, 12, 8, 0, tzinfo=timezone.utc)
        edited = HealthRecord(
            id=1, date=TODAY, steps=5000, workout_duration=10, heart_rate=70,
            created_at=created, updated_at=created + timedelta(hours=2),
        )
        later = HealthRecord(
            id=2, date=TODAY, steps=9000, workout_duration=10, heart_rate=70,
            created_at=created + timedelta(hours=1),
        )

        assert weekly_series([later, edited], TODAY)[-1].steps == 5000
        assert weekly_series([edited, later], TODAY)[-1].steps == 5000

    def test_duplicate_dates_without_timestamps_pick_highest_id(self):
        first = HealthRecord(id=1, date=TODAY, steps=100, workout_duration=0, heart_rate=70)
        second = HealthRecord(id=2, date=TODAY, steps=200, workout_duration=0, heart_rate=70)
        assert weekly_series([second, first], TODAY)[-1].steps == 200


class TestHeartRateZones:
    """One classification shared by list badges and the dashboard."""

    @pytest.mark.parametrize(
        "bpm,zone",
        [
            (0, HeartRateZone.NO_DATA),
            (45, HeartRateZone.LOW),
            (59, HeartRateZone.LOW),
            (60, HeartRateZone.NORMAL),
            (100, HeartRateZone.NORMAL),
            (101, HeartRateZone.ELEVATED),
        ],
    )
    def test_default_zones(self, bpm, zone):
        assert classify_heart_rate(bpm) == zone

    def test_custom_zones(self):
        zones = HeartRateZones(low=50, high=90)
        assert classify_heart_rate(55, zones) == HeartRateZone.NORMAL
        assert classify_heart_rate(95, zones) == HeartRateZone.ELEVATED


class TestWorkoutConsistency:
    """Consistency rating thresholds."""

    @pytest.mark.parametrize(
        "total,days,rating",
        [
            (0, 0, ConsistencyRating.NO_DATA),
            (90, 3, ConsistencyRating.EXCELLENT),
            (60, 3, ConsistencyRating.GOOD),
            (30, 3, ConsistencyRating.FAIR),
            (29, 3, ConsistencyRating.NEEDS_WORK),
        ],
    )
    def test_default_thresholds(self, total, days, rating):
        assert rate_workout_consistency(total, days) == rating

    def test_thresholds_are_configurable(self):
        strict = ConsistencyThresholds(excellent=60, good=45, fair=30)
        assert rate_workout_consistency(135, 3, strict) == ConsistencyRating.GOOD


class TestHelpers:
    """Rounding and percentage helpers."""

    @pytest.mark.parametrize("value,expected", [(72.33, 72), (72.5, 73), (8833.33, 8833), (0, 0)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_goal_percentage_zero_goal(self):
        assert goal_percentage(10, 0) == 100.0
