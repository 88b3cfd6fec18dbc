"""
Unit tests for tracker configuration.

Usage:
    pytest tests/test_config.py -v
"""
from datetime import date

from health_tracker import HeartRateZone, classify_heart_rate, validate
from health_tracker.config import TrackerSettings
from health_tracker.persistence import SqliteStorage

from server.dashboard_api.config import DashboardSettings


class TestTrackerSettings:
    """Environment-driven settings and the policies derived from them."""

    def test_defaults(self):
        settings = TrackerSettings()

        policy = settings.validation_policy()
        assert (policy.heart_rate_min, policy.heart_rate_max) == (30, 220)
        assert policy.max_steps == 100_000
        assert policy.max_workout_minutes == 1_440

        options = settings.summary_options()
        assert options.daily_goal == 10_000
        assert options.weekly_days == 7
        assert options.consistency.excellent == 30
        assert options.heart_rate_zones.low == 60

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("HEALTH_TRACKER_HEART_RATE_MIN", "40")
        monkeypatch.setenv("HEALTH_TRACKER_HEART_RATE_MAX", "200")
        monkeypatch.setenv("HEALTH_TRACKER_DAILY_STEP_GOAL", "8000")

        settings = TrackerSettings()

        assert settings.summary_options().daily_goal == 8000
        result = validate(
            {"date": "2026-01-10", "steps": 1, "workoutDuration": 1, "heartRate": 35},
            date(2026, 1, 12),
            settings.validation_policy(),
        )
        assert "heartRate" in result.errors

    def test_zone_overrides(self):
        settings = TrackerSettings(heart_rate_low=50, heart_rate_high=90)
        zones = settings.summary_options().heart_rate_zones
        assert classify_heart_rate(55, zones) == HeartRateZone.NORMAL

    def test_persistence_bridge(self, tmp_path):
        settings = TrackerSettings(
            storage_path=str(tmp_path / "records.db"),
            storage_key="custom",
            detect_conflicts=True,
        )

        bridge = settings.persistence_bridge()

        assert isinstance(bridge.storage, SqliteStorage)
        assert bridge.key == "custom"
        assert bridge.detect_conflicts is True
        assert bridge.load() is None


class TestDashboardSettings:
    """Server and CORS settings read from DASHBOARD_* variables."""

    def test_defaults(self):
        settings = DashboardSettings()

        assert (settings.host, settings.port) == ("127.0.0.1", 8082)
        assert settings.reload is False
        assert settings.cors_methods == ["GET", "POST", "PUT", "DELETE"]

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DASHBOARD_PORT", "9000")
        monkeypatch.setenv("DASHBOARD_CORS_ORIGINS", '["https://dashboard.example"]')
        monkeypatch.setenv("DASHBOARD_CORS_METHODS", '["GET"]')

        settings = DashboardSettings()

        assert settings.port == 9000
        assert settings.cors_origins == ["https://dashboard.example"]
        assert settings.cors_methods == ["GET"]
