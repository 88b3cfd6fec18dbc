#!/usr/bin/env python3
"""
Seed the health records storage with sample data.

Writes a week (or more) of plausible daily records to the SQLite storage
configured through HEALTH_TRACKER_* environment variables, replacing what
is stored there.

Usage:
    python scripts/seed_records.py
    python scripts/seed_records.py --days 14 --seed 42
    python scripts/seed_records.py --storage-path /tmp/health.db --dry-run
"""

import sys
import random
import argparse
from datetime import date
from pathlib import Path
from dotenv import load_dotenv

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from health_tracker import RecordStore, summarize  # noqa: E402
from health_tracker.config import TrackerSettings  # noqa: E402
from health_tracker.formatting import format_duration, format_number  # noqa: E402
from health_tracker.persistence import dumps_records  # noqa: E402
from health_tracker.sample_data import generate_sample_records  # noqa: E402


# Load environment variables
load_dotenv()


def seed(settings: TrackerSettings, days: int, today: date, rng: random.Random, dry_run: bool) -> RecordStore:
    """
    Build a store of sample records and optionally persist it.

    Args:
        settings: Tracker settings naming the storage to write
        days: Number of days of records, ending today
        today: Last day to generate
        rng: Random source for the sample values
        dry_run: When set, nothing is written

    Returns:
        The seeded store
    """
    bridge = None if dry_run else settings.persistence_bridge()
    store = RecordStore(bridge=bridge, policy=settings.validation_policy(), calendar=lambda: today)
    store.create_many(generate_sample_records(today, days=days, rng=rng))
    return store


def main():
    parser = argparse.ArgumentParser(
        description="Seed the health dashboard storage with sample records",
    )
    parser.add_argument("--days", type=int, default=7, help="Days of records to generate (default: 7)")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible data")
    parser.add_argument("--today", type=date.fromisoformat, default=None, help="Last day (YYYY-MM-DD)")
    parser.add_argument("--storage-path", help="SQLite file to write (overrides HEALTH_TRACKER_STORAGE_PATH)")
    parser.add_argument("--dry-run", action="store_true", help="Print the records without saving them")
    args = parser.parse_args()

    overrides = {"storage_path": args.storage_path} if args.storage_path else {}
    settings = TrackerSettings(**overrides)
    today = args.today or date.today()

    store = seed(settings, args.days, today, random.Random(args.seed), args.dry_run)
    summary = summarize(store.list(), today, settings.summary_options())

    print("=" * 60)
    print("Health Dashboard Sample Data")
    print("=" * 60)
    if args.dry_run:
        print(dumps_records(store.list()))
    else:
        print(f"Storage: {settings.storage_path} (key '{settings.storage_key}')")
    print(f"Records: {summary.record_count}")
    print(f"Total steps: {format_number(summary.total_steps)}")
    print(f"Total workout: {format_duration(summary.total_workout_minutes)}")
    print(f"Average heart rate: {summary.average_heart_rate} bpm")
    print("=" * 60)


if __name__ == "__main__":
    main()
