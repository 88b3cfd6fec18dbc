"""
Pytest fixtures for Health Dashboard tests.
"""
import sys
import pytest
from pathlib import Path
from datetime import date, datetime, timedelta, timezone
from dotenv import load_dotenv

# Ensure src/ is on sys.path so tests can import health_tracker without installing.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
for path in (SRC, ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

# Load environment variables
load_dotenv()

from health_tracker import (  # noqa: E402
    MemoryStorage,
    NormalizedRecord,
    PersistenceBridge,
    RecordStore,
)


# ============================================================================
# Shared Test Data
# ============================================================================

TODAY = date(2026, 1, 12)

# Three consecutive days ending TODAY; totals 26500 steps, 135 minutes.
SAMPLE_ROWS = [
    {"date": "2026-01-10", "steps": 8500, "workoutDuration": 45, "heartRate": 72},
    {"date": "2026-01-11", "steps": 10200, "workoutDuration": 60, "heartRate": 75},
    {"date": "2026-01-12", "steps": 7800, "workoutDuration": 30, "heartRate": 70},
]


class FakeClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime = datetime(2026, 1, 12, 8, 0, tzinfo=timezone.utc), step: timedelta = timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture
def today():
    """The reference 'today' used across tests."""
    return TODAY


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sample_records():
    """The three sample days as normalized records."""
    return [NormalizedRecord.model_validate(row) for row in SAMPLE_ROWS]


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def bridge(storage):
    return PersistenceBridge(storage)


@pytest.fixture
def store(clock):
    """Empty store with no persistence attached."""
    return RecordStore(clock=clock)


@pytest.fixture
def populated_store(bridge, clock, sample_records):
    """Store holding the three sample days, persisted to memory storage."""
    store = RecordStore(bridge=bridge, clock=clock)
    for record in sample_records:
        store.create(record)
    return store
