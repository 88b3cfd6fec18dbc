"""Sample records used to seed an empty dashboard."""
import random
from datetime import date, timedelta
from typing import List, Optional

from .models import NormalizedRecord


def generate_sample_records(
    today: date,
    days: int = 7,
    rng: Optional[random.Random] = None,
) -> List[NormalizedRecord]:
    """
    Generate one plausible record per day for the ``days`` days ending today.

    Steps fall in 4000-11999, workouts in 15-74 minutes and heart rate in
    65-94 bpm.
    """
    rng = rng or random.Random()
    samples = []
    for offset in range(days):
        samples.append(
            NormalizedRecord(
                date=today - timedelta(days=offset),
                steps=rng.randrange(4000, 12000),
                workout_duration=rng.randrange(15, 75),
                heart_rate=rng.randrange(65, 95),
            )
        )
    return samples
