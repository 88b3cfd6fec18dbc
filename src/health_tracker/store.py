"""
Record Store for health records.

Owns the canonical id -> record mapping. Listing is always ordered by date,
newest first, with ties broken by id descending. When a persistence bridge
is attached, every mutation saves the full record list.
"""

import logging
from datetime import date, datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional

from .errors import (
    PersistenceConflictError,
    PersistenceError,
    RecordNotFoundError,
    RecordValidationError,
)
from .models import HealthRecord, NormalizedRecord
from .persistence import PersistenceBridge
from .sample_data import generate_sample_records
from .validator import DEFAULT_POLICY, ValidationPolicy, check_record

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
Calendar = Callable[[], date]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _sort_key(record: HealthRecord):
    return record.date, record.id


class RecordStore:
    """
    In-memory store of health records.

    Ids are time-derived (epoch milliseconds from the clock) and forced to be
    strictly increasing, so two records created in the same instant never
    collide and a deleted id is never handed out again.
    """

    def __init__(
        self,
        records: Iterable[HealthRecord] = (),
        bridge: Optional[PersistenceBridge] = None,
        clock: Clock = _utcnow,
        policy: ValidationPolicy = DEFAULT_POLICY,
        calendar: Calendar = date.today,
    ):
        """
        Initialize the store.

        Args:
            records: Records to start with (e.g. loaded from storage)
            bridge: Persistence bridge saved to after every mutation
            clock: Source of timestamps for ids and createdAt/updatedAt
            policy: Field bounds every admitted record must satisfy
            calendar: Source of "today" for the future-date bound
        """
        self._bridge = bridge
        self._clock = clock
        self._policy = policy
        self._calendar = calendar
        self._records: Dict[int, HealthRecord] = {}
        self._ordered: List[HealthRecord] = []
        self._last_id = 0

        today = calendar()
        for record in records:
            if record.id in self._records:
                logger.warning(f"[STORE] Dropping duplicate record id {record.id}")
                continue
            errors = check_record(record, today, policy)
            if errors:
                logger.warning(f"[STORE] Dropping out-of-bounds record {record.id}: {errors}")
                continue
            self._records[record.id] = record
            self._last_id = max(self._last_id, record.id)
        self._resort()

    @classmethod
    def open(
        cls,
        bridge: PersistenceBridge,
        today: Optional[date] = None,
        seed_sample_data: bool = True,
        clock: Clock = _utcnow,
        policy: ValidationPolicy = DEFAULT_POLICY,
        calendar: Calendar = date.today,
    ) -> "RecordStore":
        """
        Build a store from persisted records.

        When nothing has been stored yet and ``seed_sample_data`` is set, the
        store is seeded with a week of sample records ending at ``today``.
        Malformed stored data is logged and replaced by an empty store.
        Stored records outside ``policy`` are dropped with a warning.
        """
        options = dict(bridge=bridge, clock=clock, policy=policy, calendar=calendar)
        try:
            loaded = bridge.load()
        except PersistenceError as e:
            logger.error(f"[STORE] Could not load stored records, starting empty: {e}")
            return cls(**options)

        if loaded is not None:
            return cls(loaded, **options)

        store = cls(**options)
        if seed_sample_data:
            seed_day = today or clock().date()
            store.create_many(generate_sample_records(seed_day))
            logger.info(f"[STORE] Seeded {len(store)} sample records ending {seed_day}")
        return store

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: int) -> bool:
        return record_id in self._records

    def _resort(self) -> None:
        self._ordered = sorted(self._records.values(), key=_sort_key, reverse=True)

    def _next_id(self, now: datetime) -> int:
        candidate = int(now.timestamp() * 1000)
        self._last_id = max(self._last_id + 1, candidate)
        return self._last_id

    def _check_fresh(self) -> None:
        if self._bridge is None:
            return
        try:
            self._bridge.ensure_unchanged()
        except PersistenceConflictError:
            raise
        except PersistenceError as e:
            logger.error(f"[STORE] Could not re-check stored records: {e}")

    def _check_bounds(self, data: NormalizedRecord) -> None:
        errors = check_record(data, self._calendar(), self._policy)
        if errors:
            raise RecordValidationError(errors)

    def _persist(self) -> None:
        if self._bridge is None:
            return
        try:
            self._bridge.save(self._ordered)
        except PersistenceConflictError:
            raise
        except PersistenceError as e:
            logger.error(f"[STORE] Failed to persist {len(self._ordered)} records: {e}")

    def _insert(self, data: NormalizedRecord) -> HealthRecord:
        now = self._clock()
        record = HealthRecord(
            id=self._next_id(now),
            date=data.date,
            steps=data.steps,
            workout_duration=data.workout_duration,
            heart_rate=data.heart_rate,
            created_at=now,
        )
        self._records[record.id] = record
        return record

    def create(self, data: NormalizedRecord) -> HealthRecord:
        """Store a validated record under a fresh id and return it."""
        self._check_bounds(data)
        self._check_fresh()
        record = self._insert(data)
        self._resort()
        self._persist()
        logger.info(f"[STORE] Created record {record.id} for {record.date}")
        return record

    def create_many(self, items: Iterable[NormalizedRecord]) -> List[HealthRecord]:
        """Store several validated records with a single save."""
        items = list(items)
        for data in items:
            self._check_bounds(data)
        self._check_fresh()
        created = [self._insert(data) for data in items]
        self._resort()
        self._persist()
        logger.info(f"[STORE] Created {len(created)} records")
        return created

    def update(self, record_id: int, data: NormalizedRecord) -> HealthRecord:
        """
        Replace the mutable fields of an existing record.

        The id and createdAt are preserved; updatedAt is stamped.

        Raises:
            RecordNotFoundError: If no record has this id
            RecordValidationError: If a field is outside the store's policy
        """
        existing = self.get(record_id)
        self._check_bounds(data)
        self._check_fresh()
        record = existing.model_copy(
            update={
                "date": data.date,
                "steps": data.steps,
                "workout_duration": data.workout_duration,
                "heart_rate": data.heart_rate,
                "updated_at": self._clock(),
            }
        )
        self._records[record_id] = record
        self._resort()
        self._persist()
        logger.info(f"[STORE] Updated record {record_id}")
        return record

    def delete(self, record_id: int) -> None:
        """
        Remove a record. Confirmation is the caller's responsibility.

        Raises:
            RecordNotFoundError: If no record has this id
        """
        if record_id not in self._records:
            raise RecordNotFoundError(record_id)
        self._check_fresh()
        del self._records[record_id]
        self._resort()
        self._persist()
        logger.info(f"[STORE] Deleted record {record_id}")

    def discard(self, record_id: int) -> bool:
        """Remove a record if present. Returns False when it was already gone."""
        if record_id not in self._records:
            logger.debug(f"[STORE] Discard of missing record {record_id} ignored")
            return False
        self.delete(record_id)
        return True

    def get(self, record_id: int) -> HealthRecord:
        """
        Return the record with this id.

        Raises:
            RecordNotFoundError: If no record has this id
        """
        record = self._records.get(record_id)
        if record is None:
            raise RecordNotFoundError(record_id)
        return record

    def find(self, record_id: int) -> Optional[HealthRecord]:
        """Return the record with this id, or None."""
        return self._records.get(record_id)

    def list(self) -> List[HealthRecord]:
        """Return all records, newest date first, as a new list."""
        return list(self._ordered)
