"""
Persistence bridge between the record store and a textual key-value store.

The record list is stored as one JSON array under a single key, mirroring
browser local storage. Backends implement get/set of strings; an in-memory
backend and a SQLite-backed one are provided.
"""

import json
import logging
import sqlite3
from contextlib import contextmanager
from typing import Dict, Generator, List, Optional, Protocol, Sequence

from pydantic import TypeAdapter, ValidationError

from .errors import PersistenceConflictError, PersistenceError
from .models import HealthRecord

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "healthRecords"

_records_adapter = TypeAdapter(List[HealthRecord])


class KeyValueStorage(Protocol):
    """Minimal string key-value store."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStorage:
    """Process-local key-value storage."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class SqliteStorage:
    """
    Key-value storage in a single SQLite table.

    A new connection is opened per operation so the file can be shared with
    scripts. ``":memory:"`` keeps one connection open for the lifetime of the
    object, since each in-memory connection is a separate database.
    """

    TABLE = "kv_store"

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._memory_conn: Optional[sqlite3.Connection] = None
        if db_path == ":memory:":
            self._memory_conn = sqlite3.connect(db_path, check_same_thread=False)
        with self._connect() as conn:
            conn.execute(
                f"CREATE TABLE IF NOT EXISTS {self.TABLE} "
                "(key TEXT PRIMARY KEY, value TEXT NOT NULL)"
            )

    @contextmanager
    def _connect(self) -> Generator[sqlite3.Connection, None, None]:
        """Yield a connection and commit on success."""
        try:
            conn = self._memory_conn or sqlite3.connect(self.db_path, check_same_thread=False)
        except sqlite3.Error as e:
            raise PersistenceError(f"Cannot open storage {self.db_path}: {e}") from e
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise PersistenceError(f"Storage error in {self.db_path}: {e}") from e
        finally:
            if conn is not self._memory_conn:
                conn.close()

    def get(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute(
                f"SELECT value FROM {self.TABLE} WHERE key = ?", (key,)
            ).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                f"INSERT INTO {self.TABLE} (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )

    def close(self) -> None:
        if self._memory_conn is not None:
            self._memory_conn.close()
            self._memory_conn = None


def serialize_records(records: Sequence[HealthRecord]) -> str:
    """Encode records as a JSON array using the camelCase field names."""
    return _records_adapter.dump_json(
        list(records), by_alias=True, exclude_none=True
    ).decode("utf-8")


def deserialize_records(blob: str) -> List[HealthRecord]:
    """Decode a JSON array of records, raising PersistenceError if malformed."""
    try:
        return _records_adapter.validate_json(blob)
    except ValidationError as e:
        raise PersistenceError(f"Stored health records are malformed: {e}") from e


class PersistenceBridge:
    """
    Loads and saves the full record list under one storage key.

    With ``detect_conflicts`` enabled the bridge remembers the last blob it
    read or wrote, and ensure_unchanged() raises PersistenceConflictError if
    another writer has replaced it since.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = DEFAULT_STORAGE_KEY,
        detect_conflicts: bool = False,
    ):
        self.storage = storage
        self.key = key
        self.detect_conflicts = detect_conflicts
        self._last_blob: Optional[str] = None

    def _read(self) -> Optional[str]:
        try:
            return self.storage.get(self.key)
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(f"Storage unavailable: {e}") from e

    def load(self) -> Optional[List[HealthRecord]]:
        """
        Load the stored records.

        Returns:
            The stored records, or None when nothing has been saved yet

        Raises:
            PersistenceError: If the stored blob cannot be parsed
        """
        blob = self._read()
        self._last_blob = blob
        if blob is None:
            logger.info(f"[PERSISTENCE] No stored records under '{self.key}'")
            return None
        records = deserialize_records(blob)
        logger.info(f"[PERSISTENCE] Loaded {len(records)} records from '{self.key}'")
        return records

    def save(self, records: Sequence[HealthRecord]) -> None:
        """Replace the stored records with ``records``."""
        blob = serialize_records(records)
        try:
            self.storage.set(self.key, blob)
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(f"Storage unavailable: {e}") from e
        self._last_blob = blob
        logger.debug(f"[PERSISTENCE] Saved {len(records)} records to '{self.key}'")

    def ensure_unchanged(self) -> None:
        """Raise PersistenceConflictError if another writer changed the stored blob."""
        if not self.detect_conflicts:
            return
        current = self._read()
        if current != self._last_blob:
            raise PersistenceConflictError(
                f"Stored records under '{self.key}' were changed by another writer"
            )


def dumps_records(records: Sequence[HealthRecord], indent: int = 2) -> str:
    """Pretty-printed JSON export of records."""
    return json.dumps(json.loads(serialize_records(records)), indent=indent)
