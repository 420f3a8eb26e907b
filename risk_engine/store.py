"""
Keyed record stores for assessment results.

The engine does not own persistence; it hands plain JSON-compatible records
to whatever implements `RecordStore`. Two implementations are provided:
an in-memory store for tests and embedding, and a JSON-file store that
keeps one array per collection, the same shape the web client kept in
browser storage.
"""

import json
import threading
from pathlib import Path
from typing import Any, Protocol

import structlog

from risk_engine.config import StoreConfig
from risk_engine.errors import StorageError

logger = structlog.get_logger(__name__)

ASSESSMENTS = "health_assessments"
PREDICTIONS = "predictions"
RECOMMENDATIONS = "recommendations"

COLLECTIONS = (ASSESSMENTS, PREDICTIONS, RECOMMENDATIONS)

Record = dict[str, Any]


class RecordStore(Protocol):
    """
    Append-only collections of records keyed by their "id" field.

    Why Protocol over ABC: structural typing, callers can pass their own
    adapter without inheriting from anything here.
    """

    def append(self, collection: str, record: Record) -> None: ...

    def records(self, collection: str) -> list[Record]: ...

    def get(self, collection: str, record_id: str) -> Record | None: ...


def _check_collection(collection: str) -> None:
    if collection not in COLLECTIONS:
        raise StorageError(f"Unknown collection: {collection}", collection=collection)


class InMemoryRecordStore:
    """Dictionary-backed store; safe to share across worker threads."""

    def __init__(self) -> None:
        self._collections: dict[str, list[Record]] = {name: [] for name in COLLECTIONS}
        self._lock = threading.Lock()

    def append(self, collection: str, record: Record) -> None:
        _check_collection(collection)
        with self._lock:
            self._collections[collection].append(dict(record))

    def records(self, collection: str) -> list[Record]:
        _check_collection(collection)
        with self._lock:
            return [dict(r) for r in self._collections[collection]]

    def get(self, collection: str, record_id: str) -> Record | None:
        return next((r for r in self.records(collection) if r.get("id") == record_id), None)


class JsonFileRecordStore:
    """One `<collection>.json` array file per collection under `data_dir`."""

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir)
        self._lock = threading.Lock()
        self.logger = logger.bind(component="json_record_store", data_dir=str(self.data_dir))

    def _path(self, collection: str) -> Path:
        return self.data_dir / f"{collection}.json"

    def _read(self, collection: str) -> list[Record]:
        path = self._path(collection)
        if not path.exists():
            return []
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            self.logger.exception("record_read_failed", collection=collection, error=str(e))
            raise StorageError(f"Failed to read {collection}", collection=collection) from e

    def append(self, collection: str, record: Record) -> None:
        _check_collection(collection)
        with self._lock:
            records = self._read(collection)
            records.append(record)
            try:
                self.data_dir.mkdir(parents=True, exist_ok=True)
                tmp_path = self.data_dir / f"{collection}.json.tmp"
                tmp_path.write_text(json.dumps(records, indent=2), encoding="utf-8")
                tmp_path.replace(self._path(collection))
            except (OSError, TypeError, ValueError) as e:
                self.logger.exception("record_write_failed", collection=collection, error=str(e))
                raise StorageError(
                    f"Failed to save {collection} record", collection=collection
                ) from e

        self.logger.debug("record_stored", collection=collection, record_id=record.get("id"))

    def records(self, collection: str) -> list[Record]:
        _check_collection(collection)
        with self._lock:
            return self._read(collection)

    def get(self, collection: str, record_id: str) -> Record | None:
        return next((r for r in self.records(collection) if r.get("id") == record_id), None)


def records_for_user(store: RecordStore, collection: str, user_id: str) -> list[Record]:
    """All records in a collection belonging to one user, oldest first."""
    return [r for r in store.records(collection) if r.get("user_id") == user_id]


def build_store(config: StoreConfig) -> RecordStore:
    if config.backend == "json":
        return JsonFileRecordStore(config.data_dir)
    return InMemoryRecordStore()
