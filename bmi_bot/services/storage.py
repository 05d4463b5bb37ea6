"""Persistent storage of the record collection.

The collection is kept as one JSON array under one key. Every change is
read-entire, change in memory, write-entire; the last writer wins.
"""
import json
import logging
from dataclasses import dataclass
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from bmi_bot.database import get_db
from bmi_bot.models import Record, StorageEntry

logger = logging.getLogger(__name__)

DEFAULT_KEY = "imcRecords"


class KeyValueStorage:
    """get/set/remove by key on the storage table.

    SQLAlchemy errors propagate to the caller.
    """

    def __init__(self, session_factory=None):
        self.session_factory = session_factory

    def get_item(self, key: str) -> Optional[str]:
        with get_db(self.session_factory) as db:
            entry = db.query(StorageEntry).filter_by(key=key).first()
            return entry.value if entry else None

    def set_item(self, key: str, value: str) -> None:
        with get_db(self.session_factory) as db:
            entry = db.query(StorageEntry).filter_by(key=key).first()
            if entry:
                entry.value = value
            else:
                db.add(StorageEntry(key=key, value=value))
            db.commit()

    def remove_item(self, key: str) -> None:
        with get_db(self.session_factory) as db:
            db.query(StorageEntry).filter_by(key=key).delete()
            db.commit()


@dataclass(frozen=True)
class StorageResult:
    """Outcome of a write. The caller decides whether to show a failure."""

    ok: bool
    error: Optional[str] = None

    @classmethod
    def success(cls) -> "StorageResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: str) -> "StorageResult":
        return cls(ok=False, error=error)


class RecordStore:
    """Record collection on top of a key/value storage."""

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_KEY):
        self.storage = storage
        self.key = key

    def _read_items(self) -> list:
        """Read the stored JSON array as is. Unparseable content counts as empty.

        Raises:
            SQLAlchemyError: the storage read failed
        """
        stored = self.storage.get_item(self.key)
        if stored is None:
            return []

        try:
            items = json.loads(stored)
        except ValueError as e:
            logger.error(f"Stored records are not valid JSON, treating as empty: {e}")
            return []
        if not isinstance(items, list):
            logger.error(f"Stored records are a {type(items).__name__}, not an array, treating as empty")
            return []
        return items

    def _write_items(self, items: list) -> StorageResult:
        payload = json.dumps(items, ensure_ascii=False)
        try:
            self.storage.set_item(self.key, payload)
        except SQLAlchemyError as e:
            logger.error(f"Failed to save records: {e}")
            return StorageResult.failure(str(e))
        return StorageResult.success()

    def load_all(self) -> list[Record]:
        """Load every stored record.

        Returns an empty list when nothing is stored, when the stored value
        is not a JSON array or when the read fails. Single entries that are
        not valid records are skipped. Nothing is raised.
        """
        try:
            items = self._read_items()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read records: {e}")
            return []

        records = []
        for index, item in enumerate(items):
            try:
                records.append(Record.from_dict(item))
            except (ValueError, KeyError, TypeError) as e:
                logger.error(f"Skipping unreadable record #{index}: {e!r}")
        return records

    def save_all(self, records: list[Record]) -> StorageResult:
        """Replace the whole stored collection with one write."""
        return self._write_items([record.to_dict() for record in records])

    def clear(self) -> StorageResult:
        """Remove the key entirely."""
        try:
            self.storage.remove_item(self.key)
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete all records: {e}")
            return StorageResult.failure(str(e))
        logger.info("All records deleted")
        return StorageResult.success()

    def add(self, record: Record) -> StorageResult:
        """Append one record.

        Stored entries are written back untouched, unreadable ones included.
        A failed read aborts without writing.
        """
        try:
            items = self._read_items()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read records before saving: {e}")
            return StorageResult.failure(str(e))

        items.append(record.to_dict())
        result = self._write_items(items)
        if result.ok:
            logger.info(f"Saved record {record.id} for {record.name!r}")
        return result

    def delete(self, record_id: str) -> StorageResult:
        """Delete one record by id. Unknown ids are a successful no-op."""
        try:
            items = self._read_items()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read records before deleting: {e}")
            return StorageResult.failure(str(e))

        remaining = [
            item for item in items
            if not (isinstance(item, dict) and str(item.get("id")) == record_id)
        ]
        if len(remaining) == len(items):
            return StorageResult.success()

        result = self._write_items(remaining)
        if result.ok:
            logger.info(f"Deleted record {record_id}")
        return result


def get_store(context) -> RecordStore:
    """RecordStore injected into application.bot_data at startup."""
    return context.bot_data["store"]
