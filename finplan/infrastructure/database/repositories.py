"""Data access layer for the key-value snapshot store"""

import json
import logging
from datetime import date, datetime
from typing import Any, Optional
from sqlalchemy.orm import Session
from finplan.domain.exceptions import StorageError
from finplan.infrastructure.database.models import StoreEntry


def _json_default(value: Any) -> str:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class StoreRepository:
    """Key-value store: JSON values under string keys"""

    def __init__(self, db: Session):
        self.db = db

    def _entry(self, key: str) -> Optional[StoreEntry]:
        return self.db.query(StoreEntry).filter(StoreEntry.key == key).first()

    def get(self, key: str) -> Optional[Any]:
        """Stored value, or None when the key is missing or its content is corrupt"""
        entry = self._entry(key)
        if entry is None:
            return None
        try:
            return json.loads(entry.value)
        except ValueError as e:
            logging.error(f"Corrupt store entry: {e}", extra={"store_key": key})
            return None

    def set(self, key: str, value: Any) -> None:
        """
        Serialize and upsert a value.

        Raises:
            StorageError: value is not JSON serializable
        """
        try:
            payload = json.dumps(value, default=_json_default)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Cannot serialize value for key {key!r}: {e}") from e

        entry = self._entry(key)
        if entry is None:
            self.db.add(StoreEntry(key=key, value=payload))
        else:
            entry.value = payload
        self.db.flush()

    def remove(self, key: str) -> bool:
        """Delete a key; returns False when it did not exist"""
        entry = self._entry(key)
        if entry is None:
            return False
        self.db.delete(entry)
        self.db.flush()
        return True

    def clear(self) -> None:
        self.db.query(StoreEntry).delete()
        self.db.flush()
