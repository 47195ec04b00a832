from typing import Optional

from core.alerts.store import KeyValueStore
from database.models import KeyValueEntry
from database.repositories.base import BaseRepository


class SqlKeyValueStore(BaseRepository, KeyValueStore):
    """KeyValueStore backed by the key_value_entry table; writes are flushed, not committed."""

    def get(self, key: str) -> Optional[str]:
        row = self.db.get(KeyValueEntry, key)
        return row.value if row is not None else None

    def set(self, key: str, value: str) -> None:
        row = self.db.get(KeyValueEntry, key)
        if row is None:
            self.db.add(KeyValueEntry(key=key, value=value))
        else:
            row.value = value
        self.db.flush()

    def delete(self, key: str) -> None:
        row = self.db.get(KeyValueEntry, key)
        if row is not None:
            self.db.delete(row)
            self.db.flush()
