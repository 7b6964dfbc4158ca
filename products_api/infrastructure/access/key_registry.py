"""
Adapter: In-memory API key registry.

Implements the ApiKeyRegistry port. Records live for the lifetime of
the process; every operation holds the registry lock.
"""

import threading
from dataclasses import replace
from datetime import datetime
from typing import Optional

from products_api.domain.access.entities import ApiKeyRecord
from products_api.domain.access.ports import ApiKeyRegistry


class InMemoryApiKeyRegistry(ApiKeyRegistry):
    """Dictionary-backed key registry. Callers only ever receive copies."""

    def __init__(self) -> None:
        self._records: dict[str, ApiKeyRecord] = {}
        self._lock = threading.RLock()

    def touch(self, key: str, used_at: datetime) -> Optional[ApiKeyRecord]:
        with self._lock:
            record = self._records.get(key)
            if record is None:
                return None
            record.last_used = used_at
            return replace(record)

    def register(self, record: ApiKeyRecord) -> None:
        with self._lock:
            self._records[record.key] = replace(record)

    def contains(self, key: str) -> bool:
        with self._lock:
            return key in self._records

    def list_records(self) -> list[ApiKeyRecord]:
        with self._lock:
            return [replace(record) for record in self._records.values()]
