import threading
from typing import List, Optional

from django.apps import apps
from django.utils import timezone

from .exceptions import StringConflict, StringNotFound
from .filters import StringRecordFilter
from .models import StringRecord
from .utils import analyze_string, compute_sha256


class BaseStringStore:
    """
    Content-addressed storage of analyzed strings.

    Records are keyed by the SHA-256 of their value. Lookups and deletes take
    the raw value and recompute the key.
    """

    def insert(self, value: str) -> StringRecord:
        raise NotImplementedError

    def get(self, value: str) -> StringRecord:
        raise NotImplementedError

    def delete(self, value: str) -> None:
        raise NotImplementedError

    def list(self, filters: Optional[StringRecordFilter] = None) -> List[StringRecord]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def __len__(self):
        return self.count()


class InMemoryStringStore(BaseStringStore):
    """
    Process-local store. All state is lost when the process exits.
    """

    def __init__(self):
        self._records = {}
        self._lock = threading.Lock()

    def insert(self, value):
        # analysis is pure, so it can run outside the lock
        properties = analyze_string(value)
        with self._lock:
            existing = self._records.get(properties.sha256_hash)
            if existing is not None:
                raise StringConflict(existing)
            record = StringRecord(
                value=value,
                properties=properties,
                created_at=timezone.now(),
            )
            self._records[record.id] = record
        return record

    def get(self, value):
        key = compute_sha256(value)
        with self._lock:
            record = self._records.get(key)
        if record is None:
            raise StringNotFound(value)
        return record

    def delete(self, value):
        key = compute_sha256(value)
        with self._lock:
            if self._records.pop(key, None) is None:
                raise StringNotFound(value)

    def list(self, filters=None):
        with self._lock:
            records = list(self._records.values())
        if filters is None:
            return records
        return [record for record in records if filters.matches(record)]

    def count(self):
        with self._lock:
            return len(self._records)

    def clear(self):
        with self._lock:
            self._records.clear()


def get_store() -> BaseStringStore:
    """Return the store shared by the views."""
    return apps.get_app_config('String_Analyser').store
