"""
Identity-keyed record store with request fencing.

Holds the working set for one table. Bulk loads replace the whole set; writes
can be applied as targeted upserts/removals. Every bulk load takes a
monotonically increasing token and only the newest load may land, so a slow
response can never overwrite newer state.
"""

import threading
from typing import Any, Callable, Dict, Iterable, List, Optional


class RecordStore:
    """Thread-safe, ordered view over records keyed by their `id`."""

    def __init__(self, sort_key: Callable[[Any], Any], descending: bool = False):
        self._sort_key = sort_key
        self._descending = descending
        self._records: Dict[Any, Any] = {}
        self._lock = threading.Lock()
        self._latest_token = 0
        self._loaded = False

    def begin_load(self) -> int:
        """Reserve a fencing token for a new bulk load."""
        with self._lock:
            self._latest_token += 1
            return self._latest_token

    def apply_load(self, token: int, records: Iterable[Any]) -> bool:
        """
        Replace the working set with a bulk load result.

        Returns:
            False when a newer load has started since `token` was issued
        """
        with self._lock:
            if token != self._latest_token:
                return False
            self._records = {r.id: r for r in records}
            self._loaded = True
            return True

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._latest_token

    def upsert(self, record: Any) -> None:
        with self._lock:
            self._records[record.id] = record

    def remove(self, record_id: Any) -> bool:
        with self._lock:
            return self._records.pop(record_id, None) is not None

    def get(self, record_id: Any) -> Optional[Any]:
        with self._lock:
            return self._records.get(record_id)

    def items(self) -> List[Any]:
        """Ordered copy of the working set."""
        with self._lock:
            records = list(self._records.values())
        return sorted(records, key=self._sort_key, reverse=self._descending)

    @property
    def loaded(self) -> bool:
        return self._loaded

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __iter__(self):
        return iter(self.items())
