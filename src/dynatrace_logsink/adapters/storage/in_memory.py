"""In-memory record queue adapter."""

import threading
from collections import deque


class InMemoryRecordQueue:
    """Unbounded in-memory implementation of RecordQueuePort.

    Suitable for testing and low-volume applications where persistence
    is not required.
    """

    def __init__(self) -> None:
        self._records: deque[str] = deque()
        self._lock = threading.Lock()

    def write(self, record: str) -> None:
        """Append one formatted JSON record."""
        with self._lock:
            self._records.append(record)

    def drain(self, max_records: int | None = None) -> list[str]:
        """Remove and return up to ``max_records`` of the oldest records."""
        with self._lock:
            return _pop_oldest(self._records, max_records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


def _pop_oldest(records: deque[str], max_records: int | None) -> list[str]:
    count = len(records) if max_records is None else min(max_records, len(records))
    return [records.popleft() for _ in range(max(count, 0))]
