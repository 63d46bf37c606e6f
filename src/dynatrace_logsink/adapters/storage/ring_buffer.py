"""Ring buffer record queue adapter.

Provides bounded in-memory storage that automatically evicts the oldest
records when the buffer is full. Useful for production services that
need predictable memory usage while the transport is unavailable.
"""

import threading
from collections import deque

from dynatrace_logsink.adapters.storage.in_memory import _pop_oldest


class RingBufferRecordQueue:
    """Ring buffer implementation of RecordQueuePort.

    Stores records in a fixed-size circular buffer. When the buffer is
    full, the oldest record is evicted to make room for the new one.

    Args:
        max_size: Maximum number of records to hold.

    Raises:
        ValueError: If max_size is not positive.
    """

    def __init__(self, max_size: int) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self._buffer: deque[str] = deque(maxlen=max_size)
        self._lock = threading.Lock()
        self._evicted = 0

    @property
    def max_size(self) -> int:
        return self._buffer.maxlen or 0

    @property
    def evicted(self) -> int:
        """Records dropped so far because the buffer was full."""
        return self._evicted

    def write(self, record: str) -> None:
        """Append a record, evicting the oldest one when full."""
        with self._lock:
            if len(self._buffer) == self._buffer.maxlen:
                self._evicted += 1
            self._buffer.append(record)

    def drain(self, max_records: int | None = None) -> list[str]:
        """Remove and return up to ``max_records`` of the oldest records."""
        with self._lock:
            return _pop_oldest(self._buffer, max_records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)
