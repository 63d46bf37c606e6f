"""Record queue adapters implementing core ports."""

from dynatrace_logsink.adapters.storage.in_memory import InMemoryRecordQueue
from dynatrace_logsink.adapters.storage.ring_buffer import RingBufferRecordQueue

__all__ = [
    "InMemoryRecordQueue",
    "RingBufferRecordQueue",
]
