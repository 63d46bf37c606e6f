"""Port interfaces for record queue adapters.

The logging handler depends only on these protocols, not on concrete
queue implementations.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class RecordQueuePort(Protocol):
    """Port for holding formatted records until a transport picks them up.

    Examples: InMemoryRecordQueue, RingBufferRecordQueue.
    """

    def write(self, record: str) -> None:
        """Append one formatted JSON record."""
        ...

    def drain(self, max_records: int | None = None) -> list[str]:
        """Remove and return the oldest records.

        Args:
            max_records: Upper bound on records returned. None drains all.

        Returns:
            Records in the order they were written.
        """
        ...

    def __len__(self) -> int:
        """Number of records currently queued."""
        ...
