"""Wiring of formatters, queue and logging handler into one sink.

The sink performs no I/O. A transport calls ``next_batch()`` on its own
schedule and POSTs the payload to ``ingest_url`` with ``headers``.

Example:
    ```python
    sink = create_sink(SinkConfig(
        ingest_url="https://abc123.live.dynatrace.com/api/v2/logs/ingest",
        api_token=os.environ["DT_API_TOKEN"],
        formatter=FormatterConfig.from_environment(application_id="billing"),
    ))
    logging.getLogger().addHandler(sink.handler())

    payload = sink.next_batch()
    if payload:
        httpx.post(sink.ingest_url, content=payload.encode(), headers=sink.headers)
    ```
"""

import logging
from dataclasses import dataclass, field

from dynatrace_logsink.adapters.logging import DynatraceHandler
from dynatrace_logsink.adapters.storage.ring_buffer import RingBufferRecordQueue
from dynatrace_logsink.core.config import FormatterConfig
from dynatrace_logsink.core.encoding.batch import (
    DEFAULT_EVENT_BODY_LIMIT_BYTES,
    BatchFormatter,
    ingest_headers,
)
from dynatrace_logsink.core.encoding.record import RecordFormatter
from dynatrace_logsink.core.ports import RecordQueuePort

DEFAULT_QUEUE_LIMIT = 10_000
DEFAULT_BATCH_SIZE_LIMIT = 50


@dataclass(frozen=True)
class SinkConfig:
    """Settings for a LogSink.

    Attributes:
        ingest_url: Log ingest endpoint, usually
            ``https://{environment-id}.live.dynatrace.com/api/v2/logs/ingest``.
        api_token: API token sent in the ``Authorization`` header.
        formatter: Record formatter settings.
        event_body_limit_bytes: Per-record size limit, None for no limit.
        queue_limit: Records held before the oldest are evicted.
        batch_size_limit: Records per batch returned by ``next_batch()``.
    """

    ingest_url: str
    api_token: str
    formatter: FormatterConfig = field(default_factory=FormatterConfig)
    event_body_limit_bytes: int | None = DEFAULT_EVENT_BODY_LIMIT_BYTES
    queue_limit: int = DEFAULT_QUEUE_LIMIT
    batch_size_limit: int = DEFAULT_BATCH_SIZE_LIMIT

    def __post_init__(self) -> None:
        if not self.ingest_url or not self.ingest_url.strip():
            raise ValueError("ingest_url must not be blank")
        if not self.api_token or not self.api_token.strip():
            raise ValueError("api_token must not be blank")
        if self.batch_size_limit <= 0:
            raise ValueError("batch_size_limit must be positive")


class LogSink:
    """Formatters, a record queue and the headers a transport needs."""

    def __init__(
        self, config: SinkConfig, queue: RecordQueuePort | None = None
    ) -> None:
        self._config = config
        self._queue = (
            queue if queue is not None else RingBufferRecordQueue(config.queue_limit)
        )
        self._record_formatter = RecordFormatter(config.formatter)
        self._batch_formatter = BatchFormatter(config.event_body_limit_bytes)
        self._headers = ingest_headers(config.api_token)

    @property
    def config(self) -> SinkConfig:
        return self._config

    @property
    def ingest_url(self) -> str:
        return self._config.ingest_url

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    @property
    def queue(self) -> RecordQueuePort:
        return self._queue

    @property
    def record_formatter(self) -> RecordFormatter:
        return self._record_formatter

    @property
    def batch_formatter(self) -> BatchFormatter:
        return self._batch_formatter

    def handler(
        self, level: int = logging.NOTSET, include_attrs: list[str] | None = None
    ) -> DynatraceHandler:
        """Create a logging handler that feeds this sink's queue."""
        return DynatraceHandler(
            self._queue,
            formatter=self._record_formatter,
            include_attrs=include_attrs,
            level=level,
        )

    def next_batch(self) -> str:
        """Drain up to ``batch_size_limit`` records and encode them.

        Returns:
            The JSON array payload, or an empty string when there is
            nothing to send.
        """
        records = self._queue.drain(self._config.batch_size_limit)
        return self._batch_formatter.encode(records)


def create_sink(config: SinkConfig, queue: RecordQueuePort | None = None) -> LogSink:
    """Create a LogSink backed by a ring buffer unless a queue is given."""
    return LogSink(config, queue)
