"""Python logging handler adapter for dynatrace_logsink.

This adapter bridges Python's standard library logging module to the
record formatter, writing one JSON record per log call to a
RecordQueuePort from which a transport builds batches.
"""

import logging
from datetime import UTC, datetime
from typing import Any

from dynatrace_logsink.adapters.logging_context import get_log_context
from dynatrace_logsink.core.diagnostics import SELFLOG_NAME
from dynatrace_logsink.core.encoding.record import RecordFormatter
from dynatrace_logsink.core.logs import format_exception
from dynatrace_logsink.core.models import Formatted, LogEvent, LogLevel
from dynatrace_logsink.core.ports import RecordQueuePort
from dynatrace_logsink.core.template import MessageTemplate
from dynatrace_logsink.core.values import capture

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)

# Default source attributes to extract from LogRecord
_DEFAULT_INCLUDE_ATTRS = ["logger.name", "code.function", "code.lineno"]

_TRACE_KEYS = ("trace_id", "span_id")


class DynatraceHandler(logging.Handler):
    """Logging handler that formats records and queues them for shipping.

    Example:
        ```python
        from dynatrace_logsink import DynatraceHandler, InMemoryRecordQueue

        queue = InMemoryRecordQueue()
        handler = DynatraceHandler(queue)
        logging.getLogger().addHandler(handler)
        ```
    """

    def __init__(
        self,
        queue: RecordQueuePort,
        formatter: RecordFormatter | None = None,
        include_attrs: list[str] | None = None,
        level: int = logging.NOTSET,
    ) -> None:
        """Initialize the handler with a record queue.

        Args:
            queue: Queue implementing RecordQueuePort.
            formatter: Record formatter. Defaults to one with default config.
            include_attrs: Source attributes to include. Choose from
                "logger.name", "code.function", "code.lineno" and
                "code.filepath". Defaults to the first three.
            level: Minimum stdlib level handled.
        """
        super().__init__(level)
        self._queue = queue
        self._record_formatter = formatter or RecordFormatter()
        self._include_attrs = (
            include_attrs if include_attrs is not None else _DEFAULT_INCLUDE_ATTRS
        )

    @property
    def queue(self) -> RecordQueuePort:
        return self._queue

    def to_event(self, record: logging.LogRecord) -> LogEvent:
        """Convert a stdlib LogRecord into a LogEvent.

        The message is taken already rendered (``%`` args applied), so it is
        never parsed for ``{}`` placeholders.
        """
        attr_mapping: dict[str, Any] = {
            "logger.name": record.name,
            "code.function": record.funcName or "",
            "code.lineno": record.lineno,
            "code.filepath": record.pathname,
        }
        properties: dict[str, Any] = {
            key: attr_mapping[key] for key in self._include_attrs if key in attr_mapping
        }

        context = get_log_context()
        trace_ids = {key: context.pop(key, None) for key in _TRACE_KEYS}
        properties.update(context)

        for key, value in record.__dict__.items():
            if key not in _STANDARD_LOGRECORD_ATTRS:
                properties[key] = value

        exception: str | None = None
        if record.exc_info and record.exc_info[1] is not None:
            exception = format_exception(record.exc_info[1]).rstrip("\n")
        elif record.exc_text:
            exception = record.exc_text

        return LogEvent(
            timestamp=datetime.fromtimestamp(record.created, UTC),
            level=LogLevel.from_stdlib(record.levelno),
            template=MessageTemplate.literal(record.getMessage()),
            properties={name: capture(value) for name, value in properties.items()},
            exception=exception,
            trace_id=_optional_str(trace_ids["trace_id"]),
            span_id=_optional_str(trace_ids["span_id"]),
        )

    def emit(self, record: logging.LogRecord) -> None:
        """Format a log record and write it to the queue.

        Records from the diagnostic logger are ignored so that reports
        about dropped records never feed back into the sink.
        """
        if record.name == SELFLOG_NAME or record.name.startswith(SELFLOG_NAME + "."):
            return
        try:
            result = self._record_formatter.format(self.to_event(record))
            if isinstance(result, Formatted):
                self._queue.write(result.text)
        except Exception:
            self.handleError(record)


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)
