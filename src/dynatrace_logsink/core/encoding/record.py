"""Single-line JSON encoding of log events for the ingest API."""

import io
import json
from collections.abc import Iterable, Iterator
from datetime import UTC, datetime, timedelta
from typing import TextIO

from dynatrace_logsink.core.config import FormatterConfig, TimestampFormat
from dynatrace_logsink.core.diagnostics import report_dropped_event
from dynatrace_logsink.core.flatten import flatten_properties
from dynatrace_logsink.core.models import (
    FormatFailure,
    Formatted,
    FormatResult,
    LogEvent,
)

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_MILLISECOND = timedelta(milliseconds=1)


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=True)


def _timestamp_json(event: LogEvent, timestamp_format: TimestampFormat) -> str:
    if timestamp_format is TimestampFormat.EPOCH_MILLIS:
        return str((event.timestamp - _EPOCH) // _ONE_MILLISECOND)
    return _quote(event.timestamp.isoformat(timespec="microseconds"))


class RecordFormatter:
    """Formats LogEvents as flat, single-line JSON objects.

    Field order is fixed: ``timestamp``, ``level``, ``application.id``,
    ``host.name``, optional ``env``, ``content``, propagated trace ids,
    flattened properties, then static attributes.

    The formatter holds only its immutable config and can be shared between
    threads.

    Example:
        ```python
        formatter = RecordFormatter(FormatterConfig(application_id="billing"))
        result = formatter.format(info("Invoice {InvoiceId} paid", InvoiceId=42))
        if result.ok:
            queue.write(result.text)
        ```
    """

    def __init__(self, config: FormatterConfig | None = None) -> None:
        self._config = config if config is not None else FormatterConfig()

    @property
    def config(self) -> FormatterConfig:
        return self._config

    def format(self, event: LogEvent) -> FormatResult:
        """Format one event.

        Args:
            event: The event to format.

        Returns:
            Formatted with the JSON text, or FormatFailure when rendering the
            message or a property value raised. Failures are also reported on
            the diagnostic channel.

        Raises:
            TypeError: If event is None.
        """
        if event is None:
            raise TypeError("event must not be None")
        try:
            return Formatted(self._encode(event))
        except Exception as e:
            message = report_dropped_event(event, e)
            return FormatFailure(event=event, error=e, message=message)

    def write(self, event: LogEvent, output: TextIO) -> bool:
        """Write the formatted event plus a newline to ``output``.

        Nothing is written when formatting fails.

        Returns:
            True if the record was written.
        """
        if output is None:
            raise TypeError("output must not be None")
        result = self.format(event)
        if isinstance(result, Formatted):
            output.write(result.text)
            output.write("\n")
            return True
        return False

    def format_many(self, events: Iterable[LogEvent]) -> Iterator[str]:
        """Yield the JSON text of every event that formats successfully."""
        for event in events:
            result = self.format(event)
            if isinstance(result, Formatted):
                yield result.text

    def _encode(self, event: LogEvent) -> str:
        config = self._config
        out = io.StringIO()

        out.write('{"timestamp":')
        out.write(_timestamp_json(event, config.timestamp_format))
        out.write(',"level":')
        out.write(_quote(event.level.canonical_name))
        out.write(',"application.id":')
        out.write(_quote(config.application_id))
        out.write(',"host.name":')
        out.write(_quote(config.host_name))
        if config.environment is not None:
            out.write(',"env":')
            out.write(_quote(config.environment))

        content = event.template.render(event.properties)
        if event.exception is not None:
            content = f"{content}\n{event.exception}"
        out.write(',"content":')
        out.write(_quote(content))

        for key, value in (("trace_id", event.trace_id), ("span_id", event.span_id)):
            if value is not None and key not in event.properties:
                self._write_field(out, key, value)

        for key, value in flatten_properties(
            event.properties, config.properties_prefix
        ):
            self._write_field(out, key, value)

        for key, value in config.static_attributes:
            self._write_field(out, key, value)

        out.write("}")
        return out.getvalue()

    @staticmethod
    def _write_field(out: io.StringIO, key: str, value: str) -> None:
        out.write(",")
        out.write(_quote(key))
        out.write(":")
        out.write(_quote(value))
