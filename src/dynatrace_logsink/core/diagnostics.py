"""Best-effort diagnostic channel for records the sink has to drop.

Diagnostics go to the stdlib logger named ``dynatrace_logsink.selflog``.
Attach a handler to it (or to the root logger) to see them; records from
this logger are never shipped by DynatraceHandler itself.
"""

import logging

from dynatrace_logsink.core.models import LogEvent

SELFLOG_NAME = "dynatrace_logsink.selflog"

selflog = logging.getLogger(SELFLOG_NAME)


def describe_dropped_event(event: LogEvent, error: BaseException) -> str:
    """Build the diagnostic text for an event that could not be formatted."""
    return (
        f"Event at {event.timestamp.isoformat()} with message template "
        f"{event.template.text!r} could not be formatted into JSON and will be "
        f"dropped: {type(error).__name__}: {error}"
    )


def report_dropped_event(event: LogEvent, error: BaseException) -> str:
    """Write a dropped-event diagnostic and return its text."""
    message = describe_dropped_event(event, error)
    selflog.warning(message, exc_info=error)
    return message


def report_oversized_record(size: int, limit: int) -> None:
    selflog.debug(
        "Record of %d bytes exceeds the %d byte limit and is excluded from the batch",
        size,
        limit,
    )


def report_malformed_record(error: UnicodeError) -> None:
    selflog.warning(
        "Record cannot be encoded as UTF-8 and is excluded from the batch: %s", error
    )
