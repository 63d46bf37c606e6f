"""Log helper functions for creating LogEvent objects."""

import traceback
from datetime import UTC, datetime
from typing import Any

from dynatrace_logsink.core.models import LogEvent, LogLevel
from dynatrace_logsink.core.template import MessageTemplate
from dynatrace_logsink.core.values import capture


def format_exception(exc: BaseException) -> str:
    """Return the full traceback text of an exception."""
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def log(
    level: LogLevel,
    template: str,
    exception: BaseException | str | None = None,
    **properties: Any,
) -> LogEvent:
    """Create a log event with automatic timestamp.

    Properties referenced as ``{@Name}`` in the template are destructured.

    Args:
        level: Event severity
        template: Message template text, e.g. "User {UserId} logged in"
        exception: Exception (or its string form) to attach
        **properties: Bound property values

    Returns:
        LogEvent with current UTC timestamp
    """
    parsed = MessageTemplate.parse(template)
    destructured = {t.name for t in parsed.property_tokens if t.hint == "@"}
    if isinstance(exception, BaseException):
        exception = format_exception(exception)
    return LogEvent(
        timestamp=datetime.now(UTC),
        level=level,
        template=parsed,
        properties={
            name: capture(value, destructure=name in destructured)
            for name, value in properties.items()
        },
        exception=exception,
    )


def verbose(template: str, **properties: Any) -> LogEvent:
    """Create a Verbose log event."""
    return log(LogLevel.VERBOSE, template, **properties)


def debug(template: str, **properties: Any) -> LogEvent:
    """Create a Debug log event with automatic timestamp.

    Args:
        template: Message template text
        **properties: Bound property values

    Returns:
        LogEvent with DEBUG level
    """
    return log(LogLevel.DEBUG, template, **properties)


def info(template: str, **properties: Any) -> LogEvent:
    """Create an Information log event with automatic timestamp.

    Args:
        template: Message template text
        **properties: Bound property values

    Returns:
        LogEvent with INFORMATION level
    """
    return log(LogLevel.INFORMATION, template, **properties)


def warn(template: str, **properties: Any) -> LogEvent:
    """Create a Warning log event with automatic timestamp."""
    return log(LogLevel.WARNING, template, **properties)


def error(
    template: str, exception: BaseException | str | None = None, **properties: Any
) -> LogEvent:
    """Create an Error log event with automatic timestamp.

    Args:
        template: Message template text
        exception: Exception to attach
        **properties: Bound property values

    Returns:
        LogEvent with ERROR level
    """
    return log(LogLevel.ERROR, template, exception, **properties)


def fatal(
    template: str, exception: BaseException | str | None = None, **properties: Any
) -> LogEvent:
    """Create a Fatal log event with automatic timestamp."""
    return log(LogLevel.FATAL, template, exception, **properties)
