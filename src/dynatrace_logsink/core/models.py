"""Core domain models for structured log events."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import IntEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from dynatrace_logsink.core.template import MessageTemplate


class LogLevel(IntEnum):
    """Ordered severity of a log event."""

    VERBOSE = 0
    DEBUG = 1
    INFORMATION = 2
    WARNING = 3
    ERROR = 4
    FATAL = 5

    @property
    def canonical_name(self) -> str:
        """Name written to the ``level`` field (e.g. ``Information``)."""
        return self.name.capitalize()

    @classmethod
    def from_stdlib(cls, levelno: int) -> "LogLevel":
        """Map a stdlib ``logging`` level number to a LogLevel.

        Args:
            levelno: Numeric level (``logging.INFO``, ``logging.ERROR``, ...).

        Returns:
            The closest LogLevel at or below ``levelno``.
        """
        if levelno >= 50:
            return cls.FATAL
        if levelno >= 40:
            return cls.ERROR
        if levelno >= 30:
            return cls.WARNING
        if levelno >= 20:
            return cls.INFORMATION
        if levelno >= 10:
            return cls.DEBUG
        return cls.VERBOSE


@dataclass(frozen=True)
class ScalarValue:
    """A primitive property value (str, number, bool, None, ...)."""

    value: Any


@dataclass(frozen=True)
class SequenceValue:
    """An ordered list of structured values."""

    elements: tuple["StructuredValue", ...] = ()


@dataclass(frozen=True)
class StructureValue:
    """A named object: ordered (name, value) members and an optional type tag."""

    properties: tuple[tuple[str, "StructuredValue"], ...] = ()
    type_tag: str | None = None


@dataclass(frozen=True)
class DictionaryValue:
    """A mapping whose keys are scalars, kept in insertion order."""

    elements: tuple[tuple[ScalarValue, "StructuredValue"], ...] = ()


StructuredValue = ScalarValue | SequenceValue | StructureValue | DictionaryValue


def _as_utc(timestamp: datetime) -> datetime:
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=UTC)
    return timestamp


@dataclass(frozen=True, eq=False)
class LogEvent:
    """A structured log event.

    Events compare and hash by identity; properties are a read-only view.

    Attributes:
        timestamp: When the event happened. Naive datetimes are taken as UTC.
        level: Event severity.
        template: Parsed message template.
        properties: Bound properties by name, in insertion order.
        exception: String form of the attached exception, if any.
        trace_id: Propagated trace identifier, if any.
        span_id: Propagated span identifier, if any.
    """

    timestamp: datetime
    level: LogLevel
    template: "MessageTemplate"
    properties: Mapping[str, StructuredValue] = field(default_factory=dict)
    exception: str | None = None
    trace_id: str | None = None
    span_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _as_utc(self.timestamp))
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))


@dataclass(frozen=True)
class Formatted:
    """Successful record formatting: one line of JSON text."""

    text: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class FormatFailure:
    """A record that could not be formatted and will be dropped.

    Attributes:
        event: The event that failed.
        error: The exception raised while formatting.
        message: Human readable diagnostic.
    """

    event: LogEvent
    error: BaseException
    message: str

    @property
    def ok(self) -> bool:
        return False


FormatResult = Formatted | FormatFailure
