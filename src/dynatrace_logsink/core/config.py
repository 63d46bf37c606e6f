"""Formatter configuration.

All settings are fixed at construction time. Formatters hold a single
FormatterConfig and never modify it.
"""

import os
import socket
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

DEFAULT_APPLICATION_ID = "unknown"
DEFAULT_PROPERTIES_PREFIX = "attr."

# Checked in order; the first variable that is set and non-blank wins.
ENVIRONMENT_VARIABLES = ("DT_ENVIRONMENT", "APP_ENVIRONMENT", "ENVIRONMENT")


class TimestampFormat(Enum):
    """How the ``timestamp`` field is written."""

    ISO8601 = "iso8601"
    EPOCH_MILLIS = "epoch_millis"


def default_host_name() -> str:
    """Return the local host name, lower-cased."""
    return socket.gethostname().lower()


def resolve_environment(
    environ: Mapping[str, str] | None = None,
    names: Iterable[str] = ENVIRONMENT_VARIABLES,
) -> str | None:
    """Resolve the environment name from environment variables.

    Args:
        environ: Variables to search. Defaults to ``os.environ``.
        names: Variable names in priority order.

    Returns:
        The first non-blank value found, or None.
    """
    if environ is None:
        environ = os.environ
    for name in names:
        value = environ.get(name)
        if value and value.strip():
            return value.strip()
    return None


def _attribute_pairs(
    attributes: Mapping[str, str] | Iterable[tuple[str, str]] | None,
) -> tuple[tuple[str, str], ...]:
    if attributes is None:
        return ()
    items = attributes.items() if isinstance(attributes, Mapping) else attributes
    return tuple((str(key), str(value)) for key, value in items)


@dataclass(frozen=True)
class FormatterConfig:
    """Settings shared by every record a formatter writes.

    Attributes:
        application_id: Written as ``application.id``.
        host_name: Written as ``host.name``.
        environment: Written as ``env`` when set.
        properties_prefix: Prepended to every flattened property key.
        static_attributes: Extra (key, value) pairs appended to every record.
            A mapping is accepted and converted to ordered pairs.
        timestamp_format: ISO-8601 text or epoch milliseconds.
    """

    application_id: str = DEFAULT_APPLICATION_ID
    host_name: str = field(default_factory=default_host_name)
    environment: str | None = None
    properties_prefix: str = DEFAULT_PROPERTIES_PREFIX
    static_attributes: tuple[tuple[str, str], ...] = ()
    timestamp_format: TimestampFormat = TimestampFormat.ISO8601

    def __post_init__(self) -> None:
        if self.application_id is None:
            object.__setattr__(self, "application_id", DEFAULT_APPLICATION_ID)
        if self.host_name is None:
            object.__setattr__(self, "host_name", default_host_name())
        if self.properties_prefix is None:
            object.__setattr__(self, "properties_prefix", "")
        object.__setattr__(
            self, "static_attributes", _attribute_pairs(self.static_attributes)
        )

    @classmethod
    def from_environment(
        cls, environ: Mapping[str, str] | None = None, **overrides: Any
    ) -> "FormatterConfig":
        """Build a config whose environment name comes from the process env.

        An explicit ``environment`` override takes precedence.
        """
        overrides.setdefault("environment", resolve_environment(environ))
        return cls(**overrides)
