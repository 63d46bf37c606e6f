"""Shared test fixtures for all test modules."""

import logging
from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from typing import Any

import pytest

from dynatrace_logsink.adapters.logging_context import clear_log_context
from dynatrace_logsink.core.config import FormatterConfig
from dynatrace_logsink.core.diagnostics import SELFLOG_NAME
from dynatrace_logsink.core.encoding.record import RecordFormatter
from dynatrace_logsink.core.models import LogEvent, LogLevel
from dynatrace_logsink.core.template import MessageTemplate
from dynatrace_logsink.core.values import capture_properties

FIXED_TIME = datetime(2024, 1, 2, 3, 4, 5, 123000, tzinfo=UTC)


@pytest.fixture
def fixed_time() -> datetime:
    """A fixed UTC timestamp: 2024-01-02T03:04:05.123Z."""
    return FIXED_TIME


@pytest.fixture
def formatter_config() -> FormatterConfig:
    """Config with deterministic application id and host name."""
    return FormatterConfig(application_id="billing", host_name="web-01")


@pytest.fixture
def record_formatter(formatter_config: FormatterConfig) -> RecordFormatter:
    """Record formatter using formatter_config."""
    return RecordFormatter(formatter_config)


@pytest.fixture
def make_event() -> Callable[..., LogEvent]:
    """Factory fixture for LogEvents at FIXED_TIME.

    Usage:
        event = make_event("Order {OrderId} placed", OrderId=7)
    """

    def _make(
        template: str = "Hello",
        level: LogLevel = LogLevel.INFORMATION,
        exception: str | None = None,
        **properties: Any,
    ) -> LogEvent:
        return LogEvent(
            timestamp=FIXED_TIME,
            level=level,
            template=MessageTemplate.parse(template),
            properties=capture_properties(properties),
            exception=exception,
        )

    return _make


@pytest.fixture
def clean_log_context() -> Iterator[None]:
    """Start and end the test without context properties.

    Not autouse: hypothesis rejects function-scoped fixtures on @given tests.
    """
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def selflog(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """caplog capturing the diagnostic logger at DEBUG level.

    Read ``selflog.records`` inside the test body.
    """
    caplog.set_level(logging.DEBUG, logger=SELFLOG_NAME)
    return caplog
