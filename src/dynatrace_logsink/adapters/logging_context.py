"""Context-local properties attached to every log record.

Values live in a ContextVar, so they are isolated per thread and per
asyncio task. DynatraceHandler merges them into each event it formats;
``trace_id`` and ``span_id`` become the event's propagated trace ids.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

_log_context: ContextVar[dict[str, Any] | None] = ContextVar(
    "dynatrace_logsink_log_context", default=None
)


def get_log_context() -> dict[str, Any]:
    """Return a copy of the current context properties."""
    return dict(_log_context.get() or {})


def set_log_context(**properties: Any) -> None:
    """Replace the current context properties."""
    _log_context.set(dict(properties))


def update_log_context(**properties: Any) -> None:
    """Add or overwrite context properties, keeping the others."""
    _log_context.set({**(_log_context.get() or {}), **properties})


def clear_log_context() -> None:
    """Remove all context properties."""
    _log_context.set(None)


@contextmanager
def trace_context(trace_id: str, span_id: str | None = None) -> Iterator[None]:
    """Bind trace ids for the duration of a block.

    Example:
        ```python
        with trace_context("4bf92f3577b34da6a3ce929d0e0e4736", "00f067aa0ba902b7"):
            logger.info("charging card")
        ```
    """
    properties: dict[str, Any] = {"trace_id": trace_id}
    if span_id is not None:
        properties["span_id"] = span_id
    token = _log_context.set({**(_log_context.get() or {}), **properties})
    try:
        yield
    finally:
        _log_context.reset(token)
