"""Encoders for the log ingest wire format."""

from dynatrace_logsink.core.encoding.batch import (
    DEFAULT_EVENT_BODY_LIMIT_BYTES,
    INGEST_CONTENT_TYPE,
    BatchFormatter,
    format_batch,
    ingest_headers,
)
from dynatrace_logsink.core.encoding.record import RecordFormatter

__all__ = [
    "DEFAULT_EVENT_BODY_LIMIT_BYTES",
    "INGEST_CONTENT_TYPE",
    "BatchFormatter",
    "RecordFormatter",
    "format_batch",
    "ingest_headers",
]
