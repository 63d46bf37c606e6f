"""dynatrace_logsink - structured log records and batches for log ingest APIs."""

from dynatrace_logsink.adapters.logging import DynatraceHandler
from dynatrace_logsink.adapters.logging_context import (
    clear_log_context,
    get_log_context,
    set_log_context,
    trace_context,
    update_log_context,
)
from dynatrace_logsink.adapters.storage import (
    InMemoryRecordQueue,
    RingBufferRecordQueue,
)
from dynatrace_logsink.core.config import (
    FormatterConfig,
    TimestampFormat,
    resolve_environment,
)
from dynatrace_logsink.core.encoding import (
    DEFAULT_EVENT_BODY_LIMIT_BYTES,
    INGEST_CONTENT_TYPE,
    BatchFormatter,
    RecordFormatter,
    format_batch,
    ingest_headers,
)
from dynatrace_logsink.core.flatten import ROOT_PROPERTIES, flatten, flatten_properties
from dynatrace_logsink.core.logs import debug, error, fatal, info, log, verbose, warn
from dynatrace_logsink.core.models import (
    DictionaryValue,
    FormatFailure,
    Formatted,
    FormatResult,
    LogEvent,
    LogLevel,
    ScalarValue,
    SequenceValue,
    StructuredValue,
    StructureValue,
)
from dynatrace_logsink.core.ports import RecordQueuePort
from dynatrace_logsink.core.template import MessageTemplate
from dynatrace_logsink.core.values import capture
from dynatrace_logsink.sink import LogSink, SinkConfig, create_sink

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_EVENT_BODY_LIMIT_BYTES",
    "INGEST_CONTENT_TYPE",
    "ROOT_PROPERTIES",
    "BatchFormatter",
    "DictionaryValue",
    "DynatraceHandler",
    "FormatFailure",
    "FormatResult",
    "Formatted",
    "FormatterConfig",
    "InMemoryRecordQueue",
    "LogEvent",
    "LogLevel",
    "LogSink",
    "MessageTemplate",
    "RecordFormatter",
    "RecordQueuePort",
    "RingBufferRecordQueue",
    "ScalarValue",
    "SequenceValue",
    "SinkConfig",
    "StructureValue",
    "StructuredValue",
    "TimestampFormat",
    "capture",
    "clear_log_context",
    "create_sink",
    "debug",
    "error",
    "fatal",
    "flatten",
    "flatten_properties",
    "format_batch",
    "get_log_context",
    "info",
    "ingest_headers",
    "log",
    "resolve_environment",
    "set_log_context",
    "trace_context",
    "update_log_context",
    "verbose",
    "warn",
]
