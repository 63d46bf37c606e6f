"""Integration tests: stdlib logging through the sink to a batch payload."""

import json
import logging
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor

import pytest

from dynatrace_logsink import (
    Formatted,
    FormatterConfig,
    InMemoryRecordQueue,
    LogSink,
    SinkConfig,
    create_sink,
    info,
    trace_context,
)


pytestmark = pytest.mark.usefixtures("clean_log_context")


@pytest.fixture
def sink() -> LogSink:
    return create_sink(
        SinkConfig(
            ingest_url="https://abc123.live.dynatrace.com/api/v2/logs/ingest",
            api_token="dt0c01.token",
            formatter=FormatterConfig(
                application_id="billing",
                host_name="web-01",
                environment="prod",
                static_attributes=(("service.name", "billing-api"),),
            ),
            batch_size_limit=100,
        ),
        queue=InMemoryRecordQueue(),
    )


@pytest.fixture
def logger(sink: LogSink) -> Iterator[logging.Logger]:
    handler = sink.handler(include_attrs=["logger.name"])
    logger = logging.getLogger("integration.billing")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    yield logger
    logger.removeHandler(handler)


@pytest.mark.adapters
class TestLoggingToBatch:
    """End-to-end behaviour from logger call to payload."""

    def test_payload_contains_all_logged_records(
        self, sink: LogSink, logger: logging.Logger
    ) -> None:
        """Every log call ends up as one element of the batch array."""
        logger.info("invoice paid", extra={"invoice": {"id": 7, "amount": 9.5}})
        with trace_context("4bf92f35"):
            logger.warning("retrying charge")

        payload = sink.next_batch()
        records = json.loads(payload)

        assert [r["content"] for r in records] == ["invoice paid", "retrying charge"]
        first, second = records
        assert list(first) == [
            "timestamp",
            "level",
            "application.id",
            "host.name",
            "env",
            "content",
            "attr.logger.name",
            "attr.invoice.id",
            "attr.invoice.amount",
            "service.name",
        ]
        assert first["attr.invoice.amount"] == "9.5"
        assert second["trace_id"] == "4bf92f35"
        assert second["service.name"] == "billing-api"

    def test_nothing_logged_means_nothing_to_send(self, sink: LogSink) -> None:
        assert sink.next_batch() == ""

    def test_direct_events_and_logged_records_share_the_queue(
        self, sink: LogSink, logger: logging.Logger
    ) -> None:
        """Events built with helpers can be queued next to logged records."""
        result = sink.record_formatter.format(info("Cache {Name} warmed", Name="users"))
        assert isinstance(result, Formatted)
        sink.queue.write(result.text)
        logger.debug("done")

        records = json.loads(sink.next_batch())

        assert records[0]["content"] == "Cache users warmed"
        assert records[0]["attr.Name"] == "users"
        assert records[1]["level"] == "Debug"

    def test_concurrent_logging(self, sink: LogSink, logger: logging.Logger) -> None:
        """Records logged from many threads all arrive as valid JSON."""

        def work(n: int) -> None:
            for i in range(25):
                logger.info("worker %d item %d", n, i, extra={"worker": n})

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(work, range(8)))

        records = json.loads(sink.next_batch()) + json.loads(sink.next_batch())
        assert len(records) == 200
        assert sink.next_batch() == ""
        assert {r["attr.worker"] for r in records} == {str(n) for n in range(8)}
