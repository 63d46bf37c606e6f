"""JSON-array batch encoding of pre-rendered records."""

import io
from collections.abc import Iterable
from typing import TextIO

from dynatrace_logsink.core.diagnostics import (
    report_malformed_record,
    report_oversized_record,
)

DEFAULT_EVENT_BODY_LIMIT_BYTES = 256 * 1024

INGEST_CONTENT_TYPE = "application/json; charset=utf-8"


class BatchFormatter:
    """Packs JSON-text records into one JSON array.

    Blank records are skipped, as are records that cannot be encoded as UTF-8
    (lone surrogates) and records whose UTF-8 size exceeds the per-record
    limit. When no record is accepted nothing at all is written,
    not even ``[]``, so callers can tell there is nothing to send.
    """

    def __init__(
        self, event_body_limit_bytes: int | None = DEFAULT_EVENT_BODY_LIMIT_BYTES
    ) -> None:
        """Initialize the formatter.

        Args:
            event_body_limit_bytes: Largest accepted record in bytes, or None
                to accept records of any size.

        Raises:
            ValueError: If the limit is negative.
        """
        if event_body_limit_bytes is not None and event_body_limit_bytes < 0:
            raise ValueError("event_body_limit_bytes must not be negative")
        self._limit = event_body_limit_bytes

    @property
    def event_body_limit_bytes(self) -> int | None:
        return self._limit

    def _accepts(self, record: str) -> bool:
        if not record or record.isspace():
            return False
        try:
            size = len(record.encode("utf-8"))
        except UnicodeEncodeError as exc:
            report_malformed_record(exc)
            return False
        if self._limit is not None and size > self._limit:
            report_oversized_record(size, self._limit)
            return False
        return True

    def format(self, records: Iterable[str], output: TextIO) -> int:
        """Write the batch payload for ``records`` to ``output``.

        Records are consumed once, in order. The output sink is not closed.

        Returns:
            Number of records written.

        Raises:
            TypeError: If records or output is None.
        """
        if records is None:
            raise TypeError("records must not be None")
        if output is None:
            raise TypeError("output must not be None")

        written = 0
        for record in records:
            if not self._accepts(record):
                continue
            output.write("[" if written == 0 else ",")
            output.write(record)
            written += 1

        if written:
            output.write("]")
        return written

    def encode(self, records: Iterable[str]) -> str:
        """Return the batch payload as a string (empty if nothing accepted)."""
        buffer = io.StringIO()
        self.format(records, buffer)
        return buffer.getvalue()


def format_batch(
    records: Iterable[str],
    output: TextIO,
    event_body_limit_bytes: int | None = None,
) -> int:
    """Write a batch payload using a one-off BatchFormatter."""
    return BatchFormatter(event_body_limit_bytes).format(records, output)


def ingest_headers(api_token: str) -> dict[str, str]:
    """HTTP headers a transport must send along with a batch payload.

    Raises:
        ValueError: If the token is empty or blank.
    """
    if not api_token or not api_token.strip():
        raise ValueError("api_token must not be blank")
    return {
        "Authorization": f"Api-Token {api_token}",
        "Content-Type": INGEST_CONTENT_TYPE,
    }
