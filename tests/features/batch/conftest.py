"""BDD step definitions for batch formatting features."""

import io
import json
from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from dynatrace_logsink.core.encoding.batch import BatchFormatter


@dataclass
class BatchScenarioContext:
    """Shared state between steps in a batch scenario."""

    formatter: BatchFormatter = field(default_factory=lambda: BatchFormatter(None))
    records: list[str] = field(default_factory=list)
    output: io.StringIO = field(default_factory=io.StringIO)
    written: int = 0


def _record_of_size(size: int) -> str:
    """Build a JSON record of exactly ``size`` ASCII bytes (size >= 8)."""
    return '{"p":"' + "x" * (size - 8) + '"}'


@pytest.fixture
def ctx() -> BatchScenarioContext:
    """Fresh scenario context for each test."""
    return BatchScenarioContext()


# === Given ===
@given("a batch formatter without a size limit")
def step_formatter_unlimited(ctx: BatchScenarioContext) -> None:
    ctx.formatter = BatchFormatter(None)


@given(parsers.parse("a batch formatter with a size limit of {limit:d} bytes"))
def step_formatter_limited(ctx: BatchScenarioContext, limit: int) -> None:
    ctx.formatter = BatchFormatter(limit)


@given(parsers.parse("a record '{record}'"))
def step_record(ctx: BatchScenarioContext, record: str) -> None:
    ctx.records.append(record)


@given("a blank record")
def step_blank_record(ctx: BatchScenarioContext) -> None:
    ctx.records.append("   ")


@given("a record containing a lone surrogate")
def step_surrogate_record(ctx: BatchScenarioContext) -> None:
    ctx.records.append('{"a":"\ud800"}')


@given(parsers.parse("a record of {size:d} bytes"))
def step_sized_record(ctx: BatchScenarioContext, size: int) -> None:
    ctx.records.append(_record_of_size(size))


# === When ===
@when("the batch is formatted")
def step_format(ctx: BatchScenarioContext) -> None:
    ctx.written = ctx.formatter.format(ctx.records, ctx.output)


# === Then ===
@then("the output is empty")
def step_output_empty(ctx: BatchScenarioContext) -> None:
    assert ctx.output.getvalue() == ""


@then(parsers.parse("the output is exactly '{expected}'"))
def step_output_exact(ctx: BatchScenarioContext, expected: str) -> None:
    assert ctx.output.getvalue() == expected


@then(parsers.parse("the output is a JSON array of {count:d} records"))
def step_output_array(ctx: BatchScenarioContext, count: int) -> None:
    parsed = json.loads(ctx.output.getvalue())
    assert isinstance(parsed, list)
    assert len(parsed) == count


@then(parsers.parse("{count:d} records were written"))
def step_written_count(ctx: BatchScenarioContext, count: int) -> None:
    assert ctx.written == count
