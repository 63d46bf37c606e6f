"""Flattening of structured property values into dotted key/value pairs."""

from collections.abc import Iterator, Mapping

from dynatrace_logsink.core.models import (
    DictionaryValue,
    ScalarValue,
    SequenceValue,
    StructuredValue,
    StructureValue,
)
from dynatrace_logsink.core.values import stringify

FlatKeyValue = tuple[str, str]

# Property names the ingest API expects unqualified at the top level.
ROOT_PROPERTIES = frozenset(
    {
        "trace_id",
        "span_id",
        "trace_sampled",
        "dt.entity.host",
        "dt.entity.process_group_instance",
        "dt.host_group.id",
        "dt.security_context",
    }
)


def _members(value: StructuredValue, key: str) -> Iterator[tuple[str, object]]:
    match value:
        case SequenceValue(elements):
            for index, element in enumerate(elements):
                yield f"{key}.{index}", element
        case StructureValue(properties):
            for name, member in properties:
                yield f"{key}.{name}", member
        case DictionaryValue(elements):
            for dict_key, element in elements:
                yield f"{key}.{stringify(dict_key.value)}", element


def flatten(value: StructuredValue, key_prefix: str) -> Iterator[FlatKeyValue]:
    """Flatten a structured value into (dotted key, string value) pairs.

    Sequence elements are keyed by their zero-based index, structure members
    and dictionary entries by their name. Unsupported values yield nothing.
    Nesting depth is bounded only by memory: containers are walked with an
    explicit stack instead of recursion.

    Args:
        value: The value to flatten.
        key_prefix: Key of ``value`` itself; child keys extend it with ``.``.

    Yields:
        Flat pairs in element/member order.
    """
    pending: list[Iterator[tuple[str, object]]] = [iter([(key_prefix, value)])]
    while pending:
        for key, item in pending[-1]:
            match item:
                case ScalarValue(scalar):
                    yield key, stringify(scalar)
                case SequenceValue() | StructureValue() | DictionaryValue():
                    pending.append(_members(item, key))
                    break
        else:
            pending.pop()


def flatten_properties(
    properties: Mapping[str, StructuredValue], prefix: str
) -> Iterator[FlatKeyValue]:
    """Flatten every bound property of an event.

    Names in ROOT_PROPERTIES are emitted under their bare name, all others
    under ``prefix + name``.
    """
    for name, value in properties.items():
        key = name if name in ROOT_PROPERTIES else f"{prefix}{name}"
        yield from flatten(value, key)
