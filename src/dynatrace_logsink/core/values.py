"""Conversion of plain Python objects into structured property values."""

import dataclasses
from collections.abc import Mapping, Set
from datetime import date, datetime, time
from enum import Enum
from typing import Any

from dynatrace_logsink.core.models import (
    DictionaryValue,
    ScalarValue,
    SequenceValue,
    StructuredValue,
    StructureValue,
)

_SCALAR_TYPES = (str, bytes, int, float, bool, type(None), date, time, Enum)


def stringify(value: Any) -> str:
    """Render a scalar the way it appears in flattened output.

    ``None`` becomes ``"null"``, booleans ``"true"``/``"false"``, dates and
    times ISO-8601. Anything else goes through ``str()``, which may raise.
    """
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, datetime | date | time):
        return value.isoformat()
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _set_order(items: Set[Any]) -> list[Any]:
    # Set iteration order varies between processes for str members.
    try:
        return sorted(items)
    except TypeError:
        return sorted(items, key=repr)


def capture(value: Any, destructure: bool = False) -> StructuredValue:
    """Convert an arbitrary Python object into a StructuredValue.

    Mappings become dictionaries, lists/tuples/sets become sequences and
    dataclass instances become structures tagged with their class name. Set
    members are sorted so their index keys are the same in every process.
    Other objects are kept as scalars unless ``destructure`` is set, in which
    case their public instance attributes are captured as a structure.

    Args:
        value: The object to capture. Already structured values pass through.
        destructure: Capture plain objects by their attributes.

    Returns:
        The structured representation of ``value``.
    """
    match value:
        case ScalarValue() | SequenceValue() | StructureValue() | DictionaryValue():
            return value
        case _ if isinstance(value, _SCALAR_TYPES):
            return ScalarValue(value)
        case Mapping():
            return DictionaryValue(
                tuple(
                    (ScalarValue(k), capture(v, destructure)) for k, v in value.items()
                )
            )
        case list() | tuple():
            return SequenceValue(tuple(capture(v, destructure) for v in value))
        case Set():
            return SequenceValue(tuple(capture(v, destructure) for v in _set_order(value)))
        case _ if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return StructureValue(
                tuple(
                    (f.name, capture(getattr(value, f.name), destructure))
                    for f in dataclasses.fields(value)
                ),
                type_tag=type(value).__name__,
            )
        case _ if destructure and hasattr(value, "__dict__"):
            return StructureValue(
                tuple(
                    (name, capture(attr, destructure))
                    for name, attr in vars(value).items()
                    if not name.startswith("_")
                ),
                type_tag=type(value).__name__,
            )
        case _:
            return ScalarValue(value)


def capture_properties(properties: Mapping[str, Any]) -> dict[str, StructuredValue]:
    """Capture every value of a property mapping, keeping its order."""
    return {name: capture(value) for name, value in properties.items()}
