"""Tests for capturing Python objects as structured values."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from enum import Enum

import pytest

from dynatrace_logsink.core.models import (
    DictionaryValue,
    ScalarValue,
    SequenceValue,
    StructureValue,
)
from dynatrace_logsink.core.values import capture, capture_properties, stringify


@dataclass
class Address:
    street: str
    zip: int


class Color(Enum):
    RED = "red"


class Customer:
    def __init__(self) -> None:
        self.name = "ada"
        self.tier = 2
        self._secret = "hidden"

    def __str__(self) -> str:
        return "Customer(ada)"


class TestStringify:
    """Tests for stringify()."""

    @pytest.mark.core
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, "null"),
            (True, "true"),
            (False, "false"),
            (0, "0"),
            (2.5, "2.5"),
            ("text", "text"),
            (date(2024, 1, 2), "2024-01-02"),
            (datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC), "2024-01-02T03:04:05+00:00"),
            (Color.RED, "red"),
        ],
    )
    def test_stringify(self, value: object, expected: str) -> None:
        """Scalars render to their canonical string form."""
        assert stringify(value) == expected


class TestCapture:
    """Tests for capture()."""

    @pytest.mark.core
    def test_primitives_become_scalars(self) -> None:
        """Primitive values are captured as ScalarValue."""
        assert capture(3) == ScalarValue(3)
        assert capture("x") == ScalarValue("x")
        assert capture(None) == ScalarValue(None)

    @pytest.mark.core
    def test_lists_and_tuples_become_sequences(self) -> None:
        """Lists and tuples are captured element by element."""
        assert capture([1, "a"]) == SequenceValue((ScalarValue(1), ScalarValue("a")))
        assert capture((2,)) == SequenceValue((ScalarValue(2),))

    @pytest.mark.core
    def test_sets_become_sorted_sequences(self) -> None:
        """Set members are ordered independently of hash seeds."""
        assert capture({"pear", "apple", "fig"}) == SequenceValue(
            (ScalarValue("apple"), ScalarValue("fig"), ScalarValue("pear"))
        )
        assert capture(frozenset({3, 1, 2})) == SequenceValue(
            (ScalarValue(1), ScalarValue(2), ScalarValue(3))
        )

    @pytest.mark.core
    def test_mixed_type_sets_are_ordered_by_repr(self) -> None:
        assert capture({"a", 1}) == SequenceValue((ScalarValue("a"), ScalarValue(1)))

    @pytest.mark.core
    def test_mappings_become_dictionaries_in_insertion_order(self) -> None:
        """Mappings keep key order and capture keys as scalars."""
        captured = capture({"b": 1, 2: [3]})
        assert captured == DictionaryValue(
            (
                (ScalarValue("b"), ScalarValue(1)),
                (ScalarValue(2), SequenceValue((ScalarValue(3),))),
            )
        )

    @pytest.mark.core
    def test_dataclasses_become_tagged_structures(self) -> None:
        """Dataclass instances are captured field by field."""
        captured = capture(Address("Main St", 10115))
        assert captured == StructureValue(
            (("street", ScalarValue("Main St")), ("zip", ScalarValue(10115))),
            type_tag="Address",
        )

    @pytest.mark.core
    def test_plain_objects_stay_scalar_by_default(self) -> None:
        """Objects without destructuring are kept whole as scalars."""
        customer = Customer()
        assert capture(customer) == ScalarValue(customer)

    @pytest.mark.core
    def test_plain_objects_destructured_by_public_attributes(self) -> None:
        """Destructuring captures public instance attributes only."""
        captured = capture(Customer(), destructure=True)
        assert captured == StructureValue(
            (("name", ScalarValue("ada")), ("tier", ScalarValue(2))),
            type_tag="Customer",
        )

    @pytest.mark.core
    def test_structured_values_pass_through(self) -> None:
        """Already structured values are returned unchanged."""
        value = SequenceValue((ScalarValue(1),))
        assert capture(value) is value

    @pytest.mark.core
    def test_capture_properties_keeps_order(self) -> None:
        """capture_properties preserves property order."""
        captured = capture_properties({"z": 1, "a": 2})
        assert list(captured) == ["z", "a"]
