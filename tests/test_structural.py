"""Tests for array, record and maybe."""

import pytest

from picostruct import (
    MISSING,
    ErrorKind,
    ValidationError,
    any_,
    array,
    map_,
    maybe,
    never,
    number,
    record,
    string,
    struct,
    validate,
)

from validation_helpers import transforms, validates

NAN = float("nan")


class TestArray:
    """Test the homogeneous array combinator."""

    def test_array_of_any(self):
        """Any list or tuple passes; other values fail."""
        validates(
            array(any_()),
            [[], [True], [[]], [{}, {}, []], [None] * 10, ()],
            [None, {}, True, MISSING, "abc"],
        )

    def test_array_of_strings(self):
        """Every element must match the element schema."""
        validates(
            array(string()),
            [[], [""], ["a", "a"], ["0", "1", "2", "3"]],
            [[0, 1, 2, 3], [None, MISSING], [[]], [None] * 10],
        )

    def test_expected_text(self):
        """A non-sequence fails with an "array" expectation."""
        with pytest.raises(ValidationError) as exc_info:
            array(number())({})
        assert exc_info.value.info.expected == "array"

    def test_transforms_in_place(self):
        """Element results are written back into the input list."""
        value = [1, 2, 3]
        result = array(map_(number(), lambda x: x * x))(value)
        assert result is value
        assert value == [1, 4, 9]

    def test_failing_index_in_path(self):
        """The failing element's index is reported."""
        with pytest.raises(ValidationError) as exc_info:
            array(number())([1, 2, "3"])
        assert exc_info.value.path == [2]


class TestRecord:
    """Test the key/value record combinator."""

    def test_record_of_any(self):
        """Any mapping passes; other values fail."""
        validates(
            record(any_(), any_()),
            [{}, {0: ""}, {"": None, "0": {}, 1: False}],
            [None, True, MISSING, [], [{}]],
            mode="value",
        )

    def test_record_of_numbers(self):
        """Every key and every value must match its schema."""
        validates(
            record(string(), number()),
            [{}, {"a": 0}, {"b": 1}, {"x": 2, "0": -1}],
            [{"a": MISSING}, {"1": None}, {"": ""}, {"a": "b", "c": 3}, {"x": "y", "z": {"x": 0}}, {1: "a"}, {1: 2}],
            mode="value",
        )

    def test_returns_new_mapping(self):
        """The result is a new dict, not the input."""
        value = {"a": 1}
        result = record(string(), number())(value)
        assert result == value
        assert result is not value

    def test_transformed_keys(self):
        """Key results become the keys of the new dict."""
        value = {"a": 1, "b": 2}
        result = record(map_(string(), str.upper), number())(value)
        assert result == {"A": 1, "B": 2}
        assert value == {"a": 1, "b": 2}

    def test_value_failure_path(self):
        """A failing value is reported at its key."""
        with pytest.raises(ValidationError) as exc_info:
            record(string(), number())({"a": 1, "b": "x"})
        assert exc_info.value.kind is ErrorKind.EXPECTED
        assert exc_info.value.path == ["b"]

    def test_key_failure(self):
        """A failing key is wrapped in a key descriptor at the original key."""
        with pytest.raises(ValidationError) as exc_info:
            validate({"outer": {1: 2}}, {"outer": record(string(), number())})
        error = exc_info.value
        assert error.kind is ErrorKind.KEY
        assert error.path == ["outer", 1]
        assert error.info.error.kind is ErrorKind.EXPECTED
        assert error.info.error.expected == "string"

    def test_value_checked_before_key(self):
        """An entry's value is validated before its key."""
        with pytest.raises(ValidationError) as exc_info:
            record(string(), number())({1: "x"})
        assert exc_info.value.kind is ErrorKind.EXPECTED
        assert exc_info.value.path == [1]


class TestMaybe:
    """Test optional values with and without defaults."""

    def test_maybe_number(self):
        """MISSING passes alongside values matching the schema."""
        validates(
            maybe(number()),
            [0, 1, 2, MISSING, 3],
            [None, False, True, NAN, "", [], {}, [{}]],
        )

    def test_maybe_with_default(self):
        """MISSING is replaced by the default."""
        transforms(
            maybe(string(), "default"),
            [("", ""), ("1", "1"), ("0", "0"), (MISSING, "default"), ("default", "default")],
            [None, False, True, NAN, 1, 0, [], {}, [{}]],
        )

    def test_schema_not_called_for_missing(self):
        """The wrapped schema never sees MISSING."""
        assert maybe(never())(MISSING) is MISSING
        assert maybe(never(), 5)(MISSING) == 5

    def test_none_default(self):
        """None is a usable default distinct from MISSING."""
        assert struct({"a": maybe(number(), None)})({}) == {"a": None}
