"""Tests for the exception hierarchy."""

import json

import pytest

from picostruct import (
    ConfigurationError,
    ErrorInfo,
    ErrorKind,
    PicostructError,
    SerializationError,
    ValidationError,
    number,
    validate,
)


class TestPicostructError:
    """Test the base exception."""

    def test_basic_exception(self):
        """The message is kept and the context defaults to empty."""
        error = PicostructError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.context == {}
        assert error.details == {}

    def test_exception_with_context(self):
        """Context is available under both names."""
        error = PicostructError("Operation failed", context={"type": "record"})
        assert error.context == {"type": "record"}
        assert error.details == {"type": "record"}

    def test_details_takes_precedence(self):
        """details wins over context when both are given."""
        error = PicostructError("Error", context={"key": "context"}, details={"key": "details"})
        assert error.context == {"key": "details"}

    @pytest.mark.parametrize("cls", [ValidationError, ConfigurationError, SerializationError])
    def test_subclasses(self, cls):
        """Every package exception derives from the base."""
        assert issubclass(cls, PicostructError)


class TestValidationError:
    """Test the validation failure exception."""

    def test_message_is_json_descriptor(self):
        """The message is the descriptor serialized as JSON."""
        error = ValidationError(ErrorInfo.expecting("finite number"))
        assert json.loads(str(error)) == {"type": "expected", "path": [], "expected": "finite number"}

    def test_message_reflects_final_path(self):
        """The message path reads root to leaf once the error has unwound."""
        with pytest.raises(ValidationError) as exc_info:
            validate({"a": {"b": "x"}}, {"a": {"b": number()}})
        assert json.loads(str(exc_info.value))["path"] == ["a", "b"]

    def test_introspection(self):
        """kind, path and to_dict come from the wrapped descriptor."""
        error = ValidationError(ErrorInfo.unexpected())
        assert error.kind is ErrorKind.UNEXPECTED
        assert error.path == []
        assert error.to_dict() == {"type": "unexpected", "path": []}
        assert "more than one alternative matched" in repr(error)

    def test_caught_as_base(self):
        """Validation failures can be caught as the base exception."""
        with pytest.raises(PicostructError):
            validate("x", number())
