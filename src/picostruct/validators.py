"""Leaf validators for scalar values.

None of these coerce: ``"5"`` is not a number and ``1`` is not a boolean.
"""

from __future__ import annotations

import math
import re
from numbers import Real
from re import Pattern as RegexPattern
from typing import Any

from .core import Validator
from .errors import ErrorInfo, fail


def string(pattern: str | RegexPattern | None = None) -> Validator[str]:
    """Ensure that a value is a string.

    Args:
        pattern: Optional regular expression (string or compiled) that the
            whole string must match
    """
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    expected = f"string matching {regex.pattern}" if regex is not None else "string"

    def validator(value: Any) -> str:
        if isinstance(value, str) and (regex is None or regex.fullmatch(value)):
            return value
        fail(ErrorInfo.expecting(expected))

    return validator


def number() -> Validator[float]:
    """Ensure that a value is a finite number. Rejects NaN and infinities."""

    def validator(value: Any) -> float:
        if isinstance(value, Real) and not isinstance(value, bool):
            # Arbitrarily large ints overflow math.isfinite but are finite anyway.
            if isinstance(value, int) or math.isfinite(value):
                return value
        fail(ErrorInfo.expecting("finite number"))

    return validator


def integer() -> Validator[int]:
    """Ensure that a value is an integer, or a float with an integral value."""

    def validator(value: Any) -> int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, float) and math.isfinite(value) and value.is_integer():
            return value
        fail(ErrorInfo.expecting("integer"))

    return validator


def boolean() -> Validator[bool]:
    """Ensure that a value is a boolean."""

    def validator(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        fail(ErrorInfo.expecting("boolean"))

    return validator


def any_() -> Validator[Any]:
    """Accept every value unchanged."""

    def validator(value: Any) -> Any:
        return value

    return validator


def never() -> Validator[Any]:
    """Reject every value."""

    def validator(value: Any) -> Any:
        fail(ErrorInfo.expecting("never"))

    return validator


__all__ = ["string", "number", "integer", "boolean", "any_", "never"]
