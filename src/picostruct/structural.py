"""Structural combinators: arrays, records and optional values."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .core import MISSING, Schema, Validator, is_sequence, validate, validate_elements
from .errors import ErrorInfo, fail, rethrow
from .exceptions import ValidationError

logger = logging.getLogger(__name__)


def array(schema: Schema) -> Validator[list]:
    """Ensure that a value is an array whose every element matches ``schema``.

    Elements are validated in place; the input array is returned.
    """

    def validator(value: Any) -> Any:
        if not is_sequence(value):
            fail(ErrorInfo.expecting("array"))
        return validate_elements(value, lambda index: schema)

    return validator


def record(key: Schema, value: Schema) -> Validator[dict]:
    """Ensure that a value is a mapping with keys and values of the given types.

    Unlike the other structural validators this builds and returns a new
    ``dict``, since validating a key may change it. Each entry's value is
    validated before its key. When two keys transform to the same result the
    entry seen last wins.

    Args:
        key: Schema for every key. Must produce hashable results.
        value: Schema for every value.
    """

    def validator(obj: Any) -> dict:
        if not isinstance(obj, Mapping):
            fail(ErrorInfo.expecting("object"))

        result: dict = {}
        for original_key, item in obj.items():
            try:
                validated = validate(item, value)
            except ValidationError as e:
                rethrow(e, original_key)

            try:
                new_key = validate(original_key, key)
            except ValidationError as e:
                logger.debug(f"Key {original_key!r} failed validation: {e.info.describe()}")
                e.info = ErrorInfo.for_key(original_key, e.info)
                raise

            result[new_key] = validated
        return result

    return validator


def maybe(schema: Schema, default: Any = MISSING) -> Validator[Any]:
    """Allow a value to be absent.

    Example:
        ```python
        validate({}, {"name": maybe(string(), "anonymous")})
        # {'name': 'anonymous'}
        ```

    Args:
        schema: Schema for the value when it is present
        default: Returned for an absent value; :data:`MISSING` if not given
    """

    def validator(value: Any) -> Any:
        if value is MISSING:
            return default
        return validate(value, schema)

    return validator


__all__ = ["array", "record", "maybe"]
