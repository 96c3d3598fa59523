"""The validation dispatcher.

A schema is one of:

- a validator: any callable taking the value and returning the validated
  (possibly transformed) result, or raising :class:`ValidationError`
- an array-like structure: a ``list`` or ``tuple`` of schemas, matching a
  sequence of exactly that length
- a map-like structure: a mapping of keys to schemas, matching any mapping
  that has (at least) those keys
- a literal: anything else, matched by strict equality

Validation of structures is in place: each validated element is written back
into the input container and the same container is returned. Validating with
a schema therefore "consumes and returns" its input rather than reading it.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, MutableMapping
from typing import Any, Callable, TypeVar

from .errors import ErrorInfo, PathSegment, fail, rethrow
from .exceptions import ValidationError

T = TypeVar("T")

Validator = Callable[[Any], T]
Schema = Any


class _Missing:
    """Type of the :data:`MISSING` sentinel, the absent-value marker."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Missing:
        return self

    def __deepcopy__(self, memo: dict) -> _Missing:
        return self

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()
"""Stands for a value that is not there at all, as opposed to ``None``."""


def is_sequence(value: Any) -> bool:
    """Whether ``value`` is an array in the validation sense (list or tuple)."""
    return isinstance(value, (list, tuple))


def validate(value: Any, schema: Schema) -> Any:
    """Validate and transform ``value`` using ``schema`` as description.

    Whether the result is the same object as the input is up to the validators
    involved. The structural schemas and the standard validators return the
    input itself, which means that transforming validators nested in a
    structure mutate the input.

    Example:
        ```python
        validate(5, number())
        # 5
        validate({}, {"x": number()})
        # raises ValidationError (path ['x'])
        ```

    Args:
        value: What to validate
        schema: How to validate and transform it

    Returns:
        The validated value

    Raises:
        ValidationError: If the value does not conform
    """
    if callable(schema):
        return schema(value)
    if is_sequence(schema):
        if not is_sequence(value) or len(value) != len(schema):
            fail(ErrorInfo.expecting(f"array[{len(schema)}]"))
        return validate_elements(value, lambda index: schema[index])
    if isinstance(schema, Mapping):
        if not isinstance(value, Mapping):
            fail(ErrorInfo.expecting("object"))
        return _validate_fields(value, schema)
    if not literal_equals(value, schema):
        fail(ErrorInfo.expecting(describe_literal(schema)))
    return value


def struct(schema: Schema) -> Validator[Any]:
    """Turn any schema into a reusable validator function.

    To accept any mapping regardless of its contents, use ``record`` instead.
    """

    def validator(value: Any) -> Any:
        return validate(value, schema)

    return validator


def validate_elements(items: Any, schema_for: Callable[[int], Schema]) -> Any:
    """Validate every element of a list or tuple, writing results back.

    Lists are updated in place and returned. Tuples cannot be, so a tuple is
    returned as is when no element changed identity, otherwise rebuilt.
    """
    if isinstance(items, list):
        for index in range(len(items)):
            try:
                items[index] = validate(items[index], schema_for(index))
            except ValidationError as e:
                rethrow(e, index)
        return items

    results = []
    changed = False
    for index, item in enumerate(items):
        try:
            result = validate(item, schema_for(index))
        except ValidationError as e:
            rethrow(e, index)
        changed = changed or result is not item
        results.append(result)

    if not changed:
        return items
    if hasattr(items, "_make"):
        return items._make(results)
    return tuple(results)


def _validate_fields(value: Mapping, schema: Mapping) -> Any:
    # Keys that are not in the schema pass through untouched.
    target = value
    for key, field_schema in schema.items():
        current = value.get(key, MISSING)
        try:
            result = validate(current, field_schema)
        except ValidationError as e:
            rethrow(e, key)
        target = _assign(target, key, current, result)
    return target


def _assign(container: Mapping, key: PathSegment, original: Any, result: Any) -> Any:
    if result is original:
        return container
    if not isinstance(container, MutableMapping):
        container = dict(container)
    if result is MISSING:
        container.pop(key, None)
    else:
        container[key] = result
    return container


def literal_equals(value: Any, literal: Any) -> bool:
    """Strict equality used for literal schemas.

    ``None`` and :data:`MISSING` match by identity, booleans only match
    booleans, ints and floats match each other by value, and everything else
    needs the exact same type.
    """
    if literal is None or literal is MISSING:
        return value is literal
    if isinstance(literal, bool) or isinstance(value, bool):
        return type(value) is type(literal) and value == literal
    if isinstance(literal, (int, float)) and isinstance(value, (int, float)):
        return value == literal
    return type(value) is type(literal) and value == literal


def describe_literal(literal: Any) -> str:
    """Printable form of a literal for ``expected`` descriptors."""
    if literal is MISSING:
        return "undefined"
    try:
        return json.dumps(literal)
    except (TypeError, ValueError):
        return repr(literal)


__all__ = [
    "MISSING",
    "Schema",
    "Validator",
    "describe_literal",
    "is_sequence",
    "literal_equals",
    "struct",
    "validate",
    "validate_elements",
]
