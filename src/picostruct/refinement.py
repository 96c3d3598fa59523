"""Refinement combinators: transform or reject an already validated value."""

from __future__ import annotations

from typing import Any, Callable

from .core import Schema, Validator, validate
from .errors import ErrorInfo, fail


def map_(schema: Schema, fn: Callable[[Any], Any]) -> Validator[Any]:
    """Validate with ``schema``, then return ``fn`` applied to the result.

    ``fn`` may call :func:`~picostruct.errors.fail` to reject the value:

    ```python
    # refinement
    big = map_(number(), lambda x: x if x > 5 else fail("expected a value greater than 5"))
    # transform
    timestamp = map_(integer(), lambda x: datetime.fromtimestamp(x, timezone.utc))
    ```
    """

    def validator(value: Any) -> Any:
        return fn(validate(value, schema))

    return validator


def filter_(
    schema: Schema,
    predicate: Callable[[Any], bool],
    message: str | ErrorInfo | None = None,
) -> Validator[Any]:
    """Validate with ``schema`` and reject results not satisfying ``predicate``.

    Args:
        schema: Schema for the value
        predicate: Check applied to the validated value
        message: Failure message or descriptor, ``"filter failed"`` by default
    """

    def check(result: Any) -> Any:
        if predicate(result):
            return result
        fail(message or "filter failed")

    return map_(schema, check)


__all__ = ["map_", "filter_"]
