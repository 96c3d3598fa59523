"""Logical combinators over several alternative schemas.

``any_of`` and ``one_of`` are the only places where validation failures are
caught: each alternative's failure is kept and, if nothing matches, reported
together in a ``union`` descriptor. Any other exception raised by an
alternative propagates immediately.

Alternatives run against the same input. A structural alternative that fails
halfway may already have written some validated fields back into it.
"""

from __future__ import annotations

import logging
from functools import reduce
from typing import Any

from .core import Schema, Validator, validate
from .errors import ErrorInfo, fail
from .exceptions import ValidationError

logger = logging.getLogger(__name__)


def any_of(*schemas: Schema) -> Validator[Any]:
    """Accept a value matching any of ``schemas``, trying them in order.

    The result of the first matching schema is returned, so when alternatives
    overlap the order of the arguments decides. Handy for tagged unions:

    ```python
    shape = any_of(["circle", number()], ["rect", number(), number()])
    ```
    """

    def validator(value: Any) -> Any:
        failures: list[ErrorInfo] = []
        for index, schema in enumerate(schemas):
            try:
                return validate(value, schema)
            except ValidationError as e:
                logger.debug(f"any_of alternative {index} failed: {e.info.describe()}")
                failures.append(e.info)

        fail(ErrorInfo.union_of(failures))

    return validator


def one_of(*schemas: Schema) -> Validator[Any]:
    """Accept a value matching exactly one of ``schemas``.

    Every alternative is tried. If none matches, the failures are reported as
    a ``union``; as soon as a second one matches, validation fails with
    ``unexpected`` and the remaining alternatives are not tried.

    ```python
    shape = one_of({"circle": {"area": number()}}, {"rect": {"w": number(), "h": number()}})
    shape({"circle": {"area": 0}, "rect": {"w": 0, "h": 0}})  # fails, any_of would pass
    ```
    """

    def validator(value: Any) -> Any:
        matched = 0
        result = value
        failures: list[ErrorInfo] = []

        for index, schema in enumerate(schemas):
            try:
                candidate = validate(value, schema)
            except ValidationError as e:
                failures.append(e.info)
                continue

            matched += 1
            if matched > 1:
                logger.debug(f"one_of alternative {index} is the second match")
                fail(ErrorInfo.unexpected())
            result = candidate

        if matched == 0:
            fail(ErrorInfo.union_of(failures))
        return result

    return validator


def all_of(*schemas: Schema) -> Validator[Any]:
    """Accept a value matching all of ``schemas``.

    The value is threaded through them in order: each schema validates the
    result of the previous one, and the last result is returned. The first
    failure is propagated unchanged.
    """

    def validator(value: Any) -> Any:
        return reduce(validate, schemas, value)

    return validator


__all__ = ["any_of", "one_of", "all_of"]
