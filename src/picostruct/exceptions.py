"""Exception hierarchy for picostruct.

Every error raised by the package derives from :class:`PicostructError`, which
carries an optional context dictionary with structured details. Validation
failures are always a :class:`ValidationError`; callers tell the different
failure cases apart through the wrapped error descriptor, never through the
exception type.

Example:
    ```python
    from picostruct import ValidationError, number, validate

    try:
        validate({"a": {"b": "x"}}, {"a": {"b": number()}})
    except ValidationError as e:
        e.kind
        # <ErrorKind.EXPECTED: 'expected'>
        e.path
        # ['a', 'b']
    ```
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Dict

if TYPE_CHECKING:
    from .errors import ErrorInfo, ErrorKind, PathSegment


class PicostructError(Exception):
    """Base exception for the picostruct package.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context
        details: Alternative to context (takes precedence when both are given)
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.context = details or context or {}
        self.details = self.context


class ValidationError(PicostructError):
    """Raised when a value does not conform to its schema.

    Wraps exactly one :class:`~picostruct.errors.ErrorInfo`. The descriptor is
    created with an empty path at the point of failure and every enclosing
    structural frame prepends its key while the error unwinds, so the message
    is rendered on demand rather than at construction time. The ``path`` in
    the message therefore reads root-to-leaf (``["a", "b"]`` for a failure at
    ``a.b``), not the leaf-to-root order of libraries that append segments
    while unwinding.

    Example:
        ```python
        error = ValidationError(ErrorInfo.expecting("finite number"))
        str(error)
        # '{"type": "expected", "path": [], "expected": "finite number"}'
        ```
    """

    def __init__(self, info: ErrorInfo):
        super().__init__("validation failed")
        self.info = info

    @property
    def kind(self) -> ErrorKind:
        """Tag of the wrapped descriptor."""
        return self.info.kind

    @property
    def path(self) -> list[PathSegment]:
        """Root-to-leaf location of the failure within the input."""
        return self.info.path

    def to_dict(self) -> Dict[str, Any]:
        return self.info.to_dict()

    def __reduce__(self) -> tuple:
        return (type(self), (self.info,))

    def __str__(self) -> str:
        return json.dumps(self.info.to_dict(), default=repr)

    def __repr__(self) -> str:
        return f"ValidationError({self.info.describe()!r})"


class ConfigurationError(PicostructError):
    """Raised when a declarative schema configuration is invalid.

    Example:
        ```python
        raise ConfigurationError(
            "Unknown validator type: 'strng'",
            context={"type": "strng", "path": "fields.name"}
        )
        ```
    """

    pass


class SerializationError(PicostructError):
    """Raised when an error descriptor cannot be rebuilt from its dict form."""

    pass


__all__ = [
    "PicostructError",
    "ValidationError",
    "ConfigurationError",
    "SerializationError",
]
