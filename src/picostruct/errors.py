"""Structured failure descriptors and the helpers that raise and propagate them.

An :class:`ErrorInfo` is a tagged record describing one failure:

- ``expected``: a shape, type, literal or pattern mismatch
- ``union``: no alternative of ``any_of``/``one_of`` matched; carries one
  sub-failure per attempted alternative
- ``key``: a key transformed by ``record`` failed its own validation
- ``custom``: a caller-supplied refinement message
- ``unexpected``: a policy violation (``one_of`` matched more than once)

Every descriptor carries a ``path``. Failures are raised with an empty path by
:func:`fail`; each enclosing structural frame calls :func:`rethrow`, which
prepends its key or index, so by the time the error reaches the caller the
path reads root-to-leaf.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, NoReturn, Tuple, Union

from .exceptions import SerializationError, ValidationError

PathSegment = Union[str, int]


class ErrorKind(str, Enum):
    """Tag of an :class:`ErrorInfo`."""

    EXPECTED = "expected"
    UNION = "union"
    KEY = "key"
    CUSTOM = "custom"
    UNEXPECTED = "unexpected"


@dataclass
class ErrorInfo:
    """Description of a single validation failure and where it happened.

    Only the payload field matching ``kind`` is meaningful: ``expected`` for
    EXPECTED, ``failures`` for UNION, ``error`` for KEY and ``message`` for
    CUSTOM. UNEXPECTED carries no payload.
    """

    kind: ErrorKind
    path: list[PathSegment] = field(default_factory=list)
    expected: str | None = None
    failures: list[ErrorInfo] = field(default_factory=list)
    error: ErrorInfo | None = None
    message: str | None = None

    @classmethod
    def expecting(cls, expected: str) -> ErrorInfo:
        return cls(ErrorKind.EXPECTED, expected=expected)

    @classmethod
    def union_of(cls, failures: list[ErrorInfo]) -> ErrorInfo:
        return cls(ErrorKind.UNION, failures=list(failures))

    @classmethod
    def for_key(cls, key: PathSegment, error: ErrorInfo) -> ErrorInfo:
        """Wrap the failure of a transformed key, located at the original key."""
        return cls(ErrorKind.KEY, path=[key], error=error)

    @classmethod
    def custom(cls, message: str) -> ErrorInfo:
        return cls(ErrorKind.CUSTOM, message=message)

    @classmethod
    def unexpected(cls) -> ErrorInfo:
        return cls(ErrorKind.UNEXPECTED)

    @property
    def location(self) -> str:
        """Render the path for humans, e.g. ``items[0].name`` (``$`` for root)."""
        return format_path(self.path)

    def describe(self) -> str:
        """One-line summary of the failure."""
        if self.kind is ErrorKind.EXPECTED:
            text = f"expected {self.expected}"
        elif self.kind is ErrorKind.UNION:
            text = f"no alternative matched ({len(self.failures)} tried)"
        elif self.kind is ErrorKind.KEY:
            inner = self.error.describe() if self.error is not None else "invalid"
            text = f"invalid key: {inner}"
        elif self.kind is ErrorKind.CUSTOM:
            text = str(self.message)
        else:
            text = "more than one alternative matched"

        if self.path:
            return f"at {self.location}: {text}"
        return text

    def leaves(self) -> Iterator[Tuple[list[PathSegment], ErrorInfo]]:
        """Yield every non-union failure together with its absolute path.

        Union descriptors are flattened into their alternatives and key
        descriptors into the failure of the key itself. Nested paths are
        relative to the enclosing descriptor's location.
        """
        yield from self._leaves([])

    def _leaves(self, prefix: list[PathSegment]) -> Iterator[Tuple[list[PathSegment], ErrorInfo]]:
        absolute = prefix + self.path
        if self.kind is ErrorKind.UNION and self.failures:
            for failure in self.failures:
                yield from failure._leaves(absolute)
        elif self.kind is ErrorKind.KEY and self.error is not None:
            yield from self.error._leaves(absolute)
        else:
            yield absolute, self

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the dictionary form, carrying only the kind's payload."""
        data: Dict[str, Any] = {"type": self.kind.value, "path": list(self.path)}
        if self.kind is ErrorKind.EXPECTED:
            data["expected"] = self.expected
        elif self.kind is ErrorKind.UNION:
            data["failures"] = [failure.to_dict() for failure in self.failures]
        elif self.kind is ErrorKind.KEY and self.error is not None:
            data["error"] = self.error.to_dict()
        elif self.kind is ErrorKind.CUSTOM:
            data["message"] = self.message
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ErrorInfo:
        """Rebuild a descriptor from :meth:`to_dict` output.

        Raises:
            SerializationError: If the type tag is unknown, the path is not a list
                or the payload is missing
        """
        if not isinstance(data, dict):
            raise SerializationError(
                f"Error descriptor must be a dict, got {type(data).__name__}",
                context={"data_type": type(data).__name__},
            )

        try:
            kind = ErrorKind(data.get("type"))
        except ValueError as e:
            raise SerializationError(
                f"Unknown error type: {data.get('type')!r}",
                context={"data": data},
            ) from e

        path = data.get("path", [])
        if not isinstance(path, list):
            raise SerializationError(
                f"Error path must be a list, got {type(path).__name__}",
                context={"data": data},
            )
        path = list(path)
        payload = {
            ErrorKind.EXPECTED: "expected",
            ErrorKind.UNION: "failures",
            ErrorKind.KEY: "error",
            ErrorKind.CUSTOM: "message",
        }.get(kind)
        if payload is not None and payload not in data:
            raise SerializationError(
                f"Error of type '{kind.value}' is missing '{payload}'",
                context={"data": data},
            )

        if kind is ErrorKind.EXPECTED:
            return cls(kind, path=path, expected=data["expected"])
        if kind is ErrorKind.UNION:
            return cls(kind, path=path, failures=[cls.from_dict(f) for f in data["failures"]])
        if kind is ErrorKind.KEY:
            return cls(kind, path=path, error=cls.from_dict(data["error"]))
        if kind is ErrorKind.CUSTOM:
            return cls(kind, path=path, message=data["message"])
        return cls(kind, path=path)


def format_path(path: list[PathSegment]) -> str:
    """Join path segments as ``a.b[0].c``."""
    if not path:
        return "$"

    parts: list[str] = []
    for segment in path:
        if isinstance(segment, int) and not isinstance(segment, bool):
            parts.append(f"[{segment}]")
        elif parts:
            parts.append(f".{segment}")
        else:
            parts.append(str(segment))
    return "".join(parts)


def fail(message: str | ErrorInfo) -> NoReturn:
    """Fail the validation with a message or a descriptor.

    This is the single way every validator signals failure. It always raises,
    so it can be used inside expressions:

    ```python
    positive = map_(number(), lambda x: x if x > 0 else fail("expected a positive number"))
    ```

    Args:
        message: A plain message (becomes a ``custom`` failure) or a descriptor,
            whose path is discarded

    Raises:
        ValidationError: Always, with an empty path
    """
    if isinstance(message, str):
        info = ErrorInfo.custom(message)
    else:
        info = dataclasses.replace(message, path=[])
    raise ValidationError(info)


def rethrow(error: BaseException, segment: PathSegment) -> NoReturn:
    """Prepend ``segment`` to a validation error's path and raise it again.

    Errors that are not :class:`ValidationError` are re-raised untouched.
    """
    if isinstance(error, ValidationError):
        error.info.path.insert(0, segment)
    raise error


__all__ = [
    "ErrorKind",
    "ErrorInfo",
    "PathSegment",
    "format_path",
    "fail",
    "rethrow",
]
