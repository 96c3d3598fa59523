"""Teeny tiny schema-driven validator and transformer.

A schema describes the expected shape of an untyped value. Validating either
returns the (normalized, possibly transformed) value or raises a
:class:`ValidationError` whose descriptor says what did not match and where.

- **Dispatcher**: ``validate`` and ``struct`` interpret validator, literal,
  array-like and map-like schemas
- **Leaf validators**: ``string``, ``number``, ``integer``, ``boolean``,
  ``any_``, ``never``
- **Structural combinators**: ``array``, ``record``, ``maybe``
- **Logical combinators**: ``any_of``, ``one_of``, ``all_of``
- **Refinement combinators**: ``map_``, ``filter_``
- **Errors**: ``ErrorInfo`` descriptors raised through ``fail``
- **Configuration**: ``ValidatorFactory`` builds validators from dict/YAML/JSON

Example:
    ```python
    from picostruct import any_of, array, maybe, number, string, struct

    point = struct({
        "x": number(),
        "y": number(),
        "label": maybe(string(), ""),
        "tags": array(any_of("red", "green", "blue")),
    })
    point({"x": 1, "y": 2.5, "tags": ["red"]})
    # {'x': 1, 'y': 2.5, 'tags': ['red'], 'label': ''}
    ```
"""

from picostruct.core import MISSING, Schema, Validator, struct, validate
from picostruct.errors import ErrorInfo, ErrorKind, PathSegment, fail, format_path, rethrow
from picostruct.exceptions import (
    ConfigurationError,
    PicostructError,
    SerializationError,
    ValidationError,
)
from picostruct.factory import ValidatorFactory, validator_factory
from picostruct.logical import all_of, any_of, one_of
from picostruct.refinement import filter_, map_
from picostruct.structural import array, maybe, record
from picostruct.validators import any_, boolean, integer, never, number, string

__version__ = "0.1.2"

__all__ = [
    # Core
    "validate",
    "struct",
    "MISSING",
    "Schema",
    "Validator",
    # Errors
    "ErrorInfo",
    "ErrorKind",
    "PathSegment",
    "fail",
    "rethrow",
    "format_path",
    # Exceptions
    "PicostructError",
    "ValidationError",
    "ConfigurationError",
    "SerializationError",
    # Leaf validators
    "string",
    "number",
    "integer",
    "boolean",
    "any_",
    "never",
    # Combinators
    "array",
    "record",
    "maybe",
    "any_of",
    "one_of",
    "all_of",
    "map_",
    "filter_",
    # Configuration
    "ValidatorFactory",
    "validator_factory",
]
