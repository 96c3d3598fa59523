"""Build validators from declarative configuration.

Schemas can be written as plain data (a dict, or a YAML/JSON file) where each
node names a validator type and its arguments.

Example Configuration:
    name: user
    type: object
    fields:
      username:
        type: string
        pattern: "[a-z0-9_]{3,20}"
      age:
        type: maybe
        schema:
          type: integer
      role:
        type: any_of
        schemas: [admin, member, guest]
      tags:
        type: array
        items:
          type: string

A node that is not a mapping is a literal, so ``admin`` above is the literal
string ``"admin"``. Predicates and transforms for ``filter`` and ``map`` nodes
are referenced by name and must be registered on the factory first.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, Union

import yaml  # type: ignore[import-untyped]

from .core import MISSING, Schema, Validator, struct
from .errors import PathSegment, format_path
from .exceptions import ConfigurationError
from .logical import all_of, any_of, one_of
from .refinement import filter_, map_
from .structural import array, maybe, record
from .validators import any_, boolean, integer, never, number, string

logger = logging.getLogger(__name__)

_METADATA_KEYS = {"type", "name", "description"}

_ARGUMENT_KEYS: dict[str, set[str]] = {
    "string": {"pattern"},
    "number": set(),
    "integer": set(),
    "boolean": set(),
    "any": set(),
    "never": set(),
    "literal": {"value"},
    "object": {"fields"},
    "tuple": {"items"},
    "array": {"items"},
    "record": {"keys", "values"},
    "maybe": {"schema", "default"},
    "any_of": {"schemas"},
    "one_of": {"schemas"},
    "all_of": {"schemas"},
    "filter": {"schema", "predicate", "message"},
    "map": {"schema", "transform"},
}


class ValidatorFactory:
    """Factory for creating validators from configuration.

    Configuration Options:
        type (str): Validator type, one of ``string``, ``number``, ``integer``,
            ``boolean``, ``any``, ``never``, ``literal``, ``object``, ``tuple``,
            ``array``, ``record``, ``maybe``, ``any_of``, ``one_of``,
            ``all_of``, ``filter``, ``map``
        name (str): Optional name, used for logging only
        description (str): Optional description, ignored

    Type Arguments:
        string: pattern
        literal: value
        object: fields (mapping of key to node)
        tuple: items (list of nodes)
        array: items (node)
        record: keys (node, default string), values (node)
        maybe: schema (node), default
        any_of / one_of / all_of: schemas (list of nodes)
        filter: schema (node), predicate (registered name), message
        map: schema (node), transform (registered name)
    """

    def __init__(self) -> None:
        self._functions: dict[str, Callable[[Any], Any]] = {}

    def register(self, name: str, fn: Callable[[Any], Any]) -> ValidatorFactory:
        """Register a named predicate or transform (fluent API).

        Args:
            name: Name used by ``predicate``/``transform`` configuration keys
            fn: The callable

        Returns:
            Self for chaining
        """
        self._functions[name] = fn
        return self

    def create(self, **config: Any) -> Validator[Any]:
        """Create a validator from configuration.

        Args:
            **config: Root node configuration

        Returns:
            Validator function

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        logger.info(f"Creating validator: {config.get('name', config.get('type', 'unnamed'))}")
        schema = self.build(config)
        return schema if callable(schema) else struct(schema)

    def load(self, path: Union[str, Path]) -> Validator[Any]:
        """Create a validator from a YAML or JSON configuration file.

        Args:
            path: File path with a ``.yaml``, ``.yml`` or ``.json`` suffix

        Returns:
            Validator function

        Raises:
            ConfigurationError: If the file format is unsupported or its contents invalid
        """
        path = Path(path)
        suffix = path.suffix.lower()
        with open(path) as f:
            if suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise ConfigurationError(
                    f"Unsupported file format: {suffix}", context={"file": str(path)}
                )

        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Schema file must contain a mapping, got {type(data).__name__}",
                context={"file": str(path)},
            )
        return self.create(**data)

    def build(self, node: Any, path: list[PathSegment] | None = None) -> Schema:
        """Build the schema described by a configuration node.

        Args:
            node: Node configuration
            path: Location of the node, for error reporting

        Returns:
            A schema usable with ``validate``
        """
        path = path or []
        if not isinstance(node, Mapping):
            return self._literal(node, path)

        node_type = node.get("type")
        if not isinstance(node_type, str) or node_type not in _ARGUMENT_KEYS:
            raise self._error(f"Unknown validator type: {node_type!r}", path, node_type)

        unknown = set(node) - _METADATA_KEYS - _ARGUMENT_KEYS[node_type]
        if unknown:
            logger.warning(
                f"Ignoring unknown keys for '{node_type}' at {format_path(path)}: "
                f"{', '.join(sorted(map(str, unknown)))}"
            )

        if node_type == "string":
            return string(node.get("pattern"))

        elif node_type == "number":
            return number()

        elif node_type == "integer":
            return integer()

        elif node_type == "boolean":
            return boolean()

        elif node_type == "any":
            return any_()

        elif node_type == "never":
            return never()

        elif node_type == "literal":
            if "value" not in node:
                raise self._error("Literal requires 'value'", path, node_type)
            return self._literal(node["value"], path)

        elif node_type == "object":
            fields = self._require(node, "fields", Mapping, path)
            return {key: self.build(sub, path + [key]) for key, sub in fields.items()}

        elif node_type == "tuple":
            items = self._require(node, "items", list, path)
            return [self.build(sub, path + [index]) for index, sub in enumerate(items)]

        elif node_type == "array":
            if "items" not in node:
                raise self._error("Array requires 'items'", path, node_type)
            return array(self.build(node["items"], path + ["items"]))

        elif node_type == "record":
            if "values" not in node:
                raise self._error("Record requires 'values'", path, node_type)
            keys = node.get("keys", {"type": "string"})
            return record(self.build(keys, path + ["keys"]), self.build(node["values"], path + ["values"]))

        elif node_type == "maybe":
            if "schema" not in node:
                raise self._error("Maybe requires 'schema'", path, node_type)
            return maybe(self.build(node["schema"], path + ["schema"]), node.get("default", MISSING))

        elif node_type in ("any_of", "one_of", "all_of"):
            schemas = self._require(node, "schemas", list, path)
            built = [self.build(sub, path + [index]) for index, sub in enumerate(schemas)]
            combinator = {"any_of": any_of, "one_of": one_of, "all_of": all_of}[node_type]
            return combinator(*built)

        elif node_type == "filter":
            if "schema" not in node:
                raise self._error("Filter requires 'schema'", path, node_type)
            predicate = self._function(node, "predicate", path)
            return filter_(self.build(node["schema"], path + ["schema"]), predicate, node.get("message"))

        else:
            if "schema" not in node:
                raise self._error("Map requires 'schema'", path, node_type)
            transform = self._function(node, "transform", path)
            return map_(self.build(node["schema"], path + ["schema"]), transform)

    def _literal(self, value: Any, path: list[PathSegment]) -> Any:
        if isinstance(value, (Mapping, list, tuple)) or callable(value):
            raise self._error(
                f"Literal must be a scalar, got {type(value).__name__}", path, "literal"
            )
        return value

    def _require(self, node: Mapping, key: str, kind: type, path: list[PathSegment]) -> Any:
        value = node.get(key)
        if not isinstance(value, kind):
            raise self._error(
                f"'{node['type']}' requires '{key}' to be a {kind.__name__}", path, node["type"]
            )
        return value

    def _function(self, node: Mapping, key: str, path: list[PathSegment]) -> Callable[[Any], Any]:
        name = node.get(key)
        if not isinstance(name, str) or name not in self._functions:
            raise self._error(f"No function registered as {name!r}", path, node["type"])
        return self._functions[name]

    def _error(self, message: str, path: list[PathSegment], node_type: Any) -> ConfigurationError:
        return ConfigurationError(
            f"{message} (at {format_path(path)})",
            context={"type": node_type, "path": format_path(path)},
        )


# Module-level instance for shared registrations
validator_factory = ValidatorFactory()


__all__ = ["ValidatorFactory", "validator_factory"]
