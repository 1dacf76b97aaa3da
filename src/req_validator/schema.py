"""
Parameter Schema Models for Request Validation.

Defines the schema structure for declarative parameter validation:
- ParamType: Closed set of supported types
- FieldSchema: Rules for a single parameter (or for the items of an array)
- ParameterSchema: Container mapping parameter names to field schemas

Example YAML:
    page:
      type: number
      location: query.page
      default: 1
    tags:
      type: array
      location: body.tags
      item:
        type: string
        regex: "/^[a-z-]+$/i"
    token:
      type: string
      location: headers.x-token
      dto: false
"""

import copy
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import SchemaError
from .patterns import RegexConstraint

logger = logging.getLogger(__name__)


class ParamType(str, Enum):
    """Supported parameter types."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"


class _Missing:
    """Marker for a schema key that was not given at all."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()

# Accepted spellings for each schema key
_KEY_ALIASES = {
    "type": "type",
    "default": "default",
    "default_value": "default",
    "location": "location",
    "path": "location",
    "item": "item",
    "items": "item",
    "item_schema": "item",
    "dto": "dto",
    "include_in_output": "dto",
    "regex": "regex",
}


class FieldSchema:
    """
    Schema definition for a single parameter.

    A field is optional when it has a default (even a None default) and
    required otherwise.

    Attributes:
        type: ParamType, or None when the schema omits it
        default: Default value, or MISSING when the field is required
        location: Path in the source object (None means "use the name")
        item: FieldSchema applied to every element of an array
        include_in_output: Whether the accepted value goes into the output
        regex: Regex string as written in the schema
        constraint: Compiled RegexConstraint for ``regex``
    """

    def __init__(
        self,
        type: Optional[Union[str, ParamType]] = None,
        default: Any = MISSING,
        location: Optional[str] = None,
        item: Optional[Union[Dict[str, Any], "FieldSchema"]] = None,
        include_in_output: bool = True,
        regex: Optional[str] = None,
    ):
        self.type: Optional[ParamType] = None
        if type is not None and type != "":
            try:
                self.type = ParamType(type)
            except ValueError:
                valid = ", ".join(t.value for t in ParamType)
                raise SchemaError(
                    f"Invalid type '{type}'. Must be one of: {valid}"
                ) from None

        if location is not None and not isinstance(location, str):
            raise SchemaError(f"Invalid location {location!r}: must be a string")
        if not isinstance(include_in_output, bool):
            raise SchemaError(
                f"Invalid dto flag {include_in_output!r}: must be a boolean"
            )
        if regex is not None and not isinstance(regex, str):
            raise SchemaError(f"Invalid regex {regex!r}: must be a string")

        self.default = default
        self.location = location
        self.include_in_output = include_in_output
        self.regex = regex
        self.constraint = RegexConstraint(regex) if regex else None

        self.item: Optional[FieldSchema] = None
        if item is not None:
            if isinstance(item, FieldSchema):
                self.item = item
            elif isinstance(item, dict):
                self.item = FieldSchema.from_dict(item)
            else:
                raise SchemaError(
                    "Invalid item config: must be dict or FieldSchema"
                )

    @property
    def required(self) -> bool:
        return self.default is MISSING

    def default_value(self) -> Any:
        """Return a private copy of the default."""
        return copy.deepcopy(self.default)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "FieldSchema":
        """
        Build a field schema from a plain dict.

        Accepts the short keys (``default``, ``location``, ``item``, ``dto``)
        and their long forms (``default_value``, ``path``, ``items`` or
        ``item_schema``, ``include_in_output``). Other keys, such as a
        ``description`` annotation, are ignored here and reported by
        ``lint_schema``. The dict is only read, never modified.
        """
        if not isinstance(config, dict):
            raise SchemaError(
                f"Invalid field config {config!r}: must be dict or FieldSchema"
            )

        kwargs: Dict[str, Any] = {}
        for key, value in config.items():
            target = _KEY_ALIASES.get(key)
            if target is None:
                logger.debug("Ignoring unknown schema key %r", key)
                continue
            if target in kwargs:
                raise SchemaError(f"Schema key '{key}' given twice")
            kwargs[target] = value

        if "dto" in kwargs:
            kwargs["include_in_output"] = kwargs.pop("dto")
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        result: Dict[str, Any] = {}
        if self.type is not None:
            result["type"] = self.type.value
        if not self.required:
            result["default"] = self.default
        if self.location is not None:
            result["location"] = self.location
        if self.item is not None:
            result["item"] = self.item.to_dict()
        if not self.include_in_output:
            result["dto"] = False
        if self.regex is not None:
            result["regex"] = self.regex
        return result

    def __repr__(self) -> str:
        attrs = [f"type={self.type.value if self.type else None!r}"]
        if not self.required:
            attrs.append(f"default={self.default!r}")
        if self.location is not None:
            attrs.append(f"location={self.location!r}")
        return f"FieldSchema({', '.join(attrs)})"


class ParameterSchema:
    """
    Container for parameter field schemas.

    Attributes:
        fields: Dictionary mapping parameter names to FieldSchema instances
    """

    def __init__(self, fields: Dict[str, FieldSchema]):
        self.fields = fields

    @classmethod
    def from_dict(cls, schema_dict: Dict[str, Any]) -> "ParameterSchema":
        """
        Parse a schema from a name -> field config mapping.

        Example:
            >>> schema = ParameterSchema.from_dict({
            ...     "id": {"type": "number", "location": "params.id"},
            ...     "limit": {"type": "number", "default": 10},
            ... })
        """
        if isinstance(schema_dict, ParameterSchema):
            return schema_dict
        if not isinstance(schema_dict, dict):
            raise SchemaError("Schema must be a mapping of parameter names")

        fields = {}
        for name, config in schema_dict.items():
            if not isinstance(name, str):
                raise SchemaError(
                    f"Invalid parameter name {name!r}: must be a string"
                )
            if isinstance(config, FieldSchema):
                fields[name] = config
            elif isinstance(config, dict):
                try:
                    fields[name] = FieldSchema.from_dict(config)
                except SchemaError as e:
                    raise SchemaError(f"Invalid schema for '{name}': {e}") from e
            else:
                raise SchemaError(
                    f"Invalid schema config for '{name}': must be dict or FieldSchema"
                )
        return cls(fields=fields)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        """Convert to dictionary representation."""
        return {name: field.to_dict() for name, field in self.fields.items()}

    def __repr__(self) -> str:
        return f"ParameterSchema(fields={list(self.fields.keys())})"


def read_schema_document(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a schema document from a YAML or JSON file.

    Raises:
        SchemaError: If the file cannot be parsed or is not a mapping
    """
    path = Path(path)
    try:
        document = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise SchemaError(f"Invalid YAML in {path}: {e}") from e

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise SchemaError(
            f"Schema file {path} must contain a mapping, got {type(document).__name__}"
        )
    return document


def load_schema(path: Union[str, Path]) -> ParameterSchema:
    """Load and parse a schema file."""
    return ParameterSchema.from_dict(read_schema_document(path))
