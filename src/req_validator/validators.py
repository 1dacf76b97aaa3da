"""
Parameter Validators for Request Validation.

Implements the validation pipeline for a single parameter:
- Value extraction by dotted/bracketed location
- Default value injection for optional parameters
- Type validation with numeric coercion
- Regex constraints
- Recursive array item validation with indexed path reporting

Validation is fail-fast: the first failing parameter stops the pass.
"""

import logging
import math
import re
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Tuple, Union

from .errors import (
    MissingSchemaTypeError,
    PatternMismatchError,
    ReqValidatorError,
    TypeMismatchError,
)
from .paths import resolve_path
from .schema import FieldSchema, ParameterSchema, ParamType

logger = logging.getLogger(__name__)

_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")
_DECIMAL_TEXT = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")

SchemaLike = Union[ParameterSchema, Dict[str, Any]]


class Parameter:
    """
    One schema-bound value validated against a source object.

    A Parameter is built for a single validation call (including one per
    array element) and discarded afterwards.

    Attributes:
        name: Parameter name within its schema mapping
        schema: FieldSchema holding the rules
        source: Root object the location is resolved against
        location: Path of the value inside ``source``
    """

    def __init__(
        self,
        schema: FieldSchema,
        name: str,
        source: Any,
        location: Optional[str] = None,
    ):
        self.name = name
        self.schema = schema
        self.source = source
        self.location = location or schema.location or name

    @property
    def type(self) -> Optional[ParamType]:
        return self.schema.type

    @property
    def required(self) -> bool:
        return self.schema.required

    def get_value(self) -> Any:
        """Get the raw value at this parameter's location."""
        return resolve_path(self.source, self.location)

    def check_type(self, value: Any) -> Tuple[bool, Any]:
        """
        Validate ``value`` against the declared type.

        Returns (valid, value). Numbers given as text are converted, every
        other type must already match.
        """
        if value is None:
            return not self.required, value

        if self.type is ParamType.ARRAY:
            return isinstance(value, (list, tuple)), value
        if self.type is ParamType.NUMBER:
            return _coerce_number(value)
        if self.type is ParamType.STRING:
            return isinstance(value, str), value
        if self.type is ParamType.BOOLEAN:
            return isinstance(value, bool), value
        if self.type is ParamType.OBJECT:
            return isinstance(value, Mapping), value
        return False, value

    def matches_regex(self, value: Any) -> bool:
        """Return True if there is no regex or the value matches it."""
        if self.schema.constraint is None:
            return True
        return self.schema.constraint.test(value)

    def validate(self) -> Tuple[Any, Optional[ReqValidatorError]]:
        """
        Run the full pipeline.

        Returns (value, None) on success or (None, error) on failure.
        """
        if self.type is None:
            return None, MissingSchemaTypeError(self.location)

        value = self.get_value()
        if value is None and not self.required:
            value = self.schema.default_value()
            logger.debug("Default applied to %s: %r", self.location, value)

        valid, value = self.check_type(value)
        if not valid:
            return None, TypeMismatchError(self.location, self.type.value)

        if not self.matches_regex(value):
            return None, PatternMismatchError(self.location)

        if (
            self.type is ParamType.ARRAY
            and self.schema.item is not None
            and value is not None
        ):
            return self.validate_items(value)

        return value, None

    def validate_items(self, items: Any) -> Tuple[Any, Optional[ReqValidatorError]]:
        """
        Validate every element of an array against the item schema.

        Each element is resolved from the root source at ``<location>[i]``.
        """
        validated: List[Any] = []
        for index in range(len(items)):
            parameter = Parameter(
                self.schema.item,
                str(index),
                self.source,
                location=f"{self.location}[{index}]",
            )
            item_value, error = parameter.validate()
            if error is not None:
                return None, error
            validated.append(item_value)
        return validated, None

    def __repr__(self) -> str:
        return f"Parameter(name={self.name!r}, location={self.location!r})"


class ValidationResult:
    """
    Outcome of a validation pass.

    Attributes:
        success: Whether every parameter was accepted
        data: Output mapping of accepted values (empty on failure)
        error: The first error found (None on success)
    """

    def __init__(
        self,
        success: bool,
        data: Optional[Dict[str, Any]] = None,
        error: Optional[ReqValidatorError] = None,
    ):
        self.success = success
        self.data = data if data is not None else {}
        self.error = error

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {"success": True, "data": self.data}
        return {"success": False, "error": self.error.to_dict()}

    def __repr__(self) -> str:
        if self.success:
            return f"ValidationResult(success=True, data={self.data!r})"
        return f"ValidationResult(success=False, error={self.error!r})"


def check_params(schema: SchemaLike, source: Any) -> ValidationResult:
    """
    Validate ``source`` against ``schema`` without raising on bad data.

    Args:
        schema: ParameterSchema, or a dict of name -> field config
        source: Object the parameter locations are resolved against

    Returns:
        ValidationResult with the output mapping or the first error

    Raises:
        SchemaError: If ``schema`` is a dict that cannot be parsed
    """
    schema = ParameterSchema.from_dict(schema)
    output: Dict[str, Any] = {}

    for name, field_schema in schema.fields.items():
        parameter = Parameter(field_schema, name, source)
        value, error = parameter.validate()
        if error is not None:
            logger.debug("Validation failed at %s: %s", error.path, error.message)
            return ValidationResult(success=False, error=error)
        if field_schema.include_in_output:
            output[name] = value

    return ValidationResult(success=True, data=output)


def validate_params(schema: SchemaLike, source: Any) -> Dict[str, Any]:
    """
    Validate ``source`` against ``schema``.

    Returns the output mapping of accepted parameters, with defaults applied
    and numbers coerced.

    Raises:
        MissingSchemaTypeError: If a field or item schema has no type
        TypeMismatchError: If a value does not satisfy its declared type
        PatternMismatchError: If a value does not match its regex
        SchemaError: If ``schema`` is a dict that cannot be parsed

    Example:
        >>> validate_params(
        ...     {"page": {"type": "number", "location": "query.page", "default": 1}},
        ...     {"query": {"page": "3"}},
        ... )
        {'page': 3}
    """
    result = check_params(schema, source)
    if not result.success:
        raise result.error
    return result.data


def _coerce_number(value: Any) -> Tuple[bool, Any]:
    if isinstance(value, bool):
        return False, value
    if isinstance(value, int):
        return True, value
    if isinstance(value, float):
        return not math.isnan(value), value
    if isinstance(value, str):
        text = value.strip()
        try:
            if _INTEGER_TEXT.fullmatch(text):
                return True, int(text)
            if _DECIMAL_TEXT.fullmatch(text):
                number = float(text)
                if math.isfinite(number):
                    return True, number
        except ValueError:
            # int() refuses text beyond the interpreter's digit limit
            logger.debug("Number text too long to convert: %d chars", len(text))
            return False, value
    return False, value
