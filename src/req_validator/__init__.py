"""
Declarative request parameter validation.

Provides schema-driven extraction and validation of request parameters:
- Dotted/bracketed locations (``body.items[2].id``)
- Required/default handling, with None defaults allowed
- Type checking with numeric coercion
- Regex constraints, including ``/pattern/flags`` notation
- Recursive validation of array items
- Fail-fast typed errors naming the offending location

Usage:
    page:
      type: number
      location: query.page
      default: 1
    tags:
      type: array
      location: body.tags
      item:
        type: string

Example:
    >>> from req_validator import validate_params
    >>> validate_params(
    ...     {"id": {"type": "number", "location": "params.id"}},
    ...     {"params": {"id": "42"}},
    ... )
    {'id': 42}
"""

__version__ = "1.0.0"

from .errors import (
    ReqValidatorError,
    MissingSchemaTypeError,
    TypeMismatchError,
    PatternMismatchError,
    SchemaError,
)
from .schema import (
    ParamType,
    FieldSchema,
    ParameterSchema,
    MISSING,
    load_schema,
    read_schema_document,
)
from .paths import resolve_path, split_path
from .patterns import RegexConstraint, split_regex, stringify
from .validators import (
    Parameter,
    ValidationResult,
    check_params,
    validate_params,
)
from .settings import ValidatorSettings, parse_validator_settings
from .middleware import RequestValidator, req_validator
from .lint import lint_schema

__all__ = [
    # Errors
    "ReqValidatorError",
    "MissingSchemaTypeError",
    "TypeMismatchError",
    "PatternMismatchError",
    "SchemaError",
    # Schema
    "ParamType",
    "FieldSchema",
    "ParameterSchema",
    "MISSING",
    "load_schema",
    "read_schema_document",
    # Paths and patterns
    "resolve_path",
    "split_path",
    "RegexConstraint",
    "split_regex",
    "stringify",
    # Validation
    "Parameter",
    "ValidationResult",
    "check_params",
    "validate_params",
    # Middleware
    "ValidatorSettings",
    "parse_validator_settings",
    "RequestValidator",
    "req_validator",
    "lint_schema",
]
