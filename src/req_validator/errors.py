"""
Error Types for Request Parameter Validation.

Provides the typed failures produced by a validation pass:
- ReqValidatorError: Base class carrying a message, a path and a status code
- MissingSchemaTypeError: A field schema (or item schema) has no type
- TypeMismatchError: The resolved value does not satisfy the declared type
- PatternMismatchError: The resolved value does not match the configured regex

Schema-authoring problems found while a schema is being built (unknown type
names, bad regex flags) raise SchemaError instead.
"""

from typing import Any, Dict, Optional


class ReqValidatorError(Exception):
    """
    Base exception for a failed validation pass.

    Attributes:
        path: Location of the offending parameter (e.g., "body.items[2]")
        message: Human-readable error message
        status_code: HTTP status the failure maps to (400 by default)
        error: Short error code (type_required, type, regex)
    """

    error = "invalid"
    status_code = 400

    def __init__(self, path: str, message: str, status_code: Optional[int] = None):
        self.path = path
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "error": self.error,
            "path": self.path,
            "message": self.message,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={self.path!r}, message={self.message!r})"


class MissingSchemaTypeError(ReqValidatorError):
    """Raised when a field schema, or an array item schema, lacks a type."""

    error = "type_required"

    def __init__(self, path: str):
        super().__init__(path, f"Property type is required in {path}")


class TypeMismatchError(ReqValidatorError):
    """
    Raised when a resolved value fails the declared type check.

    Attributes:
        expected: The declared type name
    """

    error = "type"

    def __init__(self, path: str, expected: str):
        self.expected = expected
        super().__init__(path, f"Invalid type in {path}, expected {expected}")

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["expected"] = self.expected
        return result


class PatternMismatchError(ReqValidatorError):
    """Raised when a resolved value does not match the configured regex."""

    error = "regex"

    def __init__(self, path: str):
        super().__init__(path, f"Invalid regex match in {path}")


class SchemaError(ValueError):
    """Raised when a schema definition itself is malformed."""
