"""
Structural checks for schema documents.

Catches schema-authoring mistakes before any request is validated:
unknown keys, wrong value kinds, unknown type names, fields or item schemas
without a type, and regexes that do not compile.
"""

from typing import Any, Dict, List

from jsonschema import Draft7Validator

from .errors import SchemaError
from .schema import ParameterSchema, ParamType

_FIELD_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "type": {"enum": [t.value for t in ParamType]},
        "default": {},
        "default_value": {},
        "location": {"type": "string"},
        "path": {"type": "string"},
        "item": {"$ref": "#/definitions/field"},
        "items": {"$ref": "#/definitions/field"},
        "item_schema": {"$ref": "#/definitions/field"},
        "dto": {"type": "boolean"},
        "include_in_output": {"type": "boolean"},
        "regex": {"type": "string"},
    },
    "additionalProperties": False,
}

SCHEMA_DOCUMENT_META_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "definitions": {"field": _FIELD_SCHEMA},
    "type": "object",
    "additionalProperties": {"$ref": "#/definitions/field"},
}

_validator = Draft7Validator(SCHEMA_DOCUMENT_META_SCHEMA)


def lint_schema(document: Any) -> Dict[str, Any]:
    """
    Check a schema document (name -> field config mapping).

    Args:
        document: Parsed schema document

    Returns:
        Dict with 'valid' (bool) and 'errors' (list of {path, message})

    Example:
        >>> lint_schema({"id": {"location": "params.id"}})["errors"]
        [{'path': 'id', 'message': 'Property type is required in id'}]
    """
    errors: List[Dict[str, str]] = []

    for error in sorted(_validator.iter_errors(document), key=lambda e: [str(p) for p in e.path]):
        path = ".".join(str(p) for p in error.absolute_path)
        errors.append({"path": path, "message": error.message})

    if isinstance(document, dict):
        for name, config in document.items():
            _check_types(str(name), config, errors)

    # Parsing catches what the meta-schema cannot express (bad regexes)
    if not errors:
        try:
            ParameterSchema.from_dict(document)
        except SchemaError as e:
            errors.append({"path": "", "message": str(e)})

    return {"valid": not errors, "errors": errors}


def _check_types(path: str, config: Any, errors: List[Dict[str, str]]) -> None:
    if not isinstance(config, dict):
        return
    if not config.get("type"):
        errors.append({"path": path, "message": f"Property type is required in {path}"})
    for key in ("item", "items", "item_schema"):
        if key in config:
            _check_types(f"{path}.{key}", config[key], errors)
