"""
Tests for required parameters and default values.
"""

import pytest
from req_validator import (
    FieldSchema,
    ParameterSchema,
    TypeMismatchError,
    validate_params,
)


class TestRequiredParameters:
    """Tests for parameters without a default."""

    def test_required_present(self):
        result = validate_params({"name": {"type": "string"}}, {"name": "ada"})
        assert result["name"] == "ada"

    def test_required_missing_fails_with_type_error(self):
        with pytest.raises(TypeMismatchError) as exc_info:
            validate_params({"name": {"type": "string"}}, {})
        assert exc_info.value.path == "name"
        assert exc_info.value.expected == "string"

    def test_required_null_fails(self):
        with pytest.raises(TypeMismatchError):
            validate_params({"name": {"type": "string"}}, {"name": None})

    @pytest.mark.parametrize("type_name", ["string", "number", "boolean", "object", "array"])
    def test_required_null_fails_for_every_type(self, type_name):
        with pytest.raises(TypeMismatchError):
            validate_params({"field": {"type": type_name}}, {"field": None})

    def test_required_falsy_values_are_present(self):
        result = validate_params(
            {
                "count": {"type": "number"},
                "flag": {"type": "boolean"},
                "text": {"type": "string"},
            },
            {"count": 0, "flag": False, "text": ""},
        )
        assert result == {"count": 0, "flag": False, "text": ""}


class TestDefaultValues:
    """Tests for optional parameters."""

    def test_default_applied_when_missing(self):
        result = validate_params({"limit": {"type": "number", "default": 10}}, {})
        assert result["limit"] == 10

    def test_default_applied_when_null(self):
        result = validate_params(
            {"limit": {"type": "number", "default": 10}}, {"limit": None}
        )
        assert result["limit"] == 10

    def test_default_not_used_when_provided(self):
        result = validate_params(
            {"limit": {"type": "number", "default": 10}}, {"limit": "20"}
        )
        assert result["limit"] == 20

    def test_null_default_is_kept(self):
        """A None default makes the field optional and is output as None."""
        result = validate_params({"cursor": {"type": "string", "default": None}}, {})
        assert "cursor" in result
        assert result["cursor"] is None

    @pytest.mark.parametrize("type_name", ["string", "number", "boolean", "object", "array"])
    def test_null_default_passes_for_every_type(self, type_name):
        result = validate_params({"field": {"type": type_name, "default": None}}, {})
        assert result == {"field": None}

    def test_default_of_wrong_type_fails(self):
        with pytest.raises(TypeMismatchError):
            validate_params({"limit": {"type": "number", "default": "many"}}, {})

    def test_numeric_text_default_is_coerced(self):
        result = validate_params({"limit": {"type": "number", "default": "5"}}, {})
        assert result["limit"] == 5

    def test_provided_value_of_wrong_type_still_fails(self):
        with pytest.raises(TypeMismatchError):
            validate_params(
                {"limit": {"type": "number", "default": 10}}, {"limit": "ten"}
            )

    def test_default_list_is_copied(self):
        """Mutating an output default does not change the schema."""
        schema = ParameterSchema.from_dict({"tags": {"type": "array", "default": ["a"]}})
        first = validate_params(schema, {})
        first["tags"].append("b")
        second = validate_params(schema, {})
        assert second["tags"] == ["a"]


class TestRequiredFlag:
    """Tests for the required/optional distinction on FieldSchema."""

    def test_no_default_is_required(self):
        assert FieldSchema.from_dict({"type": "string"}).required is True

    def test_none_default_is_optional(self):
        assert FieldSchema.from_dict({"type": "string", "default": None}).required is False

    def test_falsy_default_is_optional(self):
        assert FieldSchema.from_dict({"type": "number", "default": 0}).required is False
