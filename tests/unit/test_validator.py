"""
Unit tests for validator.
"""

from schema_ast.validation import format_validation_errors, validate_schema


class TestValidator:
    """Test meta-schema validation of schema documents."""

    def test_validate_valid_schema(self):
        """Test a well-formed schema passes."""
        schema = {
            "title": "Person",
            "type": "object",
            "properties": {
                "name": {"type": "string"},
                "tags": {"type": "array", "items": {"type": "string"}}
            },
            "required": ["name"],
            "additionalProperties": False
        }

        result = validate_schema(schema)

        assert result.is_valid is True
        assert result.errors == []

    def test_extension_keywords_allowed(self):
        """Test generator-specific keywords such as tsEnumNames are accepted."""
        schema = {"enum": ["a", "b"], "tsEnumNames": ["A", "B"]}

        assert validate_schema(schema).is_valid is True

    def test_refs_allowed_before_dereferencing(self):
        """Test documents with $ref pointers still validate."""
        schema = {
            "definitions": {"name": {"type": "string"}},
            "properties": {"name": {"$ref": "#/definitions/name"}}
        }

        assert validate_schema(schema).is_valid is True

    def test_required_must_be_list(self):
        """Test a string-valued required is reported with its path."""
        schema = {"type": "object", "required": "name"}

        result = validate_schema(schema)

        assert result.is_valid is False
        assert len(result.errors) == 1
        assert result.errors[0].path == ".required"
        assert result.errors[0].validator == "type"

    def test_nested_errors_reported(self):
        """Test every problem is collected, with nested paths."""
        schema = {
            "type": "object",
            "properties": {
                "age": {"type": "integr"},
                "tags": {"type": "array", "items": 5}
            }
        }

        result = validate_schema(schema)

        assert result.is_valid is False
        paths = [e.path for e in result.errors]
        assert ".properties.age.type" in paths
        assert ".properties.tags.items" in paths

    def test_format_validation_errors(self):
        """Test formatting errors."""
        result = validate_schema({"type": "object", "required": "name"})

        formatted = format_validation_errors(result.errors)

        assert "Schema validation failed with 1 error(s)" in formatted
        assert "At .required" in formatted
        assert "Validator: type" in formatted

    def test_format_no_errors(self):
        """Test formatting an empty error list."""
        assert format_validation_errors([]) == "No validation errors"
