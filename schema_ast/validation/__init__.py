"""
Schema document validation module.

This module checks input documents against the JSON Schema meta-schema
before they are parsed, reporting every problem with its location.

Components:
    - validator: Meta-schema validation using jsonschema

Example:
    ```python
    from schema_ast.validation import validate_schema, format_validation_errors

    result = validate_schema(schema)
    if not result.is_valid:
        print(format_validation_errors(result.errors))
    ```
"""

from schema_ast.validation.validator import (
    ValidationError,
    ValidationResult,
    format_validation_errors,
    validate_schema,
)

__all__ = [
    "validate_schema",
    "ValidationResult",
    "ValidationError",
    "format_validation_errors",
]
