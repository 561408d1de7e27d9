"""
Schema document validator with detailed error reporting.

Checks that an input document is itself a well-formed JSON Schema before it
is dereferenced and parsed. The parser is permissive and will turn almost
anything into some AST, so a malformed document (``"required": "name"``,
``"properties": []``) is better reported here, with a path, than discovered
in the generated declarations.

Usage:
    ```python
    from schema_ast.validation import validate_schema

    result = validate_schema({"type": "object", "properties": []})
    if not result.is_valid:
        for error in result.errors:
            print(f"{error.path}: {error.message}")
    ```
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from jsonschema import Draft4Validator

logger = logging.getLogger(__name__)


@dataclass
class ValidationError:
    """
    Represents a single problem in a schema document.

    Attributes:
        path: Location of the problem in the document (e.g., ".properties.age")
        message: Human-readable error message
        validator: Meta-schema keyword that failed (e.g., "type", "minItems")
    """
    path: str
    message: str
    validator: str


@dataclass
class ValidationResult:
    """
    Result of checking a schema document against the meta-schema.

    Attributes:
        is_valid: Whether the document is a well-formed schema
        errors: List of problems (empty if valid)
    """
    is_valid: bool
    errors: List[ValidationError]


def validate_schema(schema: Dict[str, Any]) -> ValidationResult:
    """
    Validate a schema document against the Draft 4 meta-schema.

    Args:
        schema: JSON Schema document (before dereferencing)

    Returns:
        ValidationResult: Validation result with every error found

    Example:
        ```python
        result = validate_schema({"type": "object", "required": "name"})
        result.is_valid                 # False
        result.errors[0].path           # ".required"
        ```
    """
    validator = Draft4Validator(Draft4Validator.META_SCHEMA)

    errors = [_convert_jsonschema_error(error) for error in validator.iter_errors(schema)]
    errors.sort(key=lambda e: e.path)

    if errors:
        logger.info(f"Schema document has {len(errors)} error(s)")

    return ValidationResult(is_valid=not errors, errors=errors)


def _convert_jsonschema_error(error: Any) -> ValidationError:
    """
    Convert a jsonschema ValidationError to our ValidationError.

    Args:
        error: jsonschema ValidationError

    Returns:
        ValidationError: Our error representation
    """
    path = "." + ".".join(str(p) for p in error.absolute_path) if error.absolute_path else "root"

    return ValidationError(
        path=path,
        message=error.message,
        validator=str(error.validator),
    )


def format_validation_errors(errors: List[ValidationError]) -> str:
    """
    Format validation errors as human-readable string.

    Args:
        errors: List of validation errors

    Returns:
        str: Formatted error message

    Example:
        ```python
        print(format_validation_errors(result.errors))
        # Schema validation failed with 1 error(s):
        #
        #   1. At .required: 'name' is not of type 'array'
        #      Validator: type
        ```
    """
    if not errors:
        return "No validation errors"

    lines = [f"Schema validation failed with {len(errors)} error(s):"]

    for i, error in enumerate(errors, 1):
        lines.append(f"\n  {i}. At {error.path}: {error.message}")
        lines.append(f"     Validator: {error.validator}")

    return "\n".join(lines)
