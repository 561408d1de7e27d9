"""
CLI command implementations.

This module contains the business logic for each CLI command:
- parse: Build and display the AST of a schema file
- validate: Check a schema file against the meta-schema
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from rich.markup import escape

from schema_ast.schema import ParserOptions, ast_to_dict, dereference, parse
from schema_ast.validation import validate_schema

from .display import (
    console,
    print_ast,
    print_error,
    print_header,
    print_info,
    print_json,
    print_separator,
    print_success,
    print_validation_errors,
)

logger = logging.getLogger(__name__)


def load_schema_file(schema_path: Path) -> Dict[str, Any]:
    """
    Load and parse a JSON schema file.

    Args:
        schema_path: Path to schema JSON file

    Returns:
        Parsed schema dictionary

    Raises:
        ValueError: If file doesn't exist or isn't valid JSON
    """
    if not schema_path.exists():
        raise ValueError(f"Schema file not found: {schema_path}")

    try:
        with open(schema_path, encoding="utf-8") as f:
            schema = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in schema file: {e}")

    if not isinstance(schema, dict):
        raise ValueError(f"Schema must be a JSON object, got {type(schema).__name__}")
    return schema


def _check_schema(schema: Dict[str, Any]) -> bool:
    """Run meta-schema validation and print the outcome."""
    result = validate_schema(schema)
    if result.is_valid:
        print_success("Schema is well-formed")
        return True

    print_error(f"Schema has {len(result.errors)} problem(s)")
    print_validation_errors(
        [f"{escape(e.path)}: {escape(e.message)} [dim]({e.validator})[/dim]" for e in result.errors]
    )
    return False


def parse_command(
    schema_path: Path,
    unreachable_definitions: bool,
    output_format: str,
    output_path: Optional[Path],
    skip_validation: bool
) -> None:
    """
    Execute the parse command.

    Args:
        schema_path: Path to JSON schema file
        unreachable_definitions: Emit unreferenced nested definitions
        output_format: "tree" for a Rich tree, "json" for a JSON dump
        output_path: Optional path to save the JSON dump
        skip_validation: Parse even if the meta-schema check fails
    """
    print_header("schema-ast - Parse")

    schema = load_schema_file(schema_path)
    print_success(f"Loaded schema from: {schema_path}")

    if not _check_schema(schema) and not skip_validation:
        raise SystemExit(1)

    options = ParserOptions(unreachable_definitions=unreachable_definitions)
    print_info(f"Unreachable definitions: [bold]{options.unreachable_definitions}[/bold]")
    print_separator()

    ast = parse(dereference(schema, base_uri=schema_path.resolve().as_uri()), options)
    dumped = ast_to_dict(ast)

    if output_format == "json":
        print_json(dumped, title="AST")
    else:
        print_ast(ast, title=escape(ast.standalone_name or schema_path.name))

    if output_path:
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(dumped, f, indent=2)
        console.print()
        print_success(f"Saved AST to: {output_path}")


def validate_command(schema_path: Path) -> None:
    """
    Execute the validate command.

    Args:
        schema_path: Path to JSON schema file
    """
    print_header("schema-ast - Validate")

    schema = load_schema_file(schema_path)
    print_success(f"Loaded schema from: {schema_path}")

    if not _check_schema(schema):
        raise SystemExit(1)
