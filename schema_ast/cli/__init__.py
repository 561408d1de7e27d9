"""
Command-line interface module.

This module provides a rich terminal interface for schema-ast using Typer and Rich.

Commands:
    - parse: Dereference and parse a schema file, then show its AST
    - validate: Check a schema file against the JSON Schema meta-schema

Features:
    - AST rendered as a tree, with recursive references shown by name
    - Syntax-highlighted JSON output
    - Colored error messages with locations

Example Usage:
    ```bash
    # Show the AST as a tree
    schema-ast parse --schema schema.json

    # Include unreferenced definitions and save the JSON dump
    schema-ast parse \\
        --schema schema.json \\
        --unreachable-definitions \\
        --format json \\
        --output schema.ast.json

    # Only check the schema
    schema-ast validate --schema schema.json
    ```
"""

from .main import app

__all__ = ["app"]
