"""
Schema parsing module.

This module turns JSON Schema documents into the typed AST consumed by
declaration renderers.

Components:
    - types: AST node definitions (InterfaceType, UnionType, EnumType, etc.)
    - kinds: Structural classification of schema nodes
    - naming: Standalone name sanitization and allocation
    - definitions: Harvesting of ``definitions`` used as naming fallbacks
    - dereference: Replace ``$ref`` pointers by the nodes they point to
    - recursion: Recursion limit headroom for deeply nested documents
    - parser: Main entry point, the cycle-safe recursive AST builder
    - pydantic_adapter: Convert Pydantic models to JSON Schema

Example:
    ```python
    from schema_ast.schema import parse, dereference

    schema = {"title": "User", "properties": {"name": {"type": "string"}}}
    ast = parse(dereference(schema))

    # Or let parse_schema dereference (and accept Pydantic models)
    ast = parse_schema(schema)
    ```
"""

from schema_ast.schema.dereference import dereference
from schema_ast.schema.errors import (
    DereferenceError,
    EnumLabelMismatchError,
    MissingSuperTypeNameError,
    SchemaASTError,
    UnresolvedReferenceError,
)
from schema_ast.schema.kinds import SchemaKind, classify
from schema_ast.schema.parser import ParseContext, ParserOptions, parse, parse_schema
from schema_ast.schema.pydantic_adapter import is_pydantic_model, pydantic_to_schema
from schema_ast.schema.types import ast_to_dict, has_standalone_name

__all__ = [
    "parse",
    "parse_schema",
    "ParserOptions",
    "ParseContext",
    "dereference",
    "classify",
    "SchemaKind",
    "ast_to_dict",
    "has_standalone_name",
    "pydantic_to_schema",
    "is_pydantic_model",
    "SchemaASTError",
    "UnresolvedReferenceError",
    "MissingSuperTypeNameError",
    "EnumLabelMismatchError",
    "DereferenceError",
]
