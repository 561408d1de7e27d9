"""
schema-ast: JSON Schema to typed AST

schema-ast turns JSON Schema documents into a closed set of typed AST nodes
(interfaces, unions, intersections, enums, tuples, arrays, primitives and
literals) that a code generator renders as type declarations.

Key Features:
    - Cycle-safe parsing of recursive schemas (``$ref`` back to an ancestor)
    - Stable, document-unique names from titles, ids and definitions keys
    - Required/optional, pattern and index-signature members
    - Multiple inheritance through ``extends``
    - Accepts JSON Schema dicts or Pydantic models

Quick Start:
    ```python
    from schema_ast import parse_schema

    schema = {
        "title": "Tree",
        "type": "object",
        "properties": {
            "value": {"type": "number"},
            "children": {"type": "array", "items": {"$ref": "#"}}
        },
        "required": ["value"],
        "additionalProperties": False
    }

    ast = parse_schema(schema)
    print(ast.standalone_name)                      # Tree
    print(ast.properties[1].ast.element is ast)     # True
    ```

Architecture:
    1. Validator: Check the document against the JSON Schema meta-schema
    2. Dereferencer: Replace ``$ref`` pointers by the nodes they point to
    3. Classifier: Determine each node's structural kind
    4. Parser: Build the AST, caching nodes by identity to break cycles
    5. Namer: Allocate document-unique standalone names
"""

__version__ = "0.1.0"

from schema_ast.schema import ParserOptions, ast_to_dict, parse, parse_schema  # noqa: F401

__all__ = [
    "parse",
    "parse_schema",
    "ParserOptions",
    "ast_to_dict",
]
