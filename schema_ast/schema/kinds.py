"""
Schema kind classifier.

Inspects a raw schema node and returns the structural kind the parser
dispatches on. Classification only looks at the node's own keywords, never
at its children, so it is safe to call before a node is cached.

Checks are ordered: combinators win over ``type``, ``items`` wins over
``enum``, and a bare ``$ref`` is reported as REFERENCE so the parser can
refuse it.
"""

from enum import Enum
from typing import Any, Dict


class SchemaKind(Enum):
    ALL_OF = "ALL_OF"
    ANY = "ANY"
    ANY_OF = "ANY_OF"
    BOOLEAN = "BOOLEAN"
    NAMED_ENUM = "NAMED_ENUM"
    NAMED_SCHEMA = "NAMED_SCHEMA"
    NULL = "NULL"
    NUMBER = "NUMBER"
    ONE_OF = "ONE_OF"
    REFERENCE = "REFERENCE"
    STRING = "STRING"
    TYPED_ARRAY = "TYPED_ARRAY"
    UNION = "UNION"
    UNNAMED_ENUM = "UNNAMED_ENUM"
    UNNAMED_SCHEMA = "UNNAMED_SCHEMA"
    UNTYPED_ARRAY = "UNTYPED_ARRAY"


_TYPE_KINDS = {
    "string": SchemaKind.STRING,
    "number": SchemaKind.NUMBER,
    "integer": SchemaKind.NUMBER,
    "boolean": SchemaKind.BOOLEAN,
    "array": SchemaKind.UNTYPED_ARRAY,
    "null": SchemaKind.NULL,
    "any": SchemaKind.ANY,
}


def classify(schema: Dict[str, Any]) -> SchemaKind:
    """
    Determine the structural kind of a schema node.

    Args:
        schema: JSON Schema node (a dict; anything else is ANY)

    Returns:
        SchemaKind: The kind the parser should build

    Example:
        ```python
        classify({"type": ["string", "null"]})        # SchemaKind.UNION
        classify({"enum": [1, 2]})                     # SchemaKind.UNNAMED_ENUM
        classify({"properties": {"a": {}}})            # SchemaKind.UNNAMED_SCHEMA
        ```
    """
    if not isinstance(schema, dict):
        return SchemaKind.ANY

    if schema.get("allOf"):
        return SchemaKind.ALL_OF
    if schema.get("anyOf"):
        return SchemaKind.ANY_OF
    if schema.get("oneOf"):
        return SchemaKind.ONE_OF
    if isinstance(schema.get("type"), list):
        return SchemaKind.UNION
    if schema.get("type") == "null":
        return SchemaKind.NULL
    if schema.get("items"):
        return SchemaKind.TYPED_ARRAY
    if schema.get("enum") and schema.get("tsEnumNames"):
        return SchemaKind.NAMED_ENUM
    if schema.get("enum"):
        return SchemaKind.UNNAMED_ENUM
    if schema.get("$ref"):
        return SchemaKind.REFERENCE

    # "object" falls through to the shape checks below
    type_name = schema.get("type")
    kind = _TYPE_KINDS.get(type_name) if isinstance(type_name, str) else None
    if kind is not None:
        return kind

    default = schema.get("default")
    if isinstance(default, bool):
        return SchemaKind.BOOLEAN
    if isinstance(default, (int, float)):
        return SchemaKind.NUMBER
    if isinstance(default, str):
        return SchemaKind.STRING

    if schema.get("id"):
        return SchemaKind.NAMED_SCHEMA
    if schema:
        return SchemaKind.UNNAMED_SCHEMA
    return SchemaKind.ANY
