"""
Definitions harvester.

Walks a whole schema document and collects every entry of every
``definitions`` mapping found at a schema position (the root, and any schema
nested under ``properties``, ``items``, ``allOf``, ``definitions`` and so on).
The parser uses the reversed index, schema node -> definitions key, as the
naming fallback of last resort.

Lookups are by node identity, not value: two structurally equal definitions
are still distinct nodes with distinct keys.
"""

import logging
from typing import Any, Dict, Optional, Set

logger = logging.getLogger(__name__)

# Keywords whose value maps arbitrary keys to schemas
SCHEMA_MAP_KEYWORDS = frozenset({"definitions", "properties", "patternProperties"})

# Keywords whose value is a schema or a list of schemas
SCHEMA_KEYWORDS = frozenset({
    "additionalItems",
    "additionalProperties",
    "allOf",
    "anyOf",
    "extends",
    "items",
    "not",
    "oneOf",
})

# Keywords whose value is data or metadata, never a schema
LITERAL_KEYWORDS = frozenset({
    "const",
    "default",
    "enum",
    "examples",
    "required",
    "tsEnumNames",
})


def get_definitions(schema: Any) -> Dict[str, Any]:
    """
    Collect all definitions of a document into a single mapping.

    Definitions are merged in walk order (root first). When the same key is
    declared twice, the later schema replaces the earlier one but keeps the
    key's original position.

    Args:
        schema: Root schema document (may be cyclic)

    Returns:
        Dict: definitions key -> schema node

    Example:
        ```python
        schema = {
            "definitions": {
                "user": {"properties": {"name": {"type": "string"}}},
            },
            "properties": {
                "pet": {"definitions": {"species": {"enum": ["cat", "dog"]}}},
            },
        }
        get_definitions(schema).keys()   # dict_keys(['user', 'species'])
        ```
    """
    definitions: Dict[str, Any] = {}
    _collect(schema, True, set(), definitions)
    return definitions


def _collect(node: Any, is_schema: bool, visited: Set[int], definitions: Dict[str, Any]) -> None:
    """
    Depth-first walk adding each schema's own definitions to ``definitions``.

    Args:
        node: Current node (dict, list or scalar)
        is_schema: Whether ``node`` sits at a schema position
        visited: Identities of containers already walked (cycle guard)
        definitions: Accumulated result (updated)
    """
    if not isinstance(node, (dict, list)) or id(node) in visited:
        return
    visited.add(id(node))

    if isinstance(node, list):
        for item in node:
            _collect(item, is_schema, visited, definitions)
        return

    if is_schema and isinstance(node.get("definitions"), dict):
        definitions.update(node["definitions"])

    for key, value in node.items():
        if key in LITERAL_KEYWORDS:
            continue
        if key in SCHEMA_MAP_KEYWORDS and isinstance(value, dict):
            if id(value) in visited:
                continue
            visited.add(id(value))
            for sub_schema in value.values():
                _collect(sub_schema, is_schema, visited, definitions)
        else:
            # Anything under an unknown keyword is data, even if it looks like a schema
            _collect(value, is_schema and key in SCHEMA_KEYWORDS, visited, definitions)


def index_definitions(schema: Any) -> Dict[int, str]:
    """
    Build the reverse definitions index for a root schema.

    Args:
        schema: Root schema document

    Returns:
        Dict: ``id(node)`` -> the first definitions key naming that node
    """
    index: Dict[int, str] = {}
    for key, node in get_definitions(schema).items():
        # Scalars are shared by the interpreter, so their identity means nothing
        if isinstance(node, (dict, list)):
            index.setdefault(id(node), key)

    logger.debug(f"Indexed {len(index)} definition(s)")
    return index


def find_definition_key(index: Dict[int, str], node: Any) -> Optional[str]:
    """Look up the definitions key a node was declared under, if any."""
    return index.get(id(node))
