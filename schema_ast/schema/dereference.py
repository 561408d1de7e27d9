"""
$ref dereferencing.

The parser refuses ``$ref`` nodes: every pointer must first be replaced by
the node it points to. This module does that for pointers within a single
document, using the ``referencing`` library that backs ``jsonschema``.

Replacement preserves identity. Two refs to the same definition become two
references to one dict, and a ref back to an ancestor turns the document
into a cyclic graph, which the parser handles through its identity cache.

Usage:
    ```python
    from schema_ast.schema import dereference

    schema = {
        "definitions": {"node": {"properties": {"next": {"$ref": "#/definitions/node"}}}},
        "properties": {"head": {"$ref": "#/definitions/node"}},
    }

    resolved = dereference(schema)
    head = resolved["properties"]["head"]
    head["properties"]["next"] is head   # True
    ```
"""

import copy
import logging
from typing import Any, Set

from referencing import Registry, Resource
from referencing.exceptions import Unresolvable
from referencing.jsonschema import DRAFT4

from schema_ast.schema.definitions import LITERAL_KEYWORDS, SCHEMA_MAP_KEYWORDS
from schema_ast.schema.errors import DereferenceError
from schema_ast.schema.recursion import count_containers, recursion_headroom

logger = logging.getLogger(__name__)


def dereference(schema: Any, base_uri: str = "") -> Any:
    """
    Replace every ``$ref`` in a schema document by the node it points to.

    The input is not modified; a deep copy is dereferenced and returned.

    Args:
        schema: JSON Schema document (dicts and lists)
        base_uri: URI the document is registered under

    Returns:
        Any: Dereferenced copy of the document (possibly cyclic)

    Raises:
        DereferenceError: If a pointer does not resolve within the document,
            or a chain of refs only points at itself
    """
    with recursion_headroom(count_containers(schema)):
        return _dereference(copy.deepcopy(schema), base_uri)


def _dereference(document: Any, base_uri: str) -> Any:
    if not isinstance(document, dict):
        return document

    resource = Resource.from_contents(document, default_specification=DRAFT4)
    registry = Registry().with_resource(uri=base_uri, resource=resource)
    if resource.id():
        # Absolute refs may name the document by its own id
        registry = registry.with_resource(uri=resource.id(), resource=resource)
    resolver = registry.resolver(base_uri=base_uri)

    def resolve(node: Any) -> Any:
        chain = []
        while isinstance(node, dict) and isinstance(node.get("$ref"), str):
            ref = node["$ref"]
            if ref in chain:
                raise DereferenceError(f"Circular $ref chain: {' -> '.join(chain + [ref])}", node)
            chain.append(ref)
            try:
                node = resolver.lookup(ref).contents
            except Unresolvable as e:
                raise DereferenceError(f"Cannot resolve $ref {ref!r}: {e}", node) from e
        if chain:
            logger.debug(f"Resolved {' -> '.join(chain)}")
        return node

    visited: Set[int] = set()

    def walk(node: Any) -> None:
        if not isinstance(node, (dict, list)) or id(node) in visited:
            return
        visited.add(id(node))

        if isinstance(node, list):
            for i, item in enumerate(node):
                node[i] = resolve(item)
                walk(node[i])
            return

        for key, value in list(node.items()):
            if key in LITERAL_KEYWORDS:
                continue
            if key in SCHEMA_MAP_KEYWORDS and isinstance(value, dict):
                # Keys of these maps are names, so "$ref" here is a property
                for name, sub_schema in list(value.items()):
                    value[name] = resolve(sub_schema)
                    walk(value[name])
            else:
                node[key] = resolve(value)
                walk(node[key])

    root = resolve(document)
    walk(root)
    return root
