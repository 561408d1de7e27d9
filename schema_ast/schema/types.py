"""
AST node definitions produced by the schema parser.

This module defines the closed set of node variants a declaration renderer
consumes. Every node is a mutable dataclass compared by identity: the parser
caches nodes before their fields are known and fills them in place, so a
recursive schema yields an AST whose self-reference is the very same object.

Type Hierarchy:
    ASTNode (abstract)
    ├── AnyType: Any JSON value
    ├── BooleanType / NullType / NumberType / StringType: Primitives
    ├── LiteralType: A single raw value (used for enum members)
    ├── ArrayType: Homogeneous array with one element type
    ├── TupleType: Fixed-position array
    ├── UnionType: One of several types (anyOf, oneOf, type arrays, enums)
    ├── IntersectionType: All of several types (allOf)
    ├── EnumType: Labelled literal members (enum + tsEnumNames)
    └── InterfaceType: Object with properties and supertypes

Common attributes:
    comment: Copied from the schema's ``description``
    key_name: Property name under which the node was reached, if any
    standalone_name: Document-unique identifier, present iff the node should
        be emitted as its own named declaration
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, List, Optional, Set

from schema_ast.schema.recursion import recursion_headroom


@dataclass(eq=False)
class ASTNode(ABC):
    """
    Abstract base class for all AST variants.

    Nodes use identity equality and hashing so that they can be shared
    between parents and referenced from inside their own subtree.
    """

    kind: ClassVar[str] = ""

    comment: Optional[str] = None
    key_name: Optional[str] = None
    standalone_name: Optional[str] = None

    @abstractmethod
    def _dump_fields(self, dump: Callable[["ASTNode"], Dict[str, Any]]) -> Dict[str, Any]:
        """
        Serialize the variant-specific fields of this node.

        Args:
            dump: Callback used to serialize child nodes

        Returns:
            Dict: JSON-compatible mapping of the variant's own fields
        """
        pass


@dataclass(eq=False)
class AnyType(ASTNode):
    kind: ClassVar[str] = "ANY"

    def _dump_fields(self, dump):
        return {}


@dataclass(eq=False)
class BooleanType(ASTNode):
    kind: ClassVar[str] = "BOOLEAN"

    def _dump_fields(self, dump):
        return {}


@dataclass(eq=False)
class NullType(ASTNode):
    kind: ClassVar[str] = "NULL"

    def _dump_fields(self, dump):
        return {}


@dataclass(eq=False)
class NumberType(ASTNode):
    kind: ClassVar[str] = "NUMBER"

    def _dump_fields(self, dump):
        return {}


@dataclass(eq=False)
class StringType(ASTNode):
    kind: ClassVar[str] = "STRING"

    def _dump_fields(self, dump):
        return {}


@dataclass(eq=False)
class LiteralType(ASTNode):
    """
    A raw JSON value, typically one member of an ``enum``.

    Attributes:
        value: The literal value (string, number, boolean, None, list or dict)
    """

    kind: ClassVar[str] = "LITERAL"

    value: Any = None

    def _dump_fields(self, dump):
        return {"value": self.value}


@dataclass(eq=False)
class ArrayType(ASTNode):
    """
    Homogeneous array.

    Attributes:
        element: Type shared by every item of the array
    """

    kind: ClassVar[str] = "ARRAY"

    element: Optional[ASTNode] = None

    def _dump_fields(self, dump):
        return {"element": dump(self.element) if self.element is not None else None}


@dataclass(eq=False)
class TupleType(ASTNode):
    """
    Fixed-position array, from a list-valued ``items``.

    Attributes:
        elements: One type per position
    """

    kind: ClassVar[str] = "TUPLE"

    elements: List[ASTNode] = field(default_factory=list)

    def _dump_fields(self, dump):
        return {"elements": [dump(e) for e in self.elements]}


@dataclass(eq=False)
class UnionType(ASTNode):
    """
    Value matching any one of several types.

    Attributes:
        members: Alternative types, in schema order
    """

    kind: ClassVar[str] = "UNION"

    members: List[ASTNode] = field(default_factory=list)

    def _dump_fields(self, dump):
        return {"members": [dump(m) for m in self.members]}


@dataclass(eq=False)
class IntersectionType(ASTNode):
    """
    Value matching all of several types, from ``allOf``.

    Attributes:
        members: Combined types, in schema order
    """

    kind: ClassVar[str] = "INTERSECTION"

    members: List[ASTNode] = field(default_factory=list)

    def _dump_fields(self, dump):
        return {"members": [dump(m) for m in self.members]}


@dataclass(eq=False)
class EnumMember:
    """
    One labelled member of an EnumType.

    Attributes:
        label: Declared label (from ``tsEnumNames``)
        ast: Literal node holding the member's value
    """

    label: str
    ast: ASTNode


@dataclass(eq=False)
class EnumType(ASTNode):
    """
    Labelled enumeration. Always carries a standalone name.

    Attributes:
        members: Ordered (label, literal) pairs
    """

    kind: ClassVar[str] = "ENUM"

    members: List[EnumMember] = field(default_factory=list)

    def _dump_fields(self, dump):
        return {"members": [{"label": m.label, "ast": dump(m.ast)} for m in self.members]}


@dataclass(eq=False)
class InterfaceParam:
    """
    One member of an InterfaceType.

    Attributes:
        ast: Type of the member
        key_name: Property name, pattern, definition key or ``[k: string]``
        is_required: Whether the key is listed in the schema's ``required``
        is_pattern_property: Whether the member came from ``patternProperties``
        is_unreachable_definition: Whether the member is a harvested
            ``definitions`` entry emitted only on request
    """

    ast: ASTNode
    key_name: str
    is_required: bool = False
    is_pattern_property: bool = False
    is_unreachable_definition: bool = False


@dataclass(eq=False)
class InterfaceType(ASTNode):
    """
    Object type with ordered members and named supertypes.

    Attributes:
        properties: Members in emission order (declared properties, pattern
            properties, unreachable definitions, index signature)
        super_types: Interfaces this one extends; each has a standalone name
    """

    kind: ClassVar[str] = "INTERFACE"

    properties: List[InterfaceParam] = field(default_factory=list)
    super_types: List[ASTNode] = field(default_factory=list)

    def _dump_fields(self, dump):
        return {
            "properties": [
                {
                    "keyName": p.key_name,
                    "isRequired": p.is_required,
                    "isPatternProperty": p.is_pattern_property,
                    "isUnreachableDefinition": p.is_unreachable_definition,
                    "ast": dump(p.ast),
                }
                for p in self.properties
            ],
            "superTypes": [dump(s) for s in self.super_types],
        }


def has_standalone_name(ast: ASTNode) -> bool:
    """Check whether a node will be emitted as a named declaration."""
    return bool(ast.standalone_name)


def count_nodes(ast: ASTNode) -> int:
    """Count the distinct AST nodes reachable from ``ast``."""
    seen: Set[int] = set()
    stack: List[ASTNode] = [ast]
    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        # Dumping with a collector only gathers the direct children
        node._dump_fields(stack.append)
    return len(seen)


def ast_to_dict(ast: ASTNode) -> Dict[str, Any]:
    """
    Convert an AST into a JSON-compatible structure.

    Each node is expanded the first time it is met. Later occurrences of the
    same node object (shared subtrees and cycles) are written as
    ``{"$ref": <standalone name>}``, or ``{"$ref": "#cycle"}`` for unnamed
    nodes, so cyclic ASTs serialize to a finite document.

    Args:
        ast: Root node

    Returns:
        Dict: Serializable representation of the tree

    Example:
        ```python
        ast = parse({"title": "Node", "properties": {"next": ...}})
        json.dumps(ast_to_dict(ast), indent=2)
        ```
    """
    seen: Set[int] = set()

    def dump(node: ASTNode) -> Dict[str, Any]:
        if id(node) in seen:
            return {"$ref": node.standalone_name or "#cycle"}
        seen.add(id(node))

        result: Dict[str, Any] = {"type": node.kind}
        if node.standalone_name is not None:
            result["standaloneName"] = node.standalone_name
        if node.key_name is not None:
            result["keyName"] = node.key_name
        if node.comment is not None:
            result["comment"] = node.comment
        result.update(node._dump_fields(dump))
        return result

    with recursion_headroom(count_nodes(ast)):
        return dump(ast)
