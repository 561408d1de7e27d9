"""
JSON Schema parser - converts dereferenced JSON Schema documents to an AST.

This module is the main entry point for turning a schema document into the
typed AST consumed by declaration renderers. It handles:
    - Kind dispatch (primitives, arrays, tuples, unions, intersections, enums)
    - Interfaces with required/optional, pattern and index-signature members
    - Multiple inheritance through ``extends``
    - Recursive schemas, via an identity-keyed cache of partially built nodes
    - Document-wide unique names for nodes emitted as declarations

Usage:
    ```python
    from schema_ast.schema import parse

    schema = {
        "title": "Person",
        "type": "object",
        "properties": {
            "name": {"type": "string"},
            "friends": {"type": "array", "items": {"$ref": "#"}}
        },
        "required": ["name"],
        "additionalProperties": False
    }

    ast = parse(dereference(schema))
    ast.standalone_name                                  # "Person"
    ast.properties[1].ast.element is ast                 # True
    ```

Cycle handling:
    A node's AST object is created and cached *before* any child is parsed.
    A child that leads back to the node receives that same object, which is
    completed in place once the parent's fields are computed.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

from typing_extensions import assert_never

from schema_ast.schema.definitions import find_definition_key, index_definitions
from schema_ast.schema.dereference import dereference
from schema_ast.schema.errors import (
    EnumLabelMismatchError,
    MissingSuperTypeNameError,
    UnresolvedReferenceError,
)
from schema_ast.schema.kinds import SchemaKind, classify
from schema_ast.schema.naming import standalone_name
from schema_ast.schema.recursion import count_containers, recursion_headroom
from schema_ast.schema.types import (
    AnyType,
    ArrayType,
    ASTNode,
    BooleanType,
    EnumMember,
    EnumType,
    InterfaceParam,
    InterfaceType,
    IntersectionType,
    LiteralType,
    NullType,
    NumberType,
    StringType,
    TupleType,
    UnionType,
    has_standalone_name,
)

logger = logging.getLogger(__name__)

INDEX_SIGNATURE_KEY = "[k: string]"
ENUM_FALLBACK_NAME = "Enum"

_NODE_CLASSES = {
    SchemaKind.ALL_OF: IntersectionType,
    SchemaKind.ANY: AnyType,
    SchemaKind.ANY_OF: UnionType,
    SchemaKind.BOOLEAN: BooleanType,
    SchemaKind.NAMED_ENUM: EnumType,
    SchemaKind.NAMED_SCHEMA: InterfaceType,
    SchemaKind.NULL: NullType,
    SchemaKind.NUMBER: NumberType,
    SchemaKind.ONE_OF: UnionType,
    SchemaKind.STRING: StringType,
    SchemaKind.UNION: UnionType,
    SchemaKind.UNNAMED_ENUM: UnionType,
    SchemaKind.UNNAMED_SCHEMA: InterfaceType,
    SchemaKind.UNTYPED_ARRAY: ArrayType,
}


@dataclass
class ParserOptions:
    """
    Parser configuration.

    Attributes:
        unreachable_definitions: Also emit each interface's own
            ``definitions`` as members, even when nothing references them
    """

    unreachable_definitions: bool = False


@dataclass
class ParseContext:
    """
    State shared by every recursive call of one top-level parse.

    A fresh context is created per document. It must never be reused across
    documents or shared between threads.

    Attributes:
        processed: ``id(schema)`` -> (schema, AST). The schema is kept so its
            id cannot be recycled while the parse is running.
        used_names: Every standalone name allocated so far
        names_by_id: Declared schema id -> allocated name
        definitions: ``id(root)`` -> (root, definitions index) for each root
            seen during this parse
    """

    processed: Dict[int, Tuple[Any, ASTNode]] = field(default_factory=dict)
    used_names: Set[str] = field(default_factory=set)
    names_by_id: Dict[str, str] = field(default_factory=dict)
    definitions: Dict[int, Tuple[Any, Dict[int, str]]] = field(default_factory=dict)

    def lookup(self, schema: Any) -> Optional[ASTNode]:
        """Return the AST already built (or being built) for ``schema``."""
        entry = self.processed.get(id(schema))
        return entry[1] if entry is not None else None

    def remember(self, schema: Any, ast: ASTNode) -> None:
        self.processed[id(schema)] = (schema, ast)

    def definition_key(self, root_schema: Any, schema: Any) -> Optional[str]:
        """Find the definitions key ``schema`` was declared under in ``root_schema``."""
        entry = self.definitions.get(id(root_schema))
        if entry is None:
            entry = (root_schema, index_definitions(root_schema))
            self.definitions[id(root_schema)] = entry
        return find_definition_key(entry[1], schema)


def parse(
    schema: Any,
    options: Optional[ParserOptions] = None,
    root_schema: Any = None,
    key_name: Optional[str] = None,
    is_schema: bool = True,
    context: Optional[ParseContext] = None
) -> ASTNode:
    """
    Parse a dereferenced schema (or literal value) into an AST node.

    This is the main entry point. Call it with just the document; the other
    arguments are used by the recursion.

    Args:
        schema: Schema node, or a raw value when ``is_schema`` is False
        options: Parser configuration (defaults to ParserOptions())
        root_schema: Document whose definitions provide naming fallbacks
            (defaults to ``schema``)
        key_name: Property name under which the node was reached
        is_schema: False to wrap ``schema`` as a literal value
        context: Caches shared across the recursion (fresh if omitted)

    Returns:
        ASTNode: Root of the AST

    Raises:
        UnresolvedReferenceError: If a ``$ref`` node is encountered
        MissingSuperTypeNameError: If an ``extends`` target cannot be named
        EnumLabelMismatchError: If ``tsEnumNames`` and ``enum`` differ in length

    Example:
        ```python
        ast = parse({"type": ["string", "null"]})
        [m.kind for m in ast.members]   # ["STRING", "NULL"]
        ```
    """
    if options is None:
        options = ParserOptions()
    if context is None:
        logger.info("Parsing schema document")
        with recursion_headroom(count_containers(schema)):
            return parse(schema, options, root_schema, key_name, is_schema, ParseContext())
    if root_schema is None:
        root_schema = schema

    if is_schema and not isinstance(schema, dict):
        # Boolean schemas and other non-mapping nodes accept anything. Never
        # cached: True and False are the same objects as enum literals
        return AnyType(key_name=key_name)

    cached = context.lookup(schema)
    if cached is not None:
        logger.debug(f"Cache hit for {cached.kind} (key: {key_name})")
        return cached

    key_name_from_definition = context.definition_key(root_schema, schema)

    if not is_schema:
        return _parse_literal(schema, key_name, key_name_from_definition, context)

    return _parse_non_literal(
        schema, options, root_schema, key_name, key_name_from_definition, context
    )


def _parse_literal(
    value: Any,
    key_name: Optional[str],
    key_name_from_definition: Optional[str],
    context: ParseContext
) -> LiteralType:
    """
    Wrap a raw value into a LiteralType.

    Literals are named only from a definitions key, never from title or id,
    since they are data rather than schemas.
    """
    ast = LiteralType(
        value=value,
        key_name=key_name,
        standalone_name=key_name_from_definition,
    )
    context.remember(value, ast)
    return ast


def _parse_non_literal(
    schema: Dict[str, Any],
    options: ParserOptions,
    root_schema: Any,
    key_name: Optional[str],
    key_name_from_definition: Optional[str],
    context: ParseContext
) -> ASTNode:
    """
    Classify a schema node and build the matching AST variant.

    Args:
        schema: Schema node
        options: Parser configuration
        root_schema: Document root for definitions lookups
        key_name: Inbound property name
        key_name_from_definition: Definitions key naming this node, if any
        context: Shared caches

    Returns:
        ASTNode: The (cached) node for ``schema``
    """
    kind = classify(schema)
    logger.debug(f"Parsing {kind.value} (key: {key_name})")

    if kind is SchemaKind.REFERENCE:
        raise UnresolvedReferenceError(
            f"Refs should have been resolved before parsing: {schema.get('$ref')!r}", schema
        )

    if kind is SchemaKind.TYPED_ARRAY:
        node_class = TupleType if isinstance(schema["items"], list) else ArrayType
    else:
        node_class = _NODE_CLASSES[kind]

    # Cache before recursing so cycles resolve to this object
    ast = node_class(comment=schema.get("description"), key_name=key_name)
    context.remember(schema, ast)

    def child(sub_schema: Any, child_key: Optional[str] = None, is_child_schema: bool = True) -> ASTNode:
        return parse(sub_schema, options, root_schema, child_key, is_child_schema, context)

    def name(fallback: Optional[str]) -> Optional[str]:
        return standalone_name(schema, fallback, context.used_names, context.names_by_id)

    # Interfaces are named before their members, every other kind after its children
    if kind is SchemaKind.NAMED_SCHEMA or kind is SchemaKind.UNNAMED_SCHEMA:
        _build_interface(ast, schema, options, root_schema, key_name_from_definition, context)

    elif kind is SchemaKind.NAMED_ENUM:
        values = schema["enum"]
        labels = schema["tsEnumNames"]
        if len(labels) != len(values):
            raise EnumLabelMismatchError(
                f"tsEnumNames has {len(labels)} label(s) but enum has {len(values)} value(s)", schema
            )
        ast.members = [
            EnumMember(label=label, ast=child(value, is_child_schema=False))
            for label, value in zip(labels, values)
        ]
        ast.standalone_name = name(key_name or key_name_from_definition or ENUM_FALLBACK_NAME)

    elif kind is SchemaKind.UNNAMED_ENUM:
        ast.members = [child(value, is_child_schema=False) for value in schema["enum"]]
        ast.standalone_name = name(key_name_from_definition)

    elif kind is SchemaKind.ALL_OF:
        ast.members = [child(s) for s in schema["allOf"]]
        ast.standalone_name = name(key_name_from_definition)

    elif kind is SchemaKind.ANY_OF:
        ast.members = [child(s) for s in schema["anyOf"]]
        ast.standalone_name = name(key_name_from_definition)

    elif kind is SchemaKind.ONE_OF:
        ast.members = [child(s) for s in schema["oneOf"]]
        ast.standalone_name = name(key_name_from_definition)

    elif kind is SchemaKind.UNION:
        ast.members = [child({"type": type_name}) for type_name in schema["type"]]
        ast.standalone_name = name(key_name_from_definition)

    elif kind is SchemaKind.TYPED_ARRAY:
        if isinstance(ast, TupleType):
            ast.elements = [child(s) for s in schema["items"]]
        else:
            ast.element = child(schema["items"])
        ast.standalone_name = name(key_name_from_definition)

    elif kind is SchemaKind.UNTYPED_ARRAY:
        ast.element = AnyType()
        ast.standalone_name = name(key_name_from_definition)

    elif kind in (
        SchemaKind.ANY,
        SchemaKind.BOOLEAN,
        SchemaKind.NULL,
        SchemaKind.NUMBER,
        SchemaKind.STRING,
    ):
        ast.standalone_name = name(key_name_from_definition)

    else:
        assert_never(kind)

    return ast


def _build_interface(
    ast: InterfaceType,
    schema: Dict[str, Any],
    options: ParserOptions,
    root_schema: Any,
    key_name_from_definition: Optional[str],
    context: ParseContext
) -> None:
    """
    Fill an InterfaceType from an object schema.

    The interface's own name is resolved first, before any child is parsed,
    so that cross-reference comments and cyclic references can use it.

    Args:
        ast: Cached, partially built interface node (filled in place)
        schema: Object schema
        options: Parser configuration
        root_schema: Document root for definitions lookups
        key_name_from_definition: Naming fallback
        context: Shared caches
    """
    ast.standalone_name = standalone_name(
        schema, key_name_from_definition, context.used_names, context.names_by_id
    )
    parent_name = ast.standalone_name or ast.key_name or "(anonymous)"
    ast.properties = _parse_members(schema, options, root_schema, context, parent_name)
    ast.super_types = _parse_super_types(schema, options, root_schema, context)


def _parse_super_types(
    schema: Dict[str, Any],
    options: ParserOptions,
    root_schema: Any,
    context: ParseContext
) -> List[ASTNode]:
    """
    Parse the ``extends`` keyword (absent, one schema, or a list of schemas).

    Each supertype is built as an interface rooted at itself and must end up
    with a standalone name, since supertypes cannot be inlined.

    Raises:
        MissingSuperTypeNameError: If a supertype has no derivable name
    """
    super_types = schema.get("extends")
    if not super_types:
        return []
    if not isinstance(super_types, list):
        super_types = [super_types]
    return [_parse_named_interface(s, options, root_schema, context) for s in super_types]


def _parse_named_interface(
    schema: Dict[str, Any],
    options: ParserOptions,
    root_schema: Any,
    context: ParseContext
) -> ASTNode:
    ast = context.lookup(schema)
    if ast is None:
        if classify(schema) is SchemaKind.REFERENCE:
            raise UnresolvedReferenceError(
                f"Refs should have been resolved before parsing: {schema.get('$ref')!r}", schema
            )
        logger.debug("Parsing supertype")
        ast = InterfaceType(comment=schema.get("description"))
        context.remember(schema, ast)
        # Named from the enclosing document's definitions, members resolved
        # against the supertype itself
        _build_interface(
            ast, schema, options, schema, context.definition_key(root_schema, schema), context
        )

    if not has_standalone_name(ast):
        raise MissingSuperTypeNameError("Supertype must have standalone name!", schema)
    return ast


def _parse_members(
    schema: Dict[str, Any],
    options: ParserOptions,
    root_schema: Any,
    context: ParseContext,
    parent_name: str
) -> List[InterfaceParam]:
    """
    Build an interface's ordered member list.

    Order: declared properties, pattern properties, unreachable definitions
    (when enabled), then the index signature from ``additionalProperties``.

    Args:
        schema: Object schema
        options: Parser configuration
        root_schema: Document root for definitions lookups
        context: Shared caches
        parent_name: Name used in cross-reference comments

    Returns:
        List[InterfaceParam]: Members in emission order
    """
    required = schema.get("required")
    if not isinstance(required, list):
        # draft 3 style boolean "required" on the property itself
        required = []

    def child(sub_schema: Any, key: str) -> ASTNode:
        return parse(sub_schema, options, root_schema, key, True, context)

    params = [
        InterfaceParam(
            ast=child(value, key),
            key_name=key,
            is_required=key in required,
        )
        for key, value in (schema.get("properties") or {}).items()
    ]

    for key, value in (schema.get("patternProperties") or {}).items():
        ast = child(value, key)
        _append_comment(
            ast,
            f"This interface was referenced by `{parent_name}`'s JSON-Schema definition\n"
            f"via the `patternProperty` \"{key}\".",
        )
        params.append(InterfaceParam(
            ast=ast,
            key_name=key,
            is_required=key in required,
            is_pattern_property=True,
        ))

    if options.unreachable_definitions:
        for key, value in (schema.get("definitions") or {}).items():
            ast = child(value, key)
            _append_comment(
                ast,
                f"This interface was referenced by `{parent_name}`'s JSON-Schema\n"
                f"via the `definition` \"{key}\".",
            )
            params.append(InterfaceParam(
                ast=ast,
                key_name=key,
                is_required=key in required,
                is_unreachable_definition=True,
            ))

    additional = schema.get("additionalProperties")
    if additional is None or additional is True:
        params.append(InterfaceParam(
            ast=AnyType(key_name=INDEX_SIGNATURE_KEY),
            key_name=INDEX_SIGNATURE_KEY,
            is_required=True,
        ))
    elif additional is not False:
        params.append(InterfaceParam(
            ast=child(additional, INDEX_SIGNATURE_KEY),
            key_name=INDEX_SIGNATURE_KEY,
            is_required=True,
        ))

    return params


def _append_comment(ast: ASTNode, comment: str) -> None:
    ast.comment = f"{ast.comment}\n\n{comment}" if ast.comment else comment


def parse_schema(schema: Any, options: Optional[ParserOptions] = None) -> ASTNode:
    """
    Dereference and parse a JSON Schema dict or a Pydantic model class.

    Convenience wrapper over ``dereference`` + ``parse`` for callers that
    hold a raw document with ``$ref`` pointers.

    Args:
        schema: JSON Schema dict, or a Pydantic BaseModel subclass
        options: Parser configuration

    Returns:
        ASTNode: Root of the AST

    Raises:
        DereferenceError: If a ``$ref`` cannot be resolved
        ValueError: If a class is given that is not a Pydantic model
    """
    if isinstance(schema, type):
        # Import here to avoid circular dependency
        from schema_ast.schema.pydantic_adapter import is_pydantic_model, pydantic_to_schema
        if not is_pydantic_model(schema):
            raise ValueError(f"{schema.__name__} is a class but not a Pydantic model")
        schema = pydantic_to_schema(schema)

    return parse(dereference(schema), options)
