"""
Standalone name allocation.

Every node that should become its own declaration gets a document-unique
identifier. Names come from the schema's ``title``, then its ``id``, then a
caller-supplied fallback (a definitions key, or the property key for enums).
Allocation is order dependent: the first node to claim a name gets it
verbatim, later claimants get a numbered variant. Nodes sharing a declared
``id`` always resolve to the same name.

Usage:
    ```python
    used_names = set()
    names_by_id = {}

    standalone_name({"title": "user"}, None, used_names, names_by_id)   # "User"
    standalone_name({"title": "user"}, None, used_names, names_by_id)   # "User1"
    standalone_name({}, None, used_names, names_by_id)                  # None
    ```
"""

import logging
import re
import unicodedata
from typing import Any, Dict, Optional, Set

logger = logging.getLogger(__name__)

DEFAULT_NAME = "NoName"

_INVALID_CHARS = re.compile(r"(^\s*[^a-zA-Z_$])|([^a-zA-Z_$\d])")
_LEADING_UNDERSCORE = re.compile(r"^_[a-z]")
_SNAKE_SEGMENT = re.compile(r"_[a-z]")
_AFTER_DIGITS = re.compile(r"([\d$]+[a-zA-Z])")
_WORD_START = re.compile(r"\s+([a-zA-Z])")
_WHITESPACE = re.compile(r"\s")


def _deburr(value: str) -> str:
    """Replace accented letters by their basic latin counterparts."""
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def to_safe_string(value: str) -> str:
    """
    Convert an arbitrary string into a PascalCase identifier.

    Args:
        value: Raw title, id or key

    Returns:
        str: Identifier made of letters, digits, ``_`` and ``$`` (may be empty)

    Example:
        ```python
        to_safe_string("my-type")      # "MyType"
        to_safe_string("snake_case")   # "SnakeCase"
        to_safe_string("Café")         # "Cafe"
        ```
    """
    text = _deburr(value)
    text = _INVALID_CHARS.sub(" ", text)
    text = _LEADING_UNDERSCORE.sub(lambda m: m.group(0).upper(), text)
    text = _SNAKE_SEGMENT.sub(lambda m: m.group(0)[1:].upper(), text)
    text = _AFTER_DIGITS.sub(lambda m: m.group(0).upper(), text)
    text = _WORD_START.sub(lambda m: m.group(0).upper().strip(), text)
    text = _WHITESPACE.sub("", text)
    return text[:1].upper() + text[1:]


def generate_name(value: str, used_names: Set[str]) -> str:
    """
    Sanitize a name and make it unique within ``used_names``.

    The chosen name is added to ``used_names``.

    Args:
        value: Raw candidate
        used_names: Names already allocated in this document

    Returns:
        str: ``to_safe_string(value)``, with the smallest numeric suffix
        needed to make it unused
    """
    name = to_safe_string(value) or DEFAULT_NAME

    if name in used_names:
        counter = 1
        while f"{name}{counter}" in used_names:
            counter += 1
        name = f"{name}{counter}"

    used_names.add(name)
    return name


def standalone_name(
    schema: Dict[str, Any],
    fallback: Optional[str],
    used_names: Set[str],
    names_by_id: Dict[str, str]
) -> Optional[str]:
    """
    Compute a schema's standalone name using a series of fallbacks.

    Args:
        schema: Schema node being named
        fallback: Candidate used when the schema has neither title nor id
        used_names: Document-wide set of allocated names (updated)
        names_by_id: Declared id -> allocated name (updated)

    Returns:
        Optional[str]: Allocated name, or None if the node should be inlined
    """
    schema_id = schema.get("id")
    if schema_id and schema_id in names_by_id:
        return names_by_id[schema_id]

    candidate = schema.get("title") or schema_id or fallback
    if not candidate:
        return None

    name = generate_name(str(candidate), used_names)
    if schema_id:
        names_by_id[schema_id] = name

    logger.debug(f"Allocated name {name!r} from candidate {candidate!r}")
    return name
