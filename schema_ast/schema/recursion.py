"""
Recursion limit management for deep documents.

The parser, dereferencer and definitions harvester all walk a document by
plain recursion, several Python frames per nested node. Their depth is
bounded by the number of distinct nodes they can reach, so a walk is made
safe by raising the interpreter's recursion limit by that bound for the
duration of the call.

Usage:
    ```python
    with recursion_headroom(count_containers(schema)):
        ast = build(schema)
    ```
"""

import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator, List, Set

logger = logging.getLogger(__name__)

# Upper bound of frames any walker spends per nested node
FRAMES_PER_NODE = 8


def count_containers(document: Any) -> int:
    """Count the distinct dicts and lists reachable from ``document``."""
    seen: Set[int] = set()
    stack: List[Any] = [document]
    while stack:
        node = stack.pop()
        if not isinstance(node, (dict, list)) or id(node) in seen:
            continue
        seen.add(id(node))
        stack.extend(node.values() if isinstance(node, dict) else node)
    return len(seen)


@contextmanager
def recursion_headroom(size: int) -> Iterator[None]:
    """
    Raise the recursion limit enough to recursively walk ``size`` nodes.

    The previous limit is restored on exit. The limit is never lowered.

    Args:
        size: Number of distinct nodes the walk can nest through
    """
    previous = sys.getrecursionlimit()
    required = previous + FRAMES_PER_NODE * size
    if required > previous:
        logger.debug(f"Raising recursion limit from {previous} to {required}")
        sys.setrecursionlimit(required)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)
