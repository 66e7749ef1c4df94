"""
Write-side path handling: set a value at a dotted/indexed path.

Intermediate containers are created as needed. A node of the wrong kind in
the way is replaced (last writer wins, no merging). The whole path is
validated before anything is touched, so a refused path leaves the data
exactly as it was.
"""

import logging
from typing import Any, Dict, List

from ..security import MAX_ARRAY_INDEX, index_in_bounds, is_forbidden_key
from .resolver import NodeKind, PathSegment, node_kind, parse_path, resolve_key


logger = logging.getLogger(__name__)


def validate_segments(segments: List[PathSegment]) -> bool:
    """Return True if every segment may be written."""
    for segment in segments:
        if not segment.key:
            logger.debug("Refusing write through an empty path segment")
            return False
        if is_forbidden_key(segment.key):
            logger.debug(f"Refusing write through forbidden key '{segment.key}'")
            return False
        if segment.is_indexed and not index_in_bounds(segment.index):
            logger.warning(
                f"Array index {segment.index} exceeds maximum allowed ({MAX_ARRAY_INDEX})"
            )
            return False
    return True


def is_writable_path(path: str, nested: bool = True) -> bool:
    """Return True if set_at_path would accept *path*."""
    if not nested:
        if not path or is_forbidden_key(path):
            logger.debug(f"Refusing write to key '{path}'")
            return False
        return True
    return validate_segments(parse_path(path))


def set_at_path(
    root: Dict[Any, Any],
    path: str,
    value: Any,
    case_insensitive: bool = False,
    nested: bool = True
) -> bool:
    """
    Set *value* at *path* inside *root*, in place.

    Args:
        root: Mapping to mutate
        path: Dotted/indexed path such as "a.items[2].b"
        value: Value to store at the terminal segment
        case_insensitive: Reuse an existing key that matches ignoring case
        nested: When False the whole path is a single key

    Returns:
        True if the value was written, False if the path was refused
    """
    if node_kind(root) is not NodeKind.MAPPING:
        return False

    if not is_writable_path(path, nested):
        return False

    if not nested:
        key = resolve_key(root, path, case_insensitive)
        root[path if key is None else key] = value
        return True

    segments = parse_path(path)
    current = root
    for segment in segments[:-1]:
        key = _existing_key(current, segment.key, case_insensitive)
        if segment.is_indexed:
            items = _ensure_sequence(current, key)
            while len(items) <= segment.index:
                items.append({})
            if node_kind(items[segment.index]) is not NodeKind.MAPPING:
                items[segment.index] = {}
            current = items[segment.index]
        else:
            if node_kind(current.get(key)) is not NodeKind.MAPPING:
                current[key] = {}
            current = current[key]

    last = segments[-1]
    key = _existing_key(current, last.key, case_insensitive)
    if last.is_indexed:
        items = _ensure_sequence(current, key)
        while len(items) <= last.index:
            items.append(None)
        items[last.index] = value
    else:
        current[key] = value

    return True


def _existing_key(node: Dict[Any, Any], name: str, case_insensitive: bool) -> Any:
    """Return the stored key for *name* if present, otherwise *name* itself."""
    key = resolve_key(node, name, case_insensitive)
    return name if key is None else key


def _ensure_sequence(node: Dict[Any, Any], key: Any) -> List[Any]:
    """Make node[key] a list (replacing anything else) and return it."""
    if not isinstance(node.get(key), list):
        node[key] = []
    return node[key]
