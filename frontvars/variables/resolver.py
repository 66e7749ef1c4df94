"""
Key and path resolution into parsed frontmatter.

Frontmatter is plain YAML data: None, scalars (str/int/float/bool), lists
and dicts. ``node_kind`` names which of those a value is so the resolver
and mutator dispatch on an explicit kind rather than ad-hoc checks.

Paths use dots for nesting and ``name[index]`` for list elements:
``server.ip``, ``items[0]``, ``a.items[2].b``.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from ..security import index_in_bounds, is_forbidden_key


StructuredData = Union[None, str, int, float, bool, List[Any], Dict[Any, Any]]


class NodeKind(Enum):
    """Kind of a structured-data node."""
    NULL = "null"
    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


class _Absent:
    """Sentinel for a path that does not resolve."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'ABSENT'

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()

# Pattern for an indexed segment: identifier[index]
INDEXED_SEGMENT = re.compile(r'^([A-Za-z0-9_]+)\[([0-9]+)\]$')


def node_kind(value: Any) -> NodeKind:
    """Classify *value* as one of the structured-data node kinds."""
    if value is None:
        return NodeKind.NULL
    if isinstance(value, dict):
        return NodeKind.MAPPING
    if isinstance(value, (list, tuple)):
        return NodeKind.SEQUENCE
    return NodeKind.SCALAR


@dataclass(frozen=True)
class PathSegment:
    """One dotted component of a path, optionally indexed."""
    key: str
    index: Optional[int] = None

    @property
    def is_indexed(self) -> bool:
        return self.index is not None


def parse_path(path: str) -> List[PathSegment]:
    """
    Split a dotted path into segments.

    Args:
        path: Path like "a.items[2].b"

    Returns:
        List of PathSegment, one per dot-separated component
    """
    segments = []
    for part in path.split('.'):
        match = INDEXED_SEGMENT.match(part)
        if match:
            segments.append(PathSegment(key=match.group(1), index=int(match.group(2))))
        else:
            segments.append(PathSegment(key=part))
    return segments


def resolve_key(node: Any, name: str, case_insensitive: bool = False) -> Optional[Any]:
    """
    Find the key in *node* that *name* refers to.

    Forbidden names never resolve. An exact match wins; with
    *case_insensitive* the first key equal ignoring case is returned.

    Args:
        node: Node to look in (only mappings resolve)
        name: Requested property name
        case_insensitive: Whether to fall back to case-insensitive matching

    Returns:
        The matching key as stored in *node*, or None
    """
    if node_kind(node) is not NodeKind.MAPPING:
        return None
    if is_forbidden_key(name):
        return None

    if name in node:
        return name
    # YAML may produce non-string keys (e.g. 2024: ...); match their text form
    for key in node:
        if not isinstance(key, str) and str(key) == name:
            return key

    if case_insensitive:
        lowered = name.lower()
        for key in node:
            if str(key).lower() == lowered:
                return key

    return None


def resolve_path(
    root: Any,
    path: str,
    case_insensitive: bool = False,
    nested: bool = True
) -> Any:
    """
    Resolve a dotted/indexed path in *root*.

    Args:
        root: Parsed frontmatter
        path: Path to resolve
        case_insensitive: Case-insensitive key matching
        nested: When False the whole path is treated as a single key

    Returns:
        The value found (lists and dicts are returned as-is), or ABSENT
    """
    if root is None:
        return ABSENT

    if not nested:
        key = resolve_key(root, path, case_insensitive)
        return ABSENT if key is None else root[key]

    current = root
    for segment in parse_path(path):
        if current is None:
            return ABSENT

        key = resolve_key(current, segment.key, case_insensitive)
        if key is None:
            return ABSENT
        current = current[key]

        if segment.is_indexed:
            if node_kind(current) is not NodeKind.SEQUENCE:
                return ABSENT
            if not index_in_bounds(segment.index) or segment.index >= len(current):
                return ABSENT
            current = current[segment.index]

    return current


def is_blank(value: Any) -> bool:
    """Return True if a resolved value counts as missing (absent, None or '')."""
    return value is ABSENT or value is None or value == ''
