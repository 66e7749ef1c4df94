"""
Key and index guards applied to every frontmatter read and write.

- Names that could reach an object's internals are refused outright,
  compared case-insensitively.
- Array indices are capped so a typo or hostile path cannot allocate
  an unbounded list.
"""

from typing import Any

FORBIDDEN_KEYS = frozenset({'__proto__', 'constructor', 'prototype'})

MAX_ARRAY_INDEX = 1000

# Host metadata keys that are never listed as data-only variables
RESERVED_METADATA_KEYS = frozenset({'position', 'cssclasses', 'tags', 'aliases'})


def is_forbidden_key(name: Any) -> bool:
    """Return True if *name* is one of the forbidden key names (any case)."""
    return str(name).lower() in FORBIDDEN_KEYS


def index_in_bounds(index: int) -> bool:
    """Return True if *index* is a permitted array index."""
    return 0 <= index <= MAX_ARRAY_INDEX
