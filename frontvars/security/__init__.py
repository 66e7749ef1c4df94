"""Security module for key and index guards."""

from .keys import (
    FORBIDDEN_KEYS,
    MAX_ARRAY_INDEX,
    RESERVED_METADATA_KEYS,
    is_forbidden_key,
    index_in_bounds,
)

__all__ = [
    'FORBIDDEN_KEYS',
    'MAX_ARRAY_INDEX',
    'RESERVED_METADATA_KEYS',
    'is_forbidden_key',
    'index_in_bounds',
]
