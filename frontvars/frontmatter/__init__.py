"""
Frontmatter module.
Locates, parses and rewrites the YAML block at the top of a document.
"""

from .codec import find_block_end, load_block, parse, serialize_block, split_document
from .document import apply_variable_changes, replace_in_body, replace_in_lines, update_frontmatter

__all__ = [
    'find_block_end',
    'load_block',
    'parse',
    'serialize_block',
    'split_document',
    'apply_variable_changes',
    'replace_in_body',
    'replace_in_lines',
    'update_frontmatter',
]
