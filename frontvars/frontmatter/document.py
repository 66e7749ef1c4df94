"""
Document-level read and write flows.

Every operation re-parses frontmatter from the text it is given, so callers
always work against the current document rather than a cached copy.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from ..config import Settings
from ..exceptions import DocumentChangedError
from ..variables.mutator import set_at_path
from ..variables.substitution import ReplacementResult, VariableSubstitutor
from .codec import find_block_end, has_frontmatter, load_block, parse, serialize_block


logger = logging.getLogger(__name__)


def replace_in_body(
    text: str,
    settings: Optional[Settings] = None,
    substitutor: Optional[VariableSubstitutor] = None
) -> Tuple[str, ReplacementResult]:
    """
    Replace placeholders in the body of a document.

    The frontmatter block is kept byte-for-byte.

    Args:
        text: Full document text
        settings: Settings to use
        substitutor: Existing substitutor (its settings win over *settings*)

    Returns:
        (new document text, ReplacementResult for the body)
    """
    substitutor = substitutor or VariableSubstitutor(settings)
    end = find_block_end(text)
    result = substitutor.substitute(text[end:], parse(text))
    return text[:end] + result.text, result


def replace_in_lines(
    text: str,
    start: int,
    end: int,
    settings: Optional[Settings] = None,
    substitutor: Optional[VariableSubstitutor] = None
) -> Tuple[str, ReplacementResult]:
    """
    Replace placeholders on lines *start* to *end* of a document only.

    Lines are 1-based and inclusive, counted over the whole document.
    A range past the end of the text selects nothing.

    Returns:
        (new document text, ReplacementResult for the selected lines)
    """
    substitutor = substitutor or VariableSubstitutor(settings)
    lines = text.split('\n')
    first = max(start, 1) - 1

    result = substitutor.substitute('\n'.join(lines[first:end]), parse(text))
    if not result.found_any:
        return text, result

    return '\n'.join(lines[:first] + [result.text] + lines[end:]), result


def update_frontmatter(
    text: str,
    updates: Mapping[str, Any],
    settings: Optional[Settings] = None
) -> str:
    """
    Write *updates* (path -> value) into the frontmatter of *text*.

    Args:
        text: Full document text
        updates: Values to set, keyed by variable path
        settings: Settings (nested/case-insensitive handling)

    Returns:
        New document text; *text* itself when every path was refused

    Raises:
        FrontmatterParseError: If the existing block cannot be read
        FrontmatterSerializationError: If the updated data cannot be written;
            *text* is left untouched in that case
    """
    settings = settings or Settings()
    data = load_block(text)

    written = 0
    for path, value in updates.items():
        accepted = set_at_path(
            data,
            path,
            value,
            case_insensitive=settings.case_insensitive,
            nested=settings.support_nested_properties
        )
        if accepted:
            written += 1
        else:
            logger.warning(f"Refused to write frontmatter path '{path}'")

    if not written:
        return text

    block = serialize_block(data)

    if has_frontmatter(text):
        return block + text[find_block_end(text):]
    return block + text


def frontmatter_keys(data: Optional[Dict[str, Any]]) -> list:
    """Sorted top-level key names of parsed frontmatter."""
    return sorted(str(key) for key in (data or {}))


def apply_variable_changes(
    text: str,
    snapshot: Optional[Dict[str, Any]],
    updates: Mapping[str, Any],
    settings: Optional[Settings] = None
) -> str:
    """
    Apply edits made against an earlier frontmatter snapshot.

    The frontmatter is re-read from *text*; if its top-level keys no longer
    match the snapshot the document changed underneath the edit and nothing
    is written.

    Raises:
        DocumentChangedError: If the top-level keys differ from the snapshot
        FrontmatterSerializationError: If the updated data cannot be written
    """
    expected = frontmatter_keys(snapshot)
    current = frontmatter_keys(parse(text))
    if expected != current:
        raise DocumentChangedError(expected, current)

    return update_frontmatter(text, updates, settings)
