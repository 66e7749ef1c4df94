"""
Frontmatter block detection, parsing and serialization.

A document has frontmatter when it starts with a ``---`` line and a later
line is exactly ``---``. Everything between the two is YAML.
"""

import logging
import re
from typing import Any, Dict, Tuple
import yaml

from frontvars.exceptions import FrontmatterParseError, FrontmatterSerializationError


logger = logging.getLogger(__name__)

# ---\n--- with optional trailing newline, either line ending
EMPTY_BLOCK = re.compile(r'\A---\r?\n---(?:\r?\n|\Z)')

# Opening ---, content, closing --- on its own line
BLOCK = re.compile(r'\A---\r?\n(.*?)\r?\n---(?:\r?\n|\Z)', re.DOTALL)

# Implicit tags dropped so frontmatter reads the way it is written:
# yes/no/on/off stay strings (true/false remain booleans), dates stay strings
_BOOL_TAG = 'tag:yaml.org,2002:bool'
_TIMESTAMP_TAG = 'tag:yaml.org,2002:timestamp'
_WORD_BOOL_INITIALS = frozenset('yYnNoO')


def _strip_implicit_resolvers(cls):
    """Give *cls* its own copy of the implicit resolvers without word booleans and timestamps."""
    resolvers = {}
    for initial, entries in cls.yaml_implicit_resolvers.items():
        kept = []
        for tag, regexp in entries:
            if tag == _TIMESTAMP_TAG:
                continue
            if tag == _BOOL_TAG and initial in _WORD_BOOL_INITIALS:
                continue
            kept.append((tag, regexp))
        resolvers[initial] = kept
    cls.yaml_implicit_resolvers = resolvers
    return cls


@_strip_implicit_resolvers
class FrontmatterLoader(yaml.SafeLoader):
    """Safe YAML loader that keeps yes/no/on/off and dates as strings."""
    pass


@_strip_implicit_resolvers
class FrontmatterDumper(yaml.SafeDumper):
    """Safe YAML dumper matching FrontmatterLoader's implicit typing."""
    pass


def has_frontmatter(text: str) -> bool:
    """Return True if *text* opens a frontmatter block."""
    return text.startswith('---')


def find_block_end(text: str) -> int:
    """
    Return the offset just past the frontmatter block.

    Args:
        text: Full document text

    Returns:
        Length of the frontmatter block including its closing line, or 0
        when the document has no (complete) frontmatter
    """
    if not has_frontmatter(text):
        return 0

    match = EMPTY_BLOCK.match(text)
    if match:
        return match.end()

    match = BLOCK.match(text)
    if not match:
        return 0
    return match.end()


def split_document(text: str) -> Tuple[str, str]:
    """Split *text* into (frontmatter block, body)."""
    end = find_block_end(text)
    return text[:end], text[end:]


def load_block(text: str) -> Dict[str, Any]:
    """
    Parse the frontmatter of a document, failing loudly.

    Used before a write: a block that exists but cannot be read must not be
    replaced by one built from nothing.

    Args:
        text: Full document text

    Returns:
        Parsed frontmatter mapping (empty if the document has none)

    Raises:
        FrontmatterParseError: If the block is not valid YAML or not a mapping
    """
    if not has_frontmatter(text) or EMPTY_BLOCK.match(text):
        return {}

    match = BLOCK.match(text)
    if not match:
        return {}

    try:
        data = yaml.load(match.group(1), Loader=FrontmatterLoader)
    except yaml.YAMLError as e:
        raise FrontmatterParseError(f"YAML parse error in frontmatter: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontmatterParseError(f"Frontmatter must be a mapping, got {type(data).__name__}")
    return data


def parse(text: str) -> Dict[str, Any]:
    """
    Parse the frontmatter of a document.

    Parse problems are logged and yield an empty mapping; they never reach
    the caller.

    Args:
        text: Full document text

    Returns:
        Parsed frontmatter mapping (empty if none or invalid)
    """
    try:
        return load_block(text)
    except FrontmatterParseError as e:
        logger.warning(str(e))
        return {}


def dump(data: Dict[str, Any]) -> str:
    """
    Render *data* as YAML block text.

    Raises:
        FrontmatterSerializationError: If the data cannot be represented
    """
    try:
        return yaml.dump(
            data,
            Dumper=FrontmatterDumper,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True
        )
    except yaml.YAMLError as e:
        raise FrontmatterSerializationError(f"Failed to serialize frontmatter: {e}") from e


def serialize_block(data: Dict[str, Any]) -> str:
    """Render *data* as a complete ``---`` delimited frontmatter block."""
    return f"---\n{dump(data)}---\n"
