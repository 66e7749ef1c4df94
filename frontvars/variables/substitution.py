"""
Placeholder substitution.
Replaces {{name}} / {{name:default}} occurrences with frontmatter values.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..config import Settings
from .pattern import Placeholder, PatternCompiler
from .resolver import NodeKind, is_blank, node_kind, resolve_path


logger = logging.getLogger(__name__)

COMPLEX_OBJECT_TEXT = '[Complex Object]'


@dataclass(frozen=True)
class ReplacementResult:
    """Outcome of one substitution call."""
    text: str
    replaced_count: int
    missing_count: int

    @property
    def found_any(self) -> bool:
        """True if the text contained at least one placeholder."""
        return self.replaced_count > 0 or self.missing_count > 0


def format_scalar(value: Any) -> str:
    """Render a scalar the way it reads in YAML."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    elif isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_mapping(value: Any) -> str:
    """Render a mapping as compact JSON."""
    try:
        return json.dumps(value, separators=(',', ':'), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        logger.debug(f"Could not serialize mapping value: {e}")
        return COMPLEX_OBJECT_TEXT


def format_element(value: Any) -> str:
    """Render one element of a joined sequence."""
    kind = node_kind(value)
    if kind is NodeKind.NULL:
        return ''
    elif kind is NodeKind.SEQUENCE:
        return ','.join(format_element(item) for item in value)
    elif kind is NodeKind.MAPPING:
        return format_mapping(value)
    return format_scalar(value)


def format_value(value: Any, join_separator: str = ', ') -> str:
    """
    Convert a resolved frontmatter value to replacement text.

    Args:
        value: Resolved value (not blank)
        join_separator: Separator used between sequence elements

    Returns:
        Text form of the value
    """
    kind = node_kind(value)
    if kind is NodeKind.SEQUENCE:
        return (join_separator or ', ').join(format_element(item) for item in value)
    elif kind is NodeKind.MAPPING:
        return format_mapping(value)
    return format_scalar(value)


class VariableSubstitutor:
    """
    Handles placeholder substitution in text.

    Resolution rules:
    - found and non-empty: formatted value
    - blank or absent with a default: the default text, verbatim
    - otherwise: missing_value_text, or the placeholder itself when
      preserve_original_on_missing is set
    """

    def __init__(self, settings: Optional[Settings] = None, compiler: Optional[PatternCompiler] = None):
        """
        Initialize the substitutor.

        Args:
            settings: Settings to use (defaults if omitted)
            compiler: Pattern compiler, shared with other components if given
        """
        self.settings = settings or Settings()
        self.compiler = compiler or PatternCompiler()

    def substitute(self, text: str, data: Optional[Dict[str, Any]]) -> ReplacementResult:
        """
        Substitute placeholders in *text* with values from *data*.

        Args:
            text: Text containing placeholders
            data: Parsed frontmatter

        Returns:
            ReplacementResult with the new text and counters
        """
        pieces = []
        position = 0
        replaced = 0
        missing = 0

        for placeholder in self.compiler.find(text, self.settings):
            pieces.append(text[position:placeholder.start])
            position = placeholder.end

            replacement = self._resolve_placeholder(placeholder, data)
            if replacement is None:
                missing += 1
                if self.settings.preserve_original_on_missing:
                    pieces.append(placeholder.full_match)
                else:
                    pieces.append(self.settings.missing_value_text)
            else:
                replaced += 1
                pieces.append(replacement)

        pieces.append(text[position:])

        return ReplacementResult(
            text=''.join(pieces),
            replaced_count=replaced,
            missing_count=missing
        )

    def _resolve_placeholder(self, placeholder: Placeholder, data: Optional[Dict[str, Any]]) -> Optional[str]:
        """Return replacement text for *placeholder*, or None if it is missing."""
        value = resolve_path(
            data,
            placeholder.name,
            case_insensitive=self.settings.case_insensitive,
            nested=self.settings.support_nested_properties
        )

        # Blank values are treated as missing so they never erase a placeholder
        if not is_blank(value):
            return format_value(value, self.settings.array_join_separator)

        if placeholder.default_value is not None:
            return placeholder.default_value

        return None


def substitute(text: str, data: Optional[Dict[str, Any]], settings: Optional[Settings] = None) -> ReplacementResult:
    """Substitute placeholders in *text* using a one-off substitutor."""
    return VariableSubstitutor(settings).substitute(text, data)
