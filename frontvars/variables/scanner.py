"""
Document-wide variable enumeration.

Lists every distinct placeholder in a document body together with its
status, and optionally the frontmatter leaves that no placeholder uses.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Set

from ..config import Settings
from ..security import RESERVED_METADATA_KEYS, is_forbidden_key
from .pattern import PatternCompiler
from .resolver import ABSENT, NodeKind, is_blank, node_kind, resolve_path


logger = logging.getLogger(__name__)


class VariableStatus(str, Enum):
    """Resolution status of a variable."""
    EXISTS = "exists"
    MISSING = "missing"
    HAS_DEFAULT = "has-default"
    DATA_ONLY = "data-only"


@dataclass(frozen=True)
class Position:
    """Location of a placeholder: 0-based line and column span."""
    line: int
    start: int
    end: int


@dataclass(frozen=True)
class Variable:
    """A variable found in a document."""
    name: str
    status: VariableStatus
    value: Any = None
    default_value: Optional[str] = None
    position: Optional[Position] = None
    full_match: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict, omitting None values."""
        result: Dict[str, Any] = {'name': self.name, 'status': self.status.value}
        if self.value is not None:
            result['value'] = self.value
        if self.default_value is not None:
            result['default_value'] = self.default_value
        if self.position is not None:
            result['position'] = {
                'line': self.position.line,
                'start': self.position.start,
                'end': self.position.end,
            }
        return result


def classify(value: Any, default_value: Optional[str]) -> VariableStatus:
    """Status for a resolved value and optional default."""
    if not is_blank(value):
        return VariableStatus.EXISTS
    elif default_value is not None:
        return VariableStatus.HAS_DEFAULT
    return VariableStatus.MISSING


class DocumentScanner:
    """Enumerates and classifies the variables of a document."""

    def __init__(self, settings: Optional[Settings] = None, compiler: Optional[PatternCompiler] = None):
        self.settings = settings or Settings()
        self.compiler = compiler or PatternCompiler()

    def scan(
        self,
        body: str,
        data: Optional[Dict[str, Any]],
        line_offset: int = 0,
        include_data_only: Optional[bool] = None
    ) -> List[Variable]:
        """
        Scan a document body for variables.

        Args:
            body: Document text after the frontmatter block
            data: Parsed frontmatter
            line_offset: Number of lines preceding *body* in the document
            include_data_only: Override settings.show_data_only

        Returns:
            Variables in order of first appearance, then data-only entries
        """
        variables: List[Variable] = []
        seen: Set[str] = set()

        line = line_offset
        line_start = 0
        consumed = 0

        for placeholder in self.compiler.find(body, self.settings):
            # Advance line bookkeeping up to this match
            newlines = body.count('\n', consumed, placeholder.start)
            if newlines:
                line += newlines
                line_start = body.rfind('\n', consumed, placeholder.start) + 1
            consumed = placeholder.start

            if placeholder.name in seen:
                continue
            seen.add(placeholder.name)

            value = self._lookup(data, placeholder.name)
            column = placeholder.start - line_start
            variables.append(Variable(
                name=placeholder.name,
                status=classify(value, placeholder.default_value),
                value=None if value is ABSENT else value,
                default_value=placeholder.default_value,
                position=Position(line=line, start=column, end=column + len(placeholder.full_match)),
                full_match=placeholder.full_match
            ))

        if include_data_only is None:
            include_data_only = self.settings.show_data_only
        if include_data_only:
            self._collect_data_only(data, '', seen, variables, set())

        return variables

    def scan_document(self, text: str, include_data_only: Optional[bool] = None) -> List[Variable]:
        """Scan a full document, frontmatter included."""
        from ..frontmatter.codec import split_document, parse

        block, body = split_document(text)
        return self.scan(body, parse(text), block.count('\n'), include_data_only)

    def variable_at(self, line: str, column: int) -> Optional[Variable]:
        """
        Return the placeholder covering *column* on a single *line*.

        The returned variable is not resolved: its status is HAS_DEFAULT when
        a default was captured and MISSING otherwise, and its position line is 0.
        """
        for placeholder in self.compiler.find(line, self.settings):
            if placeholder.start <= column < placeholder.end:
                return Variable(
                    name=placeholder.name,
                    status=classify(ABSENT, placeholder.default_value),
                    default_value=placeholder.default_value,
                    position=Position(line=0, start=placeholder.start, end=placeholder.end),
                    full_match=placeholder.full_match
                )
        return None

    def _lookup(self, data: Optional[Dict[str, Any]], name: str) -> Any:
        return resolve_path(
            data,
            name,
            case_insensitive=self.settings.case_insensitive,
            nested=self.settings.support_nested_properties
        )

    def _collect_data_only(
        self,
        node: Any,
        prefix: str,
        seen: Set[str],
        variables: List[Variable],
        visited: Set[int]
    ) -> None:
        """Append a DATA_ONLY variable for every leaf of *node* not in *seen*."""
        if node_kind(node) is not NodeKind.MAPPING:
            return

        # Guard against self-referential or shared structures
        if id(node) in visited:
            return
        visited.add(id(node))

        for key, value in node.items():
            name = str(key)
            if name in RESERVED_METADATA_KEYS or is_forbidden_key(name):
                continue

            full_path = f"{prefix}.{name}" if prefix else name
            if node_kind(value) is NodeKind.MAPPING:
                self._collect_data_only(value, full_path, seen, variables, visited)
            elif full_path not in seen:
                variables.append(Variable(
                    name=full_path,
                    status=VariableStatus.DATA_ONLY,
                    value=value
                ))


def scan(
    body: str,
    data: Optional[Dict[str, Any]],
    line_offset: int = 0,
    settings: Optional[Settings] = None
) -> List[Variable]:
    """Scan *body* with a one-off scanner."""
    return DocumentScanner(settings).scan(body, data, line_offset)
