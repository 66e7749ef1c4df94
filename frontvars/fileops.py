"""
File-level operations: rename a document from its own placeholders, and
the combined rename + body replacement.

The combined operation renames first. A failed rename aborts before the
document content is touched.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .config import Settings
from .exceptions import RenameError
from .frontmatter.codec import find_block_end, parse
from .variables.substitution import ReplacementResult, VariableSubstitutor


logger = logging.getLogger(__name__)

INVALID_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|]')
WINDOWS_RESERVED = re.compile(r'^(con|prn|aux|nul|com[1-9]|lpt[1-9])$', re.IGNORECASE)


@dataclass
class RenameOutcome:
    """Result of a rename attempt."""
    path: Path
    renamed: bool
    result: ReplacementResult
    reason: str = ""


@dataclass
class ReplaceOutcome:
    """Result of replacing in a document and its filename."""
    path: Path
    renamed: bool
    body: ReplacementResult
    filename: ReplacementResult

    @property
    def changed(self) -> bool:
        return self.renamed or self.body.found_any


def sanitize_filename(name: str) -> Optional[str]:
    """
    Make *name* safe to use as a file name on common platforms.

    Returns:
        Sanitized name, or None if nothing usable remains
    """
    if not name:
        return None

    sanitized = INVALID_FILENAME_CHARS.sub('-', name)
    sanitized = re.sub(r'\s+', ' ', sanitized).strip()
    sanitized = sanitized.strip('.')

    if WINDOWS_RESERVED.match(sanitized):
        sanitized = '_' + sanitized

    return sanitized or None


def read_document(path: Path) -> str:
    """Read a document without translating its line endings."""
    with open(path, 'r', encoding='utf-8', newline='') as f:
        return f.read()


def write_document(path: Path, text: str) -> None:
    """Write a document without translating its line endings."""
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(text)


def _target_path(path: Path, new_stem: str) -> Path:
    return path.with_name(new_stem + path.suffix)


def _rename(path: Path, target: Path) -> None:
    """Rename *path* to *target*, refusing to overwrite."""
    if target.exists():
        raise RenameError(f"File already exists: {target.name}")
    try:
        path.rename(target)
    except OSError as e:
        raise RenameError(f"Failed to rename {path.name}: {e}") from e
    logger.info(f"Renamed {path} -> {target}")


def rename_with_variables(
    path: Path,
    settings: Optional[Settings] = None,
    data: Optional[Dict[str, Any]] = None
) -> RenameOutcome:
    """
    Rename *path* using placeholders in its file stem.

    Args:
        path: Document to rename
        settings: Settings to use
        data: Frontmatter to resolve against (read from the file if omitted)

    Returns:
        RenameOutcome; ``renamed`` is False with a ``reason`` when there is
        nothing to do

    Raises:
        RenameError: If the new name is invalid, taken, or the rename fails
    """
    path = Path(path)
    if data is None:
        data = parse(read_document(path))

    stem = path.stem
    result = VariableSubstitutor(settings).substitute(stem, data)

    if not result.found_any:
        return RenameOutcome(path, False, result, "No variables found in filename")
    if result.text == stem:
        return RenameOutcome(path, False, result, "Filename unchanged after replacement")

    new_stem = sanitize_filename(result.text)
    if not new_stem:
        raise RenameError("Invalid filename after replacement")

    target = _target_path(path, new_stem)
    _rename(path, target)
    return RenameOutcome(target, True, result)


def replace_document_and_filename(path: Path, settings: Optional[Settings] = None) -> ReplaceOutcome:
    """
    Replace placeholders in the body of *path* and in its filename.

    Both replacements are computed up front. The rename runs first; if it
    fails the document content is left as it was.

    Raises:
        RenameError: If the rename fails (no content has been written)
    """
    path = Path(path)
    substitutor = VariableSubstitutor(settings)
    content = read_document(path)
    data = parse(content)

    end = find_block_end(content)
    body = substitutor.substitute(content[end:], data)
    filename = substitutor.substitute(path.stem, data)

    wants_rename = filename.replaced_count > 0 and filename.text != path.stem
    target = path
    renamed = False

    if wants_rename:
        new_stem = sanitize_filename(filename.text)
        if new_stem:
            target = _target_path(path, new_stem)
            _rename(path, target)
            renamed = True

    if body.found_any:
        write_document(target, content[:end] + body.text)

    return ReplaceOutcome(target, renamed, body, filename)
