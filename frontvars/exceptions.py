"""frontvars exceptions."""

from typing import List
from dataclasses import dataclass


@dataclass
class ValidationError:
    """Single settings validation error."""
    message: str
    path: str = ""


class FrontvarsError(Exception):
    """Base class for errors surfaced to callers."""


class SettingsError(FrontvarsError):
    """Raised when an explicitly requested settings file cannot be used.

    Bad individual values never raise; they fall back to defaults. This is
    only raised for a missing or unparseable file, allowing the CLI to catch
    it and map it to an exit code.
    """

    def __init__(self, errors: List[ValidationError]):
        self.errors = errors
        self.exit_code = 2

        messages = []
        for error in errors:
            if error.path:
                messages.append(f"Settings error: {error.path}: {error.message}")
            else:
                messages.append(f"Settings error: {error.message}")

        super().__init__("\n".join(messages))


class FrontmatterSerializationError(FrontvarsError):
    """Raised when structured data cannot be rendered back to YAML."""


class DocumentChangedError(FrontvarsError):
    """Raised when the frontmatter changed underneath a pending write."""

    def __init__(self, expected_keys: List[str], current_keys: List[str]):
        self.expected_keys = expected_keys
        self.current_keys = current_keys
        super().__init__(
            "Document changed while editing: frontmatter keys "
            f"{current_keys} do not match {expected_keys}"
        )


class RenameError(FrontvarsError):
    """Raised when a file rename cannot be performed."""


class FrontmatterParseError(FrontvarsError):
    """Raised when existing frontmatter is unreadable and a write would discard it."""
