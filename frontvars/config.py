"""Settings model and settings-file loader."""

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Tuple, Union
import yaml

from frontvars.exceptions import SettingsError, ValidationError


logger = logging.getLogger(__name__)

NotificationLevel = Literal["all", "errors", "none"]

NOTIFICATION_LEVELS = ("all", "errors", "none")

# camelCase keys accepted from plugin-style settings files
CAMEL_CASE_ALIASES = {
    'openDelimiter': 'open_delimiter',
    'closeDelimiter': 'close_delimiter',
    'defaultSeparator': 'default_separator',
    'missingValueText': 'missing_value_text',
    'supportNestedProperties': 'support_nested_properties',
    'caseInsensitive': 'case_insensitive',
    'arrayJoinSeparator': 'array_join_separator',
    'preserveOriginalOnMissing': 'preserve_original_on_missing',
    'showFrontmatterOnlyVariables': 'show_data_only',
    'showDataOnly': 'show_data_only',
    'notificationLevel': 'notification_level',
}

# Fields that must be non-empty strings
_TOKEN_FIELDS = ('open_delimiter', 'close_delimiter', 'default_separator')


@dataclass(frozen=True)
class Settings:
    """User configuration consumed by the resolution engine."""
    open_delimiter: str = "{{"
    close_delimiter: str = "}}"
    default_separator: str = ":"
    missing_value_text: str = "[MISSING]"
    support_nested_properties: bool = True
    case_insensitive: bool = False
    array_join_separator: str = ", "
    preserve_original_on_missing: bool = False
    show_data_only: bool = True
    notification_level: NotificationLevel = "all"

    def pattern_key(self) -> Tuple[str, str, str]:
        """Return the (open, close, separator) tuple that identifies a pattern."""
        return (self.open_delimiter, self.close_delimiter, self.default_separator)

    def with_overrides(self, **changes: Any) -> "Settings":
        """Return a copy with *changes* applied (None values are ignored)."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Settings":
        """
        Build settings from a plain mapping.

        Unknown keys are ignored. Values of the wrong type fall back to the
        field default so a hand-edited settings file can never break
        placeholder processing.

        Args:
            data: Mapping with snake_case or camelCase keys

        Returns:
            Settings instance
        """
        defaults = cls()
        known = {f.name: f for f in fields(cls)}
        values: Dict[str, Any] = {}

        for raw_key, value in (data or {}).items():
            key = CAMEL_CASE_ALIASES.get(raw_key, raw_key)
            if key not in known:
                logger.debug(f"Ignoring unknown settings key: {raw_key}")
                continue

            default = getattr(defaults, key)
            if isinstance(default, bool):
                if not isinstance(value, bool):
                    logger.warning(f"Setting '{raw_key}' must be a boolean, using default {default!r}")
                    continue
            elif not isinstance(value, str):
                logger.warning(f"Setting '{raw_key}' must be a string, using default {default!r}")
                continue
            elif key in _TOKEN_FIELDS and not value:
                logger.warning(f"Setting '{raw_key}' cannot be empty, using default {default!r}")
                continue
            elif key == 'notification_level' and value not in NOTIFICATION_LEVELS:
                logger.warning(f"Setting '{raw_key}' must be one of {NOTIFICATION_LEVELS}, using default {default!r}")
                continue

            values[key] = value

        return cls(**values)


class SettingsLoader:
    """Loads settings from a YAML or JSON file."""

    def __init__(self):
        """Initialize loader."""
        self.errors: List[ValidationError] = []

    def load(self, settings_path: Union[str, Path]) -> Settings:
        """Load settings from *settings_path*."""
        path = Path(settings_path)
        self.errors = []

        if not path.exists():
            self._add_error("Settings file not found", str(path))
            self._raise_validation_errors()

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            self._add_error(f"Failed to parse settings: {e}", str(path))
            self._raise_validation_errors()

        if data is None:
            data = {}
        if not isinstance(data, dict):
            self._add_error(
                f"Settings must be a mapping, got {type(data).__name__}", str(path)
            )
            self._raise_validation_errors()

        logger.debug(f"Loaded settings from {path}")
        return Settings.from_dict(data)

    def _add_error(self, message: str, path: str = ""):
        """Add validation error."""
        self.errors.append(ValidationError(message=message, path=path))

    def _raise_validation_errors(self):
        """Raise exception with all validation errors."""
        raise SettingsError(self.errors)
