"""Helpers shared by CLI commands."""

import logging
from argparse import Namespace
from pathlib import Path
from typing import Optional

from frontvars.config import Settings, SettingsLoader
from frontvars.cli.notify import Notifier


logger = logging.getLogger(__name__)


def load_settings(args: Namespace) -> Settings:
    """Load settings from --config (if given) and apply CLI overrides.

    Raises:
        SettingsError: If the settings file is missing or invalid
    """
    config_path: Optional[str] = getattr(args, 'config', None)
    settings = SettingsLoader().load(config_path) if config_path else Settings()
    return settings.with_overrides(notification_level=getattr(args, 'notify', None))


def make_notifier(settings: Settings) -> Notifier:
    return Notifier(settings.notification_level)


def resolve_document(path_arg: str, notifier: Notifier) -> Optional[Path]:
    """Return the document path, or None (after notifying) if it does not exist."""
    path = Path(path_arg)
    if not path.is_file():
        notifier.notify(f"File not found: {path}", "error")
        logger.debug(f"Missing document: {path.resolve()}")
        return None
    return path
