"""Rename command: rename a document using placeholders in its filename."""

import logging
from argparse import Namespace

from frontvars.exceptions import RenameError, SettingsError
from frontvars.fileops import rename_with_variables
from frontvars.cli.notify import Notifier
from .common import load_settings, make_notifier, resolve_document


logger = logging.getLogger(__name__)


def rename_command(args: Namespace) -> int:
    """Rename FILE with its filename placeholders replaced."""
    try:
        settings = load_settings(args)
    except SettingsError as e:
        Notifier().notify(str(e), "error")
        return e.exit_code

    notifier = make_notifier(settings)
    path = resolve_document(args.file, notifier)
    if path is None:
        return 2

    try:
        outcome = rename_with_variables(path, settings)
    except RenameError as e:
        notifier.notify(str(e), "error")
        return 2

    if not outcome.renamed:
        notifier.notify(outcome.reason, "info")
        return 1

    message = f"Renamed to: {outcome.path.stem}"
    if outcome.result.missing_count > 0:
        message += f" ({outcome.result.missing_count} variable(s) not found)"
    notifier.notify(message)
    return 0
