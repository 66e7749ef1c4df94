"""Replace command: substitute placeholders in a document body (and filename)."""

import logging
import sys
from argparse import Namespace

from frontvars.exceptions import FrontvarsError, SettingsError
from frontvars.fileops import read_document, replace_document_and_filename, write_document
from frontvars.frontmatter.codec import find_block_end
from frontvars.frontmatter.document import replace_in_body, replace_in_lines
from frontvars.cli.notify import Notifier
from .common import load_settings, make_notifier, resolve_document


logger = logging.getLogger(__name__)


def _summary(replaced: int, missing: int) -> str:
    message = f"Replaced {replaced} variable(s)"
    if missing > 0:
        message += f", {missing} not found"
    return message


def replace_command(args: Namespace) -> int:
    """
    Replace placeholders in a document.

    Without --in-place the result is written to stdout (the whole document,
    or only the body with --body-only). --lines limits replacement to a line
    range of the document. --filename also renames the file and
    always writes in place; the rename happens before the content is changed.
    """
    try:
        settings = load_settings(args)
    except SettingsError as e:
        Notifier().notify(str(e), "error")
        return e.exit_code

    notifier = make_notifier(settings)
    path = resolve_document(args.file, notifier)
    if path is None:
        return 2

    if args.filename:
        try:
            outcome = replace_document_and_filename(path, settings)
        except FrontvarsError as e:
            notifier.notify(str(e), "error")
            return 2

        if not outcome.changed:
            notifier.notify("No variables found", "info")
            return 1

        parts = []
        if outcome.body.replaced_count > 0:
            parts.append(f"Replaced {outcome.body.replaced_count} in document")
        if outcome.renamed:
            parts.append(f"renamed to: {outcome.path.stem}")
        message = ', '.join(parts)
        if outcome.body.missing_count > 0:
            message += f" ({outcome.body.missing_count} not found)"
        if message:
            notifier.notify(message.strip())
        return 0

    content = read_document(path)
    if args.lines:
        start, end = args.lines
        new_text, result = replace_in_lines(content, start, end, settings)
        nothing_found = "No variables found in selected lines"
    else:
        new_text, result = replace_in_body(content, settings)
        nothing_found = "No variables found in document"

    if args.in_place:
        if not result.found_any:
            notifier.notify(nothing_found, "info")
            return 1
        write_document(path, new_text)
        logger.debug(f"Wrote {path}")
        notifier.notify(_summary(result.replaced_count, result.missing_count))
        return 0

    if args.body_only:
        new_text = new_text[find_block_end(new_text):]
    sys.stdout.write(new_text)
    return 0
