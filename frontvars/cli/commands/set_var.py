"""Set command: write a variable value into the document frontmatter."""

import logging
from argparse import Namespace
from typing import Any

import yaml

from frontvars.exceptions import FrontvarsError, SettingsError
from frontvars.fileops import read_document, write_document
from frontvars.frontmatter.codec import FrontmatterLoader
from frontvars.frontmatter.document import update_frontmatter
from frontvars.variables.mutator import is_writable_path
from frontvars.cli.notify import Notifier
from .common import load_settings, make_notifier, resolve_document


logger = logging.getLogger(__name__)


def parse_value(raw: str, as_yaml: bool) -> Any:
    """Return *raw* as a string, or parsed as YAML when *as_yaml* is set."""
    if not as_yaml:
        return raw
    try:
        return yaml.load(raw, Loader=FrontmatterLoader)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML value: {e}") from e


def set_command(args: Namespace) -> int:
    """Set PATH to VALUE in the frontmatter of a document."""
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
        value = parse_value(args.value, args.yaml)
    except ValueError as e:
        notifier.notify(str(e), "error")
        return 1

    if not is_writable_path(args.path, settings.support_nested_properties):
        notifier.notify(f"Refused to set {args.path}: forbidden key, empty segment or index out of range", "error")
        return 2

    content = read_document(path)
    try:
        new_content = update_frontmatter(content, {args.path: value}, settings)
    except FrontvarsError as e:
        notifier.notify(f"Failed to save: {e}", "error")
        return 2

    if new_content == content:
        notifier.notify(f"{args.path} unchanged", "info")
        return 0

    write_document(path, new_content)
    notifier.notify(f"Set {args.path} = {args.value}")
    return 0
