"""List command: show every variable of a document grouped by status."""

import json
import logging
import sys
from argparse import Namespace
from typing import Dict, List

from frontvars.exceptions import SettingsError
from frontvars.fileops import read_document
from frontvars.variables.scanner import DocumentScanner, Variable, VariableStatus
from frontvars.variables.substitution import format_value
from frontvars.cli.notify import Notifier
from .common import load_settings, make_notifier, resolve_document


logger = logging.getLogger(__name__)

# Display order: missing first, data-only last
GROUPS = [
    (VariableStatus.MISSING, "Missing Variables"),
    (VariableStatus.HAS_DEFAULT, "Variables with Defaults"),
    (VariableStatus.EXISTS, "Set Variables"),
    (VariableStatus.DATA_ONLY, "Frontmatter Only (no placeholders)"),
]


def group_variables(variables: List[Variable]) -> Dict[VariableStatus, List[Variable]]:
    """Group variables by status, keeping scan order within each group."""
    grouped: Dict[VariableStatus, List[Variable]] = {status: [] for status, _ in GROUPS}
    for variable in variables:
        grouped[variable.status].append(variable)
    return grouped


def _describe(variable: Variable) -> str:
    line = f"  {variable.name}"
    if variable.status in (VariableStatus.EXISTS, VariableStatus.DATA_ONLY):
        if variable.value is not None:
            line += f" = {format_value(variable.value)}"
    elif variable.default_value is not None:
        line += f" (default: {variable.default_value})"
    if variable.position is not None:
        line += f"  [line {variable.position.line + 1}, col {variable.position.start + 1}]"
    return line


def list_command(args: Namespace) -> int:
    """List variables found in a document."""
    try:
        settings = load_settings(args)
    except SettingsError as e:
        Notifier().notify(str(e), "error")
        return e.exit_code

    notifier = make_notifier(settings)
    path = resolve_document(args.file, notifier)
    if path is None:
        return 2

    include_data_only = False if args.no_data_only else None
    variables = DocumentScanner(settings).scan_document(read_document(path), include_data_only)

    if args.json:
        json.dump([v.to_dict() for v in variables], sys.stdout, indent=2, default=str)
        sys.stdout.write('\n')
        return 0

    if not variables:
        notifier.notify("No variables found in document", "info")
        return 1

    grouped = group_variables(variables)
    for status, title in GROUPS:
        if not grouped[status]:
            continue
        print(f"{title}:")
        for variable in grouped[status]:
            print(_describe(variable))

    return 0
