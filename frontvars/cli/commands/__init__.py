"""CLI command handlers."""

from .replace import replace_command
from .list_vars import list_command
from .set_var import set_command
from .rename import rename_command

__all__ = ['replace_command', 'list_command', 'set_command', 'rename_command']
