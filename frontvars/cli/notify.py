"""User-facing notifications filtered by notification level."""

import sys
from typing import Literal, TextIO

NotificationKind = Literal["success", "info", "error"]


class Notifier:
    """
    Prints short status messages for the user.

    - all: every message (errors to stderr)
    - errors: only errors
    - none: silent
    """

    def __init__(self, level: str = "all", out: TextIO = None, err: TextIO = None):
        self.level = level
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def notify(self, message: str, kind: NotificationKind = "success") -> None:
        if self.level == "none":
            return
        if kind == "error":
            print(message, file=self.err)
        elif self.level == "all":
            print(message, file=self.out)
