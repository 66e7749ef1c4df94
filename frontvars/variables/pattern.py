"""
Placeholder pattern compilation.

Builds the matcher for OPEN name [SEP default] CLOSE from the configured
tokens, escaping them so any user-chosen delimiter is matched literally.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterator, Optional, Pattern, Tuple

from ..config import Settings


logger = logging.getLogger(__name__)

MAX_TOKEN_LENGTH = 10

DEFAULT_TOKENS = ("{{", "}}", ":")

# Path characters: ASCII letters, digits, underscore, dot, hyphen and brackets
_NAME = r'[A-Za-z0-9_.\[\]\-]+'


@dataclass(frozen=True)
class Placeholder:
    """A placeholder occurrence located in a piece of text."""
    name: str
    default_value: Optional[str]
    full_match: str
    start: int
    end: int


def build_pattern(open_token: str, close_token: str, separator: str) -> Pattern[str]:
    """Compile the placeholder regex for the given tokens."""
    open_re = re.escape(open_token)
    close_re = re.escape(close_token)
    sep_re = re.escape(separator)
    return re.compile(
        rf'{open_re}\s*({_NAME})\s*(?:{sep_re}\s*(.*?))?\s*{close_re}'
    )


def effective_tokens(settings: Settings) -> Tuple[str, str, str]:
    """
    Return the tokens actually used for matching.

    Empty, oversized or ambiguous (open == close) tokens fall back to the
    built-in defaults rather than failing.
    """
    tokens = settings.pattern_key()
    open_token, close_token, _ = tokens

    if any(not token or len(token) > MAX_TOKEN_LENGTH for token in tokens):
        logger.debug(f"Invalid delimiter configuration {tokens!r}, using defaults")
        return DEFAULT_TOKENS
    if open_token == close_token:
        logger.debug(f"Open and close delimiters are identical ({open_token!r}), using defaults")
        return DEFAULT_TOKENS
    return tokens


class PatternCache:
    """Single-entry memo of the last compiled pattern."""

    def __init__(self):
        self._key: Optional[Tuple[str, str, str]] = None
        self._pattern: Optional[Pattern[str]] = None

    def get(self, key: Tuple[str, str, str]) -> Optional[Pattern[str]]:
        if self._key == key:
            return self._pattern
        return None

    def put(self, key: Tuple[str, str, str], pattern: Pattern[str]) -> None:
        self._key = key
        self._pattern = pattern

    def clear(self) -> None:
        """Forget the cached pattern (call when settings change)."""
        self._key = None
        self._pattern = None


class PatternCompiler:
    """Compiles and finds placeholders for a given Settings value."""

    def __init__(self, cache: Optional[PatternCache] = None):
        self.cache = cache if cache is not None else PatternCache()

    def compile(self, settings: Settings) -> Pattern[str]:
        """Return the compiled placeholder pattern for *settings*."""
        tokens = effective_tokens(settings)
        pattern = self.cache.get(tokens)
        if pattern is None:
            pattern = build_pattern(*tokens)
            self.cache.put(tokens, pattern)
        return pattern

    def find(self, text: str, settings: Settings) -> Iterator[Placeholder]:
        """Yield every placeholder in *text*, left to right, non-overlapping."""
        for match in self.compile(settings).finditer(text):
            yield Placeholder(
                name=match.group(1).strip(),
                default_value=match.group(2),
                full_match=match.group(0),
                start=match.start(),
                end=match.end(),
            )

    def clear(self) -> None:
        self.cache.clear()
