"""Line tokenizer for zone master files."""

from __future__ import annotations

import re
from typing import Iterator, NamedTuple

from .models import ZoneParseError

LINE_ENDINGS = ("\r", "\n")
OPEN_BRACKET = "("
CLOSE_BRACKET = ")"
COMMENT = ";"

_TOKEN_PATTERN = re.compile(r"([^ \t\r\n()]*)([ \t\r\n()]|$)")


class Token(NamedTuple):
    """A word and the delimiter that ended it ("" at end of input)."""

    text: str
    delimiter: str

    def is_comment(self) -> bool:
        return self.text.startswith(COMMENT)


class Lexer:
    """Split lines into tokens and track parentheses across lines.

    ``depth`` counts the brackets still open; a record is complete only once
    it is back to zero. ``line_no`` is the number of lines handed to
    :meth:`tokens` so far.
    """

    def __init__(self) -> None:
        self.depth = 0
        self.line_no = 0

    @staticmethod
    def split(line: str) -> Iterator[Token]:
        """Yield the tokens of ``line`` without touching any state."""
        for match in _TOKEN_PATTERN.finditer(line):
            text, delimiter = match.groups()
            if text or delimiter:
                yield Token(text, delimiter)

    def tokens(self, line: str) -> Iterator[Token]:
        """Count a new line and yield its tokens."""
        self.line_no += 1
        return self.split(line)

    def track(self, token: Token) -> None:
        """Apply the token's delimiter to the bracket depth."""
        if token.delimiter == OPEN_BRACKET:
            self.depth += 1
        elif token.delimiter == CLOSE_BRACKET:
            if self.depth == 0:
                raise ZoneParseError("unbalanced closing parenthesis", self.line_no)
            self.depth -= 1
