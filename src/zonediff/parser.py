"""Streaming parser for RFC 1035 zone master files."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import IO, AnyStr, Iterator

from .lexer import LINE_ENDINGS, Lexer, Token
from .models import Record, RecordData, ZoneParseError
from .rrtypes import RRClass, RRType, rrclass_from_text, rrtype_from_text

LOG = logging.getLogger("zonediff.parser")

MAX_TTL = 0xFFFFFFFF
DIRECTIVE_PREFIX = "$"
TTL_DIRECTIVE = "$ttl"
ORIGIN_DIRECTIVE = "$origin"
KNOWN_DIRECTIVES = {TTL_DIRECTIVE, ORIGIN_DIRECTIVE}
QUOTE = '"'
ESCAPE = "\\"


class State(enum.Enum):
    """Position of the parser inside the record being assembled."""

    INIT = "init"
    COMMON = "common"
    DIRECTIVE = "directive"
    DATA = "data"
    QSTRING = "qstring"


@dataclass
class _Pending:
    """Scratch space for the record being assembled.

    A fresh instance is created at the start of every ``__next__`` call, so
    nothing here survives from one record to the next. The owner name, TTL,
    class, origin, default TTL and the lexer's bracket depth live on the
    parser itself and persist for the whole file.
    """

    state: State = State.INIT
    started: bool = False
    directive: str = ""
    header: tuple[str, int, RRClass] | None = None
    rrtype: RRType | None = None
    data: list[RecordData] = field(default_factory=list)
    quoted: list[str] = field(default_factory=list)


def normalize_origin(origin: str) -> str:
    """Return ``origin`` lower-cased and terminated by a dot."""
    stripped = origin.strip().lower()
    if not stripped or stripped == ".":
        return "."
    return stripped if stripped.endswith(".") else f"{stripped}."


def parse_ttl(text: str, line: int | None = None) -> int:
    """Parse a decimal TTL in seconds."""
    if not (text.isascii() and text.isdigit()):
        raise ZoneParseError(f"invalid TTL {text!r}", line)
    value = int(text)
    if value > MAX_TTL:
        raise ZoneParseError(f"TTL {value} out of range", line)
    return value


def unescape(text: str, quoted: bool = False) -> tuple[str, int | None]:
    """Decode presentation-format escapes.

    ``\\"`` and ``\\\\`` decode to the escaped character, as does a backslash
    before any other non-digit character. ``\\DDD`` sequences and a trailing
    lone backslash are kept verbatim. When ``quoted`` is set, decoding stops
    at the first unescaped double quote and its index is returned alongside
    the decoded text; otherwise the index is None.
    """
    out: list[str] = []
    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        if char == ESCAPE:
            if i + 1 == length:
                out.append(char)
                break
            following = text[i + 1]
            out.append(char + following if following.isdigit() else following)
            i += 2
            continue
        if quoted and char == QUOTE:
            return "".join(out), i
        out.append(char)
        i += 1
    return "".join(out), None


class ZoneParser:
    """Iterate over the records of a zone master file.

    The parser pulls lines from ``stream`` on demand and yields one
    :class:`Record` per logical entry. It reads the stream once and cannot
    be restarted.
    """

    def __init__(self, stream: IO[AnyStr], origin: str):
        self._stream = stream
        self._lexer = Lexer()
        self._origin = normalize_origin(origin)
        self._default_ttl: int | None = None
        self._name: str | None = None
        self._ttl = 0
        self._rrclass = RRClass.IN
        self._end_of_stream = False
        self._pending = _Pending()

    @property
    def origin(self) -> str:
        return self._origin

    @property
    def default_ttl(self) -> int | None:
        return self._default_ttl

    @property
    def line_no(self) -> int:
        return self._lexer.line_no

    def __iter__(self) -> Iterator[Record]:
        return self

    def __next__(self) -> Record:
        self._pending = _Pending()
        if self._default_ttl is not None:
            self._ttl = self._default_ttl

        while not self._end_of_stream:
            self._parse_line()
            if self._pending.rrtype is not None and self._lexer.depth == 0:
                return self._build_record()

        if self._lexer.depth:
            raise ZoneParseError("unexpected end of file inside parentheses", self.line_no)
        if self._pending.state is State.QSTRING:
            raise ZoneParseError("unexpected end of file inside quoted string", self.line_no)
        raise StopIteration

    def absolute_name(self, name: str) -> str:
        """Expand ``name`` against the current origin."""
        if not name:
            raise ValueError("Owner name must not be empty.")
        if name == "@":
            return self._origin
        if name.endswith("."):
            return name
        if self._origin == ".":
            return f"{name}."
        return f"{name}.{self._origin}"

    def _build_record(self) -> Record:
        pending = self._pending
        name, ttl, rrclass = pending.header
        return Record(name=name, ttl=ttl, rrclass=rrclass, rrtype=pending.rrtype, data=tuple(pending.data))

    def _read_line(self) -> str | None:
        line = self._stream.readline()
        if not line:
            return None
        if isinstance(line, bytes):
            try:
                return line.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise ZoneParseError(f"invalid UTF-8 at byte {exc.start}", self.line_no + 1) from exc
        return line

    def _parse_line(self) -> None:
        line = self._read_line()
        if line is None:
            self._end_of_stream = True
            return

        pending = self._pending
        at_line_start = self._lexer.depth == 0
        for token in self._lexer.tokens(line):
            if token.is_comment() and pending.state is not State.QSTRING:
                break
            self._handle_token(token, at_line_start)
            at_line_start = False
            if pending.state is State.QSTRING:
                pending.quoted.append(token.delimiter)
            else:
                self._lexer.track(token)

        self._finish_line()

    def _finish_line(self) -> None:
        pending = self._pending
        if self._lexer.depth:
            return
        if pending.state is State.QSTRING:
            raise ZoneParseError("unterminated quoted string", self.line_no)
        if pending.state is State.DIRECTIVE:
            raise ZoneParseError(f"missing value for {pending.directive.upper()}", self.line_no)
        if pending.state is State.COMMON and pending.started:
            raise ZoneParseError("record has no type", self.line_no)
        if pending.rrtype is None:
            pending.state = State.INIT
            pending.started = False

    def _handle_token(self, token: Token, at_line_start: bool) -> None:
        state = self._pending.state
        if state is State.INIT:
            if at_line_start:
                self._handle_owner(token)
            elif token.text:
                raise ZoneParseError(f"unexpected text {token.text!r} after directive", self.line_no)
        elif state is State.QSTRING:
            self._handle_quoted(token.text)
        elif not token.text:
            return
        elif state is State.COMMON:
            self._handle_common(token.text)
        elif state is State.DIRECTIVE:
            self._handle_directive(token.text)
        else:
            self._handle_data(token.text)

    def _handle_owner(self, token: Token) -> None:
        pending = self._pending
        if not token.text:
            if token.delimiter in LINE_ENDINGS:
                # Blank line.
                return
            pending.state = State.COMMON
            return

        word = token.text.lower()
        if word.startswith(DIRECTIVE_PREFIX):
            if word not in KNOWN_DIRECTIVES:
                raise ZoneParseError(f"unknown directive {token.text}", self.line_no)
            pending.directive = word
            pending.state = State.DIRECTIVE
            return

        self._name = self.absolute_name(word)
        pending.started = True
        pending.state = State.COMMON

    def _handle_common(self, text: str) -> None:
        pending = self._pending
        pending.started = True
        rrclass = rrclass_from_text(text)
        if rrclass is not None:
            self._rrclass = rrclass
            return
        rrtype = rrtype_from_text(text)
        if rrtype is not None:
            if self._name is None:
                raise ZoneParseError("no previous owner name to reuse", self.line_no)
            pending.header = (self._name, self._ttl, self._rrclass)
            pending.rrtype = rrtype
            pending.state = State.DATA
            return
        self._ttl = parse_ttl(text, self.line_no)

    def _handle_directive(self, text: str) -> None:
        pending = self._pending
        if pending.directive == TTL_DIRECTIVE:
            self._default_ttl = parse_ttl(text, self.line_no)
            self._ttl = self._default_ttl
            LOG.debug("Default TTL set to %s at line %s", self._default_ttl, self.line_no)
        else:
            self._origin = normalize_origin(self.absolute_name(text.lower()))
            LOG.debug("Origin set to %s at line %s", self._origin, self.line_no)
        pending.state = State.INIT

    def _handle_data(self, text: str) -> None:
        pending = self._pending
        if not text.startswith(QUOTE):
            pending.data.append(unescape(text)[0])
            return

        decoded, closing = unescape(text[1:], quoted=True)
        if closing is None:
            pending.quoted = [decoded]
            pending.state = State.QSTRING
            return
        self._check_after_quote(text, closing + 1)
        pending.data.append(decoded)

    def _handle_quoted(self, text: str) -> None:
        pending = self._pending
        decoded, closing = unescape(text, quoted=True)
        pending.quoted.append(decoded)
        if closing is None:
            return
        self._check_after_quote(text, closing)
        pending.data.append("".join(pending.quoted))
        pending.quoted = []
        pending.state = State.DATA

    def _check_after_quote(self, text: str, closing: int) -> None:
        if closing != len(text) - 1:
            raise ZoneParseError(f"unexpected text after closing quote in {text!r}", self.line_no)
