"""Find color literals in arbitrary text.

Walks each line one character at a time with a small state machine:

  IDLE         nothing pending
  HEX_HASH     at '#': grab up to 9 '#'/hex characters and parse them
  HEX_LITERAL  at '0x'/'0X': grab up to 8 hex digits, accept 3, 6 or 8
  KEYWORD      accumulating letters (and '(') looking for `rgb(`, `hsla(`...

The keyword buffer only lives in KEYWORD. If it already holds a '(' when
another letter or '(' arrives, it is restarted, so `Ok(hsla(` matches
`hsla(` and nothing else.

Functional literals never span lines. A candidate that fails to parse is
not an error: the scan just advances one character.
"""

import re
from collections.abc import Iterator
from enum import Enum, auto

from color_lsp.core.literal import ColorParseError, parse_color
from color_lsp.core.types import ColorValue, MatchRecord

KEYWORDS = frozenset(
    {
        'hsl(',
        'hsla(',
        'rgb(',
        'rgba(',
        'hwb(',
        'hwba(',
        'oklab(',
        'oklch(',
        'lab(',
        'lch(',
        'hsv(',
    }
)

HEX_DIGITS = frozenset('0123456789abcdefABCDEF')
HASH_CHARS = HEX_DIGITS | {'#'}
MAX_HASH_LENGTH = 9  # '#' + RRGGBBAA
MAX_HEX_LITERAL_DIGITS = 8
HEX_LITERAL_LENGTHS = (3, 6, 8)

_LINE_BREAK = re.compile(r'\r\n|\r|\n')


class State(Enum):
    IDLE = auto()
    HEX_HASH = auto()
    HEX_LITERAL = auto()
    KEYWORD = auto()


def _is_keyword_char(c: str) -> bool:
    return c == '(' or ('a' <= c <= 'z') or ('A' <= c <= 'Z')


def utf16_column(line: str, index: int) -> int:
    """Convert a code point index into a UTF-16 code unit column."""
    return index + sum(1 for c in line[:index] if ord(c) > 0xFFFF)


class _LineScanner:
    """Scans a single line. Positions are code point indices until emitted."""

    def __init__(self, line: str, line_ix: int):
        self.line = line
        self.line_ix = line_ix
        self.offset = 0
        self.state = State.IDLE
        self.token = ''

    def _enter(self, state: State) -> None:
        if state is not State.KEYWORD:
            self.token = ''
        self.state = state

    def _record(self, matched: str, literal: str, start: int) -> MatchRecord | None:
        try:
            color = parse_color(literal)
        except ColorParseError:
            return None
        return MatchRecord(matched, color, self.line_ix, utf16_column(self.line, start))

    def _take(self, start: int, allowed: frozenset[str], limit: int) -> str:
        end = start
        while end < len(self.line) and end - start < limit and self.line[end] in allowed:
            end += 1
        return self.line[start:end]

    def _hex_hash(self) -> MatchRecord | None:
        candidate = self._take(self.offset, HASH_CHARS, MAX_HASH_LENGTH)
        record = self._record(candidate, candidate, self.offset)
        if record is not None:
            self.offset += len(candidate)
        return record

    def _hex_literal(self) -> MatchRecord | None:
        prefix = self.line[self.offset : self.offset + 2]
        if prefix not in ('0x', '0X'):
            return None
        digits = self._take(self.offset + 2, HEX_DIGITS, MAX_HEX_LITERAL_DIGITS)
        if len(digits) not in HEX_LITERAL_LENGTHS:
            return None
        record = self._record(prefix + digits, '#' + digits, self.offset)
        if record is not None:
            self.offset += 2 + len(digits)
        return record

    def _keyword(self, c: str) -> MatchRecord | None:
        if '(' in self.token:
            self.token = ''
        self.token += c
        if self.token not in KEYWORDS:
            return None

        start = self.offset - len(self.token) + 1
        close = self.line.find(')', self.offset)
        end = close + 1 if close >= 0 else self.offset + 1
        literal = self.line[start:end]
        record = self._record(literal, literal, start)
        if record is None:
            self._enter(State.IDLE)
            return None
        self.offset = end
        return record

    def step(self) -> MatchRecord | None:
        """Consume input at the current offset. Always makes progress."""
        c = self.line[self.offset]
        record = None
        if c == '#':
            self._enter(State.HEX_HASH)
            record = self._hex_hash()
        elif c == '0':
            self._enter(State.HEX_LITERAL)
            record = self._hex_literal()
        elif _is_keyword_char(c):
            self._enter(State.KEYWORD)
            record = self._keyword(c)
        else:
            self._enter(State.IDLE)

        if record is None:
            self.offset += 1
        else:
            self._enter(State.IDLE)
        return record

    def __iter__(self) -> Iterator[MatchRecord]:
        while self.offset < len(self.line):
            record = self.step()
            if record is not None:
                yield record


def iter_scan(text: str) -> Iterator[MatchRecord]:
    """Yield matches lazily, line-major then column-major."""
    for line_ix, line in enumerate(_LINE_BREAK.split(text)):
        yield from _LineScanner(line, line_ix)


def scan(text: str) -> list[MatchRecord]:
    """Return every color literal in `text`, in source order."""
    return list(iter_scan(text))


def distinct_colors(records: list[MatchRecord]) -> list[ColorValue]:
    """Colors in first-seen order, duplicates (by hex) removed."""
    return list(dict.fromkeys(r.color for r in records))
