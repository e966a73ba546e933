"""Shared types for color-lsp: ColorValue, MatchRecord, Document, Report, Command."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from color_lsp.core.colorspace import clamp01, hsl_to_rgb


def to_byte(value: float) -> int:
    """Scale a [0,1] channel to 0..255, rounding half away from zero."""
    return int(math.floor(clamp01(value) * 255.0 + 0.5))


@dataclass(frozen=True, eq=False)
class ColorValue:
    """An immutable normalized RGBA color, every component in [0,1].

    Two values are equal when their `#rrggbbaa` renderings are equal, so
    `#fff` and `rgb(255, 255, 255)` compare equal even if the floats differ
    in the last bits.
    """

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    @classmethod
    def from_rgba8(cls, r: int, g: int, b: int, a: int = 255) -> ColorValue:
        return cls(r / 255.0, g / 255.0, b / 255.0, a / 255.0)

    @classmethod
    def from_hsla(cls, hue: float, saturation: float, lightness: float, alpha: float = 1.0) -> ColorValue:
        """Build from hue in degrees and saturation/lightness/alpha in [0,1]."""
        r, g, b = hsl_to_rgb(hue, saturation, lightness)
        return cls(r, g, b, alpha)

    def to_rgba8(self) -> tuple[int, int, int, int]:
        return (to_byte(self.red), to_byte(self.green), to_byte(self.blue), to_byte(self.alpha))

    def to_hex(self, alpha: bool = False) -> str:
        r, g, b, a = self.to_rgba8()
        if alpha:
            return f'#{r:02x}{g:02x}{b:02x}{a:02x}'
        return f'#{r:02x}{g:02x}{b:02x}'

    def to_css_hex(self) -> str:
        """`#rrggbb` for opaque colors, `#rrggbbaa` otherwise."""
        return self.to_hex(alpha=self.to_rgba8()[3] < 255)

    def to_dict(self) -> dict[str, float]:
        """The LSP `Color` shape."""
        return {'red': self.red, 'green': self.green, 'blue': self.blue, 'alpha': self.alpha}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColorValue):
            return NotImplemented
        return self.to_hex(alpha=True) == other.to_hex(alpha=True)

    def __hash__(self) -> int:
        return hash(self.to_hex(alpha=True))


@dataclass(frozen=True)
class MatchRecord:
    """One color literal found in a text buffer.

    `line` is 0-based. `character` is the 0-based column in UTF-16 code
    units, which is what LSP positions use.
    """

    matched: str
    color: ColorValue
    line: int
    character: int

    def to_dict(self) -> dict[str, Any]:
        return {
            'matched': self.matched,
            'hex': self.color.to_css_hex(),
            'line': self.line,
            'character': self.character,
            'color': self.color.to_dict(),
        }


@dataclass
class Document:
    """A text file loaded for scanning."""

    path: str
    text: str


class Command:
    """A self-registering CLI command.

    Usage in a command module:

        command = Command(name='scan', help='List color literals')

        @command.run
        def run(documents, report, args):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def execute(self, documents: list[Document], report: Report, args: Any) -> None:
        """Execute the command's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        self._run_fn(documents, report, args)


@dataclass
class Report:
    """Accumulates results from commands for text/JSON output."""

    documents: dict[str, dict[str, Any]] = field(default_factory=dict)
    match_count: int = 0

    def add(self, path: str, command_name: str, data: Any) -> None:
        """Add command results for a document."""
        if path not in self.documents:
            self.documents[path] = {'commands': {}}
        self.documents[path]['commands'][command_name] = data

    def record_matches(self, count: int) -> None:
        self.match_count += count
