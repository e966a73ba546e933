"""Parse a single color literal into a ColorValue.

`parse_color` tries two grammars in a fixed order:

  1. The framework float syntax: `rgb(r, g, b[, a])` / `hsl(h, s, l[, a])`
     (and their `a` forms) where every component is already in [0,1] and
     hue is a fraction of a turn. Used by GPUI-style Rust code such as
     `hsla(0.58, 1.0, 0.5, 1.0)`.
  2. The CSS color grammar: hex, named colors, rgb/hsl with percentages or
     0-255 / degree ranges, and hwb, hsv, lab, lch, oklab, oklch.

The float syntax goes first because `rgb(1, 0.5, 0)` would otherwise be
read as a near-black CSS color.
"""

import math
import re

from PIL import ImageColor

from color_lsp.core.colorspace import (
    clamp01,
    hsl_to_rgb,
    hsv_to_rgb,
    hwb_to_rgb,
    lab_to_rgb,
    lch_to_rgb,
    oklab_to_rgb,
    oklch_to_rgb,
)
from color_lsp.core.types import ColorValue


class ColorParseError(ValueError):
    pass


_NUMBER = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$')
_HEX_DIGITS = re.compile(r'^[0-9a-fA-F]+$')
_CSS_SEPARATORS = re.compile(r'[\s,/]+')


def _number(text: str) -> float | None:
    if not _NUMBER.match(text):
        return None
    value = float(text)
    # 1e999 parses to inf
    return value if math.isfinite(value) else None


def _split_call(text: str) -> tuple[str, str] | None:
    """Split `name(args)` into (name, args). None if not a call."""
    idx = text.find('(')
    if idx < 0 or not text.endswith(')'):
        return None
    return text[:idx].rstrip(), text[idx + 1 : -1]


def parse_color(text: str) -> ColorValue:
    """Parse any supported literal. Raises ColorParseError."""
    try:
        return parse_float_functional(text)
    except ColorParseError:
        return parse_css_color(text)


# -- framework float syntax ------------------------------------------------


def _unit(text: str) -> float | None:
    value = _number(text)
    if value is None or not 0.0 <= value <= 1.0:
        return None
    return value


def parse_float_functional(text: str) -> ColorValue:
    """Parse `rgb/rgba/hsl/hsla` with components normalized to [0,1]."""
    call = _split_call(text.strip())
    if call is None:
        raise ColorParseError(f'not a functional color: {text!r}')
    name, inner = call
    params = [p for field in inner.split(',') for p in field.split()]

    if len(params) not in (3, 4):
        raise ColorParseError(f'expected 3 or 4 parameters, got {len(params)}')

    values = [_unit(p) for p in params]
    if any(v is None for v in values):
        raise ColorParseError(f'component out of range in {text!r}')
    v0, v1, v2 = values[0], values[1], values[2]
    alpha = values[3] if len(values) == 4 else 1.0

    fname = name.lower()
    if fname in ('rgb', 'rgba'):
        return ColorValue(v0, v1, v2, alpha)
    if fname in ('hsl', 'hsla'):
        return ColorValue.from_hsla(v0 * 360.0, v1, v2, alpha)
    raise ColorParseError(f'unknown function {name!r}')


# -- CSS grammar -----------------------------------------------------------


def _hex(digits: str) -> ColorValue:
    if not _HEX_DIGITS.match(digits) or len(digits) not in (3, 4, 6, 8):
        raise ColorParseError(f'invalid hex color: {digits!r}')
    if len(digits) in (3, 4):
        digits = ''.join(c * 2 for c in digits)
    channels = [int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)]
    return ColorValue.from_rgba8(*channels)


def _percent_or(text: str, scale: float) -> float | None:
    """`N%` -> N/100 * scale; a bare number is returned as-is."""
    if text.endswith('%'):
        value = _number(text[:-1])
        return None if value is None else value / 100.0 * scale
    return _number(text)


def _rgb_channel(text: str) -> float | None:
    if text.endswith('%'):
        return _percent_or(text, 1.0)
    value = _number(text)
    return None if value is None else value / 255.0


def _angle(text: str) -> float | None:
    """Hue in degrees from `deg`, `grad`, `rad`, `turn` or a bare number."""
    for suffix, factor in (('deg', 1.0), ('grad', 360.0 / 400.0), ('rad', 180.0 / math.pi), ('turn', 360.0)):
        if text.endswith(suffix):
            value = _number(text[: -len(suffix)])
            return None if value is None else value * factor
    return _number(text)


def _fraction(text: str) -> float | None:
    return _percent_or(text, 1.0)


def _lab_lightness(text: str) -> float | None:
    return _percent_or(text, 100.0)


def _lab_axis(text: str) -> float | None:
    return _percent_or(text, 125.0)


def _lch_chroma(text: str) -> float | None:
    return _percent_or(text, 150.0)


def _oklab_axis(text: str) -> float | None:
    # oklch chroma shares the same 100% = 0.4 reference
    return _percent_or(text, 0.4)


def _rgb(r: float, g: float, b: float) -> tuple[float, float, float]:
    return clamp01(r), clamp01(g), clamp01(b)


def _hue_model(convert):
    """Wrap a hue/fraction/fraction model so the fractions are clamped first."""

    def wrapped(h: float, x: float, y: float) -> tuple[float, float, float]:
        return convert(h, clamp01(x), clamp01(y))

    return wrapped


_HUE_FRACTIONS = (_angle, _fraction, _fraction)

# name -> (parsers for the three channel parameters, conversion to sRGB)
_FUNCTIONS = {
    'rgb': ((_rgb_channel, _rgb_channel, _rgb_channel), _rgb),
    'rgba': ((_rgb_channel, _rgb_channel, _rgb_channel), _rgb),
    'hsl': (_HUE_FRACTIONS, _hue_model(hsl_to_rgb)),
    'hsla': (_HUE_FRACTIONS, _hue_model(hsl_to_rgb)),
    'hwb': (_HUE_FRACTIONS, _hue_model(hwb_to_rgb)),
    'hwba': (_HUE_FRACTIONS, _hue_model(hwb_to_rgb)),
    'hsv': (_HUE_FRACTIONS, _hue_model(hsv_to_rgb)),
    'lab': ((_lab_lightness, _lab_axis, _lab_axis), lab_to_rgb),
    'lch': ((_lab_lightness, _lch_chroma, _angle), lch_to_rgb),
    'oklab': ((_fraction, _oklab_axis, _oklab_axis), oklab_to_rgb),
    'oklch': ((_fraction, _oklab_axis, _angle), oklch_to_rgb),
}


def _css_function(name: str, inner: str) -> ColorValue:
    if name not in _FUNCTIONS:
        raise ColorParseError(f'unknown function {name!r}')
    params = [p for p in _CSS_SEPARATORS.split(inner) if p]
    if len(params) not in (3, 4):
        raise ColorParseError(f'{name}() expects 3 or 4 parameters, got {len(params)}')

    parsers, convert = _FUNCTIONS[name]
    values = [parse(p) for parse, p in zip(parsers, params)]
    alpha = _fraction(params[3]) if len(params) == 4 else 1.0
    if any(v is None for v in values) or alpha is None:
        raise ColorParseError(f'invalid {name}() parameters: {inner!r}')

    try:
        r, g, b = convert(*values)
    except (ArithmeticError, ValueError) as e:
        raise ColorParseError(f'{name}() out of range: {inner!r}') from e
    if not all(math.isfinite(c) for c in (r, g, b)):
        raise ColorParseError(f'{name}() out of range: {inner!r}')
    return ColorValue(clamp01(r), clamp01(g), clamp01(b), clamp01(alpha))


def parse_css_color(text: str) -> ColorValue:
    """Parse a CSS color string. Raises ColorParseError."""
    s = text.strip().lower()
    if s == 'transparent':
        return ColorValue(0.0, 0.0, 0.0, 0.0)
    if s in ImageColor.colormap:
        return ColorValue.from_rgba8(*ImageColor.getrgb(s)[:3])
    if s.startswith('#'):
        return _hex(s[1:])

    call = _split_call(s)
    if call is not None:
        return _css_function(*call)

    # Hex without a leading '#'
    return _hex(s)
