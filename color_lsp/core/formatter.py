"""Render one color as a block of alternate textual formats for hover display.

Example for ColorValue(0.933, 0.8, 0.0, 1.0):

    Colorspace Formats:

    ```
    #EECC00
    #EECC00FF
    hsla(51.4, 100%, 46.7%, 100%)
    hsla(0.143, 1., 0.467, 1.)
    rgb(0xeecc00)
    rgba(0xeecc00ff)
    rgba(238, 204, 0, 100%)
    rgba(0.933, 0.8, 0., 1.)
    ```

    [Color Picker](https://colorpicker.dev/#EECC00)

The `#` lines use uppercase hex digits, while the `rgb(0x...)` / `rgba(0x...)`
lines use lowercase on purpose, the way such literals are usually written in
Rust source.
"""

from color_lsp.core.colorspace import clamp01, rgba_to_hsla
from color_lsp.core.types import ColorValue

COLOR_PICKER_URL = 'https://colorpicker.dev/'


def format_trimmed(x: float, precision: int, trim_end_dot: bool) -> str:
    """Format at fixed precision, then drop trailing zeros.

    With trim_end_dot a bare trailing '.' goes too: 50.0 -> '50'.
    Without it the dot stays, CSS float style: 1.0 -> '1.'.
    """
    s = f'{x:.{precision}f}'
    if '.' in s:
        s = s.rstrip('0')
    if trim_end_dot:
        s = s.rstrip('.')
    return s


def format_lines(color: ColorValue) -> list[str]:
    """The representations shown by `summarize`, in display order."""
    r, g, b, a = color.to_rgba8()
    h, s, l, alpha = rgba_to_hsla(r, g, b, a)  # noqa: E741

    hsla_percent = (
        f'hsla({format_trimmed(h * 360.0, 1, False)}, '
        f'{format_trimmed(s * 100.0, 1, True)}%, '
        f'{format_trimmed(l * 100.0, 1, True)}%, '
        f'{format_trimmed(alpha * 100.0, 1, True)}%)'
    )
    hsla_float = 'hsla({})'.format(', '.join(format_trimmed(v, 3, False) for v in (h, s, l, alpha)))
    rgba_float = 'rgba({})'.format(
        ', '.join(format_trimmed(clamp01(v), 3, False) for v in (color.red, color.green, color.blue, color.alpha))
    )

    return [
        f'#{r:02X}{g:02X}{b:02X}',
        f'#{r:02X}{g:02X}{b:02X}{a:02X}',
        hsla_percent,
        hsla_float,
        f'rgb(0x{r:02x}{g:02x}{b:02x})',
        f'rgba(0x{r:02x}{g:02x}{b:02x}{a:02x})',
        # Integer division: any alpha below 255 prints as 0%
        f'rgba({r}, {g}, {b}, {a // 255 * 100}%)',
        rgba_float,
    ]


def summarize(color: ColorValue, picker_url: str = COLOR_PICKER_URL) -> str:
    """Markdown block listing other formats of `color`, plus a picker link."""
    r, g, b, _a = color.to_rgba8()
    body = '\n'.join(format_lines(color))
    link = f'[Color Picker]({picker_url}#{r:02X}{g:02X}{b:02X})'
    return f'Colorspace Formats:\n\n```\n{body}\n```\n\n{link}'
