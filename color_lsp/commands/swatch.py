"""Render a PNG swatch for every distinct color in each file.

Each swatch is a solid RGBA rectangle saved to <out_dir>/<rrggbbaa>.png.
Size comes from COLOR_LSP_SWATCH_SIZE (default 128x32). Colors shared by
several files are written once.

Example:
    uv run color-lsp swatch src/theme.rs --out-dir ./swatches
"""

import os

import numpy as np
from PIL import Image

from color_lsp.core.env import load_settings
from color_lsp.core.scanner import distinct_colors, scan
from color_lsp.core.types import ColorValue, Command, Document, Report

command = Command(
    name='swatch',
    help='Write a PNG swatch per distinct color to --out-dir.',
)

DEFAULT_OUT_DIR = 'swatches'


def render_swatch(color: ColorValue, size: tuple[int, int]) -> Image.Image:
    """Solid RGBA image of `size` (width, height)."""
    width, height = size
    arr = np.empty((height, width, 4), dtype=np.uint8)
    arr[:, :] = color.to_rgba8()
    return Image.fromarray(arr)


@command.run
def run(documents: list[Document], report: Report, args) -> None:
    settings = getattr(args, 'settings', None) or load_settings()
    out_dir = getattr(args, 'out_dir', None) or DEFAULT_OUT_DIR
    os.makedirs(out_dir, exist_ok=True)

    width, height = settings.swatch_size
    for doc in documents:
        entries = []
        for color in distinct_colors(scan(doc.text)):
            path = os.path.join(out_dir, f'{color.to_hex(alpha=True)[1:]}.png')
            if not os.path.exists(path):
                render_swatch(color, settings.swatch_size).save(path)
            entries.append({'hex': color.to_css_hex(), 'file': path, 'width': width, 'height': height})
        report.add(doc.path, 'swatch', entries)
