"""Print the hover summary for every distinct color in each file.

The summary lists the color as #RRGGBB, #RRGGBBAA, percentage and float
HSLA, 0x hex functional forms, and percentage and float RGBA, followed by
a Color Picker link. The link base comes from COLOR_LSP_PICKER_URL.

Example:
    uv run color-lsp summarize src/theme.rs
"""

from color_lsp.core.env import load_settings
from color_lsp.core.formatter import summarize
from color_lsp.core.scanner import distinct_colors, scan
from color_lsp.core.types import Command, Document, Report

command = Command(
    name='summarize',
    help='Hover summary (hex, HSLA, RGBA forms) for each distinct color.',
)


@command.run
def run(documents: list[Document], report: Report, args) -> None:
    settings = getattr(args, 'settings', None) or load_settings()
    for doc in documents:
        entries = [
            {'hex': color.to_css_hex(), 'summary': summarize(color, picker_url=settings.picker_url)}
            for color in distinct_colors(scan(doc.text))
        ]
        report.add(doc.path, 'summarize', entries)
