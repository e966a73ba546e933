"""List every color literal in each file with its position and hex value.

Recognises `#hex` (3, 4, 6 or 8 digits), `0x`/`0X` hex literals (3, 6 or 8
digits), CSS functions (rgb, rgba, hsl, hsla, hwb, hwba, hsv, lab, lch,
oklab, oklch) and the 0..1 float forms `rgb(1., 0.5, 0.)` /
`hsla(0.58, 1.0, 0.5, 1.0)`.

Positions are printed 1-based in text mode. JSON output keeps the 0-based
line and UTF-16 character the LSP protocol uses.

Example:
    uv run color-lsp scan src/theme.rs
    uv run color-lsp scan styles.css --json
"""

from color_lsp.core.scanner import scan
from color_lsp.core.types import Command, Document, Report

command = Command(
    name='scan',
    help='List color literals found in each file, with positions.',
)


@command.run
def run(documents: list[Document], report: Report, args) -> None:
    for doc in documents:
        records = scan(doc.text)
        report.record_matches(len(records))
        report.add(doc.path, 'scan', [r.to_dict() for r in records])
