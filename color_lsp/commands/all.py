"""Run every command, combine into a single report.

Runs: scan, summarize, swatch.

Example:
    uv run color-lsp all src/theme.rs --out-dir ./swatches
    uv run color-lsp all src/theme.rs --json
"""

from color_lsp.core.types import Command, Document, Report

command = Command(
    name='all',
    help='Run scan, summarize and swatch. Combine into a single report.',
)

SKIP = {'all'}


@command.run
def run(documents: list[Document], report: Report, args) -> None:
    from color_lsp.registry import all_commands

    for name, cmd in sorted(all_commands().items()):
        if name in SKIP:
            continue
        cmd.execute(documents, report, args)
