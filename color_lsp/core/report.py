"""Report builder: text and JSON output for color-lsp results."""

import json
from typing import Any

from color_lsp.core.types import Report


def _indent(text: str, prefix: str = '    ') -> list[str]:
    return [f'{prefix}{line}' if line else '' for line in text.splitlines()]


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = []
    n_docs = len(report.documents)
    n_colors = report.match_count
    lines.append(f'color-lsp: {n_docs} file{"" if n_docs == 1 else "s"}, {n_colors} color{"" if n_colors == 1 else "s"}')
    lines.append('')

    for path, doc_data in report.documents.items():
        lines.append(f'── {path}')
        commands = doc_data.get('commands', {})
        for command_name, data in commands.items():
            if command_name == 'scan':
                for m in data:
                    # 1-based line:column, the way editors display positions
                    pos = f'{m["line"] + 1}:{m["character"] + 1}'
                    lines.append(f'  {pos:<8} {m["matched"]}  → {m["hex"]}')
            elif command_name == 'summarize':
                for entry in data:
                    lines.append(f'  {entry["hex"]}')
                    lines.extend(_indent(entry['summary']))
            elif command_name == 'swatch':
                for entry in data:
                    lines.append(f'  swatch: {entry["file"]} ({entry["width"]}×{entry["height"]})')
            else:
                # Generic fallback
                lines.append(f'  {command_name}: {data}')
        lines.append('')

    return '\n'.join(lines)


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {'documents': []}
    for path, doc_data in report.documents.items():
        obj['documents'].append({'path': path, **doc_data.get('commands', {})})
    obj['summary'] = {
        'documents': len(report.documents),
        'matches': report.match_count,
    }
    return json.dumps(obj, indent=2)
