"""color-lsp: find color literals in source files and describe them.

Usage: uv run color-lsp <command> <path> [<path> ...] [options]

Commands are auto-discovered from color_lsp/commands/.
Each command module's docstring is its documentation.
Run `color-lsp help <command>` for full module docs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, color-lsp looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import os
import sys

from color_lsp import registry
from color_lsp.core.env import load_env, load_settings
from color_lsp.core.report import format_json, format_text
from color_lsp.core.types import Document, Report


def _load_command_module(name: str) -> object:
    """Load the raw module for a command (for docstring access)."""
    return importlib.import_module(f'color_lsp.commands.{name}')


def _short_doc(name: str, fallback: str) -> str:
    doc = (_load_command_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.all_commands()

    epilog = (
        'Examples:\n'
        '  color-lsp scan src/theme.rs\n'
        '  color-lsp scan styles.css --json\n'
        '  color-lsp summarize src/theme.rs\n'
        '  color-lsp swatch src/theme.rs --out-dir ./swatches\n'
        '  color-lsp all styles.css theme.rs --json\n'
        '  color-lsp help scan\n'
        '\n'
        'Settings (set in .env or environment):\n'
        '  COLOR_LSP_PICKER_URL   link base for the Color Picker line\n'
        '  COLOR_LSP_SWATCH_SIZE  swatch size, e.g. 128x32\n'
    )
    parser = argparse.ArgumentParser(
        prog='color-lsp',
        description='Find color literals in source files and describe them.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    sub = parser.add_subparsers(dest='command', help='Command to run')

    # Auto-register each command as a subcommand using module docstring
    for name, cmd in sorted(commands.items()):
        p = sub.add_parser(name, help=_short_doc(name, cmd.help))
        p.add_argument('paths', nargs='+', help='Text files to scan')
        p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
        p.add_argument('-o', '--out-dir', default=None, help='Directory for swatch PNGs (default: ./swatches)')

    # `help` subcommand prints full module docstring for a command
    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    return parser


def _print_help(topic: str | None) -> None:
    """Print full module docstring for a command."""
    commands = registry.all_commands()

    if topic is None:
        print('Available commands:\n')
        for name, cmd in sorted(commands.items()):
            print(f'  {name:<12} {_short_doc(name, cmd.help)}')
        print('\nRun: color-lsp help <command> for full docs.')
        return

    if topic not in commands:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(commands))}', file=sys.stderr)
        sys.exit(1)

    doc = (_load_command_module(topic).__doc__ or '').strip()
    if not doc:
        print(f'(No module docs for {topic!r})')
        return
    print(doc)


def _load_documents(paths: list[str]) -> list[Document]:
    documents = []
    for path in paths:
        if not os.path.isfile(path):
            print(f'Error: file not found: {path}', file=sys.stderr)
            sys.exit(1)
        with open(path, encoding='utf-8', errors='replace') as f:
            documents.append(Document(path=path, text=f.read()))
    return documents


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Load .env before anything else; OS env vars always win
    env_path = load_env(env_file=args.env_file)
    if env_path:
        print(f'color-lsp: loaded {env_path}', file=sys.stderr)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'help':
        _print_help(args.topic)
        return

    try:
        args.settings = load_settings()
    except ValueError as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)

    documents = _load_documents(args.paths)

    report = Report()
    cmd = registry.get(args.command)
    cmd.execute(documents, report, args)

    if args.json:
        print(format_json(report))
    else:
        print(format_text(report))


if __name__ == '__main__':
    main()
