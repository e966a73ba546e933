"""Settings for the color-lsp command line, read from the environment.

Load order (first wins):
  1. Existing OS environment variables, never overwritten.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Recognised variables:
  COLOR_LSP_PICKER_URL   base URL for the hover "Color Picker" link
  COLOR_LSP_SWATCH_SIZE  WIDTHxHEIGHT of PNG swatches (default 128x32)
"""

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from color_lsp.core.formatter import COLOR_PICKER_URL

PICKER_URL_VAR = 'COLOR_LSP_PICKER_URL'
SWATCH_SIZE_VAR = 'COLOR_LSP_SWATCH_SIZE'
DEFAULT_SWATCH_SIZE = (128, 32)

_SIZE_PATTERN = re.compile(r'^\s*(\d+)\s*[xX]\s*(\d+)\s*$')


@dataclass(frozen=True)
class Settings:
    picker_url: str = COLOR_PICKER_URL
    swatch_size: tuple[int, int] = DEFAULT_SWATCH_SIZE


def find_dotenv(start: Path) -> Path | None:
    """Walk up from start, return first .env found, stop at .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / '.env'
        if candidate.is_file():
            return candidate
        # .git can be a dir (normal clone) or a file (worktree)
        if (current / '.git').exists():
            return None
        parent = current.parent
        if parent == current:
            return None
        current = parent


def parse_dotenv(path: Path) -> dict[str, str]:
    """Parse KEY=value lines. Quotes are stripped, `export ` prefixes ignored."""
    result: dict[str, str] = {}
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, _, raw_value = line.partition('=')
        key = key.strip().removeprefix('export ').strip()
        if key:
            result[key] = raw_value.strip().strip('"').strip("'")
    return result


def load_env(env_file: str | None = None) -> Path | None:
    """Load .env into os.environ for keys not already set.

    Returns the path that was loaded, or None if no .env was found/used.
    """
    if env_file:
        path = Path(env_file)
        if not path.is_file():
            return None
    else:
        path = find_dotenv(Path.cwd())
        if path is None:
            return None

    for key, value in parse_dotenv(path).items():
        os.environ.setdefault(key, value)
    return path


def parse_size(value: str) -> tuple[int, int]:
    """Parse `WIDTHxHEIGHT`. Raises ValueError on anything else."""
    m = _SIZE_PATTERN.match(value)
    if not m:
        raise ValueError(f'{SWATCH_SIZE_VAR} must look like 128x32, got {value!r}')
    width, height = int(m.group(1)), int(m.group(2))
    if width == 0 or height == 0:
        raise ValueError(f'{SWATCH_SIZE_VAR} must be non-zero, got {value!r}')
    return width, height


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    size = env.get(SWATCH_SIZE_VAR)
    return Settings(
        picker_url=env.get(PICKER_URL_VAR) or COLOR_PICKER_URL,
        swatch_size=parse_size(size) if size else DEFAULT_SWATCH_SIZE,
    )
