"""Environment and settings loading for navtile-tool.

Load order (first wins):
  1. Existing OS environment variables. These are never overwritten.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Walking stops at .git so we never load a .env from outside the repo.

Recognised variables:
  NAVTILE_STRATEGY     strategy for the `encode` command (default: perceptual)
  NAVTILE_DIAGNOSTICS  print per-pixel swatches (1/true/yes/on)
  NAVTILE_PREVIEW      also write a preview PNG next to each .raw
  NAVTILE_LOG_LEVEL    DEBUG, INFO, WARNING or ERROR (default: INFO)
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off', ''}
_LOG_LEVELS = {'DEBUG', 'INFO', 'WARNING', 'ERROR'}


def _find_dotenv(start: Path) -> Path | None:
    """Walk up from start, return first .env found, stop at .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / '.env'
        if candidate.is_file():
            return candidate
        # .git can be a dir (normal clone) or file (worktree)
        if (current / '.git').exists():
            return None
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Parse a .env file into a dict. Handles KEY=value and KEY="value"."""
    result: dict[str, str] = {}
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        if '=' not in line:
            continue
        key, _, raw_value = line.partition('=')
        key = key.strip()
        value = raw_value.strip().strip('"').strip("'")
        if key:
            result[key] = value
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
        path = _find_dotenv(Path.cwd())
        if path is None:
            return None

    parsed = _parse_dotenv(path)
    for key, value in parsed.items():
        if key not in os.environ:
            os.environ[key] = value

    return path


@dataclass(frozen=True)
class Settings:
    strategy: str = 'perceptual'
    diagnostics: bool = False
    preview: bool = False
    log_level: str = 'INFO'


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f'{name} must be a boolean (1/0, true/false, yes/no, on/off), got {raw!r}')


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from NAVTILE_* variables. Call load_env() first to honour .env files."""
    env = os.environ if environ is None else environ
    level = env.get('NAVTILE_LOG_LEVEL', 'INFO').strip().upper()
    if level not in _LOG_LEVELS:
        raise ValueError(f'NAVTILE_LOG_LEVEL must be one of {", ".join(sorted(_LOG_LEVELS))}, got {level!r}')
    return Settings(
        strategy=env.get('NAVTILE_STRATEGY', 'perceptual').strip() or 'perceptual',
        diagnostics=_parse_bool('NAVTILE_DIAGNOSTICS', env.get('NAVTILE_DIAGNOSTICS', '')),
        preview=_parse_bool('NAVTILE_PREVIEW', env.get('NAVTILE_PREVIEW', '')),
        log_level=level,
    )
