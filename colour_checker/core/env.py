"""Configuration for colour-tool from the environment and .env files.

Load order (first wins):
  1. Existing OS environment variables, never overwritten.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Recognised variables:
  COLOUR_TOOL_OUTPUT   'text' (default) or 'json'
  COLOUR_TOOL_SAMPLES  pixel sample cap for census (default 10000)
"""

import os
from dataclasses import dataclass
from pathlib import Path

OUTPUT_FORMATS = ('text', 'json')
DEFAULT_SAMPLES = 10000


@dataclass
class Settings:
    output: str = 'text'
    samples: int = DEFAULT_SAMPLES


def _find_dotenv(start: Path) -> Path | None:
    """Return the nearest .env at or above start, without crossing a .git boundary."""
    for directory in (start.resolve(), *start.resolve().parents):
        candidate = directory / '.env'
        if candidate.is_file():
            return candidate
        if (directory / '.git').exists():
            break
    return None


def _parse_dotenv(path: Path) -> dict[str, str]:
    """KEY=value lines; quotes stripped, comments and malformed lines skipped."""
    pairs = (
        line.partition('=')
        for line in (raw.strip() for raw in path.read_text(encoding='utf-8').splitlines())
        if line and not line.startswith('#') and '=' in line
    )
    return {key.strip(): value.strip().strip('"').strip("'") for key, _, value in pairs if key.strip()}


def load_env(env_file: str | None = None) -> Path | None:
    """Merge a .env file into os.environ without replacing set keys.

    Returns the path that was loaded, or None.
    """
    path = Path(env_file) if env_file else _find_dotenv(Path.cwd())
    if path is None or not path.is_file():
        return None
    for key, value in _parse_dotenv(path).items():
        os.environ.setdefault(key, value)
    return path


def load_settings() -> Settings:
    """Build Settings from os.environ, falling back to defaults for bad values."""
    output = os.environ.get('COLOUR_TOOL_OUTPUT', 'text').strip().lower()
    if output not in OUTPUT_FORMATS:
        output = 'text'
    try:
        samples = int(os.environ.get('COLOUR_TOOL_SAMPLES', DEFAULT_SAMPLES))
    except ValueError:
        samples = DEFAULT_SAMPLES
    return Settings(output=output, samples=max(samples, 1))
