"""Environment and .env configuration for store-palette.

Load order (first wins):
  1. Existing OS environment variables: never overwrite.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Settings read from the environment:
  STORE_PALETTE_DB        record store file (default .store-palette/stores.json)
  STORE_PALETTE_PROVIDER  default LLM provider for `generate` (default openai)
  {PROVIDER}_API_KEY      required by `generate`
  {PROVIDER}_API_URL      OpenAI-compatible base URL (defaults for known providers)
  {PROVIDER}_MODEL        optional model override
"""

import os
from pathlib import Path

DEFAULT_DB_PATH = os.path.join('.store-palette', 'stores.json')
DEFAULT_PROVIDER = 'openai'
DEFAULT_MODEL = 'gpt-4o-mini'

_DEFAULT_URLS: dict[str, str] = {
    'openai': 'https://api.openai.com/v1',
    'groq': 'https://api.groq.com/openai/v1',
    'mistral': 'https://api.mistral.ai/v1',
}

_DEFAULT_MODELS: dict[str, str] = {
    'openai': DEFAULT_MODEL,
    'groq': 'llama-3.3-70b-versatile',
    'mistral': 'mistral-medium-2505',
}


def _find_dotenv(start: Path) -> Path | None:
    """Walk up from start to the nearest .env, giving up at a .git boundary."""
    current = start.resolve()
    while True:
        if (current / '.env').is_file():
            return current / '.env'
        if (current / '.git').exists() or current.parent == current:
            return None
        current = current.parent


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Parse KEY=value lines. Accepts `export` prefixes, quotes and trailing comments."""
    result: dict[str, str] = {}
    for raw_line in path.read_text(encoding='utf-8').splitlines():
        line = raw_line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        if line.startswith('export '):
            line = line[len('export ') :].lstrip()
        key, _, value = line.partition('=')
        key = key.strip()
        value = value.strip()
        if value[:1] in ('"', "'") and value.count(value[0]) >= 2:
            value = value[1 : value.index(value[0], 1)]
        elif ' #' in value:
            value = value.split(' #', 1)[0].rstrip()
        if key:
            result[key] = value
    return result


def load_env(env_file: str | None = None) -> Path | None:
    """Load .env into os.environ for keys not already set.

    Returns the path that was loaded, or None if no .env was found/used.
    """
    path = Path(env_file) if env_file else _find_dotenv(Path.cwd())
    if path is None or not path.is_file():
        return None
    for key, value in _parse_dotenv(path).items():
        os.environ.setdefault(key, value)
    return path


def db_path() -> str:
    return os.environ.get('STORE_PALETTE_DB') or DEFAULT_DB_PATH


def default_provider() -> str:
    return (os.environ.get('STORE_PALETTE_PROVIDER') or DEFAULT_PROVIDER).lower()


def resolve_provider(provider: str, explicit_key: str | None = None) -> tuple[str, str, str]:
    """Resolve (api_key, api_url, model) from env vars for the given provider name."""
    prefix = provider.upper()
    api_key = explicit_key or os.environ.get(f'{prefix}_API_KEY') or ''
    api_url = os.environ.get(f'{prefix}_API_URL') or _DEFAULT_URLS.get(provider, '')
    model = os.environ.get(f'{prefix}_MODEL') or _DEFAULT_MODELS.get(provider, DEFAULT_MODEL)
    return api_key, api_url, model
