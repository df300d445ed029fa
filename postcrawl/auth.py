"""API key lookup and checks.

A key passed to the client wins. Otherwise ``POSTCRAWL_API_KEY`` is read from
the environment, then from ``~/.env``.
"""

import logging
import os
from pathlib import Path

from .constants import API_KEY_ENV, API_KEY_PREFIX

log = logging.getLogger(__name__)


def load_env_file(path: Path | None = None) -> dict[str, str]:
    """Parse ``KEY=value`` lines from a .env file (default ``~/.env``).

    Comments, blank lines and lines without ``=`` are skipped; an ``export``
    prefix and matching quotes around the value are removed.
    """
    path = path or Path.home() / ".env"
    if not path.exists():
        return {}

    env: dict[str, str] = {}
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.removeprefix("export ").split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        env[key.strip()] = value
    return env


def get_api_key(key_name: str = API_KEY_ENV) -> str:
    """Return ``key_name`` from the environment or ``~/.env``.

    Raises ``ValueError`` when neither has it.
    """
    value = os.environ.get(key_name)
    if not value:
        value = load_env_file().get(key_name)
        if value:
            log.debug("Using %s from ~/.env", key_name)
    if not value:
        raise ValueError(f"{key_name} not set")
    return value


def resolve_api_key(api_key: str | None = None) -> str:
    """Return a usable API key, looking it up when ``api_key`` is None.

    Raises ``ValueError`` for a missing or empty key, or one without the ``sk_`` prefix.
    """
    if api_key is None:
        api_key = get_api_key()
    if not api_key:
        raise ValueError("API key is required")
    if not api_key.startswith(API_KEY_PREFIX):
        raise ValueError(f"API key must start with '{API_KEY_PREFIX}'")
    return api_key
