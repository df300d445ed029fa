"""Configuration management for postcrawl."""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .constants import API_KEY_PREFIX, DEFAULT_MAX_RETRIES, DEFAULT_RETRY_DELAY_MS, DEFAULT_TIMEOUT_MS
from .models.config import ClientConfig

log = logging.getLogger(__name__)

# Application name for XDG paths
APP_NAME = "postcrawl"

BASE_URL_ENV = "POSTCRAWL_BASE_URL"

# Default configuration
DEFAULT_CONFIG: dict[str, Any] = {
    "client": {
        "base_url": None,  # None = production endpoint
        "timeout_ms": DEFAULT_TIMEOUT_MS,  # 0 = no timeout
        "max_retries": DEFAULT_MAX_RETRIES,
        "retry_delay_ms": DEFAULT_RETRY_DELAY_MS,  # linear backoff unit
    },
}

# config.json "client" keys and the ClientConfig fields they feed
CLIENT_OPTIONS = {
    "base_url": "base_url",
    "timeout_ms": "timeout",
    "max_retries": "max_retries",
    "retry_delay_ms": "retry_delay",
}


def get_xdg_config_home() -> Path:
    """Get XDG config home directory."""
    return Path(os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config")))


def get_config_path() -> Path:
    """Get the path to the config file."""
    return get_xdg_config_home() / APP_NAME / "config.json"


def load_config() -> dict[str, Any]:
    """Load configuration, merging with defaults."""
    config = deep_merge(DEFAULT_CONFIG, {})
    config_path = get_config_path()

    if config_path.exists():
        with open(config_path) as f:
            user_config = json.load(f)
        config = deep_merge(config, user_config)
        log.debug("Loaded config from %s", config_path)

    return config


def save_config(config: dict[str, Any]) -> None:
    """Save configuration to file."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        json.dump(config, f, indent=2)


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def resolve_client_options(
    base_url: str | None = None,
    timeout: int | None = None,
    max_retries: int | None = None,
    retry_delay: int | None = None,
) -> dict[str, Any]:
    """Resolve client options.

    Priority:
    1. Explicit arguments
    2. POSTCRAWL_BASE_URL environment variable (base URL only)
    3. client.* in config.json
    4. Built-in defaults

    Unset values are left out so ClientConfig's own defaults apply.
    """
    client_cfg = load_config().get("client", {})
    explicit = {
        "base_url": base_url or os.environ.get(BASE_URL_ENV) or None,
        "timeout": timeout,
        "max_retries": max_retries,
        "retry_delay": retry_delay,
    }

    options: dict[str, Any] = {}
    for name, field in CLIENT_OPTIONS.items():
        value = explicit[field]
        if value is None:
            value = client_cfg.get(name)
        if value is not None:
            options[field] = value
    return options


def check_client_option(name: str, value: Any) -> Any:
    """Validate one ``client.*`` setting the way PostCrawlClient will read it.

    Returns the normalized value; ``None`` restores the built-in default.
    Raises ``KeyError`` for unknown options and ``ValueError`` for bad values.
    """
    if name not in CLIENT_OPTIONS:
        raise KeyError(name)
    if value is None:
        return None

    field = CLIENT_OPTIONS[name]
    try:
        checked = ClientConfig.model_validate({"api_key": API_KEY_PREFIX, field: value})
    except PydanticValidationError as e:
        raise ValueError(e.errors()[0]["msg"]) from e
    return getattr(checked, field)
