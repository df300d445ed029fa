"""Config commands: inspect and edit the client defaults in config.json."""

import json
import os

import rich_click as click
from rich.syntax import Syntax

from ..config import (
    BASE_URL_ENV,
    CLIENT_OPTIONS,
    check_client_option,
    get_config_path,
    load_config,
    save_config,
)
from ._console import console

CONFIG_KEYS = [f"client.{name}" for name in CLIENT_OPTIONS]


@click.group()
def config():
    """Manage client defaults (base URL, timeout, retries)."""


@config.command("show")
def config_show():
    """Show the merged configuration."""
    cfg = load_config()
    console.print(Syntax(json.dumps(cfg, indent=2), "json", theme="monokai"))
    if os.environ.get(BASE_URL_ENV):
        console.print(f"[dim]{BASE_URL_ENV} is set and overrides client.base_url[/dim]")


@config.command("path")
def config_path():
    """Show configuration file path."""
    console.print(str(get_config_path()))


@config.command("set")
@click.argument("key", type=click.Choice(CONFIG_KEYS))
@click.argument("value")
def config_set(key: str, value: str):
    """Set a client default, e.g. client.max_retries 5.

    \b
    Values are read as JSON; `null` restores the built-in default.
    Times are in milliseconds and timeout_ms 0 disables the timeout.
    """
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = value

    name = key.split(".", 1)[1]
    try:
        checked = check_client_option(name, parsed)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="VALUE") from e

    cfg = load_config()
    cfg["client"][name] = checked
    save_config(cfg)
    console.print(f"Set {key} = {json.dumps(checked)}")
