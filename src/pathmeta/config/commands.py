"""
Configuration management CLI commands.

Manages pathmeta settings stored in .pathmeta/config.yaml.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click
import yaml
from rich.console import Console
from rich.table import Table

from pathmeta.core.config import (
    DEFAULT_CONTENT_DIR,
    DEFAULT_IGNORE,
    DEFAULT_MOUNT,
    SiteConfig,
    load_site_config,
)

console = Console()


# Settings with descriptions
CONFIG_SCHEMA: dict[str, dict[str, Any]] = {
    "content_dir": {
        "default": DEFAULT_CONTENT_DIR,
        "type": str,
        "description": "Content directory, relative to the site root",
    },
    "mount": {
        "default": DEFAULT_MOUNT,
        "type": str,
        "description": "Mount point name used as the first identifier segment",
    },
    "locales": {
        "default": [],
        "type": list,
        "description": "Recognized locale codes (comma-separated)",
    },
    "default_locale": {
        "default": None,
        "type": str,
        "description": "Locale for paths without a locale segment",
    },
    "ignore": {
        "default": list(DEFAULT_IGNORE),
        "type": list,
        "description": "Glob patterns skipped while loading content (comma-separated)",
    },
}


def get_config_path() -> Path:
    """Get path to the site config file."""
    return load_site_config().config_file


def load_config() -> dict[str, Any]:
    """Load the raw site configuration file."""
    config_path = get_config_path()
    if not config_path.exists():
        return {}
    loaded = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    return loaded if isinstance(loaded, dict) else {}


def save_config(config: dict[str, Any]) -> None:
    """Save configuration to file (YAML format)."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(
        yaml.dump(config, default_flow_style=False, sort_keys=False), encoding="utf-8"
    )


def _convert(key: str, value: str) -> Any:
    if CONFIG_SCHEMA[key]["type"] is list:
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


def _site_config_or_fail() -> SiteConfig:
    try:
        return load_site_config()
    except FileNotFoundError as e:
        raise click.ClickException(str(e)) from e


@click.group()
def config():
    """Manage pathmeta configuration.

    Settings are stored in .pathmeta/config.yaml.
    """
    pass


@config.command(name="show")
def show_cmd():
    """Show the resolved site configuration."""
    site = _site_config_or_fail()

    table = Table(title="Configuration", show_header=True, header_style="bold cyan")
    table.add_column("Setting")
    table.add_column("Value", style="green")
    table.add_column("Description", style="dim")

    values = {
        "content_dir": str(site.content_dir),
        "mount": site.mount,
        "locales": ", ".join(site.locales.locales) or "-",
        "default_locale": site.locales.default_locale or "-",
        "ignore": ", ".join(site.ignore) or "-",
    }
    for key, schema in CONFIG_SCHEMA.items():
        table.add_row(key, values[key], schema["description"])

    console.print(table)
    console.print(f"\n[dim]Config file: {site.config_file}[/dim]")


@config.command(name="get")
@click.argument("key")
def get_cmd(key: str):
    """Get a configuration value.

    Examples:
        pathmeta config get locales
    """
    _site_config_or_fail()
    if key not in CONFIG_SCHEMA:
        raise click.ClickException(
            f"Unknown setting: {key}. Available: {', '.join(CONFIG_SCHEMA)}"
        )

    config_data = load_config()
    if key in config_data:
        console.print(f"{key} = {config_data[key]}")
    else:
        console.print(f"{key} = {CONFIG_SCHEMA[key]['default']} [dim](default)[/dim]")


@config.command(name="set")
@click.argument("key")
@click.argument("value")
def set_cmd(key: str, value: str):
    """Set a configuration value.

    Examples:
        pathmeta config set locales en,fr
        pathmeta config set default_locale en
    """
    _site_config_or_fail()
    if key not in CONFIG_SCHEMA:
        raise click.ClickException(
            f"Unknown setting: {key}. Available: {', '.join(CONFIG_SCHEMA)}"
        )

    typed_value = _convert(key, value)
    config_data = load_config()
    config_data[key] = typed_value
    save_config(config_data)
    console.print(f"[green]Set {key} = {typed_value}[/green]")


@config.command(name="path")
def path_cmd():
    """Show the config file path."""
    _site_config_or_fail()
    click.echo(str(get_config_path()))
