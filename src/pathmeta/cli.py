"""
Main CLI dispatcher for pathmeta.

Usage:
    pathmeta init                        # Initialize .pathmeta/ directory
    pathmeta meta [derive|list|show|stats|apply]
    pathmeta config [show|get|set|path]
"""

import logging

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler

from pathmeta import __version__

console = Console()


class Context:
    """Shared context for all commands."""

    def __init__(self, verbose: bool = False, dry_run: bool = False):
        self.verbose = verbose
        self.dry_run = dry_run
        self.console = console


pass_context = click.make_pass_decorator(Context, ensure=True)


def configure_logging(verbose: bool = False) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__, prog_name="pathmeta")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("-n", "--dry-run", is_flag=True, help="Preview without making changes")
@click.pass_context
def main(ctx: click.Context, verbose: bool, dry_run: bool) -> None:
    """Derive content metadata from content file paths.

    Slugs, sort positions, locales and draft/partial flags for a
    filesystem-backed content tree.
    """
    configure_logging(verbose)
    ctx.obj = Context(verbose=verbose, dry_run=dry_run)

    if dry_run:
        console.print("[yellow]DRY RUN MODE - No changes will be made[/yellow]")


@main.command()
@click.option("--force", "-f", is_flag=True, help="Overwrite existing .pathmeta/ config")
@click.pass_obj
def init(ctx, force: bool) -> None:
    """Initialize .pathmeta/ directory in the current directory."""
    from pathlib import Path

    from pathmeta.core.config import (
        CONFIG_DIR_NAME,
        CONFIG_FILE_NAME,
        default_config_data,
    )

    dry_run = ctx.dry_run if ctx else False

    site_root = Path.cwd()
    config_dir = site_root / CONFIG_DIR_NAME
    config_file = config_dir / CONFIG_FILE_NAME

    if config_file.exists() and not force:
        console.print(f"[yellow]{CONFIG_DIR_NAME}/ already exists at {config_dir}[/yellow]")
        console.print("[dim]Use --force to reinitialize.[/dim]")
        return

    console.print(f"[cyan]Initializing {CONFIG_DIR_NAME}/ at {site_root}[/cyan]")

    if not dry_run:
        config_dir.mkdir(parents=True, exist_ok=True)
        config_file.write_text(
            yaml.dump(default_config_data(), default_flow_style=False, sort_keys=False),
            encoding="utf-8",
        )
    console.print(f"  [green]Created[/green] {config_file.relative_to(site_root)}")

    console.print()
    if dry_run:
        console.print("[yellow]DRY RUN - no changes made[/yellow]")
    else:
        console.print(f"[green]Done![/green] {CONFIG_DIR_NAME}/ directory initialized.")


# Import and register command groups (imports after main definition intentional)
from pathmeta.config.commands import config  # noqa: E402
from pathmeta.content.commands import meta  # noqa: E402

main.add_command(meta)
main.add_command(config)


if __name__ == "__main__":
    main()
