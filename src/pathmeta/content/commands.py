"""CLI commands for path-derived content metadata."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click
from rich.console import Console
from rich.prompt import Confirm
from rich.table import Table

from pathmeta.content.path_meta import PATH_META_FIELDS

if TYPE_CHECKING:
    from pathmeta.content.loader import ContentRecord
    from pathmeta.core.config import LocaleConfig, SiteConfig

console = Console()


def _site_config() -> SiteConfig:
    """Load the site configuration or fail with a CLI error."""
    from pathmeta.core.config import load_site_config

    try:
        return load_site_config()
    except FileNotFoundError as e:
        raise click.ClickException(str(e)) from e


def _locale_config(locales: tuple[str, ...], default_locale: str | None) -> LocaleConfig:
    """Locale configuration from options, falling back to the site config."""
    from pathmeta.core.config import LocaleConfig

    if locales or default_locale:
        return LocaleConfig.from_dict({"locales": list(locales), "default_locale": default_locale})
    try:
        return _site_config().locales
    except click.ClickException:
        return LocaleConfig()


def _json_default(value: Any) -> str:
    return str(value)


def _record_dict(record: ContentRecord) -> dict[str, Any]:
    return {"id": record.id, "path": str(record.path), "meta": record.meta}


@click.group(name="meta")
def meta() -> None:
    """Derive slugs, positions and flags from content paths."""
    pass


@meta.command(name="derive")
@click.argument("content_id")
@click.option("-l", "--locale", "locales", multiple=True, help="Recognized locale code (repeatable)")
@click.option("--default-locale", help="Locale used when the path has none")
@click.option("--title", help="Existing title to keep")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def derive(
    content_id: str,
    locales: tuple[str, ...],
    default_locale: str | None,
    title: str | None,
    as_json: bool,
) -> None:
    """Derive metadata for a single content identifier.

    \b
    Examples:
        pathmeta meta derive content:guide/01.intro.md
        pathmeta meta derive content:fr/guide/intro.md -l en -l fr --json
    """
    from pathmeta.content.path_meta import derive_path_meta

    patch = derive_path_meta(
        content_id, _locale_config(locales, default_locale), title=title
    )

    if as_json:
        click.echo(json.dumps(patch.as_dict(), indent=2))
        return

    table = Table(title=content_id, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for key, value in patch.as_dict().items():
        table.add_row(key, str(value))
    console.print(table)


@meta.command(name="list")
@click.option("--drafts", is_flag=True, help="Include draft content")
@click.option("--partials", is_flag=True, help="Include partial content")
@click.option("-l", "--locale", help="Only show content in this locale")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_cmd(drafts: bool, partials: bool, locale: str | None, as_json: bool) -> None:
    """List content ordered by position.

    \b
    Examples:
        pathmeta meta list
        pathmeta meta list --drafts --locale fr
    """
    from pathmeta.content.pipeline import build_index

    records = build_index(
        _site_config(), include_drafts=drafts, include_partials=partials, locale=locale
    )

    if as_json:
        click.echo(json.dumps([_record_dict(r) for r in records], indent=2, default=_json_default))
        return

    if not records:
        console.print("[yellow]No content found.[/yellow]")
        return

    table = Table(title=f"Content ({len(records)})")
    table.add_column("Position", style="dim")
    table.add_column("Slug", style="cyan")
    table.add_column("Title")
    table.add_column("Locale")
    table.add_column("Flags", style="yellow")

    for record in records:
        flags = []
        if record.is_draft:
            flags.append("draft")
        if record.is_partial:
            flags.append("partial")
        table.add_row(
            record.position,
            record.slug,
            record.title,
            record.locale or "",
            ", ".join(flags),
        )

    console.print(table)


@meta.command(name="show")
@click.argument("slug")
@click.option("-l", "--locale", help="Locale of the content")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show(slug: str, locale: str | None, as_json: bool) -> None:
    """Show metadata for the content at SLUG."""
    from pathmeta.content.pipeline import build_index, find_by_slug

    records = build_index(_site_config(), include_drafts=True, include_partials=True)
    record = find_by_slug(records, slug, locale=locale)
    if record is None:
        raise click.ClickException(f"No content found at {slug}")

    if as_json:
        click.echo(json.dumps(_record_dict(record), indent=2, default=_json_default))
        return

    console.print(f"[bold]{record.title}[/bold]")
    console.print(f"  [dim]{record.id}[/dim]")
    for key, value in record.meta.items():
        console.print(f"  [cyan]{key}[/cyan]: {value}")


@meta.command(name="stats")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def stats(as_json: bool) -> None:
    """Show content statistics."""
    from pathmeta.content.pipeline import build_index, summarize

    summary = summarize(
        build_index(_site_config(), include_drafts=True, include_partials=True)
    )

    if as_json:
        click.echo(json.dumps(summary, indent=2))
        return

    console.print(f"[green]Total:[/green] {summary['total']}")
    console.print(f"[green]Published:[/green] {summary['published']}")
    console.print(f"[yellow]Drafts:[/yellow] {summary['drafts']}")
    console.print(f"[yellow]Partials:[/yellow] {summary['partials']}")
    for code, count in sorted(summary["by_locale"].items()):
        console.print(f"  [cyan]{code}[/cyan] {count}")


@meta.command(name="apply")
@click.option(
    "-f", "--field", "fields", multiple=True,
    type=click.Choice(PATH_META_FIELDS),
    help="Field to write (default: all derived fields)",
)
@click.option("-y", "--yes", is_flag=True, help="Apply without confirmation")
@click.pass_obj
def apply(ctx, fields: tuple[str, ...], yes: bool) -> None:
    """Write derived metadata into markdown front matter.

    \b
    Examples:
        pathmeta meta apply --field slug --field position
        pathmeta --dry-run meta apply
    """
    from pathmeta.content.frontmatter import write_path_meta
    from pathmeta.content.pipeline import build_index

    dry_run = ctx.dry_run if ctx else False
    selected = fields or PATH_META_FIELDS

    records = [
        r for r in build_index(_site_config(), include_drafts=True, include_partials=True)
        if r.is_markdown
    ]
    if not records:
        console.print("[yellow]No markdown content found.[/yellow]")
        return

    if not yes and not dry_run:
        if not Confirm.ask(
            f"Write {', '.join(selected)} into {len(records)} file(s)?", default=True
        ):
            console.print("[dim]Cancelled[/dim]")
            return

    updated = 0
    for record in records:
        if write_path_meta(record, selected, dry_run=dry_run):
            updated += 1
            action = "Would update" if dry_run else "Updated"
            console.print(f"  [green]{action}[/green] {record.id}")

    console.print()
    console.print(f"[green]Updated: {updated}[/green]")
    console.print(f"[dim]Unchanged: {len(records) - updated}[/dim]")
