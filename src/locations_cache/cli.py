"""CLI entry point for locations-cache."""

from __future__ import annotations

from collections.abc import Callable

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table as RichTable

from locations_cache import SECTOR_PREFIX, __version__
from locations_cache.config import build_registry, default_settings
from locations_cache.persist import persist
from locations_cache.pipeline import aggregate, split_groups
from locations_cache.utils import utcnow_iso

app = typer.Typer(
    name="locations-cache",
    help="locations-cache — Sync Google Sheets ranges into local JSON caches.",
    add_completion=False,
    no_args_is_help=False,
)
console = Console()


def _noop(*_args: object, **_kwargs: object) -> None:
    return None


def _printer(quiet: bool) -> Callable[..., None]:
    return _noop if quiet else console.print


def _err(msg: str) -> None:
    console.print(f"[red]x[/red] {msg}")


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"locations-cache v{__version__}")
        raise typer.Exit()


# ── Callbacks ────────────────────────────────────────────────────


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None, "--version", "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """locations-cache CLI. Runs ``sync`` when no command is given."""
    if ctx.invoked_subcommand is None:
        sync(quiet=False)


# ── sync command ─────────────────────────────────────────────────


@app.command()
def sync(
    quiet: bool = typer.Option(
        False, "--quiet", "-q",
        help="Suppress informational output; still writes both cache files.",
    ),
) -> None:
    """Fetch every sheet and rewrite the JSON cache files."""
    echo = _printer(quiet)
    try:
        settings = default_settings()
        registry = build_registry(settings)

        if not quiet:
            console.print(Panel(
                f"[bold]locations-cache[/bold] v{__version__}\n"
                f"Spreadsheet: {settings.spreadsheet_id}\n"
                f"Output: {settings.cache_dir}",
                title="Fetching fresh Google Sheets data", border_style="blue",
            ))
        echo(f"Fetching {len(registry)} sheets total:")
        echo(f"  - {len(settings.config_sheets)} configuration sheets")
        echo(f"  - {len(settings.sector_sheets)} sector data sheets")

        # ── Fetch + parse ────────────────────────────────────────
        tables = aggregate(registry, settings, echo=echo)
        config_group, sector_group = split_groups(tables)

        # ── Persist ──────────────────────────────────────────────
        timestamp = utcnow_iso()
        locations_path, sectors_path = persist(
            config_group, sector_group, settings, timestamp=timestamp
        )
    except Exception as exc:
        _err(f"Cache update failed: {exc}")
        raise typer.Exit(code=1)

    failed = len(registry) - len(tables)
    echo(f"  Locations cache         -> {locations_path}")
    echo(f"  Locations-sectors cache -> {sectors_path}")
    echo(f"  Total sheets cached: {len(registry)}")
    echo(
        f"    - Configuration sheets: {len(settings.config_sheets)} "
        f"({', '.join(s.name for s in settings.config_sheets)})"
    )
    echo(f"    - Sector data sheets: {len(settings.sector_sheets)}")
    echo(f"  Sectors included: {', '.join(sector_group)}")
    echo(f"  Timestamp: {timestamp}")
    if not quiet:
        status = (
            "[green]Cache updated successfully![/green]"
            if not failed
            else f"[yellow]Cache updated; {failed} sheet(s) skipped[/yellow]"
        )
        console.print(Panel(status, title="Sync Complete", border_style="green"))


# ── sheets command ───────────────────────────────────────────────


@app.command()
def sheets() -> None:
    """List the configured sheets without fetching anything."""
    settings = default_settings()
    tbl = RichTable(title=f"Spreadsheet {settings.spreadsheet_id}", show_lines=False)
    tbl.add_column("Name", style="bold")
    tbl.add_column("GID")
    tbl.add_column("Kind")
    for sheet in build_registry(settings):
        kind = "sector" if sheet.name.startswith(SECTOR_PREFIX) else "configuration"
        tbl.add_row(sheet.name, sheet.range_id, kind)
    console.print(tbl)
