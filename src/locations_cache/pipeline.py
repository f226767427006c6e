"""Fetch + parse every registry entry, then split the results into groups."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping

import requests

from locations_cache import SECTOR_PREFIX
from locations_cache.config import SyncSettings
from locations_cache.errors import SheetSyncError
from locations_cache.fetch import fetch_sheet
from locations_cache.models import SheetConfig, SheetTable
from locations_cache.parse import parse_response


def _noop(*_args: object, **_kwargs: object) -> None:
    return None


def aggregate(
    configs: Iterable[SheetConfig],
    settings: SyncSettings,
    *,
    session: requests.Session | None = None,
    echo: Callable[..., None] = _noop,
) -> dict[str, SheetTable]:
    """Fetch and parse each sheet in order, skipping the ones that fail.

    A failed sheet is reported through *echo* and left out of the result;
    it never aborts the run.
    """
    tables: dict[str, SheetTable] = {}
    seen: set[str] = set()
    for config in configs:
        if config.name in seen:
            continue
        seen.add(config.name)
        echo(f"[blue]>[/blue] Fetching {config.name} (GID: {config.range_id}) …")
        try:
            raw_text = fetch_sheet(config, settings, session=session)
            table = parse_response(raw_text, config.name)
        except SheetSyncError as exc:
            echo(f"[red]x[/red] {exc}")
            echo(f"  [yellow]![/yellow] Skipping {config.name} and continuing …")
            continue
        tables[config.name] = table
        echo(f"  [green]ok[/green] {config.name}: {len(table.rows)} rows")
    return tables


def split_groups(
    tables: Mapping[str, SheetTable],
) -> tuple[dict[str, SheetTable], dict[str, SheetTable]]:
    """Return ``(config_group, sector_group)``.

    Sector entries are keyed by the name with the ``sector_`` prefix removed.
    """
    config_group: dict[str, SheetTable] = {}
    sector_group: dict[str, SheetTable] = {}
    for name, table in tables.items():
        if name.startswith(SECTOR_PREFIX):
            sector_group[name.replace(SECTOR_PREFIX, "", 1)] = table
        else:
            config_group[name] = table
    return config_group, sector_group
