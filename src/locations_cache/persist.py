"""Cache persistence — write the configuration and sector cache files."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from locations_cache.config import SyncSettings
from locations_cache.io import dumps_json, ensure_dir, write_text
from locations_cache.models import CacheDocument, CacheMetadata, SheetTable
from locations_cache.utils import utcnow_iso

LOCATIONS_CACHE_FILE = "locations-cache.json"
SECTORS_CACHE_FILE = "locations-sectors-cache.json"


def build_locations_cache(
    config_group: Mapping[str, SheetTable], settings: SyncSettings, timestamp: str
) -> CacheDocument:
    """Document for ``locations-cache.json``; metadata lists the configured sheets."""
    metadata = CacheMetadata(
        total_sheets=len(settings.config_sheets),
        sheets=[sheet.name for sheet in settings.config_sheets],
        spreadsheet_id=settings.spreadsheet_id,
    )
    return CacheDocument(timestamp=timestamp, metadata=metadata, data=dict(config_group))


def build_sectors_cache(
    sector_group: Mapping[str, SheetTable], settings: SyncSettings, timestamp: str
) -> CacheDocument:
    """Document for ``locations-sectors-cache.json``; metadata lists the fetched sectors."""
    metadata = CacheMetadata(
        total_sheets=len(settings.sector_sheets),
        sectors=list(sector_group),
        spreadsheet_id=settings.spreadsheet_id,
    )
    return CacheDocument(timestamp=timestamp, metadata=metadata, data=dict(sector_group))


def persist(
    config_group: Mapping[str, SheetTable],
    sector_group: Mapping[str, SheetTable],
    settings: SyncSettings,
    *,
    timestamp: str | None = None,
) -> tuple[Path, Path]:
    """Write both cache files into ``settings.cache_dir``.

    Returns ``(locations_path, sectors_path)``. Existing files are
    overwritten. Both documents are serialized before either file is
    written, so a serialization error leaves both previous files in place.
    """
    cache_dir = ensure_dir(settings.cache_dir)
    stamp = timestamp or utcnow_iso()

    locations = build_locations_cache(config_group, settings, stamp)
    sectors = build_sectors_cache(sector_group, settings, stamp)

    locations_text = dumps_json(locations.to_dict())
    sectors_text = dumps_json(sectors.to_dict())

    locations_path = write_text(cache_dir / LOCATIONS_CACHE_FILE, locations_text)
    sectors_path = write_text(cache_dir / SECTORS_CACHE_FILE, sectors_text)
    return locations_path, sectors_path
