"""locations-cache — Sync Google Sheets ranges into local JSON caches."""

__version__ = "0.2.0"

SECTOR_PREFIX: str = "sector_"
