"""Source registry — which spreadsheet ranges get cached, and where."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from locations_cache import SECTOR_PREFIX
from locations_cache.models import SheetConfig

SPREADSHEET_ID = "1Ewhi3YCL-dUWZ3YrHpsmWt4goza-5c1FbDyfDcw26lw"
BASE_URL = "https://docs.google.com"

CONFIG_SHEETS: tuple[SheetConfig, ...] = (
    SheetConfig("locations", "880351439"),
    SheetConfig("config", "940884547"),
)

# Sector slug -> gid of its Sector_Data_* tab.
SECTOR_SHEET_GIDS: tuple[tuple[str, str], ...] = (
    ("fintech", "99479904"),
    ("defence", "392696859"),
    ("space", "1597782923"),
    ("deeptech", "1185161894"),
    ("ai", "1352531442"),
    ("energy", "288774328"),
    ("lifesciences", "2015834289"),
    ("healthmedtech", "739796238"),
    ("cybersecurity", "1032292773"),
    ("robotics", "79509439"),
    ("transportation", "1908851490"),
    ("food", "1086569817"),
    ("semiconductors", "1161961483"),
    ("crypto", "445413038"),
    ("climatetech", "1625161302"),
    ("gaming", "698117399"),
)

CACHE_SUBDIR = Path("public") / "cached-data"


@dataclass(frozen=True)
class SyncSettings:
    """Everything one sync run needs, built once at process start.

    ``sector_sheets`` hold bare slugs (``fintech``); the ``sector_`` prefix
    is added by :func:`build_registry`.
    """

    spreadsheet_id: str
    config_sheets: tuple[SheetConfig, ...]
    sector_sheets: tuple[SheetConfig, ...]
    cache_dir: Path
    base_url: str = BASE_URL

    def __post_init__(self) -> None:
        if not self.spreadsheet_id:
            raise ValueError("spreadsheet_id must not be empty")
        object.__setattr__(self, "config_sheets", tuple(self.config_sheets))
        object.__setattr__(self, "sector_sheets", tuple(self.sector_sheets))
        object.__setattr__(self, "cache_dir", Path(self.cache_dir))
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

        for sheet in self.config_sheets:
            if sheet.name.startswith(SECTOR_PREFIX):
                raise ValueError(
                    f"Configuration sheet {sheet.name!r} must not start with {SECTOR_PREFIX!r}"
                )
        names = [s.name for s in build_registry(self)]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate sheet names in registry: {', '.join(duplicates)}")


def build_registry(settings: SyncSettings) -> tuple[SheetConfig, ...]:
    """Return every sheet to fetch: configuration sheets first, then sectors."""
    sectors = tuple(
        SheetConfig(f"{SECTOR_PREFIX}{sheet.name}", sheet.range_id)
        for sheet in settings.sector_sheets
    )
    return settings.config_sheets + sectors


def default_settings(cwd: Path | None = None) -> SyncSettings:
    """Return the production settings, caching under ``<cwd>/public/cached-data``."""
    root = Path.cwd() if cwd is None else Path(cwd)
    return SyncSettings(
        spreadsheet_id=SPREADSHEET_ID,
        config_sheets=CONFIG_SHEETS,
        sector_sheets=tuple(SheetConfig(slug, gid) for slug, gid in SECTOR_SHEET_GIDS),
        cache_dir=root / CACHE_SUBDIR,
    )
