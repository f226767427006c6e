"""Download one sheet range from the Google Sheets gviz endpoint."""

from __future__ import annotations

import requests

from locations_cache.config import SyncSettings
from locations_cache.errors import FetchError
from locations_cache.models import SheetConfig
from locations_cache.utils import epoch_millis

GVIZ_URL_TEMPLATE = (
    "{base_url}/spreadsheets/d/{spreadsheet_id}/gviz/tq"
    "?tqx=out:json&gid={range_id}&headers=1&timestamp={timestamp}"
)


def build_url(settings: SyncSettings, config: SheetConfig, timestamp_ms: int) -> str:
    """Return the gviz query URL for *config*; *timestamp_ms* busts caches."""
    return GVIZ_URL_TEMPLATE.format(
        base_url=settings.base_url,
        spreadsheet_id=settings.spreadsheet_id,
        range_id=config.range_id,
        timestamp=timestamp_ms,
    )


def fetch_sheet(
    config: SheetConfig,
    settings: SyncSettings,
    *,
    session: requests.Session | None = None,
) -> str:
    """Fetch the raw gviz response text for *config*.

    A single GET, no timeout and no retry.

    Raises
    ------
    FetchError
        On a transport failure or a non-2xx status.
    """
    url = build_url(settings, config, epoch_millis())
    get = session.get if session is not None else requests.get
    try:
        response = get(url, timeout=None)
    except requests.RequestException as exc:
        raise FetchError(config.name, f"Failed to fetch {config.name}: {exc}") from exc

    if not 200 <= response.status_code < 300:
        raise FetchError(
            config.name,
            f"Failed to fetch {config.name}: {response.reason}",
            status_code=response.status_code,
            status_text=response.reason,
        )
    return response.text
