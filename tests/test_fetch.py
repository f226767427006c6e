from __future__ import annotations

from pathlib import Path

import pytest
import requests

from locations_cache import fetch as fetch_mod
from locations_cache.config import SyncSettings
from locations_cache.errors import FetchError
from locations_cache.fetch import build_url, fetch_sheet
from locations_cache.models import SheetConfig


class _FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "", reason: str = "OK") -> None:
        self.status_code = status_code
        self.text = text
        self.reason = reason


class _FakeSession:
    def __init__(self, response: _FakeResponse) -> None:
        self.response = response
        self.calls: list[dict[str, object]] = []

    def get(self, url: str, **kwargs: object) -> _FakeResponse:
        self.calls.append({"url": url, **kwargs})
        return self.response


def _settings(tmp_path: Path) -> SyncSettings:
    return SyncSettings(
        spreadsheet_id="sheet-id",
        config_sheets=(SheetConfig("locations", "880351439"),),
        sector_sheets=(),
        cache_dir=tmp_path,
    )


def test_build_url_matches_gviz_template(tmp_path: Path) -> None:
    url = build_url(_settings(tmp_path), SheetConfig("locations", "880351439"), 1700000000123)

    assert url == (
        "https://docs.google.com/spreadsheets/d/sheet-id/gviz/tq"
        "?tqx=out:json&gid=880351439&headers=1&timestamp=1700000000123"
    )


def test_fetch_sheet_returns_text_and_busts_cache(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setattr(fetch_mod, "epoch_millis", lambda: 42)
    session = _FakeSession(_FakeResponse(text="setResponse({})"))

    text = fetch_sheet(SheetConfig("locations", "880351439"), _settings(tmp_path), session=session)  # type: ignore[arg-type]

    assert text == "setResponse({})"
    assert len(session.calls) == 1
    assert str(session.calls[0]["url"]).endswith("&gid=880351439&headers=1&timestamp=42")
    assert session.calls[0]["timeout"] is None


def test_fetch_sheet_uses_requests_get_without_session(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    calls: list[str] = []

    def _fake_get(url: str, **kwargs: object) -> _FakeResponse:
        del kwargs
        calls.append(url)
        return _FakeResponse(text="body")

    monkeypatch.setattr(requests, "get", _fake_get)

    assert fetch_sheet(SheetConfig("config", "940884547"), _settings(tmp_path)) == "body"
    assert "gid=940884547" in calls[0]


def test_fetch_sheet_non_success_status_raises(tmp_path: Path) -> None:
    session = _FakeSession(_FakeResponse(status_code=500, reason="Internal Server Error"))

    with pytest.raises(FetchError, match="Internal Server Error") as exc_info:
        fetch_sheet(SheetConfig("locations", "1"), _settings(tmp_path), session=session)  # type: ignore[arg-type]

    assert exc_info.value.sheet_name == "locations"
    assert exc_info.value.status_code == 500
    assert exc_info.value.status_text == "Internal Server Error"


def test_fetch_sheet_wraps_transport_errors(tmp_path: Path) -> None:
    class _BrokenSession:
        def get(self, url: str, **kwargs: object) -> _FakeResponse:
            raise requests.ConnectionError("connection refused")

    with pytest.raises(FetchError, match="connection refused") as exc_info:
        fetch_sheet(SheetConfig("locations", "1"), _settings(tmp_path), session=_BrokenSession())  # type: ignore[arg-type]

    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.__cause__, requests.ConnectionError)
