"""Data models used across the package."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from numbers import Integral
from typing import Any


def _to_non_negative_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise TypeError(f"{field_name} must be an integer")
    result = int(value)
    if result < 0:
        raise ValueError(f"{field_name} must be >= 0")
    return result


def _to_string_list(values: Sequence[Any] | None, field_name: str) -> list[str]:
    if values is None:
        return []
    if isinstance(values, str):
        raise TypeError(f"{field_name} must be a sequence of strings")
    normalized: list[str] = []
    for item in values:
        if not isinstance(item, str):
            raise TypeError(f"{field_name} items must be strings")
        normalized.append(item)
    return normalized


def _to_non_empty_str(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{field_name} must be a string")
    if not value:
        raise ValueError(f"{field_name} must not be empty")
    return value


@dataclass(frozen=True)
class SheetConfig:
    """One remote range: a logical name plus the sheet's gid."""

    name: str
    range_id: str

    def __post_init__(self) -> None:
        _to_non_empty_str(self.name, "name")
        _to_non_empty_str(self.range_id, "range_id")


@dataclass
class SheetTable:
    """Normalized contents of one sheet.

    ``weighted_columns`` is always ``[False] * len(headers)``; it is kept
    only so the cache files keep their existing shape.
    """

    headers: list[str] = field(default_factory=list)
    rows: list[list[Any]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.headers = _to_string_list(self.headers, "headers")
        if isinstance(self.rows, str):
            raise TypeError("rows must be a sequence of rows")
        normalized: list[list[Any]] = []
        for row in self.rows:
            if isinstance(row, str) or not isinstance(row, Sequence):
                raise TypeError("rows items must be sequences of cells")
            normalized.append(list(row))
        self.rows = normalized

    @property
    def weighted_columns(self) -> list[bool]:
        return [False] * len(self.headers)

    def to_dict(self) -> dict[str, Any]:
        return {
            "headers": list(self.headers),
            "rows": [list(row) for row in self.rows],
            "weightedColumns": self.weighted_columns,
        }


@dataclass
class CacheMetadata:
    """Metadata block of a cache file.

    Exactly one of ``sheets`` (configuration cache) or ``sectors`` (sector
    cache) is set.
    """

    total_sheets: int = 0
    spreadsheet_id: str = ""
    sheets: list[str] | None = None
    sectors: list[str] | None = None

    def __post_init__(self) -> None:
        self.total_sheets = _to_non_negative_int(self.total_sheets, "total_sheets")
        if (self.sheets is None) == (self.sectors is None):
            raise ValueError("exactly one of sheets or sectors must be set")
        if self.sheets is not None:
            self.sheets = _to_string_list(self.sheets, "sheets")
        if self.sectors is not None:
            self.sectors = _to_string_list(self.sectors, "sectors")

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"totalSheets": self.total_sheets}
        if self.sheets is not None:
            payload["sheets"] = list(self.sheets)
        if self.sectors is not None:
            payload["sectors"] = list(self.sectors)
        payload["spreadsheetId"] = self.spreadsheet_id
        return payload


@dataclass
class CacheDocument:
    """One JSON cache file: timestamps, metadata and the sheet tables."""

    timestamp: str
    metadata: CacheMetadata
    data: Mapping[str, SheetTable] = field(default_factory=dict)
    last_updated: str = ""

    def __post_init__(self) -> None:
        if not self.last_updated:
            self.last_updated = self.timestamp

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "lastUpdated": self.last_updated,
            "metadata": self.metadata.to_dict(),
            "data": {name: table.to_dict() for name, table in self.data.items()},
        }
