"""Per-sheet failures raised by the fetch and parse stages."""

from __future__ import annotations


class SheetSyncError(Exception):
    """Base class for failures that skip a single sheet."""

    def __init__(self, sheet_name: str, message: str) -> None:
        super().__init__(message)
        self.sheet_name = sheet_name


class FetchError(SheetSyncError):
    """The HTTP request failed or returned a non-success status."""

    def __init__(
        self,
        sheet_name: str,
        message: str,
        *,
        status_code: int | None = None,
        status_text: str | None = None,
    ) -> None:
        super().__init__(sheet_name, message)
        self.status_code = status_code
        self.status_text = status_text


class ParseError(SheetSyncError):
    """The response envelope or its JSON body could not be read."""


class NoDataError(SheetSyncError):
    """The response parsed but carries no ``table.rows``."""
