"""Shared helpers — timestamps."""

from __future__ import annotations

import time
from datetime import datetime, timezone


def utcnow_iso() -> str:
    """Return the current UTC time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def epoch_millis() -> int:
    """Return the current Unix time in whole milliseconds."""
    return time.time_ns() // 1_000_000
