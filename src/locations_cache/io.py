"""I/O helpers — cache directory and JSON artifacts."""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any


def _json_default(obj: Any) -> Any:
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def ensure_dir(path: Path) -> Path:
    """Create *path* (and parents) if missing; return it."""
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def dumps_json(data: Any) -> str:
    """Serialize *data* as 2-space-indented JSON, preserving key order."""
    return json.dumps(
        data,
        indent=2,
        ensure_ascii=False,
        allow_nan=False,
        default=_json_default,
    )


def write_text(path: Path, text: str) -> Path:
    """Write *text* to *path*, replacing any existing file."""
    path = Path(path)
    path.write_text(text, encoding="utf-8")
    return path

