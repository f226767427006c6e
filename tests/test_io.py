from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from locations_cache.io import dumps_json, ensure_dir, write_text
from locations_cache.models import SheetTable


def test_ensure_dir_is_recursive_and_idempotent(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "c"

    assert ensure_dir(target) == target
    assert ensure_dir(target) == target
    assert target.is_dir()


def test_dumps_json_preserves_key_order_and_indent() -> None:
    assert dumps_json({"b": 1, "a": [1, 2]}) == '{\n  "b": 1,\n  "a": [\n    1,\n    2\n  ]\n}'


def test_dumps_json_serializes_paths_dates_and_models() -> None:
    text = dumps_json(
        {
            "when": datetime(2024, 1, 2, 3, 4, 5),
            "where": Path("foo/bar"),
            "table": SheetTable(headers=["h"], rows=[]),
        }
    )

    assert '"when": "2024-01-02T03:04:05"' in text
    assert '"where": "foo/bar"' in text
    assert '"weightedColumns": [\n      false\n    ]' in text


def test_dumps_json_raises_on_unknown_type() -> None:
    class Unknown:
        pass

    with pytest.raises(TypeError, match="not JSON serializable"):
        dumps_json({"x": Unknown()})


def test_dumps_json_rejects_infinity() -> None:
    with pytest.raises(ValueError):
        dumps_json({"x": float("inf")})


def test_write_text_replaces_existing_file(tmp_path: Path) -> None:
    path = tmp_path / "artifact.json"
    path.write_text("previous", encoding="utf-8")

    out = write_text(path, '{"a": "Zürich"}')

    assert out == path
    assert path.read_text(encoding="utf-8") == '{"a": "Zürich"}'
