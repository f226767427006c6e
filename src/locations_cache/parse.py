"""Response parser — unwrap the gviz envelope and normalize the table.

The endpoint answers with JavaScript such as::

    /*O_o*/
    google.visualization.Query.setResponse({"version":"0.6", "table": {...}});

Every field below ``table`` is optional; absent or falsy values fall back to
an empty string (cells, labels) or an empty list (``cols``, ``c``).
"""

from __future__ import annotations

import json
import math
from typing import Any

from locations_cache.errors import NoDataError, ParseError
from locations_cache.models import SheetTable

_INTEGRAL_FLOAT_LIMIT = 1e21


def _is_falsy(value: Any) -> bool:
    """Falsiness as the sheet consumers see it: containers always count as present."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def _or_empty(value: Any) -> Any:
    return "" if _is_falsy(value) else value


def _cell_value(value: Any) -> Any:
    value = _or_empty(value)
    # Whole-number floats are written without a fractional part (1200.0 -> 1200).
    if isinstance(value, float) and value.is_integer() and abs(value) < _INTEGRAL_FLOAT_LIMIT:
        return int(value)
    return value


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-JSON constant {name}")


def extract_envelope(raw_text: str, config_name: str = "") -> str:
    """Return the JSON body: after the first ``(`` through the last ``}``."""
    start = raw_text.find("(")
    end = raw_text.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise ParseError(config_name, f"No JSON envelope found in {config_name or 'response'}")
    return raw_text[start + 1 : end + 1]


def _decode_header(col: Any) -> str:
    if not isinstance(col, dict):
        return ""
    label = _or_empty(col.get("label"))
    return label if isinstance(label, str) else str(label)


def _decode_row(row: Any) -> list[Any]:
    cells = row.get("c") if isinstance(row, dict) else None
    if not isinstance(cells, list):
        return []
    return [_cell_value(cell.get("v")) if isinstance(cell, dict) else "" for cell in cells]


def decode_table(payload: Any, config_name: str) -> SheetTable:
    """Map a parsed gviz payload onto a :class:`SheetTable`.

    Raises
    ------
    NoDataError
        If ``table`` or ``table.rows`` is missing.
    """
    table = payload.get("table") if isinstance(payload, dict) else None
    if _is_falsy(table) or not isinstance(table, dict) or _is_falsy(table.get("rows")):
        raise NoDataError(config_name, f"No data found in {config_name}")

    rows = table["rows"]
    if not isinstance(rows, list):
        raise NoDataError(config_name, f"No data found in {config_name}")

    cols = table.get("cols")
    headers = [_decode_header(col) for col in cols] if isinstance(cols, list) else []
    return SheetTable(headers=headers, rows=[_decode_row(row) for row in rows])


def parse_response(raw_text: str, config_name: str) -> SheetTable:
    """Parse a raw gviz response for *config_name* into a :class:`SheetTable`.

    Raises
    ------
    ParseError
        If the envelope is missing or its body is not valid JSON.
    NoDataError
        If the JSON carries no ``table.rows``.
    """
    body = extract_envelope(raw_text, config_name)
    try:
        payload = json.loads(body, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise ParseError(config_name, f"Malformed JSON in {config_name}: {exc.msg}") from exc
    except (ValueError, RecursionError) as exc:
        raise ParseError(config_name, f"Malformed JSON in {config_name}: {exc}") from exc
    return decode_table(payload, config_name)
