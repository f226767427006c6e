from __future__ import annotations

import re
import time

from locations_cache.utils import epoch_millis, utcnow_iso


def test_utcnow_iso_has_millisecond_precision_and_z_suffix() -> None:
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", utcnow_iso())


def test_epoch_millis_tracks_wall_clock() -> None:
    before = int(time.time() * 1000)
    value = epoch_millis()
    after = int(time.time() * 1000)

    assert before - 1 <= value <= after + 1
