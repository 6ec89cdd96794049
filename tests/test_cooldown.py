from datetime import datetime, timezone

from screentime.cooldown import remaining_cooldown_seconds
from screentime.db import Database
from screentime.window import to_epoch_ms


def test_remaining_cooldown_seconds() -> None:
    now = to_epoch_ms(datetime(2026, 2, 1, 12, 0, 0, tzinfo=timezone.utc))
    last_run = str(to_epoch_ms(datetime(2026, 2, 1, 11, 30, 0, tzinfo=timezone.utc)))

    assert remaining_cooldown_seconds(last_run, 3600, now) == 1800
    assert remaining_cooldown_seconds(last_run, 1200, now) == 0
    assert remaining_cooldown_seconds(None, 3600, now) == 0
    assert remaining_cooldown_seconds("garbage", 3600, now) == 0


def test_meta_round_trip_and_overwrite() -> None:
    db = Database(":memory:")
    db.initialize()

    assert db.get_meta("last_auto_report_day") is None

    db.set_meta("last_auto_report_day", "2026-02-01")
    db.set_meta("last_auto_report_day", "2026-02-02")

    assert db.get_meta("last_auto_report_day") == "2026-02-02"
    db.close()
    db.close()
