from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from screentime.window import (
    day_window,
    previous_local_day,
    to_epoch_ms,
    window_for_local_day,
)

HOUR_MS = 3_600_000


def test_day_window_spans_local_midnight_to_just_before_next() -> None:
    tz = ZoneInfo("Europe/Berlin")
    reference = datetime(2026, 2, 1, 15, 42, 7, tzinfo=tz)

    window = day_window(reference, tz)

    assert window.start_ms == to_epoch_ms(datetime(2026, 2, 1, tzinfo=tz))
    assert window.end_ms == to_epoch_ms(datetime(2026, 2, 2, tzinfo=tz)) - 1
    assert window.start_ms < window.end_ms


def test_day_window_same_for_any_instant_of_the_day() -> None:
    tz = ZoneInfo("America/New_York")

    early = day_window(datetime(2026, 2, 1, 0, 0, 0, tzinfo=tz), tz)
    late = day_window(datetime(2026, 2, 1, 23, 59, 59, 999000, tzinfo=tz), tz)

    assert early == late


def test_day_window_uses_local_calendar_day_of_utc_reference() -> None:
    tz = ZoneInfo("America/New_York")
    # 02:00 UTC on Feb 2 is still Feb 1 in New York.
    reference = datetime(2026, 2, 2, 2, 0, tzinfo=timezone.utc)

    assert day_window(reference, tz) == window_for_local_day(date(2026, 2, 1), tz)


def test_dst_start_day_is_23_hours() -> None:
    tz = ZoneInfo("America/New_York")

    window = window_for_local_day(date(2026, 3, 8), tz)

    assert window.end_ms - window.start_ms == 23 * HOUR_MS - 1


def test_previous_local_day_window_is_adjacent() -> None:
    tz = ZoneInfo("UTC")
    reference = datetime(2026, 2, 2, 9, 0, tzinfo=tz)

    today = day_window(reference, tz)
    yesterday = window_for_local_day(previous_local_day(reference, tz), tz)

    assert yesterday.end_ms + 1 == today.start_ms


def test_naive_reference_is_rejected() -> None:
    with pytest.raises(ValueError):
        day_window(datetime(2026, 2, 1, 12, 0), ZoneInfo("UTC"))


def test_epoch_ms_is_exact() -> None:
    value = datetime(2026, 2, 1, 12, 30, 15, 123000, tzinfo=timezone.utc)

    assert to_epoch_ms(value) == 1769949015123


def test_previous_local_day_follows_local_calendar() -> None:
    tz = ZoneInfo("Asia/Tokyo")
    # 20:00 UTC on Feb 1 is already Feb 2 in Tokyo.
    now = datetime(2026, 2, 1, 20, 0, tzinfo=timezone.utc)

    assert previous_local_day(now, tz) == date(2026, 2, 1)
