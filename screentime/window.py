from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from .models import UsageWindow

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_MS = timedelta(milliseconds=1)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_epoch_ms(value: datetime) -> int:
    if value.tzinfo is None:
        raise ValueError("Datetime must be timezone-aware")
    # Integer division on timedelta keeps this exact, unlike timestamp().
    return (value - EPOCH) // ONE_MS


def midnight_for_local_day(day_value: date, tz: ZoneInfo) -> datetime:
    return datetime.combine(day_value, time.min, tzinfo=tz)


def window_for_local_day(day_value: date, tz: ZoneInfo) -> UsageWindow:
    """Return the window covering one calendar day in ``tz``.

    The end is the last millisecond before the following midnight, so the
    window stays correct on days shortened or stretched by DST.
    """
    start = midnight_for_local_day(day_value, tz)
    next_midnight = midnight_for_local_day(day_value + timedelta(days=1), tz)
    return UsageWindow(start_ms=to_epoch_ms(start), end_ms=to_epoch_ms(next_midnight) - 1)


def local_day(reference: datetime, tz: ZoneInfo) -> date:
    if reference.tzinfo is None:
        raise ValueError("reference must be timezone-aware")
    return reference.astimezone(tz).date()


def day_window(reference: datetime, tz: ZoneInfo) -> UsageWindow:
    return window_for_local_day(local_day(reference, tz), tz)


def previous_local_day(reference: datetime, tz: ZoneInfo) -> date:
    return local_day(reference, tz) - timedelta(days=1)
