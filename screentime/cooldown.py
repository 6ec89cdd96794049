from __future__ import annotations


def parse_epoch_ms(value: str | None) -> int | None:
    """Parse a stored millisecond timestamp; blank or garbled values count as never."""
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def remaining_cooldown_seconds(
    last_run_ms: str | None,
    cooldown_seconds: int,
    now_ms: int,
) -> int:
    """Return remaining global cooldown seconds for /report-now."""
    if cooldown_seconds <= 0:
        return 0

    last_run = parse_epoch_ms(last_run_ms)
    if last_run is None:
        return 0

    elapsed = (now_ms - last_run) // 1000
    return max(0, cooldown_seconds - elapsed)
