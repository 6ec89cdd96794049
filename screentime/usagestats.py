"""Reading raw per-application usage from an Android device.

``dumpsys usagestats`` prints one stats block per interval type. Only the
daily blocks are used; each daily block that overlaps the requested window
contributes one record per package, so a package commonly appears more than
once in a single result.
"""
from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Protocol
from zoneinfo import ZoneInfo

from .adb import AdbClient
from .models import RawUsageRecord
from .window import to_epoch_ms

logger = logging.getLogger(__name__)

DUMP_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_SECTION_RE = re.compile(r"^\s*In-memory (\w+) stats\s*$")
_TIME_RANGE_RE = re.compile(r'^\s*timeRange="([^"]+) - ([^"]+)"\s*$')
_ATTR_RE = re.compile(r'(\w+)=("[^"]*"|\S+)')


class UsageQueryAdapter(Protocol):
    async def query_usage(self, start_ms: int, end_ms: int) -> list[RawUsageRecord]: ...


def parse_elapsed_ms(value: str) -> int:
    """Parse Android's elapsed-time text (``MM:SS`` or ``H:MM:SS``)."""
    parts = value.split(":")
    if not 2 <= len(parts) <= 3 or not all(part.isdigit() for part in parts):
        raise ValueError(f"Unrecognized elapsed time: {value!r}")

    seconds = 0
    for part in parts:
        seconds = seconds * 60 + int(part)
    return seconds * 1000


def parse_dump_time_ms(value: str, tz: ZoneInfo) -> int:
    parsed = datetime.strptime(value, DUMP_TIME_FORMAT).replace(tzinfo=tz)
    return to_epoch_ms(parsed)


def _parse_package_line(line: str, tz: ZoneInfo) -> RawUsageRecord | None:
    attrs = {key: raw.strip('"') for key, raw in _ATTR_RE.findall(line)}
    if "package" not in attrs or "totalTimeUsed" not in attrs:
        return None

    visible = attrs.get("totalTimeVisible")
    last_used = attrs.get("lastTimeUsed")
    return RawUsageRecord(
        application_id=attrs["package"],
        foreground_ms=parse_elapsed_ms(attrs["totalTimeUsed"]),
        visible_ms=parse_elapsed_ms(visible) if visible else None,
        last_used_ms=parse_dump_time_ms(last_used, tz) if last_used else None,
    )


def parse_usagestats_dump(text: str, tz: ZoneInfo, start_ms: int, end_ms: int) -> list[RawUsageRecord]:
    records: list[RawUsageRecord] = []
    interval: str | None = None
    in_window = False

    for line in text.splitlines():
        section = _SECTION_RE.match(line)
        if section:
            interval = section.group(1).lower()
            in_window = False
            continue

        if interval != "daily":
            continue

        time_range = _TIME_RANGE_RE.match(line)
        if time_range:
            try:
                range_start = parse_dump_time_ms(time_range.group(1), tz)
                range_end = parse_dump_time_ms(time_range.group(2), tz)
            except ValueError:
                logger.warning("Skipping daily bucket with unreadable timeRange: %s", line.strip())
                in_window = False
                continue
            in_window = range_start <= end_ms and range_end > start_ms
            continue

        if not in_window or not line.lstrip().startswith("package="):
            continue

        try:
            record = _parse_package_line(line, tz)
        except ValueError as exc:
            logger.warning("Skipping unreadable usage line (%s): %s", exc, line.strip())
            continue

        # Packages that never reached the foreground are noise in a ranking.
        if record is not None and record.foreground_ms > 0:
            records.append(record)

    return records


class AdbUsageStatsAdapter:
    def __init__(self, client: AdbClient, tz: ZoneInfo, logger: logging.Logger | None = None) -> None:
        self.client = client
        self.tz = tz
        self.logger = logger or logging.getLogger(__name__)

    async def query_usage(self, start_ms: int, end_ms: int) -> list[RawUsageRecord]:
        text = await self.client.shell("dumpsys", "usagestats")
        records = parse_usagestats_dump(text, self.tz, start_ms, end_ms)
        self.logger.debug("Parsed %d raw usage records for %s-%s", len(records), start_ms, end_ms)
        return records


class NullUsageAdapter:
    """Adapter for hosts without a usage-tracking facility."""

    async def query_usage(self, start_ms: int, end_ms: int) -> list[RawUsageRecord]:
        return []
