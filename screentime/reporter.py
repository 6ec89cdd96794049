from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

import discord

from .models import AggregatedUsageRecord, DurationBreakdown, ReportRow

MS_PER_HOUR = 3_600_000
MS_PER_MINUTE = 60_000
MS_PER_SECOND = 1_000


def breakdown_duration(duration_ms: int) -> DurationBreakdown:
    """Split a millisecond duration into whole hours, minutes and seconds."""
    if duration_ms < 0:
        raise ValueError("Duration must not be negative")

    hours, remainder = divmod(duration_ms, MS_PER_HOUR)
    minutes, remainder = divmod(remainder, MS_PER_MINUTE)
    return DurationBreakdown(hours=hours, minutes=minutes, seconds=remainder // MS_PER_SECOND)


def format_duration(duration_ms: int) -> str:
    parts = breakdown_duration(duration_ms)
    return f"{parts.hours}h {parts.minutes}m {parts.seconds}s"


class ReportChannelLike(Protocol):
    async def send(self, content: str, **kwargs): ...


class Reporter:
    def __init__(self, top_apps: int = 10) -> None:
        self.top_apps = top_apps

    def build_rows(self, records: Sequence[AggregatedUsageRecord]) -> list[ReportRow]:
        # Records arrive ranked; only the head is worth posting.
        rows = [
            ReportRow(application_id=item.application_id, total_foreground_ms=item.total_foreground_ms)
            for item in records
            if item.total_foreground_ms > 0
        ]
        return rows[: self.top_apps]

    def build_report_content(
        self,
        day_local: str,
        device_name: str,
        rows: list[ReportRow],
        *,
        granted: bool,
    ) -> str:
        header = f"**Daily Screen Time - {day_local}**"
        device_line = f"Device: {device_name}"

        if not rows:
            if not granted:
                return f"{header}\n{device_line}\nUsage access is not granted on this device; run /grant."
            return f"{header}\n{device_line}\nNo app usage recorded for {day_local}."

        total_ms = sum(row.total_foreground_ms for row in rows)
        lines = [
            f"{index}. {row.application_id}: `{format_duration(row.total_foreground_ms)}`"
            for index, row in enumerate(rows, start=1)
        ]
        body = "\n".join(lines)
        return f"{header}\n{device_line}\n{body}\nTotal (top {len(rows)}): `{format_duration(total_ms)}`"

    async def post_report(
        self,
        report_channel: ReportChannelLike,
        device_name: str,
        day_local: str,
        records: Sequence[AggregatedUsageRecord],
        *,
        granted: bool,
    ) -> bool:
        rows = self.build_rows(records)
        content = self.build_report_content(day_local, device_name, rows, granted=granted)

        # Never ping anyone from automated summaries.
        await report_channel.send(content, allowed_mentions=discord.AllowedMentions.none())
        return True
