from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RawUsageRecord:
    application_id: str
    foreground_ms: int
    visible_ms: int | None = None
    last_used_ms: int | None = None


@dataclass(frozen=True, slots=True)
class AggregatedUsageRecord:
    application_id: str
    total_foreground_ms: int


@dataclass(frozen=True, slots=True)
class UsageWindow:
    start_ms: int
    end_ms: int


@dataclass(frozen=True, slots=True)
class DurationBreakdown:
    hours: int
    minutes: int
    seconds: int


@dataclass(frozen=True, slots=True)
class ReportRow:
    application_id: str
    total_foreground_ms: int
