from __future__ import annotations

import logging
from datetime import date, datetime
from zoneinfo import ZoneInfo

from .adb import AdbError, AdbUnavailableError
from .aggregation import aggregate
from .models import AggregatedUsageRecord, UsageWindow
from .platform.base import UsageAccess
from .usagestats import UsageQueryAdapter
from .window import day_window, utc_now, window_for_local_day


class ScreenTimeService:
    """Grant-gated access to ranked per-application usage.

    Missing permission and missing platform both come back as an empty
    list; callers that need to tell them apart ask ``get_grant_status``.
    """

    def __init__(
        self,
        access: UsageAccess,
        adapter: UsageQueryAdapter,
        tz: ZoneInfo,
        logger: logging.Logger | None = None,
    ) -> None:
        self.access = access
        self.adapter = adapter
        self.tz = tz
        self.logger = logger or logging.getLogger(__name__)

    @property
    def platform_name(self) -> str:
        return self.access.name

    async def get_grant_status(self) -> bool:
        if not self.access.supports_usage_stats:
            return False
        try:
            return await self.access.check_granted()
        except AdbError as exc:
            self.logger.warning("Unable to read usage access grant: %s", exc)
            return False

    async def open_usage_settings(self) -> bool:
        if not self.access.supports_usage_stats:
            return False
        try:
            return await self.access.request_grant()
        except AdbError as exc:
            self.logger.warning("Unable to open usage access settings: %s", exc)
            return False

    async def get_usage_stats(self, window: UsageWindow) -> list[AggregatedUsageRecord]:
        if not self.access.supports_usage_stats:
            self.logger.debug("Platform %s has no usage stats", self.access.name)
            return []

        if not await self.get_grant_status():
            self.logger.info("Usage access not granted on %s", self.access.name)
            return []

        try:
            raw = await self.adapter.query_usage(window.start_ms, window.end_ms)
        except AdbUnavailableError as exc:
            self.logger.warning("Device unavailable while querying usage: %s", exc)
            return []
        except AdbError as exc:
            self.logger.warning("Usage query failed: %s", exc)
            return []

        records = aggregate(raw)
        self.logger.debug("Aggregated %d raw records into %d applications", len(raw), len(records))
        return records

    async def usage_for_day(self, day_value: date) -> list[AggregatedUsageRecord]:
        return await self.get_usage_stats(window_for_local_day(day_value, self.tz))

    async def usage_today(self, now_utc: datetime | None = None) -> list[AggregatedUsageRecord]:
        return await self.get_usage_stats(day_window(now_utc or utc_now(), self.tz))
