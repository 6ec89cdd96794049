"""Fallback for hosts without a usage-tracking facility."""
from .base import UsageAccess


class UnsupportedUsageAccess(UsageAccess):

    @property
    def name(self) -> str:
        return "Unsupported"

    @property
    def supports_usage_stats(self) -> bool:
        return False

    async def check_granted(self) -> bool:
        return False

    async def request_grant(self) -> bool:
        return False
