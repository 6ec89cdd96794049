"""Platform detection and factory."""
from __future__ import annotations

import logging
from zoneinfo import ZoneInfo

from ..adb import AdbClient
from ..usagestats import AdbUsageStatsAdapter, NullUsageAdapter, UsageQueryAdapter
from .android import AndroidUsageAccess
from .base import UsageAccess
from .generic import UnsupportedUsageAccess

logger = logging.getLogger(__name__)


def detect_backend(
    client: AdbClient,
    package: str,
    tz: ZoneInfo,
) -> tuple[UsageAccess, UsageQueryAdapter]:
    """
    Pick the usage-access capability and query adapter for this host.

    Detection order:
    1. adb binary on PATH
    2. ``adb get-state`` reports an attached, authorized device
    3. Fallback to the unsupported implementation
    """
    if not client.is_installed():
        logger.warning("adb not found at %s; usage stats unavailable", client.adb_path)
        return UnsupportedUsageAccess(), NullUsageAdapter()

    state = client.device_state()
    if state != "device":
        logger.warning("No usable Android device (state=%s); usage stats unavailable", state)
        return UnsupportedUsageAccess(), NullUsageAdapter()

    access = AndroidUsageAccess(client, package)
    logger.info("Detected platform: %s (serial=%s)", access.name, client.serial or "default")
    return access, AdbUsageStatsAdapter(client, tz)


__all__ = ["UsageAccess", "AndroidUsageAccess", "UnsupportedUsageAccess", "detect_backend"]
