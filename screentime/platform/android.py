"""Android usage-access over adb."""
from __future__ import annotations

import logging
import re

from ..adb import AdbClient
from .base import UsageAccess

USAGE_STATS_OP = "GET_USAGE_STATS"
USAGE_STATS_PERMISSION = "android.permission.PACKAGE_USAGE_STATS"
USAGE_ACCESS_SETTINGS_ACTION = "android.settings.USAGE_ACCESS_SETTINGS"
# FLAG_ACTIVITY_NEW_TASK | FLAG_ACTIVITY_BROUGHT_TO_FRONT
SETTINGS_INTENT_FLAGS = 0x10000000 | 0x00400000

_APPOP_MODE_RE = re.compile(rf"{USAGE_STATS_OP}:\s*(\w+)")
_PERMISSION_RE = re.compile(rf"{re.escape(USAGE_STATS_PERMISSION)}: granted=(\w+)")


def parse_appop_mode(output: str) -> str:
    """Return the app-op mode reported by ``appops get``.

    Packages that never touched the op print "No operations."; that is the
    default mode.
    """
    match = _APPOP_MODE_RE.search(output)
    return match.group(1).lower() if match else "default"


def parse_permission_granted(output: str) -> bool:
    match = _PERMISSION_RE.search(output)
    return match is not None and match.group(1) == "true"


class AndroidUsageAccess(UsageAccess):

    def __init__(self, client: AdbClient, package: str, logger: logging.Logger | None = None) -> None:
        self.client = client
        self.package = package
        self.logger = logger or logging.getLogger(__name__)

    @property
    def name(self) -> str:
        return "Android"

    @property
    def supports_usage_stats(self) -> bool:
        return True

    async def check_granted(self) -> bool:
        mode = parse_appop_mode(await self.client.shell("appops", "get", self.package, USAGE_STATS_OP))
        self.logger.debug("%s mode for %s: %s", USAGE_STATS_OP, self.package, mode)

        # In default mode the runtime permission decides.
        if mode == "default":
            dump = await self.client.shell("dumpsys", "package", self.package)
            return parse_permission_granted(dump)
        return mode == "allow"

    async def request_grant(self) -> bool:
        await self.client.shell(
            "am", "start",
            "-a", USAGE_ACCESS_SETTINGS_ACTION,
            "-f", str(SETTINGS_INTENT_FLAGS),
        )
        return True
