from __future__ import annotations

import os
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


@dataclass(frozen=True, slots=True)
class Config:
    discord_token: str
    guild_id: int
    report_channel_id: int
    timezone: ZoneInfo
    usage_access_package: str
    report_now_cooldown_seconds: int
    report_top_apps: int
    adb_path: str
    adb_serial: str | None


def _required_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ValueError(f"Missing required environment variable: {name}")
    return value.strip()


def _parse_positive_int(name: str, value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be an integer") from exc

    if parsed <= 0:
        raise ValueError(f"Environment variable {name} must be positive")
    return parsed


def _required_int_env(name: str) -> int:
    return _parse_positive_int(name, _required_env(name))


def _optional_int_env(name: str, default: int) -> int:
    return _parse_positive_int(name, os.getenv(name, str(default)).strip())


def _timezone_from_env(name: str) -> ZoneInfo:
    tz_name = _required_env(name)
    try:
        return ZoneInfo(tz_name)
    except ZoneInfoNotFoundError as exc:
        raise ValueError(f"Invalid timezone in {name}: {tz_name}") from exc


def load_config() -> Config:
    serial = os.getenv("ADB_SERIAL", "").strip()

    return Config(
        discord_token=_required_env("DISCORD_TOKEN"),
        guild_id=_required_int_env("GUILD_ID"),
        report_channel_id=_required_int_env("REPORT_CHANNEL_ID"),
        timezone=_timezone_from_env("TIMEZONE"),
        usage_access_package=_required_env("USAGE_ACCESS_PACKAGE"),
        report_now_cooldown_seconds=_optional_int_env("REPORT_NOW_COOLDOWN_SECONDS", 3600),
        report_top_apps=_optional_int_env("REPORT_TOP_APPS", 10),
        adb_path=os.getenv("ADB_PATH", "adb").strip() or "adb",
        adb_serial=serial or None,
    )
