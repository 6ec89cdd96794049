import pytest

from screentime.config import load_config

REQUIRED = {
    "DISCORD_TOKEN": "token",
    "GUILD_ID": "123",
    "REPORT_CHANNEL_ID": "456",
    "TIMEZONE": "Europe/Berlin",
    "USAGE_ACCESS_PACKAGE": "com.example.screentime",
}


@pytest.fixture
def env(monkeypatch):
    for name in ("REPORT_NOW_COOLDOWN_SECONDS", "REPORT_TOP_APPS", "ADB_PATH", "ADB_SERIAL"):
        monkeypatch.delenv(name, raising=False)
    for name, value in REQUIRED.items():
        monkeypatch.setenv(name, value)
    return monkeypatch


def test_defaults(env) -> None:
    config = load_config()

    assert config.guild_id == 123
    assert config.timezone.key == "Europe/Berlin"
    assert config.report_now_cooldown_seconds == 3600
    assert config.report_top_apps == 10
    assert config.adb_path == "adb"
    assert config.adb_serial is None


def test_optional_overrides(env) -> None:
    env.setenv("REPORT_TOP_APPS", "5")
    env.setenv("ADB_SERIAL", "emulator-5554")

    config = load_config()

    assert config.report_top_apps == 5
    assert config.adb_serial == "emulator-5554"


def test_missing_required_variable(env) -> None:
    env.delenv("USAGE_ACCESS_PACKAGE")

    with pytest.raises(ValueError, match="USAGE_ACCESS_PACKAGE"):
        load_config()


def test_invalid_values(env) -> None:
    env.setenv("REPORT_NOW_COOLDOWN_SECONDS", "0")
    with pytest.raises(ValueError, match="must be positive"):
        load_config()

    env.setenv("REPORT_NOW_COOLDOWN_SECONDS", "60")
    env.setenv("TIMEZONE", "Mars/Olympus")
    with pytest.raises(ValueError, match="Invalid timezone"):
        load_config()
