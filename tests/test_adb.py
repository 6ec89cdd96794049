import subprocess

from screentime.adb import AdbClient


def test_device_state_reads_get_state(monkeypatch) -> None:
    calls = []

    def fake_check_output(cmd, **kwargs):
        calls.append((cmd, kwargs))
        return b"device\n"

    monkeypatch.setattr(subprocess, "check_output", fake_check_output)

    assert AdbClient("adb", "emulator-5554").device_state() == "device"
    cmd, kwargs = calls[0]
    assert cmd == ["adb", "-s", "emulator-5554", "get-state"]
    assert kwargs["timeout"] > 0


def test_device_state_timeout_reads_as_unknown(monkeypatch) -> None:
    def hanging_check_output(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    monkeypatch.setattr(subprocess, "check_output", hanging_check_output)

    assert AdbClient().device_state() is None


def test_device_state_missing_binary_reads_as_unknown(monkeypatch) -> None:
    def missing_check_output(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(subprocess, "check_output", missing_check_output)

    assert AdbClient("/nowhere/adb").device_state() is None
