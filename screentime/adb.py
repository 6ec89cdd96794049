from __future__ import annotations

import asyncio
import logging
import shutil
import subprocess

DEVICE_STATE_TIMEOUT_SECONDS = 10


class AdbError(RuntimeError):
    """An adb invocation failed."""


class AdbUnavailableError(AdbError):
    """The adb binary is missing or no device is attached."""


class AdbClient:
    """Runs ``adb`` commands against a single device."""

    def __init__(self, adb_path: str = "adb", serial: str | None = None, logger: logging.Logger | None = None) -> None:
        self.adb_path = adb_path
        self.serial = serial
        self.logger = logger or logging.getLogger(__name__)

    def _base_command(self) -> list[str]:
        cmd = [self.adb_path]
        if self.serial:
            cmd += ["-s", self.serial]
        return cmd

    def is_installed(self) -> bool:
        return shutil.which(self.adb_path) is not None

    def device_state(self) -> str | None:
        """Return the ``adb get-state`` answer, or None if it cannot be read.

        Blocking; meant for one-off startup detection only.
        """
        try:
            out = subprocess.check_output(
                self._base_command() + ["get-state"],
                stderr=subprocess.DEVNULL,
                timeout=DEVICE_STATE_TIMEOUT_SECONDS,
            )
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError):
            return None
        return out.decode().strip()

    async def shell(self, *args: str) -> str:
        cmd = self._base_command() + ["shell", *args]
        self.logger.debug("Running %s", " ".join(cmd))

        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise AdbUnavailableError(f"adb binary not found: {self.adb_path}") from exc

        stdout, stderr = await proc.communicate()
        if proc.returncode != 0:
            message = stderr.decode(errors="replace").strip()
            if "no devices" in message or "not found" in message or "unauthorized" in message:
                raise AdbUnavailableError(message)
            raise AdbError(f"adb shell {' '.join(args)} exited with {proc.returncode}: {message}")

        return stdout.decode(errors="replace")
