from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

import discord
from discord.ext import commands, tasks
from dotenv import load_dotenv

from .adb import AdbClient
from .commands import register_commands
from .config import Config, load_config
from .cooldown import remaining_cooldown_seconds
from .db import Database
from .platform import detect_backend
from .reporter import Reporter
from .service import ScreenTimeService
from .window import previous_local_day, to_epoch_ms, utc_now

AUTO_REPORT_META_KEY = "last_auto_report_day"
MANUAL_REPORT_META_KEY = "last_manual_report_at_ms"
DEFAULT_DB_PATH = Path("screentime.db")


class ScreenTimeBot(commands.Bot):
    def __init__(self, config: Config, db: Database, service: ScreenTimeService) -> None:
        intents = discord.Intents.none()
        intents.guilds = True

        super().__init__(command_prefix="!", intents=intents)

        self.config = config
        self.db = db
        self.service = service
        self.reporter = Reporter(top_apps=config.report_top_apps)

        self.logger = logging.getLogger("screentime-bot")

        # runtime_ready prevents the scheduler from posting before channel/permission checks pass.
        self.runtime_ready = False
        self.guild_obj: discord.Guild | None = None
        self.report_channel: discord.TextChannel | None = None

    @property
    def device_name(self) -> str:
        serial = self.config.adb_serial or "default device"
        return f"{self.service.platform_name} ({serial})"

    async def setup_hook(self) -> None:
        register_commands(self)
        await self.tree.sync(guild=discord.Object(id=self.config.guild_id))
        self.midnight_report_loop.start()

    async def on_ready(self) -> None:
        self.logger.info("Connected as %s (%s)", self.user, self.user.id if self.user else "unknown")
        if self.runtime_ready:
            return

        if await self._validate_runtime_resources():
            self.runtime_ready = True
            self.logger.info("Runtime checks passed")

    async def _validate_runtime_resources(self) -> bool:
        guild = self.get_guild(self.config.guild_id)
        if guild is None:
            self.logger.error("Configured guild %s not found", self.config.guild_id)
            await self.close()
            return False

        report = guild.get_channel(self.config.report_channel_id)
        if not isinstance(report, discord.TextChannel):
            self.logger.error("Report channel %s is missing or not a text channel", self.config.report_channel_id)
            await self.close()
            return False

        me = guild.me
        if me is None and self.user is not None:
            me = guild.get_member(self.user.id)

        if me is None:
            self.logger.error("Unable to resolve bot member in guild %s", guild.id)
            await self.close()
            return False

        perms = report.permissions_for(me)
        if not perms.view_channel or not perms.send_messages:
            self.logger.error("Missing view/send permission in report channel %s", report.id)
            await self.close()
            return False

        self.guild_obj = guild
        self.report_channel = report

        if not await self.service.get_grant_status():
            self.logger.warning("Usage access is not granted on %s; reports will be empty", self.device_name)
        return True

    async def post_day_report(self, day_value: date) -> None:
        if self.report_channel is None:
            raise RuntimeError("Report channel is not available")

        records = await self.service.usage_for_day(day_value)
        granted = await self.service.get_grant_status()
        await self.reporter.post_report(
            self.report_channel,
            self.device_name,
            day_value.isoformat(),
            records,
            granted=granted,
        )

    @tasks.loop(seconds=30)
    async def midnight_report_loop(self) -> None:
        if not self.runtime_ready:
            return

        now = utc_now()
        now_local = now.astimezone(self.config.timezone)

        # The loop runs every 30s; only execute report logic during 00:00 local minute.
        if now_local.hour != 0 or now_local.minute != 0:
            return

        target_day = previous_local_day(now, self.config.timezone)
        # Guard against duplicate posts during the same 00:00 minute window.
        if self.db.get_meta(AUTO_REPORT_META_KEY) == target_day.isoformat():
            return

        self.logger.info("Posting midnight report for %s", target_day)

        try:
            await self.post_day_report(target_day)
        except (discord.HTTPException, RuntimeError):
            self.logger.exception("Failed to post midnight report")
            return

        self.db.set_meta(AUTO_REPORT_META_KEY, target_day.isoformat())

    @midnight_report_loop.before_loop
    async def before_midnight_report_loop(self) -> None:
        await self.wait_until_ready()

    def cooldown_remaining_seconds(self) -> int:
        return remaining_cooldown_seconds(
            self.db.get_meta(MANUAL_REPORT_META_KEY),
            self.config.report_now_cooldown_seconds,
            to_epoch_ms(utc_now()),
        )

    def record_manual_report(self) -> None:
        # Persist global cooldown reference timestamp for /report-now.
        self.db.set_meta(MANUAL_REPORT_META_KEY, str(to_epoch_ms(utc_now())))

    async def close(self) -> None:
        if self.midnight_report_loop.is_running():
            self.midnight_report_loop.cancel()
        self.db.close()
        await super().close()


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def main() -> None:
    load_dotenv()
    configure_logging()

    config = load_config()
    db = Database(DEFAULT_DB_PATH)
    db.initialize()

    client = AdbClient(config.adb_path, config.adb_serial)
    access, adapter = detect_backend(client, config.usage_access_package, config.timezone)
    service = ScreenTimeService(access, adapter, config.timezone)

    bot = ScreenTimeBot(config=config, db=db, service=service)
    bot.run(config.discord_token)


if __name__ == "__main__":
    main()
