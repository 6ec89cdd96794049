from __future__ import annotations

from typing import TYPE_CHECKING

import discord

from .reporter import format_duration
from .window import local_day, utc_now

if TYPE_CHECKING:
    from .main import ScreenTimeBot

WRONG_GUILD_MESSAGE = "This command can only be used in the configured server."


def is_configured_guild(interaction: discord.Interaction, guild_id: int) -> bool:
    return interaction.guild is not None and interaction.guild.id == guild_id


def register_commands(bot: ScreenTimeBot) -> None:
    """Register all slash commands on the bot. Called once during setup."""
    guild_scope = discord.Object(id=bot.config.guild_id)

    @bot.tree.command(name="status", description="Show device, usage access and cooldown info", guild=guild_scope)
    async def status(interaction: discord.Interaction) -> None:
        await interaction.response.defer(ephemeral=True)
        granted = await bot.service.get_grant_status()
        now_local = utc_now().astimezone(bot.config.timezone)

        lines = [
            "Screen time reporter status: online",
            f"Device: `{bot.device_name}`",
            f"Usage access granted: `{'yes' if granted else 'no'}`",
            f"Report channel ID: `{bot.config.report_channel_id}`",
            f"Timezone: `{bot.config.timezone.key}`",
            f"Current local time: `{now_local.isoformat()}`",
            f"/report-now cooldown remaining: `{format_duration(bot.cooldown_remaining_seconds() * 1000)}`",
        ]
        await interaction.followup.send("\n".join(lines), ephemeral=True)

    @bot.tree.command(name="today", description="Show today's app usage so far", guild=guild_scope)
    async def today(interaction: discord.Interaction) -> None:
        if not is_configured_guild(interaction, bot.config.guild_id):
            await interaction.response.send_message(WRONG_GUILD_MESSAGE, ephemeral=True)
            return

        await interaction.response.defer(ephemeral=True)
        now = utc_now()
        day_local = local_day(now, bot.config.timezone).isoformat()

        records = await bot.service.usage_today(now)
        granted = await bot.service.get_grant_status()
        rows = bot.reporter.build_rows(records)
        content = bot.reporter.build_report_content(day_local, bot.device_name, rows, granted=granted)
        await interaction.followup.send(content, ephemeral=True)

    @bot.tree.command(name="grant", description="Open the usage access settings on the device", guild=guild_scope)
    async def grant(interaction: discord.Interaction) -> None:
        if not is_configured_guild(interaction, bot.config.guild_id):
            await interaction.response.send_message(WRONG_GUILD_MESSAGE, ephemeral=True)
            return

        await interaction.response.defer(ephemeral=True)
        if await bot.service.get_grant_status():
            await interaction.followup.send("Usage access is already granted.", ephemeral=True)
            return

        if not await bot.service.open_usage_settings():
            await interaction.followup.send(
                f"Usage access settings are not available on `{bot.device_name}`.",
                ephemeral=True,
            )
            return

        await interaction.followup.send(
            "Opened the Usage Access screen on the device. Allow usage access for the app, then run /status.",
            ephemeral=True,
        )

    @bot.tree.command(name="report-now", description="Post a manual day-so-far report", guild=guild_scope)
    async def report_now(interaction: discord.Interaction) -> None:
        if not is_configured_guild(interaction, bot.config.guild_id):
            await interaction.response.send_message(WRONG_GUILD_MESSAGE, ephemeral=True)
            return

        cooldown_remaining = bot.cooldown_remaining_seconds()
        if cooldown_remaining > 0:
            await interaction.response.send_message(
                f"Global cooldown active. Try again in `{format_duration(cooldown_remaining * 1000)}`.",
                ephemeral=True,
            )
            return

        if bot.report_channel is None:
            await interaction.response.send_message("Report channel is not available.", ephemeral=True)
            return

        await interaction.response.defer(ephemeral=True)
        day_value = local_day(utc_now(), bot.config.timezone)

        try:
            await bot.post_day_report(day_value)
        except discord.HTTPException as exc:
            bot.logger.exception("/report-now failed")
            await interaction.followup.send(f"Failed to send report: `{exc}`", ephemeral=True)
            return

        bot.record_manual_report()

        await interaction.followup.send(
            f"Posted day-so-far report for `{day_value.isoformat()}` in <#{bot.config.report_channel_id}>.",
            ephemeral=True,
        )
