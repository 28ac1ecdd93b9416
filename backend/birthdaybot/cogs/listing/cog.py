"""Birthday listing cog: when, recent/upcoming and list export."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import date, datetime, timezone

import asyncpg
import discord
from discord import app_commands
from discord.ext import commands

from birthdaybot.config import BotConfig
from shared.database import DatabaseManager
from shared.listing import (
    BirthdayIndex,
    DeliveryPermissionDenied,
    DeliveryUnexpectedFailure,
    ExportFormat,
    InvalidRecord,
    ListingError,
    NoBirthdayData,
    export_csv,
    export_file,
    export_filename,
    export_text,
    find_member,
    format_display_name,
    format_when,
    render_upcoming,
    scan,
    today_index,
)
from shared.listing.dates import validate
from shared.models.birthday import BirthdayRecord, BirthdayRow, MemberInfo
from shared.repositories.birthday import BirthdayRepository

from .constants import (
    EXPORT_DONE_MESSAGE,
    GUILD_ONLY_MESSAGE,
    INTERNAL_ERROR_MESSAGE,
    MODERATOR_ONLY_MESSAGE,
    NOT_READY_MESSAGE,
)

logger = logging.getLogger(__name__)


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def member_info(member: discord.Member) -> MemberInfo:
    return MemberInfo(
        username=member.name,
        discriminator=member.discriminator,
        nickname=member.nick,
    )


def lookup_in(guild: discord.Guild) -> Callable[[int], MemberInfo | None]:
    """Membership resolver over the guild's live member cache."""

    def lookup(user_id: int) -> MemberInfo | None:
        member = guild.get_member(user_id)
        return member_info(member) if member else None

    return lookup


def build_records(
    guild: discord.Guild, rows: list[BirthdayRow], escape: bool = False
) -> list[BirthdayRecord]:
    """Join stored rows with live members. Users no longer in the guild are left out."""
    records = []
    for row in rows:
        member = guild.get_member(row.user_id)
        if member is None:
            continue
        try:
            validate(row.birth_month, row.birth_day)
        except InvalidRecord as e:
            logger.warning(f"Skipping stored birthday of {row.user_id} in {guild.id}: {e}")
            continue

        name = format_display_name(member_info(member))
        if escape:
            name = discord.utils.escape_markdown(name)
        records.append(
            BirthdayRecord(
                user_id=row.user_id,
                month=row.birth_month,
                day=row.birth_day,
                display_name=name,
                timezone_label=row.time_zone,
            )
        )
    return records


class ListingCog(commands.Cog):
    """Recent, upcoming and exported guild birthdays"""

    def __init__(
        self,
        bot: commands.Bot,
        repo: BirthdayRepository | None = None,
        today: Callable[[], date] = utc_today,
    ):
        self.bot = bot
        self.repo = repo
        self._ready = repo is not None
        self._today = today

    async def cog_load(self) -> None:
        if not self._ready:
            # Non-blocking: the bot comes up while the pool connects
            asyncio.create_task(self._attach_repo_with_retry())

    async def _attach_repo_with_retry(self, max_retries: int = 5, delay: int = 10) -> None:
        db: DatabaseManager = self.bot.db  # type: ignore[attr-defined]
        for attempt in range(1, max_retries + 1):
            try:
                if not db.is_connected:
                    await db.connect()
                self.repo = BirthdayRepository(db.pool)
                self._ready = True
                logger.info("Listing cog loaded")
                return
            except (OSError, asyncpg.PostgresError, asyncio.TimeoutError) as e:
                logger.warning(
                    f"Listing DB connection failed ({attempt}/{max_retries}): "
                    f"{type(e).__name__}: {e}"
                )
                if attempt < max_retries:
                    await asyncio.sleep(delay)

        logger.error("Listing cog failed to connect after all retries")

    # ==================== Operations ====================

    async def upcoming_message(self, guild: discord.Guild) -> str:
        """Birthdays from a week ago to two weeks ahead, centred on today's UTC date."""
        assert self.repo is not None
        rows = await self.repo.list_guild_birthdays(guild.id)
        index = BirthdayIndex(build_records(guild, rows, escape=True))
        window = scan(
            today_index(self._today()),
            BotConfig.UPCOMING_DAYS_BEFORE,
            BotConfig.UPCOMING_DAYS_TOTAL,
        )
        return render_upcoming(index.groups_in_window(window), BotConfig.LISTING_MAX_OUTPUT)

    async def when_message(self, guild: discord.Guild, search: str) -> str:
        """Raises ``UserNotFound`` or ``NoBirthdayData``."""
        assert self.repo is not None
        member = find_member(search, guild.members, guild.get_member)
        row = await self.repo.get_user_birthday(guild.id, member.id)
        if row is None:
            raise NoBirthdayData()

        records = build_records(guild, [row])
        if not records:
            raise NoBirthdayData()
        record = records[0]
        return format_when(record.display_name, record)

    async def render_export(self, guild: discord.Guild, fmt: ExportFormat) -> tuple[str, int]:
        """Return the export content and the number of birthdays in it."""
        assert self.repo is not None
        rows = await self.repo.list_guild_birthdays(guild.id)
        records = build_records(guild, rows)
        lookup = lookup_in(guild)
        if fmt is ExportFormat.CSV:
            content = export_csv(records, lookup, legacy_quotes=BotConfig.EXPORT_CSV_LEGACY_QUOTES)
        else:
            content = export_text(guild.name, records, lookup)
        return content, len(records)

    async def send_export(self, interaction: discord.Interaction, fmt: ExportFormat) -> None:
        """Write the export to a temporary file, send it and always remove the file."""
        guild = interaction.guild
        assert guild is not None
        content, count = await self.render_export(guild, fmt)

        with export_file(BotConfig.EXPORT_DIR, guild.id, fmt, content) as path:
            file = discord.File(path, filename=export_filename(guild.id, fmt))
            try:
                await interaction.followup.send(
                    EXPORT_DONE_MESSAGE.format(count=count), file=file
                )
            except discord.HTTPException as e:
                # Rejected uploads are nearly always a missing Attach Files permission
                logger.warning(f"Birthday export upload rejected in guild {guild.id}: {e}")
                raise DeliveryPermissionDenied() from e
            except Exception as e:
                logger.exception(f"Failed to deliver birthday export for guild {guild.id}: {e}")
                raise DeliveryUnexpectedFailure() from e
            finally:
                file.close()

    # ==================== Commands ====================

    birthday_group = app_commands.Group(name="birthday", description="Birthday listings")

    async def _begin(self, interaction: discord.Interaction) -> discord.Guild | None:
        """Check readiness and guild context, then defer the response."""
        if not self._ready:
            await interaction.response.send_message(NOT_READY_MESSAGE, ephemeral=True)
            return None
        if not interaction.guild:
            await interaction.response.send_message(GUILD_ONLY_MESSAGE, ephemeral=True)
            return None
        if not interaction.response.is_done():
            await interaction.response.defer()
        return interaction.guild

    @birthday_group.command(name="when", description="Displays the given user's birthday information.")
    @app_commands.describe(user="User ID, mention or username")
    async def when(self, interaction: discord.Interaction, user: str) -> None:
        guild = await self._begin(interaction)
        if guild is None:
            return
        try:
            message = await self.when_message(guild, user)
        except ListingError as e:
            message = e.message
        await interaction.followup.send(message)

    @birthday_group.command(name="upcoming", description="Lists recent and upcoming birthdays.")
    async def upcoming(self, interaction: discord.Interaction) -> None:
        guild = await self._begin(interaction)
        if guild is None:
            return
        await interaction.followup.send(await self.upcoming_message(guild))

    @birthday_group.command(name="recent", description="Lists recent and upcoming birthdays.")
    async def recent(self, interaction: discord.Interaction) -> None:
        guild = await self._begin(interaction)
        if guild is None:
            return
        await interaction.followup.send(await self.upcoming_message(guild))

    @birthday_group.command(name="list", description="Exports all birthdays to a file.")
    @app_commands.describe(export_format="Export format: `txt` (default) or `csv`")
    @app_commands.rename(export_format="format")
    @app_commands.checks.has_permissions(manage_guild=True)
    async def list_birthdays(
        self, interaction: discord.Interaction, export_format: str | None = None
    ) -> None:
        try:
            fmt = ExportFormat.parse(export_format)
        except ListingError as e:
            await interaction.response.send_message(e.message, ephemeral=True)
            return

        guild = await self._begin(interaction)
        if guild is None:
            return
        try:
            await self.send_export(interaction, fmt)
        except ListingError as e:
            await interaction.followup.send(e.message)

    async def cog_app_command_error(
        self, interaction: discord.Interaction, error: app_commands.AppCommandError
    ) -> None:
        if isinstance(error, app_commands.MissingPermissions):
            message = MODERATOR_ONLY_MESSAGE
        else:
            logger.error(f"Listing command error: {error}", exc_info=error)
            message = INTERNAL_ERROR_MESSAGE

        if interaction.response.is_done():
            await interaction.followup.send(message, ephemeral=True)
        else:
            await interaction.response.send_message(message, ephemeral=True)
