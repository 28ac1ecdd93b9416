"""
Birthday listing Discord bot
Uses discord.py 2.x and slash commands
"""

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

# .env must be loaded before BotConfig reads the environment
load_dotenv(dotenv_path=Path(__file__).parent / ".env", encoding="utf-8")

import asyncpg  # noqa: E402
import discord  # noqa: E402
from discord.ext import commands  # noqa: E402

from birthdaybot.config import BotConfig  # noqa: E402
from birthdaybot.core import setup_logging  # noqa: E402
from shared.database import DatabaseManager  # noqa: E402
from shared.migrations.runner import run_pending  # noqa: E402

logger = logging.getLogger("birthdaybot")


class BirthdayBotClient(commands.Bot):
    """Birthday listing bot client"""

    def __init__(self, db: DatabaseManager):
        intents = discord.Intents.default()
        intents.members = True  # member cache backs name lookups and exports

        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents,
            help_command=None,
        )
        self.db = db
        self.initial_extensions = ["birthdaybot.cogs.listing"]

    async def setup_hook(self):
        try:
            await self.db.connect()
            await run_pending(self.db.pool)
        except (OSError, asyncpg.PostgresError, asyncio.TimeoutError) as e:
            # The listing cog keeps retrying in the background
            logger.error(f"[red]Database setup failed:[/red] {type(e).__name__}: {e}")

        loaded = []
        failed = []
        for extension in self.initial_extensions:
            try:
                await self.load_extension(extension)
                loaded.append(extension.split(".")[-1])
            except commands.ExtensionError as e:
                failed.append(f"{extension.split('.')[-1]} ({e})")

        if loaded:
            logger.info(f"[green]Loaded cogs:[/green] {', '.join(loaded)}")
        if failed:
            logger.error(f"[red]Failed to load:[/red] {', '.join(failed)}")

        logger.info("[yellow]Syncing slash commands...[/yellow]")
        if BotConfig.GUILD_ID:
            # Guild sync is immediate, global sync can take up to an hour
            guild = discord.Object(id=int(BotConfig.GUILD_ID))
            self.tree.copy_global_to(guild=guild)
            await self.tree.sync(guild=guild)
            logger.info(f"[magenta]Synced slash commands to guild {BotConfig.GUILD_ID}[/magenta]")
        else:
            await self.tree.sync()
            logger.info("[magenta]Synced slash commands globally[/magenta]")

    async def on_ready(self):
        await self.change_presence(
            status=BotConfig.get_status(), activity=BotConfig.get_activity()
        )
        logger.info(
            f"[bold green]Bot ready:[/bold green] {self.user} [dim](ID: {self.user.id})[/dim]"
        )
        logger.info(
            f"[cyan]Connected:[/cyan] {len(self.guilds)} guilds | discord.py {discord.__version__}"
        )

    async def close(self):
        await super().close()
        await self.db.disconnect()


async def main():
    setup_logging()

    if not BotConfig.TOKEN:
        logger.error("[bold red]DISCORD_BOT_TOKEN is not set[/bold red]")
        logger.error("Set it in the .env file: DISCORD_BOT_TOKEN=your_token_here")
        return
    if not BotConfig.DATABASE_URL:
        logger.error("[bold red]DATABASE_URL is not set[/bold red]")
        return

    async with BirthdayBotClient(DatabaseManager(BotConfig.DATABASE_URL)) as bot:
        await bot.start(BotConfig.TOKEN)


def run() -> None:
    """Console entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("[yellow]Bot stopped[/yellow]")


if __name__ == "__main__":
    run()
