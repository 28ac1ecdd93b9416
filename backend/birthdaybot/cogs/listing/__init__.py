"""Birthday listing feature module."""

from discord.ext import commands

from .cog import ListingCog

__all__ = ["ListingCog", "setup"]


async def setup(bot: commands.Bot) -> None:
    """Extension entry point."""
    await bot.add_cog(ListingCog(bot))
