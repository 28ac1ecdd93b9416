"""Birthday listing bot configuration"""

import logging
import os
import tempfile
from pathlib import Path

import discord

logger = logging.getLogger(__name__)

BOT_DIR = Path(__file__).parent
BACKEND_DIR = BOT_DIR.parent


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class BotConfig:
    TOKEN: str = os.getenv("DISCORD_BOT_TOKEN", "")
    GUILD_ID: str = os.getenv("DISCORD_GUILD_ID", "")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")

    STATUS: str = os.getenv("DISCORD_STATUS", "")
    ACTIVITY_TYPE: str = os.getenv("DISCORD_ACTIVITY_TYPE", "")
    ACTIVITY_NAME: str = os.getenv("DISCORD_ACTIVITY_NAME", "")

    # Listing
    LISTING_MAX_OUTPUT: int = int(os.getenv("LISTING_MAX_OUTPUT", "970"))
    UPCOMING_DAYS_BEFORE: int = int(os.getenv("UPCOMING_DAYS_BEFORE", "8"))
    UPCOMING_DAYS_TOTAL: int = int(os.getenv("UPCOMING_DAYS_TOTAL", "22"))

    # Export
    EXPORT_CSV_LEGACY_QUOTES: bool = _env_bool("EXPORT_CSV_LEGACY_QUOTES")
    EXPORT_DIR: str = os.getenv("EXPORT_DIR", "") or tempfile.gettempdir()

    @classmethod
    def get_status(cls) -> discord.Status:
        status_map = {
            "online": discord.Status.online,
            "idle": discord.Status.idle,
            "dnd": discord.Status.dnd,
            "invisible": discord.Status.invisible,
        }
        return status_map.get(cls.STATUS.lower(), discord.Status.online)

    @classmethod
    def get_activity(cls) -> discord.Activity | None:
        """Get bot activity from environment variables

        Supports: playing, listening, watching, competing
        """
        if not cls.ACTIVITY_NAME:
            return None

        activity_map = {
            "playing": discord.ActivityType.playing,
            "listening": discord.ActivityType.listening,
            "watching": discord.ActivityType.watching,
            "competing": discord.ActivityType.competing,
        }
        activity_type = activity_map.get(cls.ACTIVITY_TYPE.lower())
        if activity_type is None:
            if cls.ACTIVITY_TYPE:
                logger.warning(
                    f"Unknown DISCORD_ACTIVITY_TYPE '{cls.ACTIVITY_TYPE}', using 'playing'"
                )
            activity_type = discord.ActivityType.playing
        return discord.Activity(type=activity_type, name=cls.ACTIVITY_NAME)
