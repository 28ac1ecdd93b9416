"""Repository for the user_birthdays table."""

from __future__ import annotations

import asyncpg

from shared.models.birthday import BirthdayRow

_COLUMNS = "guild_id, user_id, birth_month, birth_day, time_zone"


class BirthdayRepository:
    """Pure SQL reads for guild birthday listings."""

    def __init__(self, pool: asyncpg.Pool) -> None:
        self.pool = pool

    async def list_guild_birthdays(self, guild_id: int) -> list[BirthdayRow]:
        """Get every stored birthday in a guild, ordered by month and day."""
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {_COLUMNS}
                FROM user_birthdays
                WHERE guild_id = $1
                ORDER BY birth_month, birth_day
                """,
                guild_id,
            )
            return [BirthdayRow(**dict(row)) for row in rows]

    async def get_user_birthday(self, guild_id: int, user_id: int) -> BirthdayRow | None:
        """Get one member's birthday in a guild."""
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                f"SELECT {_COLUMNS} FROM user_birthdays WHERE guild_id = $1 AND user_id = $2",
                guild_id,
                user_id,
            )
            return BirthdayRow(**dict(row)) if row else None
