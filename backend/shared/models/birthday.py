"""Data models for guild birthday listings."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class BirthdayRow:
    """Row of the ``user_birthdays`` table."""

    guild_id: int
    user_id: int
    birth_month: int
    birth_day: int
    time_zone: str | None = None


@dataclass(frozen=True)
class MemberInfo:
    """Live membership data for a user, resolved from the guild."""

    username: str
    discriminator: str
    nickname: str | None = None

    @property
    def tag(self) -> str:
        return f"{self.username}#{self.discriminator}"


@dataclass(frozen=True)
class BirthdayRecord:
    """A stored birthday joined with the member's display name."""

    user_id: int
    month: int
    day: int
    display_name: str
    timezone_label: str | None = None

    @property
    def date_index(self) -> int:
        from shared.listing.dates import date_index  # avoid import cycle

        return date_index(self.month, self.day)


@dataclass(frozen=True)
class ListingGroup:
    """Users sharing one calendar date, names sorted case-insensitively."""

    month: int
    day: int
    date_index: int
    names: tuple[str, ...]

    @property
    def count(self) -> int:
        return len(self.names)
