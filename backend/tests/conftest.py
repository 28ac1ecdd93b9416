"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from shared.models.birthday import BirthdayRecord, BirthdayRow, MemberInfo


@dataclass
class FakeMember:
    id: int
    name: str
    discriminator: str = "0001"
    nick: str | None = None


@dataclass
class FakeGuild:
    id: int
    name: str
    members: list[FakeMember] = field(default_factory=list)

    def get_member(self, user_id: int) -> FakeMember | None:
        return next((m for m in self.members if m.id == user_id), None)


class FakeRepository:
    """In-memory stand-in for BirthdayRepository."""

    def __init__(self, rows: list[BirthdayRow]):
        self.rows = rows

    async def list_guild_birthdays(self, guild_id: int) -> list[BirthdayRow]:
        rows = [r for r in self.rows if r.guild_id == guild_id]
        return sorted(rows, key=lambda r: (r.birth_month, r.birth_day))

    async def get_user_birthday(self, guild_id: int, user_id: int) -> BirthdayRow | None:
        return next(
            (r for r in self.rows if r.guild_id == guild_id and r.user_id == user_id), None
        )


class FakePool:
    """Minimal asyncpg.Pool double whose connection returns canned rows."""

    def __init__(self, rows: list[dict]):
        self.conn = MagicMock()
        self.conn.fetch = AsyncMock(return_value=rows)
        self.conn.fetchrow = AsyncMock(return_value=rows[0] if rows else None)

    @asynccontextmanager
    async def acquire(self):
        yield self.conn


def make_interaction(guild: FakeGuild | None) -> SimpleNamespace:
    response = SimpleNamespace(
        send_message=AsyncMock(),
        defer=AsyncMock(),
        is_done=MagicMock(return_value=False),
    )
    return SimpleNamespace(
        guild=guild,
        response=response,
        followup=SimpleNamespace(send=AsyncMock()),
    )


def record(user_id: int, month: int, day: int, name: str, tz: str | None = None) -> BirthdayRecord:
    return BirthdayRecord(user_id=user_id, month=month, day=day, display_name=name, timezone_label=tz)


@pytest.fixture
def members() -> list[FakeMember]:
    return [
        FakeMember(id=101, name="alice", nick="Ally"),
        FakeMember(id=102, name="Bob", discriminator="4242"),
        FakeMember(id=103, name="carol", nick="Caz, the Great"),
        FakeMember(id=104, name="dave"),
    ]


@pytest.fixture
def guild(members) -> FakeGuild:
    return FakeGuild(id=9000, name="Test Guild", members=members)


@pytest.fixture
def rows() -> list[BirthdayRow]:
    return [
        BirthdayRow(guild_id=9000, user_id=101, birth_month=3, birth_day=1, time_zone="Europe/Paris"),
        BirthdayRow(guild_id=9000, user_id=102, birth_month=3, birth_day=1),
        BirthdayRow(guild_id=9000, user_id=103, birth_month=3, birth_day=10),
        # Left the guild
        BirthdayRow(guild_id=9000, user_id=999, birth_month=3, birth_day=2),
        BirthdayRow(guild_id=9000, user_id=104, birth_month=12, birth_day=25),
    ]


@pytest.fixture
def lookup(members):
    infos = {m.id: MemberInfo(m.name, m.discriminator, m.nick) for m in members}
    return infos.get
