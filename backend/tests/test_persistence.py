"""Tests for the birthday repository, migrations and pool manager."""

import asyncio
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock

import pytest
from conftest import FakePool

from shared.database import DatabaseManager, PoolConfig
from shared.migrations import runner
from shared.models.birthday import BirthdayRow
from shared.repositories.birthday import BirthdayRepository


def row(user_id: int, month: int, day: int, tz=None) -> dict:
    return {
        "guild_id": 9000,
        "user_id": user_id,
        "birth_month": month,
        "birth_day": day,
        "time_zone": tz,
    }


def test_list_guild_birthdays_maps_rows():
    pool = FakePool([row(1, 1, 5), row(2, 3, 1, "UTC")])

    result = asyncio.run(BirthdayRepository(pool).list_guild_birthdays(9000))

    assert result == [
        BirthdayRow(9000, 1, 1, 5, None),
        BirthdayRow(9000, 2, 3, 1, "UTC"),
    ]
    query, guild_id = pool.conn.fetch.await_args.args
    assert "ORDER BY birth_month, birth_day" in query
    assert guild_id == 9000


def test_get_user_birthday_found_and_missing():
    pool = FakePool([row(7, 2, 29)])
    repo = BirthdayRepository(pool)

    assert asyncio.run(repo.get_user_birthday(9000, 7)) == BirthdayRow(9000, 7, 2, 29)

    pool.conn.fetchrow = AsyncMock(return_value=None)
    assert asyncio.run(repo.get_user_birthday(9000, 8)) is None


def test_run_pending_applies_only_new_versions(tmp_path):
    (tmp_path / "001_first.sql").write_text("CREATE TABLE a (id INT);", encoding="utf-8")
    (tmp_path / "002_second.sql").write_text("CREATE TABLE b (id INT);", encoding="utf-8")

    pool = FakePool([{"version": "001_first"}])
    pool.conn.execute = AsyncMock()

    @asynccontextmanager
    async def transaction():
        yield

    pool.conn.transaction = transaction

    applied = asyncio.run(runner.run_pending(pool, tmp_path))

    assert applied == ["002_second"]
    executed = [call.args[0] for call in pool.conn.execute.await_args_list]
    assert "CREATE TABLE b (id INT);" in executed
    assert "CREATE TABLE a (id INT);" not in executed


def test_bundled_migration_creates_birthday_table():
    sql = (runner.VERSIONS_DIR / "001_user_birthdays.sql").read_text(encoding="utf-8")
    assert "CREATE TABLE IF NOT EXISTS user_birthdays" in sql


def test_transaction_pooler_disables_statement_cache():
    manager = DatabaseManager("postgresql://u:p@db.example.com:6543/postgres")
    kwargs = manager._pool_kwargs()

    assert manager.is_transaction_pooler
    assert kwargs["statement_cache_size"] == 0
    assert kwargs["min_size"] == 0


def test_pool_property_requires_connect():
    manager = DatabaseManager("postgresql://localhost:5432/postgres")
    assert not manager.is_connected
    with pytest.raises(RuntimeError):
        _ = manager.pool


def test_connect_retries_then_raises(monkeypatch):
    create_pool = AsyncMock(side_effect=OSError("connection refused"))
    monkeypatch.setattr("shared.database.asyncpg.create_pool", create_pool)
    manager = DatabaseManager(
        "postgresql://localhost:5432/postgres", PoolConfig(max_retries=3, retry_delay=0)
    )

    with pytest.raises(OSError):
        asyncio.run(manager.connect())

    assert create_pool.await_count == 3
    assert not manager.is_connected
