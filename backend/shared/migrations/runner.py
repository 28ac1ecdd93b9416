"""Applies the SQL files in ``versions/`` that the database has not seen yet."""

from __future__ import annotations

import logging
from pathlib import Path

import asyncpg

logger = logging.getLogger(__name__)

VERSIONS_DIR = Path(__file__).resolve().parent / "versions"

TRACKING_TABLE = "schema_migrations"


async def run_pending(pool: asyncpg.Pool, versions_dir: Path | None = None) -> list[str]:
    """Apply pending ``NNN_name.sql`` files in filename order.

    Each file runs in its own transaction together with its tracking row.
    Returns the versions applied by this call.
    """
    versions_dir = versions_dir or VERSIONS_DIR

    async with pool.acquire() as conn:
        await conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {TRACKING_TABLE} (
                version    TEXT PRIMARY KEY,
                applied_at TIMESTAMPTZ DEFAULT NOW()
            )
            """
        )
        applied = {row["version"] for row in await conn.fetch(f"SELECT version FROM {TRACKING_TABLE}")}

        newly_applied: list[str] = []
        for sql_path in sorted(versions_dir.glob("*.sql")):
            version = sql_path.stem
            if version in applied:
                continue
            logger.info("Applying migration: %s", version)
            async with conn.transaction():
                await conn.execute(sql_path.read_text(encoding="utf-8"))
                await conn.execute(
                    f"INSERT INTO {TRACKING_TABLE} (version) VALUES ($1)",
                    version,
                )
            newly_applied.append(version)

    if newly_applied:
        logger.info("Applied %d migration(s): %s", len(newly_applied), ", ".join(newly_applied))
    else:
        logger.info("Database schema is up to date")
    return newly_applied
