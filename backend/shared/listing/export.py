"""Full-guild birthday exports as plain text or RFC 4180 CSV."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from enum import Enum
from pathlib import Path

from shared.models.birthday import BirthdayRecord, MemberInfo

from .dates import format_month_day
from .errors import UnsupportedExportFormat

logger = logging.getLogger(__name__)

MemberLookup = Callable[[int], MemberInfo | None]

CSV_HEADER = ("UserId", "Username", "Nickname", "MonthDayDisp", "Month", "Day")
CRLF = "\r\n"

_CSV_SPECIAL = (",", '"', "\r", "\n")


class ExportFormat(Enum):
    TEXT = "txt"
    CSV = "csv"

    @property
    def extension(self) -> str:
        return self.value

    @classmethod
    def parse(cls, arg: str | None) -> ExportFormat:
        """Map a command argument to a format. No argument means plain text."""
        if arg is None or not arg.strip():
            return cls.TEXT
        key = arg.strip().lower()
        if key == "csv":
            return cls.CSV
        if key in ("txt", "text"):
            return cls.TEXT
        raise UnsupportedExportFormat(arg)


def csv_quote(value: str, legacy: bool = False) -> str:
    """Wrap ``value`` in double quotes, doubling embedded quotes unless ``legacy``."""
    if not legacy:
        value = value.replace('"', '""')
    return f'"{value}"'


def csv_field(value: str, legacy: bool = False) -> str:
    """Quote ``value`` only when it holds a delimiter, quote or line break."""
    if legacy or not any(ch in value for ch in _CSV_SPECIAL):
        return value
    return csv_quote(value)


def _members(
    records: Iterable[BirthdayRecord], lookup: MemberLookup
) -> Iterator[tuple[BirthdayRecord, MemberInfo]]:
    for record in records:
        member = lookup(record.user_id)
        if member is None:
            # Left the guild between the fetch and the render
            logger.debug(f"Skipping departed member {record.user_id}")
            continue
        yield record, member


def export_text(guild_name: str, records: Iterable[BirthdayRecord], lookup: MemberLookup) -> str:
    """One line per user: ``● Mon-DD: <id> <username>#<disc>[ - Nickname: <nick>]``"""
    lines = [f"Birthdays in {guild_name}", ""]
    for record, member in _members(records, lookup):
        line = f"● {format_month_day(record.month, record.day)}: {record.user_id} {member.tag}"
        if member.nickname is not None:
            line += f" - Nickname: {member.nickname}"
        lines.append(line)
    return "\n".join(lines) + "\n"


def export_csv(
    records: Iterable[BirthdayRecord],
    lookup: MemberLookup,
    legacy_quotes: bool = False,
) -> str:
    """RFC 4180 export with a header row and CRLF line endings.

    ``legacy_quotes`` writes the nickname raw and leaves quotes inside the
    username undoubled, for consumers that expect that unescaped framing.
    """
    rows = [",".join(CSV_HEADER)]
    for record, member in _members(records, lookup):
        rows.append(",".join((
            str(record.user_id),
            csv_quote(member.tag, legacy=legacy_quotes),
            csv_field(member.nickname or "", legacy=legacy_quotes),
            format_month_day(record.month, record.day),
            str(record.month),
            str(record.day),
        )))
    return CRLF.join(rows) + CRLF


def export_filename(guild_id: int, fmt: ExportFormat) -> str:
    return f"birthdaybot-{guild_id}.{fmt.extension}"


@contextmanager
def export_file(directory: str | os.PathLike, guild_id: int, fmt: ExportFormat, content: str):
    """Write ``content`` to a temporary export file and remove it on exit.

    Each call gets its own directory under ``directory``, so concurrent
    exports for the same guild never share a file.
    """
    with tempfile.TemporaryDirectory(prefix=f"birthdaybot-{guild_id}-", dir=directory) as tmp:
        path = Path(tmp) / export_filename(guild_id, fmt)
        path.write_text(content, encoding="utf-8", newline="")
        yield path
