"""Member search and per-user birthday formatting."""

import re
from collections.abc import Callable, Iterable
from typing import Protocol, TypeVar

from shared.models.birthday import BirthdayRecord, MemberInfo

from .dates import format_day_month
from .errors import UserNotFound

_MENTION_RE = re.compile(r"^<@!?(\d+)>$")


class NamedMember(Protocol):
    id: int
    name: str


M = TypeVar("M", bound=NamedMember)


def parse_user_id(text: str) -> int | None:
    """Parse a raw user ID or an ``<@id>`` / ``<@!id>`` mention."""
    text = text.strip()
    if match := _MENTION_RE.match(text):
        text = match.group(1)
    if not text.isdigit():
        return None
    user_id = int(text)
    # Snowflakes are unsigned 64-bit
    if user_id >= 2**64:
        return None
    return user_id


def find_member(
    search: str,
    members: Iterable[M],
    get_member: Callable[[int], M | None],
) -> M:
    """Resolve ``search`` to a guild member.

    IDs and mentions go through ``get_member``. Otherwise the first member
    whose username equals ``search`` ignoring case is returned; duplicate
    usernames resolve in roster order.
    """
    user_id = parse_user_id(search)
    if user_id is not None:
        member = get_member(user_id)
    else:
        needle = search.strip().casefold()
        member = next((m for m in members if m.name.casefold() == needle), None)

    if member is None:
        raise UserNotFound()
    return member


def format_display_name(member: MemberInfo) -> str:
    if member.nickname:
        return f"{member.nickname} ({member.tag})"
    return member.tag


def format_when(display_name: str, record: BirthdayRecord) -> str:
    """``Name: `01-Mar` - `Europe/Paris```"""
    result = f"{display_name}: `{format_day_month(record.month, record.day)}`"
    if record.timezone_label:
        result += f" - `{record.timezone_label}`"
    return result
