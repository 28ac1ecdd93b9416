"""Day-of-year indexing on a fixed 366-slot ring.

February always has 29 days here, so every calendar date has the same
index in every year and Feb 29 keeps its own slot (60).
"""

from collections.abc import Iterator
from datetime import date

from .errors import InvalidRecord

RING_SIZE = 366

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# Days per month with the leap day always reserved
MONTH_LENGTHS = (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# Days before the first of each month
MONTH_OFFSETS = (0, 31, 60, 91, 121, 152, 182, 213, 244, 274, 305, 335)

UPCOMING_DAYS_BEFORE = 8
UPCOMING_DAYS_TOTAL = 22


def validate(month: int, day: int) -> None:
    if not 1 <= month <= 12 or not 1 <= day <= MONTH_LENGTHS[month - 1]:
        raise InvalidRecord(month, day)


def date_index(month: int, day: int) -> int:
    """Return the 1..366 ring position of ``month``/``day``."""
    validate(month, day)
    return MONTH_OFFSETS[month - 1] + day


def today_index(today: date) -> int:
    return date_index(today.month, today.day)


def format_month_day(month: int, day: int) -> str:
    """``(3, 1)`` -> ``Mar-01``"""
    return f"{MONTH_NAMES[month - 1]}-{day:02d}"


def format_day_month(month: int, day: int) -> str:
    """``(3, 1)`` -> ``01-Mar``"""
    return f"{day:02d}-{MONTH_NAMES[month - 1]}"


def scan(
    center: int,
    days_before: int = UPCOMING_DAYS_BEFORE,
    days_total: int = UPCOMING_DAYS_TOTAL,
) -> Iterator[int]:
    """Yield ``days_total`` ring indices starting ``days_before`` days before ``center``.

    A start at or below zero counts back from the end of the ring, so a
    start of 0 becomes 366 and -3 becomes 363. Past 366 the scan resets to 1.

    The default window covers 7 days back, today and 14 days ahead; the
    first emitted index is one day further back than the visible window.
    """
    if not 1 <= center <= RING_SIZE:
        raise ValueError(f"center must be within 1..{RING_SIZE}, got {center}")
    if not 0 <= days_before < RING_SIZE:
        raise ValueError(f"days_before must be within 0..{RING_SIZE - 1}, got {days_before}")
    if days_total < 0:
        raise ValueError("days_total must not be negative")

    index = center - days_before
    if index <= 0:
        index = RING_SIZE - abs(index)

    for _ in range(days_total):
        yield index
        index += 1
        if index > RING_SIZE:
            index = 1
