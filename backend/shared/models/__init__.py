"""Shared data models for the birthday listing bot."""

from .birthday import BirthdayRecord, BirthdayRow, ListingGroup, MemberInfo

__all__ = [
    "BirthdayRecord",
    "BirthdayRow",
    "ListingGroup",
    "MemberInfo",
]
