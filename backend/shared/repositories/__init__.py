"""Repository layer for the birthday listing bot."""

from .birthday import BirthdayRepository

__all__ = [
    "BirthdayRepository",
]
