"""Discord bot listing recent, upcoming and exported guild birthdays."""

__version__ = "1.0.0"
