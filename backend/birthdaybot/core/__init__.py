"""Core modules for the birthday listing bot."""

from .logging import setup_logging

__all__ = ["setup_logging"]
