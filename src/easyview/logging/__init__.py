"""
Logging module - structlog setup for the CLI.
"""

from .setup import configure_logging, console_level

__all__ = [
    "configure_logging",
    "console_level",
]
