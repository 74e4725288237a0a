"""
Logging setup.

Replaces loguru's default sink with a single stderr sink at the configured
level.
"""
import sys

from loguru import logger


def configure_logging(level: str = "INFO") -> None:
    """Configure the loguru logger for the API process."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{line} - {message}",
        backtrace=False,
        diagnose=False,
    )


def mask_address(address: str | None) -> str:
    """Shorten an address or hash for logs: 0x1234...abcd."""
    if not address:
        return "<none>"
    if len(address) <= 12:
        return address
    return f"{address[:6]}...{address[-4:]}"
