"""Logging setup shared by the agents and the Streamlit page."""

import sys
from typing import Optional

from loguru import logger

_configured: bool = False


def configure_logging(level: str = "INFO", log_file: Optional[str] = None, force: bool = False):
    """Replace loguru's default handler. Safe to call on every Streamlit rerun."""
    global _configured

    if _configured and not force:
        return logger

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> | <level>{message}</level>",
        colorize=True,
    )

    if log_file:
        logger.add(
            log_file,
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}",
            rotation="10 MB",
            retention="14 days",
        )

    _configured = True
    return logger
