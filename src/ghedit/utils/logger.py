"""Logging configuration for ghedit.

Console output goes to stderr so it never mixes with the Rich summary on
stdout. A rotated log file can be enabled for automation jobs.
"""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from loguru import logger

# Remove default handler
logger.remove()

_logger_configured = False


def setup_logging(
    level: str = "INFO",
    log_dir: Optional[Path] = None,
    *,
    console: bool = True,
) -> None:
    """Configure logging for the application.

    Args:
        level: Minimum log level
        log_dir: Directory for log files; no file output when None
        console: Enable stderr output
    """
    global _logger_configured

    if _logger_configured:
        return

    if console:
        logger.add(
            sys.stderr,
            format="<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
            level=level,
            colorize=True,
        )

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)

        log_file = log_dir / f"ghedit_{datetime.now():%Y%m%d}.log"
        logger.add(
            log_file,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            level=level,
            rotation="10 MB",
            retention="7 days",
            compression="zip",
        )

    _logger_configured = True


def get_logger(name: str = "ghedit"):
    """Get a logger bound to a module name."""
    return logger.bind(name=name)
