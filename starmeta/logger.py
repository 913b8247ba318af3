"""
Logging setup

Uses loguru for all StarMeta log output.
"""

import os
import sys
from typing import Optional

from loguru import logger


def setup_logger(
    level: Optional[str] = None,
    sink=sys.stderr,
    enqueue: bool = True,
    colorize: bool = True,
) -> None:
    """
    Configure the loguru logger

    Args:
        level: log level (DEBUG, INFO, WARNING, ERROR)
        sink: output target
        enqueue: route messages through a queue (thread safe)
        colorize: colored output
    """
    if level is None:
        level = "DEBUG" if os.environ.get("STARMETA_DEBUG", "0") == "1" else "INFO"
    level = level.upper()

    logger.remove()
    logger.add(
        sink=sink,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}",
        enqueue=enqueue,
        level=level,
        colorize=colorize,
        backtrace=(level == "DEBUG"),
        diagnose=(level == "DEBUG"),
    )

    if level == "DEBUG":
        logger.debug("debug mode enabled")


__all__ = ["logger", "setup_logger"]
