"""Loguru configuration for TaskPilot."""

import sys
from pathlib import Path

from loguru import logger

from taskpilot.core.config import Settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def configure_logging(settings: Settings) -> None:
    """Configure loguru based on settings.

    Replaces the default handler with a daily rotated file sink and a
    colorized stderr sink.

    Args:
        settings: Settings providing level, debug flag and log directory.
    """
    logger.remove()  # Remove default handler

    logs_dir = Path(settings.taskpilot_log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)

    logger.add(
        str(logs_dir / "taskpilot_{time:YYYY-MM-DD}.log"),
        rotation="1 day",
        retention="7 days",
        level=settings.taskpilot_log_level,
        format=LOG_FORMAT,
    )

    console_level = "DEBUG" if settings.taskpilot_debug else settings.taskpilot_log_level
    logger.add(
        sys.stderr,
        level=console_level,
        format=LOG_FORMAT,
        colorize=True,
    )

    logger.debug(f"Logging configured (level={console_level}, dir={logs_dir})")
