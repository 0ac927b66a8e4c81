"""Logging setup for the engine, the API and the command line."""
from __future__ import annotations

import sys

from loguru import logger

from .config import get_settings


def configure_logging() -> None:
    """Configure loguru from the current settings.

    Human-readable console output by default, one JSON document per line when
    ``CE_LOG_JSON=true``.
    """

    settings = get_settings()
    logger.remove()
    if settings.log_json:
        logger.add(sys.stderr, format="{message}", level=settings.log_level, serialize=True)
    else:
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                "{message}"
            ),
            level=settings.log_level,
            colorize=True,
        )
    logger.debug(f"Logging configured: level={settings.log_level}, json={settings.log_json}")
