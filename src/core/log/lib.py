"""Core logging implementation for ui-layer-builder."""

import logging
import sys
from typing import Optional

__all__ = ["get_logger", "setup_logging"]

LOGGER_NAME = "ui-layer-builder"


def setup_logging(level: int | str | None = None, stream=sys.stderr) -> None:
    """Configure basic logging.

    Args:
        level: Logging level. Defaults to UI_BUILDER_LOG_LEVEL.
        stream: Output stream.
    """
    if level is None:
        from src.config import EnvVar, get_environment

        level = get_environment(EnvVar.UI_BUILDER_LOG_LEVEL)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=stream,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Name of the logger.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name or LOGGER_NAME)
