"""
Logging utilities.

Application modules log through ``logging.getLogger(__name__)``; these
helpers give the ``scholarai`` logger tree and the uvicorn server one
shared stderr format.
"""

import logging
import sys
from typing import Any


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
ROOT_LOGGER = 'scholarai'


def _level_name(level: int | str) -> str:
    if isinstance(level, str):
        return level.upper()
    return logging.getLevelName(level)


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Get a logger that writes to stderr.

    A handler is attached only once, so calling this repeatedly is safe.

    Args:
        name: Logger name (the package root by default)

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)

    return logger


def set_log_level(level: int | str) -> None:
    """
    Set the log level of the scholarai logger tree.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL) or number

    Raises:
        ValueError: If the level name is unknown
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    logging.getLogger(ROOT_LOGGER).setLevel(level)


def uvicorn_log_config(level: int | str = "INFO") -> dict[str, Any]:
    """Build a uvicorn ``log_config`` that uses the ScholarAI log format."""
    level_name = _level_name(level)
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": LOG_FORMAT}},
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "uvicorn": {"handlers": ["default"], "level": level_name, "propagate": False},
            "uvicorn.error": {"level": level_name},
            "uvicorn.access": {"handlers": ["default"], "level": level_name, "propagate": False},
        },
    }
