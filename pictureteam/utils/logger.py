"""Logging configuration for the application."""
import logging
import sys
from pictureteam.config import Settings, settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("pictureteam")


def resolve_level(settings: Settings) -> int:
    """
    Level from ``log_level`` when set, else from the environment.

    Unknown level names fall back to INFO.
    """
    if settings.log_level:
        level = logging.getLevelName(settings.log_level.upper())
        return level if isinstance(level, int) else logging.INFO
    return logging.DEBUG if settings.environment == "development" else logging.INFO


def configure_logging(settings: Settings) -> logging.Logger:
    """Point the package logger at stdout with the configured level."""
    level = resolve_level(settings)
    logger.setLevel(level)

    # Add handler to logger if not already added
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(level)

    # Prevent duplicate logs
    logger.propagate = False
    return logger


configure_logging(settings)

__all__ = ["logger", "configure_logging", "resolve_level"]
