"""Logging setup for monzo_feeds."""

import logging
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("monzo_feeds")

_handler: Optional[logging.Handler] = None


def setup_logging(level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Configure the package logger.

    Installs a single stderr handler on the ``monzo_feeds`` logger. Calling it
    again only updates the level.

    Args:
        level: Log level name or number (defaults to the configured level)

    Returns:
        The package logger
    """
    if level is None:
        from monzo_feeds.config import get_config

        level = get_config().log_level

    if isinstance(level, str):
        level = level.upper()

    logger.setLevel(level)

    global _handler
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    if _handler not in logger.handlers:
        logger.addHandler(_handler)

    return logger
