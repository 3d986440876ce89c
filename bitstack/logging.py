"""
bitstack logging.

The library only creates loggers. Handlers are installed by applications,
for example the command line front end via setup_logging().
"""

import logging
import sys
from logging import Logger
from typing import Optional

BITSTACK_LOGGER = logging.getLogger("bitstack")
"""bitstack root logger."""

BITSTACK_LOGGER.addHandler(logging.NullHandler())


def get_logger(name: Optional[str] = None, parent: Optional[Logger] = BITSTACK_LOGGER) -> Logger:
    """
    Get a bitstack logger. Wraps logging.getLogger().

    Args:
        name: Logger name. None for the bitstack root logger.
        parent: Parent logger. BITSTACK_LOGGER by default.

    Returns:
        Requested logger.
    """
    if name is None:
        return BITSTACK_LOGGER

    if parent:
        return parent.getChild(name)

    return logging.getLogger(name)


def setup_logging(level: int = logging.WARNING) -> None:
    """
    Route bitstack log messages to stderr.

    Args:
        level: Logging level for the bitstack loggers.
    """
    # Only the bitstack hierarchy, not logging.root
    BITSTACK_LOGGER.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d - %(levelname)5s - %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    for handler in list(BITSTACK_LOGGER.handlers):
        if isinstance(handler, logging.StreamHandler):
            BITSTACK_LOGGER.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    BITSTACK_LOGGER.addHandler(handler)
