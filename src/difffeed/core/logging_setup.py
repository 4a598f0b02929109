"""
Logging setup for DiffFeed.

Log records go to stderr only; stdout carries the rendered feed.
"""

import logging
import sys

from difffeed.core.config import LoggingConfig

PACKAGE_LOGGER = "difffeed"


class PackageStreamHandler(logging.StreamHandler):
    """Stderr handler installed by configure_logging."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)


def configure_logging(config: LoggingConfig, verbose: bool = False) -> logging.Logger:
    """
    Attach a stderr handler to the package logger.

    Calling this again replaces the handler installed by a previous call,
    so repeated CLI invocations in one process do not duplicate output.

    Args:
        config: Level and format settings
        verbose: Force DEBUG level regardless of config

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)

    level_name = "DEBUG" if verbose else config.level.upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        logger.warning(f"Unknown log level {config.level!r}, using WARNING")
        level = logging.WARNING

    for handler in list(logger.handlers):
        if isinstance(handler, PackageStreamHandler):
            logger.removeHandler(handler)

    handler = PackageStreamHandler()
    handler.setFormatter(logging.Formatter(config.format))
    logger.addHandler(handler)
    logger.setLevel(level)

    return logger
