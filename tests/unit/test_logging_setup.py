"""
Unit tests for logging configuration.
"""

import logging

from difffeed.core.config import LoggingConfig
from difffeed.core.logging_setup import PACKAGE_LOGGER, PackageStreamHandler, configure_logging


def test_configures_level_and_single_handler():
    config = LoggingConfig(level="info", format="%(levelname)s %(message)s")

    configure_logging(config)
    logger = configure_logging(config)

    assert logger.name == PACKAGE_LOGGER
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert logger.handlers[0].formatter._fmt == "%(levelname)s %(message)s"


def test_verbose_forces_debug():
    logger = configure_logging(LoggingConfig(level="ERROR"), verbose=True)

    assert logger.level == logging.DEBUG


def test_unknown_level_falls_back_to_warning():
    logger = configure_logging(LoggingConfig(level="CHATTY"))

    assert logger.level == logging.WARNING


def test_reconfiguring_keeps_handlers_added_elsewhere():
    logger = logging.getLogger(PACKAGE_LOGGER)
    other = logging.StreamHandler()
    logger.addHandler(other)

    configure_logging(LoggingConfig())
    configure_logging(LoggingConfig())

    assert other in logger.handlers
    assert sum(isinstance(h, PackageStreamHandler) for h in logger.handlers) == 1
