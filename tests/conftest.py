"""
Shared pytest fixtures.
"""

import logging

import pytest

from difffeed.core.logging_setup import PACKAGE_LOGGER


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers the CLI installs so they do not outlive CliRunner streams."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
