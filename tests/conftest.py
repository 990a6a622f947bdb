from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from htmlstrip.utils.logging import PACKAGE_LOGGER


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Drop handlers bound to a CliRunner stream once the test is done."""

    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
