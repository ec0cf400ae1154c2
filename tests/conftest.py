import logging

import pytest

from upgrade_checker.logging_utils import PACKAGE_LOGGER


@pytest.fixture(autouse=True)
def restore_package_logger():
    # cli.main installs a handler bound to the current sys.stderr.
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)
