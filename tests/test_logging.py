import logging

import colorlog
import pytest

from curesurv.logging import PACKAGE_LOGGER, setup


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    for h in list(logger.handlers):
        if h not in handlers:
            logger.removeHandler(h)
    logger.setLevel(level)


def test_setup_custom_logger():
    logger = logging.getLogger("curesurv.test_setup")
    handler = setup(level=logging.DEBUG, logger=logger)
    try:
        assert logger.level == logging.DEBUG
        assert logger.handlers == [handler]
        assert isinstance(handler.formatter, colorlog.ColoredFormatter)
    finally:
        logger.removeHandler(handler)


def test_setup_is_idempotent(package_logger):
    n = len(package_logger.handlers)
    first = setup(level=logging.WARNING)
    second = setup(level=logging.DEBUG)

    assert package_logger.level == logging.DEBUG
    assert len(package_logger.handlers) == n + 1
    assert first not in package_logger.handlers
    assert second in package_logger.handlers


def test_setup_keeps_foreign_handlers(package_logger):
    own = logging.NullHandler()
    package_logger.addHandler(own)
    setup()
    setup()
    assert own in package_logger.handlers
    package_logger.removeHandler(own)


def test_setup_format():
    logger = logging.getLogger("curesurv.test_format")
    handler = setup(logger=logger, fmt="%(log_color)s%(message)s")
    try:
        record = logging.LogRecord("x", logging.WARNING, __file__, 1, "NaNs produced", None, None)
        assert "NaNs produced" in handler.format(record)
    finally:
        logger.removeHandler(handler)
