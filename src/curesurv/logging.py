"""
Colored console output for the ``curesurv`` loggers.

Every module logs through ``logging.getLogger(__name__)``: the numerical
primitives report bracket searches and integrals at DEBUG level and produced
NaNs at WARNING. Nothing is printed unless the application configures
logging, for instance with :func:`setup`:

>>> import logging
>>> from curesurv.logging import setup
>>> setup(logging.DEBUG)
"""

from __future__ import annotations

import logging

import colorlog

#: the package logger, parent of every module logger
PACKAGE_LOGGER = "curesurv"

DEFAULT_FORMAT = "%(log_color)s%(name)s [%(levelname)s] %(message)s"


def _installed(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, "_curesurv_handler", False)]


def setup(
    level: int = logging.INFO,
    logger: logging.Logger | None = None,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Handler:
    """Attach a colored stream handler to `logger` and set its level.

    Calling it again replaces the handler installed by a previous call
    instead of stacking a second one, so the level or format can be changed
    at any time without duplicated output. Handlers added by the application
    are left alone.

    Parameters
    ----------
    level
        logging level (see :mod:`logging` module).
    logger
        the logger to configure, the ``curesurv`` package logger by default.
    fmt
        a :class:`colorlog.ColoredFormatter` format string.

    Returns
    -------
    handler
        the installed handler
    """
    if logger is None:
        logger = colorlog.getLogger(PACKAGE_LOGGER)

    for old in _installed(logger):
        logger.removeHandler(old)

    handler = colorlog.StreamHandler()
    handler.setFormatter(colorlog.ColoredFormatter(fmt))
    handler._curesurv_handler = True

    logger.setLevel(level)
    logger.addHandler(handler)
    return handler
