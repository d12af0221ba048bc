"""Logging helpers scoped to the ``cryptomarinara`` logger.

Library code only ever touches the package logger, never the root logger:
the process-wide setup belongs to the embedding application.
"""

import logging
import sys
from typing import Optional, TextIO, Union


PACKAGE_LOGGER = "cryptomarinara"
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

# keeps "No handlers could be found" noise out of applications that log nothing
logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def set_package_log_level(level: Union[int, str]) -> logging.Logger:
    """Set the level of the package logger and return it."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    return logger


def configure_logging(level: Union[int, str] = logging.INFO, stream: Optional[TextIO] = None) -> logging.Handler:
    """
    Attach a terminal handler to the package logger, for applications that
    have no logging setup of their own.

    Calling it again replaces the handler installed by the previous call
    instead of stacking another one.
    """
    logger = set_package_log_level(level)
    for handler in list(logger.handlers):
        if getattr(handler, "_cryptomarinara", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, "%H:%M:%S"))
    handler._cryptomarinara = True
    logger.addHandler(handler)
    return handler
