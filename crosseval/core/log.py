from __future__ import annotations

"""Package logger configuration.

Every module logs through ``logging.getLogger(__name__)``; the ``Verbose`` and
``Silent`` cross-validation options only move the level of the package logger.
"""

import logging
from typing import Optional

PACKAGE_LOGGER = "crosseval"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(
    *,
    verbose: bool = False,
    silent: bool = False,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """Set the ``crosseval`` logger level from the Verbose/Silent flags.

    Silent wins over Verbose. A stream handler is attached once, only when the
    logger has none and the root logger is unconfigured.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if silent:
        logger.setLevel(logging.WARNING)
    elif verbose:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if handler is not None:
        logger.addHandler(handler)
    elif not logger.handlers and not logging.getLogger().handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(h)
    return logger
