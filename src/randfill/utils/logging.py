"""Logging utilities.

Purpose:
    Centralize logging configuration for the package.

Key responsibilities:
    - Provide helper to obtain loggers under the ``randfill`` namespace.
    - Allow an optional verbose/debug mode for the command line.

Notes/Edge cases:
    - The package logger only carries a ``NullHandler`` until
      :func:`configure_logging` is called, so importing the library never
      prints anything.
    - Configuration is idempotent; repeated calls only adjust the level.
"""

from __future__ import annotations

import logging

PACKAGE_LOGGER = "randfill"

_HANDLER_NAME = "randfill-stream"
_FORMAT = "%(levelname)s %(name)s: %(message)s"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger for ``name`` nested under the package logger."""

    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    ``verbose`` switches the level from ``WARNING`` to ``DEBUG``.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    level = logging.DEBUG if verbose else logging.WARNING
    handler = next((h for h in logger.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    handler.setLevel(level)
    logger.setLevel(level)
    return logger


__all__ = ["PACKAGE_LOGGER", "get_logger", "configure_logging"]
