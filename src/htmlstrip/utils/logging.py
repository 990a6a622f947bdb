"""Logging utilities.

Purpose:
    Centralize logging configuration for the package.

Key responsibilities:
    - Provide helper to obtain package loggers.
    - Switch between quiet and verbose output.

Notes/Edge cases:
    - Logging configuration is idempotent; repeated calls replace the level
      but never stack handlers.
    - Records go to stderr.  Stdout is reserved for the filtered document.
"""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "htmlstrip"
_HANDLER_NAME = "htmlstrip-stderr"
_FORMAT = "%(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the package logger for module ``name``."""

    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    ``verbose`` selects ``INFO``; otherwise only warnings and errors are shown.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    level = logging.INFO if verbose else logging.WARNING
    handler = next((h for h in logger.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    else:
        # stderr may have been swapped (e.g. by a test runner) since the last call
        handler.setStream(sys.stderr)  # type: ignore[attr-defined]
    handler.setLevel(level)
    logger.setLevel(level)
    return logger


__all__ = ["PACKAGE_LOGGER", "get_logger", "configure_logging"]
