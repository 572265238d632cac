"""Logging setup for the Communify application."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Route ``communify`` loggers to stderr at the requested level.

    Safe to call more than once; the handler is only installed the first time.
    """
    app_logger = logging.getLogger("communify")
    app_logger.setLevel(level.upper())
    if any(getattr(h, "_communify", False) for h in app_logger.handlers):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._communify = True  # type: ignore[attr-defined]
    app_logger.addHandler(handler)
    app_logger.propagate = False
