"""Logging setup for the solver package.

Library modules only create loggers (``logging.getLogger(__name__)``); a host
application calls ``setup_logging`` once to decide where solver output goes.
"""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "triadsolver"

_PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_JSON_FORMAT = '{"time":"%(asctime)s","level":"%(levelname)s","name":"%(name)s","message":"%(message)s"}'


def setup_logging(level: str | int = "INFO", format_json: bool = False) -> logging.Logger:
    """
    Attach a stdout handler to the package logger.

    Repeated calls replace the previous handler. The root logger is left to the
    host application.

    Args:
        level: Level name (``"debug"``, ``"INFO"``, ...) or a logging constant
        format_json: Emit one JSON object per line instead of plain text

    Returns:
        The configured package logger
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    if format_json:
        handler.setFormatter(logging.Formatter(_JSON_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the package logger (``"solver"`` -> ``"triadsolver.solver"``)."""
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


__all__ = ["PACKAGE_LOGGER", "get_logger", "setup_logging"]
