"""Logging setup for the clusterreg package.

Library modules only call ``logging.getLogger(__name__)``. Applications that
embed the registry call ``setup_logger()`` once at startup to get the
loader's skipped-manifest warnings on stdout.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(name: str = "clusterreg", level: int | str | None = None) -> logging.Logger:
    """Set up a logger with a stdout handler.

    Args:
        name: The name of the logger (default: the package logger).
        level: Logging level; defaults to ``CLUSTERREG_LOG_LEVEL``.

    Returns:
        Configured logger instance
    """
    if level is None:
        from clusterreg.config import Settings

        level = Settings.from_env().log_level

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Don't add handlers if they're already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)

    return logger
