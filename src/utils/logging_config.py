"""Logger factory and console logging setup."""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "debt_engine"


def setup_logging(level: int | str = logging.INFO, verbose: bool = False) -> logging.Logger:
    """Attach a console handler to the package root logger.

    Args:
        level: Log level for the root package logger.
        verbose: Include function and line number in each line.

    Returns:
        Configured root logger.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    if verbose:
        fmt = "[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s"
    else:
        fmt = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt="%H:%M:%S"))
    root_logger.addHandler(handler)
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under the package root, e.g. ``debt_engine.simulator``."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
