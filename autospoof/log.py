"""Logging configuration for the autospoof command line."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: int = logging.INFO, name: str = "autospoof") -> logging.Logger:
    """Configure and return the package logger with consistent formatting.

    Parameters
    ----------
    level : int, optional
        Logging level applied to the logger and its handler. Defaults to
        ``logging.INFO``.
    name : str, optional
        Logger name; every module logger lives under ``autospoof``.

    Returns
    -------
    logging.Logger
        The configured logger. Calling this again only adjusts the level.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger


__all__ = ["setup_logging"]
