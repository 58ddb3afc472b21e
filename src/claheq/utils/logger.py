# -*- coding: utf-8 -*-
"""
Logging setup for claheq.

Modules log through ``logging.getLogger(__name__)``; the package root
logger only carries a NullHandler until an application calls
``setup_logging``.
"""

from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Optional

__all__ = ["LOGGER_NAME", "get_logger", "setup_logging"]

LOGGER_NAME = "claheq"

_SHORT_FORMAT = "[%(levelname)s] %(message)s"
_LONG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(module)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Package logger, or a child of it for ``name``."""
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(debug: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach console (and optional file) handlers to the package logger.

    Calling it again replaces the handlers instead of stacking them.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    for h in list(logger.handlers):
        if not isinstance(h, logging.NullHandler):
            logger.removeHandler(h)
            h.close()

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(logging.DEBUG if debug else logging.INFO)
    if debug:
        console.setFormatter(logging.Formatter(_LONG_FORMAT, datefmt=_DATE_FORMAT))
    else:
        console.setFormatter(logging.Formatter(_SHORT_FORMAT))
    logger.addHandler(console)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file)
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_LONG_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(fh)

    return logger
