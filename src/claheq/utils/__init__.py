# -*- coding: utf-8 -*-
"""
claheq.utils
============

Small helpers shared across the package: logging setup and the thread
pool used by both pipeline stages.
"""

from .logger import LOGGER_NAME, get_logger, setup_logging
from .parallel import run_tasks, chunk_ranges

__all__ = [
    "LOGGER_NAME",
    "get_logger",
    "setup_logging",
    "run_tasks",
    "chunk_ranges",
]
