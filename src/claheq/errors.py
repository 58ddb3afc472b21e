# --- file: claheq/errors.py ---
"""
Error kinds raised by the CLAHE pipeline.

All of them derive from ``ValueError`` so callers that already guard the
filters with ``except ValueError`` keep working. Every check runs before
the output buffer is written.
"""

from __future__ import annotations
from enum import Enum

__all__ = [
    "ErrorKind",
    "ClaheError",
    "InvalidHistogramSizeError",
    "TileGridTooFineError",
    "EmptyInputError",
]


class ErrorKind(Enum):
    INVALID_HISTOGRAM_SIZE = "invalid_histogram_size"
    TILE_GRID_TOO_FINE = "tile_grid_too_fine"
    # handled locally with an identity table, never raised
    DEGENERATE_TILE = "degenerate_tile"
    EMPTY_INPUT = "empty_input"


class ClaheError(ValueError):
    """Base class; ``kind`` tells which check failed."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidHistogramSizeError(ClaheError):
    kind = ErrorKind.INVALID_HISTOGRAM_SIZE


class TileGridTooFineError(ClaheError):
    kind = ErrorKind.TILE_GRID_TOO_FINE


class EmptyInputError(ClaheError):
    kind = ErrorKind.EMPTY_INPUT
