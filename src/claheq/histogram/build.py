# --- file: claheq/histogram/build.py ---
"""
Intensity histograms of 8-bit regions.

Typical usage
-------------
>>> from claheq.histogram import build_histogram, histogram_for_region
>>> h = build_histogram(img)                 # whole image
>>> h = histogram_for_region(img, tile)      # one tile (x, y, width, height)

Notes
-----
- Histograms are int64 arrays of shape (256,).
- Counting uses ``np.bincount``; the traversal order never matters.
"""

from __future__ import annotations
from typing import Optional

import numpy as np

from claheq.errors import InvalidHistogramSizeError

__all__ = [
    "NUM_BINS",
    "new_histogram",
    "check_histogram",
    "build_histogram",
    "histogram_for_region",
]

NUM_BINS = 256


def new_histogram() -> np.ndarray:
    return np.zeros(NUM_BINS, dtype=np.int64)


def check_histogram(hist: np.ndarray) -> np.ndarray:
    """Return ``hist`` as an array, raising if it is not a 256-bin buffer."""
    h = np.asarray(hist)
    if h.shape != (NUM_BINS,):
        raise InvalidHistogramSizeError(
            f"Histogram must have shape ({NUM_BINS},), got {h.shape}."
        )
    return h


def build_histogram(region: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Count the intensities of an 8-bit region.

    Parameters
    ----------
    region : np.ndarray
        2D uint8 array (a whole image or a slice of one).
    out : np.ndarray or None
        Pre-sized (256,) buffer to accumulate into. Checked before any
        write; a wrongly sized buffer is left untouched.

    Returns
    -------
    np.ndarray
        The histogram (``out`` itself when given).

    Raises
    ------
    InvalidHistogramSizeError
        If ``out`` is not shaped (256,).
    """
    if out is not None:
        check_histogram(out)
    a = np.asarray(region)
    if a.dtype != np.uint8:
        raise TypeError(f"Expected uint8 region, got dtype {a.dtype}.")

    counts = np.bincount(a.ravel(), minlength=NUM_BINS)
    if out is None:
        return counts.astype(np.int64, copy=False)
    out += counts.astype(out.dtype, copy=False)
    return out


def histogram_for_region(image: np.ndarray, rect) -> np.ndarray:
    """
    Histogram of the sub-rectangle ``rect`` of ``image``.

    ``rect`` is anything with ``x, y, width, height`` attributes (e.g. a Tile).
    """
    H, W = image.shape[:2]
    x, y, w, h = int(rect.x), int(rect.y), int(rect.width), int(rect.height)
    if x < 0 or y < 0 or w < 0 or h < 0 or x + w > W or y + h > H:
        raise ValueError(
            f"Region (x={x}, y={y}, w={w}, h={h}) lies outside image of shape {(H, W)}."
        )
    return build_histogram(image[y:y + h, x:x + w])
