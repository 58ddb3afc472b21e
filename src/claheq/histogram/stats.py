# --- file: claheq/histogram/stats.py ---
"""
Scalar summaries of intensity histograms, used to compare an image before
and after equalization.

- histogram_entropy / image_entropy : Shannon entropy in bits.
- classify_gray_level : which third of the range holds most pixels
  (gray-level classes of Zhu & Huang, "An Adaptive Histogram Equalization
  Algorithm on the Image Gray Level Mapping").
"""

from __future__ import annotations
from enum import IntEnum

import numpy as np

from .build import NUM_BINS, build_histogram, check_histogram

__all__ = ["GrayLevel", "histogram_entropy", "image_entropy", "classify_gray_level"]


class GrayLevel(IntEnum):
    LOW = 0
    MIDDLE = 1
    HIGH = 2


def histogram_entropy(hist: np.ndarray) -> float:
    """Shannon entropy (bits) of a 256-bin histogram; 0.0 for an empty one."""
    h = check_histogram(hist).astype(np.float64)
    total = h.sum()
    if total <= 0:
        return 0.0
    p = h[h > 0] / total
    return float(-(p * np.log2(p)).sum())


def image_entropy(image: np.ndarray) -> float:
    return histogram_entropy(build_histogram(image))


def classify_gray_level(hist: np.ndarray) -> GrayLevel:
    """
    Return the intensity third with the largest pixel count.

    Thirds are [0, 85], [85, 170], [170, 255]; the boundary bins 85 and 170
    count toward both neighbours. Ties go to the darker class.
    """
    h = check_histogram(hist).astype(np.int64, copy=False)
    third = (NUM_BINS - 1) // 3
    sums = (
        int(h[: third + 1].sum()),
        int(h[third: 2 * third + 1].sum()),
        int(h[2 * third:].sum()),
    )
    level = GrayLevel.LOW
    if sums[1] > sums[level]:
        level = GrayLevel.MIDDLE
    if sums[2] > sums[level]:
        level = GrayLevel.HIGH
    return level
