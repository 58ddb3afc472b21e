"""
claheq.histogram
================

Per-region intensity histograms and their manipulation.

Modules
-------
build : 256-bin histogram of a uint8 region (whole image or tile).
clip  : Clip at a limit and redistribute the excess evenly.
stats : Entropy and gray-level class of a histogram.

Guidelines
----------
- Histograms are int64 arrays of shape (256,); anything else raises
  InvalidHistogramSizeError.
- Functions never modify their input histogram.
"""

# Re-exports for short imports like:
#   from claheq.histogram import build_histogram, clip_histogram
from .build import NUM_BINS, new_histogram, build_histogram, histogram_for_region
from .clip import clip_histogram, clipped_excess
from .stats import GrayLevel, histogram_entropy, image_entropy, classify_gray_level

import importlib as _importlib
build = _importlib.import_module(".build", __name__)
clip = _importlib.import_module(".clip", __name__)
stats = _importlib.import_module(".stats", __name__)

__all__ = [
    # functions
    "NUM_BINS",
    "new_histogram",
    "build_histogram",
    "histogram_for_region",
    "clip_histogram",
    "clipped_excess",
    "GrayLevel",
    "histogram_entropy",
    "image_entropy",
    "classify_gray_level",
    # modules
    "build",
    "clip",
    "stats",
]
