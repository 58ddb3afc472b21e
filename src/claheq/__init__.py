# --- file: claheq/__init__.py ---
"""
claheq: tiled Contrast-Limited Adaptive Histogram Equalization for 8-bit
grayscale images.

>>> import numpy as np
>>> from claheq import equalize
>>> out = equalize(img, clip_limit=40.0, tiles_horizontal=8, tiles_vertical=8)
"""

import logging as _logging

from .errors import (
    ErrorKind,
    ClaheError,
    InvalidHistogramSizeError,
    TileGridTooFineError,
    EmptyInputError,
)
from .histogram import (
    build_histogram,
    histogram_for_region,
    clip_histogram,
    GrayLevel,
    histogram_entropy,
    image_entropy,
    classify_gray_level,
)
from .mapping import MappingFunction, area_based_mapping, identity_mapping
from .tiles import Tile, TileGrid, tile_bounds, build_tile_mappings
from .interp import (
    PixelSample,
    Region,
    linear_interpolate,
    bilinear_interpolate,
    classify_pixel,
    interpolate_image,
)
from .config import ClaheConfig
from .filters import equalize, equalize_with_config, clahe_u8

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

__all__ = [
    "config",
    "errors",
    "filters",
    "histogram",
    "interp",
    "mapping",
    "tiles",
    "utils",
    # API
    "equalize",
    "equalize_with_config",
    "clahe_u8",
    "ClaheConfig",
    "build_tile_mappings",
    "TileGrid",
    "Tile",
    "tile_bounds",
    "build_histogram",
    "histogram_for_region",
    "clip_histogram",
    "area_based_mapping",
    "identity_mapping",
    "MappingFunction",
    "linear_interpolate",
    "bilinear_interpolate",
    "PixelSample",
    "Region",
    "classify_pixel",
    "interpolate_image",
    "histogram_entropy",
    "image_entropy",
    "classify_gray_level",
    "GrayLevel",
    "ErrorKind",
    "ClaheError",
    "InvalidHistogramSizeError",
    "TileGridTooFineError",
    "EmptyInputError",
]

__version__ = "0.1.0"
