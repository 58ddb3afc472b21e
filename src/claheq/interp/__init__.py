"""
claheq.interp
=============

Reconstruction of the output image from per-tile lookup tables.

Modules
-------
points : PixelSample, linear and bilinear interpolation contracts.
engine : Corner / border / interior classification and the image sweep.

Notes
-----
- The sweep and the per-pixel path share classification and blend code;
  both round halves up and clamp to [0, 255].
"""

from .points import PixelSample, linear_interpolate, bilinear_interpolate
from .engine import (
    Region,
    PixelClass,
    axis_controls,
    classify_pixel,
    interpolate_pixel,
    interpolate_image,
)

import importlib as _importlib
points = _importlib.import_module(".points", __name__)
engine = _importlib.import_module(".engine", __name__)

__all__ = [
    # functions
    "PixelSample",
    "linear_interpolate",
    "bilinear_interpolate",
    "Region",
    "PixelClass",
    "axis_controls",
    "classify_pixel",
    "interpolate_pixel",
    "interpolate_image",
    # modules
    "points",
    "engine",
]
