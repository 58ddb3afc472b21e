"""
claheq.filters
==============

Image-level entry points.

Modules
-------
contrast : CLAHE (`equalize`, `equalize_with_config`, `clahe_u8`).

Design
------
- Inputs are 2D uint8 arrays (Y, X); colour and 16-bit data are not handled.
- The filter is pure: same input and parameters give bit-identical output.

Typical defaults
----------------
- clip_limit = 40 (absolute count per bin), 8×8 tiles.
- Large tiles approach global equalization; a 1×1 grid is exactly clipped
  global equalization.
"""

# Short imports for public API
from .contrast import equalize, equalize_with_config, clahe_u8

# Modules export
import importlib as _importlib
contrast = _importlib.import_module(".contrast", __name__)

__all__ = [
    # functions
    "equalize",
    "equalize_with_config",
    "clahe_u8",
    # modules
    "contrast",
]
