"""
claheq.tiles
============

Tile partitioning and per-tile lookup tables.

Modules
-------
grid : Tile bounds (remainder in the last column/row), TileGrid container,
       build_tile_mappings (histogram -> clip -> mapping per tile).
"""

from .grid import (
    TileCoordinate, Tile, TileGrid, check_image, check_tile_count, tile_bounds, build_tile_mappings,
)

import importlib as _importlib
grid = _importlib.import_module(".grid", __name__)

__all__ = [
    # functions
    "TileCoordinate",
    "Tile",
    "TileGrid",
    "check_image",
    "check_tile_count",
    "tile_bounds",
    "build_tile_mappings",
    # modules
    "grid",
]
