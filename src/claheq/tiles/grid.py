# --- file: claheq/tiles/grid.py ---
"""
Tile grid: partitioning, tile centres and per-tile lookup tables.

Goal
----
Split an image into an H×V grid of tiles, build one clipped-histogram
lookup table per tile, and keep the tables together with the grid
geometry the interpolation sweep needs (base tile size, tile centres).

Typical usage
-------------
>>> from claheq.tiles import build_tile_mappings
>>> grid = build_tile_mappings(img, clip_limit=40.0, tiles_horizontal=8, tiles_vertical=8)
>>> grid.lookup_table(0, 0)[img[0, 0]]

Notes
-----
- Base tile size is ``dim // n``; the last column/row absorb ``dim % n``.
- Tile centres use the base size for every tile:
  ``cx = tile_width / 2 + col * tile_width``.
- Lookup tables live in one (V, H, 256) uint8 array, frozen once built.
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from claheq.errors import EmptyInputError, TileGridTooFineError
from claheq.histogram.build import NUM_BINS, histogram_for_region
from claheq.histogram.clip import clip_histogram, clipped_excess
from claheq.mapping.area import DEFAULT_MAPPING, MappingFunction, check_lookup_table
from claheq.utils.parallel import run_tasks

__all__ = [
    "TileCoordinate",
    "Tile",
    "TileGrid",
    "check_image",
    "check_tile_count",
    "tile_bounds",
    "build_tile_mappings",
]

logger = logging.getLogger(__name__)

TileCoordinate = Tuple[int, int]  # (col, row)


@dataclass(frozen=True)
class Tile:
    """Pixel bounds of one grid cell (x, y = top-left corner)."""
    col: int
    row: int
    x: int
    y: int
    width: int
    height: int

    @property
    def coord(self) -> TileCoordinate:
        return (self.col, self.row)

    @property
    def size(self) -> int:
        return self.width * self.height

    @property
    def slices(self) -> Tuple[slice, slice]:
        return (slice(self.y, self.y + self.height), slice(self.x, self.x + self.width))


# ======================================================================
# Validation
# ======================================================================

def check_image(image: np.ndarray) -> np.ndarray:
    """Return ``image`` as a 2D uint8 array or raise."""
    a = np.asarray(image)
    if a.ndim != 2:
        raise ValueError(f"Expected a 2D single-channel image, got shape {a.shape}.")
    if a.dtype != np.uint8:
        raise TypeError(f"Expected uint8 image, got dtype {a.dtype}.")
    if a.size == 0:
        raise EmptyInputError(f"Image is empty (shape {a.shape}).")
    return a


def check_tile_count(value, name: str = "tile count") -> int:
    """
    Return ``value`` as an int tile count, refusing non-integral input.

    Integers (Python or NumPy), integral floats such as ``4.0`` and
    integer strings are accepted; ``2.7`` or ``"2.5"`` raise ``ValueError``.
    """
    if isinstance(value, (bool, np.bool_)):
        raise TypeError(f"{name} must be an integer, got {value!r}.")
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"{name} must be an integer, got {value!r}.") from None
    try:
        f = float(value)
    except (TypeError, ValueError):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}.") from None
    if not np.isfinite(f) or f != int(f):
        raise ValueError(f"{name} must be an integer, got {value!r}.")
    return int(f)


def _check_grid(width: int, height: int, tiles_horizontal: int, tiles_vertical: int) -> None:
    if width <= 0 or height <= 0:
        raise EmptyInputError(f"Image is empty ({width}x{height}).")
    if tiles_horizontal < 1 or tiles_vertical < 1:
        raise ValueError(
            f"Tile grid must be at least 1x1, got {tiles_horizontal}x{tiles_vertical}."
        )
    if tiles_horizontal > width or tiles_vertical > height:
        raise TileGridTooFineError(
            f"Tile grid {tiles_horizontal}x{tiles_vertical} is finer than the "
            f"{width}x{height} image."
        )


def tile_bounds(width: int, height: int, tiles_horizontal: int, tiles_vertical: int) -> List[Tile]:
    """
    Row-major list of tiles covering a width×height image exactly.

    Raises
    ------
    EmptyInputError
        If either image dimension is 0.
    TileGridTooFineError
        If there are more tiles than pixels along an axis.
    ValueError
        If a tile count is not a positive integer.
    """
    tiles_horizontal = check_tile_count(tiles_horizontal, "tiles_horizontal")
    tiles_vertical = check_tile_count(tiles_vertical, "tiles_vertical")
    _check_grid(width, height, tiles_horizontal, tiles_vertical)
    tw = width // tiles_horizontal
    th = height // tiles_vertical

    tiles = []
    for row in range(tiles_vertical):
        h = th + (height % tiles_vertical if row == tiles_vertical - 1 else 0)
        for col in range(tiles_horizontal):
            w = tw + (width % tiles_horizontal if col == tiles_horizontal - 1 else 0)
            tiles.append(Tile(col=col, row=row, x=col * tw, y=row * th, width=w, height=h))
    return tiles


# ======================================================================
# Grid container
# ======================================================================

class TileGrid:
    """Grid geometry plus (once built) the per-tile lookup tables."""

    def __init__(self, width: int, height: int, tiles_horizontal: int = 8, tiles_vertical: int = 8):
        self.tiles = tile_bounds(width, height, tiles_horizontal, tiles_vertical)
        self.width = int(width)
        self.height = int(height)
        self.tiles_horizontal = check_tile_count(tiles_horizontal, "tiles_horizontal")
        self.tiles_vertical = check_tile_count(tiles_vertical, "tiles_vertical")
        self.tile_width = self.width // self.tiles_horizontal
        self.tile_height = self.height // self.tiles_vertical
        self.centers_x = self.tile_width / 2.0 + np.arange(self.tiles_horizontal) * float(self.tile_width)
        self.centers_y = self.tile_height / 2.0 + np.arange(self.tiles_vertical) * float(self.tile_height)
        self._mappings: Optional[np.ndarray] = None

    @classmethod
    def for_image(cls, image: np.ndarray, tiles_horizontal: int = 8, tiles_vertical: int = 8) -> "TileGrid":
        H, W = np.shape(image)[:2]
        return cls(W, H, tiles_horizontal, tiles_vertical)

    def __repr__(self) -> str:
        return (f"TileGrid({self.width}x{self.height}, tiles={self.tiles_horizontal}x{self.tiles_vertical}, "
                f"tile={self.tile_width}x{self.tile_height}, built={self.is_built})")

    @property
    def shape(self) -> Tuple[int, int]:
        """(rows, cols) of the grid."""
        return (self.tiles_vertical, self.tiles_horizontal)

    @property
    def is_built(self) -> bool:
        return self._mappings is not None

    @property
    def mappings(self) -> np.ndarray:
        """(V, H, 256) uint8 lookup tables, read-only."""
        if self._mappings is None:
            raise RuntimeError("Tile mappings have not been built yet.")
        return self._mappings

    def set_mappings(self, tables: np.ndarray) -> None:
        t = np.asarray(tables, dtype=np.uint8)
        if t.shape != (self.tiles_vertical, self.tiles_horizontal, NUM_BINS):
            raise ValueError(
                f"Expected tables of shape {(self.tiles_vertical, self.tiles_horizontal, NUM_BINS)}, got {t.shape}."
            )
        t.setflags(write=False)
        self._mappings = t

    def tile(self, col: int, row: int) -> Tile:
        return self.tiles[row * self.tiles_horizontal + col]

    def center(self, col: int, row: int) -> Tuple[float, float]:
        return float(self.centers_x[col]), float(self.centers_y[row])

    def lookup_table(self, col: int, row: int) -> np.ndarray:
        return self.mappings[row, col]


# ======================================================================
# Main API
# ======================================================================

def build_tile_mappings(
    image: np.ndarray,
    clip_limit: float = 40.0,
    mapping_fn: Optional[MappingFunction] = None,
    tiles_horizontal: int = 8,
    tiles_vertical: int = 8,
    *,
    residual: str = "spread",
    workers: int = 1,
    progress: bool = False,
) -> TileGrid:
    """
    Histogram -> clip -> mapping, once per tile.

    Parameters
    ----------
    image : np.ndarray
        2D uint8 image.
    clip_limit : float
        Per-bin clip limit (absolute count). <= 0 disables clipping.
    mapping_fn : callable or None
        ``(hist) -> (256,) table``. None -> area-based mapping.
    tiles_horizontal, tiles_vertical : int
        Grid size (columns, rows).
    residual : {'spread', 'drop'}
        Redistribution policy for the clip remainder.
    workers : int
        Threads for the per-tile work. 1 = inline.
    progress : bool
        Show a tqdm bar over tiles.

    Returns
    -------
    TileGrid
        Grid with ``mappings`` populated and frozen.
    """
    img = check_image(image)
    grid = TileGrid.for_image(img, tiles_horizontal, tiles_vertical)
    fn = DEFAULT_MAPPING if mapping_fn is None else mapping_fn
    tables = np.empty((grid.tiles_vertical, grid.tiles_horizontal, NUM_BINS), dtype=np.uint8)
    debug = logger.isEnabledFor(logging.DEBUG)

    logger.debug("tile grid: %r", grid)

    def _one(tile: Tile) -> None:
        hist = histogram_for_region(img, tile)
        if debug:
            logger.debug("tile (%d, %d): %d px, clipped %d", tile.col, tile.row,
                         tile.size, clipped_excess(hist, clip_limit))
        clipped = clip_histogram(hist, clip_limit, residual=residual)
        tables[tile.row, tile.col] = check_lookup_table(fn(clipped))

    t0 = time.perf_counter()
    run_tasks(_one, grid.tiles, workers=workers, progress=progress, desc="tile LUTs", unit="tile")
    grid.set_mappings(tables)
    logger.debug("built %d tile tables in %.3f s", len(grid.tiles), time.perf_counter() - t0)
    return grid
