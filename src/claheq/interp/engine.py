# --- file: claheq/interp/engine.py ---
"""
Interpolation of per-tile lookup tables into the output image.

Every tile's lookup table is anchored at the tile centre. For a pixel,
each axis is classified against the first and last tile centres:

- low margin  : p <= centers[0]
- high margin : p >= centers[-1]   (only if not low)
- inner       : otherwise, between centers[k] and centers[k+1]

Regions
-------
CORNER   : margin on both axes -> nearest tile's table, no blending.
BORDER   : margin on one axis  -> linear blend of the two tiles along the other.
INTERIOR : no margin           -> bilinear blend of the four surrounding tiles.

A 1x1 grid puts every pixel in a corner, i.e. plain clipped equalization.

Typical usage
-------------
>>> from claheq.tiles import build_tile_mappings
>>> from claheq.interp import interpolate_image
>>> grid = build_tile_mappings(img)
>>> out = interpolate_image(grid, img)
"""

from __future__ import annotations
import logging
import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from claheq.tiles.grid import TileCoordinate, TileGrid, check_image
from claheq.utils.parallel import chunk_ranges, run_tasks
from .points import PixelSample, bilerp, bilinear_interpolate, fraction, lerp, linear_interpolate, round_intensity

__all__ = [
    "Region",
    "PixelClass",
    "axis_controls",
    "classify_pixel",
    "interpolate_pixel",
    "interpolate_image",
]

logger = logging.getLogger(__name__)

# rows per sweep band
_BAND_ROWS = 64


class Region(Enum):
    CORNER = "corner"
    BORDER = "border"
    INTERIOR = "interior"


@dataclass(frozen=True)
class PixelClass:
    """Classification of one pixel.

    Attributes
    ----------
    region : Region
    tiles : tuple of TileCoordinate
        1 (corner), 2 (border) or 4 (interior; TL, TR, BL, BR) control tiles.
    tx, ty : float
        Fractional position between the control tiles' centres along x / y.
        0.0 along an axis that is not interpolated.
    axis : {'x', 'y', None}
        Axis of the linear blend for BORDER pixels.
    """
    region: Region
    tiles: Tuple[TileCoordinate, ...]
    tx: float = 0.0
    ty: float = 0.0
    axis: Optional[str] = None


# ======================================================================
# Axis classification
# ======================================================================

def axis_controls(coords, centers: np.ndarray, tile_size: int):
    """
    Classify pixel coordinates along one axis.

    Parameters
    ----------
    coords : array-like
        Pixel coordinates along the axis.
    centers : np.ndarray
        Tile centres along the axis (strictly increasing).
    tile_size : int
        Base tile size along the axis (centre spacing).

    Returns
    -------
    margin : np.ndarray[bool]
        True in the half-tile margins before the first / after the last centre.
    i0, i1 : np.ndarray[intp]
        Control tile indices; equal inside a margin.
    t : np.ndarray[float64]
        Fraction between centers[i0] and centers[i1]; 0 inside a margin.
    """
    p = np.asarray(coords, dtype=np.float64)
    c = np.asarray(centers, dtype=np.float64)
    n = c.shape[0]

    low = p <= c[0]
    high = ~low & (p >= c[-1])
    inner = ~(low | high)

    i0 = np.zeros(p.shape, dtype=np.intp)
    i0[high] = n - 1
    t = np.zeros(p.shape, dtype=np.float64)
    i1 = i0.copy()
    if n > 1 and np.any(inner):
        k = np.floor((p[inner] - c[0]) / float(tile_size)).astype(np.intp)
        k = np.clip(k, 0, n - 2)
        i0[inner] = k
        i1[inner] = k + 1
        t[inner] = fraction(p[inner], c[k], c[k + 1])
    return ~inner, i0, i1, t


def classify_pixel(grid: TileGrid, x: int, y: int) -> PixelClass:
    """Region and control tiles for pixel (x, y)."""
    if not (0 <= x < grid.width and 0 <= y < grid.height):
        raise ValueError(f"Pixel ({x}, {y}) outside {grid.width}x{grid.height} image.")
    mx, ix0, ix1, tx = (a[0] for a in axis_controls([x], grid.centers_x, grid.tile_width))
    my, iy0, iy1, ty = (a[0] for a in axis_controls([y], grid.centers_y, grid.tile_height))
    ix0, ix1, iy0, iy1 = int(ix0), int(ix1), int(iy0), int(iy1)

    if mx and my:
        return PixelClass(Region.CORNER, ((ix0, iy0),))
    if my:
        # top/bottom strip: neighbours along x
        return PixelClass(Region.BORDER, ((ix0, iy0), (ix1, iy0)), tx=float(tx), axis="x")
    if mx:
        # left/right strip: neighbours along y
        return PixelClass(Region.BORDER, ((ix0, iy0), (ix0, iy1)), ty=float(ty), axis="y")
    return PixelClass(
        Region.INTERIOR,
        ((ix0, iy0), (ix1, iy0), (ix0, iy1), (ix1, iy1)),
        tx=float(tx), ty=float(ty),
    )


def _sample(grid: TileGrid, coord: TileCoordinate, value: int) -> PixelSample:
    col, row = coord
    cx, cy = grid.center(col, row)
    return PixelSample(cx, cy, float(grid.lookup_table(col, row)[value]))


def interpolate_pixel(grid: TileGrid, image: np.ndarray, x: int, y: int) -> int:
    """Output intensity of one pixel from the built tile tables."""
    value = int(image[y, x])
    pc = classify_pixel(grid, x, y)
    if pc.region is Region.CORNER:
        col, row = pc.tiles[0]
        return int(grid.lookup_table(col, row)[value])

    samples = [_sample(grid, c, value) for c in pc.tiles]
    if pc.region is Region.BORDER:
        res = linear_interpolate(samples[0], samples[1], x, y)
    else:
        res = bilinear_interpolate(samples, x, y)
    return round_intensity(res.intensity)


# ======================================================================
# Image sweep
# ======================================================================

def interpolate_image(
    grid: TileGrid,
    image: np.ndarray,
    out: Optional[np.ndarray] = None,
    *,
    workers: int = 1,
    progress: bool = False,
) -> np.ndarray:
    """
    Map every pixel of ``image`` through the interpolated tile tables.

    Parameters
    ----------
    grid : TileGrid
        Grid with mappings built for an image of the same size.
    image : np.ndarray
        2D uint8 input.
    out : np.ndarray or None
        Destination (same shape, uint8). Allocated when None.
    workers : int
        Threads over row bands. 1 = inline.
    progress : bool
        tqdm bar over row bands.

    Returns
    -------
    np.ndarray
        ``out`` (uint8).
    """
    img = check_image(image)
    H, W = img.shape
    if (W, H) != (grid.width, grid.height):
        raise ValueError(f"Grid is for {grid.width}x{grid.height}, image is {W}x{H}.")
    luts = grid.mappings
    if out is None:
        out = np.empty_like(img)
    elif out.shape != img.shape or out.dtype != np.uint8:
        raise ValueError(f"out must be uint8 with shape {img.shape}, got {out.dtype} {out.shape}.")

    mx, ix0, ix1, tx = axis_controls(np.arange(W), grid.centers_x, grid.tile_width)
    my, iy0, iy1, ty = axis_controls(np.arange(H), grid.centers_y, grid.tile_height)

    def _band(rows: range) -> None:
        sl = slice(rows.start, rows.stop)
        src = img[sl]
        r0, r1 = iy0[sl][:, None], iy1[sl][:, None]
        c0, c1 = ix0[None, :], ix1[None, :]
        I_tl = luts[r0, c0, src].astype(np.float64)
        I_tr = luts[r0, c1, src].astype(np.float64)
        I_bl = luts[r1, c0, src].astype(np.float64)
        I_br = luts[r1, c1, src].astype(np.float64)

        bmx = np.broadcast_to(mx[None, :], src.shape)
        bmy = np.broadcast_to(my[sl][:, None], src.shape)
        TX = np.broadcast_to(tx[None, :], src.shape)
        TY = np.broadcast_to(ty[sl][:, None], src.shape)

        corner = bmx & bmy
        along_x = bmy & ~bmx
        along_y = bmx & ~bmy
        interior = ~(bmx | bmy)

        res = np.empty(src.shape, dtype=np.float64)
        res[corner] = I_tl[corner]
        res[along_x] = lerp(I_tl[along_x], I_tr[along_x], TX[along_x])
        res[along_y] = lerp(I_tl[along_y], I_bl[along_y], TY[along_y])
        res[interior] = bilerp(I_tl[interior], I_tr[interior], I_bl[interior],
                               I_br[interior], TX[interior], TY[interior])
        out[sl] = round_intensity(res)

    bands = chunk_ranges(H, max(int(workers), math.ceil(H / _BAND_ROWS)))
    t0 = time.perf_counter()
    run_tasks(_band, bands, workers=workers, progress=progress, desc="interpolate", unit="band")
    logger.debug("interpolated %dx%d px in %d bands, %.3f s", W, H, len(bands), time.perf_counter() - t0)
    return out
