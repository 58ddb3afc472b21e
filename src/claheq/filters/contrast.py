# --- file: claheq/filters/contrast.py ---
"""
Local contrast enhancement (CLAHE) on single 8-bit images.

Typical usage
-------------
>>> from claheq.filters import equalize
>>> out = equalize(img, clip_limit=40.0, tiles_horizontal=8, tiles_vertical=8)

Pipeline
--------
1) validate input and output buffers (nothing is written on failure),
2) per tile: histogram -> clip/redistribute -> lookup table,
3) barrier, then interpolate the tile tables into every output pixel.
"""

from __future__ import annotations
import logging
from typing import Optional

import numpy as np

from claheq.config import ClaheConfig
from claheq.histogram.clip import RESIDUAL_POLICIES
from claheq.interp.engine import interpolate_image
from claheq.mapping.area import MappingFunction
from claheq.tiles.grid import TileGrid, build_tile_mappings, check_image, check_tile_count

__all__ = ["equalize", "equalize_with_config", "clahe_u8"]

logger = logging.getLogger(__name__)


def _check_out(out: Optional[np.ndarray], image: np.ndarray) -> None:
    if out is None:
        return
    if not isinstance(out, np.ndarray):
        raise TypeError(f"out must be a numpy array, got {type(out).__name__}.")
    if out.shape != image.shape or out.dtype != np.uint8:
        raise ValueError(f"out must be uint8 with shape {image.shape}, got {out.dtype} {out.shape}.")
    if not out.flags.writeable:
        raise ValueError("out is read-only.")
    if np.shares_memory(out, image):
        raise ValueError("out must not overlap the input image.")


def equalize(
    image: np.ndarray,
    clip_limit: float = 40.0,
    tiles_horizontal: int = 8,
    tiles_vertical: int = 8,
    mapping_fn: Optional[MappingFunction] = None,
    *,
    out: Optional[np.ndarray] = None,
    residual: str = "spread",
    workers: int = 1,
    progress: bool = False,
) -> np.ndarray:
    """
    Contrast-limited adaptive histogram equalization of a 2D uint8 image.

    Parameters
    ----------
    image : np.ndarray
        2D uint8 input (Y, X). Never modified.
    clip_limit : float
        Per-bin clip limit as an absolute pixel count. <= 0 disables clipping.
    tiles_horizontal, tiles_vertical : int
        Tile grid (columns, rows). Each must be an integer >= 1 and <= the
        image size along its axis; non-integral values such as 2.7 are refused.
    mapping_fn : callable or None
        Histogram -> (256,) lookup table. None -> area-based mapping.
    out : np.ndarray or None
        Destination buffer (uint8, same shape). Untouched if the call fails.
    residual : {'spread', 'drop'}
        Policy for the clip remainder (``excess % 256``).
    workers : int
        Threads for the tile stage and the sweep. 1 = inline.
    progress : bool
        Show tqdm progress bars.

    Returns
    -------
    np.ndarray
        Equalized uint8 image (``out`` when given).

    Raises
    ------
    EmptyInputError
        Zero-size image.
    TileGridTooFineError
        More tiles than pixels along an axis.
    TypeError, ValueError
        Wrong dimensionality/dtype, bad ``out`` buffer or parameters
        (including non-integral tile counts). A ``mapping_fn`` whose table is
        not 256 finite values in [0, 255] also raises ``ValueError``.
    """
    img = check_image(image)
    _check_out(out, img)
    if residual not in RESIDUAL_POLICIES:
        raise ValueError(f"residual must be one of {set(RESIDUAL_POLICIES)}, got {residual!r}")
    if int(workers) < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    tiles_horizontal = check_tile_count(tiles_horizontal, "tiles_horizontal")
    tiles_vertical = check_tile_count(tiles_vertical, "tiles_vertical")
    # geometry errors surface here, before any work
    TileGrid.for_image(img, tiles_horizontal, tiles_vertical)

    logger.debug("equalize %dx%d clip=%.3g grid=%dx%d residual=%s workers=%d",
                 img.shape[1], img.shape[0], clip_limit,
                 tiles_horizontal, tiles_vertical, residual, workers)

    grid = build_tile_mappings(
        img, clip_limit, mapping_fn,
        tiles_horizontal, tiles_vertical,
        residual=residual, workers=int(workers), progress=progress,
    )

    # sweep into a fresh buffer; ``out`` is only written once everything succeeded
    result = interpolate_image(grid, img, workers=int(workers), progress=progress)
    if out is None:
        return result
    out[...] = result
    return out


def equalize_with_config(
    image: np.ndarray,
    config: ClaheConfig,
    mapping_fn: Optional[MappingFunction] = None,
    out: Optional[np.ndarray] = None,
) -> np.ndarray:
    """``equalize`` driven by a ``ClaheConfig``."""
    return equalize(
        image,
        clip_limit=config.clip_limit,
        tiles_horizontal=config.tiles_horizontal,
        tiles_vertical=config.tiles_vertical,
        mapping_fn=mapping_fn,
        out=out,
        residual=config.residual,
        workers=config.workers,
        progress=config.progress,
    )


def clahe_u8(img: np.ndarray, clip_limit: float = 40.0, tile: int = 8) -> np.ndarray:
    """
    CLAHE on a single 2D image (expects float [0,1] or uint8).
    Returns uint8.
    """
    im = np.asarray(img)
    if im.dtype != np.uint8:
        im = np.clip(im.astype(np.float32), 0, 1)
        im = (im * 255).astype(np.uint8)
    return equalize(im, clip_limit=float(clip_limit),
                    tiles_horizontal=tile, tiles_vertical=tile)
