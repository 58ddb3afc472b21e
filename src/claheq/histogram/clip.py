# --- file: claheq/histogram/clip.py ---
"""
Histogram clipping with even redistribution of the excess.

Single pass: bins above the limit are cut down to it, the clipped counts
are pooled and handed back evenly to all 256 bins. The result may again
exceed the limit; there is no re-clipping.

Residual policies for ``excess % 256``
--------------------------------------
spread : one extra count per bin starting at bin 0 (sum is conserved).
drop   : the remainder is discarded.
"""

from __future__ import annotations
import math

import numpy as np

from .build import NUM_BINS, check_histogram

__all__ = ["RESIDUAL_POLICIES", "clip_histogram", "clipped_excess"]

RESIDUAL_POLICIES = ("spread", "drop")


def _cap(clip_limit: float) -> int:
    return int(math.floor(clip_limit))


def clipped_excess(hist: np.ndarray, clip_limit: float) -> int:
    """Number of counts above ``clip_limit`` (0 when clipping is disabled)."""
    h = check_histogram(hist).astype(np.int64, copy=False)
    if clip_limit <= 0:
        return 0
    cap = _cap(clip_limit)
    return int(np.maximum(h - cap, 0).sum())


def clip_histogram(hist: np.ndarray, clip_limit: float, residual: str = "spread") -> np.ndarray:
    """
    Clip a 256-bin histogram at ``clip_limit`` and redistribute the excess.

    Parameters
    ----------
    hist : np.ndarray
        (256,) integer histogram. Not modified.
    clip_limit : float
        Maximum count per bin. <= 0 -> passthrough copy. Fractional limits
        are floored for the cap.
    residual : {'spread', 'drop'}
        Policy for the ``excess % 256`` counts left after even redistribution.

    Returns
    -------
    np.ndarray
        New int64 histogram.
    """
    if residual not in RESIDUAL_POLICIES:
        raise ValueError(f"residual must be one of {set(RESIDUAL_POLICIES)}, got {residual!r}")
    h = check_histogram(hist).astype(np.int64, copy=True)
    if clip_limit <= 0:
        return h

    cap = _cap(clip_limit)
    over = h > cap
    excess = int((h[over] - cap).sum())
    if excess == 0:
        return h
    h[over] = cap

    batch, rest = divmod(excess, NUM_BINS)
    h += batch
    if residual == "spread" and rest:
        h[:rest] += 1
    return h
