# --- file: claheq/interp/points.py ---
"""
Linear and bilinear interpolation between control-point samples.

A ``PixelSample`` is an (x, y, intensity) triple, here a tile centre and
the intensity its lookup table assigns to the pixel being processed.

The blend helpers (`lerp`, `bilerp`, `fraction`) work on floats and on
NumPy arrays alike; the image sweep in ``engine`` calls the same helpers
so scalar and vectorised results agree bit for bit.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence

import numpy as np

__all__ = [
    "PixelSample",
    "fraction",
    "lerp",
    "bilerp",
    "round_intensity",
    "linear_interpolate",
    "bilinear_interpolate",
]


@dataclass(frozen=True)
class PixelSample:
    x: float
    y: float
    intensity: float


# ======================================================================
# Blend helpers (scalar or array)
# ======================================================================

def fraction(p, p0, p1):
    """Relative position of ``p`` between ``p0`` and ``p1``."""
    return (p - p0) / (p1 - p0)


def lerp(i0, i1, t):
    return i0 + (i1 - i0) * t


def bilerp(tl, tr, bl, br, tx, ty):
    return (1.0 - ty) * ((1.0 - tx) * tl + tx * tr) + ty * ((1.0 - tx) * bl + tx * br)


def round_intensity(v):
    """Round half up and clamp to [0, 255]; arrays -> uint8 array, scalars -> int."""
    r = np.clip(np.floor(np.asarray(v, dtype=np.float64) + 0.5), 0, 255)
    if r.ndim == 0:
        return int(r)
    return r.astype(np.uint8)


# ======================================================================
# Sample-based contracts
# ======================================================================

def linear_interpolate(s0: PixelSample, s1: PixelSample, x: float, y: float) -> PixelSample:
    """
    Interpolate between two samples that share one coordinate.

    Samples on the same row blend along x, samples on the same column
    blend along y: ``I0 + (I1 - I0) * (p - p0) / (p1 - p0)``.

    Raises
    ------
    ValueError
        If the samples share neither coordinate or coincide (zero span).
    """
    if s0.y == s1.y and s0.x != s1.x:
        t = fraction(float(x), float(s0.x), float(s1.x))
    elif s0.x == s1.x and s0.y != s1.y:
        t = fraction(float(y), float(s0.y), float(s1.y))
    elif s0.x == s1.x and s0.y == s1.y:
        raise ValueError(f"Samples coincide at ({s0.x}, {s0.y}); span is zero.")
    else:
        raise ValueError("Samples must share either their x or their y coordinate.")
    value = lerp(float(s0.intensity), float(s1.intensity), t)
    return PixelSample(float(x), float(y), float(value))


def bilinear_interpolate(samples: Sequence[PixelSample], x: float, y: float) -> PixelSample:
    """
    Bilinear blend of four samples at the corners of an axis-aligned rectangle.

    Samples are sorted by (x, y) into top-left, bottom-left, top-right,
    bottom-right, then
    ``(1-ty)((1-tx) I_TL + tx I_TR) + ty((1-tx) I_BL + tx I_BR)``.

    Raises
    ------
    ValueError
        If there are not exactly four samples, they do not form a
        rectangle, or the rectangle has zero width or height.
    """
    if len(samples) != 4:
        raise ValueError(f"Bilinear interpolation needs 4 samples, got {len(samples)}.")
    tl, bl, tr, br = sorted(samples, key=lambda s: (s.x, s.y))

    if not (tl.x == bl.x and tr.x == br.x and tl.y == tr.y and bl.y == br.y):
        raise ValueError("Samples do not form an axis-aligned rectangle.")
    if tr.x == tl.x or bl.y == tl.y:
        raise ValueError("Degenerate rectangle: zero width or height.")

    tx = fraction(float(x), float(tl.x), float(tr.x))
    ty = fraction(float(y), float(tl.y), float(bl.y))
    value = bilerp(float(tl.intensity), float(tr.intensity),
                   float(bl.intensity), float(br.intensity), tx, ty)
    return PixelSample(float(x), float(y), float(value))
