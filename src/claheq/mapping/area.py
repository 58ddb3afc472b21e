# --- file: claheq/mapping/area.py ---
"""
Gray-level mapping functions: histogram -> 256-entry lookup table.

area_based_mapping : scaled cumulative distribution (classic equalization).
identity_mapping   : table[i] = i, independent of the histogram.

Any callable with the ``MappingFunction`` signature can be passed to
``build_tile_mappings`` / ``equalize``.
"""

from __future__ import annotations
from typing import Protocol

import numpy as np

from claheq.histogram.build import NUM_BINS, check_histogram

__all__ = [
    "MappingFunction",
    "area_based_mapping",
    "identity_mapping",
    "DEFAULT_MAPPING",
    "check_lookup_table",
]

_MAX_LEVEL = NUM_BINS - 1


class MappingFunction(Protocol):
    def __call__(self, hist: np.ndarray) -> np.ndarray: ...


def identity_mapping(hist: np.ndarray) -> np.ndarray:
    """Unity mapping; useful to isolate the interpolation stage."""
    check_histogram(hist)
    return np.arange(NUM_BINS, dtype=np.uint8)


def area_based_mapping(hist: np.ndarray) -> np.ndarray:
    """
    Lookup table from the histogram's cumulative distribution.

    table[i] = round(cdf[i] / N * 255), rounding halves up. Integer
    arithmetic keeps the table exact and monotonically non-decreasing.
    An empty histogram (N == 0) maps to the identity table.
    """
    h = check_histogram(hist).astype(np.int64, copy=False)
    total = int(h.sum())
    if total <= 0:
        return np.arange(NUM_BINS, dtype=np.uint8)
    cdf = np.cumsum(h)
    table = (2 * _MAX_LEVEL * cdf + total) // (2 * total)
    return np.clip(table, 0, _MAX_LEVEL).astype(np.uint8)


DEFAULT_MAPPING = area_based_mapping


def check_lookup_table(table) -> np.ndarray:
    """
    Validate a mapping function's output and return it as uint8 (256,).

    Float tables are rounded half up before the cast (254.5 -> 255);
    NaN or infinite entries are refused.
    """
    t = np.asarray(table)
    if t.shape != (NUM_BINS,):
        raise ValueError(f"Lookup table must have shape ({NUM_BINS},), got {t.shape}.")
    if t.dtype == np.uint8:
        return t
    if t.dtype.kind not in "biuf":
        raise ValueError(f"Lookup table must be numeric, got dtype {t.dtype}.")
    if t.dtype.kind == "f":
        if not np.all(np.isfinite(t)):
            raise ValueError("Lookup table contains NaN or infinite values.")
        t = np.floor(t + 0.5)
    if np.any(t < 0) or np.any(t > _MAX_LEVEL):
        raise ValueError("Lookup table values must lie in [0, 255].")
    return t.astype(np.uint8)
