# --- file: claheq/config.py ---
"""
Run configuration for the CLAHE filter.

>>> from claheq import ClaheConfig, equalize_with_config
>>> cfg = ClaheConfig(clip_limit=20.0, tiles_horizontal=4, tiles_vertical=4)
>>> out = equalize_with_config(img, cfg)
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Tuple

from claheq.histogram.clip import RESIDUAL_POLICIES
from claheq.tiles.grid import check_tile_count

__all__ = ["ClaheConfig"]


@dataclass
class ClaheConfig:
    """Parameters of one ``equalize`` call.

    Attributes
    ----------
    clip_limit : float
        Maximum count per histogram bin (absolute pixel count). <= 0 disables clipping.
    tiles_horizontal, tiles_vertical : int
        Tile grid size (columns, rows).
    residual : {'spread', 'drop'}
        What happens to ``excess % 256`` after redistribution.
    workers : int
        Thread count for the tile and sweep stages. 1 = inline.
    progress : bool
        Show tqdm progress bars.
    """
    clip_limit: float = 40.0
    tiles_horizontal: int = 8
    tiles_vertical: int = 8
    residual: str = "spread"
    workers: int = 1
    progress: bool = False

    def __post_init__(self):
        self.clip_limit = float(self.clip_limit)
        self.tiles_horizontal = check_tile_count(self.tiles_horizontal, "tiles_horizontal")
        self.tiles_vertical = check_tile_count(self.tiles_vertical, "tiles_vertical")
        self.workers = int(self.workers)
        if self.residual not in RESIDUAL_POLICIES:
            raise ValueError(f"residual must be one of {set(RESIDUAL_POLICIES)}, got {self.residual!r}")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")

    @property
    def tile_grid_size(self) -> Tuple[int, int]:
        return (self.tiles_horizontal, self.tiles_vertical)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ClaheConfig":
        """Build from a plain mapping; unknown keys are ignored."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
