"""MosaicContext: the single mutable state object flowing through all stages.

Per-polygon results are kept in parallel lists (polygons[i], scanlines[i])
until the sampling layer folds them into TileElement records.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from tiler.engine.config import PipelineConfig
from tiler.tiles.catalog import Tile
from tiler.utils.geometry import polygon_center
from tiler.utils.rasterizer import Scanline


@dataclass
class TileElement:
    """One rendered tile: world-space polygon, its clipped spans and mean color."""

    polygon: NDArray[np.float64]
    scanlines: list[Scanline] = field(default_factory=list)
    color: tuple[int, ...] = (0, 0, 0)

    @property
    def center(self) -> tuple[float, float]:
        c = polygon_center(self.polygon)
        return (float(c[0]), float(c[1]))


@dataclass
class MosaicContext:
    """Shared state for one render call."""

    tile: Tile
    # Window size in pixels
    rows: int
    cols: int
    # Lattice origin in window coordinates
    origin: tuple[float, float] = (0.0, 0.0)
    # Multiplier applied to the unit cell
    scale: float = 1.0
    # Degrees, counter-clockwise
    angle: float = 0.0
    # Source pixels, (rows, cols, channels) uint8; None for geometry-only runs
    image: NDArray[np.uint8] | None = None
    config: PipelineConfig = field(default_factory=PipelineConfig)

    # Layer 0
    locations: NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 2)))
    polygons: list[NDArray[np.float64]] = field(default_factory=list)
    # Layer 1
    scanlines: list[list[Scanline]] = field(default_factory=list)
    # Layer 2
    elements: list[TileElement] = field(default_factory=list)

    completed_transforms: set[str] = field(default_factory=set)
    timings: dict[str, float] = field(default_factory=dict)

    @property
    def tile_width(self) -> float:
        return self.scale * self.tile.width

    @property
    def tile_height(self) -> float:
        return self.scale * self.tile.height

    @property
    def num_polygons(self) -> int:
        return len(self.polygons)
