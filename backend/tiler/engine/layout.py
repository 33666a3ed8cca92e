"""Lattice layout and per-polygon raster helpers used by the pipeline stages.

Window coordinates are pixels with the origin at the top-left corner, x to the
right. A tiling is placed by its lattice origin, a per-axis tile size in
pixels and a rotation in degrees.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from tiler.utils.geometry import (
    affine_forward,
    affine_inverse,
    as_points,
    get_bounding_rectf,
)
from tiler.utils.rasterizer import (
    SCANLINE_PRECISION,
    Rect,
    Scanline,
    clip,
    get_bounding_rect,
    get_convex_polygon_scanlines,
    intersects,
)


def window_polygon(rows: int, cols: int) -> NDArray[np.float64]:
    return as_points([(0.0, 0.0), (cols, 0.0), (0.0, rows), (cols, rows)])


def get_tile_locations(
    rows: int,
    cols: int,
    origin: ArrayLike,
    tile_width: float,
    tile_height: float,
    angle: float,
    triangular: bool = False,
    padding: float = 1.0,
) -> NDArray[np.float64]:
    """Lattice points whose cells can touch the window, in window coordinates.

    The window corners are mapped into tile space, where the lattice is the
    integer grid, and the grid is walked over their bounds grown by padding
    on every side. Triangular tilings shift odd rows left by half a cell.
    """
    assert tile_width > 0 and tile_height > 0, "tile size must be positive"
    offset = np.asarray(origin, dtype=np.float64)
    corners = affine_inverse(
        window_polygon(rows, cols), -offset, -angle, 1.0 / tile_width, 1.0 / tile_height
    )
    r = get_bounding_rectf(corners)

    points: list[tuple[float, float]] = []
    i = math.floor(r.miny) - padding
    while i < r.maxy + padding:
        odd = int(abs(math.floor(i))) & 1
        j = math.floor(r.minx) - padding
        if triangular and odd:
            j -= 0.5
        while j < r.maxx + padding:
            points.append((j, i))
            j += 1
        i += 1

    if not points:
        return np.empty((0, 2), dtype=np.float64)
    return affine_forward(points, tile_width, tile_height, angle, offset)


def get_tiled_polygons(
    locations: ArrayLike,
    polygons: Sequence[NDArray[np.float64]],
    scale: float,
    angle: float,
) -> list[NDArray[np.float64]]:
    """Place every catalog polygon at every location; locations outer, polygons inner."""
    return [
        affine_forward(poly, scale, scale, angle, loc)
        for loc in as_points(locations).reshape(-1, 2)
        for poly in polygons
    ]


def get_overlapping_polygons(
    width: int,
    height: int,
    polygons: Sequence[NDArray[np.float64]],
) -> list[NDArray[np.float64]]:
    """Polygons whose integer bounding box overlaps the window."""
    window = get_bounding_rect(window_polygon(height, width))
    return [p for p in polygons if intersects(window, get_bounding_rect(p))]


def get_polygon_scanlines(
    polygons: Sequence[NDArray[np.float64]],
    precision: int = SCANLINE_PRECISION,
) -> list[list[Scanline]]:
    return [get_convex_polygon_scanlines(p, precision) for p in polygons]


def clip_scanlines(
    width: int,
    height: int,
    polygon_scanlines: Sequence[Sequence[Scanline]],
) -> list[list[Scanline]]:
    """Clip each polygon's spans to the window. Polygons may end up with none."""
    bounds = Rect(0, 0, width, height)
    return [clip(s, bounds) for s in polygon_scanlines]
