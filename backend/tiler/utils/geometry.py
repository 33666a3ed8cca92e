"""Leaf-node geometry helpers. No engine imports.

Points are rows of a float64 (N, 2) array; a single point is a length-2 array.
Angles are in degrees, rotation is counter-clockwise in a y-up frame.
"""

from __future__ import annotations

import math
from typing import NamedTuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from tiler.utils.math_helpers import round_half_away_array


class RectF(NamedTuple):
    minx: float
    miny: float
    maxx: float
    maxy: float

    @property
    def width(self) -> float:
        return self.maxx - self.minx

    @property
    def height(self) -> float:
        return self.maxy - self.miny


def as_points(points: ArrayLike) -> NDArray[np.float64]:
    """Coerce a point sequence into a fresh float64 array of shape (N, 2) or (2,)."""
    return np.array(points, dtype=np.float64)


def translate(points: ArrayLike, offset: ArrayLike) -> NDArray[np.float64]:
    return as_points(points) + np.asarray(offset, dtype=np.float64)


def rotate(points: ArrayLike, degrees: float) -> NDArray[np.float64]:
    """Rotate about the origin: (x cos - y sin, x sin + y cos)."""
    pts = as_points(points)
    theta = math.radians(degrees)
    c, s = math.cos(theta), math.sin(theta)
    x = pts[..., 0]
    y = pts[..., 1]
    return np.stack((x * c - y * s, x * s + y * c), axis=-1)


def scale(points: ArrayLike, sx: float, sy: float | None = None) -> NDArray[np.float64]:
    """Per-axis scale; a single factor scales uniformly."""
    if sy is None:
        sy = sx
    return as_points(points) * np.array([sx, sy], dtype=np.float64)


def negate(points: ArrayLike) -> NDArray[np.float64]:
    return -as_points(points)


def mirrorx(points: ArrayLike) -> NDArray[np.float64]:
    """Reflect across the x axis (negate y)."""
    return scale(points, 1.0, -1.0)


def mirrory(points: ArrayLike) -> NDArray[np.float64]:
    """Reflect across the y axis (negate x)."""
    return scale(points, -1.0, 1.0)


def distance(a: ArrayLike, b: ArrayLike) -> float:
    d = as_points(a) - as_points(b)
    return float(math.hypot(d[0], d[1]))


def affine_forward(
    points: ArrayLike,
    sx: float,
    sy: float,
    degrees: float,
    offset: ArrayLike,
) -> NDArray[np.float64]:
    """Scale, then rotate, then translate."""
    return translate(rotate(scale(points, sx, sy), degrees), offset)


def affine_inverse(
    points: ArrayLike,
    offset: ArrayLike,
    degrees: float,
    sx: float,
    sy: float,
) -> NDArray[np.float64]:
    """Translate, then rotate, then scale.

    Pass (-offset, -degrees, 1/sx, 1/sy) to undo affine_forward.
    """
    return scale(rotate(translate(points, offset), degrees), sx, sy)


def round_points(points: ArrayLike) -> NDArray[np.float64]:
    """Round every coordinate half away from zero."""
    return round_half_away_array(as_points(points))


def get_bounding_rectf(points: ArrayLike) -> RectF:
    pts = as_points(points).reshape(-1, 2)
    assert len(pts) > 0, "bounding rect of an empty point set"
    lo = pts.min(axis=0)
    hi = pts.max(axis=0)
    return RectF(float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1]))


def create_regular_polygon(n: int, outer_angle: float) -> NDArray[np.float64]:
    """Walk n unit-length edges from the origin, turning by outer_angle each step.

    The first vertex is (0, 0) and the first edge runs along +x. Only the
    first n vertices are kept; the closing edge is implicit.
    """
    assert n > 0, "polygon needs at least one vertex"
    pts = np.zeros((n, 2), dtype=np.float64)
    theta = 0.0
    for i in range(n - 1):
        rad = math.radians(theta)
        pts[i + 1] = pts[i] + (math.cos(rad), math.sin(rad))
        theta += outer_angle
    return pts


def polygon_center(points: ArrayLike) -> NDArray[np.float64]:
    """Vertex mean, good enough as a center for convex tiles."""
    return as_points(points).reshape(-1, 2).mean(axis=0)
