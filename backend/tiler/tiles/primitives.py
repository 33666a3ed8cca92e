"""Unit-edge polygon primitives used to assemble the tilings.

Each function returns a fresh array, so callers may transform it freely.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from tiler.utils.geometry import as_points, create_regular_polygon

SQRT3 = math.sqrt(3.0)


def _cos(deg: float) -> float:
    return math.cos(math.radians(deg))


def _sin(deg: float) -> float:
    return math.sin(math.radians(deg))


def square() -> NDArray[np.float64]:
    return create_regular_polygon(4, 90)


def octagon() -> NDArray[np.float64]:
    return create_regular_polygon(8, 45)


def triangle60() -> NDArray[np.float64]:
    """Equilateral triangle."""
    return create_regular_polygon(3, 120)


def hexagon() -> NDArray[np.float64]:
    return create_regular_polygon(6, 60)


def dodecagon() -> NDArray[np.float64]:
    return create_regular_polygon(12, 30)


def triangle90() -> NDArray[np.float64]:
    """Right isosceles triangle, the quarter of a unit square."""
    return as_points([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)])


def triangle135() -> NDArray[np.float64]:
    """Obtuse isosceles triangle, a third of an equilateral triangle."""
    return as_points([(0.0, 0.0), (1.0, 0.0), (0.5, SQRT3 / 6.0)])


def triangle30() -> NDArray[np.float64]:
    """30-60-90 triangle with its right angle on the x axis."""
    return as_points([(0.0, 0.0), (_cos(30), 0.0), (_cos(30), _sin(30))])


def cairo_pentagon() -> NDArray[np.float64]:
    a = SQRT3 / 3.0
    b = 0.5 + SQRT3 / 6.0
    dx1, dy1 = b * _cos(60), b * _sin(60)
    dx2, dy2 = b * _cos(30), b * _sin(30)
    return as_points([
        (0.0, 0.0),
        (a, 0.0),
        (a + dx1, dy1),
        (-dx1 + dx2, dy1 + dy2),
        (-dx1, dy1),
    ])


def pentagon30() -> NDArray[np.float64]:
    """Symmetric pentagon of the floret tiling, pointing down at the origin."""
    x1, y1 = _cos(60), _sin(60)
    x2, y2 = x1 - 0.5 * _cos(60), y1 + 0.5 * _sin(60)
    return as_points([(0.0, 0.0), (x1, y1), (x2, y2), (-x2, y2), (-x1, y1)])


def rhombus() -> NDArray[np.float64]:
    """60/120 degree rhombus lying along the x axis."""
    dx, dy = _cos(30), _sin(-30)
    return as_points([(0.0, 0.0), (dx, dy), (2 * dx, 0.0), (dx, -dy)])


def kite() -> NDArray[np.float64]:
    return as_points([
        (0.0, 0.0),
        (_cos(60), _sin(60)),
        (0.0, 2 * SQRT3 / 3.0),
        (_cos(120), _sin(60)),
    ])
