"""Math helpers: rounding and integer division with C-style semantics. No engine imports."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3).

    Python's round() and np.round() both round ties to even, which shifts
    polygon vertices by a pixel on exact .5 coordinates.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def round_half_away_array(values: NDArray[np.float64]) -> NDArray[np.float64]:
    """Vectorised round_half_away. Keeps float dtype."""
    return np.sign(values) * np.floor(np.abs(values) + 0.5)


def trunc_div(a: int, b: int) -> int:
    """Integer division truncating toward zero. `//` floors instead."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def luminance(color: tuple[int, ...]) -> float:
    """Rec. 601 luma of an RGB color. Single channel colors are returned as-is."""
    if len(color) < 3:
        return float(color[0]) if color else 0.0
    r, g, b = color[0], color[1], color[2]
    return 0.299 * r + 0.587 * g + 0.114 * b
