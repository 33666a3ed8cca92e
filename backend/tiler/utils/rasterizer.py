"""Rasterization utilities: integer rects, horizontal scanlines, convex polygon fill, lines.

Polygon edges are rasterized with integer arithmetic only. The x position of an
edge on row y comes from a fixed-point slope so two polygons sharing an edge
always agree on where it falls, and the spans tile without gaps or overlap.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from tiler.utils.geometry import as_points, get_bounding_rectf, round_points
from tiler.utils.math_helpers import round_half_away, trunc_div

# Fixed-point scale for edge slopes: x positions carry 4 decimal digits.
SCANLINE_PRECISION = 10_000


@dataclass(frozen=True)
class Rect:
    """Integer rectangle covering [x, x + width) x [y, y + height)."""

    x: int
    y: int
    width: int
    height: int

    @property
    def x2(self) -> int:
        return self.x + self.width

    @property
    def y2(self) -> int:
        return self.y + self.height


class Scanline(NamedTuple):
    """Pixels [x, x + len) on row y."""

    y: int
    x: int
    len: int


class Segment(NamedTuple):
    x1: int
    y1: int
    x2: int
    y2: int


def intersects(a: Rect, b: Rect) -> bool:
    """Half-open overlap test; rects that only touch do not intersect."""
    return a.x < b.x2 and a.x2 > b.x and a.y < b.y2 and a.y2 > b.y


def contains(rect: Rect, x: int, y: int) -> bool:
    return rect.x <= x < rect.x2 and rect.y <= y < rect.y2


def get_bounding_rect(points: ArrayLike) -> Rect:
    """Integer bounds of a point set, each side rounded half away from zero."""
    r = get_bounding_rectf(points)
    x = round_half_away(r.minx)
    y = round_half_away(r.miny)
    return Rect(x, y, round_half_away(r.maxx) - x, round_half_away(r.maxy) - y)


def solve_line_x(y: int, seg: Segment, precision: int = SCANLINE_PRECISION) -> int:
    """Integer x where the segment crosses row y.

    Vertical and near-horizontal segments (slope truncates to 0) return x1.
    """
    x1, y1, x2, y2 = seg
    if x1 == x2:
        return x1
    m = trunc_div(precision * (y2 - y1), x2 - x1)
    if m == 0:
        return x1
    return x1 + trunc_div(precision * (y - y1), m)


def _sorted_by_y(seg: Segment) -> Segment:
    if seg.y1 <= seg.y2:
        return seg
    return Segment(seg.x2, seg.y2, seg.x1, seg.y1)


def get_intersecting_scanlines(
    a: Segment,
    b: Segment,
    precision: int = SCANLINE_PRECISION,
) -> list[Scanline]:
    """Spans between two edges over the rows both edges cover.

    Rows are half-open: the lower y of the shared range is included, the upper
    one is not. Rows where both edges land on the same x produce nothing.
    """
    a = _sorted_by_y(a)
    b = _sorted_by_y(b)
    y_lo = max(a.y1, b.y1)
    y_hi = min(a.y2, b.y2)
    if y_hi <= y_lo:
        return []

    out: list[Scanline] = []
    for y in range(y_lo, y_hi):
        xa = solve_line_x(y, a, precision)
        xb = solve_line_x(y, b, precision)
        if xa == xb:
            continue
        if xa > xb:
            xa, xb = xb, xa
        out.append(Scanline(y, xa, xb - xa))
    return out


def polygon_edges(points: ArrayLike) -> list[Segment]:
    """Closed edge list of a polygon, vertices rounded to integer pixels."""
    pts = round_points(points).astype(np.int64)
    n = len(pts)
    return [
        Segment(int(pts[i][0]), int(pts[i][1]), int(pts[(i + 1) % n][0]), int(pts[(i + 1) % n][1]))
        for i in range(n)
    ]


def get_convex_polygon_scanlines(
    points: ArrayLike,
    precision: int = SCANLINE_PRECISION,
) -> list[Scanline]:
    """Exact coverage spans of a convex polygon.

    Every unordered pair of edges contributes the rows where both are active.
    For a convex polygon at most one pair is active on any row, so the pairs
    never emit the same pixels twice. Quadratic in the edge count.
    """
    edges = polygon_edges(points)
    out: list[Scanline] = []
    for i in range(len(edges)):
        for j in range(i + 1, len(edges)):
            out.extend(get_intersecting_scanlines(edges[i], edges[j], precision))
    return out


def clip(scanlines: Iterable[Scanline], rect: Rect) -> list[Scanline]:
    """Restrict spans to a rectangle, dropping anything left empty."""
    out: list[Scanline] = []
    for s in scanlines:
        if s.y < rect.y or s.y >= rect.y2:
            continue
        x1 = max(s.x, rect.x)
        x2 = min(s.x + s.len, rect.x2)
        if x2 <= x1:
            continue
        out.append(Scanline(s.y, x1, x2 - x1))
    return out


def scanline_area(scanlines: Iterable[Scanline]) -> int:
    return sum(s.len for s in scanlines)


def get_line(p1: ArrayLike, p2: ArrayLike) -> Iterator[tuple[int, int]]:
    """Bresenham walk between two points rounded to pixels, both ends included."""
    a = round_points(p1)
    b = round_points(p2)
    x0, y0 = int(a[0]), int(a[1])
    x1, y1 = int(b[0]), int(b[1])
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    while True:
        yield x0, y0
        if x0 == x1 and y0 == y1:
            return
        e2 = 2 * err
        if e2 > dy:
            err += dy
            x0 += sx
        if e2 < dx:
            err += dx
            y0 += sy


def draw_lines(
    img: NDArray[np.uint8],
    points: ArrayLike,
    color: Sequence[int],
    closed: bool = True,
) -> None:
    """Stroke a polyline one pixel wide into img. Pixels outside the image are skipped."""
    pts = as_points(points)
    rows, cols = img.shape[:2]
    bounds = Rect(0, 0, cols, rows)
    n = len(pts)
    count = n if closed else n - 1
    value = np.asarray(color, dtype=img.dtype)
    for i in range(count):
        for x, y in get_line(pts[i], pts[(i + 1) % n]):
            if contains(bounds, x, y):
                img[y, x] = value
