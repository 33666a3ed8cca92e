"""Tile catalog: the fixed, ordered table of plane tilings.

Each tiling is one unit cell: a set of convex polygons plus the translation
vectors that repeat it. Copies (width, 0) and (0, height) of the cell cover
the plane with shared edges only. Triangular tilings also shift every other
row by width / 2, and their height is width * sin 60.

Builders place each polygon by translating a (possibly rotated) primitive so
that its first vertex lands on a vertex of a polygon already in the cell.
"""

from __future__ import annotations

import enum
import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from shapely.geometry import Polygon

from tiler.tiles import primitives as prim
from tiler.utils.geometry import mirrorx, mirrory, rotate, translate

logger = logging.getLogger(__name__)

SIN60 = math.sin(math.radians(60))


class TilingId(enum.IntEnum):
    SQUARE4 = 0
    TRUNCATED_SQUARE = 1
    TETRAKIS_SQUARE = 2
    SNUB_SQUARE = 3
    CAIRO_PENTAGONAL = 4
    HEXAGONAL = 5
    TRIANGULAR = 6
    TRIHEX = 7
    RHOMBILE = 8
    TRUNCATED_HEX = 9
    TRIAKIS_TRIANGULAR = 10
    RHOMBITRIHEXAGONAL = 11
    DELTOIDAL_TRIHEXAGONAL = 12
    TRUNCATED_TRIHEXAGONAL = 13
    KISRHOMBILE = 14
    SNUB_TRIHEXAGONAL = 15
    FLORET_PENTAGONAL = 16
    ELONGATED_TRIANGULAR = 17


@dataclass(frozen=True, eq=False)
class Tile:
    """One catalog entry. Polygon arrays are read-only."""

    name: str
    id: TilingId
    polygons: tuple[NDArray[np.float64], ...]
    width: float
    height: float
    triangular: bool = False

    @property
    def index(self) -> int:
        return int(self.id)

    def __repr__(self) -> str:
        return (
            f"Tile(name={self.name!r}, polygons={len(self.polygons)}, "
            f"width={self.width:.5f}, height={self.height:.5f}, triangular={self.triangular})"
        )


def _make_tile(
    tid: TilingId,
    polygons: Sequence[NDArray[np.float64]],
    count: int,
    width: float,
    height: float | None = None,
    triangular: bool = False,
) -> Tile:
    assert len(polygons) == count, f"{tid.name.lower()}: expected {count} polygons, got {len(polygons)}"
    frozen = []
    for p in polygons:
        arr = np.array(p, dtype=np.float64)
        arr.setflags(write=False)
        frozen.append(arr)
    if height is None:
        height = width * SIN60
    return Tile(
        name=tid.name.lower(),
        id=tid,
        polygons=tuple(frozen),
        width=float(width),
        height=float(height),
        triangular=triangular,
    )


def _at(poly: NDArray[np.float64], anchor: NDArray[np.float64], vertex: int) -> NDArray[np.float64]:
    """Translate poly so its origin vertex sits on anchor[vertex]."""
    return translate(poly, anchor[vertex])


# ── Square-lattice tilings ──


def build_square4() -> Tile:
    p0 = prim.square()
    p = [p0, _at(p0, p0, 1), _at(p0, p0, 2), _at(p0, p0, 3)]
    return _make_tile(TilingId.SQUARE4, p, 4, 2.0, 2.0)


def build_truncated_square() -> Tile:
    p0 = prim.octagon()
    p = [
        p0,
        _at(prim.octagon(), p0, 3),
        _at(prim.square(), p0, 2),
        _at(prim.square(), p0, 5),
    ]
    return _make_tile(TilingId.TRUNCATED_SQUARE, p, 4, 2 * p0[3][0], 2 * p0[3][1])


def build_tetrakis_square() -> Tile:
    p0 = prim.triangle90()
    p1 = _at(mirrory(mirrorx(p0)), p0, 2)
    p2 = _at(p0, p1, 1)
    p3 = _at(p1, p1, 1)
    p = [p0, p1, p2, p3]
    p += [_at(q, p0, 1) for q in (p0, p1, p2, p3)]
    return _make_tile(TilingId.TETRAKIS_SQUARE, p, 8, 2.0, 2.0)


def build_snub_square() -> Tile:
    tri, sq = prim.triangle60(), prim.square()
    p0 = tri
    p1 = rotate(sq, 60)
    p2 = _at(rotate(sq, 30), p0, 1)
    p3 = _at(rotate(tri, 90), p0, 2)
    p4 = _at(rotate(tri, 30), p0, 2)
    p5 = _at(rotate(sq, 30), p1, 2)
    p6 = _at(rotate(sq, 60), p2, 2)
    p7 = _at(rotate(tri, 60), p5, 1)
    p8 = _at(rotate(tri, 60), p1, 3)
    p9 = _at(rotate(tri, 120), p1, 2)
    p10 = _at(rotate(tri, 150), p0, 0)
    p11 = _at(rotate(tri, -30), p0, 1)
    p = [p0, p1, p2, p3, p4, p5, p6, p7, p8, p9, p10, p11]
    return _make_tile(TilingId.SNUB_SQUARE, p, 12, 1 + 2 * p0[2][1], p5[2][1])


def build_cairo_pentagonal() -> Tile:
    pent = prim.cairo_pentagon()
    p0 = pent
    p1 = _at(rotate(pent, 90), p0, 3)
    p2 = _at(rotate(pent, -90), p1, 1)
    p3 = _at(rotate(translate(pent, -p0[3]), 180), p1, 1)
    p = [p0, p1, p2, p3]
    p += [_at(q, p2, 3) for q in (p0, p1, p2, p3)]
    return _make_tile(TilingId.CAIRO_PENTAGONAL, p, 8, p[6][3][0], p3[0][1])


# ── Triangular-lattice tilings ──


def build_hexagonal() -> Tile:
    p0 = prim.hexagon()
    p2 = _at(p0, p0, 2)
    p = [p0, _at(p0, p0, 4), p2]
    return _make_tile(TilingId.HEXAGONAL, p, 3, p2[2][0], triangular=True)


def build_triangular() -> Tile:
    p0 = prim.triangle60()
    p = [p0, rotate(p0, -60)]
    return _make_tile(TilingId.TRIANGULAR, p, 2, p0[1][0], triangular=True)


def build_trihex() -> Tile:
    p0 = prim.triangle60()
    p1 = _at(prim.hexagon(), p0, 1)
    p2 = _at(rotate(prim.triangle60(), 60), p0, 2)
    return _make_tile(TilingId.TRIHEX, [p0, p1, p2], 3, p1[1][0], triangular=True)


def build_rhombile() -> Tile:
    rh = prim.rhombus()
    p0 = rh
    p = [p0, rotate(rh, 60), _at(rotate(rh, 120), p0, 2)]
    return _make_tile(TilingId.RHOMBILE, p, 3, p0[2][0], triangular=True)


def build_truncated_hex() -> Tile:
    tri = prim.triangle60()
    p0 = rotate(prim.dodecagon(), -30)
    p1 = _at(tri, p0, 3)
    p2 = _at(rotate(tri, 60), p0, 5)
    base = [p0, p1, p2]
    p3, p4, p5 = (_at(q, p1, 1) for q in base)
    p = base + [p3, p4, p5]
    p += [_at(q, p0, 7) for q in base]
    p += [_at(q, p3, 7) for q in base]
    return _make_tile(TilingId.TRUNCATED_HEX, p, 12, 2 * p1[1][0], triangular=True)


def build_triakis_triangular() -> Tile:
    t = prim.triangle135()
    p0 = t
    p1 = _at(rotate(t, 120), p0, 1)
    p2 = _at(rotate(t, -120), p1, 1)
    p = [p0, p1, p2]
    p += [_at(rotate(q, -60), p1, 1) for q in (p0, p1, p2)]
    return _make_tile(TilingId.TRIAKIS_TRIANGULAR, p, 6, p0[1][0], triangular=True)


def build_rhombitrihexagonal() -> Tile:
    tri, sq = prim.triangle60(), prim.square()
    p0 = tri
    p1 = _at(rotate(sq, 30), p0, 1)
    p2 = _at(rotate(tri, 60), p1, 1)
    p3 = _at(rotate(sq, -30), p2, 0)
    p4 = _at(rotate(prim.hexagon(), 30), p0, 2)
    p5 = _at(sq, p4, 1)
    p = [p0, p1, p2, p3, p4, p5]
    return _make_tile(TilingId.RHOMBITRIHEXAGONAL, p, 6, p3[1][0], triangular=True)


def build_deltoidal_trihexagonal() -> Tile:
    k = prim.kite()
    p = [rotate(k, 60 * i) for i in range(6)]
    return _make_tile(TilingId.DELTOIDAL_TRIHEXAGONAL, p, 6, 2.0, triangular=True)


def build_truncated_trihexagonal() -> Tile:
    hexa, sq = prim.hexagon(), prim.square()
    p0 = prim.dodecagon()
    p = [
        p0,
        _at(rotate(hexa, 180), p0, 1),
        _at(rotate(sq, -60), p0, 1),
        _at(rotate(hexa, -60), p0, 2),
        _at(sq, p0, 3),
        _at(rotate(sq, 60), p0, 5),
    ]
    return _make_tile(TilingId.TRUNCATED_TRIHEXAGONAL, p, 6, p0[6][1] + 1, triangular=True)


def build_kisrhombile() -> Tile:
    t = prim.triangle30()
    m = mirrorx(t)
    p: list[NDArray[np.float64]] = []
    for i in range(6):
        p.append(rotate(t, 60 * i))
        p.append(rotate(m, 60 * i))
    return _make_tile(TilingId.KISRHOMBILE, p, 12, 2 * p[0][1][0], triangular=True)


# (rotation, hexagon vertex) of each triangle around the central hexagon
_SNUB_TRIHEX_TRIANGLES = (
    (-60, 0), (-120, 0),
    (-60, 1), (-120, 1),
    (-60, 2), (-120, 2), (0, 2), (60, 2),
    (60, 3),
    (0, 4),
    (-120, 5), (60, 5),
)


def build_snub_trihexagonal() -> Tile:
    p0 = prim.hexagon()
    p = [p0]
    p += [_at(rotate(prim.triangle60(), deg), p0, v) for deg, v in _SNUB_TRIHEX_TRIANGLES]
    return _make_tile(TilingId.SNUB_TRIHEXAGONAL, p, 13, 3.0, triangular=True)


def build_floret_pentagonal() -> Tile:
    pent = prim.pentagon30()
    # cell rotation that lines the pentagon rosettes up with the lattice
    a = math.degrees(math.atan(math.sqrt(3) / 9))
    p = [rotate(pent, a + 60 * i) for i in range(6)]
    x = 0.5 + 2 * math.cos(math.radians(60))
    y = 2 * SIN60
    return _make_tile(TilingId.FLORET_PENTAGONAL, p, 6, math.hypot(x, y), triangular=True)


def build_elongated_triangular() -> Tile:
    tri, sq = prim.triangle60(), prim.square()
    p0 = sq
    p1 = translate(sq, (1.0, 0.0))
    p2 = rotate(tri, -60)
    p3 = _at(p2, p1, 0)
    p4 = _at(tri, p2, 1)
    p5 = _at(tri, p3, 1)
    p6 = _at(rotate(sq, -90), p2, 1)
    p7 = _at(rotate(sq, -90), p4, 1)
    p = [p0, p1, p2, p3, p4, p5, p6, p7]
    p += [_at(q, p6, 1) for q in (p2, p3, p4, p5)]
    return _make_tile(TilingId.ELONGATED_TRIANGULAR, p, 12, 2.0, 2 * (1 + SIN60))


_BUILDERS: tuple[Callable[[], Tile], ...] = (
    build_square4,
    build_truncated_square,
    build_tetrakis_square,
    build_snub_square,
    build_cairo_pentagonal,
    build_hexagonal,
    build_triangular,
    build_trihex,
    build_rhombile,
    build_truncated_hex,
    build_triakis_triangular,
    build_rhombitrihexagonal,
    build_deltoidal_trihexagonal,
    build_truncated_trihexagonal,
    build_kisrhombile,
    build_snub_trihexagonal,
    build_floret_pentagonal,
    build_elongated_triangular,
)


def create_tile_catalog() -> tuple[Tile, ...]:
    """Build every tiling, in TilingId order."""
    catalog = tuple(build() for build in _BUILDERS)
    for i, tile in enumerate(catalog):
        assert tile.index == i, f"{tile.name} built out of order"
    logger.debug("Built tile catalog with %d tilings", len(catalog))
    return catalog


def get_tile(catalog: Sequence[Tile], key: int | str | TilingId) -> Tile:
    """Look up a tiling by index, name or TilingId.

    Raises ValueError for anything not in the catalog.
    """
    if isinstance(key, str) and not key.lstrip("-").isdigit():
        name = key.strip().lower()
        for tile in catalog:
            if tile.name == name:
                return tile
        raise ValueError(f"the tile index is invalid: unknown tiling {key!r}")
    index = int(key)
    if not 0 <= index < len(catalog):
        raise ValueError(
            f"the tile index is invalid: {index} (expected 0..{len(catalog) - 1})"
        )
    return catalog[index]


# ── Construction checks (used by tests and the tiles endpoint) ──


def polygon_area(points: NDArray[np.float64]) -> float:
    return float(Polygon(points).area)


def unit_cell_area(tile: Tile) -> float:
    """Summed area of the cell's polygons; equals width * height for a closed tiling."""
    return sum(polygon_area(p) for p in tile.polygons)


def is_convex(points: NDArray[np.float64], tol: float = 1e-9) -> bool:
    poly = Polygon(points)
    return poly.is_valid and abs(poly.convex_hull.area - poly.area) <= tol


def is_valid_tile(tile: Tile, tol: float = 1e-6) -> bool:
    """Every polygon is convex and the cell area matches its lattice cell."""
    if not all(is_convex(p) for p in tile.polygons):
        return False
    return abs(unit_cell_area(tile) - tile.width * tile.height) <= tol
