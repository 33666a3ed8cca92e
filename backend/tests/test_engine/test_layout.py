"""Tests for the lattice locator, instantiator, overlap filter and window clipping."""

import numpy as np
import pytest

from tests.conftest import CATALOG
from tiler.engine.layout import (
    clip_scanlines,
    get_overlapping_polygons,
    get_polygon_scanlines,
    get_tile_locations,
    get_tiled_polygons,
)
from tiler.utils.rasterizer import Scanline


@pytest.mark.parametrize(
    "rows,cols,tw,th,triangular,expected",
    [
        (8, 3, 1, 1, False, 50),
        (8, 3, 1, 1, True, 55),
        (8, 4, 2, 2, False, 24),
        (8, 4, 1, 2, False, 36),
        (8, 4, 2, 1, False, 40),
    ],
)
def test_location_counts(rows, cols, tw, th, triangular, expected):
    locs = get_tile_locations(rows, cols, (0, 0), tw, th, 0, triangular)
    assert locs.shape == (expected, 2)


def test_triangular_rows_are_half_shifted():
    locs = get_tile_locations(8, 3, (0, 0), 1, 1, 0, True)
    first = {float(y): float(x) for x, y in locs[::-1]}
    assert first[-1.0] == -1.5
    assert first[0.0] == -1.0
    assert first[1.0] == -1.5


def test_locations_follow_origin_and_size():
    locs = get_tile_locations(4, 4, (2, 2), 4, 4, 0)
    assert (2.0, 2.0) in {tuple(p) for p in locs}
    xs = np.unique(locs[:, 0])
    assert np.allclose(np.diff(xs), 4.0)


def test_rotated_lattice_spacing_is_preserved():
    locs = get_tile_locations(20, 30, (15, 10), 5, 5, 33)
    d = np.hypot(*(locs[1] - locs[0]))
    assert d == pytest.approx(5.0)


def test_rejects_non_positive_tile_size():
    with pytest.raises(AssertionError):
        get_tile_locations(8, 8, (0, 0), 0, 1, 0)


def test_tiled_polygons_order_and_count():
    square4 = CATALOG[0]
    locs = np.array([[0.0, 0.0], [100.0, 0.0]])
    polys = get_tiled_polygons(locs, square4.polygons, 10, 0)
    assert len(polys) == 2 * len(square4.polygons)
    assert np.allclose(polys[0], square4.polygons[0] * 10)
    assert np.allclose(polys[4], square4.polygons[0] * 10 + [100.0, 0.0])


def test_tiled_polygons_rotate_about_location():
    square4 = CATALOG[0]
    polys = get_tiled_polygons([[5.0, 5.0]], square4.polygons[:1], 2, 90)
    assert np.allclose(polys[0], [[5, 5], [5, 7], [3, 7], [3, 5]])


def test_overlap_filter():
    inside = np.array([[5, 5], [8, 5], [8, 8], [5, 8]], dtype=float)
    straddling = np.array([[-3, -3], [1, -3], [1, 1], [-3, 1]], dtype=float)
    touching = np.array([[10, 0], [12, 0], [12, 2], [10, 2]], dtype=float)
    far = np.array([[50, 50], [60, 50], [60, 60]], dtype=float)
    kept = get_overlapping_polygons(10, 10, [inside, straddling, touching, far])
    assert len(kept) == 2
    assert kept[0] is inside and kept[1] is straddling


def test_clip_scanlines_per_polygon():
    polys = [np.array([[-5, 0], [5, 0], [5, 3], [-5, 3]], dtype=float)]
    spans = get_polygon_scanlines(polys)
    clipped = clip_scanlines(4, 2, spans)
    assert clipped == [[Scanline(0, 0, 4), Scanline(1, 0, 4)]]
    assert clip_scanlines(4, 2, [[]]) == [[]]
