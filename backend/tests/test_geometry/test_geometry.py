"""Tests for the geometry kernel and math helpers."""

import math

import numpy as np
import pytest

from tiler.tiles import primitives as prim
from tiler.utils.geometry import (
    affine_forward,
    affine_inverse,
    create_regular_polygon,
    distance,
    get_bounding_rectf,
    mirrorx,
    mirrory,
    negate,
    rotate,
    round_points,
    scale,
    translate,
)
from tiler.utils.math_helpers import round_half_away, trunc_div


def test_rotate_unit_square_90_and_round():
    square = [(0, 0), (0, 1), (1, 0), (1, 1)]
    result = round_points(rotate(square, 90))
    expected = np.array([(0, 0), (-1, 0), (0, 1), (-1, 1)], dtype=np.float64)
    assert np.array_equal(result, expected)


def test_rotate_is_counter_clockwise():
    p = rotate([1.0, 0.0], 90)
    assert p.shape == (2,)
    assert p[0] == pytest.approx(0.0, abs=1e-12)
    assert p[1] == pytest.approx(1.0)


@pytest.mark.parametrize("s1,s2", [(2.0, 3.0), (0.5, 16.0), (1e-3, 1e3), (7.25, 0.1)])
def test_scale_composes(s1, s2):
    for poly in (prim.hexagon(), prim.cairo_pentagon(), prim.kite()):
        assert np.allclose(scale(scale(poly, s1), s2), scale(poly, s1 * s2))


def test_scale_per_axis():
    assert np.array_equal(scale([[1.0, 2.0]], 2.0, 3.0), [[2.0, 6.0]])


def test_mirrors_and_negate():
    pts = np.array([[1.0, 2.0], [-3.0, 4.0]])
    assert np.array_equal(mirrorx(pts), [[1.0, -2.0], [-3.0, -4.0]])
    assert np.array_equal(mirrory(pts), [[-1.0, 2.0], [3.0, 4.0]])
    assert np.array_equal(negate(pts), -pts)


def test_transforms_do_not_mutate_input():
    pts = prim.square()
    before = pts.copy()
    translate(pts, (1, 1))
    rotate(pts, 30)
    scale(pts, 2)
    assert np.array_equal(pts, before)


def test_affine_inverse_undoes_forward():
    pts = prim.octagon()
    origin = np.array([13.5, -7.25])
    fwd = affine_forward(pts, 16.0, 12.0, 37.0, origin)
    back = affine_inverse(fwd, -origin, -37.0, 1 / 16.0, 1 / 12.0)
    assert np.allclose(back, pts)


def test_affine_forward_order():
    # scale first, then rotate, then translate
    p = affine_forward([[1.0, 0.0]], 2.0, 2.0, 90.0, (10.0, 0.0))
    assert np.allclose(p, [[10.0, 2.0]])


def test_bounding_rectf():
    r = get_bounding_rectf([(1.5, -2.0), (-3.0, 4.0), (0.0, 0.0)])
    assert r == (-3.0, -2.0, 1.5, 4.0)
    assert r.width == 4.5
    assert r.height == 6.0


def test_bounding_rectf_of_empty_set_is_a_contract_violation():
    with pytest.raises(AssertionError):
        get_bounding_rectf(np.empty((0, 2)))


def test_regular_polygon_walk():
    hexagon = create_regular_polygon(6, 60)
    assert hexagon.shape == (6, 2)
    assert np.array_equal(hexagon[0], [0.0, 0.0])
    assert np.allclose(hexagon[1], [1.0, 0.0])
    edges = np.roll(hexagon, -1, axis=0) - hexagon
    assert np.allclose(np.hypot(edges[:, 0], edges[:, 1]), 1.0)


def test_regular_polygon_single_vertex():
    assert np.array_equal(create_regular_polygon(1, 90), [[0.0, 0.0]])


def test_regular_polygon_rejects_zero_sides():
    with pytest.raises(AssertionError):
        create_regular_polygon(0, 90)


def test_distance():
    assert distance((0, 0), (3, 4)) == 5.0


@pytest.mark.parametrize(
    "value,expected",
    [(0.5, 1), (1.5, 2), (2.5, 3), (-0.5, -1), (-2.5, -3), (2.4999, 2), (-0.2, 0), (7.0, 7)],
)
def test_round_half_away(value, expected):
    assert round_half_away(value) == expected


def test_round_points_ties_away_from_zero():
    assert np.array_equal(round_points([[0.5, -0.5], [2.5, -1.5]]), [[1.0, -1.0], [3.0, -2.0]])


@pytest.mark.parametrize("a,b,expected", [(7, 2, 3), (-7, 2, -3), (7, -2, -3), (-7, -2, 3), (0, 5, 0)])
def test_trunc_div(a, b, expected):
    assert trunc_div(a, b) == expected


def test_primitive_edges_are_unit_length():
    for poly in (prim.square(), prim.octagon(), prim.triangle60(), prim.dodecagon()):
        edges = np.roll(poly, -1, axis=0) - poly
        assert np.allclose(np.hypot(edges[:, 0], edges[:, 1]), 1.0)


def test_triangle30_angles():
    t = prim.triangle30()
    assert t[1][0] == pytest.approx(math.sqrt(3) / 2)
    assert t[2][1] == pytest.approx(0.5)
