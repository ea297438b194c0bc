import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from r3dkit.frustum import Frustum, Plane, frustum_bounding_box
from r3dkit.geometry import BoundingBox, Matrix, Vector3


@pytest.fixture
def unit_frustum():
    return Frustum.from_matrix(Matrix.identity())


def _box(lo, hi):
    return BoundingBox(Vector3(*lo), Vector3(*hi))


def test_identity_planes_are_unit_length(unit_frustum):
    assert len(unit_frustum.planes) == 6
    for plane in unit_frustum.planes:
        assert math.isclose(plane.normal.length(), 1.0)
        assert math.isclose(plane.w, 1.0)


def test_plane_order_back_is_minus_z(unit_frustum):
    back = unit_frustum.planes[0]
    assert back == Plane(0.0, 0.0, -1.0, 1.0)


def test_degenerate_plane_normalizes_to_zero():
    assert Plane(1e-9, 0.0, 0.0, 5.0).normalized() == Plane()


def test_point_inside_and_outside(unit_frustum):
    assert unit_frustum.contains_point(Vector3(0, 0, 0))
    assert not unit_frustum.contains_point(Vector3(2, 0, 0))


def test_point_on_boundary_is_outside(unit_frustum):
    assert not unit_frustum.contains_point(Vector3(1, 0, 0))


def test_contains_any_point(unit_frustum):
    assert unit_frustum.contains_any_point([Vector3(0, 0, 0), Vector3(5, 5, 5)])
    assert not unit_frustum.contains_any_point([Vector3(5, 0, 0), Vector3(0, -5, 0)])
    assert not unit_frustum.contains_any_point([])


def test_sphere(unit_frustum):
    assert unit_frustum.contains_sphere(Vector3(2, 0, 0), 1.5)
    assert not unit_frustum.contains_sphere(Vector3(2, 0, 0), 0.5)


def test_aabb(unit_frustum):
    assert unit_frustum.contains_aabb(_box((0.5, 0.5, 0.5), (3, 3, 3)))
    assert not unit_frustum.contains_aabb(_box((2, 2, 2), (3, 3, 3)))


def test_obb_translated(unit_frustum):
    box = _box((-0.5, -0.5, -0.5), (0.5, 0.5, 0.5))
    assert unit_frustum.contains_obb(box, Matrix.identity())
    assert not unit_frustum.contains_obb(box, Matrix.translate(5, 0, 0))
    assert unit_frustum.contains_obb(box, Matrix.translate(1.2, 0, 0))


def test_zero_matrix_frustum():
    frustum = Frustum.from_matrix(Matrix((0.0,) * 16))
    assert all(p == Plane() for p in frustum.planes)
    assert not frustum.contains_point(Vector3(0, 0, 0))
    assert frustum.contains_sphere(Vector3(100, 0, 0), 1.0)


def test_wrong_plane_count():
    with pytest.raises(ValueError):
        Frustum((Plane(),) * 5)


def test_perspective_frustum_sees_forward_only():
    view = Matrix.look_at(Vector3(0, 0, 0), Vector3(0, 0, -1), Vector3(0, 1, 0))
    proj = Matrix.perspective(math.radians(90), 1.0, 0.1, 100.0)
    frustum = Frustum.from_matrix(view @ proj)
    assert frustum.contains_point(Vector3(0, 0, -5))
    assert not frustum.contains_point(Vector3(0, 0, 5))
    assert not frustum.contains_point(Vector3(0, 0, -200))


def test_bounding_box_of_identity():
    box = frustum_bounding_box(Matrix.identity())
    assert box.min == Vector3(-1, -1, -1)
    assert box.max == Vector3(1, 1, 1)


def test_bounding_box_of_ortho():
    box = frustum_bounding_box(Matrix.ortho(-2, 2, -3, 3, 1, 10))
    for got, want in zip(box.min, (-2, -3, -10)):
        assert math.isclose(got, want, abs_tol=1e-9)
    for got, want in zip(box.max, (2, 3, -1)):
        assert math.isclose(got, want, abs_tol=1e-9)


def test_bounding_box_singular_matrix():
    with pytest.raises(ValueError):
        frustum_bounding_box(Matrix((0.0,) * 16))


def test_bounding_box_encloses_inside_points():
    view = Matrix.look_at(Vector3(1, 2, 3), Vector3(0, 0, 0), Vector3(0, 1, 0))
    vp = view @ Matrix.perspective(math.radians(60), 1.5, 0.5, 20.0)
    frustum = Frustum.from_matrix(vp)
    box = frustum_bounding_box(vp)
    inside = [Vector3(0, 0, 0), Vector3(0.5, 0.2, 0.1), Vector3(-1, -1, -1)]
    for point in inside:
        assert frustum.contains_point(point)
        for p, lo, hi in zip(point, box.min, box.max):
            assert lo - 1e-9 <= p <= hi + 1e-9


_quarter = st.integers(min_value=-12, max_value=12).map(lambda v: v / 4)


@given(st.tuples(_quarter, _quarter, _quarter), st.tuples(_quarter, _quarter, _quarter))
def test_obb_identity_matches_aabb(a, b):
    lo = tuple(min(p, q) for p, q in zip(a, b))
    hi = tuple(max(p, q) for p, q in zip(a, b))
    box = _box(lo, hi)
    frustum = Frustum.from_matrix(Matrix.identity())
    assert frustum.contains_obb(box, Matrix.identity()) == frustum.contains_aabb(box)


@given(st.tuples(*(st.floats(min_value=-0.9, max_value=0.9),) * 3))
def test_inner_points_are_contained(coords):
    frustum = Frustum.from_matrix(Matrix.identity())
    point = Vector3(*coords)
    assert frustum.contains_point(point)
    assert frustum.contains_sphere(point, 0.0)