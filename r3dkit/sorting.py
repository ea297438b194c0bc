"""Ordering of draw calls by their distance to the camera."""

from __future__ import annotations

from functools import cmp_to_key
from typing import Iterable

from r3dkit.drawcall import DrawCall, GeometryType
from r3dkit.geometry import Matrix, Vector3

_EPSILON_SQR = 0.001 * 0.001


def center_distance_sqr(call: DrawCall, view: Matrix) -> float:
    """Squared view-space distance of the centre of the call's geometry.

    For models this is the centre of the mesh bounding box; sprites use their origin.
    """
    center = Vector3()
    if call.geometry_type is GeometryType.MODEL:
        center = call._require_mesh().aabb.center()
    world = call.transform.transform_point(center)
    return view.transform_point(world).length_sqr()


def max_distance_sqr(call: DrawCall, view: Matrix) -> float:
    """Largest squared view-space distance of the call's geometry.

    For models this is the farthest bounding-box corner; sprites use their position.
    """
    if call.geometry_type is GeometryType.SPRITE:
        return view.transform_point(call.transform.translation).length_sqr()

    corners = call._require_mesh().aabb.corners()
    return max(
        0.0,
        *(
            view.transform_point(call.transform.transform_point(c)).length_sqr()
            for c in corners
        ),
    )


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


class _Entry:
    __slots__ = ("index", "call", "view", "_center", "_max")

    def __init__(self, index: int, call: DrawCall, view: Matrix) -> None:
        self.index = index
        self.call = call
        self.view = view
        self._center: float | None = None
        self._max: float | None = None

    @property
    def center(self) -> float:
        if self._center is None:
            self._center = center_distance_sqr(self.call, self.view)
        return self._center

    @property
    def farthest(self) -> float:
        if self._max is None:
            self._max = max_distance_sqr(self.call, self.view)
        return self._max


def _compare_front_to_back(a: _Entry, b: _Entry) -> int:
    return _sign(a.center - b.center)


def _compare_back_to_front(a: _Entry, b: _Entry) -> int:
    diff = a.farthest - b.farthest
    if abs(diff) >= _EPSILON_SQR:
        return -_sign(diff)
    diff = a.center - b.center
    if abs(diff) >= _EPSILON_SQR:
        return -_sign(diff)
    # Deterministic fallback: the later call comes first
    return _sign(b.index - a.index)


def _compare_mixed_forward(a: _Entry, b: _Entry) -> int:
    opaque_a = a.call.is_opaque
    opaque_b = b.call.is_opaque
    if opaque_a and not opaque_b:
        return -1
    if opaque_b and not opaque_a:
        return 1
    if opaque_a:
        return _compare_front_to_back(a, b)
    return _compare_back_to_front(a, b)


def _sorted(calls: Iterable[DrawCall], view: Matrix, compare) -> list[DrawCall]:
    entries = [_Entry(i, call, view) for i, call in enumerate(calls)]
    entries.sort(key=cmp_to_key(compare))
    return [entry.call for entry in entries]


def sort_front_to_back(calls: Iterable[DrawCall], view: Matrix) -> list[DrawCall]:
    """Calls ordered nearest first by centre distance, for opaque geometry."""
    return _sorted(calls, view, _compare_front_to_back)


def sort_back_to_front(calls: Iterable[DrawCall], view: Matrix) -> list[DrawCall]:
    """Calls ordered farthest first, for transparent geometry.

    Ties on the farthest point fall back to the centre distance, then to the
    later call first.
    """
    return _sorted(calls, view, _compare_back_to_front)


def sort_mixed_forward(calls: Iterable[DrawCall], view: Matrix) -> list[DrawCall]:
    """Opaque calls first, nearest first, then transparent calls farthest first."""
    return _sorted(calls, view, _compare_mixed_forward)