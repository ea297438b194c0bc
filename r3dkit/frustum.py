"""View frustum built from a view-projection matrix, with visibility tests."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable

from r3dkit.geometry import BoundingBox, Matrix, Vector3

EPSILON = 0.000001

_CLIP_CORNERS = (
    (-1.0, -1.0, -1.0), (1.0, -1.0, -1.0), (1.0, 1.0, -1.0), (-1.0, 1.0, -1.0),
    (-1.0, -1.0, 1.0), (1.0, -1.0, 1.0), (1.0, 1.0, 1.0), (-1.0, 1.0, 1.0),
)


class _Side(IntEnum):
    BACK = 0
    FRONT = 1
    BOTTOM = 2
    TOP = 3
    RIGHT = 4
    LEFT = 5


@dataclass(frozen=True)
class Plane:
    """A plane ``x*px + y*py + z*pz + w = 0`` whose normal points inwards."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    @property
    def normal(self) -> Vector3:
        return Vector3(self.x, self.y, self.z)

    def normalized(self) -> Plane:
        """Scale so the normal has unit length; a degenerate plane becomes all zeros."""
        length = math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)
        if length <= 1e-6:
            return Plane()
        inv = 1.0 / length
        return Plane(self.x * inv, self.y * inv, self.z * inv, self.w * inv)

    def distance(self, point: Vector3) -> float:
        """Signed distance of ``point``, positive on the inner side."""
        return self.x * point.x + self.y * point.y + self.z * point.z + self.w


@dataclass(frozen=True)
class Frustum:
    """Six inward-facing planes in the order back, front, bottom, top, right, left."""

    planes: tuple[Plane, ...]

    def __post_init__(self) -> None:
        planes = tuple(self.planes)
        if len(planes) != len(_Side):
            raise ValueError(f"a frustum needs {len(_Side)} planes, got {len(planes)}")
        object.__setattr__(self, "planes", planes)

    @classmethod
    def from_matrix(cls, view_projection: Matrix) -> Frustum:
        """Extract the frustum planes of a combined view-projection matrix."""
        m = view_projection.values
        w_row = (m[3], m[7], m[11], m[15])

        def row(axis: int) -> tuple[float, float, float, float]:
            return (m[axis], m[4 + axis], m[8 + axis], m[12 + axis])

        def minus(axis: int) -> Plane:
            return Plane(*(w - r for w, r in zip(w_row, row(axis)))).normalized()

        def plus(axis: int) -> Plane:
            return Plane(*(w + r for w, r in zip(w_row, row(axis)))).normalized()

        planes = {
            _Side.RIGHT: minus(0),
            _Side.LEFT: plus(0),
            _Side.TOP: minus(1),
            _Side.BOTTOM: plus(1),
            _Side.BACK: minus(2),
            _Side.FRONT: plus(2),
        }
        return cls(tuple(planes[side] for side in _Side))

    def contains_point(self, point: Vector3) -> bool:
        """True when the point lies strictly inside every plane."""
        return all(plane.distance(point) > 0 for plane in self.planes)

    def contains_any_point(self, points: Iterable[Vector3]) -> bool:
        """True when at least one of the points is inside."""
        return any(self.contains_point(p) for p in points)

    def contains_sphere(self, center: Vector3, radius: float) -> bool:
        """True unless the sphere lies fully outside one of the planes."""
        return all(plane.distance(center) >= -radius for plane in self.planes)

    def contains_aabb(self, aabb: BoundingBox) -> bool:
        """True unless the axis-aligned box lies fully outside one of the planes."""
        lo, hi = aabb.min, aabb.max
        for plane in self.planes:
            corner = Vector3(
                hi.x if plane.x >= 0.0 else lo.x,
                hi.y if plane.y >= 0.0 else lo.y,
                hi.z if plane.z >= 0.0 else lo.z,
            )
            if plane.distance(corner) < -EPSILON:
                return False
        return True

    def contains_obb(self, aabb: BoundingBox, transform: Matrix) -> bool:
        """True unless the box, placed by ``transform``, lies fully outside a plane."""
        center = transform.transform_point(aabb.center())
        extent = (aabb.max - aabb.min) * 0.5
        axes = [transform.axis(i) for i in range(3)]
        for plane in self.planes:
            normal = plane.normal
            radius = sum(abs(normal.dot(axis)) * e for axis, e in zip(axes, extent))
            if plane.distance(center) + radius < -EPSILON:
                return False
        return True


def frustum_bounding_box(view_projection: Matrix) -> BoundingBox:
    """World-space axis-aligned box enclosing the frustum of a view-projection matrix.

    Raises ValueError when the matrix cannot be inverted.
    """
    inv = view_projection.inverted().values
    points = []
    for cx, cy, cz in _CLIP_CORNERS:
        x = cx * inv[0] + cy * inv[4] + cz * inv[8] + inv[12]
        y = cx * inv[1] + cy * inv[5] + cz * inv[9] + inv[13]
        z = cx * inv[2] + cy * inv[6] + cz * inv[10] + inv[14]
        w = cx * inv[3] + cy * inv[7] + cz * inv[11] + inv[15]
        if abs(w) > 1e-6:
            x, y, z = x / w, y / w, z / w
        points.append((x, y, z))
    xs, ys, zs = zip(*points)
    return BoundingBox(
        Vector3(min(xs), min(ys), min(zs)),
        Vector3(max(xs), max(ys), max(zs)),
    )