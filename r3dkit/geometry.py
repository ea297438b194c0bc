"""Small vector, bounding-box and 4x4 matrix types used by the renderer helpers.

Matrices are stored as sixteen floats indexed ``m0`` .. ``m15`` in column-major
order: ``m0..m3`` is the first column and ``m12, m13, m14`` hold the translation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Sequence

_IDENTITY: tuple[float, ...] = (
    1.0, 0.0, 0.0, 0.0,
    0.0, 1.0, 0.0, 0.0,
    0.0, 0.0, 1.0, 0.0,
    0.0, 0.0, 0.0, 1.0,
)


@dataclass(frozen=True)
class Vector3:
    """An immutable 3D vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> Vector3:
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return Vector3(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        return math.sqrt(self.length_sqr())

    def length_sqr(self) -> float:
        return self.dot(self)

    def normalized(self) -> Vector3:
        """Unit vector in the same direction; a zero vector is returned unchanged."""
        length = self.length()
        if length == 0.0:
            return self
        return self * (1.0 / length)


@dataclass(frozen=True)
class BoundingBox:
    """An axis-aligned box given by its minimum and maximum corners."""

    min: Vector3
    max: Vector3

    def center(self) -> Vector3:
        return (self.min + self.max) * 0.5

    def corners(self) -> tuple[Vector3, ...]:
        """The eight corners, x varying fastest, then y, then z."""
        lo, hi = self.min, self.max
        return tuple(
            Vector3(x, y, z)
            for z in (lo.z, hi.z)
            for y in (lo.y, hi.y)
            for x in (lo.x, hi.x)
        )


@dataclass(frozen=True)
class Matrix:
    """An immutable 4x4 matrix of sixteen floats in ``m0`` .. ``m15`` order."""

    values: tuple[float, ...] = _IDENTITY

    def __post_init__(self) -> None:
        values = tuple(float(v) for v in self.values)
        if len(values) != 16:
            raise ValueError(f"a matrix needs 16 values, got {len(values)}")
        object.__setattr__(self, "values", values)

    def __getitem__(self, index: int) -> float:
        return self.values[index]

    @classmethod
    def identity(cls) -> Matrix:
        return cls(_IDENTITY)

    @classmethod
    def translate(cls, x: float, y: float, z: float) -> Matrix:
        return cls((
            1.0, 0.0, 0.0, 0.0,
            0.0, 1.0, 0.0, 0.0,
            0.0, 0.0, 1.0, 0.0,
            x, y, z, 1.0,
        ))

    @classmethod
    def scale(cls, x: float, y: float, z: float) -> Matrix:
        return cls((
            x, 0.0, 0.0, 0.0,
            0.0, y, 0.0, 0.0,
            0.0, 0.0, z, 0.0,
            0.0, 0.0, 0.0, 1.0,
        ))

    @classmethod
    def look_at(cls, eye: Vector3, target: Vector3, up: Vector3) -> Matrix:
        """A right-handed view matrix looking from ``eye`` towards ``target``."""
        vz = (eye - target).normalized()
        vx = up.cross(vz).normalized()
        vy = vz.cross(vx)
        return cls((
            vx.x, vy.x, vz.x, 0.0,
            vx.y, vy.y, vz.y, 0.0,
            vx.z, vy.z, vz.z, 0.0,
            -vx.dot(eye), -vy.dot(eye), -vz.dot(eye), 1.0,
        ))

    @classmethod
    def ortho(
        cls, left: float, right: float, bottom: float, top: float, near: float, far: float
    ) -> Matrix:
        rl = right - left
        tb = top - bottom
        fn = far - near
        return cls((
            2.0 / rl, 0.0, 0.0, 0.0,
            0.0, 2.0 / tb, 0.0, 0.0,
            0.0, 0.0, -2.0 / fn, 0.0,
            -(left + right) / rl, -(top + bottom) / tb, -(far + near) / fn, 1.0,
        ))

    @classmethod
    def perspective(cls, fovy: float, aspect: float, near: float, far: float) -> Matrix:
        """A perspective projection; ``fovy`` is the vertical field of view in radians."""
        top = near * math.tan(fovy * 0.5)
        bottom = -top
        right = top * aspect
        left = -right
        rl = right - left
        tb = top - bottom
        fn = far - near
        return cls((
            near * 2.0 / rl, 0.0, 0.0, 0.0,
            0.0, near * 2.0 / tb, 0.0, 0.0,
            (right + left) / rl, (top + bottom) / tb, -(far + near) / fn, -1.0,
            0.0, 0.0, -(far * near * 2.0) / fn, 0.0,
        ))

    def __matmul__(self, other: Matrix) -> Matrix:
        """Compose two transforms: ``a @ b`` applies ``a`` first, then ``b``."""
        if not isinstance(other, Matrix):
            return NotImplemented
        a, b = self.values, other.values
        return Matrix(tuple(
            sum(a[4 * i + k] * b[4 * k + j] for k in range(4))
            for i in range(4)
            for j in range(4)
        ))

    def inverted(self) -> Matrix:
        """The inverse matrix; raises ValueError when the matrix is singular."""
        rows = [
            list(self.values[4 * i:4 * i + 4]) + [1.0 if i == j else 0.0 for j in range(4)]
            for i in range(4)
        ]
        for col in range(4):
            pivot_row = max(range(col, 4), key=lambda r: abs(rows[r][col]))
            pivot = rows[pivot_row][col]
            if pivot == 0.0:
                raise ValueError("matrix is singular")
            rows[col], rows[pivot_row] = rows[pivot_row], rows[col]
            rows[col] = [v / pivot for v in rows[col]]
            for r in range(4):
                if r != col:
                    factor = rows[r][col]
                    if factor:
                        rows[r] = [v - factor * p for v, p in zip(rows[r], rows[col])]
        return Matrix(tuple(v for row in rows for v in row[4:]))

    def transposed(self) -> Matrix:
        v = self.values
        return Matrix(tuple(v[4 * j + i] for i in range(4) for j in range(4)))

    def transform_point(self, point: Vector3) -> Vector3:
        """Apply the matrix to a point (w = 1) without a perspective divide."""
        m = self.values
        x, y, z = point
        return Vector3(
            m[0] * x + m[4] * y + m[8] * z + m[12],
            m[1] * x + m[5] * y + m[9] * z + m[13],
            m[2] * x + m[6] * y + m[10] * z + m[14],
        )

    def axis(self, index: int) -> Vector3:
        """The first three components of column ``index`` (0, 1 or 2 for the basis)."""
        m = self.values
        return Vector3(m[4 * index], m[4 * index + 1], m[4 * index + 2])

    @property
    def translation(self) -> Vector3:
        return Vector3(self.values[12], self.values[13], self.values[14])

    def is_identity(self) -> bool:
        """True only for an exact identity; a negative zero does not count as zero."""
        return all(
            v == e and math.copysign(1.0, v) > 0.0
            for v, e in zip(self.values, _IDENTITY)
        )


def matrix_from_sequence(values: Sequence[float]) -> Matrix:
    """Build a matrix from any sequence of sixteen floats."""
    return Matrix(tuple(values))