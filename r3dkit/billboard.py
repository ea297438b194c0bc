"""Turn model matrices into billboards that face the camera."""

from __future__ import annotations

from r3dkit.geometry import Matrix, Vector3


def _with_axes(model: Matrix, x_axis: Vector3, y_axis: Vector3, z_axis: Vector3) -> Matrix:
    values = list(model.values)
    values[0:3] = x_axis
    values[4:7] = y_axis
    values[8:11] = z_axis
    return Matrix(tuple(values))


def billboard_front(model: Matrix, inv_view: Matrix) -> Matrix:
    """Align the model fully with the camera, keeping its scale and translation."""
    scales = [model.axis(i).length() for i in range(3)]
    return _with_axes(model, *(inv_view.axis(i) * s for i, s in enumerate(scales)))


def billboard_y(model: Matrix, inv_view: Matrix) -> Matrix:
    """Rotate the model about its own Y axis so it faces the camera position."""
    position = model.translation
    scale_x, scale_y, scale_z = (model.axis(i).length() for i in range(3))

    up = model.axis(1).normalized()
    look = (inv_view.translation - position).normalized()
    right = up.cross(look).normalized()
    front = right.cross(up).normalized()

    return _with_axes(model, right * scale_x, up * scale_y, front * scale_z)