import pytest

from r3dkit.billboard import billboard_front, billboard_y
from r3dkit.geometry import Matrix, Vector3


def _inv_view(eye, target=Vector3(0.0, 0.0, 0.0)):
    return Matrix.look_at(eye, target, Vector3(0.0, 1.0, 0.0)).inverted()


def test_front_copies_camera_basis_and_keeps_scale():
    model = Matrix.scale(2.0, 3.0, 4.0) @ Matrix.translate(5.0, 6.0, 7.0)
    inv_view = _inv_view(Vector3(3.0, 4.0, 5.0))
    result = billboard_front(model, inv_view)
    for i in range(3):
        assert result.axis(i).length() == pytest.approx(model.axis(i).length())
        assert tuple(result.axis(i).normalized()) == pytest.approx(
            tuple(inv_view.axis(i).normalized()), abs=1e-9
        )
    assert result.translation == model.translation
    assert result[3] == model[3] and result[15] == model[15]


def test_front_with_identity_view_keeps_axis_aligned_model():
    model = Matrix.scale(2.0, 3.0, 4.0)
    assert billboard_front(model, Matrix.identity()) == model


def test_y_billboard_faces_camera():
    model = Matrix.scale(1.5, 2.0, 0.5) @ Matrix.translate(1.0, 0.0, 2.0)
    eye = Vector3(4.0, 3.0, -1.0)
    result = billboard_y(model, _inv_view(eye))
    to_camera = eye - model.translation

    right = result.axis(0).normalized()
    up = result.axis(1).normalized()
    front = result.axis(2).normalized()

    assert tuple(up) == pytest.approx(tuple(model.axis(1).normalized()))
    assert right.dot(to_camera) == pytest.approx(0.0, abs=1e-9)
    assert front.dot(to_camera) > 0.0
    assert right.dot(up) == pytest.approx(0.0, abs=1e-9)
    assert front.dot(up) == pytest.approx(0.0, abs=1e-9)
    assert right.dot(front) == pytest.approx(0.0, abs=1e-9)
    for i in range(3):
        assert result.axis(i).length() == pytest.approx(model.axis(i).length())
    assert result.translation == model.translation


def test_y_billboard_with_camera_at_model_position_collapses():
    model = Matrix.translate(1.0, 2.0, 3.0)
    inv_view = Matrix.translate(1.0, 2.0, 3.0)
    result = billboard_y(model, inv_view)
    zero = Vector3(0.0, 0.0, 0.0)
    assert result.axis(0) == zero
    assert result.axis(2) == zero
    assert result.axis(1) == model.axis(1)