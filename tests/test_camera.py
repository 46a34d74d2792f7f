import pytest
import numpy as np
from sdtrace import Camera, Vector3

def test_camera_instantiation():
    cam = Camera(origin=(1, 2, 3), target=(0, 0, 1), real_height=4.0)
    assert cam.origin == Vector3(1, 2, 3)
    assert cam.target == Vector3(0, 0, 1)
    assert cam.real_height == 4.0
    assert cam.view_vector == Vector3(-1, -2, -2)

def test_home_camera():
    cam = Camera.home()
    assert cam.origin == Vector3(3, 3, 3)
    assert cam.target == Vector3(0, 0, 0)

def test_copy_is_independent():
    cam = Camera.home()
    snapshot = cam.copy()
    cam.origin += Vector3(1, 0, 0)
    assert snapshot.origin == Vector3(3, 3, 3)

def test_basis_is_orthonormal(home_camera):
    right, up, view = home_camera.basis()
    for v in (right, up, view):
        assert v.norm() == pytest.approx(1.0)
    assert right.dot(up) == pytest.approx(0.0, abs=1e-12)
    assert right.dot(view) == pytest.approx(0.0, abs=1e-12)
    assert up.dot(view) == pytest.approx(0.0, abs=1e-12)
    assert right.z == 0.0
    assert view == Vector3(-1, -1, -1).normalize()

def test_basis_looking_straight_down():
    right, up, view = Camera(origin=(0, 0, 5), target=(0, 0, 0)).basis()
    assert right == Vector3(1, 0, 0)
    assert view == Vector3(0, 0, -1)
    assert up == Vector3(0, 1, 0)

def test_ray_field_shape_and_unit_length(home_camera):
    rays = home_camera.ray_directions(width=8, height=6)
    assert rays.shape == (6, 8, 3)
    assert np.allclose(np.linalg.norm(rays, axis=-1), 1.0)

def test_ray_field_is_idempotent(home_camera):
    first = home_camera.ray_directions(16, 12)
    second = home_camera.ray_directions(16, 12)
    assert np.array_equal(first, second)

def test_center_pixel_looks_at_target(home_camera):
    rays = home_camera.ray_directions(16, 12)
    _, _, view = home_camera.basis()
    assert np.allclose(rays[6, 8], view.to_array())

def test_ray_field_spans_real_height():
    cam = Camera(origin=(0, -10, 0), target=(0, 0, 0), real_height=4.0)
    rays = cam.ray_directions(4, 4)
    right, up, _ = cam.basis()
    # Rays cross the target plane y = 0 half the real height away from the target.
    top = cam.origin.to_array() + rays[0, 2] * (10.0 / rays[0, 2][1])
    assert np.allclose(top, (up * -2.0).to_array())
    left = cam.origin.to_array() + rays[2, 0] * (10.0 / rays[2, 0][1])
    assert np.allclose(left, (right * -2.0).to_array())
