import pytest
import numpy as np
from sdtrace import torus, Camera, Vector3
from sdtrace.api.tracer import sphere_trace, trace_ray, MAX_STEP, FINISH_MINIMUM

def test_sphere_hit_through_the_center(unit_sphere):
    hit, point, steps = trace_ray(unit_sphere, (5, 0, 0), (-1, 0, 0))
    assert hit
    assert point.dist(Vector3(1, 0, 0)) <= FINISH_MINIMUM
    assert steps < MAX_STEP

def test_ray_pointing_away_escapes(unit_sphere):
    hit, _, steps = trace_ray(unit_sphere, (5, 0, 0), (1, 0, 0))
    assert not hit
    assert steps < MAX_STEP

def test_ray_passing_beside_misses(unit_sphere):
    hit, _, _ = trace_ray(unit_sphere, (5, 2, 0), (-1, 0, 0))
    assert not hit

def test_origin_inside_model_is_a_miss(unit_sphere):
    hit, _, steps = trace_ray(unit_sphere, (0, 0, 0), (1, 0, 0))
    assert not hit
    assert steps == 0

def test_exhausted_step_budget_is_a_miss():
    t = torus(1.0, 0.25)
    hit, _, steps = trace_ray(t, (5, 0, 0), (-1, 0, 0), max_steps=1)
    assert not hit
    assert steps == 1

def test_approximate_torus_converges():
    t = torus(1.0, 0.25)
    hit, point, steps = trace_ray(t, (5, 0, 0), (-1, 0, 0))
    assert hit
    assert point.x == pytest.approx(1.25, abs=1e-2)
    assert steps < MAX_STEP

def test_frame_trace(unit_sphere):
    cam = Camera.home()
    rays = cam.ray_directions(16, 16)
    result = sphere_trace(unit_sphere, cam.origin, rays)

    assert result.hit.shape == (16, 16)
    assert result.normals.shape == (16, 16, 3)
    assert result.steps.shape == (16, 16)
    assert result.hit[8, 8]
    assert not result.hit[0, 0]
    assert result.hit_count == np.count_nonzero(result.hit)

    hit_normals = result.normals[result.hit]
    assert np.allclose(np.linalg.norm(hit_normals, axis=-1), 1.0)
    assert np.all(result.normals[~result.hit] == 0.0)
    # Hit points sit on the sphere.
    assert np.allclose(np.linalg.norm(result.points[result.hit], axis=-1), 1.0, atol=FINISH_MINIMUM)

def test_frame_normals_face_the_camera(unit_sphere):
    cam = Camera.home()
    rays = cam.ray_directions(12, 12)
    result = sphere_trace(unit_sphere, cam.origin, rays)
    facing = np.sum(result.normals[result.hit] * rays[result.hit], axis=-1)
    assert np.all(facing < 0.0)
