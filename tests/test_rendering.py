import pytest
import numpy as np
from sdtrace import Camera, Debug, render, new_image, default_matcap
from sdtrace.api.shading import matcap_shade, shade_normals, shade_steps, BACKGROUND

def test_matcap_lookup_head_on(checker_matcap):
    image = new_image(2, 1)
    directions = np.array([[[0.0, 0.0, -1.0], [0.0, 0.0, -1.0]]])
    normals = np.array([[[0.0, 0.0, 1.0], [0.0, 0.0, 0.0]]])
    hit = np.array([[True, False]])
    matcap_shade(image, checker_matcap, directions, normals, hit)
    assert tuple(image[0, 0]) == (20, 20, 7)
    assert tuple(image[0, 1]) == BACKGROUND

def test_matcap_lookup_grazing(checker_matcap):
    image = new_image(1, 1)
    directions = np.array([[[1.0, 0.0, 0.0]]])
    normals = np.array([[[-1.0, 0.0, 0.0]]])
    matcap_shade(image, checker_matcap, directions, normals, np.array([[True]]))
    assert tuple(image[0, 0]) == (20, 30, 7)

def test_matcap_lookup_stays_in_bounds(checker_matcap):
    rng = np.random.default_rng(3)
    directions = rng.normal(size=(8, 8, 3))
    directions /= np.linalg.norm(directions, axis=-1, keepdims=True)
    normals = rng.normal(size=(8, 8, 3))
    normals /= np.linalg.norm(normals, axis=-1, keepdims=True)
    image = new_image(8, 8)
    matcap_shade(image, checker_matcap, directions, normals, np.ones((8, 8), dtype=bool))
    palette = {tuple(c) for c in checker_matcap.reshape(-1, 3)}
    assert {tuple(c) for c in image.reshape(-1, 3)} <= palette

def test_matcap_ignores_alpha(checker_matcap):
    rgba = np.concatenate([checker_matcap, np.full((4, 4, 1), 255, dtype=np.uint8)], axis=-1)
    image = new_image(1, 1)
    matcap_shade(image, rgba, np.array([[[0.0, 0.0, -1.0]]]), np.array([[[0.0, 0.0, 1.0]]]), np.array([[True]]))
    assert tuple(image[0, 0]) == (20, 20, 7)

def test_shade_normals():
    image = new_image(2, 1)
    normals = np.array([[[0.0, 0.0, 1.0], [0.0, 0.0, 0.0]]])
    shade_normals(image, normals, np.array([[True, False]]))
    assert tuple(image[0, 0]) == (127, 127, 255)
    assert tuple(image[0, 1]) == BACKGROUND

def test_shade_steps():
    image = new_image(2, 1)
    shade_steps(image, np.array([[0, 100]]), 100)
    assert tuple(image[0, 0]) == (0, 0, 255)
    assert tuple(image[0, 1]) == (255, 0, 0)

def test_default_matcap():
    m = default_matcap(64)
    assert m.shape == (64, 64, 3)
    assert m.dtype == np.uint8

def test_render_sphere(unit_sphere):
    image = new_image(32, 32)
    result = render(image, unit_sphere)
    assert result.hit[16, 16]
    assert tuple(image[0, 0]) == BACKGROUND
    assert tuple(image[16, 16]) != BACKGROUND

def test_render_uses_matcap(unit_sphere):
    flat = np.zeros((8, 8, 3), dtype=np.uint8)
    flat[...] = (10, 20, 30)
    image = new_image(16, 16)
    result = render(image, unit_sphere, flat)
    assert np.all(image[result.hit] == (10, 20, 30))
    assert np.all(image[~result.hit] == 255)

def test_render_does_not_mutate_camera(unit_sphere):
    cam = Camera(origin=(4, 1, 2))
    render(new_image(8, 8), unit_sphere, camera=cam)
    assert tuple(cam.origin) == (4.0, 1.0, 2.0)

def test_render_is_deterministic(carved_box):
    a, b = new_image(24, 24), new_image(24, 24)
    render(a, carved_box)
    render(b, carved_box)
    assert np.array_equal(a, b)
    assert np.any(a != 255)

def test_render_verbose_output(unit_sphere, capsys):
    render(new_image(8, 8), unit_sphere, verbose=True)
    err = capsys.readouterr().err
    assert "INFO: camera origin" in err
    assert "INFO: time:" in err

def test_render_positional_verbose(unit_sphere, capsys):
    result = render(new_image(8, 8), unit_sphere, default_matcap(16), True)
    assert result.hit[4, 4]
    err = capsys.readouterr().err
    assert "INFO: camera origin" in err
    assert "pixels hit" in err

def test_render_debug_modes(unit_sphere):
    normals_img = new_image(16, 16)
    render(normals_img, unit_sphere, debug=Debug('normals'))
    steps_img = new_image(16, 16)
    render(steps_img, unit_sphere, debug=Debug('steps'))
    assert not np.array_equal(normals_img, steps_img)

def test_unknown_debug_mode():
    with pytest.raises(ValueError):
        Debug('slice')

def test_render_rejects_bad_buffer(unit_sphere):
    with pytest.raises(ValueError):
        render(np.zeros((8, 8), dtype=np.uint8), unit_sphere)
