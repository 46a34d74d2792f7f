import pytest
import numpy as np
from sdtrace import sphere, box, Camera

# Dependency checks
try:
    import glfw
    import moderngl
    WINDOW_SUPPORTED = True
except ImportError:
    WINDOW_SUPPORTED = False

requires_window_stack = pytest.mark.skipif(
    not WINDOW_SUPPORTED,
    reason="Requires glfw and moderngl."
)

@pytest.fixture
def unit_sphere():
    return sphere(radius=1.0)

@pytest.fixture
def home_camera():
    return Camera.home()

@pytest.fixture
def sample_points():
    """A reproducible cloud of points around the origin."""
    rng = np.random.default_rng(7)
    return rng.uniform(-2.0, 2.0, size=(256, 3))

@pytest.fixture
def checker_matcap():
    """A 4x4 matcap whose texel at (row, col) is (10*row, 10*col, 7)."""
    rows, cols = np.meshgrid(np.arange(4), np.arange(4), indexing='ij')
    return np.stack([rows * 10, cols * 10, np.full((4, 4), 7)], axis=-1).astype(np.uint8)

@pytest.fixture
def carved_box():
    """The default scene: a box with a corner at the origin minus the unit sphere."""
    return box((0.5, 1.0, 1.5)) - sphere(1.0)
