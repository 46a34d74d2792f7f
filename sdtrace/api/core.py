import numpy as np
from abc import ABC
from .vector import Vector3

def _as_points(p) -> np.ndarray:
    """Converts a Vector3, a sequence or an array of points into a float array of shape (..., 3)."""
    arr = np.asarray(p, dtype=float)
    if arr.shape[-1:] != (3,):
        raise ValueError(f"Expected points with a trailing dimension of 3, got shape {arr.shape}.")
    return arr


class SDFNode(ABC):
    """
    Abstract base class for all SDF models.

    A model answers two questions about a point: the signed distance to its
    surface (`distance`, negative inside) and the unit surface normal
    (`normal`, only meaningful at or near the surface). Both accept a single
    point (a `Vector3` or any length-3 sequence) or an array of points with
    shape (..., 3), and are evaluated through the vectorized backend in
    `sdtrace.api.cpu`.
    """

    def __init__(self):
        super().__init__()
        self._distance_fn = None
        self._normal_fn = None

    def to_callable(self):
        """
        Returns a Python function that takes a NumPy array of points (..., 3)
        and returns an array of distances (...).
        """
        if self._distance_fn is None:
            from .cpu import get_callable
            self._distance_fn = get_callable(self)
        return self._distance_fn

    def to_normal_callable(self):
        """
        Returns a Python function that takes a NumPy array of points (..., 3)
        and returns an array of unit normals (..., 3).
        """
        if self._normal_fn is None:
            from .cpu import get_normal_callable
            self._normal_fn = get_normal_callable(self)
        return self._normal_fn

    def distance(self, p):
        """Signed distance from `p` to the surface."""
        d = self.to_callable()(_as_points(p))
        if np.ndim(d) == 0:
            return float(d)
        return d

    def normal(self, p):
        """Surface normal at `p`. Returns a Vector3 when `p` is a Vector3."""
        n = self.to_normal_callable()(_as_points(p))
        if isinstance(p, Vector3):
            return Vector3.from_array(n)
        return n

    def union(self, other: 'SDFNode') -> 'SDFNode':
        """Combines this model with another, keeping the space covered by either."""
        from .operations import Union
        return Union(self, _check_node(other))

    def intersection(self, other: 'SDFNode') -> 'SDFNode':
        """Keeps only the space covered by both models."""
        from .operations import Intersection
        return Intersection(self, _check_node(other))

    def difference(self, other: 'SDFNode') -> 'SDFNode':
        """Carves `other` out of this model."""
        from .operations import Difference
        return Difference(self, _check_node(other))

    def __or__(self, other): return self.union(other)
    def __and__(self, other): return self.intersection(other)
    def __sub__(self, other): return self.difference(other)

    def render(self, matcap=None, camera=None, debug=None, **kwargs):
        """Opens the interactive viewer on this model."""
        from .viewer import show
        return show(self, matcap=matcap, camera=camera, debug=debug, **kwargs)

    def save_frame(self, path, matcap=None, camera=None, width=512, height=512, debug=None, verbose=False):
        """Renders a single frame offscreen and saves it to an image file."""
        from .io import save_frame as save_frame_func
        return save_frame_func(self, path, matcap=matcap, camera=camera, width=width, height=height,
                               debug=debug, verbose=verbose)


def _check_node(obj) -> SDFNode:
    if not isinstance(obj, SDFNode):
        raise TypeError(f"Boolean operations require an SDF model, got {type(obj).__name__}.")
    return obj
