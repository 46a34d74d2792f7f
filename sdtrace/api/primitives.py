import numpy as np
from .core import SDFNode

def _vec3(value, name):
    arr = np.asarray(value, dtype=float).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"'{name}' must have exactly 3 components, got {arr.size}.")
    return arr

# --- Primitive Classes ---

class Sphere(SDFNode):
    def __init__(self, center=(0.0, 0.0, 0.0), radius: float = 1.0):
        super().__init__()
        self.center = _vec3(center, 'center')
        self.radius = float(radius)

def sphere(radius: float = 1.0, center=(0.0, 0.0, 0.0)) -> SDFNode:
    """
    Creates a sphere.

    Args:
        radius (float, optional): The radius of the sphere. Defaults to 1.0.
        center (tuple, optional): The center of the sphere. Defaults to the origin.
    """
    return Sphere(center, radius)

class Box(SDFNode):
    """An axis-aligned box spanning `origin` to `origin + size`."""
    def __init__(self, origin=(0.0, 0.0, 0.0), size=(1.0, 1.0, 1.0)):
        super().__init__()
        self.origin = _vec3(origin, 'origin')
        self.size = _vec3(size, 'size')

    @property
    def corner(self) -> np.ndarray:
        """The corner opposite to `origin`."""
        return self.origin + self.size

def box(size=1.0, origin=(0.0, 0.0, 0.0)) -> SDFNode:
    """
    Creates an axis-aligned box with one corner at `origin`.

    Args:
        size (float or tuple, optional): The extents of the box. If a float,
                                         creates a cube. If a tuple, specifies
                                         (width, depth, height) along x, y, z.
                                         Defaults to 1.0.
        origin (tuple, optional): The minimum corner of the box. Defaults to the origin.
    """
    if isinstance(size, (int, float)):
        size = (size, size, size)
    return Box(origin=origin, size=tuple(size))

def cube(length: float = 1.0, origin=(0.0, 0.0, 0.0)) -> SDFNode:
    """Creates an axis-aligned cube with edge `length` and minimum corner `origin`."""
    return Box(origin=origin, size=(length, length, length))

class Cylinder(SDFNode):
    def __init__(self, start=(0.0, 0.0, 0.0), end=(0.0, 0.0, 1.0), radius: float = 1.0):
        super().__init__()
        self.start = _vec3(start, 'start')
        self.end = _vec3(end, 'end')
        self.radius = float(radius)

def cylinder(start=(0.0, 0.0, 0.0), end=(0.0, 0.0, 1.0), radius: float = 1.0) -> SDFNode:
    """
    Creates a capped cylinder between two cap centers.

    Args:
        start (tuple): Center of the first cap.
        end (tuple): Center of the second cap.
        radius (float): Radius of the cylinder.
    """
    return Cylinder(start, end, radius)

class Torus(SDFNode):
    def __init__(self, radius_major: float = 1.0, radius_minor: float = 0.25):
        super().__init__()
        self.radius_major, self.radius_minor = float(radius_major), float(radius_minor)

def torus(radius_major: float = 1.0, radius_minor: float = 0.25) -> SDFNode:
    """
    Creates a torus centered at the origin, its ring lying in the XY plane.

    The distance is a first-order approximation of the torus polynomial, not
    an exact distance.

    Args:
        radius_major (float): Distance from the origin to the center of the tube.
        radius_minor (float): Radius of the tube itself.
    """
    return Torus(radius_major, radius_minor)

class Quadric(SDFNode):
    """
    The implicit surface ax^2 + by^2 + cz^2 + dxy + eyz + fzx + gx + hy + iz + j = 0.
    """
    def __init__(self, coefficients):
        super().__init__()
        coefficients = np.asarray(coefficients, dtype=float).reshape(-1)
        if coefficients.shape != (10,):
            raise ValueError(f"A quadric needs exactly 10 coefficients, got {coefficients.size}.")
        self.coefficients = coefficients

def quadric(a, b, c, d=0.0, e=0.0, f=0.0, g=0.0, h=0.0, i=0.0, j=0.0) -> SDFNode:
    """
    Creates a general quadric surface from its ten coefficients.

    The distance is a first-order approximation (value over gradient length),
    so it is only close to the true distance near the surface.
    """
    return Quadric((a, b, c, d, e, f, g, h, i, j))

def ellipsoid(radii=(1.0, 1.0, 1.0)) -> SDFNode:
    """Creates an origin-centered ellipsoid as the quadric x^2/rx^2 + y^2/ry^2 + z^2/rz^2 - 1."""
    rx, ry, rz = _vec3(radii, 'radii')
    return quadric(1.0 / rx**2, 1.0 / ry**2, 1.0 / rz**2, j=-1.0)
