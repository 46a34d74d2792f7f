import math
import numpy as np

EPSILON = 1.0e-3

class Vector3:
    """
    A 3D vector with value semantics.

    Arithmetic returns new vectors, except the in-place accumulate operators
    `+=` and `-=`. Equality compares component-wise within `EPSILON`.
    """
    __slots__ = ('x', 'y', 'z')

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    @classmethod
    def from_array(cls, arr) -> 'Vector3':
        """Creates a Vector3 from any length-3 sequence or array."""
        x, y, z = np.asarray(arr, dtype=float).reshape(3)
        return cls(x, y, z)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    def __array__(self, dtype=None, copy=None):
        arr = self.to_array()
        return arr if dtype is None else arr.astype(dtype)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __repr__(self):
        return f"Vector3({self.x:.6g}, {self.y:.6g}, {self.z:.6g})"

    def __add__(self, other: 'Vector3') -> 'Vector3':
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __iadd__(self, other: 'Vector3') -> 'Vector3':
        self.x += other.x
        self.y += other.y
        self.z += other.z
        return self

    def __sub__(self, other: 'Vector3') -> 'Vector3':
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __isub__(self, other: 'Vector3') -> 'Vector3':
        self.x -= other.x
        self.y -= other.y
        self.z -= other.z
        return self

    def __neg__(self) -> 'Vector3':
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, c: float) -> 'Vector3':
        return Vector3(self.x * c, self.y * c, self.z * c)

    __rmul__ = __mul__

    def __truediv__(self, c: float) -> 'Vector3':
        # Division by zero yields the zero vector instead of raising.
        if c == 0:
            return Vector3(0.0, 0.0, 0.0)
        return Vector3(self.x / c, self.y / c, self.z / c)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return (abs(self.x - other.x) < EPSILON
                and abs(self.y - other.y) < EPSILON
                and abs(self.z - other.z) < EPSILON)

    __hash__ = None

    def dot(self, other: 'Vector3') -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: 'Vector3') -> 'Vector3':
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def norm(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def dist(self, other: 'Vector3') -> float:
        return (self - other).norm()

    def normalize(self) -> 'Vector3':
        """Returns the unit vector, or the zero vector when the norm is zero."""
        return self / self.norm()

    def copy(self) -> 'Vector3':
        return Vector3(self.x, self.y, self.z)

X = Vector3(1, 0, 0)
Y = Vector3(0, 1, 0)
Z = Vector3(0, 0, 1)

def normalize_rows(v: np.ndarray) -> np.ndarray:
    """
    Normalizes an array of vectors of shape (..., 3) along the last axis.

    Rows with zero length stay zero, matching `Vector3.normalize`.
    """
    length = np.linalg.norm(v, axis=-1, keepdims=True)
    return np.divide(v, length, out=np.zeros_like(v, dtype=float), where=length != 0)
