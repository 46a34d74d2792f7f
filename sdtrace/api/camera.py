import numpy as np
from .vector import Vector3, normalize_rows

REAL_HEIGHT = 5.0
HOME_ORIGIN = (3.0, 3.0, 3.0)
HOME_TARGET = (0.0, 0.0, 0.0)

class Camera:
    """A look-at camera defined by where it is and what it looks at."""

    def __init__(self, origin=HOME_ORIGIN, target=HOME_TARGET, real_height: float = REAL_HEIGHT):
        """
        Initializes the camera.

        The render pipeline reads a camera but never mutates it; interactive
        gestures build a new camera on every completed drag.

        Args:
            origin (tuple or Vector3, optional): The position of the camera.
                                                 Defaults to (3, 3, 3).
            target (tuple or Vector3, optional): The point the camera is looking at.
                                                 Defaults to the origin.
            real_height (float, optional): The world-space height spanned by the
                                           image around the target. Defaults to 5.0.

        Example:
            >>> from sdtrace import sphere, Camera
            >>> cam = Camera(origin=(6, 0, 2), target=(0, 0, 0))
            >>> sphere(1.0).save_frame("sphere.png", camera=cam)
        """
        self.origin = Vector3.from_array(origin)
        self.target = Vector3.from_array(target)
        self.real_height = float(real_height)

    @classmethod
    def home(cls) -> 'Camera':
        """The camera the viewer starts from and returns to on reset."""
        return cls(HOME_ORIGIN, HOME_TARGET)

    def copy(self) -> 'Camera':
        return Camera(self.origin, self.target, self.real_height)

    def __repr__(self):
        return f"Camera(origin={self.origin!r}, target={self.target!r})"

    @property
    def view_vector(self) -> Vector3:
        """The unnormalized vector from origin to target."""
        return self.target - self.origin

    def basis(self):
        """
        Returns the orthonormal (right, up, view) camera basis.

        `right` is horizontal; looking straight up or down falls back to the
        x axis.
        """
        view = self.view_vector.normalize()
        if view.x != 0 or view.y != 0:
            right = Vector3(-view.y, view.x, 0.0).normalize()
        else:
            right = Vector3(1.0, 0.0, 0.0)
        up = right.cross(view).normalize()
        return right, up, view

    def ray_directions(self, width: int, height: int) -> np.ndarray:
        """
        Derives the unit ray direction of every pixel.

        Row `i` and column `j` aim at the target offset by a symmetric
        fraction of the world-space image extent along up and right.

        Returns:
            np.ndarray: Array of shape (height, width, 3).
        """
        right, up, _ = self.basis()
        real_w = self.real_height * width / height
        h_offset = self.real_height * (np.arange(height) - height // 2) / height
        w_offset = real_w * (np.arange(width) - width // 2) / width

        screen = (self.target.to_array()
                  + up.to_array() * h_offset[:, None, None]
                  + right.to_array() * w_offset[None, :, None])
        return normalize_rows(screen - self.origin.to_array())
