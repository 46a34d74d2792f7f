import math
from .camera import Camera
from .vector import Vector3

PRIMARY = 'primary'
SECONDARY = 'secondary'
PRESS = 'press'
RELEASE = 'release'

PAN = 'pan'
SCALE = 'scale'
ROTATE = 'rotate'

# Rotation drags shorter than this many pixels count as clicks.
DEADZONE = 10

class GestureEvent:
    """A pointer button press or release at a pixel position."""
    def __init__(self, kind: str, button: str, x: float, y: float, shift: bool = False):
        self.kind = kind
        self.button = button
        self.x = x
        self.y = y
        self.shift = shift

    def __repr__(self):
        return f"GestureEvent({self.kind!r}, {self.button!r}, {self.x}, {self.y}, shift={self.shift})"

class Dragging:
    """The gesture in progress: its mode, the button that started it and the press position."""
    def __init__(self, mode: str, button: str, anchor):
        self.mode = mode
        self.button = button
        self.anchor = anchor

    def __repr__(self):
        return f"Dragging({self.mode!r}, anchor={self.anchor})"

# --- Camera math ---

def rotate_about_axis(axis: Vector3, angle: float, v: Vector3) -> Vector3:
    """Rotates `v` about the unit vector `axis` by `angle` radians (Rodrigues' formula)."""
    c, s = math.cos(angle), math.sin(angle)
    return v * c + axis.cross(v) * s + axis * (axis.dot(v) * (1.0 - c))

def arcball_vector(x: float, y: float, width: int, height: int) -> Vector3:
    """
    Lifts a pixel onto the unit arcball sphere in camera space.

    Pixels inside the inscribed circle land on the front hemisphere; pixels
    outside snap to the nearest point on its rim.
    """
    v = Vector3(2.0 * x / width - 1.0, -(2.0 * y / height - 1.0), 0.0)
    rho2 = v.x * v.x + v.y * v.y
    if rho2 < 1.0:
        v.z = math.sqrt(1.0 - rho2)
        return v
    return v.normalize()

def pan(camera: Camera, x0, y0, x1, y1, width: int, height: int) -> Camera:
    """Translates origin and target together by the drag, measured in image fractions."""
    dx = (x1 - x0) / width
    dy = (y1 - y0) / height
    right, up, _ = camera.basis()
    offset = right * dx + up * dy
    return Camera(camera.origin - offset, camera.target - offset, camera.real_height)

def scale(camera: Camera, y0, y1, height: int) -> Camera:
    """Slides the target along the view vector by the vertical drag fraction; the origin stays."""
    dy = (y1 - y0) / height
    return Camera(camera.origin, camera.target + camera.view_vector * dy, camera.real_height)

def arcball_rotation(camera: Camera, x0, y0, x1, y1, width: int, height: int):
    """
    Converts a drag between two pixels into a world-space rotation.

    Both pixels are lifted onto the arcball; the rotation turns the first
    arcball point into the second, with its axis taken from camera space
    into world space through the camera basis.

    Returns:
        tuple or None: (axis, angle), or None when the drag stayed inside the
                       click deadzone or defines no rotation.
    """
    if (x1 - x0) ** 2 + (y1 - y0) ** 2 <= DEADZONE ** 2:
        return None

    v0 = arcball_vector(x0, y0, width, height)
    v1 = arcball_vector(x1, y1, width, height)
    alpha = math.acos(max(-1.0, min(1.0, v0.dot(v1))))

    a = v0.cross(v1)
    right, up, view = camera.basis()
    axis = (right * a.x + up * a.y + view * a.z).normalize()
    if axis.norm() == 0:
        return None
    return axis, alpha

def orbit(camera: Camera, x0, y0, x1, y1, width: int, height: int):
    """
    Orbits the camera origin around the fixed target following an arcball drag.

    Returns:
        Camera or None: The rotated camera, or None when the drag is a click.
    """
    rotation = arcball_rotation(camera, x0, y0, x1, y1, width, height)
    if rotation is None:
        return None
    axis, alpha = rotation
    rotated = rotate_about_axis(axis, alpha, camera.origin - camera.target)
    return Camera(camera.target + rotated, camera.target, camera.real_height)

# --- Gesture state machine ---

class InteractionController:
    """
    Turns press/release pairs into camera updates.

    The controller is idle or dragging. A press picks the mode: secondary
    button pans, primary with shift scales, primary alone rotates. The
    matching release applies the gesture, replaces `camera` and calls
    `on_change(camera)` once. Nothing happens while the pointer moves.
    """

    def __init__(self, camera: Camera = None, width: int = 512, height: int = 512, on_change=None):
        self.camera = camera if camera is not None else Camera.home()
        self.width = width
        self.height = height
        self.on_change = on_change
        self.drag = None

    @property
    def is_idle(self) -> bool:
        return self.drag is None

    def handle(self, event: GestureEvent) -> bool:
        """Dispatches an event; returns True when the camera changed."""
        if event.kind == PRESS:
            self.press(event.button, event.x, event.y, event.shift)
            return False
        if event.kind == RELEASE:
            return self.release(event.button, event.x, event.y, event.shift)
        raise ValueError(f"Unknown gesture event kind '{event.kind}'.")

    def press(self, button: str, x, y, shift: bool = False):
        if self.drag is not None:
            return
        if button == SECONDARY:
            mode = PAN
        elif button == PRIMARY:
            mode = SCALE if shift else ROTATE
        else:
            return
        self.drag = Dragging(mode, button, (x, y))

    def release(self, button: str, x, y, shift: bool = False) -> bool:
        drag = self.drag
        if drag is None or drag.button != button:
            return False
        self.drag = None

        x0, y0 = drag.anchor
        if drag.mode == PAN:
            camera = pan(self.camera, x0, y0, x, y, self.width, self.height)
        elif drag.mode == SCALE:
            camera = scale(self.camera, y0, y, self.height)
        else:
            camera = orbit(self.camera, x0, y0, x, y, self.width, self.height)

        if camera is None:
            return False
        self._set_camera(camera)
        return True

    def home(self):
        """Abandons any drag and returns the camera to its home position."""
        self.drag = None
        self._set_camera(Camera.home())

    def _set_camera(self, camera: Camera):
        self.camera = camera
        if self.on_change is not None:
            self.on_change(camera)
