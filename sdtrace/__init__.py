from .api.vector import Vector3, X, Y, Z
from .api.core import SDFNode
from .api.primitives import (
    sphere, box, cube, cylinder, torus, quadric, ellipsoid,
    Sphere, Box, Cylinder, Torus, Quadric
)
from .api.operations import Union, Intersection, Difference, union, intersection, difference
from .api.camera import Camera
from .api.debug import Debug
from .api.tracer import sphere_trace, trace_ray, TraceResult, MAX_STEP, FINISH_MINIMUM, FINISH_MAXIMUM
from .api.shading import matcap_shade, default_matcap
from .api.render import render, new_image
from .api.interaction import (
    InteractionController, GestureEvent, rotate_about_axis, arcball_vector, arcball_rotation,
    PRIMARY, SECONDARY, PRESS, RELEASE
)
from .api.io import load_matcap, save_image, save_frame
from .api.viewer import show
