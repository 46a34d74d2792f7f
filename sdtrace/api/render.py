import sys
import time
import numpy as np
from .core import SDFNode
from .camera import Camera
from .debug import Debug
from .tracer import sphere_trace, MAX_STEP
from .shading import matcap_shade, shade_normals, shade_steps, default_matcap

def new_image(width: int, height: int) -> np.ndarray:
    """Allocates an RGB pixel buffer of shape (height, width, 3)."""
    return np.zeros((height, width, 3), dtype=np.uint8)

def render(image: np.ndarray, model: SDFNode, matcap: np.ndarray = None, verbose: bool = False,
           camera: Camera = None, debug: Debug = None, **kwargs):
    """
    Renders a model into an RGB pixel buffer.

    The pass derives a ray per pixel from the camera, sphere traces all of
    them against the model and shades the hits with the matcap. It runs to
    completion before returning.

    Args:
        image (np.ndarray): uint8 buffer of shape (H, W, 3), written in place.
        model (SDFNode): The model to render.
        matcap (np.ndarray, optional): Matcap image. Defaults to a generated one.
        verbose (bool, optional): Print camera state, trace statistics and timing.
        camera (Camera, optional): The camera. Defaults to the home camera.
        debug (Debug, optional): Replace matcap shading by a debug visualization.
        **kwargs: Sphere tracing overrides (`max_steps`, `finish_minimum`, `finish_maximum`).

    Returns:
        TraceResult: The per-pixel trace of this pass.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an image buffer of shape (H, W, 3), got {image.shape}.")

    start = time.perf_counter()
    # The pass works on its own snapshot so the caller may replace the camera at any time.
    camera = camera.copy() if camera is not None else Camera.home()
    if verbose:
        print(f"INFO: camera origin: {camera.origin!r}", file=sys.stderr)
        print(f"INFO: camera target: {camera.target!r}", file=sys.stderr)

    height, width = image.shape[:2]
    directions = camera.ray_directions(width, height)
    result = sphere_trace(model, camera.origin, directions, **kwargs)

    if debug is not None and debug.mode == 'normals':
        shade_normals(image, result.normals, result.hit)
    elif debug is not None and debug.mode == 'steps':
        shade_steps(image, result.steps, kwargs.get('max_steps', MAX_STEP))
    else:
        if matcap is None:
            matcap = default_matcap()
        matcap_shade(image, matcap, directions, result.normals, result.hit)

    if verbose:
        elapsed = time.perf_counter() - start
        print(f"INFO: {result.hit_count}/{width * height} pixels hit, {result.total_steps} steps.", file=sys.stderr)
        print(f"INFO: time: {elapsed:.3f}s", file=sys.stderr)
    return result
