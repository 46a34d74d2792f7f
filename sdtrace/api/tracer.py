import numpy as np
from .core import SDFNode
from .vector import Vector3

MAX_STEP = 100
FINISH_MINIMUM = 0.001
FINISH_MAXIMUM = 100.0

class TraceResult:
    """Per-pixel outcome of one sphere-tracing pass."""
    def __init__(self, hit, points, normals, steps):
        self.hit = hit
        self.points = points
        self.normals = normals
        self.steps = steps

    @property
    def hit_count(self) -> int:
        return int(np.count_nonzero(self.hit))

    @property
    def total_steps(self) -> int:
        return int(np.sum(self.steps))


def sphere_trace(model: SDFNode, origin, directions, max_steps: int = MAX_STEP,
                 finish_minimum: float = FINISH_MINIMUM, finish_maximum: float = FINISH_MAXIMUM) -> TraceResult:
    """
    Marches rays from a shared origin through the model's distance field.

    Every ray advances by the current distance until it converges onto the
    surface (|d| <= finish_minimum), escapes (d >= finish_maximum), ends up
    inside the model, or runs out of steps. Only converged rays are hits.
    Rays are independent, so each step evaluates the model once for all rays
    still marching.

    Args:
        model (SDFNode): The model to trace.
        origin (tuple or Vector3): The common ray origin (the camera position).
        directions (np.ndarray): Unit ray directions of shape (..., 3).

    Returns:
        TraceResult: `hit` (...), `points` (..., 3), `normals` (..., 3, zero
                     where missed) and `steps` (...).
    """
    directions = np.asarray(directions, dtype=float)
    shape = directions.shape[:-1]
    rays = directions.reshape(-1, 3)
    origin = np.asarray(origin, dtype=float)

    sdf = model.to_callable()
    points = np.tile(origin, (len(rays), 1))
    dists = np.asarray(sdf(points), dtype=float).reshape(-1)
    steps = np.zeros(len(rays), dtype=int)
    marching = (dists > finish_minimum) & (dists < finish_maximum)

    for _ in range(max_steps):
        idx = np.flatnonzero(marching)
        if len(idx) == 0:
            break
        points[idx] += rays[idx] * dists[idx, None]
        dists[idx] = sdf(points[idx])
        steps[idx] += 1
        marching[idx] = (dists[idx] > finish_minimum) & (dists[idx] < finish_maximum)

    # Final advance onto the surface by the last measured distance.
    points += rays * np.nan_to_num(dists, nan=0.0, posinf=0.0, neginf=0.0)[:, None]
    hit = np.abs(dists) <= finish_minimum

    normals = np.zeros_like(points)
    if np.any(hit):
        normals[hit] = model.to_normal_callable()(points[hit])

    return TraceResult(
        hit=hit.reshape(shape),
        points=points.reshape(shape + (3,)),
        normals=normals.reshape(shape + (3,)),
        steps=steps.reshape(shape),
    )


def trace_ray(model: SDFNode, origin, direction, **kwargs):
    """
    Traces a single ray.

    Returns:
        tuple: (hit, point, steps) with `point` as a Vector3.
    """
    result = sphere_trace(model, origin, np.asarray(direction, dtype=float).reshape(1, 3), **kwargs)
    return bool(result.hit[0]), Vector3.from_array(result.points[0]), int(result.steps[0])
