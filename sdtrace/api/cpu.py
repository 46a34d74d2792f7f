import numpy as np
from .vector import EPSILON, normalize_rows

# Every function below works on arrays of points with shape (..., 3): a single
# point of shape (3,) yields scalars, a frame of shape (N, 3) yields (N,).

# --- Primitives ---

def _sphere(node):
    c, r = node.center, node.radius
    return lambda p: np.linalg.norm(p - c, axis=-1) - r

def _sphere_normal(node):
    c = node.center
    return lambda p: normalize_rows(2.0 * (p - c))

def _box(node):
    lo, hi = node.origin, node.corner
    def func(p):
        d = np.maximum(p - hi, lo - p)
        inside = np.all(d < 0.0, axis=-1)
        return np.where(inside, np.max(d, axis=-1), np.linalg.norm(np.maximum(d, 0.0), axis=-1))
    return func

def _box_normal(node):
    lo, hi = node.origin, node.corner
    # Earlier faces take precedence where a point is close to several (edges, corners).
    faces = [
        (2, hi[2], (0.0, 0.0, 1.0)), (2, lo[2], (0.0, 0.0, -1.0)),
        (1, hi[1], (0.0, 1.0, 0.0)), (1, lo[1], (0.0, -1.0, 0.0)),
        (0, hi[0], (1.0, 0.0, 0.0)), (0, lo[0], (-1.0, 0.0, 0.0)),
    ]
    def func(p):
        out = np.zeros(p.shape)
        for axis, plane, n in reversed(faces):
            on_face = np.abs(p[..., axis] - plane) < EPSILON
            out = np.where(on_face[..., None], np.array(n), out)
        return out
    return func

def _cylinder_axis(node):
    a = node.start
    axis = node.end - node.start
    return a, axis, np.linalg.norm(axis), np.dot(axis, axis)

def _cylinder(node):
    a, axis, h, axis2 = _cylinder_axis(node)
    r = node.radius
    def func(p):
        t = np.sum((p - a) * axis, axis=-1) / axis2
        foot = a + t[..., None] * axis
        side = np.linalg.norm(p - foot, axis=-1) - r
        # Axial distance beyond the nearer cap, positive outside the slab.
        axial = np.where(t > 1.0, h * (t - 1.0), -h * t)
        within = np.where(side >= 0.0, side, np.maximum(side, np.maximum(-h * t, -h * (1.0 - t))))
        beyond = np.where(side >= 0.0, np.sqrt(side * side + axial * axial), axial)
        return np.where((t >= 0.0) & (t <= 1.0), within, beyond)
    return func

def _cylinder_normal(node):
    a, axis, h, axis2 = _cylinder_axis(node)
    u = axis / h
    helper = np.array([1.0, 0.0, 0.0]) if abs(u[0]) < 0.9 else np.array([0.0, 1.0, 0.0])
    n1 = np.cross(axis, helper)
    n1 /= np.linalg.norm(n1)
    n2 = np.cross(n1, axis)
    n2 /= np.linalg.norm(n2)
    # The side is the quadric (n1.q)^2 + (n2.q)^2 = r^2 with q = p - a; its gradient is 2Mq.
    m = 2.0 * (np.outer(n1, n1) + np.outer(n2, n2))
    def func(p):
        t = np.sum((p - a) * axis, axis=-1) / axis2
        side = normalize_rows((p - a) @ m)
        caps = np.where((t >= 1.0)[..., None], u, -u)
        return np.where(((t >= 1.0) | (t <= 0.0))[..., None], caps, side)
    return func

def _torus_terms(p, big_r, small_r):
    x, y, z = p[..., 0], p[..., 1], p[..., 2]
    s = x * x + y * y + z * z + big_r * big_r - small_r * small_r
    k = 4.0 * big_r * big_r
    f = s * s - k * (x * x + y * y)
    grad = np.stack([4.0 * x * s - 2.0 * k * x, 4.0 * y * s - 2.0 * k * y, 4.0 * z * s], axis=-1)
    return f, grad

def _torus(node):
    big_r, small_r = node.radius_major, node.radius_minor
    def func(p):
        f, grad = _torus_terms(p, big_r, small_r)
        with np.errstate(divide='ignore', invalid='ignore'):
            return f / np.linalg.norm(grad, axis=-1)
    return func

def _torus_normal(node):
    big_r, small_r = node.radius_major, node.radius_minor
    return lambda p: normalize_rows(_torus_terms(p, big_r, small_r)[1])

def _quadric_terms(p, coeffs):
    a, b, c, d, e, f, g, h, i, j = coeffs
    x, y, z = p[..., 0], p[..., 1], p[..., 2]
    value = a * x * x + b * y * y + c * z * z + d * x * y + e * y * z + f * z * x + g * x + h * y + i * z + j
    grad = np.stack([
        2.0 * a * x + d * y + f * z + g,
        2.0 * b * y + e * z + d * x + h,
        2.0 * c * z + f * x + e * y + i,
    ], axis=-1)
    return value, grad

def _quadric(node):
    coeffs = node.coefficients
    def func(p):
        value, grad = _quadric_terms(p, coeffs)
        with np.errstate(divide='ignore', invalid='ignore'):
            return value / np.linalg.norm(grad, axis=-1)
    return func

def _quadric_normal(node):
    coeffs = node.coefficients
    return lambda p: normalize_rows(_quadric_terms(p, coeffs)[1])

# --- Operations ---

def _union(fn_a, fn_b):
    return lambda p: np.minimum(fn_a(p), fn_b(p))

def _intersection(fn_a, fn_b):
    return lambda p: np.maximum(fn_a(p), fn_b(p))

def _difference(fn_a, fn_b):
    return lambda p: np.maximum(fn_a(p), -fn_b(p))

def _seam_normal(fn_a, fn_b, nrm_a, nrm_b):
    """
    Takes the normal of the child with the smaller signed distance at `p`.

    The same raw comparison serves all three booleans. It is a hard switch
    with no blending across the seam; ties go to `a`.
    """
    def func(p):
        use_b = fn_a(p) > fn_b(p)
        return np.where(use_b[..., None], nrm_b(p), nrm_a(p))
    return func

# --- Dispatch ---

def get_callable(node):
    """Builds the vectorized distance function for a model tree."""
    node_type = type(node).__name__

    if node_type == 'Sphere': return _sphere(node)
    if node_type == 'Box': return _box(node)
    if node_type == 'Cylinder': return _cylinder(node)
    if node_type == 'Torus': return _torus(node)
    if node_type == 'Quadric': return _quadric(node)

    if node_type == 'Union': return _union(node.a.to_callable(), node.b.to_callable())
    if node_type == 'Intersection': return _intersection(node.a.to_callable(), node.b.to_callable())
    if node_type == 'Difference': return _difference(node.a.to_callable(), node.b.to_callable())

    raise NotImplementedError(f"Node type '{node_type}' is not supported by the CPU backend.")

def get_normal_callable(node):
    """Builds the vectorized normal function for a model tree."""
    node_type = type(node).__name__

    if node_type == 'Sphere': return _sphere_normal(node)
    if node_type == 'Box': return _box_normal(node)
    if node_type == 'Cylinder': return _cylinder_normal(node)
    if node_type == 'Torus': return _torus_normal(node)
    if node_type == 'Quadric': return _quadric_normal(node)

    if node_type in ('Union', 'Intersection', 'Difference'):
        a, b = node.a, node.b
        return _seam_normal(a.to_callable(), b.to_callable(), a.to_normal_callable(), b.to_normal_callable())

    raise NotImplementedError(f"Node type '{node_type}' is not supported by the CPU backend.")
