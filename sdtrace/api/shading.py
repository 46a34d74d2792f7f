import numpy as np
from .vector import normalize_rows

BACKGROUND = (255, 255, 255)

def matcap_shade(image: np.ndarray, matcap: np.ndarray, directions: np.ndarray, normals: np.ndarray,
                 hit: np.ndarray, background=BACKGROUND) -> np.ndarray:
    """
    Writes matcap colors for hit pixels and the background color elsewhere.

    The view ray is mirrored in z, reflected about the surface normal and
    pushed back by one unit in z; the x/y of the result, scaled by twice its
    length, picks the matcap texel (nearest sample).

    Args:
        image (np.ndarray): Output buffer of shape (H, W, 3), written in place.
        matcap (np.ndarray): Matcap image of shape (rows, cols, 3 or 4).
        directions (np.ndarray): Ray directions of shape (H, W, 3).
        normals (np.ndarray): Surface normals of shape (H, W, 3).
        hit (np.ndarray): Boolean hit mask of shape (H, W).
    """
    image[...] = background
    if not np.any(hit):
        return image

    rows, cols = matcap.shape[:2]
    d = directions[hit] * np.array([1.0, 1.0, -1.0])
    n = normals[hit]
    r = d - 2.0 * np.sum(n * d, axis=-1)[:, None] * n
    r[:, 2] -= 1.0
    m = 2.0 * np.linalg.norm(r, axis=-1)

    with np.errstate(divide='ignore', invalid='ignore'):
        u = 1.0 - (r[:, 0] / m + 0.5)
        v = 1.0 - (r[:, 1] / m + 0.5)
    u = np.clip(np.nan_to_num(u, nan=0.5), 0.0, 1.0)
    v = np.clip(np.nan_to_num(v, nan=0.5), 0.0, 1.0)

    col = np.minimum(np.floor(u * cols + 0.5).astype(int), cols - 1)
    row = np.minimum(np.floor(v * rows + 0.5).astype(int), rows - 1)
    image[hit] = matcap[row, col, :3]
    return image

def shade_normals(image: np.ndarray, normals: np.ndarray, hit: np.ndarray, background=BACKGROUND) -> np.ndarray:
    """Maps hit normals from [-1, 1] to RGB."""
    image[...] = background
    image[hit] = np.clip((normals[hit] * 0.5 + 0.5) * 255.0, 0, 255).astype(np.uint8)
    return image

def shade_steps(image: np.ndarray, steps: np.ndarray, max_steps: int) -> np.ndarray:
    """Heatmap of marching cost: blue for cheap pixels, red for the step budget."""
    t = np.clip(steps / float(max(max_steps, 1)), 0.0, 1.0)
    image[..., 0] = (255.0 * t).astype(np.uint8)
    image[..., 1] = (255.0 * (1.0 - np.abs(2.0 * t - 1.0))).astype(np.uint8)
    image[..., 2] = (255.0 * (1.0 - t)).astype(np.uint8)
    return image

def default_matcap(size: int = 256, color=(90, 190, 110)) -> np.ndarray:
    """
    Generates a simple shaded-sphere matcap so rendering works without image files.

    Returns:
        np.ndarray: uint8 array of shape (size, size, 3).
    """
    coords = (np.arange(size) + 0.5) / size * 2.0 - 1.0
    x, y = np.meshgrid(coords, -coords)
    rho2 = np.minimum(x * x + y * y, 1.0)
    n = normalize_rows(np.stack([x, y, np.sqrt(1.0 - rho2)], axis=-1))

    light = normalize_rows(np.array([-0.4, 0.5, 0.75]))
    diffuse = np.clip(np.sum(n * light, axis=-1), 0.0, 1.0)
    half = normalize_rows(light + np.array([0.0, 0.0, 1.0]))
    specular = np.clip(np.sum(n * half, axis=-1), 0.0, 1.0) ** 40

    base = np.asarray(color, dtype=float) / 255.0
    shade = base * (0.25 + 0.75 * diffuse[..., None]) + 0.6 * specular[..., None]
    return (np.clip(shade, 0.0, 1.0) * 255.0).astype(np.uint8)
