import sys
from pathlib import Path
import numpy as np
from skimage import io as skio
from skimage.color import gray2rgb
from skimage.util import img_as_ubyte

def as_matcap(img) -> np.ndarray:
    """Coerces a decoded image (grey, RGB or RGBA, any dtype) into an (rows, cols, 3) uint8 matcap."""
    img = np.asarray(img)
    if img.ndim == 2:
        img = gray2rgb(img)
    if img.ndim != 3 or img.shape[2] not in (3, 4):
        raise ValueError(f"Unsupported matcap image shape {img.shape}.")
    img = img[..., :3]
    if img.dtype != np.uint8:
        img = img_as_ubyte(img)
    return np.ascontiguousarray(img)

def load_matcap(path) -> np.ndarray:
    """
    Loads a matcap image from disk.

    Args:
        path (str or Path): Image file readable by scikit-image.

    Returns:
        np.ndarray: uint8 array of shape (rows, cols, 3).
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Matcap image '{path}' does not exist.")
    return as_matcap(skio.imread(str(path)))

def save_image(path, image: np.ndarray, verbose: bool = True):
    """Writes an RGB pixel buffer to an image file, creating parent folders as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    skio.imsave(str(path), image, check_contrast=False)
    if verbose:
        print(f"INFO: Saved frame to '{path}'.", file=sys.stderr)

def save_frame(model, path, matcap=None, camera=None, width: int = 512, height: int = 512,
               debug=None, verbose: bool = False):
    """
    Renders a single frame offscreen and writes it to `path`.

    Returns:
        np.ndarray: The rendered image.
    """
    from .render import new_image, render
    if isinstance(matcap, (str, Path)):
        matcap = load_matcap(matcap)
    image = new_image(width, height)
    render(image, model, matcap, camera=camera, verbose=verbose, debug=debug)
    save_image(path, image, verbose=verbose)
    return image
