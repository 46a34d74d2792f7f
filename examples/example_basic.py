from sdtrace import *

def main():
    """
    Demonstrates the basic concepts of sphere tracing an SDF model.

    This example shows how to:
    - Create primitive shapes like `box` and `sphere`.
    - Carve one shape out of another with the difference operator (`-`).
    - Open the interactive viewer: left drag orbits, shift + left drag
      scales, right drag pans, 'r' resets the camera, 's' saves a frame.
    """
    # A box with a corner at the origin, minus the unit sphere around it
    f = box((0.5, 1.0, 1.5)) - sphere(1.0)
    return f

if __name__ == "__main__":
    model = main()
    if model:
        # Pass a matcap image path to shade with your own capture,
        # e.g. model.render(matcap="matcap/green.png").
        model.render(watch=True)
