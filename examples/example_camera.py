from sdtrace import *

def main():
    """
    Demonstrates a fixed camera and offscreen rendering.

    This example shows how to:
    - Return a tuple `(model, camera)` from the main function.
    - Render a frame to an image file without opening a window.
    """
    shape = torus(1.0, 0.3) | sphere(0.5)

    # Looking down at the torus from above and to the side
    cam = Camera(origin=(4, 0, 3), target=(0, 0, 0))

    return shape, cam

if __name__ == "__main__":
    shape, cam = main()
    shape.save_frame("result/torus.png", camera=cam, width=640, height=480, verbose=True)
    shape.save_frame("result/torus_normals.png", camera=cam, width=640, height=480, debug=Debug('normals'))
    shape.save_frame("result/torus_steps.png", camera=cam, width=640, height=480, debug=Debug('steps'))
