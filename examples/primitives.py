import sys
from sdtrace import sphere, box, cube, cylinder, torus, quadric, ellipsoid

def sphere_example():
    """The unit sphere."""
    return sphere(radius=1.0)

def box_example():
    """An axis-aligned box with one corner at the origin."""
    return box(size=(0.5, 1.0, 1.5))

def cylinder_example():
    """A capped cylinder along the diagonal."""
    return cylinder(start=(-0.5, -0.5, -0.5), end=(0.5, 0.5, 0.5), radius=0.4)

def torus_example():
    """A torus lying in the XY plane."""
    return torus(radius_major=1.0, radius_minor=0.3)

def quadric_example():
    """The ellipsoid x^2 + 2y^2 + 3z^2 = 1 written as a general quadric."""
    return quadric(1, 2, 3, j=-1)

def hyperboloid_example():
    """A one-sheet hyperboloid clipped to a cube."""
    return quadric(1, 1, -1, j=-0.25) & cube(2.0, origin=(-1, -1, -1))

def union_example():
    """A sphere and a box joined together."""
    return sphere(0.8) | box(1.0)

def intersection_example():
    """A lens made from two overlapping spheres."""
    return sphere(1.0, center=(-0.5, 0, 0)) & sphere(1.0, center=(0.5, 0, 0))

def difference_example():
    """An ellipsoid with a cylindrical hole."""
    return ellipsoid((1.2, 0.8, 0.8)) - cylinder((-2, 0, 0), (2, 0, 0), 0.4)

def main():
    examples = {
        "sphere": sphere_example,
        "box": box_example,
        "cylinder": cylinder_example,
        "torus": torus_example,
        "quadric": quadric_example,
        "hyperboloid": hyperboloid_example,
        "union": union_example,
        "intersection": intersection_example,
        "difference": difference_example,
    }

    if len(sys.argv) < 2:
        print("\nPlease provide the name of an example to run.")
        print("Available examples:")
        for key in examples:
            print(f"  - {key}")
        print(f"\nUsage: python {sys.argv[0]} <example_name> [width] [height]")
        return

    example_name = sys.argv[1]
    scene_func = examples.get(example_name)

    if not scene_func:
        print(f"\nError: Example '{example_name}' not found.")
        print("Available examples are:")
        for key in examples:
            print(f"  - {key}")
        return

    width = int(sys.argv[2]) if len(sys.argv) > 2 else 512
    height = int(sys.argv[3]) if len(sys.argv) > 3 else width

    print(f"Rendering: {example_name.replace('_', ' ').title()} Example")
    scene_func().render(width=width, height=height, watch=False)


if __name__ == "__main__":
    main()
