from .core import SDFNode

class Union(SDFNode):
    """Everything inside either child. The distance is `min(a, b)`."""
    def __init__(self, a: SDFNode, b: SDFNode):
        super().__init__()
        self.a = a
        self.b = b

class Intersection(SDFNode):
    """Everything inside both children. The distance is `max(a, b)`."""
    def __init__(self, a: SDFNode, b: SDFNode):
        super().__init__()
        self.a = a
        self.b = b

class Difference(SDFNode):
    """`a` with `b` carved out. The distance is `max(a, -b)`."""
    def __init__(self, a: SDFNode, b: SDFNode):
        super().__init__()
        self.a = a
        self.b = b

def union(a: SDFNode, b: SDFNode) -> SDFNode:
    return a.union(b)

def intersection(a: SDFNode, b: SDFNode) -> SDFNode:
    return a.intersection(b)

def difference(a: SDFNode, b: SDFNode) -> SDFNode:
    return a.difference(b)
