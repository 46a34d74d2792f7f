import math
import numpy as np
from sdtrace import Vector3, X, Y, Z
from sdtrace.api.vector import normalize_rows

def test_arithmetic():
    a = Vector3(1, 2, 3)
    b = Vector3(1, 1, 1)
    assert a + b == Vector3(2, 3, 4)
    assert a - b == Vector3(0, 1, 2)
    assert -a == Vector3(-1, -2, -3)
    assert a * 2 == Vector3(2, 4, 6)
    assert 2 * a == Vector3(2, 4, 6)
    assert a / 2 == Vector3(0.5, 1.0, 1.5)

def test_operations_return_new_values():
    a = Vector3(1, 2, 3)
    b = a + Vector3(1, 0, 0)
    assert a == Vector3(1, 2, 3)
    assert b is not a

def test_in_place_accumulate():
    a = Vector3(1, 2, 3)
    alias = a
    a += Vector3(1, 1, 1)
    assert alias is a
    assert alias == Vector3(2, 3, 4)
    a -= Vector3(2, 3, 4)
    assert alias == Vector3(0, 0, 0)

def test_division_by_zero_yields_zero_vector():
    assert Vector3(1, 2, 3) / 0 == Vector3(0, 0, 0)

def test_dot_cross_norm():
    assert X.dot(Y) == 0.0
    assert X.cross(Y) == Z
    assert Y.cross(Z) == X
    assert Vector3(3, 4, 0).norm() == 5.0
    assert Vector3(1, 1, 1).dist(Vector3(1, 1, 3)) == 2.0

def test_normalize():
    n = Vector3(0, 3, 4).normalize()
    assert math.isclose(n.norm(), 1.0)
    assert n == Vector3(0, 0.6, 0.8)

def test_normalize_zero_vector_is_zero():
    n = Vector3(0, 0, 0).normalize()
    assert (n.x, n.y, n.z) == (0.0, 0.0, 0.0)

def test_equality_within_epsilon():
    assert Vector3(1, 0, 0) == Vector3(1.0005, 0, 0)
    assert Vector3(1, 0, 0) != Vector3(1.002, 0, 0)

def test_array_conversion():
    v = Vector3(1, 2, 3)
    assert np.array_equal(np.asarray(v), [1.0, 2.0, 3.0])
    assert Vector3.from_array(np.array([4, 5, 6])) == Vector3(4, 5, 6)
    assert list(v) == [1.0, 2.0, 3.0]

def test_normalize_rows_keeps_zero_rows():
    v = np.array([[3.0, 0.0, 4.0], [0.0, 0.0, 0.0]])
    n = normalize_rows(v)
    assert np.allclose(n, [[0.6, 0.0, 0.8], [0.0, 0.0, 0.0]])
