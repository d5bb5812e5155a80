# -*- coding: utf-8 -*-
import numpy as np
import pytest
from meshdepth.math import Vec3

def test_vec3_components():
    a = Vec3(1, 2, 3)
    assert (a.x, a.y, a.z) == (1.0, 2.0, 3.0)
    assert list(a) == [1, 2, 3] and a[2] == 3 and len(a) == 3
    assert a == Vec3(1, 2, 3) and a != Vec3(1, 2, 4)
    assert repr(a) == "Vec3(1.000, 2.000, 3.000)"

def test_vec3_from_np():
    v = Vec3.from_np(np.array([0.5, -0.25, 2.0, 9.0], dtype=np.float64))
    assert v.as_np().dtype == np.float32
    assert tuple(v) == (0.5, -0.25, 2.0)
    assert v.max_component() == 2.0

def test_vec3_as_np_is_a_copy():
    v = Vec3(1, 2, 3)
    arr = v.as_np()
    arr[0] = 7
    assert v.x == 1.0

def test_vec3_is_read_only():
    v = Vec3(1, 2, 3)
    with pytest.raises(AttributeError):
        v.x = 5
    with pytest.raises(TypeError):
        hash(v)
