"""Tests for Vec3 and Ray."""

import math

import pytest

from core.math import Vec3, Ray


class TestVec3:
    def test_arithmetic(self):
        a = Vec3(1, 2, 3)
        b = Vec3(4, 5, 6)
        assert a + b == Vec3(5, 7, 9)
        assert b - a == Vec3(3, 3, 3)
        assert a * 2 == Vec3(2, 4, 6)
        assert 2 * a == Vec3(2, 4, 6)
        assert a * b == Vec3(4, 10, 18)
        assert -a == Vec3(-1, -2, -3)
        assert b / 2 == Vec3(2, 2.5, 3)

    def test_operations_return_new_instances(self):
        a = Vec3(1, 2, 3)
        b = a + Vec3(0, 0, 0)
        assert b is not a
        assert a == Vec3(1, 2, 3)

    def test_dot_and_cross(self):
        x = Vec3(1, 0, 0)
        y = Vec3(0, 1, 0)
        assert x.dot(y) == 0
        assert Vec3(1, 2, 3).dot(Vec3(4, 5, 6)) == 32
        assert x.cross(y) == Vec3(0, 0, 1)
        assert y.cross(x) == Vec3(0, 0, -1)

    def test_length_and_normalize(self):
        v = Vec3(3, 0, 4)
        assert v.length() == 5
        n = v.normalize()
        assert n.length() == pytest.approx(1.0)
        assert n.x == pytest.approx(0.6)
        assert n.z == pytest.approx(0.8)

    def test_normalize_zero_vector_is_noop(self):
        zero = Vec3(0, 0, 0)
        assert zero.normalize() == Vec3(0, 0, 0)

    def test_reflect(self):
        d = Vec3(1, -1, 0)
        r = d.reflect(Vec3(0, 1, 0))
        assert r == Vec3(1, 1, 0)

    def test_lerp(self):
        a = Vec3(0, 0, 0)
        b = Vec3(2, 4, 6)
        assert a.lerp(b, 0.5) == Vec3(1, 2, 3)
        assert a.lerp(b, 0.0) == a
        assert a.lerp(b, 1.0) == b

    def test_to_tuple_and_np(self):
        v = Vec3(1, 2, 3)
        assert v.to_tuple() == (1.0, 2.0, 3.0)
        assert tuple(v) == (1.0, 2.0, 3.0)
        assert v.to_np().tolist() == [1.0, 2.0, 3.0]


class TestRay:
    def test_direction_is_normalized(self):
        ray = Ray(Vec3(0, 0, 0), Vec3(0, 0, -10))
        assert ray.direction == Vec3(0, 0, -1)

    def test_point_at_parameter(self, vec_close):
        ray = Ray(Vec3(1, 1, 1), Vec3(1, 1, 0))
        p = ray.point_at_parameter(math.sqrt(2))
        vec_close(p, Vec3(2, 2, 1))
