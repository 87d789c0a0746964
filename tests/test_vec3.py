"""Tests for Vec3 class."""

import pytest
import math
import numpy as np

from spherecast.vec3 import Vec3, Point3, Color, BLACK, WHITE


class TestVec3Creation:
    """Test Vec3 construction."""

    def test_default_constructor(self):
        v = Vec3()
        assert v.x == 0.0
        assert v.y == 0.0
        assert v.z == 0.0

    def test_value_constructor(self):
        v = Vec3(1.0, 2.0, 3.0)
        assert v.x == 1.0
        assert v.y == 2.0
        assert v.z == 3.0

    def test_from_array(self):
        arr = np.array([1.0, 2.0, 3.0])
        v = Vec3.from_array(arr)
        assert v.to_tuple() == (1.0, 2.0, 3.0)

    def test_color_aliases(self):
        c = Color(0.5, 0.6, 0.7)
        assert c.r == 0.5
        assert c.g == 0.6
        assert c.b == 0.7

    def test_constants(self):
        assert BLACK.to_tuple() == (0.0, 0.0, 0.0)
        assert WHITE.to_tuple() == (1.0, 1.0, 1.0)


class TestVec3Arithmetic:
    """Test Vec3 arithmetic operations."""

    def test_negation(self):
        neg = -Vec3(1, 2, 3)
        assert neg.to_tuple() == (-1, -2, -3)

    def test_addition(self):
        result = Vec3(1, 2, 3) + Vec3(4, 5, 6)
        assert result.to_tuple() == (5, 7, 9)

    def test_subtraction(self):
        result = Vec3(4, 5, 6) - Vec3(1, 2, 3)
        assert result.to_tuple() == (3, 3, 3)

    def test_scalar_multiplication(self):
        result = Vec3(1, 2, 3) * 2
        assert result.to_tuple() == (2, 4, 6)

    def test_right_scalar_multiplication(self):
        result = 2 * Vec3(1, 2, 3)
        assert result.to_tuple() == (2, 4, 6)

    def test_componentwise_multiplication(self):
        result = Vec3(1, 2, 3) * Vec3(2, 3, 4)
        assert result.to_tuple() == (2, 6, 12)

    def test_division(self):
        result = Vec3(2, 4, 6) / 2
        assert result.to_tuple() == (1, 2, 3)

    def test_operations_do_not_mutate(self):
        v = Vec3(1, 2, 3)
        _ = v + Vec3(1, 1, 1)
        _ = v * 5
        _ = -v
        assert v.to_tuple() == (1, 2, 3)


class TestVec3VectorOps:
    """Test Vec3 vector operations."""

    def test_length(self):
        assert Vec3(3, 4, 0).length() == 5.0

    def test_length_squared(self):
        assert Vec3(3, 4, 0).length_squared() == 25.0

    @pytest.mark.parametrize("v", [
        Vec3(1, 2, 3),
        Vec3(-0.5, 7.25, 1e-3),
        Vec3(1e4, -2e4, 3e4),
    ])
    def test_length_squared_matches_self_dot(self, v):
        assert math.isclose(v.length() ** 2, v.dot(v), rel_tol=1e-12)

    def test_normalize(self):
        n = Vec3(3, 4, 0).normalize()
        assert abs(n.length() - 1.0) < 1e-10
        assert abs(n.x - 0.6) < 1e-10
        assert abs(n.y - 0.8) < 1e-10

    def test_normalize_zero_vector_gives_nan(self):
        n = Vec3(0, 0, 0).normalize()
        assert all(math.isnan(c) for c in n)

    def test_dot_product(self):
        assert Vec3(1, 0, 0).dot(Vec3(0, 1, 0)) == 0.0
        assert Vec3(1, 2, 3).dot(Vec3(4, 5, 6)) == 32.0


class TestVec3Reflect:
    """Test reflection about a normal."""

    def test_reflect_straight_on(self):
        r = Vec3(0, 0, -1).reflect(Vec3(0, 0, 1))
        assert r.to_tuple() == (0, 0, 1)

    def test_reflect_at_angle(self):
        r = Vec3(1, -1, 0).reflect(Vec3(0, 1, 0))
        assert r.to_tuple() == (1, 1, 0)

    @pytest.mark.parametrize("incident,normal", [
        (Vec3(1, -2, 0.5), Vec3(0, 1, 0)),
        (Vec3(0.3, 0.3, -4), Vec3(1, 1, 1).normalize()),
        (Vec3(-2, 5, 1), Vec3(0.2, -0.9, 0.4).normalize()),
    ])
    def test_reflect_flips_normal_component(self, incident, normal):
        r = incident.reflect(normal)
        assert math.isclose(r.dot(normal), -incident.dot(normal), rel_tol=1e-9, abs_tol=1e-12)

    def test_reflect_preserves_length(self):
        incident = Vec3(0.3, -0.7, 0.2)
        r = incident.reflect(Vec3(0, 1, 0))
        assert abs(r.length() - incident.length()) < 1e-12


class TestVec3Utilities:
    """Test Vec3 helpers."""

    def test_equality_is_approximate(self):
        assert Vec3(1, 2, 3) == Vec3(1, 2, 3 + 1e-12)
        assert Vec3(1, 2, 3) != Vec3(1, 2, 4)

    def test_to_array_is_copy(self):
        v = Vec3(1, 2, 3)
        arr = v.to_array()
        arr[0] = 100
        assert v.x == 1

    def test_clamp(self):
        c = Vec3(-1, 0.5, 2).clamp(0, 1)
        assert c.to_tuple() == (0, 0.5, 1)

    def test_getitem_and_iter(self):
        v = Vec3(1, 2, 3)
        assert v[2] == 3
        assert list(v) == [1, 2, 3]

    def test_repr(self):
        assert repr(Vec3(1, 2, 3)) == "Vec3(1.0000, 2.0000, 3.0000)"

    def test_aliases(self):
        assert Point3 is Vec3
        assert Color is Vec3
