"""Tests for Vec3 class."""

import pytest
import math
import numpy as np

from lumenforge.vec3 import Vec3, Point3, Color


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

    def test_from_array_copies(self):
        arr = np.array([1.0, 2.0, 3.0])
        v = Vec3.from_array(arr)
        arr[0] = 99.0
        assert v.x == 1.0

    def test_color_aliases(self):
        c = Color(0.5, 0.6, 0.7)
        assert c.r == 0.5
        assert c.g == 0.6
        assert c.b == 0.7


class TestVec3Immutability:
    """Vec3 is a value type."""

    def test_cannot_assign_component(self):
        v = Vec3(1, 2, 3)
        with pytest.raises(AttributeError):
            v.x = 5

    def test_cannot_mutate_storage(self):
        v = Vec3(1, 2, 3)
        with pytest.raises(ValueError):
            v._data[0] = 5

    def test_operations_return_new_vectors(self):
        v = Vec3(1, 2, 3)
        _ = v + Vec3(1, 1, 1)
        assert v == Vec3(1, 2, 3)

    def test_hashable(self):
        assert hash(Vec3(1, 2, 3)) == hash(Vec3(1, 2, 3))


class TestVec3Arithmetic:
    """Test Vec3 arithmetic operations."""

    def test_negation(self):
        neg = -Vec3(1, 2, 3)
        assert (neg.x, neg.y, neg.z) == (-1, -2, -3)

    def test_addition(self):
        result = Vec3(1, 2, 3) + Vec3(4, 5, 6)
        assert (result.x, result.y, result.z) == (5, 7, 9)

    def test_addition_scalar(self):
        result = Vec3(1, 2, 3) + 10
        assert (result.x, result.y, result.z) == (11, 12, 13)

    def test_subtraction(self):
        result = Vec3(4, 5, 6) - Vec3(1, 2, 3)
        assert (result.x, result.y, result.z) == (3, 3, 3)

    def test_scalar_multiplication_both_sides(self):
        assert Vec3(1, 2, 3) * 2 == Vec3(2, 4, 6)
        assert 2 * Vec3(1, 2, 3) == Vec3(2, 4, 6)

    def test_componentwise_multiplication(self):
        result = Vec3(1, 2, 3) * Vec3(2, 3, 4)
        assert (result.x, result.y, result.z) == (2, 6, 12)

    def test_division(self):
        result = Vec3(2, 4, 6) / 2
        assert (result.x, result.y, result.z) == (1, 2, 3)

    def test_iteration(self):
        assert list(Vec3(1, 2, 3)) == [1.0, 2.0, 3.0]


class TestVec3VectorOps:
    """Test Vec3 vector operations."""

    def test_length(self):
        assert Vec3(3, 4, 0).length() == 5.0

    def test_length_squared(self):
        assert Vec3(3, 4, 0).length_squared() == 25.0

    def test_normalize(self):
        n = Vec3(3, 4, 0).normalize()
        assert abs(n.length() - 1.0) < 1e-12
        assert n == Vec3(0.6, 0.8, 0)

    def test_normalize_zero_vector_raises(self):
        with pytest.raises(ValueError):
            Vec3(0, 0, 0).normalize()

    def test_dot_product(self):
        assert Vec3(1, 0, 0).dot(Vec3(0, 1, 0)) == 0.0
        assert Vec3(1, 2, 3).dot(Vec3(4, 5, 6)) == 32.0

    def test_cross_product(self):
        assert Vec3(1, 0, 0).cross(Vec3(0, 1, 0)) == Vec3(0, 0, 1)

    def test_near_zero(self):
        assert Vec3(1e-9, -1e-9, 0).near_zero()
        assert not Vec3(1e-3, 0, 0).near_zero()

    def test_clamp(self):
        assert Vec3(-1, 0.5, 2).clamp() == Vec3(0, 0.5, 1)

    def test_lerp_endpoints(self):
        a = Vec3(1, 1, 1)
        b = Vec3(0.5, 0.7, 1.0)
        assert a.lerp(b, 0.0) == a
        assert a.lerp(b, 1.0) == b
        assert a.lerp(b, 0.5) == Vec3(0.75, 0.85, 1.0)


class TestReflect:
    """Reflection preserves length and mirrors the normal component."""

    @pytest.mark.parametrize("v, n", [
        (Vec3(1, -1, 0), Vec3(0, 1, 0)),
        (Vec3(0.3, -2.0, 0.7), Vec3(0, 1, 0)),
        (Vec3(2, 3, -4), Vec3(1, 1, 1).normalize()),
        (Vec3(0, 0, -5), Vec3(0, 0, 1)),
    ])
    def test_reflect_properties(self, v, n):
        r = v.reflect(n)
        assert abs(r.length() - v.length()) < 1e-9
        assert abs(r.dot(n) + v.dot(n)) < 1e-9

    def test_reflect_random_vectors(self, rng):
        for _ in range(50):
            v = Vec3.random(rng, -3, 3)
            n = Vec3.random_unit_vector(rng)
            r = v.reflect(n)
            assert abs(r.length() - v.length()) < 1e-9
            assert abs(r.dot(n) + v.dot(n)) < 1e-9

    def test_reflect_example(self):
        assert Vec3(1, -1, 0).reflect(Vec3(0, 1, 0)) == Vec3(1, 1, 0)


class TestRefract:
    """Snell's law refraction."""

    def test_unit_ratio_passes_straight_through(self):
        v = Vec3(1, -2, 0.5).normalize()
        n = Vec3(0, 1, 0)
        assert v.refract(n, 1.0) == v

    def test_normal_incidence_is_undeviated(self):
        v = Vec3(0, -1, 0)
        assert v.refract(Vec3(0, 1, 0), 1 / 1.5) == v

    def test_snells_law(self):
        eta = 1 / 1.5
        v = Vec3(1, -1, 0).normalize()
        n = Vec3(0, 1, 0)
        r = v.refract(n, eta)
        sin_in = abs(v.x)
        sin_out = abs(r.x) / r.length()
        assert abs(sin_in * eta - sin_out) < 1e-9
        assert abs(r.length() - 1.0) < 1e-9

    def test_can_refract_detects_total_internal_reflection(self):
        grazing = Vec3(1, -0.1, 0).normalize()
        n = Vec3(0, 1, 0)
        assert not grazing.can_refract(n, 1.5)
        assert grazing.can_refract(n, 1 / 1.5)


class TestRandomSampling:
    """Random helpers draw only from the generator they are given."""

    def test_random_in_unit_sphere(self, rng):
        for _ in range(200):
            p = Vec3.random_in_unit_sphere(rng)
            assert p.length_squared() < 1
            assert not p.near_zero()

    def test_random_unit_vector(self, rng):
        for _ in range(200):
            assert abs(Vec3.random_unit_vector(rng).length() - 1.0) < 1e-9

    def test_random_unit_vector_is_unbiased(self, rng):
        samples = np.array([Vec3.random_unit_vector(rng).to_array() for _ in range(4000)])
        # Uniform on the sphere: mean near zero, each squared component near 1/3
        assert np.all(np.abs(samples.mean(axis=0)) < 0.05)
        assert np.all(np.abs((samples ** 2).mean(axis=0) - 1 / 3) < 0.03)

    def test_random_in_unit_disk(self, rng):
        for _ in range(200):
            p = Vec3.random_in_unit_disk(rng)
            assert p.z == 0
            assert p.x * p.x + p.y * p.y < 1

    def test_same_seed_same_samples(self):
        a = np.random.default_rng(3)
        b = np.random.default_rng(3)
        for _ in range(10):
            assert Vec3.random_unit_vector(a) == Vec3.random_unit_vector(b)


class TestAliases:

    def test_point_and_color_are_vec3(self):
        assert Point3 is Vec3
        assert Color is Vec3
