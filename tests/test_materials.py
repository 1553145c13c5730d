"""Tests for material system."""

import pytest
import math
import numpy as np

from raylume.vector3 import Vector3, Point3, Colour, dot_product, reflect
from raylume.ray import Ray
from raylume.shapes import HitRecord
from raylume.materials import Lambertian, Metal, Dielectric, reflectance


def make_record(normal=Vector3(0, 1, 0), front_face=True, point=Point3(0, 0, 0)):
    return HitRecord(point=point, normal=normal, t=1.0, front_face=front_face)


class ZeroGenerator:
    """Stands in for a generator whose draws are all zero."""

    def random(self):
        return 0.0

    def uniform(self, low=0.0, high=1.0, size=None):
        if size is None:
            return low
        return np.full(size, low, dtype=np.float64)


class OneGenerator(ZeroGenerator):
    """Uniform draws just below 1."""

    def random(self):
        return 0.999999


class TestLambertian:
    """Test Lambertian diffuse material."""

    def test_scatter_always_succeeds(self, rng):
        mat = Lambertian(Colour(0.5, 0.5, 0.5))
        ray_in = Ray(Point3(0, 1, 0), Vector3(0, -1, 0))
        for _ in range(100):
            assert mat.scatter(ray_in, make_record(), rng) is not None

    def test_scattered_in_hemisphere(self, rng):
        mat = Lambertian(Colour(0.5, 0.5, 0.5))
        normal = Vector3(0, 1, 0)
        ray_in = Ray(Point3(0, 1, 0), Vector3(0, -1, 0))
        for _ in range(100):
            result = mat.scatter(ray_in, make_record(normal), rng)
            assert dot_product(result.scattered.direction, normal) >= -1e-9

    def test_scatter_starts_at_hit_point(self, rng):
        mat = Lambertian(Colour(0.5, 0.5, 0.5))
        record = make_record(point=Point3(1, 2, 3))
        result = mat.scatter(Ray(Point3(0, 0, 0), Vector3(1, 2, 3)), record, rng)
        assert result.scattered.origin == Point3(1, 2, 3)

    def test_attenuation_matches_albedo(self, rng):
        albedo = Colour(0.8, 0.2, 0.3)
        mat = Lambertian(albedo)
        result = mat.scatter(Ray(Point3(0, 1, 0), Vector3(0, -1, 0)), make_record(), rng)
        assert result.attenuation == albedo

    def test_degenerate_direction_falls_back_to_normal(self, monkeypatch, rng):
        normal = Vector3(0, 1, 0)
        monkeypatch.setattr(
            'raylume.materials.random_unit_vector', lambda _rng: Vector3(0, -1, 0)
        )
        mat = Lambertian(Colour(0.5, 0.5, 0.5))
        result = mat.scatter(Ray(Point3(0, 1, 0), Vector3(0, -1, 0)), make_record(normal), rng)
        assert result.scattered.direction == normal


class TestMetal:
    """Test Metal material."""

    def test_perfect_reflection(self, rng):
        mat = Metal(Colour(1, 1, 1), fuzz=0.0)
        ray_in = Ray(Point3(-1, 1, 0), Vector3(1, -1, 0))

        result = mat.scatter(ray_in, make_record(), rng)
        assert result is not None
        assert result.scattered.direction == Vector3(1, 1, 0).unit()

    def test_fuzz_is_clamped(self):
        assert Metal(Colour(1, 1, 1), fuzz=3.0).fuzz == 1.0
        assert Metal(Colour(1, 1, 1), fuzz=-1.0).fuzz == 0.0

    def test_fuzz_perturbs_reflection(self, rng):
        mat = Metal(Colour(1, 1, 1), fuzz=0.5)
        ray_in = Ray(Point3(0, 1, 0), Vector3(0, -1, 0))
        directions = [
            r.scattered.direction for r in
            (mat.scatter(ray_in, make_record(), rng) for _ in range(50)) if r
        ]
        first = directions[0]
        assert any(d != first for d in directions[1:])

    def test_absorbs_below_surface(self, rng):
        """Fuzzed grazing reflections that dip below the surface are absorbed."""
        mat = Metal(Colour(1, 1, 1), fuzz=1.0)
        ray_in = Ray(Point3(-1, 0.1, 0), Vector3(1, -0.1, 0).unit())
        normal = Vector3(0, 1, 0)

        successes = 0
        failures = 0
        for _ in range(300):
            result = mat.scatter(ray_in, make_record(normal), rng)
            if result:
                successes += 1
                assert dot_product(result.scattered.direction, normal) > 0
            else:
                failures += 1

        assert successes > 0
        assert failures > 0

    def test_attenuation_matches_albedo(self, rng):
        albedo = Colour(0.9, 0.6, 0.2)
        result = Metal(albedo).scatter(Ray(Point3(0, 1, 0), Vector3(0, -1, 0)), make_record(), rng)
        assert result.attenuation == albedo


class TestDielectric:
    """Test Dielectric (glass) material."""

    def test_always_scatters_with_white_attenuation(self, rng):
        mat = Dielectric(1.5)
        ray_in = Ray(Point3(0, 1, 0), Vector3(0.3, -1, 0))
        for _ in range(100):
            result = mat.scatter(ray_in, make_record(), rng)
            assert result is not None
            assert result.attenuation == Colour(1, 1, 1)

    def test_refracts_when_draw_exceeds_reflectance(self):
        mat = Dielectric(1.5)
        ray_in = Ray(Point3(0, 1, 0), Vector3(0, -1, 0))
        result = mat.scatter(ray_in, make_record(), OneGenerator())
        # Normal incidence passes straight through
        assert result.scattered.direction == Vector3(0, -1, 0)

    def test_reflects_when_draw_below_reflectance(self):
        mat = Dielectric(1.5)
        ray_in = Ray(Point3(0, 1, 0), Vector3(0, -1, 0))
        result = mat.scatter(ray_in, make_record(), ZeroGenerator())
        assert result.scattered.direction == Vector3(0, 1, 0)

    def test_total_internal_reflection(self):
        mat = Dielectric(1.5)
        # Leaving glass at a steep angle: ratio 1.5 * sin(60 deg) > 1
        direction = Vector3(math.sin(math.radians(60)), -math.cos(math.radians(60)), 0)
        record = make_record(front_face=False)
        for _ in range(20):
            result = mat.scatter(Ray(Point3(0, 1, 0), direction), record, OneGenerator())
            assert result.scattered.direction == reflect(direction, record.normal)

    def test_schlick_reflectance(self):
        # At normal incidence reflectance is r0
        assert math.isclose(reflectance(1.0, 1.5), 0.04)
        # At grazing incidence everything reflects
        assert math.isclose(reflectance(0.0, 1.5), 1.0)
