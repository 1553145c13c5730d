"""Tests for Ray and Interval."""

import pytest
import math

from raylume.vector3 import Vector3, Point3
from raylume.ray import Ray
from raylume.interval import Interval, EMPTY, UNIVERSE


class TestRay:
    """Test Ray class."""

    def test_creation(self):
        ray = Ray(Point3(1, 2, 3), Vector3(0, 0, -1))
        assert ray.origin == Point3(1, 2, 3)
        assert ray.direction == Vector3(0, 0, -1)

    def test_at_origin(self):
        ray = Ray(Point3(1, 2, 3), Vector3(1, 0, 0))
        assert ray.at(0) == Point3(1, 2, 3)

    def test_at_unnormalized_direction(self):
        ray = Ray(Point3(0, 0, 0), Vector3(0, 2, 0))
        assert ray.at(1.5) == Point3(0, 3, 0)

    def test_at_negative(self):
        ray = Ray(Point3(0, 0, 0), Vector3(1, 0, 0))
        assert ray.at(-2) == Point3(-2, 0, 0)


class TestInterval:
    """Test Interval containment and clamping."""

    def test_contains_is_inclusive(self):
        interval = Interval(0.0, 1.0)
        assert interval.contains(0.0)
        assert interval.contains(1.0)
        assert interval.contains(0.5)
        assert not interval.contains(1.5)

    def test_surrounds_is_strict(self):
        interval = Interval(0.0, 1.0)
        assert not interval.surrounds(0.0)
        assert not interval.surrounds(1.0)
        assert interval.surrounds(0.5)

    @pytest.mark.parametrize("x, expected", [
        (-5.0, 2.0),
        (1.999, 2.0),
        (2.0, 2.0),
        (3.5, 3.5),
        (7.0, 7.0),
        (7.001, 7.0),
        (100.0, 7.0),
    ])
    def test_clamp(self, x, expected):
        assert Interval(2.0, 7.0).clamp(x) == expected

    def test_default_is_empty(self):
        interval = Interval()
        assert not interval.contains(0.0)
        assert interval.size() < 0

    def test_constants(self):
        assert not EMPTY.contains(0.0)
        assert UNIVERSE.surrounds(1e300)
        assert UNIVERSE.size() == math.inf
