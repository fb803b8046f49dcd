"""Tests for Ray class."""

import pytest
from raytrace.vec3 import Vec3, Point3
from raytrace.ray import Ray


class TestRayCreation:
    """Test Ray construction."""

    def test_stores_origin(self):
        origin = Point3(1, 2, 3)
        ray = Ray(origin, Vec3(1, 0, 0))
        assert ray.origin == origin

    def test_stores_direction(self):
        direction = Vec3(1, 2, 3)
        ray = Ray(Point3(0, 0, 0), direction)
        assert ray.direction == direction

    def test_direction_not_normalized(self):
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, -5))
        assert ray.direction.length() == 5.0


class TestRayAt:
    """Test Ray.at() method."""

    def test_at_zero(self):
        origin = Point3(1, 2, 3)
        ray = Ray(origin, Vec3(1, 0, 0))
        assert ray.at(0) == origin

    def test_at_positive(self):
        ray = Ray(Point3(0, 0, 0), Vec3(1, 0, 0))
        point = ray.at(5)
        assert point.x == 5
        assert point.y == 0
        assert point.z == 0

    def test_at_negative(self):
        ray = Ray(Point3(0, 0, 0), Vec3(1, 0, 0))
        assert ray.at(-5).x == -5

    def test_at_with_diagonal(self):
        ray = Ray(Point3(0, 0, 0), Vec3(1, 1, 1))
        assert ray.at(2) == Point3(2, 2, 2)

    def test_at_scales_unnormalized_direction(self):
        ray = Ray(Point3(1, 0, 0), Vec3(0, 2, 0))
        assert ray.at(1.5) == Point3(1, 3, 0)


class TestRayRepr:
    """Test Ray string representation."""

    def test_repr(self):
        s = repr(Ray(Point3(1, 2, 3), Vec3(0, 1, 0)))
        assert "Ray" in s
        assert "origin" in s
        assert "direction" in s
