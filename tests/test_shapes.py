"""Tests for geometric shapes."""

import pytest
import math
from raytrace.vec3 import Vec3, Point3, Color
from raytrace.ray import Ray
from raytrace.interval import Interval
from raytrace.shapes import Sphere, HitRecord
from raytrace.materials import Lambertian

FORWARD = Interval(0.001, float('inf'))


class TestSphere:
    """Test Sphere class."""

    def test_creation(self):
        center = Point3(0, 0, 0)
        sphere = Sphere(center, 1.0)
        assert sphere.center == center
        assert sphere.radius == 1.0
        assert sphere.material is None

    def test_hit_through_center(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        ray = Ray(Point3(0, 0, -5), Vec3(0, 0, 1))
        hit = sphere.hit(ray, FORWARD)

        assert hit is not None
        assert abs(hit.t - 4.0) < 1e-6  # Hits at z=-1
        assert abs(hit.point.z - (-1.0)) < 1e-6

    @pytest.mark.parametrize("center,radius,origin", [
        (Point3(0, 0, -1), 0.5, Point3(0, 0, 0)),
        (Point3(3, -2, 7), 2.0, Point3(-1, 1, -4)),
        (Point3(0, -100.5, -1), 100.0, Point3(0, 5, -1)),
        (Point3(10, 10, 10), 0.25, Point3(0, 0, 0)),
    ])
    def test_hit_at_distance_minus_radius(self, center, radius, origin):
        to_center = center - origin
        ray = Ray(origin, to_center.normalize())
        hit = Sphere(center, radius).hit(ray, FORWARD)

        assert hit is not None
        assert abs(hit.t - (to_center.length() - radius)) < 1e-5

        # Normal is unit length and parallel to (hit point - center)
        assert abs(hit.normal.length() - 1.0) < 1e-5
        radial = (hit.point - center).normalize()
        assert abs(hit.normal.dot(radial) - 1.0) < 1e-5

    def test_unnormalized_direction(self):
        sphere = Sphere(Point3(0, 0, -4), 1.0)
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, -3))
        hit = sphere.hit(ray, FORWARD)

        assert hit is not None
        assert abs(hit.t - 1.0) < 1e-9
        assert hit.point == Point3(0, 0, -3)

    def test_outward_normal_and_front_face(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        ray = Ray(Point3(0, 0, -5), Vec3(0, 0, 1))
        hit = sphere.hit(ray, FORWARD)

        assert hit.front_face is True
        assert hit.normal == Vec3(0, 0, -1)

    def test_hit_from_inside(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, 1))
        hit = sphere.hit(ray, FORWARD)

        assert hit is not None
        assert hit.front_face is False
        # Stored normal still points outward
        assert hit.normal == Vec3(0, 0, 1)
        assert hit.facing_normal() == Vec3(0, 0, -1)

    def test_miss(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        ray = Ray(Point3(0, 5, -5), Vec3(0, 0, 1))  # Passes above sphere
        assert sphere.hit(ray, FORWARD) is None

    def test_behind_ray(self):
        sphere = Sphere(Point3(0, 0, -5), 1.0)
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, 1))  # Points away from sphere
        assert sphere.hit(ray, FORWARD) is None

    def test_tangent_ray(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        ray = Ray(Point3(-5, 1, 0), Vec3(1, 0, 0))
        hit = sphere.hit(ray, FORWARD)

        assert hit is not None
        assert abs(hit.t - 5.0) < 1e-6

    def test_interval_selects_far_root(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        ray = Ray(Point3(0, 0, -5), Vec3(0, 0, 1))

        # Near hit is at t=4, exclude it with the lower bound
        hit = sphere.hit(ray, Interval(4.5, float('inf')))
        assert hit is not None
        assert abs(hit.t - 6.0) < 1e-6

    def test_interval_upper_bound_excludes(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        ray = Ray(Point3(0, 0, -5), Vec3(0, 0, 1))
        assert sphere.hit(ray, Interval(0.001, 3.0)) is None

    def test_empty_interval_never_hits(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        ray = Ray(Point3(0, 0, -5), Vec3(0, 0, 1))
        assert sphere.hit(ray, Interval()) is None

    def test_epsilon_suppresses_self_hit(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        # Origin lies on the surface, pointing outward
        ray = Ray(Point3(0, 0, 1), Vec3(0, 0, 1))
        assert sphere.hit(ray, FORWARD) is None

    def test_with_material(self):
        material = Lambertian(Color(1, 0, 0))
        sphere = Sphere(Point3(0, 0, 0), 1.0, material)
        hit = sphere.hit(Ray(Point3(0, 0, -5), Vec3(0, 0, 1)), FORWARD)

        assert hit is not None
        assert hit.material is material

    def test_shared_material(self):
        material = Lambertian(Color(0.5, 0.5, 0.5))
        a = Sphere(Point3(0, 0, 0), 1.0, material)
        b = Sphere(Point3(5, 0, 0), 1.0, material)
        assert a.material is b.material

    def test_negative_radius_flips_normal(self):
        sphere = Sphere(Point3(0, 0, 0), -1.0)
        hit = sphere.hit(Ray(Point3(0, 0, -5), Vec3(0, 0, 1)), FORWARD)

        assert hit is not None
        assert hit.normal == Vec3(0, 0, 1)
        assert hit.front_face is False

    def test_zero_direction_misses(self):
        sphere = Sphere(Point3(0, 0, -1), 0.5)
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, 0))
        assert sphere.hit(ray, Interval(0.001, math.inf)) is None

    def test_repr(self):
        assert "Sphere" in repr(Sphere(Point3(0, 0, 0), 1.0))


class TestHitRecord:
    """Test HitRecord helpers."""

    def test_facing_normal_front(self):
        record = HitRecord(point=Point3(0, 0, 0), normal=Vec3(0, 1, 0), t=1.0)
        assert record.facing_normal() == Vec3(0, 1, 0)

    def test_facing_normal_back(self):
        record = HitRecord(point=Point3(0, 0, 0), normal=Vec3(0, 1, 0), t=1.0, front_face=False)
        assert record.facing_normal() == Vec3(0, -1, 0)
