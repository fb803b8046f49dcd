"""
Geometric shapes for the ray tracer.

Each shape implements the Hittable interface with a `hit` method.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING
import math

from .vec3 import Vec3, Point3
from .ray import Ray
from .interval import Interval

if TYPE_CHECKING:
    from .materials import Material


@dataclass
class HitRecord:
    """Stores information about a ray-object intersection.

    Attributes:
        point: The intersection point in world space
        normal: Unit surface normal (point - center) / radius, outward for positive radii
        t: Magnitude along the ray at which the intersection occurs
        material: The material at the hit point
        front_face: True if the ray arrived from outside the object
    """
    point: Point3
    normal: Vec3
    t: float
    material: Optional[Material] = None
    front_face: bool = True

    def facing_normal(self) -> Vec3:
        """Normal oriented against the incoming ray."""
        return self.normal if self.front_face else -self.normal


class Hittable(ABC):
    """Abstract base class for all objects that can be hit by rays."""

    @abstractmethod
    def hit(self, ray: Ray, interval: Interval) -> Optional[HitRecord]:
        """Test if ray intersects this object.

        Args:
            ray: The ray to test
            interval: Accepted hit magnitudes; the lower bound should exclude
                near-zero values to avoid self-intersection

        Returns:
            HitRecord if intersection found, None otherwise
        """


class Sphere(Hittable):
    """A sphere defined by center and radius."""

    def __init__(self, center: Point3, radius: float, material: Optional[Material] = None):
        """Create a sphere.

        Args:
            center: Center point of the sphere
            radius: Radius of the sphere (negative flips normals inward)
            material: Material for shading, may be shared with other shapes
        """
        self._center = center
        self._radius = radius
        self._material = material

    @property
    def center(self) -> Point3:
        return self._center

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def material(self) -> Optional[Material]:
        return self._material

    def hit(self, ray: Ray, interval: Interval) -> Optional[HitRecord]:
        """Test ray-sphere intersection using the quadratic formula.

        The equation (P-C)·(P-C) = r² where P = ray.at(t)
        expands to: t²(d·d) + 2t(d·(O-C)) + (O-C)·(O-C) - r² = 0
        which is the quadratic at² + bt + c = 0, solved here with b = 2h.
        """
        oc = ray.origin - self._center
        a = ray.direction.length_squared()
        if a == 0:
            # Degenerate ray, no direction to travel along
            return None
        half_b = oc.dot(ray.direction)
        c = oc.length_squared() - self._radius * self._radius

        discriminant = half_b * half_b - a * c
        if discriminant < 0:
            return None

        sqrtd = math.sqrt(discriminant)

        # Find the nearest root in the acceptable range
        root = (-half_b - sqrtd) / a
        if not interval.contains(root):
            root = (-half_b + sqrtd) / a
            if not interval.contains(root):
                return None

        point = ray.at(root)
        outward_normal = (point - self._center) / self._radius

        return HitRecord(
            point=point,
            normal=outward_normal,
            t=root,
            material=self._material,
            front_face=ray.direction.dot(outward_normal) < 0,
        )

    def __repr__(self) -> str:
        return f"Sphere(center={self._center}, radius={self._radius})"
