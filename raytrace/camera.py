"""
Camera module for generating primary rays.

Supports:
- Perspective projection
- Depth of field (defocus blur)
- Configurable field of view
- Arbitrary positioning via look-at

With only an aspect ratio the camera sits at the origin looking down -z
through a viewport of height 2 at unit distance.
"""

from __future__ import annotations
import math
from typing import Optional

from .vec3 import Vec3, Point3
from .ray import Ray
from .sampler import Sampler


class Camera:
    """A camera with perspective projection and depth of field."""

    def __init__(
        self,
        aspect_ratio: float = 16.0 / 9.0,
        look_from: Point3 = Point3(0, 0, 0),
        look_at: Point3 = Point3(0, 0, -1),
        vup: Vec3 = Vec3(0, 1, 0),
        vfov: float = 90.0,
        aperture: float = 0.0,
        focus_dist: float = 1.0,
    ):
        """Create a camera.

        Args:
            aspect_ratio: Width / Height ratio
            look_from: Camera position in world space
            look_at: Point the camera is looking at
            vup: World up vector (usually (0, 1, 0))
            vfov: Vertical field of view in degrees
            aperture: Lens aperture for depth of field (0 = pinhole)
            focus_dist: Distance to the focus plane
        """
        if aspect_ratio <= 0:
            raise ValueError(f"aspect_ratio must be positive, got {aspect_ratio}")

        theta = math.radians(vfov)
        h = math.tan(theta / 2)
        viewport_height = 2.0 * h
        viewport_width = aspect_ratio * viewport_height

        view = look_from - look_at
        if view.near_zero():
            raise ValueError(f"look_from and look_at must differ, both are {look_from}")
        side = vup.cross(view)
        if side.near_zero():
            raise ValueError(f"vup {vup} must not be parallel to the view direction")

        # Orthonormal camera basis
        self.w = view.normalize()  # Points backward from camera
        self.u = side.normalize()  # Points right
        self.v = self.w.cross(self.u)  # Points up

        self.origin = look_from
        self.horizontal = self.u * viewport_width * focus_dist
        self.vertical = self.v * viewport_height * focus_dist
        self.lower_left_corner = (
            self.origin
            - self.horizontal / 2
            - self.vertical / 2
            - self.w * focus_dist
        )

        self.lens_radius = aperture / 2

    def get_ray(self, s: float, t: float, sampler: Optional[Sampler] = None) -> Ray:
        """Generate a ray for the given normalized viewport coordinates.

        Args:
            s: Horizontal coordinate [0, 1] (0 = left, 1 = right)
            t: Vertical coordinate [0, 1] (0 = bottom, 1 = top)
            sampler: Random source for lens sampling; required when aperture > 0

        Returns:
            A ray from the camera through the viewport point, with unit direction
        """
        if self.lens_radius > 0:
            if sampler is None:
                raise ValueError("A sampler is required for cameras with an aperture")
            rd = sampler.random_in_unit_disk() * self.lens_radius
            offset = self.u * rd.x + self.v * rd.y
        else:
            offset = Vec3(0, 0, 0)

        direction = (
            self.lower_left_corner
            + self.horizontal * s
            + self.vertical * t
            - self.origin
            - offset
        )

        return Ray(self.origin + offset, direction.normalize())

    def __repr__(self) -> str:
        return f"Camera(origin={self.origin}, looking_at={self.lower_left_corner + self.horizontal/2 + self.vertical/2})"
