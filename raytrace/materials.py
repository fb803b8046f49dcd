"""
Surface materials.

Implements:
- Lambertian diffuse
- Metal (specular reflection with fuzz)
- Dielectric (glass, water - with refraction)

A material instance may be shared by any number of shapes; scattering
never mutates it.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional
import math

from .vec3 import Color
from .ray import Ray
from .interval import UNIT
from .sampler import Sampler
from .shapes import HitRecord


@dataclass
class ScatterResult:
    """Result of a material scatter operation."""
    scattered_ray: Ray
    attenuation: Color


class Material(ABC):
    """Abstract base class for materials."""

    @abstractmethod
    def scatter(self, ray_in: Ray, hit: HitRecord, sampler: Sampler) -> Optional[ScatterResult]:
        """Compute the scattered ray and attenuation.

        Args:
            ray_in: The incoming ray
            hit: Intersection record for the surface being shaded
            sampler: Random source for stochastic scattering

        Returns:
            ScatterResult if ray scatters, None if absorbed
        """


class Lambertian(Material):
    """Diffuse material with Lambertian (ideal matte) scattering."""

    def __init__(self, albedo: Color):
        """Create a Lambertian material.

        Args:
            albedo: The base color (RGB, each component 0-1)
        """
        self.albedo = albedo

    def scatter(self, ray_in: Ray, hit: HitRecord, sampler: Sampler) -> Optional[ScatterResult]:
        normal = hit.facing_normal()
        scatter_direction = normal + sampler.random_unit_vector()

        # Catch degenerate scatter direction
        if scatter_direction.near_zero():
            scatter_direction = normal

        return ScatterResult(
            scattered_ray=Ray(hit.point, scatter_direction.normalize()),
            attenuation=self.albedo,
        )

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo})"


class Metal(Material):
    """Metallic material with specular reflection."""

    def __init__(self, albedo: Color, fuzz: float = 0.0):
        """Create a metal material.

        Args:
            albedo: The reflection color
            fuzz: Reflection blur, clamped to [0, 1] (0 = mirror)
        """
        self.albedo = albedo
        self.fuzz = UNIT.clamp(fuzz)

    def scatter(self, ray_in: Ray, hit: HitRecord, sampler: Sampler) -> Optional[ScatterResult]:
        reflected = ray_in.direction.normalize().reflect(hit.normal)

        if self.fuzz > 0:
            reflected = (reflected + sampler.random_unit_vector() * self.fuzz).normalize()

        # Fuzz may push the reflection below the surface; treat as absorbed
        if reflected.dot(hit.normal) <= 0:
            return None

        return ScatterResult(
            scattered_ray=Ray(hit.point, reflected),
            attenuation=self.albedo,
        )

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo}, fuzz={self.fuzz})"


class Dielectric(Material):
    """Dielectric (glass-like) material with refraction."""

    def __init__(self, ior: float = 1.5, tint: Optional[Color] = None):
        """Create a dielectric material.

        Args:
            ior: Index of refraction (1.0 = air, 1.5 = glass, 2.4 = diamond)
            tint: Optional color tint for the glass
        """
        self.ior = ior
        self.tint = tint if tint is not None else Color(1, 1, 1)

    def scatter(self, ray_in: Ray, hit: HitRecord, sampler: Sampler) -> Optional[ScatterResult]:
        # Entering the surface uses 1/ior, leaving it uses ior
        refraction_ratio = 1.0 / self.ior if hit.front_face else self.ior
        normal = hit.facing_normal()

        unit_direction = ray_in.direction.normalize()
        cos_theta = min(-unit_direction.dot(normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = refraction_ratio * sin_theta > 1.0

        if cannot_refract or self._reflectance(cos_theta, refraction_ratio) > sampler.random():
            direction = unit_direction.reflect(normal)
        else:
            direction = unit_direction.refract(normal, refraction_ratio)
            if direction.near_zero():
                # Rounding at the critical angle, reflect instead
                direction = unit_direction.reflect(normal)

        return ScatterResult(
            scattered_ray=Ray(hit.point, direction.normalize()),
            attenuation=self.tint,
        )

    @staticmethod
    def _reflectance(cosine: float, ref_idx: float) -> float:
        """Schlick's approximation for reflectance."""
        r0 = (1 - ref_idx) / (1 + ref_idx)
        r0 = r0 * r0
        return r0 + (1 - r0) * pow(1 - cosine, 5)

    def __repr__(self) -> str:
        return f"Dielectric(ior={self.ior}, tint={self.tint})"
