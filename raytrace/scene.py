"""
Scene container with a brute-force nearest-hit query.
"""

from __future__ import annotations
from typing import Iterator, Optional

from .ray import Ray
from .interval import Interval
from .shapes import Hittable, HitRecord


class Scene(Hittable):
    """An ordered collection of hittable objects."""

    def __init__(self, objects: Optional[list[Hittable]] = None):
        self.objects: list[Hittable] = list(objects) if objects is not None else []

    def add(self, obj: Hittable) -> None:
        """Add an object to the scene."""
        self.objects.append(obj)

    def clear(self) -> None:
        """Remove all objects."""
        self.objects.clear()

    def hit(self, ray: Ray, interval: Interval) -> Optional[HitRecord]:
        """Find the closest intersection among all objects.

        Each object is tested against the interval with its upper bound
        shrunk to the nearest hit found so far, so a farther object can
        never replace a nearer one whatever the scan order.
        """
        closest_hit: Optional[HitRecord] = None
        closest_t = interval.max

        for obj in self.objects:
            hit_record = obj.hit(ray, interval.with_max(closest_t))
            if hit_record is not None:
                closest_hit = hit_record
                closest_t = hit_record.t

        return closest_hit

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)
