"""
Seedable uniform random sampler.

Every stochastic decision in the renderer (pixel jitter, diffuse bounce
directions, metal fuzz, dielectric reflect-or-refract choice, lens offsets)
draws from a Sampler. A sampler can be split into independent child
streams with ``spawn`` so that separate units of work never share
generator state.
"""

from __future__ import annotations
from typing import Union
import numpy as np

from .interval import Interval, UNIT
from .vec3 import Vec3

SeedLike = Union[int, np.random.SeedSequence, None]


class Sampler:
    """Uniform random number source backed by ``numpy.random.Generator``."""

    def __init__(self, seed: SeedLike = None):
        """Create a sampler.

        Args:
            seed: Integer seed, an existing SeedSequence, or None for fresh entropy
        """
        if isinstance(seed, np.random.SeedSequence):
            self._seed_sequence = seed
        else:
            self._seed_sequence = np.random.SeedSequence(seed)
        self._rng = np.random.default_rng(self._seed_sequence)

    def spawn(self, count: int) -> list[Sampler]:
        """Create independent child samplers of the same type."""
        return [type(self)(child) for child in self._seed_sequence.spawn(count)]

    def random(self) -> float:
        """Return a float in [0, 1)."""
        return float(self._rng.random())

    def uniform(self, interval: Interval = UNIT) -> float:
        """Return a float drawn uniformly from the interval."""
        return interval.min + (interval.max - interval.min) * self.random()

    def random_vec(self, interval: Interval = UNIT) -> Vec3:
        """Vector with each component drawn uniformly from the interval."""
        return Vec3(self.uniform(interval), self.uniform(interval), self.uniform(interval))

    def random_in_unit_sphere(self) -> Vec3:
        """Random point inside the unit sphere (rejection sampled)."""
        bounds = Interval(-1.0, 1.0)
        while True:
            p = self.random_vec(bounds)
            if p.length_squared() < 1:
                return p

    def random_unit_vector(self) -> Vec3:
        """Random direction, uniform over the unit sphere surface."""
        return self.random_in_unit_sphere().normalize()

    def random_in_unit_disk(self) -> Vec3:
        """Random point inside the unit disk in the z=0 plane."""
        bounds = Interval(-1.0, 1.0)
        while True:
            p = Vec3(self.uniform(bounds), self.uniform(bounds), 0)
            if p.length_squared() < 1:
                return p

    def __repr__(self) -> str:
        seq = self._seed_sequence
        return f"{type(self).__name__}(entropy={seq.entropy}, spawn_key={seq.spawn_key})"
