"""
Closed float ranges.

Intervals bound valid hit magnitudes along a ray and the normalized ranges
used for sampling and color clamping. A default-constructed interval is
empty: its minimum sits at the largest representable float and its maximum
at the smallest, so no value is contained. Emptiness is exposed through
the explicit ``is_empty`` predicate.
"""

from __future__ import annotations
import sys
from dataclasses import dataclass

_FLOAT_MAX = sys.float_info.max


@dataclass(frozen=True)
class Interval:
    """A float range ``[min, max]``."""
    min: float = _FLOAT_MAX
    max: float = -_FLOAT_MAX

    @property
    def is_empty(self) -> bool:
        return self.min > self.max

    @property
    def size(self) -> float:
        return self.max - self.min

    def contains(self, value: float) -> bool:
        """True if min <= value <= max."""
        return self.min <= value <= self.max

    def surrounds(self, value: float) -> bool:
        """True if min < value < max."""
        return self.min < value < self.max

    def clamp(self, value: float) -> float:
        """Limit value to the interval bounds."""
        if self.is_empty:
            raise ValueError(f"Cannot clamp into empty interval {self!r}")
        return min(max(value, self.min), self.max)

    def with_max(self, maximum: float) -> Interval:
        """Return a copy with the upper bound replaced."""
        return Interval(self.min, maximum)


EMPTY = Interval()
UNIVERSE = Interval(-float('inf'), float('inf'))
UNIT = Interval(0.0, 1.0)
