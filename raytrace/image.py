"""
Pixel storage for rendered images.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Tuple
import numpy as np

from .vec3 import Color
from .interval import UNIT

Pixel = Tuple[int, int]


@dataclass(frozen=True)
class PixelRange:
    """Half-open integer rectangle ``[min, max)`` of pixel coordinates.

    Iteration yields ``(x, y)`` tuples row by row, starting at the bottom row.
    """
    min: Pixel
    max: Pixel

    @property
    def is_empty(self) -> bool:
        return self.min[0] >= self.max[0] or self.min[1] >= self.max[1]

    def __iter__(self) -> Iterator[Pixel]:
        for y in range(self.min[1], self.max[1]):
            for x in range(self.min[0], self.max[0]):
                yield (x, y)

    def __len__(self) -> int:
        if self.is_empty:
            return 0
        return (self.max[0] - self.min[0]) * (self.max[1] - self.min[1])

    def __contains__(self, pixel: object) -> bool:
        if not isinstance(pixel, tuple) or len(pixel) != 2:
            return False
        x, y = pixel
        return self.min[0] <= x < self.max[0] and self.min[1] <= y < self.max[1]


class ImageBuffer:
    """RGB float image addressed as ``image[x, y]`` with y = 0 at the bottom.

    The backing ``pixels`` array has shape (height, width, 3) with row 0 the
    top of the image, the layout image encoders and Pillow expect.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 3), dtype=np.float64)

    def extent(self) -> PixelRange:
        """The rectangle of every pixel coordinate in this image."""
        return PixelRange((0, 0), (self.width, self.height))

    def _index(self, pixel: Pixel) -> Tuple[int, int]:
        x, y = pixel
        if (x, y) not in self.extent():
            raise IndexError(f"Pixel {pixel} outside {self.width}x{self.height} image")
        return self.height - 1 - y, x

    def __getitem__(self, pixel: Pixel) -> Color:
        return Color.from_array(self.pixels[self._index(pixel)].copy())

    def __setitem__(self, pixel: Pixel, color: Color) -> None:
        self.pixels[self._index(pixel)] = color.to_array()

    @property
    def shape(self) -> Tuple[int, int, int]:
        return self.pixels.shape

    def to_uint8(self) -> np.ndarray:
        """Convert to 8-bit channels, mapping [0, 1] onto [0, 255]."""
        clamped = np.clip(self.pixels, UNIT.min, UNIT.max)
        return (clamped * 255.999).astype(np.uint8)

    def __repr__(self) -> str:
        return f"ImageBuffer({self.width}x{self.height})"
