"""
Plain-text PPM (P3) image encoder.

Format: a ``P3`` magic line, ``width height``, the maximum channel value
(255), then one ``r g b`` triple per line from the top row down.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Union

from .image import ImageBuffer

logger = logging.getLogger(__name__)

MAX_CHANNEL_VALUE = 255


class ImageWriteError(OSError):
    """Raised when an image cannot be written to its destination."""


def encode_ppm(image: ImageBuffer) -> str:
    """Serialize an image to P3 text."""
    lines = [
        "P3",
        f"{image.width} {image.height}",
        str(MAX_CHANNEL_VALUE),
    ]
    for row in image.to_uint8():
        lines.extend(f"{r} {g} {b}" for r, g, b in row)
    return "\n".join(lines) + "\n"


def write_ppm(image: ImageBuffer, path: Union[str, Path]) -> Path:
    """Write an image to a P3 file.

    Raises:
        ImageWriteError: If the destination cannot be opened or written
    """
    path = Path(path)
    try:
        path.write_text(encode_ppm(image), encoding="ascii")
    except OSError as exc:
        raise ImageWriteError(f"Cannot write PPM image to {path}: {exc}") from exc

    logger.debug("Wrote %dx%d PPM image to %s", image.width, image.height, path)
    return path
