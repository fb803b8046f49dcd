"""
Renderer module - the heart of the ray tracer.

Implements:
- Path tracing with a fixed bounce limit
- Stochastic supersampling (jittered rays per pixel)
- Gamma correction and clamping into a displayable buffer
- Image output (PPM and anything Pillow can write)
"""

from __future__ import annotations
import logging
import math
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Callable, Union
import numpy as np

from .vec3 import Color
from .ray import Ray
from .camera import Camera
from .interval import Interval, UNIT
from .sampler import Sampler
from .shapes import Hittable
from .image import ImageBuffer
from .ppm import ImageWriteError, write_ppm

logger = logging.getLogger(__name__)

# Hits closer than this are culled to avoid shadow acne
HIT_EPSILON = 0.001
HIT_INTERVAL = Interval(HIT_EPSILON, math.inf)

SKY_HORIZON = Color(1.0, 1.0, 1.0)
SKY_ZENITH = Color(0.5, 0.7, 1.0)
BLACK = Color(0.0, 0.0, 0.0)


class ConfigurationError(ValueError):
    """Raised when render settings are invalid."""


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    width: int = 384
    height: int = 256
    samples_per_pixel: int = 100
    max_depth: int = 50
    seed: Optional[int] = None
    gamma: float = 2.0

    def __post_init__(self):
        for name in ('width', 'height', 'samples_per_pixel'):
            value = getattr(self, name)
            if not _is_int(value) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
        if not _is_int(self.max_depth) or self.max_depth < 0:
            raise ConfigurationError(f"max_depth must be a non-negative integer, got {self.max_depth!r}")
        if self.seed is not None and not _is_int(self.seed):
            raise ConfigurationError(f"seed must be an integer, got {self.seed!r}")
        if not self.gamma > 0:
            raise ConfigurationError(f"gamma must be positive, got {self.gamma!r}")

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


def _is_int(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def sky_color(ray: Ray) -> Color:
    """Vertical white-to-blue gradient used when a ray escapes the scene."""
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return Color.lerp(SKY_HORIZON, SKY_ZENITH, t)


class Renderer:
    """Single-threaded path tracing renderer."""

    def __init__(self, settings: Optional[RenderSettings] = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings is not None else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, scene: Hittable, camera: Camera, sampler: Optional[Sampler] = None) -> ImageBuffer:
        """Render the scene into a new image buffer.

        Every image row draws from its own child stream of the sampler, so a
        seeded render is reproducible pixel for pixel.

        Args:
            scene: The scene to render (any Hittable)
            camera: The camera to render from
            sampler: Random source; defaults to one seeded from the settings

        Returns:
            Gamma-corrected image with channels in [0, 1]
        """
        settings = self.settings
        if sampler is None:
            sampler = Sampler(settings.seed)

        image = ImageBuffer(settings.width, settings.height)
        row_samplers = sampler.spawn(settings.height)

        logger.info(
            "Rendering %dx%d, %d samples/pixel, bounce limit %d",
            settings.width, settings.height, settings.samples_per_pixel, settings.max_depth,
        )
        start_time = time.perf_counter()

        for y in range(settings.height):
            row_sampler = row_samplers[y]
            for x in range(settings.width):
                image[x, y] = self.sample_pixel(x, y, scene, camera, row_sampler)

            if self._progress_callback:
                self._progress_callback((y + 1) / settings.height)

        elapsed = time.perf_counter() - start_time
        primary_rays = settings.width * settings.height * settings.samples_per_pixel
        logger.info(
            "Render completed in %.2fs (%.0f primary rays/s)",
            elapsed, primary_rays / elapsed if elapsed > 0 else float('inf'),
        )
        return image

    def sample_pixel(self, x: int, y: int, scene: Hittable, camera: Camera, sampler: Sampler) -> Color:
        """Average jittered samples for one pixel, then gamma correct and clamp."""
        settings = self.settings
        pixel_color = Color(0, 0, 0)

        for _ in range(settings.samples_per_pixel):
            u = (x + sampler.random()) / settings.width
            v = (y + sampler.random()) / settings.height
            ray = camera.get_ray(u, v, sampler)
            pixel_color = pixel_color + self.ray_color(ray, scene, settings.max_depth, sampler)

        pixel_color = pixel_color / settings.samples_per_pixel
        return self._gamma_correct(pixel_color).clamp(UNIT)

    def ray_color(self, ray: Ray, scene: Hittable, depth: int, sampler: Sampler) -> Color:
        """Compute the color seen along a ray.

        Follows the ray through at most ``depth`` scatter events, multiplying
        the attenuation of every surface it bounces off. A ray that runs out
        of bounces or is absorbed contributes black; one that escapes picks
        up the sky gradient.

        Args:
            ray: The ray to trace
            scene: The scene to trace against
            depth: Remaining number of bounces
            sampler: Random source for material scattering

        Returns:
            The computed color for this ray
        """
        throughput = Color(1.0, 1.0, 1.0)
        current = ray

        for _ in range(depth):
            hit_record = scene.hit(current, HIT_INTERVAL)

            if hit_record is None:
                return throughput * sky_color(current)

            if hit_record.material is None:
                # No material - shade by surface normal
                return throughput * (hit_record.normal + Color(1, 1, 1)) * 0.5

            scatter_result = hit_record.material.scatter(current, hit_record, sampler)
            if scatter_result is None:
                return BLACK

            throughput = throughput * scatter_result.attenuation
            current = scatter_result.scattered_ray

        return BLACK

    def _gamma_correct(self, color: Color) -> Color:
        gamma = self.settings.gamma
        if gamma == 2.0:
            return color.sqrt()
        return Color.from_array(np.power(np.maximum(color.to_array(), 0.0), 1.0 / gamma))

    def save_image(self, image: ImageBuffer, filename: Union[str, Path]) -> Path:
        """Save image to file.

        ``.ppm`` files are written as plain-text PPM; any other extension is
        handed to Pillow.

        Raises:
            ImageWriteError: If the image cannot be written
        """
        path = Path(filename)

        if path.suffix.lower() == '.ppm':
            write_ppm(image, path)
        else:
            from PIL import Image as PILImage

            try:
                PILImage.fromarray(image.to_uint8()).save(path)
            except (OSError, ValueError) as exc:
                raise ImageWriteError(f"Cannot write image to {path}: {exc}") from exc

        logger.info("Saved %dx%d image to %s", image.width, image.height, path)
        return path
