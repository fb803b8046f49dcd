"""
raytrace - A recursive Python ray tracer

Renders static scenes of spheres to an image with support for:
- Lambertian, metal and dielectric materials
- Stochastic antialiasing with seeded, reproducible sampling
- Perspective camera with optional depth of field
- PPM and Pillow image output
"""

__version__ = "0.1.0"

from .vec3 import Vec3, Point3, Color
from .interval import Interval, EMPTY, UNIVERSE, UNIT
from .sampler import Sampler
from .ray import Ray
from .shapes import Hittable, HitRecord, Sphere
from .scene import Scene
from .materials import Material, ScatterResult, Lambertian, Metal, Dielectric
from .camera import Camera
from .image import ImageBuffer, PixelRange
from .ppm import ImageWriteError, encode_ppm, write_ppm
from .renderer import (
    Renderer, RenderSettings, ConfigurationError, sky_color, HIT_EPSILON, HIT_INTERVAL
)
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
