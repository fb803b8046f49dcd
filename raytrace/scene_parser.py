"""
Scene description parser.

Reads a JSON scene description with:
- Camera configuration
- Render settings
- Materials library (shared by name)
- Objects (shapes with materials)

Example scene file:
```json
{
  "camera": {"look_from": [0, 0, 0], "look_at": [0, 0, -1], "vfov": 90},
  "render": {"width": 384, "height": 256, "samples": 100, "max_depth": 50},
  "materials": {
    "ground": {"type": "lambertian", "albedo": [0.8, 0.8, 0.0]},
    "gold": {"type": "metal", "albedo": [0.8, 0.6, 0.2], "fuzz": 1.0}
  },
  "objects": [
    {"type": "sphere", "center": [0, -100.5, -1], "radius": 100, "material": "ground"},
    {"type": "sphere", "center": [1, 0, -1], "radius": 0.5, "material": "gold"}
  ]
}
```
"""

from __future__ import annotations
import json
import math
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Tuple, Union

from .vec3 import Vec3, Point3, Color
from .camera import Camera
from .shapes import Sphere
from .scene import Scene
from .materials import Material, Lambertian, Metal, Dielectric
from .renderer import RenderSettings

logger = logging.getLogger(__name__)


class SceneParseError(Exception):
    """Error during scene parsing."""


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = {}
        self.scene: Scene = Scene()
        self.camera: Optional[Camera] = None
        self.settings: Optional[RenderSettings] = None

    def parse_file(self, filepath: Union[str, Path]) -> Tuple[Scene, Camera, RenderSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the JSON scene file

        Returns:
            Tuple of (scene, camera, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError as exc:
            raise SceneParseError(f"Invalid JSON in {filepath}: {exc}") from exc

        logger.debug("Loaded scene description from %s", path)
        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[Scene, Camera, RenderSettings]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (scene, camera, settings)
        """
        if not isinstance(data, dict):
            raise SceneParseError(f"Scene description must be an object, got {type(data).__name__}")

        # Settings first, the camera needs the aspect ratio
        self.settings = self._parse_render_settings(self._section(data, 'render', dict))

        # Materials before objects, objects reference them
        for name, mat_data in self._section(data, 'materials', dict).items():
            self.materials[name] = self._parse_material(mat_data)

        for obj_data in self._section(data, 'objects', list):
            self.scene.add(self._parse_object(obj_data))

        self.camera = self._parse_camera(self._section(data, 'camera', dict), self.settings.aspect_ratio)

        logger.info(
            "Parsed scene: %d objects, %d named materials", len(self.scene), len(self.materials)
        )
        return self.scene, self.camera, self.settings

    def _parse_vec3(self, data: Any) -> Vec3:
        """Parse a Vec3 from a 3-element list."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Vec3 must have 3 components, got {len(data)}")
            try:
                return Vec3(float(data[0]), float(data[1]), float(data[2]))
            except (TypeError, ValueError) as exc:
                raise SceneParseError(f"Cannot parse Vec3 from: {data}") from exc
        raise SceneParseError(f"Cannot parse Vec3 from: {data}")

    def _parse_color(self, data: Any) -> Color:
        """Parse a color from a list or a single grey value."""
        if isinstance(data, (int, float)) and not isinstance(data, bool):
            return Color(data, data, data)
        return self._parse_vec3(data)

    def _parse_material(self, data: Dict[str, Any]) -> Material:
        """Parse a material definition."""
        if not isinstance(data, dict):
            raise SceneParseError(f"Material definition must be an object: {data}")

        mat_type = self._parse_type(data, 'lambertian')

        if mat_type in ('lambertian', 'lambert', 'diffuse'):
            return Lambertian(self._parse_color(data.get('albedo', [0.5, 0.5, 0.5])))
        elif mat_type == 'metal':
            return Metal(
                self._parse_color(data.get('albedo', [0.8, 0.8, 0.8])),
                self._parse_float(data, 'fuzz', 0.0),
            )
        elif mat_type in ('dielectric', 'glass'):
            tint = self._parse_color(data['tint']) if 'tint' in data else None
            return Dielectric(self._parse_float(data, 'ior', 1.5), tint)
        raise SceneParseError(f"Unknown material type: {mat_type}")

    def _resolve_material(self, mat_ref: Any) -> Material:
        """Look up a named material or parse an inline one."""
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        if isinstance(mat_ref, dict):
            return self._parse_material(mat_ref)
        raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _parse_object(self, data: Dict[str, Any]) -> Sphere:
        """Parse an object definition."""
        if not isinstance(data, dict):
            raise SceneParseError(f"Object definition must be an object: {data}")

        obj_type = self._parse_type(data, '')
        if obj_type != 'sphere':
            raise SceneParseError(f"Unknown object type: {obj_type}")

        if 'center' not in data or 'radius' not in data:
            raise SceneParseError(f"Sphere requires 'center' and 'radius': {data}")

        radius = self._parse_float(data, 'radius', None)
        if radius <= 0:
            raise SceneParseError(f"Sphere radius must be positive, got {radius}")

        material = self._resolve_material(data['material']) if 'material' in data else None
        return Sphere(self._parse_vec3(data['center']), radius, material)

    def _parse_camera(self, data: Dict[str, Any], aspect_ratio: float) -> Camera:
        """Parse camera configuration."""
        look_from = self._parse_vec3(data.get('look_from', [0, 0, 0]))
        look_at = self._parse_vec3(data.get('look_at', [0, 0, -1]))
        vup = self._parse_vec3(data.get('vup', [0, 1, 0]))
        vfov = self._parse_float(data, 'vfov', 90.0)
        aperture = self._parse_float(data, 'aperture', 0.0)
        focus_dist = self._parse_float(data, 'focus_dist', 1.0)

        if not 0 < vfov < 180:
            raise SceneParseError(f"Camera vfov must be between 0 and 180 degrees, got {vfov}")
        if aperture < 0 or focus_dist <= 0:
            raise SceneParseError(
                f"Camera needs aperture >= 0 and focus_dist > 0, got {aperture} and {focus_dist}"
            )

        try:
            return Camera(
                aspect_ratio=aspect_ratio,
                look_from=look_from,
                look_at=look_at,
                vup=vup,
                vfov=vfov,
                aperture=aperture,
                focus_dist=focus_dist,
            )
        except ValueError as exc:
            raise SceneParseError(f"Invalid camera: {exc}") from exc

    def _section(self, data: Dict[str, Any], key: str, expected: type) -> Any:
        """Fetch a top-level section, empty when absent."""
        value = data.get(key, expected())
        if not isinstance(value, expected):
            kind = 'an object' if expected is dict else 'a list'
            raise SceneParseError(f"'{key}' must be {kind}, got {type(value).__name__}")
        return value

    def _parse_type(self, data: Dict[str, Any], default: str) -> str:
        type_name = data.get('type', default)
        if not isinstance(type_name, str):
            raise SceneParseError(f"'type' must be a string, got {type_name!r}")
        return type_name.lower()

    def _parse_float(self, data: Dict[str, Any], key: str, default: Optional[float]) -> float:
        """Parse a numeric field, falling back to default when absent."""
        value = data.get(key, default)
        if isinstance(value, bool):
            raise SceneParseError(f"'{key}' must be a number, got {value!r}")
        try:
            number = float(value)
        except (TypeError, ValueError) as exc:
            raise SceneParseError(f"'{key}' must be a number, got {value!r}") from exc
        if not math.isfinite(number):
            raise SceneParseError(f"'{key}' must be finite, got {value!r}")
        return number

    def _parse_render_settings(self, data: Dict[str, Any]) -> RenderSettings:
        """Parse render settings; configuration errors propagate unchanged."""
        defaults = RenderSettings()
        return RenderSettings(
            width=data.get('width', defaults.width),
            height=data.get('height', defaults.height),
            samples_per_pixel=data.get('samples', defaults.samples_per_pixel),
            max_depth=data.get('max_depth', defaults.max_depth),
            seed=data.get('seed', defaults.seed),
        )


def load_scene(filepath: Union[str, Path]) -> Tuple[Scene, Camera, RenderSettings]:
    """Load a scene from a JSON file.

    Args:
        filepath: Path to scene file

    Returns:
        Tuple of (scene, camera, settings)
    """
    return SceneParser().parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[Scene, Camera, RenderSettings]:
    """Parse a scene from a dictionary."""
    return SceneParser().parse_dict(data)
