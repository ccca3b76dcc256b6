"""
Scene description language parser.

Supports a YAML (or JSON) scene description format with:
- Camera configuration
- Render settings
- Materials library (shared by name)
- Objects (spheres with materials)

Example scene file:
```yaml
camera:
  look_from: [13, 2, 3]
  look_at: [0, 0, 0]
  vfov: 20
  aperture: 0.1
  focus_dist: 10

render:
  width: 800
  aspect_ratio: 1.5
  samples: 100
  max_depth: 50
  seed: 7

materials:
  ground:
    type: lambertian
    albedo: [0.5, 0.5, 0.5]

  glass:
    type: dielectric
    ior: 1.5

objects:
  - type: sphere
    center: [0, -1000, 0]
    radius: 1000
    material: ground

  - type: sphere
    center: [0, 1, 0]
    radius: 1
    material: glass
```
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Tuple

import yaml

from .vec3 import Vec3, Color
from .camera import Camera, CameraSettings
from .shapes import Hittable, Sphere
from .scene import Scene
from .materials import Material, Lambertian, Metal, Dielectric
from .renderer import RenderSettings
from .errors import SceneParseError, SettingsError, CameraError

logger = logging.getLogger(__name__)


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = {}
        self.objects: list[Hittable] = []
        self.camera_settings: CameraSettings = CameraSettings()
        self.settings: Optional[RenderSettings] = None

    def parse_file(self, filepath: str) -> Tuple[Scene, Camera, RenderSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (scene, camera, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        try:
            content = path.read_text()
        except (OSError, UnicodeDecodeError) as e:
            raise SceneParseError(f"Cannot read {filepath}: {e}") from e

        try:
            if path.suffix == '.json':
                data = json.loads(content)
            else:
                # YAML is a superset of JSON, so it handles unknown suffixes too
                data = yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SceneParseError(f"Cannot read {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file must contain a mapping, got {type(data).__name__}")

        logger.debug("Parsing scene file %s", path)
        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[Scene, Camera, RenderSettings]:
        """Parse a scene from a dictionary.

        Each call starts from an empty scene, so one parser can load
        several descriptions in turn.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (scene, camera, settings)
        """
        if not isinstance(data, dict):
            raise SceneParseError(f"Scene description must be a mapping, got {type(data).__name__}")

        self.materials = {}
        self.objects = []
        self.camera_settings = CameraSettings()
        self.settings = None

        # Parse materials first (objects reference them)
        self._parse_materials(self._section(data, 'materials', dict))
        self._parse_objects(self._section(data, 'objects', list))
        self._parse_camera(self._section(data, 'camera', dict))

        try:
            self.settings = self._parse_settings(self._section(data, 'render', dict))
            camera = Camera.from_settings(self.camera_settings, self.settings.aspect_ratio)
        except (SettingsError, CameraError) as e:
            raise SceneParseError(str(e)) from e

        scene = Scene(self.objects)
        logger.info("Loaded scene with %d objects and %d materials", len(scene), len(self.materials))
        return scene, camera, self.settings

    @staticmethod
    def _section(data: Dict[str, Any], key: str, kind: type) -> Any:
        """Fetch a top-level section; missing or empty sections are empty."""
        section = data.get(key)
        if section is None:
            return kind()
        if not isinstance(section, kind):
            expected = 'a mapping' if kind is dict else 'a list'
            raise SceneParseError(f"'{key}' must be {expected}, got {type(section).__name__}")
        return section

    @staticmethod
    def _number(value: Any, what: str, convert=float):
        """Convert a scalar field, reporting bad values as parse errors."""
        if isinstance(value, (dict, list, tuple)):
            raise SceneParseError(f"{what} must be a number, got {value!r}")
        try:
            return convert(value)
        except (TypeError, ValueError, OverflowError) as e:
            raise SceneParseError(f"{what} must be a number, got {value!r}") from e

    def _parse_vec3(self, data: Any, what: str = 'vector') -> Vec3:
        """Parse a Vec3 from various formats."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"{what} must have 3 components, got {len(data)}")
            return Vec3(*(self._number(c, what) for c in data))
        elif isinstance(data, dict):
            return Vec3(
                self._number(data.get('x', 0), what),
                self._number(data.get('y', 0), what),
                self._number(data.get('z', 0), what)
            )
        else:
            raise SceneParseError(f"Cannot parse {what} from: {data!r}")

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from various formats."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Color must have 3 components, got {len(data)}")
            return Color(*(self._number(c, 'color') for c in data))
        elif isinstance(data, dict):
            return Color(
                self._number(data.get('r', 0), 'color'),
                self._number(data.get('g', 0), 'color'),
                self._number(data.get('b', 0), 'color')
            )
        elif isinstance(data, str):
            # Handle hex colors
            if data.startswith('#') and len(data) == 7:
                try:
                    r = int(data[1:3], 16) / 255.0
                    g = int(data[3:5], 16) / 255.0
                    b = int(data[5:7], 16) / 255.0
                except ValueError as e:
                    raise SceneParseError(f"Cannot parse color from string: {data}") from e
                return Color(r, g, b)
            raise SceneParseError(f"Cannot parse color from string: {data}")
        else:
            raise SceneParseError(f"Cannot parse Color from: {data!r}")

    def _build_material(self, mat_data: Any) -> Material:
        if not isinstance(mat_data, dict):
            raise SceneParseError(f"Material must be a mapping, got {mat_data!r}")
        mat_type = str(mat_data.get('type', 'lambertian')).lower()

        if mat_type == 'lambertian':
            return Lambertian(self._parse_color(mat_data.get('albedo', [0.5, 0.5, 0.5])))

        if mat_type == 'metal':
            albedo = self._parse_color(mat_data.get('albedo', [0.8, 0.8, 0.8]))
            return Metal(albedo, self._number(mat_data.get('fuzz', 0.0), 'fuzz'))

        if mat_type == 'dielectric':
            ior = self._number(mat_data.get('ior', 1.5), 'ior')
            try:
                return Dielectric(ior)
            except ValueError as e:
                raise SceneParseError(str(e)) from e

        raise SceneParseError(f"Unknown material type: {mat_type}")

    def _parse_materials(self, materials_data: Dict[str, Any]) -> None:
        """Parse materials section."""
        for name, mat_data in materials_data.items():
            self.materials[name] = self._build_material(mat_data)

    def _get_material(self, mat_ref: Any) -> Material:
        """Get a material by name or inline definition."""
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        elif isinstance(mat_ref, dict):
            return self._build_material(mat_ref)
        else:
            raise SceneParseError(f"Invalid material reference: {mat_ref!r}")

    def _parse_objects(self, objects_data: list) -> None:
        """Parse objects section."""
        for index, obj_data in enumerate(objects_data):
            if not isinstance(obj_data, dict):
                raise SceneParseError(f"Object {index} must be a mapping, got {obj_data!r}")
            if obj_data.get('material') is None:
                raise SceneParseError(f"Object {index} has no material")

            obj_type = str(obj_data.get('type', 'sphere')).lower()
            material = self._get_material(obj_data['material'])

            if obj_type == 'sphere':
                center = self._parse_vec3(obj_data.get('center', [0, 0, 0]), 'center')
                radius = self._number(obj_data.get('radius', 1.0), 'radius')
                try:
                    self.objects.append(Sphere(center, radius, material))
                except ValueError as e:
                    raise SceneParseError(str(e)) from e

            else:
                raise SceneParseError(f"Unknown object type: {obj_type}")

    def _parse_camera(self, camera_data: Dict[str, Any]) -> None:
        """Parse camera section."""
        defocus_angle = camera_data.get('defocus_angle')
        self.camera_settings = CameraSettings(
            look_from=self._parse_vec3(camera_data.get('look_from', [0, 0, 0]), 'look_from'),
            look_at=self._parse_vec3(camera_data.get('look_at', [0, 0, -1]), 'look_at'),
            vup=self._parse_vec3(camera_data.get('vup', [0, 1, 0]), 'vup'),
            vfov=self._number(camera_data.get('vfov', 90), 'vfov'),
            aperture=self._number(camera_data.get('aperture', 0.0), 'aperture'),
            focus_dist=self._number(camera_data.get('focus_dist', 1.0), 'focus_dist'),
            defocus_angle=(self._number(defocus_angle, 'defocus_angle')
                           if defocus_angle is not None else None)
        )

    def _parse_settings(self, settings_data: Dict[str, Any]) -> RenderSettings:
        """Parse render settings section."""
        def integer(key, default):
            return self._number(settings_data.get(key, default), key, int)

        seed = settings_data.get('seed')
        return RenderSettings(
            width=integer('width', 400),
            aspect_ratio=self._number(settings_data.get('aspect_ratio', 16 / 9), 'aspect_ratio'),
            height=integer('height', 0),
            samples_per_pixel=integer('samples', 100),
            max_depth=integer('max_depth', 50),
            rows_per_task=integer('rows_per_task', 8),
            num_threads=integer('threads', 0),
            seed=integer('seed', None) if seed is not None else None
        )


def load_scene(filepath: str) -> Tuple[Scene, Camera, RenderSettings]:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (scene, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[Scene, Camera, RenderSettings]:
    """Convenience function to parse a scene from a dictionary.

    Args:
        data: Scene description dictionary

    Returns:
        Tuple of (scene, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_dict(data)
