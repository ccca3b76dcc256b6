"""
LumenForge - A Python Ray Tracing Renderer

An offline path tracer for sphere scenes with support for:
- Diffuse, metal and dielectric materials
- Depth of field (defocus blur)
- Jittered antialiasing
- Multi-threaded, seed-deterministic rendering
- PPM/PNG output
"""

__version__ = "0.1.0"
__author__ = "LumenForge Team"

from .vec3 import Vec3, Point3, Color
from .ray import Ray
from .shapes import Hittable, HitRecord, Sphere
from .scene import HittableList, Scene, single_sphere_scene, demo_scene, random_scene
from .materials import Material, ScatterResult, Lambertian, Metal, Dielectric
from .camera import Camera, CameraSettings
from .renderer import Renderer, RenderSettings, ray_color, sky_color, to_ldr
from .image_io import format_ppm, write_ppm, write_image
from .scene_parser import SceneParser, load_scene, parse_scene
from .errors import LumenForgeError, SettingsError, CameraError, SceneParseError
