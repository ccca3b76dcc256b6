"""
Camera module for generating primary rays.

Supports:
- Perspective projection
- Depth of field (defocus blur)
- Configurable field of view
- Arbitrary positioning via look-at
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .vec3 import Vec3, Point3
from .ray import Ray
from .errors import CameraError


@dataclass
class CameraSettings:
    """Plain camera configuration, as read from the CLI or a scene file."""
    look_from: Point3 = field(default_factory=lambda: Point3(0, 0, 0))
    look_at: Point3 = field(default_factory=lambda: Point3(0, 0, -1))
    vup: Vec3 = field(default_factory=lambda: Vec3(0, 1, 0))
    vfov: float = 90.0
    aperture: float = 0.0
    focus_dist: float = 1.0
    defocus_angle: Optional[float] = None


class Camera:
    """A camera with perspective projection and depth of field.

    The image plane is parametrized by (s, t) in [0, 1], with (0, 0) at the
    bottom-left corner and (1, 1) at the top-right corner.
    """

    def __init__(
        self,
        look_from: Point3,
        look_at: Point3,
        vup: Vec3 = Vec3(0, 1, 0),
        vfov: float = 90.0,
        aspect_ratio: float = 16.0 / 9.0,
        aperture: float = 0.0,
        focus_dist: float = 1.0,
        defocus_angle: Optional[float] = None
    ):
        """Create a camera.

        Args:
            look_from: Camera position in world space
            look_at: Point the camera is looking at
            vup: World up vector (usually (0, 1, 0))
            vfov: Vertical field of view in degrees
            aspect_ratio: Width / Height ratio
            aperture: Lens diameter for depth of field (0 = pinhole)
            focus_dist: Distance to the focus plane
            defocus_angle: Cone angle in degrees of rays through each pixel;
                overrides aperture when given

        Raises:
            CameraError: if the parameters do not define a usable view frame
        """
        if not 0 < vfov < 180:
            raise CameraError(f"vfov must be in (0, 180) degrees, got {vfov}")
        if not aspect_ratio > 0:
            raise CameraError(f"aspect_ratio must be positive, got {aspect_ratio}")
        if not focus_dist > 0:
            raise CameraError(f"focus_dist must be positive, got {focus_dist}")
        if aperture < 0 or (defocus_angle is not None and defocus_angle < 0):
            raise CameraError("aperture and defocus_angle must not be negative")

        view = look_from - look_at
        if view.near_zero():
            raise CameraError("look_from and look_at must be distinct points")
        side = vup.cross(view)
        if side.near_zero():
            raise CameraError("vup must not be parallel to the viewing direction")

        theta = math.radians(vfov)
        h = math.tan(theta / 2)
        viewport_height = 2.0 * h
        viewport_width = aspect_ratio * viewport_height

        # Compute orthonormal camera basis
        self.w = view.normalize()           # Points backward from camera
        self.u = side.normalize()           # Points right
        self.v = self.w.cross(self.u)       # Points up

        self.origin = look_from
        self.focus_dist = focus_dist
        self.horizontal = self.u * (viewport_width * focus_dist)
        self.vertical = self.v * (viewport_height * focus_dist)
        self.lower_left_corner = (
            self.origin
            - self.horizontal / 2
            - self.vertical / 2
            - self.w * focus_dist
        )

        if defocus_angle is not None:
            self.lens_radius = focus_dist * math.tan(math.radians(defocus_angle) / 2)
        else:
            self.lens_radius = aperture / 2

    @classmethod
    def from_settings(cls, settings: CameraSettings, aspect_ratio: float) -> Camera:
        """Build a camera from a CameraSettings block."""
        return cls(
            look_from=settings.look_from,
            look_at=settings.look_at,
            vup=settings.vup,
            vfov=settings.vfov,
            aspect_ratio=aspect_ratio,
            aperture=settings.aperture,
            focus_dist=settings.focus_dist,
            defocus_angle=settings.defocus_angle
        )

    def get_ray(self, s: float, t: float, rng: Optional[np.random.Generator] = None) -> Ray:
        """Generate a ray for the given coordinates on the image plane.

        Args:
            s: Horizontal coordinate [0, 1] (0 = left, 1 = right)
            t: Vertical coordinate [0, 1] (0 = bottom, 1 = top)
            rng: Random generator for lens sampling; required when the
                lens radius is nonzero

        Returns:
            A ray from the camera lens through the focus plane point (s, t)
        """
        if self.lens_radius > 0:
            if rng is None:
                raise ValueError("a random generator is required for defocus blur")
            rd = Vec3.random_in_unit_disk(rng) * self.lens_radius
            offset = self.u * rd.x + self.v * rd.y
            origin = self.origin + offset
        else:
            origin = self.origin

        target = self.lower_left_corner + self.horizontal * s + self.vertical * t
        return Ray(origin, target - origin)

    def __repr__(self) -> str:
        return f"Camera(origin={self.origin}, looking_at={self.lower_left_corner + self.horizontal/2 + self.vertical/2})"
