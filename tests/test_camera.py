"""Tests for Camera class."""

import math
import pytest
import numpy as np

from lumenforge.vec3 import Vec3, Point3
from lumenforge.camera import Camera, CameraSettings
from lumenforge.errors import CameraError


def pinhole(**kwargs):
    params = dict(
        look_from=Point3(0, 0, 0),
        look_at=Point3(0, 0, -1),
        vup=Vec3(0, 1, 0),
        vfov=90,
        aspect_ratio=1.0
    )
    params.update(kwargs)
    return Camera(**params)


class TestCameraCreation:
    """Test Camera construction."""

    def test_origin(self):
        assert pinhole().origin == Point3(0, 0, 0)

    def test_camera_basis_vectors(self):
        cam = pinhole()
        # w points backward (opposite of look direction)
        assert cam.w == Vec3(0, 0, 1)
        assert cam.u == Vec3(1, 0, 0)
        assert cam.v == Vec3(0, 1, 0)

    def test_basis_is_orthonormal(self):
        cam = Camera(look_from=Point3(13, 2, 3), look_at=Point3(0, 0, 0), vfov=20)
        for a in (cam.u, cam.v, cam.w):
            assert abs(a.length() - 1.0) < 1e-12
        assert abs(cam.u.dot(cam.v)) < 1e-12
        assert abs(cam.u.dot(cam.w)) < 1e-12
        assert abs(cam.v.dot(cam.w)) < 1e-12

    def test_viewport_size(self):
        cam = pinhole(aspect_ratio=2.0)
        assert abs(cam.vertical.length() - 2.0) < 1e-12
        assert abs(cam.horizontal.length() - 4.0) < 1e-12
        assert cam.lower_left_corner == Point3(-2, -1, -1)

    def test_lens_radius_from_aperture(self):
        assert pinhole(aperture=0.4).lens_radius == pytest.approx(0.2)

    def test_lens_radius_from_defocus_angle(self):
        cam = pinhole(focus_dist=10.0, defocus_angle=0.6)
        assert cam.lens_radius == pytest.approx(10.0 * math.tan(math.radians(0.3)))

    def test_from_settings(self):
        settings = CameraSettings(look_from=Point3(0, 0, 2), look_at=Point3(0, 0, 0), vfov=60)
        cam = Camera.from_settings(settings, aspect_ratio=1.5)
        assert cam.origin == Point3(0, 0, 2)
        assert cam.horizontal.length() / cam.vertical.length() == pytest.approx(1.5)


class TestCameraValidation:

    def test_coincident_look_points(self):
        with pytest.raises(CameraError):
            Camera(look_from=Point3(1, 1, 1), look_at=Point3(1, 1, 1))

    def test_up_parallel_to_view(self):
        with pytest.raises(CameraError):
            Camera(look_from=Point3(0, 5, 0), look_at=Point3(0, 0, 0), vup=Vec3(0, 1, 0))

    @pytest.mark.parametrize("kwargs", [
        dict(vfov=0), dict(vfov=180), dict(aspect_ratio=0),
        dict(focus_dist=0), dict(aperture=-1),
    ])
    def test_invalid_parameters(self, kwargs):
        with pytest.raises(CameraError):
            pinhole(**kwargs)

    def test_camera_error_is_value_error(self):
        with pytest.raises(ValueError):
            pinhole(vfov=-10)


class TestCameraRays:
    """Test Camera.get_ray() method."""

    def test_center_ray(self):
        ray = pinhole().get_ray(0.5, 0.5)
        assert ray.direction == Vec3(0, 0, -1)

    def test_corner_rays(self):
        cam = pinhole()

        bl = cam.get_ray(0, 0)
        assert bl.direction == Vec3(-1, -1, -1)

        tr = cam.get_ray(1, 1)
        assert tr.direction == Vec3(1, 1, -1)

    def test_pinhole_origin_is_fixed(self):
        cam = pinhole(look_from=Point3(1, 2, 3), look_at=Point3(0, 0, 0))
        for s, t in [(0, 0), (0.3, 0.8), (1, 1)]:
            assert cam.get_ray(s, t).origin == Point3(1, 2, 3)

    def test_pinhole_ignores_rng(self):
        rng = np.random.default_rng(0)
        before = rng.bit_generator.state
        pinhole().get_ray(0.2, 0.7, rng)
        assert rng.bit_generator.state == before

    def test_defocus_offsets_origin_within_lens(self, rng):
        cam = pinhole(aperture=1.0, focus_dist=2.0)
        for _ in range(100):
            ray = cam.get_ray(0.5, 0.5, rng)
            offset = ray.origin - cam.origin
            assert offset.length() <= cam.lens_radius
            # Offset lies in the lens plane spanned by u and v
            assert abs(offset.dot(cam.w)) < 1e-12

    def test_defocus_rays_converge_on_focus_plane(self, rng):
        cam = pinhole(aperture=1.0, focus_dist=2.0)
        target = cam.lower_left_corner + cam.horizontal * 0.25 + cam.vertical * 0.75
        for _ in range(20):
            ray = cam.get_ray(0.25, 0.75, rng)
            assert ray.at(1.0) == target

    def test_defocus_requires_rng(self):
        with pytest.raises(ValueError):
            pinhole(aperture=1.0).get_ray(0.5, 0.5)
