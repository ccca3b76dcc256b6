"""
Renderer module - the heart of the ray tracer.

Implements:
- Recursive path tracing with a bounded bounce depth
- Jittered supersampling for antialiasing
- Multi-threaded band-based rendering with per-band random streams
- Gamma-2 tone mapping to 8-bit output

The output buffer is row-major with row 0 at the top of the image.
"""

from __future__ import annotations
import logging
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Callable, Tuple

import numpy as np

from .vec3 import Color
from .ray import Ray
from .camera import Camera
from .shapes import Hittable
from .errors import SettingsError

logger = logging.getLogger(__name__)

# Minimum hit distance for secondary rays; keeps a scattered ray from
# re-hitting the surface it left because of floating point error.
SHADOW_ACNE_EPSILON = 0.001

BLACK = Color(0.0, 0.0, 0.0)
SKY_BOTTOM = Color(1.0, 1.0, 1.0)
SKY_TOP = Color(0.5, 0.7, 1.0)


@dataclass
class RenderSettings:
    """Configuration for the renderer.

    ``height`` is derived from ``width / aspect_ratio`` when left at 0.
    A ``seed`` of None draws fresh entropy, so only seeded renders are
    reproducible.
    """
    width: int = 400
    aspect_ratio: float = 16.0 / 9.0
    height: int = 0
    samples_per_pixel: int = 100
    max_depth: int = 50
    rows_per_task: int = 8
    num_threads: int = 0  # 0 = auto-detect
    seed: Optional[int] = None
    t_min: float = SHADOW_ACNE_EPSILON
    sky_bottom: Optional[Color] = None
    sky_top: Optional[Color] = None

    def __post_init__(self):
        if self.width <= 0:
            raise SettingsError(f"width must be positive, got {self.width}")
        if self.height < 0:
            raise SettingsError(f"height must not be negative, got {self.height}")
        if self.height == 0:
            if not self.aspect_ratio > 0:
                raise SettingsError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
            self.height = max(1, int(self.width / self.aspect_ratio))
        else:
            self.aspect_ratio = self.width / self.height
        if self.samples_per_pixel <= 0:
            raise SettingsError(f"samples_per_pixel must be positive, got {self.samples_per_pixel}")
        if self.max_depth <= 0:
            raise SettingsError(f"max_depth must be positive, got {self.max_depth}")
        if self.rows_per_task <= 0:
            raise SettingsError(f"rows_per_task must be positive, got {self.rows_per_task}")
        if self.num_threads < 0:
            raise SettingsError(f"num_threads must not be negative, got {self.num_threads}")
        if not self.t_min > 0:
            raise SettingsError(f"t_min must be positive, got {self.t_min}")
        if self.sky_bottom is None:
            self.sky_bottom = SKY_BOTTOM
        if self.sky_top is None:
            self.sky_top = SKY_TOP
        if self.num_threads == 0:
            self.num_threads = os.cpu_count() or 4


def sky_color(ray: Ray, bottom: Color = SKY_BOTTOM, top: Color = SKY_TOP) -> Color:
    """Background gradient blended on the ray's vertical direction.

    Args:
        ray: The escaping ray
        bottom: Color for rays pointing straight down
        top: Color for rays pointing straight up
    """
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return bottom.lerp(top, t)


def ray_color(
    ray: Ray,
    scene: Hittable,
    depth: int,
    rng: np.random.Generator,
    t_min: float = SHADOW_ACNE_EPSILON,
    sky_bottom: Color = SKY_BOTTOM,
    sky_top: Color = SKY_TOP
) -> Color:
    """Compute the color carried back along a ray.

    Args:
        ray: The ray to trace
        scene: The scene to trace against
        depth: Remaining bounce budget; black once exhausted
        rng: Random generator owned by the calling worker
        t_min: Smallest accepted hit distance
        sky_bottom, sky_top: Background gradient endpoints

    Returns:
        The linear color for this ray
    """
    if depth <= 0:
        return BLACK

    hit_record = scene.intersect(ray.with_bounds(t_min, float('inf')))

    if hit_record is None:
        return sky_color(ray, sky_bottom, sky_top)

    scatter_result = hit_record.material.scatter(ray, hit_record, rng)
    if scatter_result is None:
        return BLACK

    return scatter_result.attenuation * ray_color(
        scatter_result.scattered_ray, scene, depth - 1, rng, t_min, sky_bottom, sky_top
    )


def to_ldr(hdr_image: np.ndarray) -> np.ndarray:
    """Convert a linear float image to 8-bit with gamma 2 correction.

    Args:
        hdr_image: Linear image array (float)

    Returns:
        Image as uint8 array of the same shape
    """
    corrected = np.sqrt(np.clip(hdr_image, 0.0, None))
    return np.rint(np.clip(corrected, 0.0, 1.0) * 255).astype(np.uint8)


class Renderer:
    """Path tracing renderer with multi-threading support."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, scene: Hittable, camera: Camera) -> np.ndarray:
        """Render the scene and return the image as a numpy array.

        Args:
            scene: The scene to render (any Hittable), read-only during the render
            camera: The camera to render from

        Returns:
            Linear image as numpy array of shape (height, width, 3), top row first
        """
        settings = self.settings
        width = settings.width
        height = settings.height

        image = np.zeros((height, width, 3), dtype=np.float64)

        bands = self._generate_bands(height)
        seed_sequence = np.random.SeedSequence(settings.seed)
        band_seeds = seed_sequence.spawn(len(bands))

        logger.info(
            "Rendering %dx%d, %d spp, depth %d, %d bands on %d threads (entropy %d)",
            width, height, settings.samples_per_pixel, settings.max_depth,
            len(bands), settings.num_threads, seed_sequence.entropy
        )

        total_bands = len(bands)
        completed_bands = 0
        progress_lock = threading.Lock()

        def render_band(band: Tuple[int, int], band_seed: np.random.SeedSequence) -> None:
            """Render rows [y0, y1) into their own slice of the image."""
            nonlocal completed_bands
            y0, y1 = band
            rng = np.random.default_rng(band_seed)
            image[y0:y1] = self._render_rows(scene, camera, y0, y1, rng)

            with progress_lock:
                completed_bands += 1
                if self._progress_callback:
                    self._progress_callback(completed_bands / total_bands)

        start = time.perf_counter()
        if settings.num_threads > 1:
            with ThreadPoolExecutor(max_workers=settings.num_threads) as executor:
                # list() re-raises any exception from a worker
                list(executor.map(render_band, bands, band_seeds))
        else:
            for band, band_seed in zip(bands, band_seeds):
                render_band(band, band_seed)

        logger.info("Render finished in %.2fs", time.perf_counter() - start)
        return image

    def _render_rows(
        self,
        scene: Hittable,
        camera: Camera,
        y0: int,
        y1: int,
        rng: np.random.Generator
    ) -> np.ndarray:
        """Average jittered samples for every pixel of rows [y0, y1)."""
        settings = self.settings
        width = settings.width
        height = settings.height
        samples = settings.samples_per_pixel

        rows = np.zeros((y1 - y0, width, 3), dtype=np.float64)
        for j in range(y0, y1):
            for i in range(width):
                pixel_color = BLACK
                for _ in range(samples):
                    s = (i + rng.random()) / width
                    t = (height - 1 - j + rng.random()) / height
                    ray = camera.get_ray(s, t, rng)
                    pixel_color = pixel_color + ray_color(
                        ray, scene, settings.max_depth, rng,
                        settings.t_min, settings.sky_bottom, settings.sky_top
                    )
                rows[j - y0, i] = pixel_color.to_array() / samples
        return rows

    def _generate_bands(self, height: int) -> list[Tuple[int, int]]:
        """Split the image into horizontal bands of rows.

        Band boundaries depend only on the image height and
        ``rows_per_task``, never on the thread count, so the random stream
        assigned to each pixel is the same however the work is scheduled.
        """
        step = self.settings.rows_per_task
        return [(y, min(y + step, height)) for y in range(0, height, step)]

    def render_ldr(self, scene: Hittable, camera: Camera) -> np.ndarray:
        """Render and tone map to an 8-bit (height, width, 3) array."""
        return to_ldr(self.render(scene, camera))
