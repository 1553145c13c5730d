"""
Renderer module - the heart of the path tracer.

Implements:
- Monte-Carlo path tracing with a bounded bounce budget
- Anti-aliasing through multiple jittered samples per pixel
- Scanline-parallel rendering on thread or process pools
- Reproducible output from per-scanline seeded random generators
"""

from __future__ import annotations
import logging
import math
import os
import time
from concurrent.futures import ThreadPoolExecutor, ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Optional, Callable, Tuple

import numpy as np

from .vector3 import Colour
from .ray import Ray
from .camera import Camera
from .colour import write_colour
from .image import RenderedImage
from .interval import Interval
from .shapes import Hittable

logger = logging.getLogger(__name__)

# Lower bound on accepted hits, keeps bounced rays off their own surface
SHADOW_ACNE_EPSILON = 0.001

BLACK = Colour(0.0, 0.0, 0.0)
WHITE = Colour(1.0, 1.0, 1.0)
SKY_BLUE = Colour(0.5, 0.7, 1.0)


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    samples_per_pixel: int = 10
    max_depth: int = 10
    num_workers: int = 0  # 0 = auto-detect
    use_processes: bool = False
    seed: Optional[int] = None

    def __post_init__(self):
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {self.max_depth}")
        if self.num_workers < 0:
            raise ValueError(f"num_workers must not be negative, got {self.num_workers}")
        if self.num_workers == 0:
            self.num_workers = os.cpu_count() or 4


def sky_colour(ray: Ray) -> Colour:
    """Vertical white-to-blue gradient used as the environment light."""
    unit_direction = ray.direction.unit()
    a = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - a) + SKY_BLUE * a


def ray_colour(ray: Ray, depth: int, scene: Hittable, rng: np.random.Generator) -> Colour:
    """Compute the radiance carried back along a ray.

    The path is followed for at most ``depth`` bounces, multiplying the
    attenuation of every scatter. A path that runs out of bounces or is
    absorbed contributes black; one that escapes picks up the sky colour.

    Args:
        ray: The ray to trace
        depth: Maximum number of surface interactions
        scene: The scene to trace against
        rng: Random source for material sampling

    Returns:
        The linear colour for this ray
    """
    attenuation = WHITE
    ray_t = Interval(SHADOW_ACNE_EPSILON, math.inf)

    for _ in range(depth):
        record = scene.hit(ray, ray_t)

        if record is None:
            return attenuation * sky_colour(ray)

        if record.material is None:
            # No material - shade by normal (for debugging)
            return attenuation * (record.normal + WHITE) * 0.5

        result = record.material.scatter(ray, record, rng)
        if result is None:
            return BLACK

        attenuation = attenuation * result.attenuation
        ray = result.scattered

    return BLACK


def render_scanline(
    camera: Camera,
    scene: Hittable,
    row: int,
    samples_per_pixel: int,
    max_depth: int,
    seed_seq: np.random.SeedSequence,
) -> Tuple[int, np.ndarray]:
    """Render a single image row.

    Returns:
        ``(row, pixels)`` where pixels is a ``(width, 3)`` uint8 array
    """
    rng = np.random.default_rng(seed_seq)
    pixels = np.zeros((camera.image_width, 3), dtype=np.uint8)

    for i in range(camera.image_width):
        pixel_colour = BLACK
        for _ in range(samples_per_pixel):
            ray = camera.get_ray(i, row, rng)
            pixel_colour = pixel_colour + ray_colour(ray, max_depth, scene, rng)
        pixels[i] = write_colour(pixel_colour, samples_per_pixel)

    return row, pixels


class Renderer:
    """Path tracing renderer with scanline parallelism."""

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

    def render(self, scene: Hittable, camera: Camera) -> RenderedImage:
        """Render the scene and return the finished 8-bit image.

        Rows may finish in any order; each result carries its row index and
        is stored in that row of the image.

        Args:
            scene: The scene to render (any Hittable)
            camera: The camera to render from

        Returns:
            The tone-mapped, gamma-corrected image
        """
        settings = self.settings
        width = camera.image_width
        height = camera.image_height
        image = RenderedImage(width, height)

        # One independent stream per row keeps output independent of scheduling
        row_seeds = np.random.SeedSequence(settings.seed).spawn(height)

        logger.info(
            "Rendering %dx%d, %d samples/pixel, depth %d, %d worker(s)",
            width, height, settings.samples_per_pixel, settings.max_depth, settings.num_workers,
        )
        start = time.perf_counter()
        completed = 0

        def collect(row: int, pixels: np.ndarray) -> None:
            nonlocal completed
            image.set_row(row, pixels)
            completed += 1
            logger.debug("Scanline %d done (%d/%d)", row, completed, height)
            if self._progress_callback:
                self._progress_callback(completed / height)

        jobs = [
            (camera, scene, row, settings.samples_per_pixel, settings.max_depth, row_seeds[row])
            for row in range(height)
        ]

        if settings.num_workers > 1:
            executor_cls = ProcessPoolExecutor if settings.use_processes else ThreadPoolExecutor
            with executor_cls(max_workers=settings.num_workers) as executor:
                futures = [executor.submit(render_scanline, *job) for job in jobs]
                for future in as_completed(futures):
                    collect(*future.result())
        else:
            for job in jobs:
                collect(*render_scanline(*job))

        elapsed = time.perf_counter() - start
        logger.info("Render finished in %.2f s", elapsed)
        return image
