"""
Camera module for generating primary rays.

Supports:
- Perspective projection with a configurable vertical field of view
- Arbitrary positioning via look-at
- Depth of field (defocus blur through a thin-lens disk)
- Anti-aliasing by jittering samples within each pixel
"""

from __future__ import annotations
import math

import numpy as np

from .vector3 import Vector3, Point3, cross_product, random_in_unit_disk
from .ray import Ray


class Camera:
    """A pinhole or thin-lens camera.

    All viewport geometry is derived once in the constructor; a camera is
    never modified afterwards, so it can be shared between render workers.
    """

    def __init__(
        self,
        aspect_ratio: float = 16.0 / 9.0,
        image_width: int = 400,
        vfov: float = 90.0,
        look_from: Point3 = Point3(0, 0, 0),
        look_at: Point3 = Point3(0, 0, -1),
        vup: Vector3 = Vector3(0, 1, 0),
        defocus_angle: float = 0.0,
        focus_dist: float = 1.0,
    ):
        """Create a camera.

        Args:
            aspect_ratio: Ideal width / height ratio of the image
            image_width: Rendered image width in pixels
            vfov: Vertical field of view in degrees
            look_from: Camera position in world space
            look_at: Point the camera is looking at
            vup: World up vector (usually (0, 1, 0))
            defocus_angle: Cone angle in degrees of rays through each pixel (0 = pinhole)
            focus_dist: Distance from the camera to the plane of perfect focus

        Raises:
            ValueError: for non-positive sizes or a degenerate view direction
        """
        if image_width < 1:
            raise ValueError(f"image_width must be positive, got {image_width}")
        if aspect_ratio <= 0:
            raise ValueError(f"aspect_ratio must be positive, got {aspect_ratio}")
        if focus_dist <= 0:
            raise ValueError(f"focus_dist must be positive, got {focus_dist}")
        if (look_from - look_at).near_zero():
            raise ValueError("look_from and look_at must be distinct points")

        self.aspect_ratio = aspect_ratio
        self.image_width = int(image_width)
        self.vfov = vfov
        self.look_from = look_from
        self.look_at = look_at
        self.vup = vup
        self.defocus_angle = defocus_angle
        self.focus_dist = focus_dist

        self.image_height = max(1, int(self.image_width / aspect_ratio))
        self.center = look_from

        # Viewport dimensions at the focus plane
        theta = math.radians(vfov)
        h = math.tan(theta / 2)
        viewport_height = 2.0 * h * focus_dist
        viewport_width = viewport_height * (self.image_width / self.image_height)

        # Orthonormal camera basis
        self.w = (look_from - look_at).unit()   # Points backward from camera
        self.u = cross_product(vup, self.w).unit()
        self.v = cross_product(self.w, self.u)

        # Vectors across the horizontal and down the vertical viewport edges
        viewport_u = self.u * viewport_width
        viewport_v = -self.v * viewport_height

        self.pixel_delta_u = viewport_u / self.image_width
        self.pixel_delta_v = viewport_v / self.image_height

        viewport_upper_left = (
            self.center
            - self.w * focus_dist
            - viewport_u / 2
            - viewport_v / 2
        )
        self.pixel00_loc = viewport_upper_left + (self.pixel_delta_u + self.pixel_delta_v) * 0.5

        defocus_radius = focus_dist * math.tan(math.radians(defocus_angle / 2))
        self.defocus_disk_u = self.u * defocus_radius
        self.defocus_disk_v = self.v * defocus_radius

    def get_ray(self, i: int, j: int, rng: np.random.Generator) -> Ray:
        """Generate a randomly sampled ray through pixel (i, j).

        Args:
            i: Pixel column, 0 at the left edge
            j: Pixel row, 0 at the top edge
            rng: Random source for pixel jitter and lens sampling

        Returns:
            A ray from the camera (or a point on its defocus disk) through a
            random point of the pixel's square
        """
        pixel_center = self.pixel00_loc + self.pixel_delta_u * i + self.pixel_delta_v * j
        pixel_sample = pixel_center + self.pixel_sample_square(rng)

        if self.defocus_angle <= 0:
            ray_origin = self.center
        else:
            ray_origin = self.defocus_disk_sample(rng)

        return Ray(ray_origin, pixel_sample - ray_origin)

    def pixel_sample_square(self, rng: np.random.Generator) -> Vector3:
        """Random offset within the square surrounding a pixel center."""
        px, py = rng.uniform(-0.5, 0.5, 2)
        return self.pixel_delta_u * px + self.pixel_delta_v * py

    def defocus_disk_sample(self, rng: np.random.Generator) -> Point3:
        """Random point on the camera's defocus disk."""
        p = random_in_unit_disk(rng)
        return self.center + self.defocus_disk_u * p.x + self.defocus_disk_v * p.y

    def __repr__(self) -> str:
        return (
            f"Camera(look_from={self.look_from}, look_at={self.look_at}, "
            f"{self.image_width}x{self.image_height})"
        )
