"""
Surface materials and their scattering laws.

Implements:
- Lambertian diffuse
- Metal (specular reflection with fuzz)
- Dielectric (glass, water - with refraction)

Materials are immutable; all randomness comes from the generator passed to
`scatter`, so one material instance can be shared by any number of surfaces
and render workers.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING
import math

import numpy as np

from .vector3 import (
    Colour, dot_product, reflect, refract, random_unit_vector,
)
from .ray import Ray

if TYPE_CHECKING:
    from .shapes import HitRecord


@dataclass
class ScatterResult:
    """Result of a material scatter operation."""
    attenuation: Colour
    scattered: Ray


class Material(ABC):
    """Abstract base class for materials."""

    @abstractmethod
    def scatter(self, ray_in: Ray, record: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        """Compute the scattered ray and attenuation.

        Args:
            ray_in: The incoming ray
            record: The intersection being shaded
            rng: Random source for stochastic scattering

        Returns:
            ScatterResult if the ray scatters, None if it is absorbed
        """


class Lambertian(Material):
    """Diffuse material with Lambertian (ideal matte) scattering."""

    def __init__(self, albedo: Colour):
        """Create a Lambertian material.

        Args:
            albedo: The base colour (RGB, each component 0-1)
        """
        self.albedo = albedo

    def scatter(self, ray_in: Ray, record: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        scatter_direction = record.normal + random_unit_vector(rng)

        # Catch degenerate scatter direction
        if scatter_direction.near_zero():
            scatter_direction = record.normal

        return ScatterResult(self.albedo, Ray(record.point, scatter_direction))

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo})"


class Metal(Material):
    """Metallic material with specular reflection."""

    def __init__(self, albedo: Colour, fuzz: float = 0.0):
        """Create a metal material.

        Args:
            albedo: The reflection colour
            fuzz: Radius of the reflection perturbation (0 = mirror, 1 = very rough)
        """
        self.albedo = albedo
        self.fuzz = min(max(fuzz, 0.0), 1.0)

    def scatter(self, ray_in: Ray, record: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        reflected = reflect(ray_in.direction.unit(), record.normal)
        scattered = Ray(record.point, reflected + self.fuzz * random_unit_vector(rng))

        # Fuzzed reflections that dip below the surface are absorbed
        if dot_product(scattered.direction, record.normal) > 0:
            return ScatterResult(self.albedo, scattered)
        return None

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo}, fuzz={self.fuzz})"


class Dielectric(Material):
    """Dielectric (glass-like) material with refraction."""

    def __init__(self, index_of_refraction: float = 1.5):
        """Create a dielectric material.

        Args:
            index_of_refraction: 1.0 = air, 1.5 = glass, 2.4 = diamond
        """
        self.index_of_refraction = index_of_refraction

    def scatter(self, ray_in: Ray, record: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        attenuation = Colour(1.0, 1.0, 1.0)

        # Entering the surface from outside or leaving it from inside
        if record.front_face:
            refraction_ratio = 1.0 / self.index_of_refraction
        else:
            refraction_ratio = self.index_of_refraction

        unit_direction = ray_in.direction.unit()
        cos_theta = min(dot_product(-unit_direction, record.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = refraction_ratio * sin_theta > 1.0

        if cannot_refract or reflectance(cos_theta, refraction_ratio) > rng.random():
            direction = reflect(unit_direction, record.normal)
        else:
            direction = refract(unit_direction, record.normal, refraction_ratio)

        return ScatterResult(attenuation, Ray(record.point, direction))

    def __repr__(self) -> str:
        return f"Dielectric(index_of_refraction={self.index_of_refraction})"


def reflectance(cosine: float, ref_idx: float) -> float:
    """Schlick's approximation for reflectance."""
    r0 = (1 - ref_idx) / (1 + ref_idx)
    r0 = r0 * r0
    return r0 + (1 - r0) * pow(1 - cosine, 5)
