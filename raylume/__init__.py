"""
raylume - A Python Monte-Carlo Path Tracer

Renders scenes of spheres with:
- Lambertian, metal and dielectric materials
- Anti-aliasing and depth of field
- Scanline-parallel rendering with reproducible seeding
- PNG / PPM output through Pillow
"""

__version__ = "0.1.0"

from .vector3 import (
    Vector3, Point3, Colour, dot_product, cross_product, reflect, refract,
    random_vector, random_in_unit_sphere, random_unit_vector,
    random_in_unit_disk, random_on_hemisphere,
)
from .ray import Ray
from .interval import Interval, EMPTY, UNIVERSE
from .colour import linear_to_gamma, write_colour, pack_rgb, unpack_rgb
from .shapes import HitRecord, Hittable, Sphere, HittableList
from .materials import Material, ScatterResult, Lambertian, Metal, Dielectric, reflectance
from .camera import Camera
from .image import RenderedImage, save_image
from .renderer import Renderer, RenderSettings, ray_colour, sky_colour, render_scanline
from .scenes import SCENES, build_scene, ground_and_sphere, three_materials, random_spheres
