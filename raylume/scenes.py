"""
Ready-made scenes and the camera setups that frame them.
"""

from __future__ import annotations
from typing import Callable, Dict, Tuple

import numpy as np

from .camera import Camera
from .materials import Lambertian, Metal, Dielectric
from .shapes import Sphere, HittableList
from .vector3 import Vector3, Point3, Colour, random_vector


def ground_and_sphere() -> HittableList:
    """A small diffuse sphere resting on a large ground sphere."""
    world = HittableList()
    world.add(Sphere(Point3(0, 0, -1), 0.5, Lambertian(Colour(0.5, 0.5, 0.5))))
    world.add(Sphere(Point3(0, -100.5, -1), 100, Lambertian(Colour(0.5, 0.5, 0.5))))
    return world


def three_materials() -> HittableList:
    """Diffuse, hollow glass and metal spheres side by side."""
    material_ground = Lambertian(Colour(0.8, 0.8, 0.0))
    material_center = Lambertian(Colour(0.1, 0.2, 0.5))
    material_left = Dielectric(1.5)
    material_right = Metal(Colour(0.8, 0.6, 0.2), 0.0)

    world = HittableList()
    world.add(Sphere(Point3(0.0, -100.5, -1.0), 100.0, material_ground))
    world.add(Sphere(Point3(0.0, 0.0, -1.0), 0.5, material_center))
    world.add(Sphere(Point3(-1.0, 0.0, -1.0), 0.5, material_left))
    # Negative radius gives inward normals: a thin glass shell
    world.add(Sphere(Point3(-1.0, 0.0, -1.0), -0.4, material_left))
    world.add(Sphere(Point3(1.0, 0.0, -1.0), 0.5, material_right))
    return world


def random_spheres(rng: np.random.Generator) -> HittableList:
    """A field of small random spheres around three large feature spheres."""
    world = HittableList()
    world.add(Sphere(Point3(0, -1000, 0), 1000, Lambertian(Colour(0.5, 0.5, 0.5))))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())

            if (center - Point3(4, 0.2, 0)).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                albedo = random_vector(rng) * random_vector(rng)
                material = Lambertian(albedo)
            elif choose_mat < 0.95:
                albedo = random_vector(rng, 0.5, 1.0)
                material = Metal(albedo, rng.uniform(0.0, 0.5))
            else:
                material = Dielectric(1.5)
            world.add(Sphere(center, 0.2, material))

    world.add(Sphere(Point3(0, 1, 0), 1.0, Dielectric(1.5)))
    world.add(Sphere(Point3(-4, 1, 0), 1.0, Lambertian(Colour(0.4, 0.2, 0.1))))
    world.add(Sphere(Point3(4, 1, 0), 1.0, Metal(Colour(0.7, 0.6, 0.5), 0.0)))
    return world


def default_camera(image_width: int = 400) -> Camera:
    """Camera at the origin looking down -Z."""
    return Camera(aspect_ratio=16.0 / 9.0, image_width=image_width, vfov=90.0)


def three_materials_camera(image_width: int = 400) -> Camera:
    return Camera(
        aspect_ratio=16.0 / 9.0,
        image_width=image_width,
        vfov=20.0,
        look_from=Point3(-2, 2, 1),
        look_at=Point3(0, 0, -1),
        vup=Vector3(0, 1, 0),
        defocus_angle=10.0,
        focus_dist=3.4,
    )


def random_spheres_camera(image_width: int = 400) -> Camera:
    return Camera(
        aspect_ratio=16.0 / 9.0,
        image_width=image_width,
        vfov=20.0,
        look_from=Point3(13, 2, 3),
        look_at=Point3(0, 0, 0),
        vup=Vector3(0, 1, 0),
        defocus_angle=0.6,
        focus_dist=10.0,
    )


SceneBuilder = Callable[[np.random.Generator, int], Tuple[HittableList, Camera]]

SCENES: Dict[str, SceneBuilder] = {
    'ground': lambda rng, width: (ground_and_sphere(), default_camera(width)),
    'materials': lambda rng, width: (three_materials(), three_materials_camera(width)),
    'random': lambda rng, width: (random_spheres(rng), random_spheres_camera(width)),
}


def build_scene(name: str, image_width: int, seed: int = None) -> Tuple[HittableList, Camera]:
    """Build a named scene and its camera.

    Raises:
        KeyError: if ``name`` is not one of ``SCENES``
    """
    if name not in SCENES:
        raise KeyError(f"unknown scene {name!r}; choose from {sorted(SCENES)}")
    return SCENES[name](np.random.default_rng(seed), image_width)
