# scenes.py
import logging
import random

from weekend_raytracer.core.vector import Color, Point3
from weekend_raytracer.geometry.sphere import Sphere
from weekend_raytracer.geometry.world import HittableList
from weekend_raytracer.materials.dielectric import Dielectric
from weekend_raytracer.materials.lambertian import Lambertian
from weekend_raytracer.materials.metal import Metal

logger = logging.getLogger(__name__)

GROUND_CENTER = Point3(0, -1000, 0)
GROUND_RADIUS = 1000


def _random_color(rng, lo: float = 0.0, hi: float = 1.0) -> Color:
    return Color(rng.uniform(lo, hi), rng.uniform(lo, hi), rng.uniform(lo, hi))


def ground_scene() -> HittableList:
    """A single huge grey diffuse sphere acting as the floor."""
    world = HittableList()
    world.add(Sphere(GROUND_CENTER, GROUND_RADIUS, Lambertian(Color(0.5, 0.5, 0.5))))
    return world


def three_spheres_scene() -> HittableList:
    """Ground plus one glass, one matte and one mirror sphere side by side."""
    world = ground_scene()
    world.add(Sphere(Point3(0, 1, 0), 1.0, Dielectric(1.5)))
    world.add(Sphere(Point3(-4, 1, 0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Point3(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))
    return world


def random_scene(rng=None) -> HittableList:
    """
    The cover scene: a grid of small random spheres around the three big ones.

    80% of the small spheres are diffuse, 15% metal and 5% glass. Small
    spheres too close to the metal sphere are skipped.
    """
    if rng is None:
        rng = random.Random()
    world = ground_scene()
    clearance_point = Point3(4, 0.2, 0)

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - clearance_point).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                # diffuse
                albedo = _random_color(rng) * _random_color(rng)
                material = Lambertian(albedo)
            elif choose_mat < 0.95:
                # metal
                material = Metal(_random_color(rng, 0.5, 1.0), rng.uniform(0, 0.5))
            else:
                # glass
                material = Dielectric(1.5)
            world.add(Sphere(center, 0.2, material))

    for sphere in three_spheres_scene().objects[1:]:
        world.add(sphere)

    logger.debug("Random scene has %d spheres", len(world))
    return world


def build_scene(name: str, seed=None) -> HittableList:
    if name == "random":
        return random_scene(random.Random(seed))
    if name == "three-spheres":
        return three_spheres_scene()
    if name == "ground":
        return ground_scene()
    raise ValueError(f"unknown scene {name!r}")
