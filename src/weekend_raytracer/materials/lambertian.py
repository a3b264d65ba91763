# materials/lambertian.py
import random

from weekend_raytracer.core.ray import Ray
from weekend_raytracer.core.vector import Vector3
from weekend_raytracer.core.utils import random_unit_vector
from weekend_raytracer.geometry.hittable import HitRecord
from weekend_raytracer.materials.material import Material, ScatterResult


class Lambertian(Material):
    """
    Lambertian diffuse material. Never absorbs.
    """

    def __init__(self, albedo: Vector3):
        self.albedo = albedo

    def scatter(self, ray_in: Ray, rec: HitRecord, rng=random) -> ScatterResult:
        # Pick a random scatter direction by adding a random unit vector to the normal.
        scatter_direction = rec.normal + random_unit_vector(rng)

        # If scatter_direction is degenerate (very small), just use the normal.
        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        return Ray(rec.p, scatter_direction), self.albedo

    def __repr__(self) -> str:
        return f"Lambertian({self.albedo!r})"
