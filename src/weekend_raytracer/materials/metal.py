# materials/metal.py
import random

from weekend_raytracer.core.ray import Ray
from weekend_raytracer.core.vector import Vector3
from weekend_raytracer.core.utils import reflect, random_in_unit_sphere
from weekend_raytracer.geometry.hittable import HitRecord
from weekend_raytracer.materials.material import Material, ScatterResult


class Metal(Material):
    """
    Reflective material. fuzz in [0, 1] blurs the mirror direction.
    """
    def __init__(self, albedo: Vector3, fuzz: float = 0.0):
        self.albedo = albedo
        self.fuzz = min(max(fuzz, 0.0), 1.0)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng=random) -> ScatterResult:
        direction = reflect(ray_in.direction.normalize(), rec.normal)
        if self.fuzz > 0:
            direction = direction + random_in_unit_sphere(rng) * self.fuzz

        if direction.dot(rec.normal) <= 0:
            # Fuzzed below the surface: absorbed.
            return None
        return Ray(rec.p, direction), self.albedo

    def __repr__(self) -> str:
        return f"Metal({self.albedo!r}, fuzz={self.fuzz})"
