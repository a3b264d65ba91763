# materials/dielectric.py
import math
import random

from weekend_raytracer.core.ray import Ray
from weekend_raytracer.core.vector import Vector3
from weekend_raytracer.core.utils import reflect, refract, schlick
from weekend_raytracer.geometry.hittable import HitRecord
from weekend_raytracer.materials.material import Material, ScatterResult

# Glass doesn't absorb light
_CLEAR = Vector3(1.0, 1.0, 1.0)


class Dielectric(Material):
    """
    Clear refractive material (glass, water, ...) with index of refraction ref_idx.
    """
    def __init__(self, ref_idx: float):
        if ref_idx <= 0:
            raise ValueError(f"refractive index must be positive, got {ref_idx}")
        self.ref_idx = ref_idx

    def cannot_refract(self, ray_in: Ray, rec: HitRecord) -> bool:
        """True when Snell's law has no solution (total internal reflection)."""
        ratio, _, _, sin_theta = self._angles(ray_in, rec)
        return ratio * sin_theta > 1.0

    def _angles(self, ray_in: Ray, rec: HitRecord):
        # Entering the material from outside or leaving it
        ratio = 1.0 / self.ref_idx if rec.front_face else self.ref_idx
        unit_direction = ray_in.direction.normalize()
        cos_theta = min((-unit_direction).dot(rec.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))
        return ratio, unit_direction, cos_theta, sin_theta

    def scatter(self, ray_in: Ray, rec: HitRecord, rng=random) -> ScatterResult:
        ratio, unit_direction, cos_theta, sin_theta = self._angles(ray_in, rec)

        if ratio * sin_theta > 1.0:
            # Must reflect
            direction = reflect(unit_direction, rec.normal)
        elif schlick(cos_theta, ratio) > rng.random():
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, ratio)

        return Ray(rec.p, direction), _CLEAR

    def __repr__(self) -> str:
        return f"Dielectric({self.ref_idx})"
