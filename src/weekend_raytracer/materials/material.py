# materials/material.py
import random
from typing import Optional, Tuple

from weekend_raytracer.core.ray import Ray
from weekend_raytracer.core.vector import Vector3
from weekend_raytracer.geometry.hittable import HitRecord

ScatterResult = Optional[Tuple[Ray, Vector3]]


class Material:
    """
    Abstract material class. Subclasses must implement scatter().

    The set of materials is closed: Lambertian, Metal and Dielectric.
    Instances are immutable once built and may be shared by many surfaces.
    """

    def scatter(self, ray_in: Ray, rec: HitRecord, rng=random) -> ScatterResult:
        """
        Computes the scattered ray and attenuation.
        Returns a tuple (scattered_ray, attenuation) or None if the ray is absorbed.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")
