# geometry/sphere.py
import math
from typing import Optional

from weekend_raytracer.core.vector import Vector3
from weekend_raytracer.core.ray import Ray
from weekend_raytracer.core.aabb import AABB
from weekend_raytracer.geometry.hittable import Hittable, HitRecord

# Relative padding so the BVH never culls a grazing hit through rounding.
_BOX_PADDING = 1e-9


class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.
    Several spheres may share one material instance.
    """
    def __init__(self, center: Vector3, radius: float, material):
        if radius <= 0:
            raise ValueError(f"sphere radius must be positive, got {radius}")
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        oc = ray.origin - self.center
        a = ray.direction.length_squared()
        if a == 0:
            return None
        half_b = oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius
        discriminant = half_b * half_b - a * c

        if discriminant < 0:
            return None

        sqrt_disc = math.sqrt(discriminant)
        # Find the nearest root that lies strictly inside (t_min, t_max)
        root = (-half_b - sqrt_disc) / a
        if root <= t_min or root >= t_max:
            root = (-half_b + sqrt_disc) / a
            if root <= t_min or root >= t_max:
                return None

        rec = HitRecord()
        rec.t = root
        rec.p = ray.at(rec.t)
        outward_normal = (rec.p - self.center) / self.radius
        rec.set_face_normal(ray, outward_normal)
        rec.material = self.material
        return rec

    def bounding_box(self) -> AABB:
        # The bounding box of a sphere is center +/- radius
        r = self.radius * (1.0 + _BOX_PADDING) + _BOX_PADDING
        offset = Vector3(r, r, r)
        return AABB(self.center - offset, self.center + offset)

    def __repr__(self) -> str:
        return f"Sphere({self.center!r}, {self.radius}, {self.material!r})"
