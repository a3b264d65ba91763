from weekend_raytracer.geometry.hittable import HitRecord, Hittable
from weekend_raytracer.geometry.sphere import Sphere
from weekend_raytracer.geometry.world import HittableList

__all__ = ["HitRecord", "Hittable", "Sphere", "HittableList"]
