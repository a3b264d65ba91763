from weekend_raytracer.materials.material import Material
from weekend_raytracer.materials.lambertian import Lambertian
from weekend_raytracer.materials.metal import Metal
from weekend_raytracer.materials.dielectric import Dielectric

__all__ = ["Material", "Lambertian", "Metal", "Dielectric"]
