"""Monte-Carlo ray tracer for scenes of spheres with parallel row rendering."""

from weekend_raytracer.camera.camera import Camera
from weekend_raytracer.config import RenderConfig
from weekend_raytracer.core.ray import Ray
from weekend_raytracer.core.vector import Color, Point3, Vector3
from weekend_raytracer.errors import ConfigurationError, RaytracerError, RenderError
from weekend_raytracer.geometry import HitRecord, HittableList, Sphere
from weekend_raytracer.materials import Dielectric, Lambertian, Material, Metal
from weekend_raytracer.renderer import Framebuffer, RenderSettings, Renderer

__version__ = "0.1.0"

__all__ = [
    "Camera", "RenderConfig", "Ray", "Color", "Point3", "Vector3",
    "ConfigurationError", "RaytracerError", "RenderError",
    "HitRecord", "HittableList", "Sphere",
    "Dielectric", "Lambertian", "Material", "Metal",
    "Framebuffer", "RenderSettings", "Renderer",
]
