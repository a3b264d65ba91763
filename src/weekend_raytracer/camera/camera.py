# camera/camera.py
import math
import random

from weekend_raytracer.core.vector import Vector3
from weekend_raytracer.core.ray import Ray
from weekend_raytracer.core.utils import random_in_unit_disk
from weekend_raytracer.errors import ConfigurationError


def camera_problems(look_from: Vector3, look_at: Vector3, vup: Vector3,
                    vfov: float, aperture: float, focus_dist: float):
    """Every problem with the camera geometry, empty when it is usable."""
    problems = []
    if not 0 < vfov < 180:
        problems.append(f"vfov must be in (0, 180) degrees, got {vfov}")
    if aperture < 0:
        problems.append(f"aperture must not be negative, got {aperture}")
    if focus_dist <= 0:
        problems.append(f"focus_dist must be positive, got {focus_dist}")
    view = look_from - look_at
    if view.near_zero():
        problems.append("look_from and look_at must differ")
    elif vup.cross(view).near_zero():
        problems.append("vup must not be parallel to the viewing direction")
    return problems


class Camera:
    """
    Thin-lens camera looking from look_from towards look_at.

    vfov is the vertical field of view in degrees. aperture is the lens
    diameter (0 gives a pinhole camera) and focus_dist the distance to the
    plane in perfect focus. Everything is computed once in __init__; the
    camera is never mutated afterwards and can be shared by workers.
    """
    def __init__(self, look_from: Vector3, look_at: Vector3, vup: Vector3,
                 vfov: float, aspect_ratio: float,
                 aperture: float = 0.0, focus_dist: float = 10.0):
        problems = camera_problems(look_from, look_at, vup, vfov, aperture, focus_dist)
        if aspect_ratio <= 0:
            problems.append(f"aspect_ratio must be positive, got {aspect_ratio}")
        if problems:
            raise ConfigurationError(problems)

        self.look_from = look_from
        self.look_at = look_at
        self.vup = vup
        self.vfov = vfov
        self.aspect_ratio = aspect_ratio
        self.aperture = aperture
        self.focus_dist = focus_dist
        self.lens_radius = aperture / 2.0

        # Orthonormal basis: w points backwards, u right, v up.
        self.w = (look_from - look_at).normalize()
        self.u = vup.cross(self.w).normalize()
        self.v = self.w.cross(self.u)

        # Viewport dimensions, scaled out to the focus plane.
        h = math.tan(math.radians(vfov) / 2)
        viewport_height = 2.0 * h
        viewport_width = aspect_ratio * viewport_height

        self.origin = look_from
        self.horizontal = self.u * (focus_dist * viewport_width)
        self.vertical = self.v * (focus_dist * viewport_height)
        self.lower_left_corner = (self.origin -
                                  self.horizontal * 0.5 -
                                  self.vertical * 0.5 -
                                  self.w * focus_dist)

    def get_ray(self, s: float, t: float, rng=random) -> Ray:
        """
        Ray through viewport coordinates (s, t) in [0, 1], starting from a
        random point on the lens.
        """
        rd = random_in_unit_disk(rng) * self.lens_radius
        offset = self.u * rd.x + self.v * rd.y

        ray_origin = self.origin + offset
        ray_direction = (self.lower_left_corner +
                         self.horizontal * s +
                         self.vertical * t -
                         ray_origin)
        return Ray(ray_origin, ray_direction)
