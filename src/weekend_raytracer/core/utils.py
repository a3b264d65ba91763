# core/utils.py
import math
import random
from typing import Optional

from weekend_raytracer.core.vector import Vector3


def random_in_unit_sphere(rng=random) -> Vector3:
    """
    Returns a random point inside the unit sphere (rejection sampling).
    """
    while True:
        p = Vector3(rng.uniform(-1, 1),
                    rng.uniform(-1, 1),
                    rng.uniform(-1, 1))
        if p.length_squared() < 1.0:
            return p


def random_unit_vector(rng=random) -> Vector3:
    """
    Returns a random unit vector (uniformly distributed over the sphere).
    """
    return random_in_unit_sphere(rng).normalize()


def random_in_unit_disk(rng=random) -> Vector3:
    """Random point in the z=0 unit disk, used for lens sampling."""
    while True:
        p = Vector3(rng.uniform(-1, 1), rng.uniform(-1, 1), 0.0)
        if p.length_squared() < 1.0:
            return p


def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * (2 * v.dot(n))


def refract(uv: Vector3, n: Vector3, etai_over_etat: float) -> Vector3:
    """
    Snell refraction of the unit vector uv through a surface with normal n.
    The caller is responsible for ruling out total internal reflection.
    """
    cos_theta = min((-uv).dot(n), 1.0)
    r_out_perp = (uv + n * cos_theta) * etai_over_etat
    r_out_parallel = n * -math.sqrt(abs(1.0 - r_out_perp.length_squared()))
    return r_out_perp + r_out_parallel


def schlick(cosine: float, ref_idx: float) -> float:
    """Schlick's polynomial approximation of the Fresnel reflectance."""
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * math.pow(1.0 - cosine, 5)


def row_rng(seed: Optional[int], row: int) -> random.Random:
    """
    Independent generator for one image row. With a seed the stream only
    depends on (seed, row), so results do not change with the worker count.
    """
    if seed is None:
        return random.Random()
    return random.Random(f"{seed}:{row}")
