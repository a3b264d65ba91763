# config.py
import os
from dataclasses import dataclass, field, fields, replace
from typing import Optional, Tuple

from weekend_raytracer.camera.camera import Camera, camera_problems
from weekend_raytracer.core.vector import Vector3
from weekend_raytracer.errors import ConfigurationError

BACKENDS = ("process", "thread")
PIXEL_ORDERS = ("top-down", "reverse")
SCENES = ("random", "three-spheres", "ground")

# Named presets; explicit options given on top of a preset win.
QUALITY_LEVELS = {
    "draft": {"image_width": 200, "samples_per_pixel": 1, "max_depth": 8},
    "balanced": {"image_width": 400, "samples_per_pixel": 10, "max_depth": 50},
    "final": {"image_width": 1200, "samples_per_pixel": 100, "max_depth": 50},
}


@dataclass(frozen=True)
class RenderConfig:
    """All options for one render. Call validate() before rendering."""

    image_width: int = 400
    aspect_ratio: float = 16.0 / 9.0
    samples_per_pixel: int = 10
    max_depth: int = 50
    workers: int = field(default_factory=lambda: os.cpu_count() or 1)
    backend: str = "process"
    seed: Optional[int] = None
    scene: str = "random"
    use_bvh: bool = False
    pixel_order: str = "top-down"

    look_from: Tuple[float, float, float] = (13.0, 2.0, 3.0)
    look_at: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    vup: Tuple[float, float, float] = (0.0, 1.0, 0.0)
    vfov: float = 20.0
    aperture: float = 0.1
    focus_dist: float = 10.0

    @property
    def image_height(self) -> int:
        if self.aspect_ratio <= 0:
            return 0
        return int(self.image_width / self.aspect_ratio)

    @classmethod
    def from_quality(cls, level: str, **overrides) -> "RenderConfig":
        try:
            preset = QUALITY_LEVELS[level]
        except KeyError:
            raise ConfigurationError(
                f"unknown quality level {level!r}, expected one of {sorted(QUALITY_LEVELS)}")
        values = dict(preset)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def with_overrides(self, **overrides) -> "RenderConfig":
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigurationError(f"unknown options: {', '.join(sorted(unknown))}")
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def problems(self):
        """Every configuration problem found, empty when valid."""
        found = []
        if self.image_width <= 0:
            found.append(f"image_width must be > 0, got {self.image_width}")
        if self.aspect_ratio <= 0:
            found.append(f"aspect_ratio must be > 0, got {self.aspect_ratio}")
        elif self.image_width > 0 and self.image_height <= 0:
            found.append(
                f"image height derived from width {self.image_width} and aspect "
                f"ratio {self.aspect_ratio} is zero")
        if self.samples_per_pixel <= 0:
            found.append(f"samples_per_pixel must be > 0, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            found.append(f"max_depth must be >= 0, got {self.max_depth}")
        if self.workers <= 0:
            found.append(f"workers must be > 0, got {self.workers}")
        if self.backend not in BACKENDS:
            found.append(f"backend must be one of {BACKENDS}, got {self.backend!r}")
        if self.scene not in SCENES:
            found.append(f"scene must be one of {SCENES}, got {self.scene!r}")
        if self.pixel_order not in PIXEL_ORDERS:
            found.append(f"pixel_order must be one of {PIXEL_ORDERS}, got {self.pixel_order!r}")
        bad_points = [name for name in ("look_from", "look_at", "vup")
                      if len(getattr(self, name)) != 3]
        for name in bad_points:
            found.append(f"{name} needs three coordinates")
        if not bad_points:
            found.extend(camera_problems(Vector3(*self.look_from), Vector3(*self.look_at),
                                         Vector3(*self.vup), self.vfov,
                                         self.aperture, self.focus_dist))
        return found

    def validate(self) -> "RenderConfig":
        found = self.problems()
        if found:
            raise ConfigurationError(found)
        return self

    def make_camera(self) -> Camera:
        return Camera(Vector3(*self.look_from), Vector3(*self.look_at), Vector3(*self.vup),
                      self.vfov, self.aspect_ratio, self.aperture, self.focus_dist)
