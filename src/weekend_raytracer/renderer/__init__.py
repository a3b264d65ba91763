from weekend_raytracer.renderer.framebuffer import Framebuffer
from weekend_raytracer.renderer.raytracer import (
    RenderSettings, Renderer, partition_rows, ray_color, render_rows, sky_color)

__all__ = ["Framebuffer", "RenderSettings", "Renderer", "partition_rows",
           "ray_color", "render_rows", "sky_color"]
