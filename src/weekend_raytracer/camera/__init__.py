from weekend_raytracer.camera.camera import Camera

__all__ = ["Camera"]
