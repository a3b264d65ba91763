# geometry/world.py
import logging
from typing import Iterator, List, Optional

from weekend_raytracer.core.aabb import AABB
from weekend_raytracer.core.ray import Ray
from weekend_raytracer.geometry.bvh import BVHNode
from weekend_raytracer.geometry.hittable import Hittable, HitRecord

logger = logging.getLogger(__name__)


class HittableList(Hittable):
    """
    The scene: a list of Hittable objects answering nearest-hit queries.

    By default every query is a linear scan over all objects. build_bvh()
    switches to a bounding volume hierarchy that reports the same hit.
    Nothing here is mutated while rendering, so one instance is shared
    read-only by all workers.
    """
    def __init__(self, objects: Optional[List[Hittable]] = None):
        self.objects: List[Hittable] = list(objects) if objects else []
        self.bvh_root = None  # top-level BVH node, None means linear scan

    def add(self, obj: Hittable):
        self.objects.append(obj)
        self.bvh_root = None

    def clear(self):
        self.objects.clear()
        self.bvh_root = None

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)

    def build_bvh(self):
        if len(self.objects) == 0:
            self.bvh_root = None
            return
        # The tree reorders its own copy, object order here is kept.
        self.bvh_root = BVHNode(list(self.objects), 0, len(self.objects))
        logger.debug("Built BVH over %d objects", len(self.objects))

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        if self.bvh_root is not None:
            return self.bvh_root.hit(ray, t_min, t_max)
        hit_record = None
        closest_so_far = t_max
        for obj in self.objects:
            rec = obj.hit(ray, t_min, closest_so_far)
            if rec is not None:
                closest_so_far = rec.t
                hit_record = rec
        return hit_record

    def bounding_box(self):
        if not self.objects:
            return None
        box = self.objects[0].bounding_box()
        for obj in self.objects[1:]:
            box = AABB.surrounding_box(box, obj.bounding_box())
        return box
