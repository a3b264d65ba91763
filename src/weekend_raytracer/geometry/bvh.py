# geometry/bvh.py
from weekend_raytracer.core.aabb import AABB

# Leaves hold up to this many objects and test them linearly.
MAX_LEAF_SIZE = 2


class BVHNode:
    """
    Bounding volume hierarchy node.

    Objects in [start, end) are sorted by bounding box centroid along the
    axis of largest centroid spread and split at the median. The list is
    reordered in place, so callers pass a copy.
    """
    def __init__(self, objects: list, start: int, end: int):
        object_span = end - start

        # Compute the bounding box of all objects for this node
        self.box = objects[start].bounding_box()
        for i in range(start + 1, end):
            self.box = AABB.surrounding_box(self.box, objects[i].bounding_box())

        if object_span <= MAX_LEAF_SIZE:
            self.is_leaf = True
            self.objects = objects[start:end]
            self.left = self.right = None
            return

        # Split along the axis where the centroids are spread the most.
        best_axis = 0
        best_extent = -1.0
        for axis in range(3):
            centroids = [objects[i].bounding_box().centroid(axis) for i in range(start, end)]
            extent = max(centroids) - min(centroids)
            if extent > best_extent:
                best_extent = extent
                best_axis = axis

        objects[start:end] = sorted(
            objects[start:end],
            key=lambda obj: obj.bounding_box().centroid(best_axis))
        mid = start + object_span // 2

        self.is_leaf = False
        self.objects = None
        self.left = BVHNode(objects, start, mid)
        self.right = BVHNode(objects, mid, end)

    def hit(self, ray, t_min: float, t_max: float):
        if not self.box.hit(ray, t_min, t_max):
            return None

        if self.is_leaf:
            hit_record = None
            for obj in self.objects:
                rec = obj.hit(ray, t_min, t_max)
                if rec is not None:
                    t_max = rec.t
                    hit_record = rec
            return hit_record

        hit_left = self.left.hit(ray, t_min, t_max)

        # Only accept right-side hits closer than the left one.
        if hit_left is not None:
            t_max = hit_left.t

        hit_right = self.right.hit(ray, t_min, t_max)
        return hit_right if hit_right is not None else hit_left

    def depth(self) -> int:
        if self.is_leaf:
            return 1
        return 1 + max(self.left.depth(), self.right.depth())
