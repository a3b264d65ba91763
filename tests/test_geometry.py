import random
import unittest

from weekend_raytracer.core.ray import Ray
from weekend_raytracer.core.vector import Color, Vector3
from weekend_raytracer.geometry.sphere import Sphere
from weekend_raytracer.geometry.world import HittableList
from weekend_raytracer.materials.lambertian import Lambertian
from weekend_raytracer.scenes import random_scene

GREY = Lambertian(Color(0.5, 0.5, 0.5))


class SphereHitTests(unittest.TestCase):
    def setUp(self) -> None:
        self.sphere = Sphere(Vector3(0.0, 0.0, -5.0), 1.0, GREY)

    def test_hit_from_outside_takes_near_root(self) -> None:
        rec = self.sphere.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), 0.001, float("inf"))
        self.assertIsNotNone(rec)
        self.assertAlmostEqual(rec.t, 4.0)
        self.assertTrue(rec.front_face)
        self.assertAlmostEqual(rec.normal.z, 1.0)
        self.assertIs(rec.material, GREY)

    def test_hit_from_inside_flips_normal(self) -> None:
        ray = Ray(Vector3(0, 0, -5), Vector3(0, 0, -1))
        rec = self.sphere.hit(ray, 0.001, float("inf"))
        self.assertIsNotNone(rec)
        self.assertAlmostEqual(rec.t, 1.0)
        self.assertFalse(rec.front_face)
        self.assertLess(ray.direction.dot(rec.normal), 0)

    def test_direction_length_does_not_change_hit_point(self) -> None:
        rec = self.sphere.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -2)), 0.001, float("inf"))
        self.assertAlmostEqual(rec.t, 2.0)
        self.assertAlmostEqual(rec.p.z, -4.0)

    def test_miss(self) -> None:
        self.assertIsNone(self.sphere.hit(Ray(Vector3(0, 0, 0), Vector3(0, 1, 0)), 0.001, float("inf")))

    def test_roots_outside_interval(self) -> None:
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))
        # Near root at 4 excluded, far root at 6 accepted.
        rec = self.sphere.hit(ray, 4.5, float("inf"))
        self.assertAlmostEqual(rec.t, 6.0)
        self.assertIsNone(self.sphere.hit(ray, 0.001, 3.0))
        self.assertIsNone(self.sphere.hit(ray, 6.5, float("inf")))

    def test_normal_always_opposes_ray(self) -> None:
        rng = random.Random(11)
        for _ in range(300):
            origin = Vector3(rng.uniform(-3, 3), rng.uniform(-3, 3), rng.uniform(-8, -2))
            direction = Vector3(rng.uniform(-1, 1), rng.uniform(-1, 1), rng.uniform(-1, 1))
            ray = Ray(origin, direction)
            rec = self.sphere.hit(ray, 0.001, float("inf"))
            if rec is not None:
                self.assertLess(ray.direction.dot(rec.normal), 0)
                self.assertAlmostEqual(rec.normal.length(), 1.0)

    def test_radius_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            Sphere(Vector3(0, 0, 0), 0.0, GREY)


class SceneHitTests(unittest.TestCase):
    def test_closest_hit_wins_regardless_of_order(self) -> None:
        far = Sphere(Vector3(0, 0, -10), 1.0, GREY)
        near = Sphere(Vector3(0, 0, -4), 1.0, GREY)
        for objects in ([far, near], [near, far]):
            world = HittableList(objects)
            rec = world.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), 0.001, float("inf"))
            self.assertAlmostEqual(rec.t, 3.0)

    def test_empty_scene_misses(self) -> None:
        world = HittableList()
        self.assertIsNone(world.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), 0.001, float("inf")))
        self.assertEqual(len(world), 0)

    def test_bvh_reports_same_hits_as_linear_scan(self) -> None:
        linear = random_scene(random.Random(5))
        accelerated = random_scene(random.Random(5))
        accelerated.build_bvh()
        self.assertIsNotNone(accelerated.bvh_root)

        rng = random.Random(21)
        hits = 0
        for _ in range(400):
            origin = Vector3(rng.uniform(-12, 12), rng.uniform(0.1, 3), rng.uniform(-12, 12))
            direction = Vector3(rng.uniform(-1, 1), rng.uniform(-1, 0.2), rng.uniform(-1, 1))
            ray = Ray(origin, direction)
            expected = linear.hit(ray, 0.001, float("inf"))
            actual = accelerated.hit(ray, 0.001, float("inf"))
            if expected is None:
                self.assertIsNone(actual)
                continue
            hits += 1
            self.assertIsNotNone(actual)
            self.assertEqual(expected.t, actual.t)
        self.assertGreater(hits, 0)

    def test_adding_an_object_drops_the_bvh(self) -> None:
        world = HittableList([Sphere(Vector3(0, 0, -4), 1.0, GREY)])
        world.build_bvh()
        world.add(Sphere(Vector3(0, 0, -2), 0.5, GREY))
        self.assertIsNone(world.bvh_root)
        rec = world.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), 0.001, float("inf"))
        self.assertAlmostEqual(rec.t, 1.5)


if __name__ == "__main__":
    unittest.main()
