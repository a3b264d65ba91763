import os
import tempfile
import unittest
from unittest import mock

from weekend_raytracer.config import RenderConfig
from weekend_raytracer.errors import ConfigurationError
from weekend_raytracer.main import EXIT_BAD_CONFIG, EXIT_OK, main


class RenderConfigTests(unittest.TestCase):
    def test_defaults_are_valid(self) -> None:
        config = RenderConfig().validate()
        self.assertEqual(config.image_height, 225)
        self.assertGreaterEqual(config.workers, 1)

    def test_every_problem_reported(self) -> None:
        config = RenderConfig(image_width=0, samples_per_pixel=0, max_depth=-1, workers=0)
        with self.assertRaises(ConfigurationError) as ctx:
            config.validate()
        self.assertEqual(len(ctx.exception.problems), 4)

    def test_zero_derived_height(self) -> None:
        with self.assertRaises(ConfigurationError):
            RenderConfig(image_width=1, aspect_ratio=2.0).validate()

    def test_zero_depth_allowed(self) -> None:
        RenderConfig(max_depth=0).validate()

    def test_quality_preset_with_overrides(self) -> None:
        config = RenderConfig.from_quality("draft", image_width=50, seed=None)
        self.assertEqual(config.image_width, 50)
        self.assertEqual(config.samples_per_pixel, 1)
        with self.assertRaises(ConfigurationError):
            RenderConfig.from_quality("ultra")

    def test_unknown_override(self) -> None:
        with self.assertRaises(ConfigurationError):
            RenderConfig().with_overrides(colour="red")

    def test_camera_problems_reported_with_the_rest(self) -> None:
        with self.assertRaises(ConfigurationError) as ctx:
            RenderConfig(image_width=0, vfov=0.0).validate()
        problems = ctx.exception.problems
        self.assertEqual(len(problems), 2)
        self.assertTrue(any("image_width" in p for p in problems))
        self.assertTrue(any("vfov" in p for p in problems))

    def test_degenerate_camera_rejected_by_validate(self) -> None:
        for config in (RenderConfig(vfov=0.0),
                       RenderConfig(vfov=180.0),
                       RenderConfig(aperture=-0.1),
                       RenderConfig(focus_dist=0.0),
                       RenderConfig(look_from=(1.0, 1.0, 1.0), look_at=(1.0, 1.0, 1.0)),
                       RenderConfig(look_from=(0.0, 5.0, 0.0), look_at=(0.0, 0.0, 0.0))):
            with self.assertRaises(ConfigurationError):
                config.validate()


class CommandLineTests(unittest.TestCase):
    def test_render_to_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "out.ppm")
            code = main(["--width", "8", "--aspect-ratio", "2", "--samples", "1", "--depth", "3",
                         "--workers", "2", "--backend", "thread", "--seed", "1",
                         "--scene", "three-spheres", "--bvh", "--output", path])
            self.assertEqual(code, EXIT_OK)
            with open(path) as stream:
                lines = stream.read().splitlines()
        self.assertEqual(lines[:3], ["P3", "8 4", "255"])
        self.assertEqual(len(lines), 3 + 8 * 4)
        for line in lines[3:]:
            values = [int(v) for v in line.split()]
            self.assertEqual(len(values), 3)
            self.assertTrue(all(0 <= v <= 255 for v in values))

    def test_bad_configuration_exit_code(self) -> None:
        self.assertEqual(main(["--width", "0"]), EXIT_BAD_CONFIG)
        self.assertEqual(main(["--workers", "0", "--samples", "-1"]), EXIT_BAD_CONFIG)

    def test_degenerate_camera_exit_code(self) -> None:
        self.assertEqual(main(["--width", "8", "--look-from", "1", "1", "1",
                               "--look-at", "1", "1", "1"]), EXIT_BAD_CONFIG)

    def test_unwritable_output_fails_before_rendering(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "missing", "out.ppm")
            with mock.patch("weekend_raytracer.main.Renderer") as renderer:
                code = main(["--width", "8", "--samples", "1", "--backend", "thread",
                             "--output", path])
        self.assertEqual(code, EXIT_BAD_CONFIG)
        renderer.assert_not_called()


if __name__ == "__main__":
    unittest.main()
