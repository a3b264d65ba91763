# main.py
import argparse
import logging
import sys
from fractions import Fraction
from typing import Optional, Sequence

from weekend_raytracer.config import (BACKENDS, PIXEL_ORDERS, QUALITY_LEVELS,
                                      SCENES, RenderConfig)
from weekend_raytracer.errors import ConfigurationError, RenderError
from weekend_raytracer.renderer.image_output import save_image, show_preview, write_ppm
from weekend_raytracer.renderer.raytracer import RenderSettings, Renderer
from weekend_raytracer.renderer.tone_mapping import gamma_correct
from weekend_raytracer.scenes import build_scene

logger = logging.getLogger("weekend_raytracer")

EXIT_OK = 0
EXIT_RENDER_FAILED = 1
EXIT_BAD_CONFIG = 2


def _ratio(text: str) -> float:
    """Accepts 1.7777 as well as 16/9."""
    try:
        return float(Fraction(text))
    except (ValueError, ZeroDivisionError):
        raise argparse.ArgumentTypeError(f"not a ratio: {text!r}")


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="weekend-raytracer",
        description="Monte-Carlo path tracer for sphere scenes, writes a P3 PPM image")
    parser.add_argument("--quality", choices=sorted(QUALITY_LEVELS),
                        help="preset for width, samples and depth (explicit options win)")
    parser.add_argument("--width", dest="image_width", type=int, help="image width in pixels")
    parser.add_argument("--aspect-ratio", dest="aspect_ratio", type=_ratio,
                        help="width / height, e.g. 16/9")
    parser.add_argument("--samples", dest="samples_per_pixel", type=int,
                        help="samples per pixel")
    parser.add_argument("--depth", dest="max_depth", type=int, help="maximum bounces per ray")
    parser.add_argument("--workers", type=int, help="number of parallel workers")
    parser.add_argument("--backend", choices=BACKENDS, help="worker type")
    parser.add_argument("--seed", type=int, help="random seed for a reproducible image")
    parser.add_argument("--scene", choices=SCENES, help="scene to render")
    parser.add_argument("--bvh", dest="use_bvh", action="store_true", default=None,
                        help="accelerate intersection with a bounding volume hierarchy")
    parser.add_argument("--pixel-order", dest="pixel_order", choices=PIXEL_ORDERS,
                        help="pixel emission order of the PPM body")

    camera = parser.add_argument_group("camera")
    camera.add_argument("--look-from", dest="look_from", type=float, nargs=3, metavar=("X", "Y", "Z"))
    camera.add_argument("--look-at", dest="look_at", type=float, nargs=3, metavar=("X", "Y", "Z"))
    camera.add_argument("--vup", type=float, nargs=3, metavar=("X", "Y", "Z"))
    camera.add_argument("--vfov", type=float, help="vertical field of view in degrees")
    camera.add_argument("--aperture", type=float, help="lens diameter, 0 for a pinhole")
    camera.add_argument("--focus-dist", dest="focus_dist", type=float,
                        help="distance to the plane in focus")

    output = parser.add_argument_group("output")
    output.add_argument("-o", "--output", default="-",
                        help="PPM output file, '-' for stdout (default)")
    output.add_argument("--save-image", dest="save_image",
                        help="also save through pygame, format from extension (.png, .bmp, .tga)")
    output.add_argument("--preview", action="store_true", help="show the result in a window")
    output.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> RenderConfig:
    overrides = {
        name: getattr(args, name)
        for name in ("image_width", "aspect_ratio", "samples_per_pixel", "max_depth",
                     "workers", "backend", "seed", "scene", "use_bvh", "pixel_order",
                     "vfov", "aperture", "focus_dist")
    }
    for name in ("look_from", "look_at", "vup"):
        value = getattr(args, name)
        overrides[name] = tuple(value) if value is not None else None

    if args.quality:
        return RenderConfig.from_quality(args.quality, **overrides)
    return RenderConfig().with_overrides(**overrides)


def open_output(path: str):
    """stdout for '-', otherwise the opened file. Fails before any rendering."""
    if path == "-":
        return sys.stdout
    try:
        return open(path, "w")
    except OSError as exc:
        raise ConfigurationError(f"cannot open output {path}: {exc.strerror}") from exc


def run(config: RenderConfig, args: argparse.Namespace) -> int:
    config.validate()
    camera = config.make_camera()
    stream = open_output(args.output)
    try:
        world = build_scene(config.scene, config.seed)
        if config.use_bvh:
            world.build_bvh()
        logger.info("Scene %r with %d spheres", config.scene, len(world))

        settings = RenderSettings(width=config.image_width,
                                  height=config.image_height,
                                  samples_per_pixel=config.samples_per_pixel,
                                  max_depth=config.max_depth,
                                  seed=config.seed)
        renderer = Renderer(settings, workers=config.workers, backend=config.backend)
        framebuffer = renderer.render(camera, world)

        pixels = gamma_correct(framebuffer.pixels)
        write_ppm(stream, pixels, settings.width, settings.height, config.pixel_order)
    finally:
        if stream is not sys.stdout:
            stream.close()
    if stream is not sys.stdout:
        logger.info("Wrote %s", args.output)

    if args.save_image:
        save_image(args.save_image, pixels, settings.width, settings.height)
    if args.preview:
        show_preview(pixels, settings.width, settings.height)
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_arguments(argv)
    logging.basicConfig(stream=sys.stderr,
                        level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        config = build_config(args)
        return run(config, args)
    except ConfigurationError as exc:
        for problem in exc.problems:
            logger.error("Invalid configuration: %s", problem)
        return EXIT_BAD_CONFIG
    except RenderError as exc:
        logger.error("Rendering failed: %s", exc)
        return EXIT_RENDER_FAILED


if __name__ == "__main__":
    sys.exit(main())
