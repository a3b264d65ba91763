# renderer/raytracer.py
import logging
import math
import random
import time
from concurrent.futures import (FIRST_EXCEPTION, ProcessPoolExecutor,
                                ThreadPoolExecutor, wait)
from concurrent.futures.process import BrokenProcessPool
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from weekend_raytracer.core.ray import Ray
from weekend_raytracer.core.utils import row_rng
from weekend_raytracer.core.vector import Color, Vector3
from weekend_raytracer.errors import ConfigurationError, RenderError
from weekend_raytracer.renderer.framebuffer import Framebuffer

logger = logging.getLogger(__name__)

# Minimum hit distance, keeps scattered rays off the surface they left.
SHADOW_ACNE_EPSILON = 0.001

BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)


@dataclass(frozen=True)
class RenderSettings:
    width: int
    height: int
    samples_per_pixel: int
    max_depth: int
    seed: Optional[int] = None

    def __post_init__(self):
        problems = []
        if self.width <= 0:
            problems.append(f"width must be > 0, got {self.width}")
        if self.height <= 0:
            problems.append(f"height must be > 0, got {self.height}")
        if self.samples_per_pixel <= 0:
            problems.append(f"samples_per_pixel must be > 0, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            problems.append(f"max_depth must be >= 0, got {self.max_depth}")
        if problems:
            raise ConfigurationError(problems)


def sky_color(direction: Vector3) -> Color:
    """
    Background gradient: white looking straight down, sky blue straight up.
    """
    unit_direction = direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - t) + SKY_BLUE * t


def ray_color(ray: Ray, world, depth: int, rng=random) -> Color:
    """
    Color seen along a ray, following at most depth bounces.

    Equivalent to recursing on each scattered ray with depth - 1 and
    multiplying by the attenuation, written as a loop so that large depths
    do not grow the stack.
    """
    throughput = WHITE
    while depth > 0:
        rec = world.hit(ray, SHADOW_ACNE_EPSILON, math.inf)
        if rec is None:
            return throughput * sky_color(ray.direction)

        scattered = rec.material.scatter(ray, rec, rng)
        if scattered is None:
            return BLACK
        ray, attenuation = scattered
        throughput = throughput * attenuation
        depth -= 1

    # Bounce budget exhausted, no more light is gathered.
    return BLACK


def sample_pixel(camera, world, settings: RenderSettings, row: int, col: int, rng=random) -> Color:
    """Monte-Carlo average of samples_per_pixel jittered rays through one pixel."""
    # Single pixel wide/tall images sample the whole viewport.
    u_scale = 1.0 / max(settings.width - 1, 1)
    v_scale = 1.0 / max(settings.height - 1, 1)
    r = g = b = 0.0
    for _ in range(settings.samples_per_pixel):
        s = (col + rng.random()) * u_scale
        t = (row + rng.random()) * v_scale
        color = ray_color(camera.get_ray(s, t, rng), world, settings.max_depth, rng)
        r += color.x
        g += color.y
        b += color.z
    n = settings.samples_per_pixel
    return Color(r / n, g / n, b / n)


def render_rows(camera, world, settings: RenderSettings, rows: range,
                out: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Render a contiguous block of rows.

    Writes into out (shape (len(rows) * width, 3)) when given, otherwise
    into a new array, and returns it.
    """
    width = settings.width
    if out is None:
        out = np.zeros((len(rows) * width, 3), dtype=np.float64)
    logger.debug("Rows %d-%d started", rows.start, rows.stop - 1)
    start = time.perf_counter()
    for offset, row in enumerate(rows):
        rng = row_rng(settings.seed, row)
        base = offset * width
        for col in range(width):
            color = sample_pixel(camera, world, settings, row, col, rng)
            out[base + col] = (color.x, color.y, color.z)
    logger.debug("Rows %d-%d finished in %.2fs", rows.start, rows.stop - 1,
                 time.perf_counter() - start)
    return out


def partition_rows(height: int, workers: int) -> List[range]:
    """
    Split [0, height) into `workers` contiguous blocks.

    The first workers - 1 blocks hold height // workers rows each and the
    last block takes everything that is left, so the blocks never overlap
    and always cover every row. When workers > height every block but the
    last is empty, so the last block holds all rows and rendering is serial.
    """
    if height < 0:
        raise ValueError(f"height must not be negative, got {height}")
    if workers <= 0:
        raise ValueError(f"workers must be positive, got {workers}")
    rows_per_worker = height // workers
    blocks = [range(i * rows_per_worker, (i + 1) * rows_per_worker)
              for i in range(workers - 1)]
    blocks.append(range((workers - 1) * rows_per_worker, height))
    return blocks


###############################################################################
# Process pool worker state
###############################################################################
# Filled once per worker process by the pool initializer, so the scene and
# camera are shipped to each worker once instead of with every block.
_worker_scene = {}


def _init_worker(camera, world, settings: RenderSettings):
    _worker_scene["camera"] = camera
    _worker_scene["world"] = world
    _worker_scene["settings"] = settings


def _render_block_in_worker(rows: range):
    block = render_rows(_worker_scene["camera"], _worker_scene["world"],
                        _worker_scene["settings"], rows)
    return rows, block


class Renderer:
    """
    Renders a scene into a Framebuffer with a pool of parallel workers.

    Rows are partitioned into one block per worker. With the "thread"
    backend each worker writes straight into its own slice of the shared
    framebuffer. With the "process" backend each worker returns its block
    and the block is copied into its slice. In both cases render() only
    returns once every block has completed, and raises RenderError if any
    worker failed.
    """
    def __init__(self, settings: RenderSettings, workers: int = 1,
                 backend: str = "process", mp_context=None):
        if workers <= 0:
            raise ValueError(f"workers must be positive, got {workers}")
        if backend not in ("process", "thread"):
            raise ValueError(f"unknown backend {backend!r}")
        self.settings = settings
        self.workers = workers
        self.backend = backend
        self.mp_context = mp_context

    def render(self, camera, world) -> Framebuffer:
        settings = self.settings
        framebuffer = Framebuffer(settings.width, settings.height)
        blocks = [rows for rows in partition_rows(settings.height, self.workers) if len(rows)]
        logger.info("Rendering %dx%d, %d samples/pixel, depth %d, %d blocks on %d %s workers",
                    settings.width, settings.height, settings.samples_per_pixel,
                    settings.max_depth, len(blocks), self.workers, self.backend)
        logger.info("Row blocks: %s",
                    ", ".join(f"{rows.start}-{rows.stop - 1}" for rows in blocks))
        if len(blocks) < self.workers:
            logger.warning("%d workers but only %d rows: %d block(s) to render, %d worker(s) idle",
                           self.workers, settings.height, len(blocks),
                           self.workers - len(blocks))

        start = time.perf_counter()
        if self.backend == "thread":
            done = self._render_threads(camera, world, framebuffer, blocks)
        else:
            done = self._render_processes(camera, world, framebuffer, blocks)

        covered = sorted(row for rows in done for row in rows)
        if covered != list(range(settings.height)):
            raise RenderError(
                f"framebuffer incomplete: {len(covered)} of {settings.height} rows rendered")

        logger.info("Render finished in %.2fs", time.perf_counter() - start)
        return framebuffer

    def _render_threads(self, camera, world, framebuffer: Framebuffer, blocks):
        pool = ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="render")
        return self._run_blocks(
            pool,
            lambda rows: pool.submit(render_rows, camera, world, self.settings, rows,
                                     framebuffer.row_slice(rows)),
            blocks,
            lambda rows, result: None)

    def _render_processes(self, camera, world, framebuffer: Framebuffer, blocks):
        pool = ProcessPoolExecutor(max_workers=min(self.workers, len(blocks)) or 1,
                                   mp_context=self.mp_context,
                                   initializer=_init_worker,
                                   initargs=(camera, world, self.settings))
        return self._run_blocks(
            pool,
            lambda rows: pool.submit(_render_block_in_worker, rows),
            blocks,
            lambda rows, result: framebuffer.write_rows(*result))

    def _run_blocks(self, pool, submit, blocks, store):
        """
        Submit every block and collect the results.

        On the first failure queued blocks are cancelled and the pool is shut
        down without waiting for blocks that are still running.
        """
        try:
            futures = {submit(rows): rows for rows in blocks}
            done = self._collect(futures, store)
        except BaseException:
            pool.shutdown(wait=False, cancel_futures=True)
            raise
        pool.shutdown(wait=True)
        return done

    def _collect(self, futures, store):
        """Barrier: wait for every block, fail on the first worker error."""
        finished, pending = wait(futures, return_when=FIRST_EXCEPTION)
        for future in pending:
            future.cancel()
        done = []
        for future in finished:
            rows = futures[future]
            try:
                result = future.result()
            except BrokenProcessPool as exc:
                raise RenderError(f"render worker died while drawing rows "
                                  f"{rows.start}-{rows.stop - 1}") from exc
            except Exception as exc:
                raise RenderError(f"render worker failed on rows "
                                  f"{rows.start}-{rows.stop - 1}: {exc}") from exc
            store(rows, result)
            logger.debug("Rows %d-%d collected", rows.start, rows.stop - 1)
            done.append(rows)
        if pending:
            raise RenderError(f"{len(pending)} render blocks did not complete")
        return done
