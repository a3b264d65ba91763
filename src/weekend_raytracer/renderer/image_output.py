# renderer/image_output.py
import logging
import os
from typing import TextIO

import numpy as np

# Keep stdout free of the pygame banner, the PPM may be written there.
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # noqa: E402

logger = logging.getLogger(__name__)

PIXEL_ORDERS = ("top-down", "reverse")


def emission_order(pixels: np.ndarray, width: int, height: int, order: str = "top-down") -> np.ndarray:
    """
    Reorder framebuffer pixels (row 0 at the bottom) for output.

    "top-down": top row first, each row left to right (standard PPM layout).
    "reverse": reverse linear index, last pixel first.
    """
    if pixels.shape[0] != width * height:
        raise ValueError(f"expected {width * height} pixels, got {pixels.shape[0]}")
    if order == "top-down":
        return pixels.reshape(height, width, 3)[::-1].reshape(-1, 3)
    if order == "reverse":
        return pixels[::-1]
    raise ValueError(f"unknown pixel order {order!r}, expected one of {PIXEL_ORDERS}")


def write_ppm(stream: TextIO, pixels: np.ndarray, width: int, height: int,
              order: str = "top-down"):
    """Write 8-bit pixels (n, 3) as a plain-text P3 image."""
    ordered = emission_order(pixels, width, height, order)
    stream.write(f"P3\n{width} {height}\n255\n")
    stream.writelines(f"{r} {g} {b}\n" for r, g, b in ordered.tolist())
    stream.flush()


def to_surface_array(pixels: np.ndarray, width: int, height: int) -> np.ndarray:
    """(width, height, 3) array in the layout pygame.surfarray expects, top row at y=0."""
    image = emission_order(pixels, width, height, "top-down").reshape(height, width, 3)
    return np.ascontiguousarray(image.transpose(1, 0, 2))


def save_image(path: str, pixels: np.ndarray, width: int, height: int):
    """Save 8-bit pixels through pygame (format from the extension, e.g. .png or .bmp)."""
    surface = pygame.surfarray.make_surface(to_surface_array(pixels, width, height))
    pygame.image.save(surface, path)
    logger.info("Saved %dx%d image to %s", width, height, path)


def show_preview(pixels: np.ndarray, width: int, height: int, title: str = "Ray Tracer"):
    """Open a pygame window with the finished image until it is closed or Esc is pressed."""
    pygame.init()
    try:
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(title)
        pygame.surfarray.blit_array(screen, to_surface_array(pixels, width, height))
        pygame.display.flip()
        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
            clock.tick(30)
    finally:
        pygame.quit()
