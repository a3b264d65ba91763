# renderer/framebuffer.py
import numpy as np


class Framebuffer:
    """
    Flat row-major buffer of linear RGB colors, index row * width + col.

    Row 0 is the bottom of the image. Workers each own a disjoint block of
    rows and only ever write through row_slice() for that block.
    """
    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"framebuffer needs positive dimensions, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = np.zeros((width * height, 3), dtype=np.float64)

    def __len__(self) -> int:
        return self.width * self.height

    def index(self, row: int, col: int) -> int:
        return row * self.width + col

    def row_slice(self, rows: range) -> np.ndarray:
        """Writable view over the pixels of a contiguous block of rows."""
        return self.pixels[rows.start * self.width:rows.stop * self.width]

    def write_rows(self, rows: range, block: np.ndarray):
        view = self.row_slice(rows)
        if block.shape != view.shape:
            raise ValueError(f"block shape {block.shape} does not match rows {rows}")
        view[:] = block

    def as_image(self) -> np.ndarray:
        """(height, width, 3) view, row 0 at the bottom."""
        return self.pixels.reshape(self.height, self.width, 3)
