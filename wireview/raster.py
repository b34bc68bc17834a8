import logging
import math

import numpy as np
from numba import njit
from PIL import Image

from .config import Color
from .pipeline import Segment2D


LOGGER = logging.getLogger(__name__)


# ============================================================
#  Numba rasterizers
# ============================================================

@njit(cache=True)
def draw_line(img, x0, y0, x1, y1, r, g, b):
    """
    Bresenham integer line drawing into img.

    img:
      - shape (W, H, 3), dtype uint8, indexed [x, y, channel]
        (pygame surfarray order)
      - pixels outside the image are skipped, so endpoints may lie
        slightly off the framebuffer
    """
    W, H, _ = img.shape

    steep = abs(x0 - x1) < abs(y0 - y1)
    if steep:
        x0, y0 = y0, x0
        x1, y1 = y1, x1
    if x0 > x1:
        x0, x1 = x1, x0
        y0, y1 = y1, y0

    dx = x1 - x0
    dy = abs(y1 - y0)
    error2 = 0
    y = y0
    ystep = 1 if y1 > y0 else -1

    for x in range(x0, x1 + 1):
        if steep:
            px, py = y, x
        else:
            px, py = x, y
        if 0 <= px < W and 0 <= py < H:
            img[px, py, 0] = r
            img[px, py, 1] = g
            img[px, py, 2] = b
        error2 += 2 * dy
        if error2 > dx:
            y += ystep
            error2 -= 2 * dx


@njit(cache=True)
def fill_rect(img, x, y, w, h, r, g, b):
    """Fill the w*h block whose top-left pixel is (x, y), clipped to img."""
    W, H, _ = img.shape
    for px in range(max(0, x), min(W, x + w)):
        for py in range(max(0, y), min(H, y + h)):
            img[px, py, 0] = r
            img[px, py, 1] = g
            img[px, py, 2] = b


# ============================================================
#  Framebuffer
# ============================================================

class Canvas:
    """
    RGB framebuffer for device-space segments.

    Device coordinates put the origin at the lower-left corner with y
    growing upward (see view.viewport); rows in `pixels` grow downward,
    so y is flipped when plotting.
    """
    ENDPOINT_SIZE = 4

    def __init__(self, width: int, height: int, background: Color = (255, 255, 255)):
        self.width = width
        self.height = height
        self.background = background
        self.pixels = np.empty((width, height, 3), dtype=np.uint8)
        self.clear()

    def clear(self):
        self.pixels[:, :, :] = self.background

    def to_pixel(self, x: float, y: float):
        """Device coordinates -> integer (column, row)."""
        px = min(int(math.floor(x)), self.width - 1)
        py = self.height - 1 - min(int(math.floor(y)), self.height - 1)
        return px, py

    def draw_segment(self, seg: Segment2D, color: Color = (0, 0, 0), endpoint_color=None):
        """Draw one line; endpoint_color adds small square markers at both ends."""
        x0, y0 = self.to_pixel(seg.x0, seg.y0)
        x1, y1 = self.to_pixel(seg.x1, seg.y1)
        draw_line(self.pixels, x0, y0, x1, y1, *color)
        if endpoint_color is not None:
            half = self.ENDPOINT_SIZE // 2
            for x, y in ((x0, y0), (x1, y1)):
                fill_rect(self.pixels, x - half, y - half,
                          self.ENDPOINT_SIZE, self.ENDPOINT_SIZE, *endpoint_color)

    def to_image(self) -> Image.Image:
        """Pillow image (rows first, as image files expect)."""
        return Image.fromarray(np.ascontiguousarray(self.pixels.transpose(1, 0, 2)))

    def save(self, path):
        self.to_image().save(path)
        LOGGER.info("wrote %dx%d frame to %s", self.width, self.height, path)
