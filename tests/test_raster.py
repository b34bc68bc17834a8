import numpy as np
from PIL import Image

from wireview.pipeline import Segment2D
from wireview.raster import Canvas, draw_line, fill_rect


WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
RED = (255, 0, 0)


def painted(canvas, color):
    mask = np.all(canvas.pixels == np.array(color, dtype=np.uint8), axis=2)
    return {(int(x), int(y)) for x, y in zip(*np.nonzero(mask))}


class TestNumbaRasterizers:
    """Bresenham and block fills on a [x, y, c] buffer"""

    def test_diagonal(self):
        img = np.zeros((5, 5, 3), dtype=np.uint8)
        draw_line(img, 0, 0, 4, 4, 255, 255, 255)
        assert [img[i, i, 0] for i in range(5)] == [255] * 5
        assert int(img.sum()) == 5 * 3 * 255

    def test_steep_and_reversed(self):
        img = np.zeros((4, 8, 3), dtype=np.uint8)
        draw_line(img, 2, 7, 1, 0, 10, 20, 30)
        columns = {x for x in range(4) for y in range(8) if img[x, y, 0] == 10}
        rows = {y for x in range(4) for y in range(8) if img[x, y, 0] == 10}
        assert columns == {1, 2}
        assert rows == set(range(8))

    def test_off_image_pixels_skipped(self):
        img = np.zeros((4, 4, 3), dtype=np.uint8)
        draw_line(img, -3, 1, 10, 1, 1, 1, 1)
        assert int(img[:, 1, 0].sum()) == 4

    def test_fill_rect_clipped(self):
        img = np.zeros((4, 4, 3), dtype=np.uint8)
        fill_rect(img, -1, -1, 3, 3, 9, 9, 9)
        assert int((img[:, :, 0] == 9).sum()) == 4


class TestCanvas:
    """framebuffer with device y pointing up"""

    def test_clear(self):
        canvas = Canvas(6, 4, WHITE)
        assert painted(canvas, WHITE) == {(x, y) for x in range(6) for y in range(4)}

    def test_y_is_flipped(self):
        canvas = Canvas(10, 10, WHITE)
        canvas.draw_segment(Segment2D(0.0, 0.0, 9.0, 0.0), BLACK)
        assert painted(canvas, BLACK) == {(x, 9) for x in range(10)}

    def test_device_edges_map_inside(self):
        canvas = Canvas(10, 10)
        assert canvas.to_pixel(0.0, 0.0) == (0, 9)
        assert canvas.to_pixel(10.0, 10.0) == (9, 0)
        assert canvas.to_pixel(5.5, 5.5) == (5, 4)

    def test_endpoint_markers(self):
        canvas = Canvas(20, 20, WHITE)
        canvas.draw_segment(Segment2D(5.0, 10.0, 15.0, 10.0), BLACK, RED)
        red = painted(canvas, RED)
        assert len(red) == 2 * Canvas.ENDPOINT_SIZE ** 2
        assert (5, 9) in red and (15, 9) in red
        assert (10, 9) in painted(canvas, BLACK)

    def test_image_export(self, tmp_path):
        canvas = Canvas(12, 8, WHITE)
        canvas.draw_segment(Segment2D(0.0, 8.0, 11.0, 8.0), BLACK)
        image = canvas.to_image()
        assert image.size == (12, 8)
        assert image.getpixel((3, 0)) == BLACK
        assert image.getpixel((3, 7)) == WHITE

        path = tmp_path / "frame.png"
        canvas.save(path)
        with Image.open(path) as reloaded:
            assert reloaded.size == (12, 8)
            assert reloaded.convert("RGB").getpixel((11, 0)) == BLACK
