from __future__ import annotations

import unittest

import numpy as np

from tickline_plot import axis, defaults, primitives, series
from tickline_plot.primitives import Point, Rectangle
from tickline_plot.raster import (
    RasterSink,
    anchored_origin,
    draw_polyline,
    draw_segment,
    draw_text,
    new_canvas,
    text_size,
    typeset_plain,
)
from tickline_plot.raster import sink
from tickline_plot.raster.canvas import RGBA


WHITE = (255, 255, 255, 255)


class CanvasTests(unittest.TestCase):
    def test_color_alias_is_shared(self) -> None:
        for module in (axis, defaults, primitives, series, sink):
            self.assertIs(module.RGBA, RGBA)

    def test_new_canvas_fills_background(self) -> None:
        canvas = new_canvas(4, 3, (1, 2, 3, 255))
        self.assertEqual(canvas.shape, (3, 4, 4))
        self.assertEqual(canvas.dtype, np.uint8)
        self.assertTrue(np.all(canvas[:, :, 0] == 1))

    def test_new_canvas_rejects_empty_size(self) -> None:
        with self.assertRaises(ValueError):
            new_canvas(0, 10)

    def test_segment_and_polyline_touch_pixels(self) -> None:
        canvas = new_canvas(20, 20)
        draw_segment(canvas, (2, 2), (17, 2), WHITE)
        self.assertTrue(np.all(canvas[2, 2:18, 0] == 255))
        draw_segment(canvas, (0, 0), (19, 19), WHITE)
        self.assertEqual(int(canvas[10, 10, 0]), 255)
        canvas = new_canvas(20, 20)
        draw_polyline(canvas, [(0, 19), (10, 10), (19, 19)], WHITE, width=3)
        self.assertEqual(int(canvas[10, 10, 0]), 255)
        self.assertEqual(int(canvas[11, 10, 0]), 255)

    def test_drawing_outside_canvas_is_clipped(self) -> None:
        canvas = new_canvas(10, 10)
        draw_segment(canvas, (-5, -5), (-1, 20), WHITE)
        self.assertFalse(np.any(canvas[:, :, 0]))


class TextTests(unittest.TestCase):
    def test_exponents_become_superscripts(self) -> None:
        self.assertEqual(typeset_plain("5×10^{-6}"), "5×10⁻⁶")
        self.assertEqual(typeset_plain("12"), "12")

    def test_text_is_rendered_with_coverage(self) -> None:
        canvas = new_canvas(120, 40, color=(0, 0, 0, 0))
        draw_text(canvas, 4, 4, "0.25", WHITE, font_size_px=20.0)
        self.assertTrue(np.any(canvas[:, :, 0] > 0))
        self.assertEqual(int(canvas[39, 119, 3]), 0)

    def test_rotated_text_size_swaps_dimensions(self) -> None:
        w0, h0 = text_size("label", font_size_px=18.0)
        self.assertEqual(text_size("label", font_size_px=18.0, rotate_deg=90), (h0, w0))
        self.assertEqual(text_size("", font_size_px=18.0), (0, 1))

    def test_anchored_origin(self) -> None:
        self.assertEqual(anchored_origin(50, 50, (20, 10)), (40, 45))
        self.assertEqual(anchored_origin(50, 50, (20, 10), left=True, top=True), (50, 50))
        self.assertEqual(anchored_origin(50, 50, (20, 10), right=True, bottom=True), (30, 40))
        # rotated a quarter turn counterclockwise the text reads upwards
        self.assertEqual(anchored_origin(50, 50, (20, 10), left=True, top=True, rotate_deg=90), (50, 30))

    def test_rejects_non_quarter_rotation(self) -> None:
        with self.assertRaises(ValueError):
            text_size("x", rotate_deg=45)


class RasterSinkTests(unittest.TestCase):
    def test_y_axis_points_up(self) -> None:
        sink = RasterSink.new(10, 20)
        self.assertEqual(sink.to_pixel(Point(0, 0)), (0, 19))
        self.assertEqual(sink.to_pixel(Point(9, 19)), (9, 0))
        self.assertEqual(sink.bounds(), Rectangle(0, 9, 0, 19))

    def test_segments_use_line_style(self) -> None:
        sink = RasterSink.new(10, 10)
        sink.set_line_style(width=1, color=(0, 255, 0, 255))
        sink.segment(Point(0, 0), Point(9, 0))
        self.assertTrue(np.all(sink.canvas[9, :, 1] == 255))
        self.assertTrue(np.all(sink.canvas[9, :, 0] == 0))

    def test_fill(self) -> None:
        sink = RasterSink.new(10, 10)
        sink.fill(Rectangle(2, 4, 2, 4), (9, 9, 9, 255))
        self.assertEqual(int(sink.canvas[6, 3, 0]), 9)
        self.assertEqual(int(sink.canvas[0, 0, 0]), 0)

    def test_text_is_anchored(self) -> None:
        sink = RasterSink.new(100, 40)
        sink.text(Point(2, 20), "10^{3}", left=True, color=WHITE, size=16.0)
        lit = np.argwhere(sink.canvas[:, :, 0] > 0)
        self.assertGreater(lit.shape[0], 0)
        self.assertGreaterEqual(int(lit[:, 1].min()), 2)
        self.assertLess(int(lit[:, 1].min()), 10)

    def test_empty_text_is_ignored(self) -> None:
        sink = RasterSink.new(10, 10)
        sink.text(Point(5, 5), "")
        self.assertFalse(np.any(sink.canvas[:, :, 0]))

    def test_rejects_bad_canvas(self) -> None:
        with self.assertRaises(ValueError):
            RasterSink(canvas=np.zeros((4, 4, 3), dtype=np.uint8))


if __name__ == "__main__":
    unittest.main()
