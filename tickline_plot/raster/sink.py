from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from tickline_plot.primitives import Point, Rectangle
from tickline_plot.raster.canvas import RGBA, fill_rect, new_canvas
from tickline_plot.raster.draw_lines import draw_polyline, draw_segment
from tickline_plot.raster.draw_text import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE_PX,
    anchored_origin,
    draw_text,
    text_size,
    typeset_plain,
)


@dataclass
class RasterSink:
    """Draws onto an RGBA ``(height, width, 4)`` array.

    Canvas coordinates have their origin at the bottom-left pixel with y up;
    they are rounded to the nearest pixel.
    """

    canvas: np.ndarray
    font_family: str = DEFAULT_FONT_FAMILY
    font_size_px: float = DEFAULT_FONT_SIZE_PX
    line_width: int = 1
    line_color: RGBA = (255, 255, 255, 255)

    def __post_init__(self) -> None:
        if self.canvas.ndim != 3 or self.canvas.shape[2] != 4 or self.canvas.dtype != np.uint8:
            raise ValueError("canvas must be a uint8 array of shape (height, width, 4)")

    @classmethod
    def new(cls, width: int, height: int, background: RGBA = (0, 0, 0, 255), **kwargs) -> "RasterSink":
        return cls(canvas=new_canvas(width, height, background), **kwargs)

    @property
    def width(self) -> int:
        return int(self.canvas.shape[1])

    @property
    def height(self) -> int:
        return int(self.canvas.shape[0])

    def bounds(self) -> Rectangle:
        return Rectangle(0.0, float(self.width - 1), 0.0, float(self.height - 1))

    def to_pixel(self, point: Point) -> tuple[int, int]:
        px = int(round(point.x))
        py = (self.height - 1) - int(round(point.y))
        return (px, py)

    def set_line_style(self, *, width: float, color: RGBA) -> None:
        self.line_width = max(1, int(round(width)))
        self.line_color = color

    def segment(self, a: Point, b: Point) -> None:
        draw_segment(self.canvas, self.to_pixel(a), self.to_pixel(b), self.line_color, width=self.line_width)

    def polyline(self, points: Sequence[Point]) -> None:
        draw_polyline(self.canvas, [self.to_pixel(p) for p in points], self.line_color, width=self.line_width)

    def fill(self, rectangle: Rectangle, color: RGBA) -> None:
        x0, y0 = self.to_pixel(Point(rectangle.left, rectangle.top))
        x1, y1 = self.to_pixel(Point(rectangle.right, rectangle.bottom))
        fill_rect(self.canvas, x0, y0, x1, y1, color)

    def text(
        self,
        at: Point,
        text: str,
        *,
        left: bool = False,
        right: bool = False,
        top: bool = False,
        bottom: bool = False,
        baseline: bool = False,
        rotate: int = 0,
        color: RGBA | None = None,
        size: float | None = None,
    ) -> None:
        if not text:
            return
        plain = typeset_plain(text)
        font_size_px = self.font_size_px if size is None else size
        extent = text_size(plain, font_family=self.font_family, font_size_px=font_size_px)
        px, py = self.to_pixel(at)
        # glyph boxes are tight, so the baseline is the bottom edge
        x0, y0 = anchored_origin(
            px,
            py,
            extent,
            left=left,
            right=right,
            top=top,
            bottom=bottom or baseline,
            rotate_deg=rotate,
        )
        draw_text(
            self.canvas,
            x0,
            y0,
            plain,
            self.line_color if color is None else color,
            font_family=self.font_family,
            font_size_px=font_size_px,
            rotate_deg=rotate,
        )
