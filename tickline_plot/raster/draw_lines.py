from __future__ import annotations

from typing import Sequence

import numpy as np

from tickline_plot.raster.canvas import RGBA, draw_hline, draw_pixel, draw_vline


PixelPoint = tuple[int, int]


def draw_polyline(dst: np.ndarray, points: Sequence[PixelPoint], color: RGBA, width: int = 1) -> None:
    if len(points) < 2:
        return
    for start, end in zip(points[:-1], points[1:], strict=True):
        draw_segment(dst, start, end, color=color, width=width)


def draw_segment(dst: np.ndarray, a: PixelPoint, b: PixelPoint, color: RGBA, width: int = 1) -> None:
    x0, y0 = a
    x1, y1 = b
    radius = max(0, width // 2)
    if y0 == y1:
        for yy in range(y0 - radius, y0 + radius + 1):
            draw_hline(dst, x0, x1, yy, color)
        return
    if x0 == x1:
        for xx in range(x0 - radius, x0 + radius + 1):
            draw_vline(dst, xx, y0, y1, color)
        return
    _draw_line_segment(dst, x0, y0, x1, y1, color=color, radius=radius)


def _draw_line_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, radius: int) -> None:
    # Bresenham
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _draw_square_brush(dst, x0, y0, color=color, radius=radius)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, radius: int) -> None:
    if radius == 0:
        draw_pixel(dst, x, y, color)
        return
    for yy in range(y - radius, y + radius + 1):
        draw_hline(dst, x - radius, x + radius, yy, color)
