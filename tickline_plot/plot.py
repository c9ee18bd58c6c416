from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol
import logging

import numpy as np

from tickline_plot.adapters import normalize_xy
from tickline_plot.axis import DrawingArea, FinalizedLinearAxis, LinearAxis, render_axis
from tickline_plot.defaults import Options, get_defaults
from tickline_plot.intervals import OptionalInterval, bounds_of, combine_all
from tickline_plot.primitives import Rectangle, Sink
from tickline_plot.raster.canvas import RGBA
from tickline_plot.series import SeriesData, SeriesStyle

LOGGER = logging.getLogger(__name__)


class Content(Protocol):
    def bounds_xy(self) -> tuple[OptionalInterval, OptionalInterval]:
        ...

    def render(self, sink: Sink, drawing_area: DrawingArea) -> None:
        ...


def _coerce_color(color: tuple[int, int, int] | tuple[int, int, int, int], alpha: float) -> RGBA:
    if len(color) == 3:
        r, g, b = color
        a = int(max(0.0, min(1.0, alpha)) * 255)
        return (r, g, b, a)
    r, g, b, a = color
    out_a = int(max(0.0, min(1.0, alpha)) * a)
    return (r, g, b, out_a)


def _contiguous_true_runs(mask: np.ndarray) -> list[tuple[int, int]]:
    idx = np.flatnonzero(mask)
    if idx.size == 0:
        return []
    runs: list[tuple[int, int]] = []
    start = int(idx[0])
    prev = int(idx[0])
    for v in idx[1:]:
        iv = int(v)
        if iv == prev + 1:
            prev = iv
            continue
        runs.append((start, prev + 1))
        start = iv
        prev = iv
    runs.append((start, prev + 1))
    return runs


@dataclass(frozen=True)
class Lines:
    """A polyline through ``(x, y)``. Non-finite points break the line."""

    data: SeriesData
    style: SeriesStyle = field(default_factory=SeriesStyle)

    @classmethod
    def from_xy(
        cls,
        y: Any = None,
        *,
        x: Any = None,
        color: tuple[int, int, int] | tuple[int, int, int, int] = (255, 165, 0),
        width: int = 1,
        alpha: float = 1.0,
    ) -> "Lines":
        style = SeriesStyle(color=_coerce_color(color, alpha), line_width=max(1, width))
        return cls(data=normalize_xy(y=y, x=x), style=style)

    def bounds_xy(self) -> tuple[OptionalInterval, OptionalInterval]:
        mask = self.data.mask
        return (bounds_of(self.data.x[mask]), bounds_of(self.data.y[mask]))

    def render(self, sink: Sink, drawing_area: DrawingArea) -> None:
        sink.set_line_style(width=self.style.line_width, color=self.style.color)
        for start, stop in _contiguous_true_runs(self.data.mask):
            points = [
                drawing_area.coordinates_to_point((float(x), float(y)))
                for x, y in zip(self.data.x[start:stop], self.data.y[start:stop], strict=True)
            ]
            if len(points) == 1:
                sink.segment(points[0], points[0])
            else:
                sink.polyline(points)


@dataclass(frozen=True)
class PlotStyle:
    margin_left: int = 64
    margin_bottom: int = 40
    margin_right: int = 16
    margin_top: int = 16
    background: RGBA = (12, 16, 23, 255)

    @classmethod
    def from_options(cls, options: Options) -> "PlotStyle":
        return cls(
            margin_left=options.plot_margin_left,
            margin_bottom=options.plot_margin_bottom,
            margin_right=options.plot_margin_right,
            margin_top=options.plot_margin_top,
            background=options.plot_background,
        )


@dataclass
class Plot:
    contents: list[Content] = field(default_factory=list)
    x_axis: LinearAxis = field(default_factory=LinearAxis)
    y_axis: LinearAxis = field(default_factory=LinearAxis)
    style: PlotStyle = field(default_factory=lambda: PlotStyle.from_options(get_defaults()))

    def add(self, content: Content) -> "Plot":
        self.contents.append(content)
        return self

    def lines(
        self,
        y: Any = None,
        *,
        x: Any = None,
        color: tuple[int, int, int] | tuple[int, int, int, int] = (255, 165, 0),
        width: int = 1,
        alpha: float = 1.0,
    ) -> "Plot":
        content = Lines.from_xy(y=y, x=x, color=color, width=width, alpha=alpha)
        if not np.any(content.data.mask):
            LOGGER.warning("line series has no finite points and will not affect the axes")
        return self.add(content)

    def bounds_xy(self) -> tuple[OptionalInterval, OptionalInterval]:
        return combine_all(content.bounds_xy() for content in self.contents)

    def finalize_axes(self) -> tuple[FinalizedLinearAxis, FinalizedLinearAxis]:
        x_interval, y_interval = self.bounds_xy()
        return (self.x_axis.finalize(x_interval), self.y_axis.finalize(y_interval))

    def layout(self, rectangle: Rectangle) -> tuple[Rectangle, Rectangle, Rectangle]:
        """Split ``rectangle`` into the x axis, y axis and plotting rectangles."""
        style = self.style
        left = min(rectangle.right, rectangle.left + style.margin_left)
        bottom = min(rectangle.top, rectangle.bottom + style.margin_bottom)
        right = max(left, rectangle.right - style.margin_right)
        top = max(bottom, rectangle.top - style.margin_top)
        plot_rect = Rectangle(left, right, bottom, top)
        x_axis_rect = Rectangle(left, right, rectangle.bottom, bottom)
        y_axis_rect = Rectangle(rectangle.left, left, bottom, top)
        return (x_axis_rect, y_axis_rect, plot_rect)

    def render(self, sink: Sink, rectangle: Rectangle) -> DrawingArea:
        x_axis_rect, y_axis_rect, plot_rect = self.layout(rectangle)
        finalized_x_axis, finalized_y_axis = self.finalize_axes()
        render_axis(sink, x_axis_rect, finalized_x_axis, orientation="x")
        render_axis(sink, y_axis_rect, finalized_y_axis, orientation="y")
        drawing_area = DrawingArea(
            finalized_x_axis=finalized_x_axis,
            finalized_y_axis=finalized_y_axis,
            rectangle=plot_rect,
        )
        for content in self.contents:
            content.render(sink, drawing_area)
        return drawing_area

