from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal
import logging
import math

from tickline_plot.decimals import TickFormat
from tickline_plot.defaults import Options, get_defaults
from tickline_plot.errors import InvalidArgument, PlotDataError
from tickline_plot.intervals import Interval, OptionalInterval
from tickline_plot.primitives import Point, Rectangle, Sink
from tickline_plot.raster.canvas import RGBA
from tickline_plot.ticks import Tick, TickSelection, sensible_linear_ticks

LOGGER = logging.getLogger(__name__)

Orientation = Literal["x", "y"]


@dataclass(frozen=True)
class AxisStyle:
    line_width: int = 1
    line_gap: int = 4
    tick_length: int = 6
    tick_label_gap: int = 4
    axis_label_gap: int = 4
    font_size_px: float = 12.0
    line_color: RGBA = (124, 138, 156, 255)
    text_color: RGBA = (208, 218, 232, 255)

    @classmethod
    def from_options(cls, options: Options) -> "AxisStyle":
        return cls(
            line_width=options.axis_style_line_width,
            line_gap=options.axis_style_line_gap,
            tick_length=options.axis_style_tick_length,
            tick_label_gap=options.axis_style_tick_label_gap,
            axis_label_gap=options.axis_style_axis_label_gap,
            font_size_px=options.axis_style_font_size_px,
            line_color=options.axis_style_line_color,
            text_color=options.axis_style_text_color,
        )


@dataclass(frozen=True)
class LinearAxis:
    """Configuration of a linear axis. Policies default to a copy of the process defaults."""

    tick_selection: TickSelection = field(default_factory=lambda: TickSelection.from_options(get_defaults()))
    tick_format: TickFormat = field(default_factory=lambda: TickFormat.from_options(get_defaults()))
    style: AxisStyle = field(default_factory=lambda: AxisStyle.from_options(get_defaults()))
    label: str = ""

    def finalize(self, interval: OptionalInterval) -> "FinalizedLinearAxis":
        return finalize_axis(self, interval)


@dataclass(frozen=True)
class FinalizedLinearAxis:
    interval: Interval
    ticks: tuple[Tick, ...]
    style: AxisStyle = field(default_factory=AxisStyle)
    label: str = ""

    def __post_init__(self) -> None:
        if not self.interval.is_nonzero():
            raise InvalidArgument(f"finalized axis needs an interval of positive width, got {self.interval}")

    def coordinate_to_unit(self, x: float) -> float:
        return coordinate_to_unit(self, x)


def ensure_nonempty_interval(interval: Interval) -> Interval:
    """Widen a degenerate interval so that it has positive width and strictly contains its value."""
    if interval.is_nonzero():
        return interval
    value = interval.min
    lo = float(math.floor(value))
    hi = float(math.ceil(value))
    if lo == hi:
        pad = max(1.0, math.ulp(value))
        lo = value - pad
        hi = value + pad
    return Interval(lo, hi)


def finalize_axis(axis: LinearAxis, interval: OptionalInterval) -> FinalizedLinearAxis:
    if interval is None:
        raise PlotDataError(f"cannot finalize axis {axis.label!r} without data")
    ticks = sensible_linear_ticks(interval, axis.tick_format, axis.tick_selection)
    if not interval.is_nonzero():
        LOGGER.debug("widening degenerate interval %s for axis %r", interval, axis.label)
    # after tick selection, so that ticks reflect the data
    mapping_interval = ensure_nonempty_interval(interval)
    return FinalizedLinearAxis(interval=mapping_interval, ticks=ticks, style=axis.style, label=axis.label)


def coordinate_to_unit(finalized_axis: FinalizedLinearAxis, x: float) -> float:
    """Map ``x`` to ``[0, 1]`` using the axis interval. Values outside the interval are not clamped."""
    lo, hi = finalized_axis.interval.extrema()
    return (x - lo) / (hi - lo)


def unit_to_canvas(a: float, b: float, z: float) -> float:
    """Transform a coordinate in ``[0, 1]`` to ``[a, b]``."""
    return a + (b - a) * z


@dataclass(frozen=True)
class DrawingArea:
    finalized_x_axis: FinalizedLinearAxis
    finalized_y_axis: FinalizedLinearAxis
    rectangle: Rectangle

    def x_coordinate_to_canvas(self, x: float) -> float:
        if not math.isfinite(x):
            raise PlotDataError(f"non-finite x coordinate: {x}")
        x_u = coordinate_to_unit(self.finalized_x_axis, x)
        return unit_to_canvas(self.rectangle.left, self.rectangle.right, x_u)

    def y_coordinate_to_canvas(self, y: float) -> float:
        if not math.isfinite(y):
            raise PlotDataError(f"non-finite y coordinate: {y}")
        y_u = coordinate_to_unit(self.finalized_y_axis, y)
        return unit_to_canvas(self.rectangle.bottom, self.rectangle.top, y_u)

    def coordinates_to_point(self, xy: tuple[float, float]) -> Point:
        x, y = xy
        return Point(self.x_coordinate_to_canvas(x), self.y_coordinate_to_canvas(y))


def render_axis(
    sink: Sink,
    rectangle: Rectangle,
    axis: FinalizedLinearAxis,
    *,
    orientation: Orientation,
) -> None:
    """Draw the axis line, tick marks, tick labels and axis label inside ``rectangle``.

    For ``"x"`` the rectangle lies below the plot and the axis runs along its
    top edge; for ``"y"`` it lies to the left and the axis runs along its right
    edge.
    """
    if orientation not in ("x", "y"):
        raise InvalidArgument(f"orientation has to be 'x' or 'y', got {orientation!r}")
    is_x = orientation == "x"
    style = axis.style

    def _point(along: float, across: float) -> Point:
        return Point(along, across) if is_x else Point(across, along)

    a = rectangle.left if is_x else rectangle.bottom
    b = rectangle.right if is_x else rectangle.top
    inner_edge, outer_edge = (rectangle.top, rectangle.bottom) if is_x else (rectangle.right, rectangle.left)
    y1 = inner_edge - style.line_gap  # axis line, tick start
    y2 = y1 - style.tick_length  # tick end
    y3 = y2 - style.tick_label_gap  # tick labels

    sink.set_line_style(width=style.line_width, color=style.line_color)
    sink.segment(_point(a, y1), _point(b, y1))
    for tick in axis.ticks:
        x = unit_to_canvas(a, b, coordinate_to_unit(axis, tick.coordinate))
        sink.segment(_point(x, y1), _point(x, y2))
        sink.text(
            _point(x, y3),
            tick.label,
            top=is_x,
            right=not is_x,
            color=style.text_color,
            size=style.font_size_px,
        )
    if axis.label:
        sink.text(
            _point((a + b) / 2, outer_edge + style.axis_label_gap),
            axis.label,
            bottom=is_x,
            top=not is_x,
            rotate=0 if is_x else 90,
            color=style.text_color,
            size=style.font_size_px,
        )
