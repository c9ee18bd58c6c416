from tickline_plot.api import plot, render_rgba, save_png
from tickline_plot.axis import (
    AxisStyle,
    DrawingArea,
    FinalizedLinearAxis,
    LinearAxis,
    coordinate_to_unit,
    finalize_axis,
    render_axis,
)
from tickline_plot.decimals import ShiftedDecimal, ShiftedDecimals, TickFormat, format_decimal, format_latex
from tickline_plot.defaults import Options, get_defaults, load_options, set_defaults
from tickline_plot.errors import InvalidArgument, InvalidInterval, NumericOverflow, PlotDataError, TicklineError
from tickline_plot.intervals import Interval, combine, compute_bounds
from tickline_plot.plot import Lines, Plot, PlotStyle
from tickline_plot.primitives import Point, Rectangle, Sink
from tickline_plot.ticks import Tick, TickSelection, sensible_linear_ticks

__all__ = [
    "AxisStyle",
    "DrawingArea",
    "FinalizedLinearAxis",
    "Interval",
    "InvalidArgument",
    "InvalidInterval",
    "LinearAxis",
    "Lines",
    "NumericOverflow",
    "Options",
    "Plot",
    "PlotDataError",
    "PlotStyle",
    "Point",
    "Rectangle",
    "ShiftedDecimal",
    "ShiftedDecimals",
    "Sink",
    "Tick",
    "TickFormat",
    "TickSelection",
    "TicklineError",
    "combine",
    "compute_bounds",
    "coordinate_to_unit",
    "finalize_axis",
    "format_decimal",
    "format_latex",
    "get_defaults",
    "load_options",
    "plot",
    "render_axis",
    "render_rgba",
    "save_png",
    "sensible_linear_ticks",
    "set_defaults",
]
