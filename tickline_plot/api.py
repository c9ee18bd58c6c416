from __future__ import annotations

from pathlib import Path
from typing import Any

import numpy as np
from PIL import Image

from tickline_plot.axis import LinearAxis
from tickline_plot.plot import Plot
from tickline_plot.raster import RasterSink


DEFAULT_WIDTH = 640
DEFAULT_HEIGHT = 360


def plot(
    y: Any = None,
    *,
    x: Any = None,
    x_label: str = "",
    y_label: str = "",
    color: tuple[int, int, int] | tuple[int, int, int, int] = (255, 165, 0),
    width: int = 1,
) -> Plot:
    """A line plot with labelled linear axes. Pass ``y=None`` for an empty plot."""
    out = Plot(x_axis=LinearAxis(label=x_label), y_axis=LinearAxis(label=y_label))
    if y is not None:
        out.lines(y=y, x=x, color=color, width=width)
    return out


def render_rgba(plot: Plot, width: int | None = None, height: int | None = None) -> np.ndarray:
    width = DEFAULT_WIDTH if width is None else width
    height = DEFAULT_HEIGHT if height is None else height
    if width <= 1 or height <= 1:
        raise ValueError("width/height must be > 1")
    sink = RasterSink.new(width, height, background=plot.style.background)
    plot.render(sink, sink.bounds())
    return sink.canvas


def save_png(plot: Plot, path: str | Path, width: int | None = None, height: int | None = None) -> Path:
    out_path = Path(path)
    rgba = render_rgba(plot, width=width, height=height)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(rgba).save(out_path)
    return out_path
