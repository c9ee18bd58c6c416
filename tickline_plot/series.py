from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from tickline_plot.raster.canvas import RGBA


@dataclass(frozen=True)
class SeriesData:
    x: np.ndarray
    y: np.ndarray
    mask: np.ndarray
    source_name: str | None = None


@dataclass(frozen=True)
class SeriesStyle:
    color: RGBA = (255, 165, 0, 255)
    line_width: int = 1
