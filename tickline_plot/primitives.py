from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Protocol, Sequence
import math

from tickline_plot.errors import InvalidArgument
from tickline_plot.raster.canvas import RGBA


class Point(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class Rectangle:
    """An axis-aligned rectangle in canvas coordinates, y pointing up."""

    left: float
    right: float
    bottom: float
    top: float

    def __post_init__(self) -> None:
        for name in ("left", "right", "bottom", "top"):
            if not math.isfinite(getattr(self, name)):
                raise InvalidArgument(f"rectangle {name} must be finite")
        if self.left > self.right:
            raise InvalidArgument(f"rectangle requires left <= right, got {self.left} > {self.right}")
        if self.bottom > self.top:
            raise InvalidArgument(f"rectangle requires bottom <= top, got {self.bottom} > {self.top}")

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.top - self.bottom


class Sink(Protocol):
    """Drawing primitives consumed by axis and content rendering."""

    def set_line_style(self, *, width: float, color: RGBA) -> None:
        ...

    def segment(self, a: Point, b: Point) -> None:
        ...

    def polyline(self, points: Sequence[Point]) -> None:
        ...

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
        ...
