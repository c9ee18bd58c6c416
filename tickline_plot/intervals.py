from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Any, Iterable, Optional
import math

import numpy as np

from tickline_plot.adapters.normalize import coerce_xy_pairs
from tickline_plot.errors import InvalidInterval


@dataclass(frozen=True)
class Interval:
    """The closed interval ``[min, max]``. ``min == max`` is allowed."""

    min: float
    max: float

    def __post_init__(self) -> None:
        try:
            lo, hi = float(self.min), float(self.max)
        except OverflowError as exc:
            raise InvalidInterval(f"interval bounds must be finite, got [{self.min}, {self.max}]") from exc
        if not (math.isfinite(lo) and math.isfinite(hi)):
            raise InvalidInterval(f"interval bounds must be finite, got [{self.min}, {self.max}]")
        if self.min > self.max:
            raise InvalidInterval(f"interval requires min <= max, got [{self.min}, {self.max}]")

    @classmethod
    def point(cls, value: float) -> "Interval":
        return cls(value, value)

    def extrema(self) -> tuple[float, float]:
        return (self.min, self.max)

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def is_nonzero(self) -> bool:
        return self.min < self.max


OptionalInterval = Optional[Interval]


def is_nonzero(interval: Interval) -> bool:
    """Test whether the interval has positive length."""
    return interval.min < interval.max


def combine(a: OptionalInterval, b: OptionalInterval) -> OptionalInterval:
    """The narrowest interval containing both arguments. ``None`` is the empty set."""
    if a is None:
        return b
    if b is None:
        return a
    return Interval(min(a.min, b.min), max(a.max, b.max))


def combine_xy(
    a: tuple[OptionalInterval, OptionalInterval],
    b: tuple[OptionalInterval, OptionalInterval],
) -> tuple[OptionalInterval, OptionalInterval]:
    ax, ay = a
    bx, by = b
    return (combine(ax, bx), combine(ay, by))


def bounds_of(values: Any) -> OptionalInterval:
    arr = np.asarray(values, dtype=np.float64).ravel()
    finite = arr[np.isfinite(arr)]
    if finite.size == 0:
        return None
    return Interval(float(np.min(finite)), float(np.max(finite)))


def compute_bounds(xy_pairs: Any) -> tuple[OptionalInterval, OptionalInterval]:
    """Bounds of a sequence of ``(x, y)`` pairs, skipping pairs with a non-finite coordinate.

    Accepts any sequence of pairs or an ``(n, 2)`` array. Returns ``(None, None)``
    when there are no usable points.
    """
    x, y, mask = coerce_xy_pairs(xy_pairs)
    return (bounds_of(x[mask]), bounds_of(y[mask]))


def combine_all(bounds: Iterable[tuple[OptionalInterval, OptionalInterval]]) -> tuple[OptionalInterval, OptionalInterval]:
    return reduce(combine_xy, bounds, (None, None))
