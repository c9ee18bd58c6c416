"""Tick placement and selection.

Ticks are powers of ten multiplied by 1, 2 or 5. Other arrangements, such as
multiples of 3 offset by 7, are deliberately never generated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple, Sequence
import logging
import math

from tickline_plot.decimals import (
    MAX_EXACT_INTEGER,
    ShiftedDecimals,
    TickFormat,
    closest_multiple,
    format_decimal,
    regularize_decimal,
    regularize_exponent,
    rounded_decimal,
    shortest_decimal,
)
from tickline_plot.errors import InvalidArgument, NumericOverflow
from tickline_plot.intervals import Interval

if TYPE_CHECKING:
    from tickline_plot.defaults import Options

LOGGER = logging.getLogger(__name__)


class Tick(NamedTuple):
    coordinate: float
    label: str


@dataclass(frozen=True)
class TickSelection:
    """Weights for scoring tick alternatives. Lower scores are better."""

    log10_widening: int = 1
    target_count: int = 7
    label_penalty: float = 0.1
    twos_penalty: float = 0.0
    fives_penalty: float = 0.0
    exponent_penalty: float = 3.0

    def __post_init__(self) -> None:
        if self.log10_widening < 1:
            raise InvalidArgument(f"log10_widening must be >= 1, got {self.log10_widening}")
        if self.target_count < 1:
            raise InvalidArgument(f"target_count must be >= 1, got {self.target_count}")

    @classmethod
    def from_options(cls, options: "Options") -> "TickSelection":
        return cls(
            log10_widening=options.tick_selection_log10_widening,
            target_count=options.tick_selection_target_count,
            label_penalty=options.tick_selection_label_penalty,
            twos_penalty=options.tick_selection_twos_penalty,
            fives_penalty=options.tick_selection_fives_penalty,
            exponent_penalty=options.tick_selection_exponent_penalty,
        )


def thin_ticks(ticks: range, k: int) -> range:
    """Thin a range to step ``k``, moving both endpoints inwards."""
    if k <= 1:
        raise InvalidArgument("thinning step must be > 1")
    if len(ticks) == 0:
        return range(0)
    _, a = closest_multiple(ticks[0], k, down=False)
    _, b = closest_multiple(ticks[-1], k, down=True)
    return range(a, b + 1, k)


def compress_ticks(ticks: range, k: int) -> range:
    """Divide the endpoints of a range by ``k``, moving them inwards. The new step is 1."""
    if k < 1:
        raise InvalidArgument("compression factor must be >= 1")
    if len(ticks) == 0:
        return range(0)
    a, _ = closest_multiple(ticks[0], k, down=False)
    b, _ = closest_multiple(ticks[-1], k, down=True)
    return range(a, b + 1)


def linear_tick_alternatives(interval: Interval, *, log10_widening: int = 1) -> list[ShiftedDecimals]:
    """Candidate tick sets inside ``interval``, finest first.

    The finest division is ``log10_widening`` decades below the span of the
    interval; each step-1 division is followed by its step-2 and step-5
    thinnings, then compressed by 10 to give the next decade. Bounds are
    computed on the shortest decimal representation of each endpoint, so the
    arithmetic below is exact.
    """
    if log10_widening < 1:
        raise InvalidArgument(f"log10_widening must be >= 1, got {log10_widening}")
    if not interval.is_nonzero():
        raise InvalidArgument("use an interval with positive length")
    lower = shortest_decimal(interval.min)
    upper = shortest_decimal(interval.max)
    span = upper - lower
    if not span.is_finite() or not math.isfinite(interval.max - interval.min):
        raise NumericOverflow(f"interval span of {interval} is not finite")
    exponent = span.adjusted() - log10_widening
    lo = math.ceil(lower.scaleb(-exponent))
    hi = math.floor(upper.scaleb(-exponent))
    if max(abs(lo), abs(hi)) > MAX_EXACT_INTEGER:
        raise NumericOverflow(
            f"ticks for {interval} at 10^{exponent} exceed the exact integer range of float64"
        )

    ticks1 = range(lo, hi + 1)
    alternatives = [ShiftedDecimals(ticks1, exponent)]
    while len(ticks1) >= 2:
        for k in (2, 5):
            thinned = thin_ticks(ticks1, k)
            if len(thinned) >= 2:
                alternatives.append(ShiftedDecimals(thinned, exponent))
        exponent += 1
        ticks1 = compress_ticks(ticks1, 10)
        if len(ticks1) >= 2:
            alternatives.append(ShiftedDecimals(ticks1, exponent))
    return alternatives


def ticks_penalty(tick_selection: TickSelection, ticks: ShiftedDecimals) -> float:
    n = len(ticks)
    score = 1.0 * (n - tick_selection.target_count) ** 2
    # label length is approximated by the inner exponent, plus a flat cost for the suffix
    exponent_cost = abs(ticks.inner_exponent) + (ticks.outer_exponent != 0) * tick_selection.exponent_penalty
    score += exponent_cost * n * tick_selection.label_penalty
    if ticks.step == 2:
        score += tick_selection.twos_penalty
    elif ticks.step == 5:
        score += tick_selection.fives_penalty
    return score


def select_ticks(tick_selection: TickSelection, alternatives: Sequence[ShiftedDecimals]) -> ShiftedDecimals:
    """The alternative with the lowest penalty; the first one generated wins ties."""
    if not alternatives:
        raise InvalidArgument("no tick alternatives to select from")
    best_index = 0
    best_score = ticks_penalty(tick_selection, alternatives[0])
    for index in range(1, len(alternatives)):
        score = ticks_penalty(tick_selection, alternatives[index])
        if score < best_score:
            best_index = index
            best_score = score
    best = alternatives[best_index]
    LOGGER.debug(
        "selected ticks %s (step %d, 10^%d, outer 10^%d) with score %.3f out of %d alternatives",
        best.significands,
        best.step,
        best.inner_exponent,
        best.outer_exponent,
        best_score,
        len(alternatives),
    )
    return best


def sensible_linear_ticks(
    interval: Interval,
    tick_format: TickFormat,
    tick_selection: TickSelection,
) -> tuple[Tick, ...]:
    if interval.is_nonzero():
        alternatives = [
            regularize_exponent(tick_format, ticks)
            for ticks in linear_tick_alternatives(interval, log10_widening=tick_selection.log10_widening)
        ]
        chosen = select_ticks(tick_selection, alternatives)
        return tuple(Tick(value.coordinate(), format_decimal(value)) for value in chosen)
    value = regularize_decimal(tick_format, rounded_decimal(interval.min, tick_format.single_tick_sigdigits))
    LOGGER.debug("degenerate interval %s, single tick %s", interval, value)
    return (Tick(value.coordinate(), format_decimal(value)),)

