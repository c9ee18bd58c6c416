"""Exact decimal tick values.

A tick value is kept as an integer significand and two powers of ten, so the
label text and the coordinate used for placement are both derived from the
same integers. The only inexact step is the final, correctly rounded
conversion to ``float`` in :meth:`ShiftedDecimal.coordinate`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from decimal import ROUND_HALF_EVEN, Decimal, localcontext
from enum import Enum
from typing import TYPE_CHECKING, Iterator, overload
import math

from tickline_plot.errors import InvalidArgument, NumericOverflow

if TYPE_CHECKING:
    from tickline_plot.defaults import Options


# Integers beyond this are not exactly representable as float64.
MAX_EXACT_INTEGER = 2**53

TIMES = "×"


class Notation(Enum):
    PLAIN = "plain"
    SCIENTIFIC = "scientific"
    ENGINEERING = "engineering"


def closest_multiple(n: int, k: int, *, down: bool) -> tuple[int, int]:
    """Find the largest (``down``) or smallest multiple ``z = m * k`` with ``z <= n`` (``z >= n``).

    Returns ``(m, z)``.
    """
    m, r = divmod(n, k)
    if r == 0:
        return (m, n)
    if down:
        return (m, n - r)
    return (m + 1, n - r + k)


def shortest_decimal(value: float) -> Decimal:
    """The shortest decimal that round-trips to ``value``."""
    return Decimal(repr(float(value)))


@dataclass(frozen=True)
class ShiftedDecimal:
    """``significand * 10^inner_exponent``, displayed with an optional ``* 10^outer_exponent`` suffix."""

    significand: int
    inner_exponent: int
    outer_exponent: int = 0

    @property
    def exponent(self) -> int:
        return self.inner_exponent + self.outer_exponent

    def to_decimal(self) -> Decimal:
        return Decimal(f"{self.significand}E{self.exponent}")

    def coordinate(self) -> float:
        if self.significand == 0:
            return 0.0
        value = float(self.to_decimal())
        if math.isinf(value) or value == 0.0:
            raise NumericOverflow(f"{self.significand}e{self.exponent} is outside the float64 range")
        return value

    def __str__(self) -> str:
        return format_decimal(self)


@dataclass(frozen=True)
class ShiftedDecimals(Sequence):
    """Evenly spaced :class:`ShiftedDecimal` values sharing both exponents."""

    significands: range
    inner_exponent: int
    outer_exponent: int = 0
    notation: Notation = Notation.PLAIN

    def __len__(self) -> int:
        return len(self.significands)

    @overload
    def __getitem__(self, index: int) -> ShiftedDecimal: ...

    @overload
    def __getitem__(self, index: slice) -> "ShiftedDecimals": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return replace(self, significands=self.significands[index])
        return ShiftedDecimal(self.significands[index], self.inner_exponent, self.outer_exponent)

    def __iter__(self) -> Iterator[ShiftedDecimal]:
        for significand in self.significands:
            yield ShiftedDecimal(significand, self.inner_exponent, self.outer_exponent)

    @property
    def step(self) -> int:
        return self.significands.step

    def inner_to_outer(self, delta: int, *, notation: Notation | None = None) -> "ShiftedDecimals":
        """Change the inner exponent by ``-delta`` and the outer by ``delta``."""
        outer = self.outer_exponent + delta
        if notation is None:
            notation = self.notation if outer != 0 else Notation.PLAIN
        return replace(
            self,
            inner_exponent=self.inner_exponent - delta,
            outer_exponent=outer,
            notation=notation,
        )

    def coordinates(self) -> list[float]:
        return [value.coordinate() for value in self]

    def labels(self) -> list[str]:
        return [format_decimal(value) for value in self]


@dataclass(frozen=True)
class TickFormat:
    """Exponent band in which plain decimal notation is used, and related options."""

    max_exponent: int = 3
    min_exponent: int = -3
    thousands: bool = False
    single_tick_sigdigits: int = 3

    def __post_init__(self) -> None:
        if self.min_exponent > self.max_exponent:
            raise InvalidArgument(
                f"min_exponent must be <= max_exponent, got {self.min_exponent} > {self.max_exponent}"
            )
        if self.single_tick_sigdigits < 1:
            raise InvalidArgument("single_tick_sigdigits must be >= 1")

    @classmethod
    def from_options(cls, options: "Options") -> "TickFormat":
        return cls(
            max_exponent=options.tick_format_max_exponent,
            min_exponent=options.tick_format_min_exponent,
            thousands=options.tick_format_thousands,
            single_tick_sigdigits=options.tick_format_single_tick_sigdigits,
        )


def regularize_exponent(tick_format: TickFormat, values: ShiftedDecimals) -> ShiftedDecimals:
    """Bring the inner exponent into the band permitted by ``tick_format``, keeping the values unchanged."""
    inner = values.inner_exponent
    if tick_format.min_exponent <= inner <= tick_format.max_exponent:
        return values
    if tick_format.thousands:
        _, delta = closest_multiple(inner, 3, down=True)
        notation = Notation.ENGINEERING
    else:
        delta = inner
        notation = Notation.SCIENTIFIC
    if values.outer_exponent + delta == 0:
        notation = Notation.PLAIN
    return values.inner_to_outer(delta, notation=notation)


def regularize_decimal(tick_format: TickFormat, value: ShiftedDecimal) -> ShiftedDecimal:
    single = ShiftedDecimals(
        range(value.significand, value.significand + 1),
        value.inner_exponent,
        value.outer_exponent,
    )
    return regularize_exponent(tick_format, single)[0]


def rounded_decimal(value: float, sigdigits: int) -> ShiftedDecimal:
    """Round ``value`` half-even to ``sigdigits`` significant digits, exactly."""
    if sigdigits < 1:
        raise InvalidArgument("sigdigits must be >= 1")
    if not math.isfinite(value):
        raise InvalidArgument(f"cannot round non-finite value {value}")
    with localcontext() as ctx:
        ctx.prec = sigdigits
        ctx.rounding = ROUND_HALF_EVEN
        rounded = (+shortest_decimal(value)).normalize()
    sign, digits, exponent = rounded.as_tuple()
    significand = int("".join(str(d) for d in digits))
    if significand == 0:
        return ShiftedDecimal(0, 0)
    return ShiftedDecimal(-significand if sign else significand, int(exponent))


def format_mantissa(significand: int, inner_exponent: int) -> str:
    """Sign, digits and decimal point of ``significand * 10^inner_exponent``, without rounding."""
    parts: list[str] = []
    if significand < 0:
        parts.append("-")
    digits = str(abs(significand))
    if inner_exponent < 0:
        dot = len(digits) + inner_exponent
        if dot > 0:
            parts.append(digits[:dot])
            parts.append(".")
            parts.append(digits[dot:])
        else:
            parts.append("0.")
            parts.append("0" * -dot)
            parts.append(digits)
    else:
        parts.append(digits)
        if inner_exponent > 0 and significand != 0:
            parts.append("0" * inner_exponent)
    return "".join(parts)


def format_decimal(value: ShiftedDecimal) -> str:
    out = format_mantissa(value.significand, value.inner_exponent)
    if value.significand != 0 and value.outer_exponent != 0:
        out += f"{TIMES}10^{{{value.outer_exponent}}}"
    return out


def format_latex(value: ShiftedDecimal) -> str:
    out = format_mantissa(value.significand, value.inner_exponent)
    if value.significand != 0 and value.outer_exponent != 0:
        out += rf"\cdot 10^{{{value.outer_exponent}}}"
    return f"${out}$"
