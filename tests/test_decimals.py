from __future__ import annotations

from decimal import Decimal
import unittest

from tickline_plot.decimals import (
    Notation,
    ShiftedDecimal,
    ShiftedDecimals,
    TickFormat,
    closest_multiple,
    format_decimal,
    format_latex,
    format_mantissa,
    regularize_decimal,
    regularize_exponent,
    rounded_decimal,
)
from tickline_plot.errors import InvalidArgument, NumericOverflow


def parse_label(label: str) -> Decimal:
    mantissa, sep, suffix = label.partition("×10^{")
    value = Decimal(mantissa)
    if sep:
        value = value.scaleb(int(suffix.rstrip("}")))
    return value


class ClosestMultipleTests(unittest.TestCase):
    def test_rounds_towards_requested_direction(self) -> None:
        self.assertEqual(closest_multiple(7, 3, down=True), (2, 6))
        self.assertEqual(closest_multiple(7, 3, down=False), (3, 9))
        self.assertEqual(closest_multiple(-7, 3, down=True), (-3, -9))
        self.assertEqual(closest_multiple(-7, 3, down=False), (-2, -6))
        self.assertEqual(closest_multiple(6, 3, down=False), (2, 6))


class FormatTests(unittest.TestCase):
    def test_small_fraction_gets_leading_zeros(self) -> None:
        self.assertEqual(format_decimal(ShiftedDecimal(5, -2, 0)), "0.05")

    def test_zero_keeps_fraction_digits(self) -> None:
        self.assertEqual(format_decimal(ShiftedDecimal(0, -2, 0)), "0.00")

    def test_outer_exponent_is_an_exact_suffix(self) -> None:
        self.assertEqual(format_decimal(ShiftedDecimal(5, 0, 2)), "5×10^{2}")

    def test_zero_has_no_suffix(self) -> None:
        self.assertEqual(format_decimal(ShiftedDecimal(0, 0, 6)), "0")

    def test_mantissa_variants(self) -> None:
        self.assertEqual(format_mantissa(-15, -1), "-1.5")
        self.assertEqual(format_mantissa(12, 1), "120")
        self.assertEqual(format_mantissa(120, 0), "120")
        self.assertEqual(format_mantissa(-3, -3), "-0.003")
        self.assertEqual(format_mantissa(12345, -2), "123.45")

    def test_latex_form(self) -> None:
        self.assertEqual(format_latex(ShiftedDecimal(5, 0, 2)), r"$5\cdot 10^{2}$")
        self.assertEqual(format_latex(ShiftedDecimal(25, -1)), "$2.5$")

    def test_str_matches_format(self) -> None:
        value = ShiftedDecimal(-25, -3, 6)
        self.assertEqual(str(value), "-0.025×10^{6}")
        self.assertEqual(parse_label(str(value)), value.to_decimal())


class ShiftedDecimalTests(unittest.TestCase):
    def test_coordinate_is_correctly_rounded(self) -> None:
        self.assertEqual(ShiftedDecimal(3, -1).coordinate(), 0.3)
        self.assertEqual(ShiftedDecimal(7, -1, 3).coordinate(), 700.0)
        self.assertEqual(ShiftedDecimal(0, -5).coordinate(), 0.0)

    def test_coordinate_outside_float_range_raises(self) -> None:
        with self.assertRaises(NumericOverflow):
            ShiftedDecimal(1, 400).coordinate()
        with self.assertRaises(NumericOverflow):
            ShiftedDecimal(1, -400).coordinate()

    def test_sequence_shares_exponents(self) -> None:
        values = ShiftedDecimals(range(-2, 8, 2), -1)
        self.assertEqual(len(values), 5)
        self.assertEqual(values.step, 2)
        self.assertEqual(values[0], ShiftedDecimal(-2, -1))
        self.assertEqual(values.labels(), ["-0.2", "0.0", "0.2", "0.4", "0.6"])
        self.assertEqual(values[1:3].labels(), ["0.0", "0.2"])
        self.assertEqual(values.coordinates(), [-0.2, 0.0, 0.2, 0.4, 0.6])


class RegularizeTests(unittest.TestCase):
    def test_in_band_values_are_unchanged(self) -> None:
        values = ShiftedDecimals(range(0, 11), -2)
        self.assertIs(regularize_exponent(TickFormat(), values), values)

    def test_large_exponent_moves_to_suffix(self) -> None:
        values = ShiftedDecimals(range(1, 5), 6)
        regular = regularize_exponent(TickFormat(), values)
        self.assertEqual((regular.inner_exponent, regular.outer_exponent), (0, 6))
        self.assertEqual(regular.notation, Notation.SCIENTIFIC)
        self.assertEqual(regular.labels()[0], "1×10^{6}")

    def test_thousands_uses_multiples_of_three(self) -> None:
        fmt = TickFormat(thousands=True)
        regular = regularize_exponent(fmt, ShiftedDecimals(range(1, 5), 7))
        self.assertEqual((regular.inner_exponent, regular.outer_exponent), (1, 6))
        self.assertEqual(regular.notation, Notation.ENGINEERING)
        self.assertEqual(regular.labels()[0], "10×10^{6}")

        small = regularize_exponent(fmt, ShiftedDecimals(range(1, 5), -5))
        self.assertEqual((small.inner_exponent, small.outer_exponent), (1, -6))

    def test_regularization_is_idempotent_and_preserves_values(self) -> None:
        for fmt in (TickFormat(), TickFormat(thousands=True), TickFormat(max_exponent=0, min_exponent=0)):
            for inner in (-9, -4, -1, 0, 2, 5, 11):
                values = ShiftedDecimals(range(-3, 4), inner)
                once = regularize_exponent(fmt, values)
                self.assertEqual(regularize_exponent(fmt, once), once)
                self.assertEqual(
                    [v.to_decimal() for v in once],
                    [v.to_decimal() for v in values],
                )
                for value, label in zip(once, once.labels(), strict=True):
                    self.assertEqual(parse_label(label), value.to_decimal())

    def test_regularize_single_value(self) -> None:
        value = regularize_decimal(TickFormat(), ShiftedDecimal(25, 8))
        self.assertEqual(value, ShiftedDecimal(25, 0, 8))
        self.assertEqual(format_decimal(value), "25×10^{8}")


class TickFormatTests(unittest.TestCase):
    def test_rejects_inverted_band(self) -> None:
        with self.assertRaises(InvalidArgument):
            TickFormat(max_exponent=-1, min_exponent=1)

    def test_rejects_zero_sigdigits(self) -> None:
        with self.assertRaises(InvalidArgument):
            TickFormat(single_tick_sigdigits=0)


class RoundedDecimalTests(unittest.TestCase):
    def test_rounds_to_significant_digits(self) -> None:
        self.assertEqual(format_decimal(rounded_decimal(1234.5678, 3)), "1230")
        self.assertEqual(format_decimal(rounded_decimal(0.000123456, 2)), "0.00012")
        self.assertEqual(rounded_decimal(5.0, 3), ShiftedDecimal(5, 0))

    def test_rounds_half_to_even(self) -> None:
        self.assertEqual(rounded_decimal(-2.5, 1), ShiftedDecimal(-2, 0))
        self.assertEqual(rounded_decimal(3.5, 1), ShiftedDecimal(4, 0))

    def test_zero(self) -> None:
        self.assertEqual(rounded_decimal(0.0, 3), ShiftedDecimal(0, 0))
        self.assertEqual(rounded_decimal(-0.0, 3), ShiftedDecimal(0, 0))

    def test_rejects_bad_arguments(self) -> None:
        with self.assertRaises(InvalidArgument):
            rounded_decimal(1.0, 0)
        with self.assertRaises(InvalidArgument):
            rounded_decimal(float("nan"), 3)


if __name__ == "__main__":
    unittest.main()
