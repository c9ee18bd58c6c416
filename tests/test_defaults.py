from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from tickline_plot.axis import AxisStyle, LinearAxis
from tickline_plot.decimals import TickFormat
from tickline_plot.defaults import Options, get_defaults, load_options, options_from_mapping, set_defaults
from tickline_plot.errors import InvalidArgument
from tickline_plot.plot import PlotStyle
from tickline_plot.ticks import TickSelection


class DefaultsTests(unittest.TestCase):
    def test_builtin_defaults(self) -> None:
        options = Options()
        self.assertEqual(TickFormat.from_options(options), TickFormat())
        self.assertEqual(TickSelection.from_options(options), TickSelection())
        self.assertEqual(AxisStyle.from_options(options), AxisStyle())
        self.assertEqual(PlotStyle.from_options(options), PlotStyle())
        self.assertEqual(options.tick_selection_target_count, 7)
        self.assertEqual(options.tick_format_max_exponent, 3)
        self.assertEqual(options.tick_format_min_exponent, -3)

    def test_load_options_from_toml(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "tickline.toml"
            path.write_text(
                "\n".join(
                    [
                        "[tick_format]",
                        "thousands = true",
                        "single_tick_sigdigits = 2",
                        "",
                        "[tick_selection]",
                        "target_count = 5",
                        "label_penalty = 1",
                        "",
                        "[axis_style]",
                        "line_color = [1, 2, 3, 255]",
                        "",
                        "[plot]",
                        "margin_left = 80",
                    ]
                ),
                encoding="utf-8",
            )
            options = load_options(path, base=Options())

        self.assertTrue(options.tick_format_thousands)
        self.assertEqual(options.tick_format_single_tick_sigdigits, 2)
        self.assertEqual(options.tick_selection_target_count, 5)
        self.assertEqual(options.tick_selection_label_penalty, 1.0)
        self.assertIsInstance(options.tick_selection_label_penalty, float)
        self.assertEqual(options.axis_style_line_color, (1, 2, 3, 255))
        self.assertEqual(options.plot_margin_left, 80)
        self.assertEqual(options.plot_margin_right, 16)

    def test_missing_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileNotFoundError):
                load_options(Path(tmp) / "missing.toml")

    def test_unknown_keys_and_tables_are_rejected(self) -> None:
        with self.assertRaises(InvalidArgument):
            options_from_mapping({"tick_format": {"max_exponnet": 4}})
        with self.assertRaises(InvalidArgument):
            options_from_mapping({"legend": {"position": "top"}})
        with self.assertRaises(InvalidArgument):
            options_from_mapping({"tick_format": 3})

    def test_values_are_type_checked(self) -> None:
        with self.assertRaises(InvalidArgument):
            options_from_mapping({"tick_format": {"thousands": "yes"}})
        with self.assertRaises(InvalidArgument):
            options_from_mapping({"tick_selection": {"target_count": 7.5}})
        with self.assertRaises(InvalidArgument):
            options_from_mapping({"tick_selection": {"target_count": True}})
        with self.assertRaises(InvalidArgument):
            options_from_mapping({"axis_style": {"text_color": [0, 0, 256, 255]}})
        with self.assertRaises(InvalidArgument):
            options_from_mapping({"plot": {"background": [0, 0, 0]}})

    def test_set_defaults_returns_previous_and_affects_new_axes(self) -> None:
        original = get_defaults()
        custom = options_from_mapping({"tick_format": {"max_exponent": 6}}, base=original)
        previous = set_defaults(custom)
        try:
            self.assertIs(previous, original)
            self.assertIs(get_defaults(), custom)
            self.assertEqual(LinearAxis().tick_format.max_exponent, 6)
        finally:
            set_defaults(original)
        self.assertIs(get_defaults(), original)

    def test_set_defaults_rejects_other_types(self) -> None:
        with self.assertRaises(InvalidArgument):
            set_defaults({"tick_format": {}})  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
