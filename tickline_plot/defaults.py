from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
import logging
import threading
import tomllib
from typing import Any

from tickline_plot.errors import InvalidArgument
from tickline_plot.raster.canvas import RGBA

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Options:
    """Default values for every configurable policy. Lengths are in pixels."""

    # tick format
    tick_format_max_exponent: int = 3
    tick_format_min_exponent: int = -3
    tick_format_thousands: bool = False
    tick_format_single_tick_sigdigits: int = 3

    # tick selection
    tick_selection_log10_widening: int = 1
    tick_selection_target_count: int = 7
    tick_selection_label_penalty: float = 0.1
    tick_selection_twos_penalty: float = 0.0
    tick_selection_fives_penalty: float = 0.0
    tick_selection_exponent_penalty: float = 3.0

    # axis style
    axis_style_line_width: int = 1
    axis_style_line_gap: int = 4
    axis_style_tick_length: int = 6
    axis_style_tick_label_gap: int = 4
    axis_style_axis_label_gap: int = 4
    axis_style_font_size_px: float = 12.0
    axis_style_line_color: RGBA = (124, 138, 156, 255)
    axis_style_text_color: RGBA = (208, 218, 232, 255)

    # plot layout
    plot_margin_left: int = 64
    plot_margin_bottom: int = 40
    plot_margin_right: int = 16
    plot_margin_top: int = 16
    plot_background: RGBA = (12, 16, 23, 255)


# TOML table name -> attribute prefix on Options
_TABLES = {
    "tick_format": "tick_format_",
    "tick_selection": "tick_selection_",
    "axis_style": "axis_style_",
    "plot": "plot_",
}

_LOCK = threading.Lock()
_DEFAULTS = Options()


def get_defaults() -> Options:
    return _DEFAULTS


def set_defaults(options: Options) -> Options:
    """Replace the process-wide defaults, returning the previous value.

    Meant to be called once at startup. Axes constructed earlier keep the
    policies they copied.
    """
    global _DEFAULTS
    if not isinstance(options, Options):
        raise InvalidArgument(f"expected Options, got {type(options)!r}")
    with _LOCK:
        previous = _DEFAULTS
        _DEFAULTS = options
    LOGGER.info("tickline defaults replaced")
    return previous


def load_options(path: str | Path, base: Options | None = None) -> Options:
    """Read option overrides from a TOML file on top of ``base`` (the current defaults by default)."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"options file not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    options = options_from_mapping(raw, base=get_defaults() if base is None else base)
    LOGGER.info("loaded tickline options from %s", config_path)
    return options


def options_from_mapping(raw: dict[str, Any], base: Options | None = None) -> Options:
    base = Options() if base is None else base
    known = {f.name: f for f in fields(Options)}
    updates: dict[str, Any] = {}
    for table, values in raw.items():
        prefix = _TABLES.get(table)
        if prefix is None:
            raise InvalidArgument(f"unknown options table: [{table}]")
        if not isinstance(values, dict):
            raise InvalidArgument(f"[{table}] must be a table")
        for key, value in values.items():
            name = prefix + key
            if name not in known:
                raise InvalidArgument(f"unknown option {table}.{key}")
            updates[name] = _coerce_option(name, value, getattr(base, name))
    return replace(base, **updates)


def _coerce_option(name: str, value: Any, current: Any) -> Any:
    if isinstance(current, bool):
        if not isinstance(value, bool):
            raise InvalidArgument(f"{name} must be a boolean")
        return value
    if isinstance(current, int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgument(f"{name} must be an integer")
        return value
    if isinstance(current, float):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidArgument(f"{name} must be a number")
        return float(value)
    if isinstance(current, tuple):
        if not isinstance(value, list) or len(value) != len(current):
            raise InvalidArgument(f"{name} must be a list of {len(current)} integers")
        if not all(isinstance(v, int) and not isinstance(v, bool) and 0 <= v <= 255 for v in value):
            raise InvalidArgument(f"{name} entries must be integers in [0, 255]")
        return tuple(value)
    return value
