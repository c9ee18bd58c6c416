from __future__ import annotations

import argparse
from collections import Counter
from dataclasses import replace
import logging
import sys
from pathlib import Path
import tomllib
from typing import Sequence

from tickline_plot.api import DEFAULT_HEIGHT, DEFAULT_WIDTH, save_png
from tickline_plot.axis import LinearAxis
from tickline_plot.decimals import TickFormat
from tickline_plot.defaults import Options, get_defaults, load_options, set_defaults
from tickline_plot.errors import PlotDataError, TicklineError
from tickline_plot.intervals import Interval
from tickline_plot.plot import Plot
from tickline_plot.ticks import TickSelection, sensible_linear_ticks


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tickline")
    parser.add_argument("--verbose", action="store_true", help="Log tick selection at DEBUG level.")
    sub = parser.add_subparsers(dest="command", required=True)

    ticks = sub.add_parser("ticks", help="Print tick coordinates and labels for an interval.")
    ticks.add_argument("min", type=float)
    ticks.add_argument("max", type=float)
    ticks.add_argument("--target-count", type=int, default=None)
    ticks.add_argument("--widening", type=int, default=None, help="log10 widening of the candidate search.")
    ticks.add_argument("--thousands", action="store_true", help="Restrict outer exponents to multiples of 3.")
    ticks.add_argument("--config", type=Path, default=None, help="TOML file with default overrides.")

    render = sub.add_parser("render", help="Render X,Y points as a line plot PNG.")
    render.add_argument("points", nargs="*", help="Points formatted as X,Y. Negative X is accepted.")
    render.add_argument("--out", type=Path, required=True)
    render.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    render.add_argument("--height", type=int, default=DEFAULT_HEIGHT)
    render.add_argument("--x-label", default="")
    render.add_argument("--y-label", default="")
    render.add_argument("--config", type=Path, default=None, help="TOML file with default overrides.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else list(argv)
    args, extras = parser.parse_known_args(argv)
    if args.command == "render":
        # X,Y tokens with a leading minus look like options to argparse
        points = list(args.points) + [token for token in extras if _is_point_token(token)]
        extras = [token for token in extras if not _is_point_token(token)]
        args.points = _in_command_line_order(points, argv)
    if extras:
        parser.error(f"unrecognized arguments: {' '.join(extras)}")
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        options = _resolve_options(args.config)
        if args.command == "ticks":
            return _run_ticks(args, options)
        if args.command == "render":
            return _run_render(args)
    except (TicklineError, OSError, tomllib.TOMLDecodeError) as exc:
        parser.error(str(exc))
    raise RuntimeError(f"unsupported command: {args.command}")


def _resolve_options(config: Path | None) -> Options:
    if config is None:
        return get_defaults()
    options = load_options(config)
    set_defaults(options)
    return options


def _run_ticks(args: argparse.Namespace, options: Options) -> int:
    tick_format = TickFormat.from_options(options)
    if args.thousands:
        tick_format = replace(tick_format, thousands=True)
    tick_selection = TickSelection.from_options(options)
    if args.target_count is not None:
        tick_selection = replace(tick_selection, target_count=args.target_count)
    if args.widening is not None:
        tick_selection = replace(tick_selection, log10_widening=args.widening)

    for tick in sensible_linear_ticks(Interval(args.min, args.max), tick_format, tick_selection):
        print(f"{tick.coordinate!r}\t{tick.label}")
    return 0


def _run_render(args: argparse.Namespace) -> int:
    if not args.points:
        raise PlotDataError("render needs at least one X,Y point")
    xs, ys = parse_points(args.points)
    plot = Plot(x_axis=LinearAxis(label=args.x_label), y_axis=LinearAxis(label=args.y_label))
    plot.lines(y=ys, x=xs)
    out_path = save_png(plot, args.out, width=args.width, height=args.height)
    print(f"wrote {out_path} ({args.width}x{args.height})")
    return 0


def _in_command_line_order(points: list[str], argv: Sequence[str]) -> list[str]:
    remaining = Counter(points)
    ordered: list[str] = []
    for token in argv:
        if remaining[token] > 0:
            remaining[token] -= 1
            ordered.append(token)
    return ordered


def _is_point_token(token: str) -> bool:
    return token.count(",") == 1 and not token.startswith("--")


def parse_points(points: Sequence[str]) -> tuple[list[float], list[float]]:
    xs: list[float] = []
    ys: list[float] = []
    for raw in points:
        parts = raw.split(",")
        if len(parts) != 2:
            raise PlotDataError(f"expected X,Y, got {raw!r}")
        try:
            xs.append(float(parts[0]))
            ys.append(float(parts[1]))
        except ValueError as exc:
            raise PlotDataError(f"expected numeric X,Y, got {raw!r}") from exc
    return xs, ys
