from __future__ import annotations


class TicklineError(Exception):
    """Base class for errors raised by tickline_plot."""


class InvalidInterval(TicklineError, ValueError):
    """An interval with a non-finite bound or with min > max."""


class InvalidArgument(TicklineError, ValueError):
    """A configuration value outside its permitted range."""


class NumericOverflow(TicklineError, OverflowError):
    """A magnitude that cannot be represented exactly."""


class PlotDataError(TicklineError, ValueError):
    """Input data that cannot be plotted."""
