from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

from tickline_plot.errors import PlotDataError
from tickline_plot.series import SeriesData


def normalize_xy(
    y: Any = None,
    *,
    x: Any = None,
    source_name: str | None = None,
) -> SeriesData:
    if y is None:
        raise PlotDataError("y input is required")

    y_arr = _coerce_1d_numeric(y, label="y")
    if y_arr.size == 0:
        raise PlotDataError("empty series")

    if x is None:
        x_arr = np.arange(y_arr.size, dtype=np.float64)
    else:
        x_arr = _coerce_1d_numeric(x, label="x")

    if x_arr.shape != y_arr.shape:
        raise PlotDataError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")

    mask = np.isfinite(x_arr) & np.isfinite(y_arr)
    return SeriesData(x=x_arr, y=y_arr, mask=mask, source_name=source_name)


def coerce_xy_pairs(pairs: Any) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Split ``(x, y)`` pairs into float arrays plus a mask of the pairs that are finite in both."""
    if isinstance(pairs, np.ndarray):
        arr = pairs
    elif isinstance(pairs, Sequence) and not isinstance(pairs, (str, bytes, bytearray)):
        if len(pairs) == 0:
            empty = np.zeros(0, dtype=np.float64)
            return empty, empty, np.zeros(0, dtype=bool)
        arr = np.asarray([_coerce_pair(p, index=i) for i, p in enumerate(pairs)], dtype=object)
    else:
        # generators and other iterables of pairs
        try:
            items = list(pairs)
        except TypeError as exc:
            raise PlotDataError(f"unsupported xy input type: {type(pairs)!r}") from exc
        return coerce_xy_pairs(items)

    if arr.size == 0:
        empty = np.zeros(0, dtype=np.float64)
        return empty, empty, np.zeros(0, dtype=bool)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise PlotDataError(f"xy input must have shape (n, 2), got {arr.shape}")
    x_arr = _coerce_ndarray(arr[:, 0], label="x")
    y_arr = _coerce_ndarray(arr[:, 1], label="y")
    mask = np.isfinite(x_arr) & np.isfinite(y_arr)
    return x_arr, y_arr, mask


def _coerce_pair(pair: Any, *, index: int) -> tuple[Any, Any]:
    if isinstance(pair, (str, bytes, bytearray)):
        raise PlotDataError(f"xy pair at index {index} is not a pair: {pair!r}")
    try:
        x, y = pair
    except (TypeError, ValueError) as exc:
        raise PlotDataError(f"xy pair at index {index} is not a pair: {pair!r}") from exc
    return (x, y)


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        arr = np.asarray(value, dtype=object)
        if arr.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(arr, label=label)

    raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
