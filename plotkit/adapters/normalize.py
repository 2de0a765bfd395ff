"""Array-like input to point series.

A series is a ``list[Point | None]``. ``None`` marks a sample with a missing or
non-finite coordinate: :func:`plotkit.drawing.line` breaks the line there and
:func:`plotkit.fitting.fit_box_around_data` skips it.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from plotkit.errors import PlotDataError
from plotkit.geometry import Point


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


Series = list[Point | None]


def normalize_series(y: Any, *, x: Any = None) -> Series:
    """One point series from ``y`` against ``x`` (the sample index by default).

    Without ``x``, ``y`` may also be an ``(N, 2)`` array of points.
    """
    values = _as_float_array(y, label="y")
    if values.ndim == 2 and x is None and values.shape[1] == 2:
        return _pair_up(values[:, 0], values[:, 1])
    if values.ndim != 1:
        raise PlotDataError(f"y must be 1-D (or (N, 2) points without x), got shape {values.shape}")
    if x is None:
        xs = np.arange(values.size, dtype=np.float64)
    else:
        xs = _as_float_array(x, label="x")
    return _pair_up(xs, values)


def normalize_series_group(ys: Any, *, x: Any = None) -> list[Series]:
    """Several series sharing ``x``, ready for ``build_axis`` and ``line``.

    A 2-D array, tensor or DataFrame gives one series per column; any other
    sequence gives one series per entry.
    """
    if isinstance(ys, np.ndarray) or _is_tensor(ys) or _is_frame(ys):
        table = _as_float_array(ys, label="ys")
        if table.ndim != 2:
            raise PlotDataError(f"ys must be 2-D, got shape {table.shape}")
        columns: list[Any] = [table[:, i] for i in range(table.shape[1])]
    elif isinstance(ys, (str, bytes)):
        raise PlotDataError("ys must be a sequence of series")
    else:
        columns = list(ys)
    if not columns:
        raise PlotDataError("no series given")
    return [normalize_series(column, x=x) for column in columns]


def _is_tensor(value: Any) -> bool:
    return torch is not None and isinstance(value, torch.Tensor)


def _is_frame(value: Any) -> bool:
    return pd is not None and isinstance(value, pd.DataFrame)


def _as_float_array(value: Any, *, label: str) -> np.ndarray:
    if value is None:
        raise PlotDataError(f"{label} input is required")
    if isinstance(value, (str, bytes)):
        raise PlotDataError(f"{label} must be numeric, got {type(value).__name__}")
    try:
        if _is_tensor(value):
            arr = value.detach().cpu().to(torch.float64).numpy()
        elif pd is not None and isinstance(value, (pd.Series, pd.Index, pd.DataFrame)):
            arr = value.to_numpy(dtype=np.float64, na_value=np.nan)
        else:
            # None entries become NaN.
            arr = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise PlotDataError(f"{label} must be numeric: {exc}") from exc
    if arr.size == 0:
        raise PlotDataError(f"{label} is empty")
    return arr


def _pair_up(xs: np.ndarray, ys: np.ndarray) -> Series:
    if xs.shape != ys.shape:
        raise PlotDataError(f"x and y length mismatch: {xs.shape} != {ys.shape}")
    ok = np.isfinite(xs) & np.isfinite(ys)
    if not ok.any():
        raise PlotDataError("series contains no finite points")
    return [
        Point(px, py) if keep else None
        for px, py, keep in zip(xs.tolist(), ys.tolist(), ok.tolist(), strict=True)
    ]
