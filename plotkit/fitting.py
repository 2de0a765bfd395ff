from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

import numpy as np

from plotkit.errors import EmptyDataError, InvalidOptionCombinationError, PlotDataError
from plotkit.geometry import UNIT_BOX, Box, Point, if_finite, in_box


def flat_list_of_points(data: Any) -> list[Point]:
    """Flatten one series or a collection of series into a single point list.

    Missing entries (``None``) are skipped at both levels, as are points with a
    non-finite coordinate, which is how adapters mark gaps in a series.
    A point is a :class:`Point`, or a 2-tuple or 2-list of numbers.
    """
    if isinstance(data, np.ndarray):
        return _points_from_array(data)
    if isinstance(data, Point) or _is_pair(data):
        raise PlotDataError("data must be a sequence of points, not a single point")
    out: list[Point] = []
    for entry in data:
        if entry is None:
            continue
        if isinstance(entry, Point) or _is_pair(entry):
            _append_finite(out, Point.from_any(entry))
            continue
        if isinstance(entry, np.ndarray):
            out.extend(_points_from_array(entry))
            continue
        if isinstance(entry, Iterable):
            for item in entry:
                if item is None:
                    continue
                _append_finite(out, _coerce_point(item))
            continue
        raise PlotDataError(f"unsupported data entry: {entry!r}")
    return out


def remove_data_outside_box(points: Iterable[Point], box: Box) -> list[Point]:
    return [p for p in points if in_box(p, box)]


def smallest_box_containing_data(points: Sequence[Point]) -> Box:
    if not points:
        raise EmptyDataError("cannot fit a box around zero points")
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return Box(min(xs), max(xs), min(ys), max(ys))


def fit_box_around_data(data: Any, constraint: Box) -> Box:
    """Smallest box around the data inside ``constraint``.

    Finite edges of ``constraint`` both filter the data and override the fitted
    edge; each edge is decided on its own. With no data the constraint is
    completed from the unit box, which fails when a single bound lies beyond
    it (``xmin=2`` alone).
    """
    if data is None:
        return _check_ordered(if_finite(constraint, UNIT_BOX), constraint)
    filt = _filter_box(constraint)
    kept = remove_data_outside_box(flat_list_of_points(data), filt)
    if not kept:
        raise EmptyDataError(f"no data points inside {constraint}")
    return if_finite(constraint, smallest_box_containing_data(kept))


def _check_ordered(box: Box, constraint: Box) -> Box:
    # A one-sided bound past the unit box cannot be completed.
    if box.xmin > box.xmax or box.ymin > box.ymax:
        raise InvalidOptionCombinationError(f"bounds {constraint} cannot be completed without data, got {box}")
    return box


def _filter_box(constraint: Box) -> Box:
    # Unspecified edges impose no filter.
    return Box(
        if_finite(constraint.xmin, -np.inf),
        if_finite(constraint.xmax, np.inf),
        if_finite(constraint.ymin, -np.inf),
        if_finite(constraint.ymax, np.inf),
    )


def _is_pair(value: Any) -> bool:
    return (
        isinstance(value, (tuple, list))
        and len(value) == 2
        and all(isinstance(v, (int, float, np.number)) and not isinstance(v, bool) for v in value)
    )


def _coerce_point(value: Any) -> Point:
    try:
        return Point.from_any(value)
    except (TypeError, ValueError) as exc:
        raise PlotDataError(f"not a point: {value!r}") from exc


def _append_finite(out: list[Point], p: Point) -> None:
    if p.is_finite():
        out.append(p)


def _points_from_array(arr: np.ndarray) -> list[Point]:
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise PlotDataError(f"point arrays must have shape (N, 2), got {arr.shape}")
    values = arr.astype(np.float64, copy=False)
    mask = np.all(np.isfinite(values), axis=1)
    return [Point(float(x), float(y)) for x, y in values[mask].tolist()]
