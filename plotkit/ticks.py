from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, fields
import logging
import math

import numpy as np

from plotkit.errors import InvalidOptionCombinationError
from plotkit.geometry import Box, if_present


LOGGER = logging.getLogger(__name__)

# Preference order matters: earlier multipliers score higher simplicity.
TICK_MULTIPLIERS: tuple[float, ...] = (1.0, 5.0, 2.0, 2.5)
# A tick boundary within width/TICK_SNAP_DIVISOR of a multiple snaps to it.
TICK_SNAP_DIVISOR = 1000.0
LABEL_RELATIVE_TOLERANCE = 1e-12
LABEL_MAX_PRECISION = 20


@dataclass(frozen=True)
class Ticks:
    xticks: tuple[float, ...] | None = None
    xtickstrings: tuple[str, ...] | None = None
    yticks: tuple[float, ...] | None = None
    ytickstrings: tuple[str, ...] | None = None


def _close_floor(x: float, e: float) -> int:
    lo = math.floor(x)
    snapped = math.floor(x + e)
    return snapped if lo < snapped else lo


def _close_ceil(x: float, e: float) -> int:
    hi = math.ceil(x)
    snapped = math.ceil(x - e)
    return snapped if hi > snapped else hi


def score_ticks(
    dmin: float,
    dmax: float,
    index: int,
    exponent: int,
    ideal_num_labels: float,
    *,
    multipliers: Sequence[float] = TICK_MULTIPLIERS,
    snap_divisor: float = TICK_SNAP_DIVISOR,
) -> tuple[float, int, int, int]:
    """Score the spacing ``multipliers[index] * 10**exponent`` over ``[dmin, dmax]``.

    Returns ``(score, jmin, jmax, nlabels)`` where the ticks are
    ``j * spacing`` for ``j`` in ``jmin..jmax``.
    """
    spacing = (10.0**exponent) * multipliers[index]
    allowed_error = (dmax - dmin) / snap_divisor / spacing
    jmin = _close_floor(dmin / spacing, allowed_error)
    jmax = _close_ceil(dmax / spacing, allowed_error)
    nlabels = jmax - jmin + 1
    covered = jmax * spacing - jmin * spacing
    if covered <= 0:
        return (-math.inf, jmin, jmax, nlabels)
    coverage = (dmax - dmin) / covered
    simplicity = 1 - (index + 1) / len(multipliers)
    includes_zero = 1.0 if (jmin * spacing <= 0 and jmax * spacing >= 0) else 0.0
    density = 1 - abs(nlabels - ideal_num_labels) / ideal_num_labels
    score = coverage + simplicity + 2 * max(density, 0.0) + includes_zero
    return (score, jmin, jmax, nlabels)


def best_ticks(
    dmin: float,
    dmax: float,
    ideal_num_labels: int = 10,
    *,
    multipliers: Sequence[float] = TICK_MULTIPLIERS,
    snap_divisor: float = TICK_SNAP_DIVISOR,
) -> np.ndarray:
    """Choose round, well spread ticks covering ``[dmin, dmax]``.

    Every multiplier/exponent pair is scored with :func:`score_ticks` and the
    first highest score wins, so the result is deterministic.
    """
    if ideal_num_labels <= 0:
        raise ValueError("ideal_num_labels must be > 0")
    dmin = float(dmin)
    dmax = float(dmax)
    if not (math.isfinite(dmin) and math.isfinite(dmax)):
        raise ValueError(f"tick interval must be finite, got [{dmin}, {dmax}]")
    if dmin > dmax:
        raise ValueError(f"tick interval is reversed: [{dmin}, {dmax}]")
    if dmin == 0 and dmax == 0:
        dmax = 1.0
    elif dmin == dmax:
        dmin, dmax = sorted((0.9 * dmin, 1.1 * dmin))

    width = abs(dmax - dmin)
    best: np.ndarray | None = None
    best_score = -1.0
    for i, m in enumerate(multipliers):
        emin = math.floor(math.log10(width / (20 * m)))
        emax = math.ceil(math.log10(width / (0.5 * m)))
        for exponent in range(emin, emax + 1):
            score, jmin, jmax, _ = score_ticks(
                dmin,
                dmax,
                i,
                exponent,
                ideal_num_labels,
                multipliers=multipliers,
                snap_divisor=snap_divisor,
            )
            if score > best_score:
                best = np.arange(jmin, jmax + 1, dtype=np.float64) * m * (10.0**exponent)
                best_score = score
    if best is None:
        return np.asarray([0.0, 1.0], dtype=np.float64)
    return best


def _format_fixed(value: float, precision: int) -> str:
    out = f"{value:.{precision}f}"
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def _labels_equal(values: np.ndarray, labels: Sequence[str], tolerance: float) -> bool:
    for v, label in zip(values.tolist(), labels, strict=True):
        if v != 0.0 and abs(v - float(label)) / abs(v) > tolerance:
            return False
    return True


def best_labels(
    values: Sequence[float] | np.ndarray,
    suffix: str = "",
    *,
    tolerance: float = LABEL_RELATIVE_TOLERANCE,
) -> list[str]:
    """Format tick values with the smallest precision that round-trips them all.

    Very large or very small tick sets are rescaled by powers of ``1e6`` and
    the exponent is appended to the last label only, e.g. ``["10", "20e6"]``.
    """
    arr = np.asarray(values)
    if arr.size == 0:
        return []
    if arr.dtype.kind in {"i", "u"}:
        labels = [str(int(v)) for v in arr.tolist()]
        labels[-1] += suffix
        return labels

    x = arr.astype(np.float64)
    if not np.all(np.isfinite(x)):
        raise ValueError("tick values must be finite")
    exponent = 0
    while True:
        max_abs = float(np.max(np.abs(x)))
        if max_abs > 1e6 and float(np.max(x) - np.min(x)) > 1e7:
            x = x / 1e6
            exponent += 6
        elif 0.0 < max_abs < 1e-6:
            x = x * 1e6
            exponent -= 6
        else:
            break
    if exponent:
        suffix = f"e{exponent}{suffix}"

    for precision in range(LABEL_MAX_PRECISION + 1):
        labels = [_format_fixed(v, precision) for v in x.tolist()]
        if _labels_equal(x, labels, tolerance):
            break
    else:
        labels = [repr(v) for v in x.tolist()]
    labels[-1] += suffix
    return labels


def compute_ticks(
    box: Box,
    x_ideal_num_labels: int = 10,
    y_ideal_num_labels: int = 10,
    user: Ticks | None = None,
) -> Ticks:
    """Ticks for both axes of ``box``; any field set in ``user`` wins.

    User tick values bypass the selector for that axis, and their labels are
    formatted from them unless the user supplied labels as well.
    """
    user = user or Ticks()
    xt = _resolve_axis_ticks("x", user.xticks, box.xmin, box.xmax, x_ideal_num_labels)
    yt = _resolve_axis_ticks("y", user.yticks, box.ymin, box.ymax, y_ideal_num_labels)
    _check_label_count("x", user.xtickstrings, xt)
    _check_label_count("y", user.ytickstrings, yt)
    computed = Ticks(
        xticks=xt,
        xtickstrings=tuple(best_labels(np.asarray(xt, dtype=np.float64))),
        yticks=yt,
        ytickstrings=tuple(best_labels(np.asarray(yt, dtype=np.float64))),
    )
    merged = merge_ticks(user, computed)
    return Ticks(
        xticks=xt,
        xtickstrings=tuple(str(s) for s in merged.xtickstrings),
        yticks=yt,
        ytickstrings=tuple(str(s) for s in merged.ytickstrings),
    )


def merge_ticks(user: Ticks, computed: Ticks) -> Ticks:
    """Field by field, keep ``user`` wherever it is set."""
    return Ticks(**{f.name: if_present(getattr(user, f.name), getattr(computed, f.name)) for f in fields(Ticks)})


def _resolve_axis_ticks(
    axis: str,
    given: Sequence[float] | None,
    lo: float,
    hi: float,
    ideal: int,
) -> tuple[float, ...]:
    if given is not None:
        if len(given) == 0:
            raise InvalidOptionCombinationError(f"{axis} ticks must not be empty")
        return tuple(float(v) for v in given)
    ticks = tuple(float(v) for v in best_ticks(lo, hi, ideal).tolist())
    LOGGER.debug("%s ticks for [%g, %g]: %s", axis, lo, hi, ticks)
    return ticks


def _check_label_count(axis: str, given: Sequence[str] | None, ticks: tuple[float, ...]) -> None:
    if given is not None and len(given) != len(ticks):
        raise InvalidOptionCombinationError(
            f"{axis} tick labels ({len(given)}) do not match {axis} ticks ({len(ticks)})"
        )


def get_tick_extents(ticks: Ticks) -> Box:
    if not ticks.xticks or not ticks.yticks:
        raise InvalidOptionCombinationError("tick extents need ticks on both axes")
    return Box(min(ticks.xticks), max(ticks.xticks), min(ticks.yticks), max(ticks.yticks))
