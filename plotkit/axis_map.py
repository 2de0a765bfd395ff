from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import logging
import math
from typing import overload

import numpy as np

from plotkit.errors import DegenerateIntervalError, InvalidOptionCombinationError
from plotkit.geometry import Box, Point


LOGGER = logging.getLogger(__name__)

Margins = tuple[float, float, float, float]


@dataclass(frozen=True)
class AxisMap:
    """Affine map from data coordinates to pixel coordinates.

    ``px = sx * x + cx`` and ``py = sy * y + cy``. The ``r*`` variants round to
    the nearest pixel (ties to even).
    """

    sx: float
    cx: float
    sy: float
    cy: float

    def fx(self, x: float) -> float:
        return self.sx * x + self.cx

    def fy(self, y: float) -> float:
        return self.sy * y + self.cy

    def fxinv(self, px: float) -> float:
        return (px - self.cx) / self.sx

    def fyinv(self, py: float) -> float:
        return (py - self.cy) / self.sy

    def f(self, p: Point) -> Point:
        return Point(self.fx(p.x), self.fy(p.y))

    def finv(self, p: Point) -> Point:
        return Point(self.fxinv(p.x), self.fyinv(p.y))

    def rfx(self, x: float) -> int:
        return round(self.fx(x))

    def rfy(self, y: float) -> int:
        return round(self.fy(y))

    def rf(self, p: Point) -> tuple[int, int]:
        return (self.rfx(p.x), self.rfy(p.y))

    @overload
    def __call__(self, p: Point) -> Point: ...

    @overload
    def __call__(self, p: Sequence[Point]) -> list[Point]: ...

    def __call__(self, p):
        if isinstance(p, Point):
            return self.f(p)
        return [self.f(q) for q in p]

    def map_arrays(self, x: np.ndarray, y: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        px = np.asarray(x, dtype=np.float64) * self.sx + self.cx
        py = np.asarray(y, dtype=np.float64) * self.sy + self.cy
        return px, py


def one_coord_function(extent: float, near_margin: float, far_margin: float, lo: float, hi: float) -> tuple[float, float]:
    """Scale and offset taking ``lo`` to ``near_margin`` and ``hi`` to ``extent - far_margin``."""
    t = (extent - near_margin - far_margin) / (hi - lo)
    c = near_margin - t * lo
    return t, c


def build_axis_map(
    width: float,
    height: float,
    margins: Margins,
    box: Box,
    axis_equal: bool = False,
    y_origin_at_bottom: bool = True,
) -> AxisMap:
    """Build the data-to-pixel map for a window of ``width`` x ``height``.

    ``margins`` is ``(left, right, top, bottom)``. With ``axis_equal`` one pair
    of margins grows so both axes share one scale and the plot is centered.
    """
    lmargin, rmargin, tmargin, bmargin = margins
    _validate(width, height, margins, box, axis_equal)
    if axis_equal:
        ar_data = box.width / box.height
        ar_window = (width - lmargin - rmargin) / (height - tmargin - bmargin)
        if ar_data > ar_window:
            axis_width = width - lmargin - rmargin
            axis_height = axis_width / ar_data
            tmargin = bmargin = (height - axis_height) / 2
        else:
            axis_height = height - tmargin - bmargin
            axis_width = axis_height * ar_data
            lmargin = rmargin = (width - axis_width) / 2
        LOGGER.debug(
            "axis_equal: data aspect %g, window aspect %g, margins now (%g, %g, %g, %g)",
            ar_data,
            ar_window,
            lmargin,
            rmargin,
            tmargin,
            bmargin,
        )
    sx, cx = one_coord_function(width, lmargin, rmargin, box.xmin, box.xmax)
    sy, cy = one_coord_function(height, bmargin, tmargin, box.ymin, box.ymax)
    if y_origin_at_bottom:
        sy = -sy
        cy = height - cy
    return AxisMap(sx=sx, cx=cx, sy=sy, cy=cy)


def _validate(width: float, height: float, margins: Margins, box: Box, axis_equal: bool) -> None:
    lmargin, rmargin, tmargin, bmargin = margins
    if not box.is_finite():
        if axis_equal:
            raise InvalidOptionCombinationError(f"axis_equal needs a finite axis box, got {box}")
        raise InvalidOptionCombinationError(f"axis box must be finite, got {box}")
    if box.width == 0 or box.height == 0:
        raise DegenerateIntervalError(f"axis box has zero extent: {box}")
    if width - lmargin - rmargin <= 0 or height - tmargin - bmargin <= 0:
        raise InvalidOptionCombinationError(
            f"margins {margins} leave no room in a {width}x{height} window"
        )
    if not (math.isfinite(width) and math.isfinite(height)):
        raise InvalidOptionCombinationError(f"window size must be finite, got {width}x{height}")
