from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

from plotkit.axis_map import AxisMap, Margins, build_axis_map
from plotkit.errors import DegenerateIntervalError, InvalidOptionCombinationError
from plotkit.fitting import fit_box_around_data
from plotkit.geometry import Box, expand_box, if_present, scale_box
from plotkit.options import RGBA, AxisOptions, AxisStyle, parse_axis_options
from plotkit.ticks import Ticks, compute_ticks, get_tick_extents


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Axis:
    """A fully resolved axis: window size, data box, ticks and the pixel map.

    ``box`` is the extent of the ticks, not of the data, so every tick lies on
    or inside the drawn axis.
    """

    width: float
    height: float
    axis_map: AxisMap
    box: Box
    ticks: Ticks
    axis_style: AxisStyle
    y_origin_at_bottom: bool
    window_background_color: RGBA
    draw_background: bool

    def __call__(self, p):
        return self.axis_map(p)


def set_window_size_from_data(
    width: float,
    height: float,
    box: Box,
    margins: Margins,
    width_from_data: float,
    height_from_data: float,
) -> tuple[float, float]:
    lmargin, rmargin, tmargin, bmargin = margins
    if width_from_data != 0:
        width = box.width * width_from_data + lmargin + rmargin
    if height_from_data != 0:
        height = box.height * height_from_data + tmargin + bmargin
    return width, height


def build_axis(data: Any = None, options: AxisOptions | None = None, **kwargs: Any) -> Axis:
    """Lay out an axis around ``data`` (a point series or nested series).

    Keyword arguments are parsed with :func:`parse_axis_options` on top of
    ``options``.
    """
    if kwargs:
        options = parse_axis_options(options, **kwargs)
    elif options is None:
        options = AxisOptions()

    # Data outside the user bounds is ignored; remaining edges come from data.
    data_box = fit_box_around_data(data, options.constraint_box)
    tick_box = if_present(
        options.tick_box,
        scale_box(
            expand_box(data_box, options.x_data_margin, options.y_data_margin),
            options.x_widen_factor,
            options.y_widen_factor,
        ),
    )
    if not tick_box.is_finite():
        raise InvalidOptionCombinationError(f"tick box must be finite, got {tick_box}")
    if tick_box.xmin > tick_box.xmax or tick_box.ymin > tick_box.ymax:
        raise InvalidOptionCombinationError(f"tick box is reversed: {tick_box}")

    ticks = compute_ticks(tick_box, options.x_ideal_num_labels, options.y_ideal_num_labels, user=options.ticks)
    axis_box = if_present(options.axis_box, get_tick_extents(ticks))
    _check_axis_box(axis_box)

    width, height = set_window_size_from_data(
        options.width,
        options.height,
        axis_box,
        options.margins,
        options.width_from_data,
        options.height_from_data,
    )
    axis_map = build_axis_map(
        width,
        height,
        options.margins,
        axis_box,
        axis_equal=options.axis_equal,
        y_origin_at_bottom=options.y_origin_at_bottom,
    )
    LOGGER.debug(
        "axis resolved: data box %s, tick box %s, axis box %s, window %gx%g",
        data_box,
        tick_box,
        axis_box,
        width,
        height,
    )
    return Axis(
        width=width,
        height=height,
        axis_map=axis_map,
        box=axis_box,
        ticks=ticks,
        axis_style=options.axis_style,
        y_origin_at_bottom=options.y_origin_at_bottom,
        window_background_color=options.window_background_color,
        draw_background=options.draw_background,
    )


def _check_axis_box(box: Box) -> None:
    if not box.is_finite():
        raise InvalidOptionCombinationError(f"axis box must be finite, got {box}")
    if box.xmin > box.xmax or box.ymin > box.ymax:
        raise InvalidOptionCombinationError(f"axis box is reversed: {box}")
    if box.width == 0 and box.height == 0:
        raise DegenerateIntervalError(f"axis box collapsed to a point: {box}")
    if box.width == 0 or box.height == 0:
        raise DegenerateIntervalError(f"axis box has zero extent on one axis: {box}")
