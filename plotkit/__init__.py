from plotkit.axis import Axis, build_axis, set_window_size_from_data
from plotkit.axis_map import AxisMap, build_axis_map
from plotkit.drawing import draw_axis, line, markers, set_clip_box
from plotkit.errors import (
    AxisLayoutError,
    DegenerateIntervalError,
    EmptyDataError,
    InvalidOptionCombinationError,
    PlotDataError,
)
from plotkit.fitting import fit_box_around_data
from plotkit.geometry import Box, Point, expand_box, if_finite, if_present, interp, scale_box
from plotkit.options import AxisOptions, AxisStyle, load_axis_options, parse_axis_options
from plotkit.raster import RasterSurface
from plotkit.ticks import Ticks, best_labels, best_ticks, get_tick_extents, merge_ticks

__all__ = [
    "Axis",
    "AxisLayoutError",
    "AxisMap",
    "AxisOptions",
    "AxisStyle",
    "Box",
    "DegenerateIntervalError",
    "EmptyDataError",
    "InvalidOptionCombinationError",
    "PlotDataError",
    "Point",
    "RasterSurface",
    "Ticks",
    "best_labels",
    "best_ticks",
    "build_axis",
    "build_axis_map",
    "draw_axis",
    "expand_box",
    "fit_box_around_data",
    "get_tick_extents",
    "if_finite",
    "if_present",
    "interp",
    "line",
    "load_axis_options",
    "markers",
    "merge_ticks",
    "parse_axis_options",
    "scale_box",
    "set_clip_box",
    "set_window_size_from_data",
]
