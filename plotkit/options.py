from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
import math
from pathlib import Path
import tomllib
from typing import Any

from plotkit.geometry import Box
from plotkit.ticks import Ticks


RGBA = tuple[int, int, int, int]

BLACK: RGBA = (0, 0, 0, 255)
WHITE: RGBA = (255, 255, 255, 255)
BLUEGRAY: RGBA = (102, 115, 140, 255)


@dataclass(frozen=True)
class AxisStyle:
    """How the axis is drawn; never affects the layout itself."""

    draw_box: bool = False
    edge_line_color: RGBA = BLACK
    edge_line_width: int = 2
    draw_axis_background: bool = True
    x_tick_vertical_offset: float = 16
    y_tick_horizontal_offset: float = -8
    background_color: RGBA = BLUEGRAY
    grid_line_color: RGBA = WHITE
    grid_line_width: int = 1
    font_size: float = 13
    font_color: RGBA = BLACK
    draw_x_labels: bool = True
    draw_y_labels: bool = True
    draw_axis: bool = True
    draw_v_grid_lines: bool = True
    draw_h_grid_lines: bool = True
    title: str = ""


@dataclass(frozen=True)
class AxisOptions:
    """Everything a caller can ask of an axis layout.

    ``xmin``..``ymax`` bound the data that is considered (``+/-inf`` means
    unconstrained). ``tick_box``, ``ticks`` and ``axis_box`` override the
    corresponding computed values edge by edge or field by field.
    A nonzero ``width_from_data`` / ``height_from_data`` is a pixels per data
    unit factor that replaces ``width`` / ``height``.
    """

    xmin: float = -math.inf
    xmax: float = math.inf
    ymin: float = -math.inf
    ymax: float = math.inf
    x_data_margin: float = 0
    y_data_margin: float = 0
    x_widen_factor: float = 1
    y_widen_factor: float = 1
    width_from_data: float = 0
    height_from_data: float = 0
    width: float = 800
    height: float = 600
    left_margin: float = 80
    right_margin: float = 80
    top_margin: float = 80
    bottom_margin: float = 80
    x_ideal_num_labels: int = 10
    y_ideal_num_labels: int = 10
    y_origin_at_bottom: bool = True
    axis_equal: bool = False
    window_background_color: RGBA = WHITE
    draw_background: bool = True
    ticks: Ticks = field(default_factory=Ticks)
    axis_style: AxisStyle = field(default_factory=AxisStyle)
    tick_box: Box = field(default_factory=Box)
    axis_box: Box = field(default_factory=Box)

    @property
    def margins(self) -> tuple[float, float, float, float]:
        return (self.left_margin, self.right_margin, self.top_margin, self.bottom_margin)

    @property
    def constraint_box(self) -> Box:
        return Box(self.xmin, self.xmax, self.ymin, self.ymax)


_NESTED_PREFIXES = (
    ("axis_style_", "axis_style"),
    ("tick_box_", "tick_box"),
    ("axis_box_", "axis_box"),
    ("ticks_", "ticks"),
)


def parse_axis_options(base: AxisOptions | None = None, **kwargs: Any) -> AxisOptions:
    """Build ``AxisOptions`` from flat keywords.

    ``axis_style_font_size=10`` sets ``axis_style.font_size``; likewise for the
    ``tick_box_``, ``axis_box_`` and ``ticks_`` prefixes. Plain names, or names
    prefixed ``axis_options_``, set top-level fields.
    """
    options = base or AxisOptions()
    top: dict[str, Any] = {}
    nested: dict[str, dict[str, Any]] = {name: {} for _, name in _NESTED_PREFIXES}
    top_names = {f.name for f in fields(AxisOptions)}
    for key, value in kwargs.items():
        name = key.removeprefix("axis_options_")
        if name in top_names:
            top[name] = value
            continue
        for prefix, target in _NESTED_PREFIXES:
            if key.startswith(prefix):
                nested[target][key[len(prefix) :]] = value
                break
        else:
            raise TypeError(f"unknown axis option: {key}")

    options = replace(options, **top)
    for target, values in nested.items():
        if not values:
            continue
        record = getattr(options, target)
        allowed = {f.name for f in fields(record)}
        unknown = sorted(set(values) - allowed)
        if unknown:
            raise TypeError(f"unknown {target} option(s): {', '.join(unknown)}")
        if target == "ticks":
            values = {k: _coerce_tick_field(k, v) for k, v in values.items()}
        options = replace(options, **{target: replace(record, **values)})
    return options


def load_axis_options(path: str | Path) -> AxisOptions:
    """Read ``AxisOptions`` from a TOML file.

    Top-level keys map onto ``AxisOptions`` fields; ``[axis_style]``,
    ``[tick_box]``, ``[axis_box]`` and ``[ticks]`` tables fill the nested
    records. Colors are given as ``[r, g, b]`` or ``[r, g, b, a]`` arrays.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"axis options file not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)

    flat: dict[str, Any] = {}
    for key, value in raw.items():
        if isinstance(value, dict):
            if key not in {name for _, name in _NESTED_PREFIXES}:
                raise ValueError(f"unknown table in {config_path}: [{key}]")
            for sub_key, sub_value in value.items():
                flat[f"{key}_{sub_key}"] = _coerce_toml_value(f"{key}.{sub_key}", sub_value)
            continue
        flat[key] = _coerce_toml_value(key, value)
    try:
        return parse_axis_options(**flat)
    except TypeError as exc:
        raise ValueError(f"invalid axis options in {config_path}: {exc}") from exc


def _coerce_toml_value(key: str, value: Any) -> Any:
    if key.endswith("color"):
        return _coerce_color(key, value)
    if isinstance(value, list):
        return tuple(value)
    return value


def _coerce_color(key: str, value: Any) -> RGBA:
    if not isinstance(value, (list, tuple)) or len(value) not in (3, 4):
        raise ValueError(f"{key} must be an [r, g, b] or [r, g, b, a] array")
    channels = [int(c) for c in value]
    if any(c < 0 or c > 255 for c in channels):
        raise ValueError(f"{key} channels must be in 0..255")
    if len(channels) == 3:
        channels.append(255)
    return (channels[0], channels[1], channels[2], channels[3])


def _coerce_tick_field(name: str, value: Any) -> tuple | None:
    if value is None:
        return None
    if name.endswith("strings"):
        return tuple(str(v) for v in value)
    return tuple(float(v) for v in value)
