from __future__ import annotations

from collections.abc import Iterable, Sequence

from plotkit.axis import Axis
from plotkit.axis_map import AxisMap
from plotkit.geometry import Box, Point
from plotkit.options import AxisStyle
from plotkit.surface import RGBA, Surface
from plotkit.ticks import Ticks


TITLE_OFFSET_PX = 15


def draw_axis(surface: Surface, axis: Axis) -> None:
    """Draw the window background, axis background, grid, tick labels and title."""
    if axis.draw_background:
        surface.rect(Point(0, 0), Point(axis.width, axis.height), fill_color=axis.window_background_color)
    draw_axis_frame(surface, axis.axis_map, axis.ticks, axis.box, axis.axis_style)


def draw_axis_frame(surface: Surface, axis_map: AxisMap, ticks: Ticks, box: Box, style: AxisStyle) -> None:
    if not style.draw_axis:
        return
    xmin, xmax, ymin, ymax = box.edges()
    rfx, rfy, fx, fy = axis_map.rfx, axis_map.rfy, axis_map.fx, axis_map.fy

    if style.draw_axis_background:
        surface.rect(
            Point(rfx(xmin), rfy(ymin)),
            Point(rfx(xmax) - rfx(xmin), rfy(ymax) - rfy(ymin)),
            fill_color=style.background_color,
        )

    for xt, label in zip(ticks.xticks or (), ticks.xtickstrings or (), strict=False):
        if style.draw_v_grid_lines and xmin < xt < xmax:
            surface.line(
                Point(rfx(xt), rfy(ymax)),
                Point(rfx(xt), rfy(ymin)),
                style.grid_line_color,
                width=style.grid_line_width,
            )
        if style.draw_x_labels and xmin <= xt <= xmax:
            surface.text(
                Point(fx(xt), fy(ymin) + style.x_tick_vertical_offset),
                style.font_size,
                style.font_color,
                label,
                horizontal="center",
            )

    for yt, label in zip(ticks.yticks or (), ticks.ytickstrings or (), strict=False):
        if style.draw_h_grid_lines and ymin < yt < ymax:
            surface.line(
                Point(rfx(xmin), rfy(yt)),
                Point(rfx(xmax), rfy(yt)),
                style.grid_line_color,
                width=style.grid_line_width,
            )
        if style.draw_y_labels and ymin <= yt <= ymax:
            surface.text(
                Point(fx(xmin) + style.y_tick_horizontal_offset, fy(yt)),
                style.font_size,
                style.font_color,
                label,
                horizontal="right",
                vertical="center",
            )

    if style.draw_box:
        corners = [
            Point(rfx(xmin), rfy(ymax)),
            Point(rfx(xmin), rfy(ymin)),
            Point(rfx(xmax), rfy(ymin)),
            Point(rfx(xmax), rfy(ymax)),
        ]
        surface.polyline(corners + corners[:1], style.edge_line_color, width=style.edge_line_width)

    if style.title:
        top = min(fy(ymin), fy(ymax))
        surface.text(
            Point(fx((xmin + xmax) / 2), top - TITLE_OFFSET_PX),
            style.font_size,
            style.font_color,
            style.title,
            horizontal="center",
        )


def set_clip_box(surface: Surface, axis: Axis) -> None:
    """Restrict further drawing to the axis box."""
    am = axis.axis_map
    b = axis.box
    surface.clip(Box(am.rfx(b.xmin), am.rfx(b.xmax), am.rfy(b.ymin), am.rfy(b.ymax)))


def line(surface: Surface, axis: Axis, points: Iterable[Point | None], color: RGBA, width: int = 1) -> None:
    """Draw a data-space series; ``None`` entries break the line."""
    for run in _runs(points):
        if len(run) == 1:
            surface.marker(axis.axis_map.f(run[0]), width, color)
            continue
        surface.polyline(axis.axis_map(run), color, width=width)


def markers(surface: Surface, axis: Axis, points: Iterable[Point | None], color: RGBA, size: int = 3) -> None:
    for p in points:
        if p is None or not p.is_finite():
            continue
        surface.marker(axis.axis_map.f(p), size, color)


def _runs(points: Iterable[Point | None]) -> list[Sequence[Point]]:
    runs: list[list[Point]] = []
    current: list[Point] = []
    for p in points:
        if p is None or not p.is_finite():
            if current:
                runs.append(current)
            current = []
            continue
        current.append(p)
    if current:
        runs.append(current)
    return runs
