from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from PIL import Image

from plotkit.geometry import Box, Point
from plotkit.raster.canvas import RGBA, fill_rect, new_canvas
from plotkit.raster.draw_lines import draw_line_segment, draw_polyline
from plotkit.raster.draw_text import DEFAULT_FONT_FAMILY, draw_text, load_font, text_metrics
from plotkit.surface import HorizontalAlign, VerticalAlign


class RasterSurface:
    """:class:`plotkit.surface.Surface` backed by an ``(H, W, 4)`` uint8 array.

    Coordinates are pixels with the origin at the top left; fractional
    coordinates are rounded. Drawing is restricted to the current clip box.
    """

    def __init__(
        self,
        width: int,
        height: int,
        background: RGBA = (0, 0, 0, 0),
        *,
        font_family: str = DEFAULT_FONT_FAMILY,
    ) -> None:
        self.width = int(width)
        self.height = int(height)
        self.font_family = font_family
        self._canvas = new_canvas(self.width, self.height, color=background)
        self._clip: tuple[int, int, int, int] = (0, 0, self.width, self.height)

    @property
    def canvas(self) -> np.ndarray:
        return self._canvas

    @property
    def clip_rect(self) -> tuple[int, int, int, int]:
        return self._clip

    def to_image(self) -> Image.Image:
        return Image.fromarray(self._canvas)

    def clip(self, box: Box) -> None:
        x0 = max(0, int(round(min(box.xmin, box.xmax))))
        x1 = min(self.width, int(round(max(box.xmin, box.xmax))))
        y0 = max(0, int(round(min(box.ymin, box.ymax))))
        y1 = min(self.height, int(round(max(box.ymin, box.ymax))))
        self._clip = (x0, y0, max(x0, x1), max(y0, y1))

    def reset_clip(self) -> None:
        self._clip = (0, 0, self.width, self.height)

    def line(self, p: Point, q: Point, color: RGBA, width: int = 1) -> None:
        view, ox, oy = self._target()
        draw_line_segment(
            view,
            round(p.x) - ox,
            round(p.y) - oy,
            round(q.x) - ox,
            round(q.y) - oy,
            color=color,
            width=width,
        )

    def polyline(self, points: Sequence[Point], color: RGBA, width: int = 1) -> None:
        view, ox, oy = self._target()
        xs = [round(p.x) - ox for p in points]
        ys = [round(p.y) - oy for p in points]
        draw_polyline(view, xs, ys, color=color, width=width)

    def rect(
        self,
        top_left: Point,
        size: Point,
        *,
        fill_color: RGBA | None = None,
        line_color: RGBA | None = None,
        line_width: int = 1,
    ) -> None:
        view, ox, oy = self._target()
        x0 = round(top_left.x) - ox
        y0 = round(top_left.y) - oy
        x1 = round(top_left.x + size.x) - ox
        y1 = round(top_left.y + size.y) - oy
        if fill_color is not None:
            # Half-open in pixel space: the far edge is not filled.
            fill_rect(view, min(x0, x1), min(y0, y1), max(x0, x1) - 1, max(y0, y1) - 1, fill_color)
        if line_color is not None:
            corners = [(x0, y0), (x1, y0), (x1, y1), (x0, y1), (x0, y0)]
            draw_polyline(view, [c[0] for c in corners], [c[1] for c in corners], line_color, width=line_width)

    def marker(self, p: Point, size: int, color: RGBA) -> None:
        view, ox, oy = self._target()
        r = max(0, size // 2)
        x = round(p.x) - ox
        y = round(p.y) - oy
        fill_rect(view, x - r, y - r, x + r, y + r, color)

    def text_size(self, text: str, font_size: float) -> tuple[int, int]:
        _, _, w, h, _ = text_metrics(text, load_font(font_size, self.font_family))
        return (w, h)

    def text(
        self,
        p: Point,
        font_size: float,
        color: RGBA,
        text: str,
        *,
        horizontal: HorizontalAlign = "left",
        vertical: VerticalAlign = "baseline",
    ) -> None:
        """Draw ``text`` anchored at ``p`` with the given alignment."""
        if not text:
            return
        _, top, w, h, ascent = text_metrics(text, load_font(font_size, self.font_family))
        if horizontal == "left":
            dx = 0.0
        elif horizontal == "center":
            dx = w / 2
        elif horizontal == "right":
            dx = float(w)
        else:
            raise ValueError(f"unknown horizontal alignment: {horizontal!r}")
        if vertical == "top":
            dy = 0.0
        elif vertical == "center":
            dy = h / 2
        elif vertical == "bottom":
            dy = float(h)
        elif vertical == "baseline":
            dy = float(ascent - top)
        else:
            raise ValueError(f"unknown vertical alignment: {vertical!r}")
        view, ox, oy = self._target()
        draw_text(
            view,
            round(p.x - dx) - ox,
            round(p.y - dy) - oy,
            text,
            color,
            font_size_px=font_size,
            font_family=self.font_family,
        )

    def _target(self) -> tuple[np.ndarray, int, int]:
        x0, y0, x1, y1 = self._clip
        return self._canvas[y0:y1, x0:x1], x0, y0
