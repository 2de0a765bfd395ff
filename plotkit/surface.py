from __future__ import annotations

from collections.abc import Sequence
from typing import Literal, Protocol

from plotkit.geometry import Box, Point


RGBA = tuple[int, int, int, int]
HorizontalAlign = Literal["left", "center", "right"]
VerticalAlign = Literal["top", "center", "bottom", "baseline"]


class Surface(Protocol):
    """Pixel-space drawing target consumed by :mod:`plotkit.drawing`."""

    width: int
    height: int

    def line(self, p: Point, q: Point, color: RGBA, width: int = 1) -> None:
        ...

    def polyline(self, points: Sequence[Point], color: RGBA, width: int = 1) -> None:
        ...

    def rect(
        self,
        top_left: Point,
        size: Point,
        *,
        fill_color: RGBA | None = None,
        line_color: RGBA | None = None,
        line_width: int = 1,
    ) -> None:
        ...

    def marker(self, p: Point, size: int, color: RGBA) -> None:
        ...

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
        ...

    def text_size(self, text: str, font_size: float) -> tuple[int, int]:
        ...

    def clip(self, box: Box) -> None:
        ...

    def reset_clip(self) -> None:
        ...
