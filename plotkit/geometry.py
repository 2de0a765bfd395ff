from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any, Sequence, TypeVar


T = TypeVar("T")


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    @classmethod
    def from_any(cls, value: Any) -> "Point":
        if isinstance(value, Point):
            return value
        x, y = value
        return cls(float(x), float(y))

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y)

    def __mul__(self, a: float) -> "Point":
        return Point(a * self.x, a * self.y)

    __rmul__ = __mul__

    def __truediv__(self, a: float) -> "Point":
        return Point(self.x / a, self.y / a)

    def __iter__(self):
        yield self.x
        yield self.y

    def dot(self, other: "Point") -> float:
        return self.x * other.x + self.y * other.y

    def norm(self) -> float:
        return math.sqrt(self.dot(self))

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


def interp(p: T, q: T, theta: float) -> T:
    return (1 - theta) * p + theta * q


def apply_linear(matrix: Sequence[Sequence[float]], p: Point) -> Point:
    """Apply a 2x2 matrix (row-major nested sequence or ndarray) to ``p``."""
    return Point(
        matrix[0][0] * p.x + matrix[0][1] * p.y,
        matrix[1][0] * p.x + matrix[1][1] * p.y,
    )


@dataclass(frozen=True)
class Box:
    """Axis-aligned rectangle in either data or pixel coordinates.

    Edges may be ``+/-inf`` (unconstrained) or ``None`` (unspecified, only
    meaningful while merging options with :func:`if_present`). Screen
    convention: ``top_left`` is ``(xmin, ymin)``.
    """

    xmin: float | None = None
    xmax: float | None = None
    ymin: float | None = None
    ymax: float | None = None

    @classmethod
    def from_corners(cls, top_left: Point, bottom_right: Point) -> "Box":
        return cls(top_left.x, bottom_right.x, top_left.y, bottom_right.y)

    @property
    def width(self) -> float:
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        return self.ymax - self.ymin

    @property
    def center(self) -> Point:
        return Point((self.xmin + self.xmax) / 2, (self.ymin + self.ymax) / 2)

    @property
    def top_left(self) -> Point:
        return Point(self.xmin, self.ymin)

    @property
    def top_right(self) -> Point:
        return Point(self.xmax, self.ymin)

    @property
    def bottom_right(self) -> Point:
        return Point(self.xmax, self.ymax)

    @property
    def bottom_left(self) -> Point:
        return Point(self.xmin, self.ymax)

    @property
    def corners(self) -> tuple[Point, Point, Point, Point]:
        return (self.top_left, self.bottom_left, self.bottom_right, self.top_right)

    @property
    def size(self) -> Point:
        return Point(self.width, self.height)

    def edges(self) -> tuple[float | None, float | None, float | None, float | None]:
        return (self.xmin, self.xmax, self.ymin, self.ymax)

    def is_finite(self) -> bool:
        return all(v is not None and math.isfinite(v) for v in self.edges())


UNCONSTRAINED_BOX = Box(-math.inf, math.inf, -math.inf, math.inf)
UNIT_BOX = Box(0.0, 1.0, 0.0, 1.0)


def expand_box(box: Box, dx: float, dy: float) -> Box:
    return Box(box.xmin - dx, box.xmax + dx, box.ymin - dy, box.ymax + dy)


def scale_box(box: Box, rx: float, ry: float) -> Box:
    c = box.center
    half_w = rx * box.width / 2
    half_h = ry * box.height / 2
    return Box(c.x - half_w, c.x + half_w, c.y - half_h, c.y + half_h)


def in_box(p: Point, box: Box) -> bool:
    return (box.xmin <= p.x <= box.xmax) and (box.ymin <= p.y <= box.ymax)


def if_present(value, default):
    """Return ``value`` unless it is ``None``; boxes merge edge by edge."""
    if isinstance(value, Box) and isinstance(default, Box):
        return Box(*(if_present(a, b) for a, b in zip(value.edges(), default.edges(), strict=True)))
    if value is None:
        return default
    return value


def if_finite(value, default):
    """Return ``value`` when it is a finite number; boxes merge edge by edge."""
    if isinstance(value, Box) and isinstance(default, Box):
        return Box(*(if_finite(a, b) for a, b in zip(value.edges(), default.edges(), strict=True)))
    if value is not None and math.isfinite(value):
        return value
    return default
