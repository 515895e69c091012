from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Callable


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    @property
    def is_zero(self) -> bool:
        return self.width == 0 and self.height == 0


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def intersection(self, other: "Rect") -> "Rect":
        """Overlap of two rects; `EMPTY_RECT` when they do not overlap with positive area."""
        x0 = max(self.min_x, other.min_x)
        y0 = max(self.min_y, other.min_y)
        x1 = min(self.max_x, other.max_x)
        y1 = min(self.max_y, other.max_y)
        if x1 <= x0 or y1 <= y0:
            return EMPTY_RECT
        return Rect(x=x0, y=y0, width=x1 - x0, height=y1 - y0)

    def inset_x(self, dx: float) -> "Rect":
        # negative dx widens the rect on both sides
        return Rect(x=self.x + dx, y=self.y, width=self.width - 2.0 * dx, height=self.height)


EMPTY_RECT = Rect(x=0.0, y=0.0, width=0.0, height=0.0)

Segment = tuple[Point, Point]

DistanceCalculation = Callable[[float, float, float, float], float]


def euclidean_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Straight line distance between two points."""
    return math.hypot(x1 - x2, y1 - y2)


def horizontal_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Horizontal distance between two points."""
    return abs(x1 - x2)


def vertical_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Vertical distance between two points."""
    return abs(y1 - y2)


def rotated_size(size: Size, degrees: float) -> Size:
    """Bounding box of `size` after rotating it by `degrees` around its center."""
    if degrees % 360 == 0:
        return size
    rad = math.radians(degrees)
    cos_a = abs(math.cos(rad))
    sin_a = abs(math.sin(rad))
    return Size(
        width=size.width * cos_a + size.height * sin_a,
        height=size.width * sin_a + size.height * cos_a,
    )
