from __future__ import annotations

from dataclasses import dataclass

from chartaxis.errors import AxisConfigError
from chartaxis.geometry import Rect
from chartaxis.matrix import AffineMatrix


@dataclass
class ViewPortHandler:
    """Chart size, content-area offsets and the current zoom/pan state."""

    chart_width: float = 0.0
    chart_height: float = 0.0
    offset_left: float = 0.0
    offset_top: float = 0.0
    offset_right: float = 0.0
    offset_bottom: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    trans_x: float = 0.0
    trans_y: float = 0.0
    min_scale_x: float = 1.0

    def __post_init__(self) -> None:
        if self.chart_width < 0 or self.chart_height < 0:
            raise AxisConfigError("chart width/height must be >= 0")
        if self.scale_x <= 0 or self.scale_y <= 0:
            raise AxisConfigError("scale_x/scale_y must be > 0")

    def set_chart_dimensions(self, width: float, height: float) -> "ViewPortHandler":
        if width < 0 or height < 0:
            raise AxisConfigError("chart width/height must be >= 0")
        self.chart_width = float(width)
        self.chart_height = float(height)
        return self

    def restrain_viewport(self, *, left: float, top: float, right: float, bottom: float) -> "ViewPortHandler":
        self.offset_left = float(left)
        self.offset_top = float(top)
        self.offset_right = float(right)
        self.offset_bottom = float(bottom)
        return self

    def zoom(self, scale_x: float, *, trans_x: float = 0.0) -> "ViewPortHandler":
        if scale_x <= 0:
            raise AxisConfigError("zoom scale must be > 0")
        self.scale_x = max(self.min_scale_x, float(scale_x))
        self.trans_x = float(trans_x)
        return self

    @property
    def content_left(self) -> float:
        return self.offset_left

    @property
    def content_right(self) -> float:
        return self.chart_width - self.offset_right

    @property
    def content_top(self) -> float:
        return self.offset_top

    @property
    def content_bottom(self) -> float:
        return self.chart_height - self.offset_bottom

    @property
    def content_width(self) -> float:
        return max(0.0, self.content_right - self.content_left)

    @property
    def content_height(self) -> float:
        return max(0.0, self.content_bottom - self.content_top)

    @property
    def content_rect(self) -> Rect:
        return Rect(x=self.content_left, y=self.content_top, width=self.content_width, height=self.content_height)

    @property
    def touch_matrix(self) -> AffineMatrix:
        return AffineMatrix(a=self.scale_x, d=self.scale_y, tx=self.trans_x, ty=self.trans_y)

    @property
    def is_fully_zoomed_out_x(self) -> bool:
        return self.scale_x <= self.min_scale_x

    def is_in_bounds_left(self, x: float) -> bool:
        return self.content_left <= x

    def is_in_bounds_right(self, x: float) -> bool:
        return x <= self.content_right

    def is_in_bounds_x(self, x: float) -> bool:
        return self.is_in_bounds_left(x) and self.is_in_bounds_right(x)
