from __future__ import annotations

import numpy as np

from chartaxis.geometry import Point
from chartaxis.matrix import AffineMatrix
from chartaxis.viewport import ViewPortHandler


class Transformer:
    """Maps data-space values to pixel space for one chart view.

    The full value-to-pixel matrix is the value matrix (data range to content
    size), then the viewport touch matrix (zoom/pan), then the offset matrix
    (content origin, y flipped so larger values sit higher).
    """

    def __init__(self, viewport: ViewPortHandler) -> None:
        self._viewport = viewport
        self._matrix_value = AffineMatrix.identity()
        self._matrix_offset = AffineMatrix.identity()

    @classmethod
    def from_matrix(cls, viewport: ViewPortHandler, matrix: AffineMatrix) -> "Transformer":
        transformer = cls(viewport)
        transformer._matrix_value = matrix
        return transformer

    @property
    def viewport(self) -> ViewPortHandler:
        return self._viewport

    def prepare_matrix_value_px(self, x_min: float, delta_x: float, delta_y: float, y_min: float) -> None:
        if delta_x == 0:
            delta_x = 1.0
        if delta_y == 0:
            delta_y = 1.0
        scale_x = self._viewport.content_width / delta_x
        scale_y = self._viewport.content_height / delta_y
        self._matrix_value = AffineMatrix.translation(-x_min, -y_min).concat(AffineMatrix.scale(scale_x, -scale_y))

    def prepare_matrix_offset(self, inverted: bool = False) -> None:
        vp = self._viewport
        if not inverted:
            self._matrix_offset = AffineMatrix.translation(vp.offset_left, vp.chart_height - vp.offset_bottom)
        else:
            self._matrix_offset = AffineMatrix.scale(1.0, -1.0).concat(AffineMatrix.translation(vp.offset_left, vp.offset_top))

    @property
    def value_to_pixel_matrix(self) -> AffineMatrix:
        return self._matrix_value.concat(self._viewport.touch_matrix).concat(self._matrix_offset)

    @property
    def pixel_to_value_matrix(self) -> AffineMatrix:
        return self.value_to_pixel_matrix.inverted()

    def pixel_for_values(self, x: float, y: float) -> Point:
        return self.value_to_pixel_matrix.apply(x, y)

    def pixels_for_values(self, x: np.ndarray, y: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        xs = np.asarray(x, dtype=np.float64)
        ys = np.asarray(y, dtype=np.float64)
        return self.value_to_pixel_matrix.apply_many(xs, ys)

    def value_for_touch_point(self, x: float, y: float) -> Point:
        return self.pixel_to_value_matrix.apply(x, y)

    def pixel_delta_x(self, length: float) -> float:
        """Pixel width of a data-space length; translation cancels out."""
        return self.pixel_for_values(length, 0.0).x - self.pixel_for_values(0.0, 0.0).x


def build_transformer(
    viewport: ViewPortHandler,
    *,
    x_min: float,
    x_max: float,
    y_min: float = 0.0,
    y_max: float = 1.0,
    inverted: bool = False,
) -> Transformer:
    transformer = Transformer(viewport)
    transformer.prepare_matrix_value_px(x_min, x_max - x_min, y_max - y_min, y_min)
    transformer.prepare_matrix_offset(inverted)
    return transformer
