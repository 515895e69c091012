from __future__ import annotations

from dataclasses import dataclass, replace
import math
from typing import Any, Sequence

import numpy as np
from PIL import Image

from chartaxis.fonts import FontSpec
from chartaxis.geometry import Point, Rect, Segment
from chartaxis.raster.canvas import RGBA, ClipBox, fill_box, full_clip, intersect_clip, new_canvas
from chartaxis.raster.draw_lines import draw_segment
from chartaxis.raster.draw_text import TextAlign, draw_text
from chartaxis.raster.gradients import draw_linear_gradient, draw_radial_gradient
from chartaxis.raster.images import draw_image


@dataclass(frozen=True)
class _GraphicsState:
    clip: ClipBox
    stroke_color: RGBA = (0, 0, 0, 255)
    stroke_width: float = 1.0
    dash_lengths: tuple[float, ...] | None = None
    dash_phase: float = 0.0
    fill_color: RGBA = (0, 0, 0, 255)


class RasterSurface:
    """Drawing surface backed by an (H, W, 4) uint8 RGBA numpy canvas."""

    def __init__(self, width: int, height: int, background: RGBA = (0, 0, 0, 0)) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        self.canvas = new_canvas(width, height, color=background)
        self._state = _GraphicsState(clip=full_clip(self.canvas))
        self._stack: list[_GraphicsState] = []

    @property
    def width(self) -> int:
        return int(self.canvas.shape[1])

    @property
    def height(self) -> int:
        return int(self.canvas.shape[0])

    @property
    def clip_box(self) -> ClipBox:
        return self._state.clip

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.canvas.copy())

    def save_state(self) -> None:
        self._stack.append(self._state)

    def restore_state(self) -> None:
        if not self._stack:
            raise RuntimeError("restore_state without matching save_state")
        self._state = self._stack.pop()

    def clip_to_rect(self, rect: Rect) -> None:
        if rect.is_empty:
            box: ClipBox = (0, 0, 0, 0)
        else:
            box = (
                int(math.floor(rect.min_x)),
                int(math.floor(rect.min_y)),
                int(math.ceil(rect.max_x)),
                int(math.ceil(rect.max_y)),
            )
        self._state = replace(self._state, clip=intersect_clip(self._state.clip, box))

    def set_stroke(
        self,
        color: RGBA,
        width: float,
        *,
        dash_lengths: Sequence[float] | None = None,
        dash_phase: float = 0.0,
    ) -> None:
        self._state = replace(
            self._state,
            stroke_color=color,
            stroke_width=width,
            dash_lengths=tuple(dash_lengths) if dash_lengths else None,
            dash_phase=dash_phase,
        )

    def set_fill_color(self, color: RGBA) -> None:
        self._state = replace(self._state, fill_color=color)

    def stroke_segments(self, segments: Sequence[Segment]) -> None:
        st = self._state
        for start, end in segments:
            draw_segment(
                self.canvas,
                start.x,
                start.y,
                end.x,
                end.y,
                st.stroke_color,
                width=st.stroke_width,
                clip=st.clip,
                dash_lengths=st.dash_lengths,
                dash_phase=st.dash_phase,
            )

    def fill_rect(self, rect: Rect) -> None:
        if rect.is_empty:
            return
        fill_box(
            self.canvas,
            int(round(rect.min_x)),
            int(round(rect.min_y)),
            int(round(rect.max_x)),
            int(round(rect.max_y)),
            self._state.fill_color,
            clip=self._state.clip,
        )

    def draw_linear_gradient(self, colors: Sequence[RGBA], start: Point, end: Point) -> None:
        draw_linear_gradient(self.canvas, colors, start, end, clip=self._state.clip)

    def draw_radial_gradient(
        self,
        colors: Sequence[RGBA],
        center: Point,
        start_radius: float,
        end_radius: float,
    ) -> None:
        draw_radial_gradient(self.canvas, colors, center, start_radius, end_radius, clip=self._state.clip)

    def draw_text(
        self,
        text: str,
        point: Point,
        *,
        font: FontSpec,
        color: RGBA,
        anchor: tuple[float, float] = (0.0, 0.0),
        align: TextAlign = "left",
        angle_deg: float = 0.0,
        max_width: float | None = None,
    ) -> None:
        draw_text(
            self.canvas,
            point,
            text,
            color,
            font=font,
            anchor=anchor,
            align=align,
            angle_deg=angle_deg,
            max_width=max_width,
            clip=self._state.clip,
        )

    def draw_image(self, image: Any, rect: Rect, *, tint: RGBA | None = None) -> None:
        draw_image(self.canvas, image, rect, tint=tint, clip=self._state.clip)

    def pixel(self, x: int, y: int) -> np.ndarray:
        return self.canvas[y, x].copy()
