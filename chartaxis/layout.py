"""Pixel-space geometry for the horizontal axis.

Everything here is a pure function of the axis config, the viewport and the
transformer. A missing axis or transformer yields an empty result rather
than an error so a half-configured chart still renders what it can.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any, Callable

import numpy as np

from chartaxis.adapters import coerce_entries
from chartaxis.axis import Block, LimitLabelPosition, LimitLine, XAxis, XAxisLabelPosition
from chartaxis.fonts import FontSpec
from chartaxis.geometry import EMPTY_RECT, Point, Rect, Segment, Size, rotated_size
from chartaxis.raster.canvas import RGBA
from chartaxis.raster.draw_text import line_height, measure_text
from chartaxis.scales import centered_entries
from chartaxis.transform import Transformer
from chartaxis.viewport import ViewPortHandler


MeasureText = Callable[[str, FontSpec, "float | None"], Size]
MeasureLineHeight = Callable[[FontSpec], float]

LIMIT_LABEL_BASE_Y_OFFSET = 2.0
BLOCK_GRADIENT_SPAN_PX = 100.0
BLOCK_GRADIENT_CLIP_PAD_PX = 1.5
BLOCK_BASELINE_DASH = (2.0, 2.0)

ANCHOR_BELOW_POINT = (0.5, 1.0)
ANCHOR_ABOVE_POINT = (0.5, 0.0)


@dataclass(frozen=True)
class LabelRow:
    position: XAxisLabelPosition
    y: float
    anchor: tuple[float, float]


@dataclass(frozen=True)
class AxisLabelPlacement:
    index: int
    value: float
    text: str
    raw_x: float
    point: Point
    anchor: tuple[float, float]
    size: Size
    angle_deg: float
    max_width: float | None


@dataclass(frozen=True)
class GridLineSegment:
    x: float
    top: float
    bottom: float

    @property
    def segment(self) -> Segment:
        return (Point(self.x, self.top), Point(self.x, self.bottom))


@dataclass(frozen=True)
class LimitLabelGeometry:
    text: str
    point: Point
    align: str
    font: FontSpec
    color: RGBA


@dataclass(frozen=True)
class ImageAnchorGeometry:
    rect: Rect
    halo_center: Point
    halo_start_radius: float
    halo_end_radius: float


@dataclass(frozen=True)
class BlockGradientGeometry:
    fill_rect: Rect
    clip_rect: Rect
    start: Point
    end: Point

    @property
    def is_empty(self) -> bool:
        return self.clip_rect.is_empty


@dataclass(frozen=True)
class LimitLineGeometry:
    line: LimitLine
    x: float
    segment: Segment
    clip_rect: Rect
    label: LimitLabelGeometry | None
    image: ImageAnchorGeometry | None
    gradient: BlockGradientGeometry | None


@dataclass(frozen=True)
class BlockGeometry:
    block: Block
    fill_rect: Rect
    clip_rect: Rect
    hatch_segments: tuple[Segment, ...]
    baseline: Segment

    @property
    def is_empty(self) -> bool:
        return self.clip_rect.is_empty


def label_rows(axis: XAxis, viewport: ViewPortHandler) -> tuple[LabelRow, ...]:
    """Y position and anchor of each label row; both-sided yields the top row then the bottom row."""
    top = LabelRow(XAxisLabelPosition.TOP, viewport.content_top - axis.y_offset, ANCHOR_BELOW_POINT)
    bottom = LabelRow(XAxisLabelPosition.BOTTOM, viewport.content_bottom + axis.y_offset, ANCHOR_ABOVE_POINT)
    position = axis.label_position
    if position == XAxisLabelPosition.TOP:
        return (top,)
    if position == XAxisLabelPosition.TOP_INSIDE:
        y = viewport.content_top + axis.y_offset + axis.label_rotated_height
        return (LabelRow(position, y, ANCHOR_BELOW_POINT),)
    if position == XAxisLabelPosition.BOTTOM:
        return (bottom,)
    if position == XAxisLabelPosition.BOTTOM_INSIDE:
        y = viewport.content_bottom - axis.y_offset - axis.label_rotated_height
        return (LabelRow(position, y, ANCHOR_ABOVE_POINT),)
    return (top, bottom)


def label_max_width(axis: XAxis, transformer: Transformer) -> float | None:
    if not axis.word_wrap_enabled:
        return None
    return axis.word_wrap_width_percent * transformer.value_to_pixel_matrix.a


def compute_axis_label_positions(
    entries: Any,
    viewport: ViewPortHandler,
    transformer: Transformer | None,
    axis: XAxis | None,
    *,
    measure: MeasureText = measure_text,
) -> list[AxisLabelPlacement]:
    """Anchor points for every visible label, one pass per label row.

    Label text is always formatted from the original entry value; with
    centering enabled only the pixel position moves.
    """
    if axis is None or transformer is None:
        return []
    values = axis.entries if entries is None else coerce_entries(entries)
    count = int(values.size)
    if count == 0:
        return []

    positions = values
    if axis.center_axis_labels_enabled:
        stored = axis.centered_entries
        positions = stored if entries is None and stored.size == count else centered_entries(values)
    px, _ = transformer.pixels_for_values(positions, np.zeros(count, dtype=np.float64))
    max_width = label_max_width(axis, transformer)

    visible: list[tuple[int, float, float, float, str, Size]] = []
    for i in range(count):
        raw_x = float(px[i])
        if not viewport.is_in_bounds_x(raw_x):
            continue
        value = float(values[i])
        text = axis.formatter(value, axis)
        size = measure(text, axis.label_font, max_width)
        x = raw_x
        if axis.avoid_first_last_clipping_enabled:
            if i == count - 1 and count > 1:
                if size.width > viewport.offset_right * 2.0 and x + size.width > viewport.chart_width:
                    x -= size.width / 2.0
            elif i == 0:
                x += size.width / 2.0
        visible.append((i, value, raw_x, x, text, size))

    placements: list[AxisLabelPlacement] = []
    for row in label_rows(axis, viewport):
        for i, value, raw_x, x, text, size in visible:
            placements.append(
                AxisLabelPlacement(
                    index=i,
                    value=value,
                    text=text,
                    raw_x=raw_x,
                    point=Point(x, row.y),
                    anchor=row.anchor,
                    size=size,
                    angle_deg=axis.label_rotation_angle,
                    max_width=max_width,
                )
            )
    return placements


def compute_label_size(
    axis: XAxis,
    *,
    measure: MeasureText = measure_text,
) -> tuple[Size, Size]:
    """Size of the longest formatted label, unrotated and rotated by the label angle."""
    size = measure(axis.longest_label(), axis.label_font, None)
    return size, rotated_size(size, axis.label_rotation_angle)


def compute_grid_line_segments(
    entries: Any,
    viewport: ViewPortHandler,
    transformer: Transformer | None,
) -> list[GridLineSegment]:
    if transformer is None:
        return []
    values = coerce_entries(entries)
    if values.size == 0:
        return []
    px, _ = transformer.pixels_for_values(values, values)
    out: list[GridLineSegment] = []
    for x in px.tolist():
        if viewport.offset_left <= x <= viewport.chart_width:
            out.append(GridLineSegment(x=float(x), top=viewport.content_top, bottom=viewport.content_bottom))
    return out


def grid_clipping_rect(viewport: ViewPortHandler, grid_line_width: float) -> Rect:
    return viewport.content_rect.inset_x(-grid_line_width / 2.0)


def axis_line_segments(axis: XAxis, viewport: ViewPortHandler) -> list[Segment]:
    position = axis.label_position
    out: list[Segment] = []
    if position in (XAxisLabelPosition.TOP, XAxisLabelPosition.TOP_INSIDE, XAxisLabelPosition.BOTH_SIDED):
        out.append((Point(viewport.content_left, viewport.content_top), Point(viewport.content_right, viewport.content_top)))
    if position in (XAxisLabelPosition.BOTTOM, XAxisLabelPosition.BOTTOM_INSIDE, XAxisLabelPosition.BOTH_SIDED):
        out.append(
            (Point(viewport.content_left, viewport.content_bottom), Point(viewport.content_right, viewport.content_bottom))
        )
    return out


def compute_limit_line_geometry(
    limit_line: LimitLine | None,
    viewport: ViewPortHandler,
    transformer: Transformer | None,
    *,
    measure_line_height: MeasureLineHeight = line_height,
) -> LimitLineGeometry | None:
    if limit_line is None or transformer is None or not limit_line.enabled:
        return None
    x = transformer.pixel_for_values(limit_line.limit, 0.0).x
    segment = (Point(x, viewport.content_top), Point(x, viewport.content_bottom))
    clip_rect = viewport.content_rect.inset_x(-limit_line.line_width / 2.0)
    gradient = None
    if limit_line.render_block_gradient:
        gradient = compute_block_gradient_geometry(Block(start=limit_line.limit, length=0.0), viewport, transformer)
    return LimitLineGeometry(
        line=limit_line,
        x=x,
        segment=segment,
        clip_rect=clip_rect,
        label=_limit_label_geometry(limit_line, x, viewport, measure_line_height),
        image=_limit_image_geometry(limit_line, x, viewport, transformer),
        gradient=gradient,
    )


def _limit_label_geometry(
    limit_line: LimitLine,
    x: float,
    viewport: ViewPortHandler,
    measure_line_height: MeasureLineHeight,
) -> LimitLabelGeometry | None:
    if not limit_line.draw_label_enabled or not limit_line.label:
        return None
    x_offset = limit_line.line_width + limit_line.x_offset
    y_offset = LIMIT_LABEL_BASE_Y_OFFSET + limit_line.y_offset
    position = limit_line.label_position
    if position in (LimitLabelPosition.RIGHT_TOP, LimitLabelPosition.RIGHT_BOTTOM):
        label_x = x + x_offset
        align = "left"
    else:
        label_x = x - x_offset
        align = "right"
    if position in (LimitLabelPosition.RIGHT_TOP, LimitLabelPosition.LEFT_TOP):
        label_y = viewport.content_top + y_offset
    else:
        label_y = viewport.content_bottom - measure_line_height(limit_line.value_font) - y_offset
    return LimitLabelGeometry(
        text=limit_line.label,
        point=Point(label_x, label_y),
        align=align,
        font=limit_line.value_font,
        color=limit_line.value_text_color,
    )


def _limit_image_geometry(
    limit_line: LimitLine,
    x: float,
    viewport: ViewPortHandler,
    transformer: Transformer,
) -> ImageAnchorGeometry | None:
    if limit_line.image is None:
        return None
    width, height = limit_line.image_size
    if width <= 0 or height <= 0:
        # fall back to the image's natural size (PIL images expose `.size`)
        width, height = getattr(limit_line.image, "size", (0.0, 0.0))
    inset = limit_line.image_inset
    sticky = transformer.pixel_delta_x(limit_line.image_sticky_length)
    image_x = max(min(viewport.content_left + inset.left, x + sticky - width - inset.right), x + inset.left)
    rect = Rect(x=image_x, y=viewport.content_bottom - height - inset.bottom, width=float(width), height=float(height))
    return ImageAnchorGeometry(
        rect=rect,
        halo_center=Point(rect.x + rect.width / 2.0, rect.y + rect.height / 2.0),
        halo_start_radius=rect.width / 2.0,
        halo_end_radius=1.0,
    )


def hatch_segments(rect: Rect, line_gap: float, stroke_width: float) -> list[Segment]:
    """Diagonal hatch lines across `rect`, walking the unrolled top+right edge.

    Each step starts on the top edge (then the right edge once past the
    width) and ends on the left edge (then the bottom edge once past the
    height).
    """
    step = line_gap + stroke_width
    if step <= 0 or rect.width < 0 or rect.height < 0:
        return []
    x, y, w, h = rect.x, rect.y, rect.width, rect.height
    count = int(math.floor((w + h) / step)) + 1
    out: list[Segment] = []
    for i in range(count):
        d = i * step
        start = Point(x + d, y) if d < w else Point(x + w, y + (d - w))
        end = Point(x, y + d) if d < h else Point(x + (d - h), y + h)
        out.append((start, end))
    return out


def block_fill_rect(block: Block, viewport: ViewPortHandler, transformer: Transformer, *, extra_height: float = 0.0) -> Rect:
    x = transformer.pixel_for_values(block.start, 0.0).x
    # negative lengths collapse to an empty rect
    width = transformer.pixel_delta_x(max(block.length, 0.0))
    if width < 0:
        x += width
        width = -width
    return Rect(x=x, y=viewport.content_top, width=width, height=viewport.content_height + extra_height)


def compute_block_geometry(
    block: Block | None,
    viewport: ViewPortHandler,
    transformer: Transformer | None,
    *,
    axis_line_width: float = 0.0,
    stroke_width: float = 1.0,
    line_gap: float = 3.7,
) -> BlockGeometry | None:
    if block is None or transformer is None:
        return None
    fill_rect = block_fill_rect(block, viewport, transformer, extra_height=axis_line_width)
    clip_rect = viewport.content_rect.intersection(fill_rect)
    baseline_y = fill_rect.max_y - axis_line_width
    baseline = (Point(fill_rect.min_x, baseline_y), Point(fill_rect.max_x, baseline_y))
    segments: tuple[Segment, ...] = ()
    if not clip_rect.is_empty:
        segments = tuple(hatch_segments(fill_rect, line_gap, stroke_width))
    return BlockGeometry(
        block=block,
        fill_rect=fill_rect,
        clip_rect=clip_rect,
        hatch_segments=segments,
        baseline=baseline,
    )


def compute_block_gradient_geometry(
    block: Block | None,
    viewport: ViewPortHandler,
    transformer: Transformer | None,
) -> BlockGradientGeometry | None:
    if block is None or transformer is None:
        return None
    base = block_fill_rect(block, viewport, transformer)
    fill_rect = Rect(x=base.x, y=base.y, width=base.width + 1.0, height=base.height)
    intersection = viewport.content_rect.intersection(fill_rect)
    if intersection.is_empty:
        clip_rect = EMPTY_RECT
    else:
        clip_rect = intersection.inset_x(-BLOCK_GRADIENT_CLIP_PAD_PX)
    start = Point(fill_rect.x, viewport.content_top)
    return BlockGradientGeometry(
        fill_rect=fill_rect,
        clip_rect=clip_rect,
        start=start,
        end=Point(fill_rect.x, viewport.content_top + BLOCK_GRADIENT_SPAN_PX),
    )
