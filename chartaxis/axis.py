from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Sequence

import numpy as np

from chartaxis.adapters import coerce_entries
from chartaxis.errors import AxisConfigError
from chartaxis.fonts import FontSpec
from chartaxis.raster.canvas import RGBA
from chartaxis.scales import format_tick


class XAxisLabelPosition(str, Enum):
    TOP = "top"
    TOP_INSIDE = "top_inside"
    BOTTOM = "bottom"
    BOTTOM_INSIDE = "bottom_inside"
    BOTH_SIDED = "both_sided"


class LimitLabelPosition(str, Enum):
    RIGHT_TOP = "right_top"
    RIGHT_BOTTOM = "right_bottom"
    LEFT_TOP = "left_top"
    LEFT_BOTTOM = "left_bottom"


ValueFormatter = Callable[[float, "XAxis"], str]


def _validate_color(color: Sequence[int], *, name: str) -> RGBA:
    if len(color) != 4 or any((not isinstance(c, (int, np.integer))) or c < 0 or c > 255 for c in color):
        raise AxisConfigError(f"{name} must be an RGBA tuple of ints in [0, 255]")
    r, g, b, a = (int(c) for c in color)
    return (r, g, b, a)


def _validate_dash(lengths: Sequence[float] | None, *, name: str) -> tuple[float, ...] | None:
    if lengths is None:
        return None
    out = tuple(float(v) for v in lengths)
    if any(v < 0 for v in out):
        raise AxisConfigError(f"{name} must not contain negative lengths")
    if out and sum(out) <= 0:
        raise AxisConfigError(f"{name} must have a positive total length")
    return out or None


@dataclass(frozen=True)
class ImageInset:
    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0


@dataclass(frozen=True)
class LimitLine:
    """Reference line at a fixed data value, with an optional label and marker image."""

    limit: float
    label: str = ""
    line_width: float = 2.0
    line_color: RGBA = (237, 91, 91, 255)
    dash_lengths: tuple[float, ...] | None = None
    dash_phase: float = 0.0
    label_position: LimitLabelPosition = LimitLabelPosition.RIGHT_TOP
    x_offset: float = 0.0
    y_offset: float = 0.0
    value_font: FontSpec = field(default_factory=lambda: FontSpec(size_px=13.0))
    value_text_color: RGBA = (0, 0, 0, 255)
    draw_label_enabled: bool = True
    enabled: bool = True
    image: Any = None
    image_size: tuple[float, float] = (0.0, 0.0)
    image_inset: ImageInset = field(default_factory=ImageInset)
    image_tint: RGBA | None = None
    image_sticky_length: float = 0.0
    radial_gradient_colors: tuple[RGBA, ...] = ()
    render_block_gradient: bool = False

    def __post_init__(self) -> None:
        if not np.isfinite(self.limit):
            raise AxisConfigError("limit must be finite")
        if self.line_width < 0:
            raise AxisConfigError("limit line width must be >= 0")
        if self.image_size[0] < 0 or self.image_size[1] < 0:
            raise AxisConfigError("image_size must be >= 0")
        try:
            object.__setattr__(self, "label_position", LimitLabelPosition(self.label_position))
        except ValueError as exc:
            raise AxisConfigError(f"unknown limit label position: {self.label_position!r}") from exc
        object.__setattr__(self, "line_color", _validate_color(self.line_color, name="line_color"))
        object.__setattr__(self, "dash_lengths", _validate_dash(self.dash_lengths, name="dash_lengths"))


@dataclass(frozen=True)
class Block:
    """Highlighted data-space interval `[start, start + length)`; a negative length draws nothing."""

    start: float
    length: float

    def __post_init__(self) -> None:
        if not (np.isfinite(self.start) and np.isfinite(self.length)):
            raise AxisConfigError("block start/length must be finite")

    @property
    def end(self) -> float:
        return self.start + self.length


def default_value_formatter(value: float, axis: "XAxis") -> str:
    entries = axis.entries
    step = float(abs(entries[1] - entries[0])) if entries.size > 1 else None
    return format_tick(float(value), step=step)


@dataclass(eq=False)
class XAxis:
    """Configuration and per-frame computed state of the horizontal axis."""

    enabled: bool = True
    draw_labels_enabled: bool = True
    draw_axis_line_enabled: bool = True
    draw_grid_lines_enabled: bool = True
    draw_limit_lines_enabled: bool = True

    label_position: XAxisLabelPosition = XAxisLabelPosition.TOP
    label_rotation_angle: float = 0.0
    label_font: FontSpec = field(default_factory=FontSpec)
    label_text_color: RGBA = (0, 0, 0, 255)
    y_offset: float = 5.0
    avoid_first_last_clipping_enabled: bool = False
    center_axis_labels_enabled: bool = False
    word_wrap_enabled: bool = False
    word_wrap_width_percent: float = 1.0
    value_formatter: ValueFormatter | None = None

    axis_line_color: RGBA = (128, 128, 128, 255)
    axis_line_width: float = 0.5
    axis_line_dash_lengths: tuple[float, ...] | None = None
    axis_line_dash_phase: float = 0.0

    grid_color: RGBA = (128, 128, 128, 230)
    grid_line_width: float = 0.5
    grid_line_dash_lengths: tuple[float, ...] | None = None
    grid_line_dash_phase: float = 0.0

    label_count: int = 6
    force_label_count: bool = False
    granularity: float = 1.0
    granularity_enabled: bool = False

    limit_lines: list[LimitLine] = field(default_factory=list)
    blocks: list[Block] = field(default_factory=list)
    blocks_fill_color: RGBA = (230, 230, 230, 255)
    blocks_stroke_color: RGBA = (200, 200, 200, 255)
    block_stroke_width: float = 1.0
    block_line_gap: float = 3.7
    block_gradient_colors: tuple[RGBA, ...] = ()

    # computed per frame
    entries: np.ndarray = field(default_factory=lambda: np.asarray([], dtype=np.float64))
    centered_entries: np.ndarray = field(default_factory=lambda: np.asarray([], dtype=np.float64))
    axis_minimum: float = 0.0
    axis_maximum: float = 0.0
    label_width: float = 1.0
    label_height: float = 1.0
    label_rotated_width: float = 1.0
    label_rotated_height: float = 1.0

    @property
    def entry_count(self) -> int:
        return int(self.entries.size)

    @property
    def formatter(self) -> ValueFormatter:
        return self.value_formatter if self.value_formatter is not None else default_value_formatter

    def set_entries(self, values: Any) -> "XAxis":
        self.entries = coerce_entries(values)
        return self

    def set_centered_entries(self, values: Any) -> "XAxis":
        self.centered_entries = coerce_entries(values, label="centered_entries")
        return self

    def set_label_position(self, position: XAxisLabelPosition | str) -> "XAxis":
        try:
            self.label_position = XAxisLabelPosition(position)
        except ValueError as exc:
            raise AxisConfigError(f"unknown label position: {position!r}") from exc
        return self

    def set_label_rotation_angle(self, degrees: float) -> "XAxis":
        if not np.isfinite(degrees):
            raise AxisConfigError("label rotation angle must be finite")
        self.label_rotation_angle = float(degrees)
        return self

    def set_label_count(self, count: int, *, force: bool = False) -> "XAxis":
        if count < 1:
            raise AxisConfigError("label count must be >= 1")
        self.label_count = int(count)
        self.force_label_count = bool(force)
        return self

    def set_granularity(self, granularity: float) -> "XAxis":
        if granularity <= 0:
            raise AxisConfigError("granularity must be > 0")
        self.granularity = float(granularity)
        self.granularity_enabled = True
        return self

    def set_avoid_first_last_clipping(self, enabled: bool) -> "XAxis":
        self.avoid_first_last_clipping_enabled = bool(enabled)
        return self

    def set_center_axis_labels(self, enabled: bool) -> "XAxis":
        self.center_axis_labels_enabled = bool(enabled)
        return self

    def set_word_wrap(self, enabled: bool, *, width_percent: float | None = None) -> "XAxis":
        if width_percent is not None:
            if width_percent <= 0:
                raise AxisConfigError("word wrap width percent must be > 0")
            self.word_wrap_width_percent = float(width_percent)
        self.word_wrap_enabled = bool(enabled)
        return self

    def set_axis_line_style(
        self,
        *,
        color: RGBA | None = None,
        width: float | None = None,
        dash_lengths: Sequence[float] | None = None,
        dash_phase: float = 0.0,
    ) -> "XAxis":
        if width is not None:
            if width < 0:
                raise AxisConfigError("axis line width must be >= 0")
            self.axis_line_width = float(width)
        if color is not None:
            self.axis_line_color = _validate_color(color, name="axis_line_color")
        self.axis_line_dash_lengths = _validate_dash(dash_lengths, name="axis_line_dash_lengths")
        self.axis_line_dash_phase = float(dash_phase)
        return self

    def set_grid_line_style(
        self,
        *,
        color: RGBA | None = None,
        width: float | None = None,
        dash_lengths: Sequence[float] | None = None,
        dash_phase: float = 0.0,
    ) -> "XAxis":
        if width is not None:
            if width < 0:
                raise AxisConfigError("grid line width must be >= 0")
            self.grid_line_width = float(width)
        if color is not None:
            self.grid_color = _validate_color(color, name="grid_color")
        self.grid_line_dash_lengths = _validate_dash(dash_lengths, name="grid_line_dash_lengths")
        self.grid_line_dash_phase = float(dash_phase)
        return self

    def set_block_style(
        self,
        *,
        fill_color: RGBA | None = None,
        stroke_color: RGBA | None = None,
        stroke_width: float | None = None,
        line_gap: float | None = None,
        gradient_colors: Sequence[RGBA] | None = None,
    ) -> "XAxis":
        if stroke_width is not None:
            if stroke_width < 0:
                raise AxisConfigError("block stroke width must be >= 0")
            self.block_stroke_width = float(stroke_width)
        if line_gap is not None:
            if line_gap < 0:
                raise AxisConfigError("block line gap must be >= 0")
            self.block_line_gap = float(line_gap)
        if self.block_line_gap + self.block_stroke_width <= 0:
            raise AxisConfigError("block line gap + stroke width must be > 0")
        if fill_color is not None:
            self.blocks_fill_color = _validate_color(fill_color, name="blocks_fill_color")
        if stroke_color is not None:
            self.blocks_stroke_color = _validate_color(stroke_color, name="blocks_stroke_color")
        if gradient_colors is not None:
            self.block_gradient_colors = tuple(_validate_color(c, name="block_gradient_colors") for c in gradient_colors)
        return self

    def add_limit_line(self, line: LimitLine) -> "XAxis":
        self.limit_lines.append(line)
        return self

    def remove_limit_line(self, line: LimitLine) -> "XAxis":
        if line in self.limit_lines:
            self.limit_lines.remove(line)
        return self

    def clear_limit_lines(self) -> "XAxis":
        self.limit_lines.clear()
        return self

    def add_block(self, start: float, length: float) -> "XAxis":
        self.blocks.append(Block(start=float(start), length=float(length)))
        return self

    def clear_blocks(self) -> "XAxis":
        self.blocks.clear()
        return self

    def formatted_label(self, index: int) -> str:
        if index < 0 or index >= self.entry_count:
            return ""
        return self.formatter(float(self.entries[index]), self)

    def longest_label(self) -> str:
        longest = ""
        for i in range(self.entry_count):
            text = self.formatted_label(i)
            if len(text) > len(longest):
                longest = text
        return longest
