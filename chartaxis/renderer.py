from __future__ import annotations

import logging

from chartaxis.axis import XAxis
from chartaxis.errors import AxisConfigError
from chartaxis.layout import (
    BLOCK_BASELINE_DASH,
    MeasureLineHeight,
    MeasureText,
    axis_line_segments,
    compute_axis_label_positions,
    compute_block_geometry,
    compute_block_gradient_geometry,
    compute_grid_line_segments,
    compute_label_size,
    compute_limit_line_geometry,
    grid_clipping_rect,
)
from chartaxis.raster.draw_text import line_height, measure_text
from chartaxis.scales import centered_entries, generate_axis_ticks
from chartaxis.surface import DrawingSurface, saved_state
from chartaxis.transform import Transformer
from chartaxis.viewport import ViewPortHandler


LOGGER = logging.getLogger(__name__)

MIN_CONTENT_WIDTH_FOR_TOUCH_RANGE = 10.0


class XAxisRenderer:
    """Draws the horizontal axis of one chart view onto a `DrawingSurface`.

    The renderer holds no per-frame state of its own. Computed tick entries
    and label sizes are written back onto the axis, the rest is derived from
    the viewport and transformer each time a `render_*` method runs.
    """

    def __init__(
        self,
        viewport: ViewPortHandler,
        axis: XAxis | None,
        transformer: Transformer | None,
        *,
        measure: MeasureText = measure_text,
        measure_line_height: MeasureLineHeight = line_height,
    ) -> None:
        self.viewport = viewport
        self.axis = axis
        self.transformer = transformer
        self._measure = measure
        self._measure_line_height = measure_line_height

    def _ready(self, step: str) -> bool:
        if self.axis is None:
            LOGGER.debug("skipping %s: no axis", step)
            return False
        if self.transformer is None:
            LOGGER.debug("skipping %s: no transformer", step)
            return False
        return True

    def compute_axis(self, min_value: float, max_value: float, inverted: bool = False) -> None:
        """Compute entries for the visible range, reading it back from the viewport when zoomed in."""
        vmin, vmax = float(min_value), float(max_value)
        vp = self.viewport
        if self.transformer is not None and vp.content_width > MIN_CONTENT_WIDTH_FOR_TOUCH_RANGE and not vp.is_fully_zoomed_out_x:
            try:
                p1 = self.transformer.value_for_touch_point(vp.content_left, vp.content_top)
                p2 = self.transformer.value_for_touch_point(vp.content_right, vp.content_top)
            except AxisConfigError as exc:
                LOGGER.debug("keeping given axis range: %s", exc)
            else:
                if inverted:
                    vmin, vmax = p2.x, p1.x
                else:
                    vmin, vmax = p1.x, p2.x
        self.compute_axis_values(vmin, vmax)

    def compute_axis_values(self, min_value: float, max_value: float) -> None:
        axis = self.axis
        if axis is None:
            LOGGER.debug("skipping axis values: no axis")
            return
        granularity = axis.granularity if axis.granularity_enabled else None
        ticks = generate_axis_ticks(
            min_value,
            max_value,
            axis.label_count,
            granularity=granularity,
            force_label_count=axis.force_label_count,
        )
        axis.set_entries(ticks)
        axis.set_centered_entries(centered_entries(ticks))
        axis.axis_minimum = float(min(min_value, max_value))
        axis.axis_maximum = float(max(min_value, max_value))
        self.compute_size()

    def compute_size(self) -> None:
        axis = self.axis
        if axis is None:
            return
        size, rotated = compute_label_size(axis, measure=self._measure)
        axis.label_width = size.width
        axis.label_height = size.height
        axis.label_rotated_width = rotated.width
        axis.label_rotated_height = rotated.height

    def render_axis_labels(self, surface: DrawingSurface) -> None:
        if not self._ready("axis labels"):
            return
        axis = self.axis
        if not axis.enabled or not axis.draw_labels_enabled:
            return
        placements = compute_axis_label_positions(
            None, self.viewport, self.transformer, axis, measure=self._measure
        )
        with saved_state(surface):
            for placement in placements:
                surface.draw_text(
                    placement.text,
                    placement.point,
                    font=axis.label_font,
                    color=axis.label_text_color,
                    anchor=placement.anchor,
                    align="center",
                    angle_deg=placement.angle_deg,
                    max_width=placement.max_width,
                )

    def render_axis_line(self, surface: DrawingSurface) -> None:
        axis = self.axis
        if axis is None:
            LOGGER.debug("skipping axis line: no axis")
            return
        if not axis.enabled or not axis.draw_axis_line_enabled:
            return
        segments = axis_line_segments(axis, self.viewport)
        with saved_state(surface):
            surface.set_stroke(
                axis.axis_line_color,
                axis.axis_line_width,
                dash_lengths=axis.axis_line_dash_lengths,
                dash_phase=axis.axis_line_dash_phase,
            )
            surface.stroke_segments(segments)

    def render_grid_lines(self, surface: DrawingSurface) -> None:
        if not self._ready("grid lines"):
            return
        axis = self.axis
        if not axis.enabled or not axis.draw_grid_lines_enabled:
            return
        grid = compute_grid_line_segments(axis.entries, self.viewport, self.transformer)
        if not grid:
            return
        with saved_state(surface):
            surface.clip_to_rect(grid_clipping_rect(self.viewport, axis.grid_line_width))
            surface.set_stroke(
                axis.grid_color,
                axis.grid_line_width,
                dash_lengths=axis.grid_line_dash_lengths,
                dash_phase=axis.grid_line_dash_phase,
            )
            surface.stroke_segments([line.segment for line in grid])

    def render_limit_lines(self, surface: DrawingSurface) -> None:
        if not self._ready("limit lines"):
            return
        axis = self.axis
        if not axis.enabled or not axis.draw_limit_lines_enabled or not axis.limit_lines:
            return
        for limit_line in axis.limit_lines:
            geometry = compute_limit_line_geometry(
                limit_line,
                self.viewport,
                self.transformer,
                measure_line_height=self._measure_line_height,
            )
            if geometry is None:
                continue
            with saved_state(surface):
                surface.clip_to_rect(geometry.clip_rect)
                gradient = geometry.gradient
                if gradient is not None and axis.block_gradient_colors and not gradient.is_empty:
                    with saved_state(surface):
                        surface.clip_to_rect(gradient.clip_rect)
                        surface.draw_linear_gradient(axis.block_gradient_colors, gradient.start, gradient.end)
                surface.set_stroke(
                    limit_line.line_color,
                    limit_line.line_width,
                    dash_lengths=limit_line.dash_lengths,
                    dash_phase=limit_line.dash_phase,
                )
                surface.stroke_segments([geometry.segment])
            if geometry.image is not None:
                with saved_state(surface):
                    if limit_line.radial_gradient_colors:
                        surface.draw_radial_gradient(
                            limit_line.radial_gradient_colors,
                            geometry.image.halo_center,
                            geometry.image.halo_start_radius,
                            geometry.image.halo_end_radius,
                        )
                    surface.draw_image(limit_line.image, geometry.image.rect, tint=limit_line.image_tint)
            if geometry.label is not None:
                label = geometry.label
                with saved_state(surface):
                    surface.draw_text(label.text, label.point, font=label.font, color=label.color, align=label.align)

    def render_blocks(self, surface: DrawingSurface) -> None:
        if not self._ready("blocks"):
            return
        axis = self.axis
        if not axis.enabled or not axis.blocks:
            return
        for block in axis.blocks:
            geometry = compute_block_geometry(
                block,
                self.viewport,
                self.transformer,
                axis_line_width=axis.axis_line_width,
                stroke_width=axis.block_stroke_width,
                line_gap=axis.block_line_gap,
            )
            if geometry is None or geometry.is_empty:
                LOGGER.debug("skipping block %s: outside content rect", block)
                continue
            with saved_state(surface):
                surface.clip_to_rect(geometry.clip_rect)
                surface.set_fill_color(axis.blocks_fill_color)
                surface.fill_rect(geometry.fill_rect)
                surface.set_stroke(axis.blocks_stroke_color, axis.block_stroke_width)
                surface.stroke_segments(geometry.hatch_segments)
            with saved_state(surface):
                surface.set_stroke(axis.axis_line_color, axis.axis_line_width, dash_lengths=BLOCK_BASELINE_DASH)
                surface.stroke_segments([geometry.baseline])

    def render_block_gradients(self, surface: DrawingSurface) -> None:
        if not self._ready("block gradients"):
            return
        axis = self.axis
        if not axis.enabled or not axis.blocks or not axis.block_gradient_colors:
            return
        for block in axis.blocks:
            block_geometry = compute_block_geometry(block, self.viewport, self.transformer)
            if block_geometry is None or block_geometry.is_empty:
                LOGGER.debug("skipping block gradient %s: empty block", block)
                continue
            geometry = compute_block_gradient_geometry(block, self.viewport, self.transformer)
            if geometry is None or geometry.is_empty:
                LOGGER.debug("skipping block gradient %s: outside content rect", block)
                continue
            with saved_state(surface):
                surface.clip_to_rect(geometry.clip_rect)
                surface.draw_linear_gradient(axis.block_gradient_colors, geometry.start, geometry.end)

    def render(self, surface: DrawingSurface) -> None:
        if self.axis is not None and not self.axis.enabled:
            return
        self.render_block_gradients(surface)
        self.render_blocks(surface)
        self.render_grid_lines(surface)
        self.render_axis_line(surface)
        self.render_limit_lines(surface)
        self.render_axis_labels(surface)
