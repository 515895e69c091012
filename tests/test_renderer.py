from __future__ import annotations

import unittest

from PIL import Image

from chartaxis.axis import LimitLine, XAxis
from chartaxis.geometry import Rect, Size
from chartaxis.layout import grid_clipping_rect
from chartaxis.raster import RasterSurface
from chartaxis.renderer import XAxisRenderer
from chartaxis.surface import RecordingSurface
from chartaxis.transform import build_transformer
from chartaxis.viewport import ViewPortHandler


def _measure(text, font, max_width=None) -> Size:
    return Size(8.0 * len(text), 10.0)


def _renderer(axis: XAxis | None, *, with_transformer: bool = True) -> XAxisRenderer:
    vp = ViewPortHandler(chart_width=200.0, chart_height=100.0)
    transformer = build_transformer(vp, x_min=0.0, x_max=10.0) if with_transformer else None
    return XAxisRenderer(vp, axis, transformer, measure=_measure, measure_line_height=lambda font: 12.0)


class ComputeAxisTests(unittest.TestCase):
    def test_values_come_from_the_given_range_when_zoomed_out(self) -> None:
        axis = XAxis()
        _renderer(axis).compute_axis(0.0, 10.0)
        self.assertEqual(axis.entries.tolist(), [0.0, 2.0, 4.0, 6.0, 8.0, 10.0])
        self.assertEqual(axis.centered_entries.tolist(), [1.0, 3.0, 5.0, 7.0, 9.0, 11.0])
        self.assertEqual((axis.axis_minimum, axis.axis_maximum), (0.0, 10.0))

    def test_zoomed_in_range_is_read_from_the_viewport(self) -> None:
        axis = XAxis()
        renderer = _renderer(axis)
        renderer.viewport.zoom(2.0)
        renderer.compute_axis(0.0, 10.0)
        self.assertAlmostEqual(axis.axis_minimum, 0.0)
        self.assertAlmostEqual(axis.axis_maximum, 5.0)
        self.assertEqual(axis.entries.tolist(), [0.0, 1.0, 2.0, 3.0, 4.0, 5.0])

    def test_inverted_range_is_swapped(self) -> None:
        axis = XAxis()
        renderer = _renderer(axis)
        renderer.viewport.zoom(2.0)
        renderer.compute_axis(0.0, 10.0, inverted=True)
        self.assertAlmostEqual(axis.axis_minimum, 0.0)
        self.assertAlmostEqual(axis.axis_maximum, 5.0)

    def test_granularity_limits_tick_density(self) -> None:
        axis = XAxis().set_granularity(5.0)
        _renderer(axis).compute_axis_values(0.0, 10.0)
        self.assertEqual(axis.entries.tolist(), [0.0, 5.0, 10.0])

    def test_compute_size_uses_longest_label(self) -> None:
        axis = XAxis().set_label_rotation_angle(90.0)
        _renderer(axis).compute_axis_values(0.0, 10.0)
        self.assertEqual((axis.label_width, axis.label_height), (16.0, 10.0))
        self.assertAlmostEqual(axis.label_rotated_width, 10.0)
        self.assertAlmostEqual(axis.label_rotated_height, 16.0)

    def test_missing_axis_is_a_no_op(self) -> None:
        _renderer(None).compute_axis(0.0, 10.0)

    def test_zero_height_chart_keeps_given_range(self) -> None:
        vp = ViewPortHandler(chart_width=200.0, chart_height=0.0).zoom(2.0)
        axis = XAxis().add_block(2.0, 2.0).add_limit_line(LimitLine(limit=5.0, label="x"))
        renderer = XAxisRenderer(vp, axis, build_transformer(vp, x_min=0.0, x_max=10.0), measure=_measure)
        renderer.compute_axis(0.0, 10.0)
        self.assertEqual(axis.entries.tolist(), [0.0, 2.0, 4.0, 6.0, 8.0, 10.0])
        surface = RecordingSurface()
        renderer.render(surface)
        self.assertEqual(surface.calls_named("fill_rect"), [])
        self.assertEqual(surface.depth, 0)


class RenderTests(unittest.TestCase):
    def _axis(self) -> XAxis:
        axis = XAxis()
        _renderer(axis).compute_axis_values(0.0, 10.0)
        return axis

    def test_missing_axis_or_transformer_draws_nothing(self) -> None:
        surface = RecordingSurface()
        _renderer(None).render(surface)
        self.assertEqual(surface.calls, [])

        surface = RecordingSurface()
        axis = self._axis().add_block(2.0, 2.0).add_limit_line(LimitLine(limit=5.0, label="x"))
        _renderer(axis, with_transformer=False).render(surface)
        self.assertEqual(surface.calls_named("draw_text"), [])
        self.assertEqual(surface.calls_named("fill_rect"), [])
        self.assertEqual(surface.calls_named("clip_to_rect"), [])
        self.assertEqual(surface.depth, 0)

    def test_disabled_axis_draws_nothing(self) -> None:
        axis = self._axis()
        axis.enabled = False
        surface = RecordingSurface()
        _renderer(axis).render(surface)
        self.assertEqual(surface.calls, [])

    def test_labels_drawn_for_each_entry(self) -> None:
        surface = RecordingSurface()
        _renderer(self._axis()).render_axis_labels(surface)
        texts = [call.args["text"] for call in surface.calls_named("draw_text")]
        self.assertEqual(texts, ["0", "2", "4", "6", "8", "10"])

    def test_both_sided_labels_draw_twice(self) -> None:
        axis = self._axis().set_label_position("both_sided")
        surface = RecordingSurface()
        _renderer(axis).render_axis_labels(surface)
        self.assertEqual(len(surface.calls_named("draw_text")), 12)

    def test_grid_lines_are_clipped(self) -> None:
        axis = self._axis()
        renderer = _renderer(axis)
        surface = RecordingSurface()
        renderer.render_grid_lines(surface)
        strokes = surface.calls_named("stroke_segments")
        self.assertEqual(len(strokes), 1)
        self.assertEqual(len(strokes[0].args["segments"]), 6)
        self.assertEqual(strokes[0].clip, grid_clipping_rect(renderer.viewport, axis.grid_line_width))

    def test_block_fill_hatch_and_baseline(self) -> None:
        axis = self._axis().add_block(2.0, 2.0)
        surface = RecordingSurface()
        _renderer(axis).render_blocks(surface)
        fills = surface.calls_named("fill_rect")
        self.assertEqual(len(fills), 1)
        self.assertEqual(fills[0].args["rect"], Rect(40.0, 0.0, 40.0, 100.5))
        self.assertEqual(fills[0].clip, Rect(40.0, 0.0, 40.0, 100.0))
        strokes = surface.calls_named("set_stroke")
        self.assertEqual(strokes[-1].args["dash_lengths"], (2.0, 2.0))
        self.assertEqual(surface.depth, 0)

    def test_empty_block_draws_no_fill_or_gradient(self) -> None:
        axis = self._axis().add_block(5.0, 0.0).add_block(50.0, 3.0)
        axis.set_block_style(gradient_colors=[(255, 0, 0, 255), (255, 0, 0, 0)])
        surface = RecordingSurface()
        _renderer(axis).render(surface)
        self.assertEqual(surface.calls_named("fill_rect"), [])
        self.assertEqual(surface.calls_named("draw_linear_gradient"), [])

    def test_limit_line_with_label_image_and_halo(self) -> None:
        axis = self._axis().add_limit_line(
            LimitLine(
                limit=5.0,
                label="target",
                image=Image.new("RGBA", (6, 6), (255, 255, 255, 255)),
                image_tint=(0, 255, 0, 255),
                radial_gradient_colors=((0, 255, 0, 128), (0, 255, 0, 0)),
            )
        )
        surface = RecordingSurface()
        _renderer(axis).render_limit_lines(surface)
        names = [n for n in surface.names() if n not in ("save_state", "restore_state")]
        self.assertEqual(
            names,
            ["clip_to_rect", "set_stroke", "stroke_segments", "draw_radial_gradient", "draw_image", "draw_text"],
        )
        self.assertEqual(surface.calls_named("draw_text")[0].args["align"], "left")
        self.assertEqual(surface.calls_named("draw_image")[0].args["tint"], (0, 255, 0, 255))

    def test_limit_line_gradient_is_drawn_inside_the_line_clip(self) -> None:
        axis = self._axis().add_limit_line(LimitLine(limit=5.0, label="x", render_block_gradient=True))
        axis.set_block_style(gradient_colors=[(255, 0, 0, 255), (255, 0, 0, 0)])
        surface = RecordingSurface()
        _renderer(axis).render_limit_lines(surface)
        names = [n for n in surface.names() if n not in ("save_state", "restore_state")]
        self.assertEqual(
            names,
            ["clip_to_rect", "clip_to_rect", "draw_linear_gradient", "set_stroke", "stroke_segments", "draw_text"],
        )
        clips = surface.calls_named("clip_to_rect")
        self.assertEqual(clips[0].args["rect"], Rect(-1.0, 0.0, 202.0, 100.0))
        self.assertEqual(surface.calls_named("draw_linear_gradient")[0].clip, Rect(98.5, 0.0, 4.0, 100.0))
        self.assertEqual(surface.depth, 0)

    def test_negative_length_block_draws_nothing(self) -> None:
        axis = self._axis().add_block(5.0, -1.0)
        axis.set_block_style(gradient_colors=[(255, 0, 0, 255), (255, 0, 0, 0)])
        surface = RecordingSurface()
        _renderer(axis).render(surface)
        self.assertEqual(surface.calls_named("fill_rect"), [])
        self.assertEqual(surface.calls_named("draw_linear_gradient"), [])

    def test_disabled_limit_line_is_skipped(self) -> None:
        axis = self._axis().add_limit_line(LimitLine(limit=5.0, enabled=False))
        surface = RecordingSurface()
        _renderer(axis).render_limit_lines(surface)
        self.assertEqual(surface.calls, [])

    def test_render_order(self) -> None:
        axis = self._axis().add_block(2.0, 2.0).add_limit_line(LimitLine(limit=5.0, label="x"))
        axis.set_block_style(gradient_colors=[(255, 0, 0, 255), (255, 0, 0, 0)])
        surface = RecordingSurface()
        _renderer(axis).render(surface)
        names = surface.names()
        self.assertLess(names.index("draw_linear_gradient"), names.index("fill_rect"))
        self.assertLess(names.index("fill_rect"), names.index("draw_text"))
        self.assertEqual(names.count("save_state"), names.count("restore_state"))
        self.assertEqual(surface.depth, 0)
        # axis labels come last
        self.assertEqual(surface.calls_named("draw_text")[-1].args["text"], "10")


class RasterRenderTests(unittest.TestCase):
    def test_render_onto_raster_surface(self) -> None:
        vp = ViewPortHandler(chart_width=120.0, chart_height=60.0).restrain_viewport(
            left=10.0, top=20.0, right=10.0, bottom=10.0
        )
        axis = XAxis().set_axis_line_style(color=(255, 0, 0, 255), width=1.0)
        axis.add_block(2.0, 3.0)
        renderer = XAxisRenderer(vp, axis, build_transformer(vp, x_min=0.0, x_max=10.0))
        renderer.compute_axis_values(0.0, 10.0)
        surface = RasterSurface(120, 60)
        renderer.render(surface)
        self.assertTrue((surface.canvas[:, :, 3] > 0).any())
        # axis line along the content top
        self.assertEqual(surface.pixel(60, 20).tolist(), [255, 0, 0, 255])


if __name__ == "__main__":
    unittest.main()
