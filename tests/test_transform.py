from __future__ import annotations

import unittest

import numpy as np

from chartaxis.errors import AxisConfigError
from chartaxis.geometry import Point, Rect
from chartaxis.matrix import AffineMatrix
from chartaxis.transform import Transformer, build_transformer
from chartaxis.viewport import ViewPortHandler


def _padded_viewport() -> ViewPortHandler:
    vp = ViewPortHandler(chart_width=200.0, chart_height=100.0)
    return vp.restrain_viewport(left=10.0, top=5.0, right=10.0, bottom=15.0)


class ViewPortHandlerTests(unittest.TestCase):
    def test_content_bounds_follow_offsets(self) -> None:
        vp = ViewPortHandler(chart_width=200.0, chart_height=100.0).restrain_viewport(
            left=10.0, top=5.0, right=20.0, bottom=15.0
        )
        self.assertEqual((vp.content_left, vp.content_right), (10.0, 180.0))
        self.assertEqual((vp.content_top, vp.content_bottom), (5.0, 85.0))
        self.assertEqual((vp.content_width, vp.content_height), (170.0, 80.0))
        self.assertEqual(vp.content_rect, Rect(10.0, 5.0, 170.0, 80.0))

    def test_bounds_checks_are_inclusive(self) -> None:
        vp = ViewPortHandler(chart_width=200.0, chart_height=100.0).restrain_viewport(
            left=10.0, top=0.0, right=20.0, bottom=0.0
        )
        self.assertTrue(vp.is_in_bounds_x(10.0))
        self.assertTrue(vp.is_in_bounds_x(180.0))
        self.assertFalse(vp.is_in_bounds_x(9.999))
        self.assertFalse(vp.is_in_bounds_x(180.001))

    def test_content_size_never_negative(self) -> None:
        vp = ViewPortHandler(chart_width=10.0, chart_height=10.0).restrain_viewport(
            left=8.0, top=8.0, right=8.0, bottom=8.0
        )
        self.assertEqual(vp.content_width, 0.0)
        self.assertEqual(vp.content_height, 0.0)
        self.assertTrue(vp.content_rect.is_empty)

    def test_invalid_dimensions_rejected(self) -> None:
        with self.assertRaises(AxisConfigError):
            ViewPortHandler(chart_width=-1.0, chart_height=10.0)
        with self.assertRaises(AxisConfigError):
            ViewPortHandler(chart_width=10.0, chart_height=10.0).zoom(0.0)

    def test_zoom_is_clamped_to_min_scale(self) -> None:
        vp = ViewPortHandler(chart_width=100.0, chart_height=100.0)
        self.assertTrue(vp.is_fully_zoomed_out_x)
        vp.zoom(2.0)
        self.assertFalse(vp.is_fully_zoomed_out_x)
        vp.zoom(0.5)
        self.assertEqual(vp.scale_x, 1.0)


class TransformerTests(unittest.TestCase):
    def test_scale_and_translate_example(self) -> None:
        vp = ViewPortHandler(chart_width=200.0, chart_height=100.0)
        t = Transformer.from_matrix(vp, AffineMatrix(a=2.0, tx=100.0))
        xs, _ = t.pixels_for_values(np.asarray([1.0, 2.0, 3.0]), np.zeros(3))
        self.assertEqual(xs.tolist(), [102.0, 104.0, 106.0])
        self.assertEqual(t.pixel_for_values(1.0, 0.0), Point(102.0, 0.0))

    def test_pixel_delta_ignores_translation(self) -> None:
        vp = ViewPortHandler(chart_width=200.0, chart_height=100.0)
        t = Transformer.from_matrix(vp, AffineMatrix(a=2.0, tx=100.0))
        self.assertEqual(t.pixel_delta_x(10.0), 20.0)

    def test_build_transformer_maps_range_onto_content_rect(self) -> None:
        vp = _padded_viewport()
        t = build_transformer(vp, x_min=0.0, x_max=18.0)
        self.assertEqual(t.pixel_for_values(0.0, 0.0), Point(10.0, 85.0))
        self.assertEqual(t.pixel_for_values(18.0, 0.0), Point(190.0, 85.0))
        self.assertEqual(t.pixel_for_values(0.0, 1.0), Point(10.0, 5.0))

    def test_inverted_offset_flips_y(self) -> None:
        vp = _padded_viewport()
        t = build_transformer(vp, x_min=0.0, x_max=18.0, inverted=True)
        self.assertAlmostEqual(t.pixel_for_values(0.0, 0.0).y, 5.0)
        self.assertAlmostEqual(t.pixel_for_values(0.0, 1.0).y, 85.0)

    def test_touch_point_maps_back_to_values(self) -> None:
        vp = _padded_viewport()
        t = build_transformer(vp, x_min=0.0, x_max=18.0)
        p = t.value_for_touch_point(190.0, 5.0)
        self.assertAlmostEqual(p.x, 18.0)
        self.assertAlmostEqual(p.y, 1.0)

    def test_zoom_scales_pixel_positions(self) -> None:
        vp = _padded_viewport()
        t = build_transformer(vp, x_min=0.0, x_max=18.0)
        vp.zoom(2.0)
        self.assertAlmostEqual(t.pixel_for_values(9.0, 0.0).x, 190.0)


if __name__ == "__main__":
    unittest.main()
