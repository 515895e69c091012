from __future__ import annotations

import unittest

from chartaxis.axis import Block, ImageInset, LimitLabelPosition, LimitLine, XAxis, XAxisLabelPosition
from chartaxis.errors import AxisConfigError
from chartaxis.fonts import FontSpec


class XAxisConfigTests(unittest.TestCase):
    def test_fluent_setters_return_axis(self) -> None:
        axis = XAxis()
        out = axis.set_label_position("bottom").set_label_count(4).set_granularity(0.5)
        self.assertIs(out, axis)
        self.assertEqual(axis.label_position, XAxisLabelPosition.BOTTOM)
        self.assertEqual(axis.label_count, 4)
        self.assertTrue(axis.granularity_enabled)

    def test_invalid_settings_raise(self) -> None:
        axis = XAxis()
        with self.assertRaises(AxisConfigError):
            axis.set_label_position("sideways")
        with self.assertRaises(AxisConfigError):
            axis.set_label_count(0)
        with self.assertRaises(AxisConfigError):
            axis.set_granularity(0.0)
        with self.assertRaises(AxisConfigError):
            axis.set_axis_line_style(width=-1.0)
        with self.assertRaises(AxisConfigError):
            axis.set_grid_line_style(dash_lengths=[2.0, -1.0])
        with self.assertRaises(AxisConfigError):
            axis.set_block_style(stroke_width=0.0, line_gap=0.0)
        with self.assertRaises(AxisConfigError):
            axis.set_entries([[1.0, 2.0], [3.0, 4.0]])
        # AxisConfigError is a ValueError
        with self.assertRaises(ValueError):
            axis.set_label_rotation_angle(float("inf"))

    def test_default_formatter_uses_entry_step(self) -> None:
        axis = XAxis().set_entries([0.0, 0.5, 1.0])
        self.assertEqual([axis.formatted_label(i) for i in range(3)], ["0", "0.5", "1"])
        self.assertEqual(axis.formatted_label(5), "")
        self.assertEqual(axis.longest_label(), "0.5")

    def test_custom_formatter(self) -> None:
        axis = XAxis(value_formatter=lambda value, _axis: f"{value:.0f}%").set_entries([10.0, 100.0])
        self.assertEqual(axis.longest_label(), "100%")

    def test_limit_lines_and_blocks(self) -> None:
        axis = XAxis()
        line = LimitLine(limit=3.0, label="target")
        axis.add_limit_line(line).add_block(1.0, 2.0)
        self.assertEqual(axis.limit_lines, [line])
        self.assertEqual(axis.blocks, [Block(start=1.0, length=2.0)])
        axis.remove_limit_line(line).clear_blocks()
        self.assertEqual(axis.limit_lines, [])
        self.assertEqual(axis.blocks, [])


class LimitLineTests(unittest.TestCase):
    def test_defaults(self) -> None:
        line = LimitLine(limit=1.0)
        self.assertEqual(line.label_position, LimitLabelPosition.RIGHT_TOP)
        self.assertEqual(line.value_font, FontSpec(size_px=13.0))
        self.assertEqual(line.image_inset, ImageInset())
        self.assertTrue(line.enabled)

    def test_label_position_accepts_string(self) -> None:
        self.assertEqual(LimitLine(limit=1.0, label_position="left_bottom").label_position, LimitLabelPosition.LEFT_BOTTOM)

    def test_invalid_limit_lines_raise(self) -> None:
        with self.assertRaises(AxisConfigError):
            LimitLine(limit=1.0, line_width=-1.0)
        with self.assertRaises(AxisConfigError):
            LimitLine(limit=float("nan"))
        with self.assertRaises(AxisConfigError):
            LimitLine(limit=1.0, label_position="middle")
        with self.assertRaises(AxisConfigError):
            LimitLine(limit=1.0, line_color=(1, 2, 3))
        with self.assertRaises(AxisConfigError):
            LimitLine(limit=1.0, dash_lengths=(-1.0,))


class BlockTests(unittest.TestCase):
    def test_end(self) -> None:
        self.assertEqual(Block(start=2.0, length=3.0).end, 5.0)

    def test_negative_length_is_accepted(self) -> None:
        block = Block(start=5.0, length=-1.0)
        self.assertEqual(block.end, 4.0)
        self.assertEqual(XAxis().add_block(5.0, -1.0).blocks, [block])

    def test_non_finite_bounds_rejected(self) -> None:
        with self.assertRaises(AxisConfigError):
            Block(start=float("inf"), length=1.0)


class FontSpecTests(unittest.TestCase):
    def test_invalid_font_spec(self) -> None:
        with self.assertRaises(AxisConfigError):
            FontSpec(size_px=0.0)
        with self.assertRaises(AxisConfigError):
            FontSpec(family=" ")


if __name__ == "__main__":
    unittest.main()
