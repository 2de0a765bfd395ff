from __future__ import annotations

import dataclasses
import math
import unittest

from plotkit import Point, build_axis
from plotkit.axis import set_window_size_from_data
from plotkit.errors import DegenerateIntervalError, EmptyDataError, InvalidOptionCombinationError
from plotkit.geometry import Box
from plotkit.options import AxisOptions
from plotkit.ticks import Ticks


DATA = [Point(0.0, 0.0), Point(100.0, 37.0)]


class BuildAxisTests(unittest.TestCase):
    def test_defaults_without_data(self) -> None:
        axis = build_axis()
        self.assertEqual((axis.width, axis.height), (800, 600))
        self.assertEqual(axis.box, Box(0.0, 1.0, 0.0, 1.0))
        self.assertEqual(len(axis.ticks.xticks), 11)
        self.assertEqual(axis.axis_map.rf(Point(0.0, 0.0)), (80, 520))
        self.assertEqual(axis.axis_map.rf(Point(1.0, 1.0)), (720, 80))

    def test_axis_box_comes_from_ticks(self) -> None:
        axis = build_axis(DATA)
        self.assertEqual(axis.box, Box(0.0, 100.0, 0.0, 40.0))
        self.assertEqual(axis.ticks.yticks, tuple(float(v) for v in range(0, 41, 5)))
        self.assertEqual(axis.ticks.ytickstrings[-1], "40")

    def test_ticks_never_outside_axis_box(self) -> None:
        axis = build_axis([Point(-3.3, 0.02), Point(17.9, 0.071)])
        for xt in axis.ticks.xticks:
            self.assertTrue(axis.box.xmin <= xt <= axis.box.xmax)
        for yt in axis.ticks.yticks:
            self.assertTrue(axis.box.ymin <= yt <= axis.box.ymax)

    def test_user_bounds_filter_data_and_win(self) -> None:
        data = DATA + [Point(1000.0, 500.0)]
        axis = build_axis(data, xmax=100.0)
        self.assertEqual(axis.box, Box(0.0, 100.0, 0.0, 40.0))

    def test_bounds_without_data(self) -> None:
        axis = build_axis(xmin=-10.0, xmax=10.0)
        self.assertEqual((axis.box.xmin, axis.box.xmax), (-10.0, 10.0))
        self.assertEqual((axis.box.ymin, axis.box.ymax), (0.0, 1.0))

    def test_data_margin_and_widen_factor(self) -> None:
        data = [Point(0.0, 0.0), Point(10.0, 10.0)]
        axis = build_axis(data, x_data_margin=1.0)
        self.assertLessEqual(axis.box.xmin, -1.0)
        self.assertGreaterEqual(axis.box.xmax, 11.0)
        widened = build_axis(data, y_widen_factor=2.0)
        self.assertLessEqual(widened.box.ymin, -5.0)
        self.assertGreaterEqual(widened.box.ymax, 15.0)

    def test_overrides(self) -> None:
        axis = build_axis(
            DATA,
            ticks_xticks=(0.0, 50.0, 100.0),
            axis_box_xmax=120.0,
            tick_box_ymin=-20.0,
        )
        self.assertEqual(axis.ticks.xticks, (0.0, 50.0, 100.0))
        self.assertEqual(axis.ticks.xtickstrings, ("0", "50", "100"))
        self.assertEqual(axis.box.xmax, 120.0)
        self.assertLessEqual(axis.box.ymin, -20.0)

    def test_options_object_and_keywords_combine(self) -> None:
        base = AxisOptions(width=400, height=300, ticks=Ticks(yticks=(0.0, 40.0)))
        axis = build_axis(DATA, base, left_margin=10, right_margin=10)
        self.assertEqual(axis.width, 400)
        self.assertEqual(axis.ticks.yticks, (0.0, 40.0))
        self.assertAlmostEqual(axis.axis_map.fx(0.0), 10.0)

    def test_window_size_from_data(self) -> None:
        axis = build_axis(DATA, width_from_data=2.0, height_from_data=3.0)
        self.assertEqual(axis.width, 100.0 * 2.0 + 160)
        self.assertEqual(axis.height, 40.0 * 3.0 + 160)
        self.assertAlmostEqual(axis.axis_map.fx(100.0), axis.width - 80)

    def test_set_window_size_from_data_keeps_unrequested_dimension(self) -> None:
        w, h = set_window_size_from_data(800, 600, Box(0.0, 10.0, 0.0, 5.0), (1, 2, 3, 4), 10, 0)
        self.assertEqual((w, h), (103, 600))

    def test_axis_equal(self) -> None:
        axis = build_axis(DATA, axis_equal=True)
        self.assertAlmostEqual(abs(axis.axis_map.sx), abs(axis.axis_map.sy))

    def test_flip_flag_is_carried(self) -> None:
        axis = build_axis(DATA, y_origin_at_bottom=False)
        self.assertFalse(axis.y_origin_at_bottom)
        self.assertLess(axis.axis_map.fy(0.0), axis.axis_map.fy(40.0))

    def test_single_point_is_widened(self) -> None:
        axis = build_axis([Point(5.0, 5.0)])
        self.assertLess(axis.box.xmin, 5.0)
        self.assertGreater(axis.box.xmax, 5.0)

    def test_axis_is_immutable(self) -> None:
        axis = build_axis()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            axis.width = 10  # type: ignore[misc]

    def test_one_sided_bound_past_unit_box_rejected(self) -> None:
        with self.assertRaises(InvalidOptionCombinationError):
            build_axis(xmin=2.0)
        axis = build_axis(xmin=0.5)
        self.assertGreaterEqual(axis.box.xmin, 0.0)
        self.assertLessEqual(axis.box.xmin, 0.5)

    def test_reversed_overrides_rejected(self) -> None:
        with self.assertRaises(InvalidOptionCombinationError):
            build_axis(DATA, tick_box_xmin=200.0)
        with self.assertRaises(InvalidOptionCombinationError):
            build_axis(DATA, tick_box_ymax=-5.0)
        with self.assertRaises(InvalidOptionCombinationError):
            build_axis(DATA, axis_box_xmin=150.0)

    def test_errors_propagate(self) -> None:
        with self.assertRaises(EmptyDataError):
            build_axis(DATA, xmin=500.0)
        with self.assertRaises(DegenerateIntervalError):
            build_axis(DATA, ticks_xticks=(5.0,))
        with self.assertRaises(InvalidOptionCombinationError):
            build_axis(DATA, axis_box_xmax=math.inf)
        with self.assertRaises(TypeError):
            build_axis(DATA, no_such_option=1)


if __name__ == "__main__":
    unittest.main()
