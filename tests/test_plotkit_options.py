from __future__ import annotations

import math
from pathlib import Path
import tempfile
import unittest

from plotkit.geometry import Box
from plotkit.options import AxisOptions, AxisStyle, load_axis_options, parse_axis_options
from plotkit.ticks import Ticks


class ParseAxisOptionsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        options = AxisOptions()
        self.assertEqual(options.margins, (80, 80, 80, 80))
        self.assertEqual(options.constraint_box, Box(-math.inf, math.inf, -math.inf, math.inf))
        self.assertTrue(options.y_origin_at_bottom)
        self.assertEqual(options.tick_box, Box())
        self.assertEqual(options.ticks, Ticks())

    def test_prefixed_keywords_route_to_nested_records(self) -> None:
        options = parse_axis_options(
            width=300,
            axis_options_height=200,
            axis_style_font_size=9,
            tick_box_xmin=0.0,
            axis_box_ymax=4.0,
            ticks_xticks=[1, 2],
        )
        self.assertEqual((options.width, options.height), (300, 200))
        self.assertEqual(options.axis_style.font_size, 9)
        self.assertEqual(options.tick_box, Box(xmin=0.0))
        self.assertEqual(options.axis_box, Box(ymax=4.0))
        self.assertEqual(options.ticks.xticks, (1.0, 2.0))

    def test_base_options_are_not_modified(self) -> None:
        base = AxisOptions(axis_style=AxisStyle(title="t"))
        options = parse_axis_options(base, axis_style_font_size=20)
        self.assertEqual(options.axis_style.title, "t")
        self.assertEqual(base.axis_style.font_size, 13)

    def test_unknown_keywords_rejected(self) -> None:
        with self.assertRaises(TypeError):
            parse_axis_options(colour="red")
        with self.assertRaises(TypeError):
            parse_axis_options(axis_style_no_such_field=1)


class LoadAxisOptionsTests(unittest.TestCase):
    def _write(self, text: str) -> Path:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        path = Path(tmp.name) / "axis.toml"
        path.write_text(text)
        return path

    def test_load_from_toml(self) -> None:
        path = self._write(
            """
width = 640
xmin = -inf
ymax = 12.5
y_origin_at_bottom = false
window_background_color = [10, 20, 30]

[axis_style]
title = "Voltage"
grid_line_color = [1, 2, 3, 4]

[ticks]
xticks = [0, 5, 10]

[axis_box]
xmax = 12.0
"""
        )
        options = load_axis_options(path)
        self.assertEqual(options.width, 640)
        self.assertEqual(options.xmin, -math.inf)
        self.assertEqual(options.ymax, 12.5)
        self.assertFalse(options.y_origin_at_bottom)
        self.assertEqual(options.window_background_color, (10, 20, 30, 255))
        self.assertEqual(options.axis_style.title, "Voltage")
        self.assertEqual(options.axis_style.grid_line_color, (1, 2, 3, 4))
        self.assertEqual(options.ticks.xticks, (0.0, 5.0, 10.0))
        self.assertEqual(options.axis_box.xmax, 12.0)

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_axis_options("/nonexistent/axis.toml")

    def test_invalid_content(self) -> None:
        with self.assertRaises(ValueError):
            load_axis_options(self._write("[legend]\nshow = true\n"))
        with self.assertRaises(ValueError):
            load_axis_options(self._write("window_background_color = [1, 2]\n"))
        with self.assertRaises(ValueError):
            load_axis_options(self._write("bogus = 1\n"))


if __name__ == "__main__":
    unittest.main()
