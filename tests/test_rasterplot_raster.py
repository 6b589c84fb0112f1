from __future__ import annotations

import math
import unittest

import numpy as np

from rasterplot.adapters.normalize import normalize_xy
from rasterplot.config import RenderConfig
from rasterplot.raster.canvas import Canvas
from rasterplot.raster.draw_function import rasterize_function
from rasterplot.raster.draw_series import rasterize_series
from rasterplot.scales import AxisRange, PixelMapper
from rasterplot.series import FunctionEntry, SeriesSpec
from rasterplot.style import Style


RED = (255, 0, 0, 255)


def _mapper(width: int = 10, height: int = 10, span: float = 10.0) -> PixelMapper:
    return PixelMapper(AxisRange(0.0, span), AxisRange(0.0, span), width, height)


def _series(x: list[float], y: list[float]) -> SeriesSpec:
    return SeriesSpec(data=normalize_xy(y=y, x=x), style=Style(color=RED))


class CanvasTests(unittest.TestCase):
    def test_new_canvas_is_background_filled(self) -> None:
        canvas = Canvas(4, 3, background=(1, 2, 3, 4))
        self.assertEqual(canvas.rgba.shape, (3, 4, 4))
        self.assertTrue(np.all(canvas.rgba[:, :] == np.asarray([1, 2, 3, 4], dtype=np.uint8)))
        self.assertFalse(np.any(canvas.painted_mask()))

    def test_out_of_bounds_writes_are_ignored(self) -> None:
        canvas = Canvas(4, 3)
        self.assertFalse(canvas.set_pixel(4, 0, RED))
        self.assertFalse(canvas.set_pixel(0, -1, RED))
        self.assertTrue(canvas.set_pixel(3, 2, RED))
        self.assertEqual(int(np.count_nonzero(canvas.painted_mask())), 1)

    def test_to_image_puts_row_zero_at_bottom(self) -> None:
        canvas = Canvas(2, 2)
        canvas.set_pixel(0, 0, RED)
        image = canvas.to_image()
        self.assertEqual(image.size, (2, 2))
        self.assertEqual(image.getpixel((0, 1)), RED)
        self.assertEqual(image.getpixel((0, 0)), (0, 0, 0, 0))

    def test_invalid_sizes_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Canvas(0, 10)
        with self.assertRaises(ValueError):
            Canvas(70000, 10)


class SeriesRasterTests(unittest.TestCase):
    def test_zero_length_segment_sets_one_pixel(self) -> None:
        canvas = Canvas(10, 10)
        writes = rasterize_series(_series([3, 3], [4, 4]), _mapper(), canvas)
        self.assertGreaterEqual(writes, 1)
        self.assertEqual(int(np.count_nonzero(canvas.painted_mask())), 1)
        self.assertEqual(canvas.pixel(3, 4), RED)

    def test_single_point_sets_one_pixel(self) -> None:
        canvas = Canvas(10, 10)
        rasterize_series(_series([7], [2]), _mapper(), canvas)
        self.assertEqual(int(np.count_nonzero(canvas.painted_mask())), 1)
        self.assertEqual(canvas.pixel(7, 2), RED)

    def test_shallow_and_steep_segments_have_no_gaps(self) -> None:
        canvas = Canvas(10, 10)
        rasterize_series(_series([0, 9], [0, 3]), _mapper(), canvas)
        painted = canvas.painted_mask()
        self.assertTrue(all(painted[:, col].any() for col in range(10)))

        canvas = Canvas(10, 10)
        rasterize_series(_series([0, 2], [0, 9]), _mapper(), canvas)
        painted = canvas.painted_mask()
        self.assertTrue(all(painted[row, :].any() for row in range(10)))

    def test_descending_segments_are_drawn(self) -> None:
        canvas = Canvas(10, 10)
        rasterize_series(_series([9, 0], [0, 9]), _mapper(), canvas)
        painted = canvas.painted_mask()
        for i in range(10):
            self.assertTrue(painted[i, 9 - i], msg=f"missing anti-diagonal pixel at row {i}")

    def test_each_pair_plots_inside_canvas(self) -> None:
        rng = np.random.default_rng(3)
        xs = np.sort(rng.uniform(0.0, 10.0, size=25))
        ys = rng.uniform(0.0, 10.0, size=25)
        canvas = Canvas(37, 23)
        mapper = PixelMapper(AxisRange(0.0, 10.0), AxisRange(0.0, 10.0), 37, 23)
        writes = rasterize_series(_series(xs.tolist(), ys.tolist()), mapper, canvas)
        self.assertGreaterEqual(writes, xs.size - 1)
        self.assertEqual(canvas.rgba.shape, (23, 37, 4))

    def test_non_finite_points_break_the_line(self) -> None:
        canvas = Canvas(10, 10)
        rasterize_series(_series([0, 1, 2, 3, 4, 5], [0, math.nan, 2, 3, math.nan, 7]), _mapper(), canvas)
        self.assertEqual(canvas.pixel(1, 1), (0, 0, 0, 0))
        self.assertEqual(canvas.pixel(2, 2), RED)
        self.assertEqual(canvas.pixel(3, 3), RED)
        self.assertFalse(canvas.painted_mask()[4:7, 4].any())

    def test_isolated_finite_points_are_plotted(self) -> None:
        canvas = Canvas(10, 10)
        writes = rasterize_series(_series([0, 3, 6, 8], [math.nan, 3, math.nan, 5]), _mapper(), canvas)
        self.assertEqual(writes, 2)
        self.assertEqual(canvas.pixel(3, 3), RED)
        self.assertEqual(canvas.pixel(8, 5), RED)
        self.assertEqual(int(np.count_nonzero(canvas.painted_mask())), 2)

    def test_far_outside_segment_is_clipped(self) -> None:
        canvas = Canvas(10, 10)
        writes = rasterize_series(_series([0, 1e12], [0, 1e12]), _mapper(), canvas)
        self.assertLess(writes, 50)
        self.assertEqual(canvas.pixel(9, 9), RED)

    def test_segment_entirely_outside_lands_on_edge(self) -> None:
        canvas = Canvas(10, 10)
        rasterize_series(_series([20, 1e9], [5, 5]), _mapper(), canvas)
        painted = canvas.painted_mask()
        self.assertTrue(painted[:, 9].any())
        self.assertFalse(painted[:, :9].any())


class FunctionRasterTests(unittest.TestCase):
    def test_sine_trace_has_no_vertical_gaps(self) -> None:
        mapper = PixelMapper(AxisRange(0.0, 6.2832), AxisRange(-1.05, 1.05), 200, 50)
        canvas = Canvas(200, 50)
        trace = rasterize_function(FunctionEntry(func=math.sin, style=Style(color=RED)), mapper, canvas)
        self.assertFalse(trace.truncated)
        self.assertEqual(trace.exhausted_halvings, 0)
        self.assertEqual(trace.points[0][0], 0)
        self.assertEqual(trace.points[-1][0], 199)
        for (x0, y0), (x1, y1) in zip(trace.points, trace.points[1:]):
            self.assertLessEqual(abs(y1 - y0), 1)
            self.assertLessEqual(abs(x1 - x0), 1)

    def test_steep_function_is_refined(self) -> None:
        mapper = PixelMapper(AxisRange(0.0, 1.0), AxisRange(0.0, 1.0), 20, 100)
        canvas = Canvas(20, 100)
        trace = rasterize_function(FunctionEntry(func=lambda x: x, style=Style(color=RED)), mapper, canvas)
        self.assertGreater(trace.samples, 21)
        rows = [p[1] for p in trace.points]
        self.assertEqual(sorted(set(rows)), list(range(100)))

    def test_discontinuity_terminates_and_warns(self) -> None:
        mapper = PixelMapper(AxisRange(0.0, 1.0), AxisRange(0.0, 1.0), 100, 100)
        canvas = Canvas(100, 100)
        entry = FunctionEntry(func=lambda x: 1.0 if x >= 0.5 else 0.0, style=Style(color=RED))
        with self.assertLogs("rasterplot.raster.draw_function", level="WARNING"):
            trace = rasterize_function(entry, mapper, canvas, RenderConfig(max_halvings=8))
        self.assertGreaterEqual(trace.exhausted_halvings, 1)
        self.assertFalse(trace.truncated)
        self.assertEqual(canvas.pixel(99, 99), RED)

    def test_discontinuity_far_from_zero_is_drawn_to_the_end(self) -> None:
        start = 1.7e9
        mapper = PixelMapper(AxisRange(start, start + 100.0), AxisRange(0.0, 1.0), 1000, 100)
        canvas = Canvas(1000, 100)
        entry = FunctionEntry(func=lambda x: 1.0 if x >= start + 50.0 else 0.0, style=Style(color=RED))
        with self.assertLogs("rasterplot.raster.draw_function", level="WARNING") as logs:
            trace = rasterize_function(entry, mapper, canvas)
        self.assertFalse(trace.truncated)
        self.assertGreaterEqual(trace.exhausted_halvings, 1)
        self.assertEqual(trace.points[-1][0], 999)
        self.assertEqual(canvas.pixel(999, 99), RED)
        self.assertTrue(any("halving limit" in line for line in logs.output))
        self.assertFalse(any("stalled" in line for line in logs.output))

    def test_sample_budget_truncates_trace(self) -> None:
        mapper = PixelMapper(AxisRange(0.0, 10.0), AxisRange(-1.0, 1.0), 50, 200)
        canvas = Canvas(50, 200)
        entry = FunctionEntry(func=lambda x: math.sin(40.0 * x), style=Style(color=RED))
        with self.assertLogs("rasterplot.raster.draw_function", level="WARNING") as logs:
            trace = rasterize_function(entry, mapper, canvas, RenderConfig(max_samples_per_column=1))
        self.assertTrue(trace.truncated)
        self.assertEqual(trace.samples, 50)
        self.assertTrue(any("truncated" in line for line in logs.output))

    def test_non_finite_values_leave_gaps(self) -> None:
        mapper = PixelMapper(AxisRange(-1.0, 1.0), AxisRange(0.0, 1.0), 100, 100)
        canvas = Canvas(100, 100)
        entry = FunctionEntry(func=lambda x: math.sqrt(x) if x >= 0 else math.nan, style=Style(color=RED))
        trace = rasterize_function(entry, mapper, canvas)
        self.assertEqual(len(trace.runs), 1)
        self.assertGreaterEqual(min(p[0] for p in trace.points), 49)
        self.assertFalse(canvas.painted_mask()[:, :49].any())

    def test_off_canvas_values_do_not_force_refinement(self) -> None:
        mapper = PixelMapper(AxisRange(0.0, 1.0), AxisRange(0.0, 1.0), 100, 10)
        canvas = Canvas(100, 10)
        trace = rasterize_function(FunctionEntry(func=lambda x: 1e6 * x + 5.0, style=Style(color=RED)), mapper, canvas)
        self.assertEqual(trace.exhausted_halvings, 0)
        self.assertIn(trace.samples, (101, 102))
        self.assertTrue(canvas.painted_mask()[9, :].all())

    def test_function_errors_propagate(self) -> None:
        mapper = _mapper()
        entry = FunctionEntry(func=lambda x: 1.0 / (x - x), style=Style(color=RED))
        with self.assertRaises(ZeroDivisionError):
            rasterize_function(entry, mapper, Canvas(10, 10))


if __name__ == "__main__":
    unittest.main()
