import os
import sys
import unittest
from unittest import mock

import numpy as np

THIS_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(THIS_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from BubblePie.Errors import DegenerateLimitsError
from BubblePie.layout import ViewportLimits
from BubblePie.layout.ViewportLimits import (
    AxisLimits,
    data_to_pixel,
    device_to_data_scale,
    solve_axis_limits,
    solve_viewport_limits,
)


class TestSolveAxisLimits(unittest.TestCase):
    def test_extremes_land_one_radius_inside_the_viewport(self):
        lo, hi = solve_axis_limits([0, 10], [20, 20], 300)
        self.assertAlmostEqual(float(data_to_pixel(0, (lo, hi), 300)), 10.0, places=9)
        self.assertAlmostEqual(float(data_to_pixel(10, (lo, hi), 300)), 290.0, places=9)

    def test_interior_points_stay_inside(self):
        positions = [2.0, 3.5, 7.0, 9.0]
        lo, hi = solve_axis_limits(positions, [30, 10, 40, 20], 500)
        px = data_to_pixel(positions, (lo, hi), 500)
        self.assertTrue(np.all(px - 20 >= -1e-9))
        self.assertTrue(np.all(px + 20 <= 500 + 1e-9))

    def test_scalar_diameter_matches_vector(self):
        a = solve_axis_limits([1, 4, 9], 24, 400)
        b = solve_axis_limits([1, 4, 9], [24, 24, 24], 400)
        self.assertAlmostEqual(a.lo, b.lo)
        self.assertAlmostEqual(a.hi, b.hi)

    def test_largest_diameter_sets_the_margin(self):
        lo, hi = solve_axis_limits([0, 10], [4, 40, 8], 300)
        self.assertAlmostEqual(float(data_to_pixel(0, (lo, hi), 300)), 20.0, places=9)

    def test_result_is_axis_limits(self):
        limits = solve_axis_limits([0, 1], [10], 100)
        self.assertIsInstance(limits, AxisLimits)
        self.assertLess(limits.lo, limits.hi)
        self.assertAlmostEqual(limits.span, limits.hi - limits.lo)

    def test_repeated_calls_are_bit_identical(self):
        args = ([0.1, 3.3, -2.7], [11.0, 37.0, 5.0], 613.0)
        self.assertEqual(solve_axis_limits(*args), solve_axis_limits(*args))

    def test_coincident_positions_are_widened(self):
        lo, hi = solve_axis_limits([5, 5], [20, 20], 300)
        self.assertLess(lo, hi)
        self.assertLessEqual(lo, 5.0)
        self.assertGreaterEqual(hi, 5.0)
        # 4 and 6 are the widened extremes
        self.assertAlmostEqual(float(data_to_pixel(4, (lo, hi), 300)), 10.0, places=9)
        self.assertAlmostEqual(float(data_to_pixel(6, (lo, hi), 300)), 290.0, places=9)

    def test_single_point(self):
        lo, hi = solve_axis_limits([3.0], [50.0], 200)
        self.assertLess(lo, 3.0)
        self.assertGreater(hi, 3.0)

    def test_oversized_pie_is_capped_at_a_third_of_the_viewport(self):
        lo, hi = solve_axis_limits([0, 10], [10000], 300)
        self.assertAlmostEqual(float(data_to_pixel(0, (lo, hi), 300)), 100.0, places=9)
        self.assertAlmostEqual(float(data_to_pixel(10, (lo, hi), 300)), 200.0, places=9)

    def test_zero_diameter_gives_plain_bounding_box(self):
        lo, hi = solve_axis_limits([-3, 8], [0], 250)
        self.assertAlmostEqual(lo, -3.0)
        self.assertAlmostEqual(hi, 8.0)

    def test_input_order_does_not_matter(self):
        a = solve_axis_limits([9, 1, 5], [10, 10, 10], 300)
        b = solve_axis_limits([1, 5, 9], [10, 10, 10], 300)
        self.assertEqual(a, b)


class TestSolveAxisLimitsErrors(unittest.TestCase):
    def test_empty_positions(self):
        with self.assertRaises(ValueError):
            solve_axis_limits([], [10], 300)

    def test_negative_diameter(self):
        with self.assertRaises(ValueError):
            solve_axis_limits([0, 1], [-10], 300)

    def test_non_finite_position(self):
        with self.assertRaises(ValueError):
            solve_axis_limits([0, float("inf")], [10], 300)

    def test_non_positive_extent(self):
        for extent in (0, -100):
            with self.assertRaises(ValueError):
                solve_axis_limits([0, 1], [10], extent)

    def test_radius_beyond_half_viewport_is_degenerate(self):
        with mock.patch.object(ViewportLimits, "RADIUS_CAP_FRACTION", 0.6):
            with self.assertRaises(DegenerateLimitsError):
                solve_axis_limits([0, 10], [1000], 300)

    def test_radius_at_half_viewport_is_degenerate(self):
        with mock.patch.object(ViewportLimits, "RADIUS_CAP_FRACTION", 0.5):
            with self.assertRaises(DegenerateLimitsError):
                solve_axis_limits([0, 10], [1000], 300)


class TestViewportHelpers(unittest.TestCase):
    def test_solve_viewport_limits_uses_width_and_height(self):
        xlim, ylim = solve_viewport_limits([0, 10], [0, 10], [20, 20], 300, 200)
        self.assertEqual(xlim, solve_axis_limits([0, 10], [20, 20], 300))
        self.assertEqual(ylim, solve_axis_limits([0, 10], [20, 20], 200))
        self.assertAlmostEqual(float(data_to_pixel(10, ylim, 200)), 190.0, places=9)

    def test_data_to_pixel_is_affine(self):
        np.testing.assert_allclose(data_to_pixel([0, 5, 10], (0, 10), 200), [0, 100, 200])

    def test_device_to_data_scale(self):
        self.assertAlmostEqual(float(device_to_data_scale(20, (0, 100), 200)), 5.0)
        np.testing.assert_allclose(device_to_data_scale([10, 40], (0, 100), 200), [2.5, 10.0])

    def test_scaled_pie_fits_between_limits(self):
        lo, hi = solve_axis_limits([0, 10], [20, 20], 300)
        radius = float(device_to_data_scale(20, (lo, hi), 300))
        self.assertAlmostEqual(0 - radius, lo, places=9)
        self.assertAlmostEqual(10 + radius, hi, places=9)


if __name__ == "__main__":
    unittest.main(verbosity=2)
