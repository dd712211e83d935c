from __future__ import annotations

import unittest

import numpy as np

from graphview import DegenerateRangeError, InvalidArgumentError, PlotRect, Sample, map_points, map_to_screen


class CoordinateMappingTests(unittest.TestCase):
    def test_viewport_corners_land_on_plot_corners(self) -> None:
        rect = PlotRect(x0=3.0, y0=7.0, width=200.0, height=100.0, border=4.0)
        bottom_left = map_to_screen(Sample(10.0, -5.0), 10.0, 20.0, -5.0, 5.0, rect)
        top_right = map_to_screen(Sample(30.0, 5.0), 10.0, 20.0, -5.0, 5.0, rect)
        self.assertEqual(bottom_left, (7.0, 111.0))
        self.assertEqual(top_right, (207.0, 11.0))

    def test_midpoint_maps_to_plot_centre(self) -> None:
        rect = PlotRect(x0=0.0, y0=0.0, width=100.0, height=100.0)
        self.assertEqual(map_to_screen((10.0, 5.0), 0.0, 20.0, 0.0, 10.0, rect), (50.0, 50.0))

    def test_maximum_y_maps_to_top_edge(self) -> None:
        rect = PlotRect(x0=0.0, y0=0.0, width=100.0, height=100.0)
        self.assertEqual(map_to_screen((10.0, 5.0), 0.0, 20.0, 0.0, 5.0, rect), (50.0, 0.0))

    def test_vectorized_mapping_matches_scalar(self) -> None:
        rect = PlotRect(x0=5.0, y0=5.0, width=320.0, height=240.0, border=20.0)
        xs = np.asarray([0.0, 2.5, 7.0, 12.0])
        ys = np.asarray([-1.0, 3.0, 0.5, 2.0])
        px, py = map_points(xs, ys, 1.0, 10.0, -1.0, 3.0, rect)
        for i in range(xs.size):
            sx, sy = map_to_screen((xs[i], ys[i]), 1.0, 10.0, -1.0, 3.0, rect)
            self.assertAlmostEqual(px[i], sx)
            self.assertAlmostEqual(py[i], sy)

    def test_points_outside_viewport_are_not_clipped(self) -> None:
        rect = PlotRect(x0=0.0, y0=0.0, width=100.0, height=100.0)
        sx, _ = map_to_screen((-10.0, 0.0), 0.0, 20.0, 0.0, 10.0, rect)
        self.assertEqual(sx, -50.0)

    def test_flat_y_range_is_degenerate(self) -> None:
        rect = PlotRect(x0=0.0, y0=0.0, width=100.0, height=100.0)
        with self.assertRaises(DegenerateRangeError):
            map_to_screen((1.0, 1.0), 0.0, 10.0, 3.0, 3.0, rect)

    def test_zero_viewport_size_is_degenerate(self) -> None:
        rect = PlotRect(x0=0.0, y0=0.0, width=100.0, height=100.0)
        with self.assertRaises(DegenerateRangeError):
            map_points(np.zeros(2), np.zeros(2), 0.0, 0.0, 0.0, 1.0, rect)

    def test_plot_rect_validation(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            PlotRect(x0=0.0, y0=0.0, width=0.0, height=10.0)
        with self.assertRaises(InvalidArgumentError):
            PlotRect(x0=0.0, y0=0.0, width=10.0, height=10.0, border=-1.0)


if __name__ == "__main__":
    unittest.main()
