from __future__ import annotations

import random
import unittest

import numpy as np

from graphview import DomainBounds, InvalidArgumentError, ViewportController


def _controller(min_x: float = 0.0, max_x: float = 100.0, series_count: int = 1, **kwargs) -> ViewportController:
    bounds = DomainBounds(min_x=min_x, max_x=max_x, min_y=0.0, max_y=10.0, series_count=series_count)
    return ViewportController(lambda: bounds, **kwargs)


class ViewportControllerTests(unittest.TestCase):
    def test_starts_unset(self) -> None:
        vp = _controller()
        self.assertFalse(vp.is_set)
        self.assertEqual((vp.start, vp.size), (0.0, 0.0))
        self.assertEqual(vp.visible_x_range(), (0.0, 100.0))

    def test_set_viewport_is_verbatim_and_notifies(self) -> None:
        vp = _controller()
        seen: list[tuple[float, float]] = []
        vp.set_listener(lambda start, size: seen.append((start, size)))
        vp.set_viewport(-50.0, 500.0)
        self.assertEqual((vp.start, vp.size), (-50.0, 500.0))
        self.assertEqual(seen, [(-50.0, 500.0)])

    def test_set_size_pins_start_when_unset(self) -> None:
        vp = _controller(min_x=12.0, max_x=100.0)
        vp.set_size(20.0)
        self.assertEqual((vp.start, vp.size), (12.0, 20.0))
        vp.set_viewport(30.0, 20.0)
        vp.set_size(10.0)
        self.assertEqual((vp.start, vp.size), (30.0, 10.0))

    def test_move_to_start_and_end(self) -> None:
        vp = _controller(min_x=5.0, max_x=100.0)
        vp.set_viewport(40.0, 30.0)
        vp.move_to_end()
        self.assertEqual(vp.start, 70.0)
        vp.move_to_start()
        self.assertEqual(vp.start, 5.0)

    def test_move_to_end_with_window_wider_than_domain_pins_to_min(self) -> None:
        vp = _controller(min_x=5.0, max_x=100.0)
        vp.set_viewport(40.0, 300.0)
        vp.move_to_end()
        self.assertEqual(vp.start, 5.0)

    def test_pan_converts_pixels_and_moves_content_right_on_positive_delta(self) -> None:
        vp = _controller()
        vp.set_viewport(50.0, 20.0)
        self.assertTrue(vp.pan(40.0, scale=4.0))
        self.assertEqual(vp.start, 40.0)
        self.assertTrue(vp.pan(-20.0, scale=4.0))
        self.assertEqual(vp.start, 45.0)

    def test_pan_clamps_to_domain_edges(self) -> None:
        vp = _controller()
        vp.set_viewport(10.0, 20.0)
        vp.pan(1000.0, scale=1.0)
        self.assertEqual(vp.start, 0.0)
        vp.pan(-70.0, scale=1.0)
        self.assertEqual(vp.start, 70.0)
        vp.set_viewport(75.0, 20.0)
        vp.pan(-50.0, scale=1.0)
        self.assertEqual(vp.start, 80.0)

    def test_pan_refused_when_pushing_past_right_edge(self) -> None:
        vp = _controller()
        vp.set_viewport(80.0, 20.0)
        seen: list[tuple[float, float]] = []
        vp.add_listener(lambda start, size: seen.append((start, size)))
        self.assertFalse(vp.pan(-10.0, scale=1.0, from_fling=True))
        self.assertEqual(seen, [])
        self.assertTrue(vp.pan(10.0, scale=1.0))
        self.assertEqual(vp.start, 70.0)

    def test_pan_is_noop_without_viewport_or_series(self) -> None:
        vp = _controller()
        self.assertFalse(vp.pan(10.0, scale=1.0))
        empty = _controller(series_count=0)
        empty.set_viewport(10.0, 20.0)
        self.assertFalse(empty.pan(10.0, scale=1.0))
        self.assertEqual(empty.start, 10.0)

    def test_pan_rejects_non_positive_scale(self) -> None:
        vp = _controller()
        vp.set_viewport(10.0, 20.0)
        with self.assertRaises(InvalidArgumentError):
            vp.pan(1.0, scale=0.0)

    def test_zoom_in_keeps_midpoint(self) -> None:
        vp = _controller()
        vp.set_viewport(20.0, 40.0)
        self.assertTrue(vp.zoom(0.5))
        self.assertEqual((vp.start, vp.size), (30.0, 20.0))

    def test_zoom_out_beyond_domain_clamps_to_full_width(self) -> None:
        vp = _controller()
        vp.set_viewport(10.0, 80.0)
        vp.zoom(2.0)
        self.assertEqual((vp.start, vp.size), (0.0, 100.0))

    def test_zoom_out_at_right_edge_shifts_left(self) -> None:
        vp = _controller()
        vp.set_viewport(78.0, 20.0)
        vp.zoom(1.5)
        self.assertAlmostEqual(vp.start, 70.0, places=9)
        self.assertAlmostEqual(vp.size, 30.0, places=9)

    def test_zoom_out_at_left_edge_pins_start(self) -> None:
        vp = _controller()
        vp.set_viewport(2.0, 20.0)
        vp.zoom(1.5)
        self.assertEqual((vp.start, vp.size), (0.0, 30.0))

    def test_reciprocal_zoom_restores_size(self) -> None:
        vp = _controller(max_x=1000.0)
        vp.set_viewport(400.0, 100.0)
        vp.zoom(0.8)
        vp.zoom(1.25)
        self.assertAlmostEqual(vp.size, 100.0, places=9)
        self.assertAlmostEqual(vp.start, 400.0, places=9)

    def test_zoom_rejects_non_positive_factor(self) -> None:
        vp = _controller()
        vp.set_viewport(0.0, 10.0)
        with self.assertRaises(InvalidArgumentError):
            vp.zoom(0.0)

    def test_zoom_on_unset_viewport_is_ignored(self) -> None:
        vp = _controller()
        with self.assertLogs("graphview.viewport", level="WARNING"):
            self.assertFalse(vp.zoom(0.5))
        self.assertFalse(vp.is_set)

    def test_random_pan_and_zoom_stay_inside_domain(self) -> None:
        rng = random.Random(11)
        vp = _controller(min_x=-250.0, max_x=750.0)
        vp.set_size(100.0)
        for _ in range(2000):
            if rng.random() < 0.5:
                vp.pan(rng.uniform(-400.0, 400.0), scale=rng.uniform(0.2, 5.0))
            else:
                vp.zoom(rng.uniform(0.5, 2.0))
            self.assertGreaterEqual(vp.start, -250.0 - 1e-9)
            self.assertLessEqual(vp.start + vp.size, 750.0 + 1e-9)
            self.assertGreater(vp.size, 0.0)

    def test_multiple_listeners_and_removal(self) -> None:
        vp = _controller()
        first: list[float] = []
        second: list[float] = []

        def on_first(start: float, size: float) -> None:
            first.append(start)

        vp.add_listener(on_first)
        vp.add_listener(lambda start, size: second.append(size))
        vp.set_viewport(1.0, 2.0)
        vp.remove_listener(on_first)
        vp.set_viewport(3.0, 4.0)
        self.assertEqual(first, [1.0])
        self.assertEqual(second, [2.0, 4.0])
        vp.set_listener(None)
        vp.set_viewport(5.0, 6.0)
        self.assertEqual(second, [2.0, 4.0])

    def test_scroll_flags(self) -> None:
        vp = _controller()
        vp.set_viewport(0.0, 10.0)
        self.assertFalse(vp.can_scroll())
        vp.set_scalable(True)
        self.assertTrue(vp.scrollable)
        self.assertTrue(vp.can_scroll())
        vp.set_viewport(0.0, 100.0)
        self.assertFalse(vp.can_scroll())

    def test_pixel_scale(self) -> None:
        vp = _controller()
        self.assertEqual(vp.pixel_scale(200.0), 2.0)
        vp.set_viewport(0.0, 25.0)
        self.assertEqual(vp.pixel_scale(200.0), 8.0)

    def test_labels_are_cached_until_viewport_changes(self) -> None:
        vp = _controller()
        vp.set_viewport(10.0, 40.0)
        labels = vp.labels(400.0, 160.0)
        np.testing.assert_allclose(labels.horizontal, [10.0, 20.0, 30.0, 40.0, 50.0])
        np.testing.assert_allclose(labels.vertical, [10.0, 5.0, 0.0])
        self.assertIs(vp.labels(400.0, 160.0), labels)
        self.assertTrue(vp.label_cache.valid)
        vp.pan(10.0, scale=1.0)
        self.assertFalse(vp.label_cache.valid)
        np.testing.assert_allclose(vp.labels(400.0, 160.0).horizontal, [0.0, 10.0, 20.0, 30.0, 40.0])

    def test_labels_on_narrow_plot_keep_both_ends(self) -> None:
        vp = _controller()
        labels = vp.labels(50.0, 20.0)
        np.testing.assert_allclose(labels.horizontal, [0.0, 100.0])
        np.testing.assert_allclose(labels.vertical, [10.0, 0.0])


if __name__ == "__main__":
    unittest.main()
