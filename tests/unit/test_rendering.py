"""Unit tests for wand_lib.utils.rendering."""

import unittest

import numpy as np
import pytest
from PIL import Image

from wand_lib.domain.geometry import TracePath
from wand_lib.utils.rendering import (
    TRACE_COLOR,
    draw_dashed_hline,
    draw_hline,
    draw_polyline,
    draw_vline,
    load_pixel_image,
    new_canvas,
    render_trace_overlay,
    to_pixel_image,
)


def _dark(image):
    return image.rgba[..., 0] < 128


class TestStrokes(unittest.TestCase):
    """Tests for the synthetic stroke helpers."""

    def test_hline_extent(self):
        canvas = new_canvas(50, 30)
        draw_hline(canvas, 5, 44, 15, thickness=3)
        dark = _dark(to_pixel_image(canvas))
        rows, cols = np.nonzero(dark)
        self.assertEqual((rows.min(), rows.max()), (14, 16))
        self.assertEqual((cols.min(), cols.max()), (5, 44))
        self.assertEqual(int(dark.sum()), 40 * 3)

    def test_vline_extent(self):
        canvas = new_canvas(30, 50)
        draw_vline(canvas, 10, 5, 40, thickness=5)
        rows, cols = np.nonzero(_dark(to_pixel_image(canvas)))
        self.assertEqual((cols.min(), cols.max()), (8, 12))
        self.assertEqual((rows.min(), rows.max()), (5, 40))

    def test_dashed_hline_gaps(self):
        canvas = new_canvas(200, 100)
        draw_dashed_hline(canvas, 10, 189, 50, dash=20, gap=8)
        row = _dark(to_pixel_image(canvas))[50]
        self.assertTrue(row[10:30].all())
        self.assertFalse(row[30:38].any())
        self.assertTrue(row[38:58].all())
        self.assertTrue(row[178:190].all())
        self.assertFalse(row[190:].any())

    def test_dashed_hline_invalid(self):
        with self.assertRaises(ValueError):
            draw_dashed_hline(new_canvas(10, 10), 0, 9, 5, dash=0, gap=2)

    def test_polyline_draws_ink(self):
        canvas = new_canvas(40, 40)
        draw_polyline(canvas, [(5, 5), (35, 35)], width=3)
        dark = _dark(to_pixel_image(canvas))
        self.assertTrue(dark[20, 20])
        self.assertFalse(dark[5, 35])

    def test_polyline_single_point_is_noop(self):
        canvas = new_canvas(10, 10)
        draw_polyline(canvas, [(5, 5)])
        self.assertFalse(_dark(to_pixel_image(canvas)).any())


class TestImageLoading:
    """Tests for load_pixel_image and to_pixel_image."""

    def test_round_trip_png(self, tmp_path):
        canvas = new_canvas(20, 10)
        draw_hline(canvas, 2, 17, 5)
        path = tmp_path / 'plot.png'
        canvas.save(path)

        image = load_pixel_image(path)
        assert image.shape == (10, 20)
        np.testing.assert_array_equal(image.rgba, np.array(canvas))

    def test_grayscale_file_becomes_rgba(self, tmp_path):
        path = tmp_path / 'gray.png'
        Image.new('L', (8, 6), 100).save(path)
        image = load_pixel_image(path)
        assert image.rgba.shape == (6, 8, 4)
        assert tuple(image.rgba[0, 0]) == (100, 100, 100, 255)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_pixel_image(tmp_path / 'missing.png')


class TestOverlay(unittest.TestCase):
    """Tests for render_trace_overlay."""

    def test_overlay_marks_path(self):
        image = to_pixel_image(new_canvas(60, 40))
        path = TracePath.from_tuples([(10, 20), (50, 20)])
        overlay = render_trace_overlay(image, path)
        self.assertEqual(overlay.size, (60, 40))
        self.assertEqual(overlay.getpixel((30, 20)), TRACE_COLOR)

    def test_overlay_leaves_source_untouched(self):
        image = to_pixel_image(new_canvas(30, 30))
        before = image.rgba.copy()
        render_trace_overlay(image, TracePath.from_tuples([(0, 0), (29, 29)]))
        np.testing.assert_array_equal(image.rgba, before)

    def test_overlay_empty_path(self):
        image = to_pixel_image(new_canvas(30, 30))
        overlay = render_trace_overlay(image, TracePath())
        np.testing.assert_array_equal(np.array(overlay), image.rgba)


if __name__ == '__main__':
    unittest.main()
