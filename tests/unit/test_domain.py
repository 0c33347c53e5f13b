"""Unit tests for the domain types: options, presets, pixel snapshots and results."""

import dataclasses
import unittest

import numpy as np
import pytest

from wand_lib import config
from wand_lib.domain import (
    WAND_PRESETS,
    PixelImage,
    Point,
    TracePath,
    TraceResult,
    Variation,
    WandOptions,
    WandPreset,
    get_preset,
    preset_ids,
)


class TestWandOptions(unittest.TestCase):
    """Tests for WandOptions."""

    def test_defaults(self):
        opts = WandOptions()
        self.assertEqual(opts.threshold_window, 15)
        self.assertEqual(opts.threshold_bias, 0.90)
        self.assertEqual(opts.thickness_keep_frac, 0.5)
        self.assertEqual(opts.min_component, 30)
        self.assertEqual(opts.step_size, 2.0)
        self.assertEqual(opts.momentum, 0.8)
        self.assertEqual(opts.max_gap, 15.0)
        self.assertEqual(opts.gap_angle, 45.0)
        self.assertEqual(opts.max_points, config.DEFAULT_MAX_POINTS)
        self.assertEqual(opts.max_steps, config.DEFAULT_MAX_STEPS)
        self.assertEqual(opts.simplify_eps, 1.0)
        self.assertIsNone(opts.resample_step)

    def test_merged_returns_new_instance(self):
        base = WandOptions()
        merged = base.merged({'max_gap': 30})
        self.assertEqual(merged.max_gap, 30)
        self.assertEqual(base.max_gap, 15.0)
        self.assertIs(base.merged({}), base)
        self.assertIs(base.merged(None), base)

    def test_merged_unknown_key(self):
        with self.assertRaises(ValueError) as ctx:
            WandOptions().merged({'max_gapp': 3})
        self.assertIn('max_gapp', str(ctx.exception))

    def test_momentum_clamped(self):
        self.assertEqual(WandOptions(momentum=1.7).momentum, 1.0)
        self.assertEqual(WandOptions(momentum=-0.2).momentum, 0.0)

    def test_invalid_values(self):
        bad = [
            {'threshold_window': 14},
            {'threshold_window': 0},
            {'threshold_bias': 0},
            {'threshold_bias': 1.2},
            {'thickness_keep_frac': -0.1},
            {'min_component': -1},
            {'step_size': 0},
            {'max_gap': -1},
            {'gap_angle': -5},
            {'max_points': 0},
            {'max_steps': 0},
            {'simplify_eps': -1},
            {'resample_step': 0},
        ]
        for overrides in bad:
            with self.subTest(overrides=overrides):
                with self.assertRaises(ValueError):
                    WandOptions(**overrides)

    def test_integral_float_coerced_to_int(self):
        opts = WandOptions(threshold_window=15.0, min_component=4.0, max_points=100.0)
        self.assertEqual(opts.threshold_window, 15)
        self.assertIsInstance(opts.threshold_window, int)
        self.assertIsInstance(opts.min_component, int)
        self.assertIsInstance(opts.max_points, int)
        self.assertIsInstance(WandOptions(max_steps=np.int64(50)).max_steps, int)

    def test_numbers_stored_as_float(self):
        opts = WandOptions().merged({'step_size': 3, 'max_gap': np.float32(4.5), 'resample_step': 2})
        self.assertIsInstance(opts.step_size, float)
        self.assertIsInstance(opts.max_gap, float)
        self.assertIsInstance(opts.resample_step, float)

    def test_wrong_types_raise_value_error(self):
        bad = [
            {'threshold_window': 15.5},
            {'threshold_window': '15'},
            {'threshold_window': True},
            {'min_component': None},
            {'max_steps': float('inf')},
            {'step_size': 'abc'},
            {'momentum': True},
            {'threshold_bias': float('nan')},
            {'max_gap': [1]},
            {'resample_step': 'x'},
        ]
        for overrides in bad:
            with self.subTest(overrides=overrides):
                with self.assertRaises(ValueError):
                    WandOptions().merged(overrides)

    def test_frozen(self):
        with self.assertRaises(dataclasses.FrozenInstanceError):
            WandOptions().max_gap = 3

    def test_mask_key(self):
        opts = WandOptions(threshold_window=21, threshold_bias=0.8, min_component=5)
        self.assertEqual(opts.mask_key, (21, 0.8, 5))
        self.assertEqual(opts.merged({'max_gap': 1}).mask_key, opts.mask_key)

    def test_dict_round_trip(self):
        opts = WandOptions(max_gap=22, resample_step=4.0)
        self.assertEqual(WandOptions.from_dict(opts.to_dict()), opts)


class TestPresets:
    """Tests for the preset catalog."""

    def test_catalog_order(self):
        assert preset_ids() == ['balanced', 'thick_only', 'tolerant', 'jumpy', 'strict', 'smooth']

    @pytest.mark.parametrize('preset_id, expected', [
        ('balanced', {}),
        ('thick_only', {'thickness_keep_frac': 0.8}),
        ('tolerant', {'thickness_keep_frac': 0.3, 'threshold_bias': 0.95}),
        ('jumpy', {'max_gap': 30, 'gap_angle': 60}),
        ('strict', {'max_gap': 0, 'threshold_bias': 0.85}),
        ('smooth', {'momentum': 0.95, 'step_size': 3}),
    ])
    def test_overrides(self, preset_id, expected):
        preset = get_preset(preset_id)
        assert dict(preset.overrides) == expected
        opts = preset.options()
        for key, value in expected.items():
            assert getattr(opts, key) == value

    def test_every_preset_resolves(self):
        for preset in WAND_PRESETS:
            assert isinstance(preset.options(), WandOptions)

    def test_options_on_custom_base(self):
        base = WandOptions(simplify_eps=0.0)
        opts = get_preset('jumpy').options(base)
        assert opts.simplify_eps == 0.0
        assert opts.max_gap == 30

    def test_overrides_read_only(self):
        with pytest.raises(TypeError):
            get_preset('jumpy').overrides['max_gap'] = 99

    def test_unknown_preset(self):
        with pytest.raises(ValueError, match='nope'):
            get_preset('nope')

    def test_to_dict(self):
        data = get_preset('smooth').to_dict()
        assert data == {
            'id': 'smooth',
            'name': 'Smooth',
            'description': 'High momentum for clean curves.',
            'overrides': {'momentum': 0.95, 'step_size': 3},
        }


class TestPixelImage(unittest.TestCase):
    """Tests for PixelImage."""

    def test_from_buffer(self):
        data = bytes(range(24))
        image = PixelImage.from_buffer(data, width=3, height=2)
        self.assertEqual(image.shape, (2, 3))
        self.assertEqual(image.width, 3)
        self.assertEqual(image.height, 2)
        self.assertEqual(tuple(image.rgba[1, 0]), (12, 13, 14, 15))

    def test_from_buffer_length_mismatch(self):
        with self.assertRaises(ValueError):
            PixelImage.from_buffer(bytes(23), width=3, height=2)

    def test_from_buffer_bad_dimensions(self):
        with self.assertRaises(ValueError):
            PixelImage.from_buffer(b'', width=0, height=2)

    def test_snapshot_is_read_only(self):
        image = PixelImage.from_buffer(bytearray(16), width=2, height=2)
        with self.assertRaises(ValueError):
            image.rgba[0, 0, 0] = 1

    def test_caller_array_left_writeable(self):
        arr = np.full((10, 10, 4), 255, dtype=np.uint8)
        image = PixelImage(arr)
        self.assertTrue(arr.flags.writeable)
        arr[0, 0] = (0, 0, 0, 255)
        self.assertEqual(tuple(image.rgba[0, 0]), (255, 255, 255, 255))
        self.assertFalse(image.rgba.flags.writeable)

    def test_view_input_is_snapshotted(self):
        base = np.full((6, 8, 4), 200, dtype=np.uint8)
        image = PixelImage(base[::2, ::2])
        self.assertEqual(image.shape, (3, 4))
        self.assertTrue(image.rgba.flags.c_contiguous)
        base[:] = 0
        self.assertEqual(int(image.rgba.max()), 200)

    def test_from_array_fills_channels(self):
        gray = np.full((4, 5), 7, dtype=np.uint8)
        image = PixelImage.from_array(gray)
        self.assertEqual(image.rgba.shape, (4, 5, 4))
        self.assertEqual(tuple(image.rgba[0, 0]), (7, 7, 7, 255))

        rgb = np.zeros((2, 2, 3), dtype=np.uint8)
        self.assertEqual(PixelImage.from_array(rgb).rgba[1, 1, 3], 255)

    def test_from_array_bad_shape(self):
        with self.assertRaises(ValueError):
            PixelImage.from_array(np.zeros((2, 2, 2), dtype=np.uint8))

    def test_rejects_wrong_dtype(self):
        with self.assertRaises(ValueError):
            PixelImage(np.zeros((2, 2, 4), dtype=np.float32))

    def test_contains(self):
        image = PixelImage.from_array(np.zeros((10, 20), dtype=np.uint8))
        self.assertTrue(image.contains(19, 9))
        self.assertFalse(image.contains(20, 0))
        self.assertFalse(image.contains(-0.5, 0))


class TestResults(unittest.TestCase):
    """Tests for TraceResult and Variation."""

    def test_empty_result(self):
        result = TraceResult()
        self.assertFalse(result.found)
        self.assertEqual(result.to_dict()['points'], [])
        self.assertIsNone(result.to_dict()['start'])

    def test_result_to_dict(self):
        path = TracePath.from_tuples([(1, 2), (3, 4)])
        result = TraceResult(path, raw_point_count=10, seed_thickness=2.0,
                             start=Point(1, 2),
                             terminations={'forward': 'stalled', 'backward': 'gap_exhausted'})
        self.assertTrue(result.found)
        data = result.to_dict()
        self.assertEqual(data['points'], [{'x': 1.0, 'y': 2.0}, {'x': 3.0, 'y': 4.0}])
        self.assertEqual(data['raw_point_count'], 10)
        self.assertEqual(data['start'], {'x': 1.0, 'y': 2.0})
        self.assertEqual(data['terminations']['forward'], 'stalled')

    def test_variation_to_dict(self):
        preset = WandPreset('x', 'X', 'Test preset.', {'max_gap': 1})
        path = TracePath.from_tuples([(0, 0), (5, 5)])
        variation = Variation(preset, TraceResult(path))
        self.assertIs(variation.path, path)
        data = variation.to_dict()
        self.assertEqual(data['preset']['id'], 'x')
        self.assertEqual(len(data['points']), 2)


if __name__ == '__main__':
    unittest.main()
