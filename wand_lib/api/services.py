"""Service layer for smart wand operations.

This module provides the high-level entry points the point-capture layer
and the CLI call. Results are returned as dictionaries and lists suitable
for JSON serialization.

Example usage:
    Trace a click on a raw canvas buffer::

        from wand_lib.api.services import WandService

        service = WandService()
        result = service.trace_buffer(buffer, width, height, x=120, y=64)
        print(result['points'])

    Offer all preset variations::

        variations = service.variations(image, x=120, y=64)
        for v in variations:
            print(v['preset']['name'], len(v['points']))
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from .. import config
from ..analysis.variations import VariationGenerator
from ..analysis.wand import SmartWand
from ..domain.geometry import Point
from ..domain.image import PixelImage
from ..domain.options import WandOptions
from ..domain.presets import WAND_PRESETS, get_preset
from ..utils.geometry import resample_path
from ..utils.rendering import load_pixel_image

_logger = logging.getLogger(__name__)


class WandService:
    """Service for smart wand tracing.

    Wraps preset lookup, option overrides, the single-click pipeline and
    variation generation behind dictionary-returning methods.

    Attributes:
        max_workers: Thread pool size used for variation generation.

    Example:
        >>> service = WandService()
        >>> [p['id'] for p in service.list_presets()][:2]
        ['balanced', 'thick_only']
    """

    def __init__(self, max_workers: int = config.VARIATION_MAX_WORKERS):
        self.max_workers = max_workers

    def list_presets(self) -> List[Dict[str, Any]]:
        """The fixed preset catalog, in display order."""
        return [p.to_dict() for p in WAND_PRESETS]

    def resolve_options(self, preset_id: Optional[str] = None,
                        overrides: Optional[Mapping[str, Any]] = None) -> WandOptions:
        """Options for a preset (defaults if None) with overrides applied.

        Raises:
            ValueError: For an unknown preset id or override key.
        """
        base = get_preset(preset_id).options() if preset_id else WandOptions()
        return base.merged(overrides)

    def trace(self, image: PixelImage, x: float, y: float,
              preset_id: Optional[str] = None,
              overrides: Optional[Mapping[str, Any]] = None,
              num_points: Optional[int] = None) -> Dict[str, Any]:
        """Trace the stroke under (x, y).

        Args:
            image: Pixel snapshot.
            x: Seed x in pixel space.
            y: Seed y in pixel space.
            preset_id: Optional preset to start from.
            overrides: Optional option overrides on top of the preset.
            num_points: If given, the path is resampled to this many evenly
                spaced points before being returned.

        Returns:
            Dictionary with 'points' (list of {'x', 'y'}), 'found',
            'raw_point_count', 'seed_thickness', 'start', 'terminations'
            and 'options'. 'points' is empty when nothing was traced.
        """
        options = self.resolve_options(preset_id, overrides)
        result = SmartWand(options).trace(image, Point(float(x), float(y)))

        payload = result.to_dict()
        if num_points is not None and result.found:
            resampled = resample_path(result.path.to_tuples(), num_points)
            payload['points'] = [{'x': float(px), 'y': float(py)} for px, py in resampled]
        payload['found'] = result.found
        payload['options'] = options.to_dict()

        _logger.info("Trace at (%.1f, %.1f) preset=%s: %d points",
                     x, y, preset_id or 'default', len(payload['points']))
        return payload

    def trace_buffer(self, data, width: int, height: int, x: float, y: float,
                     preset_id: Optional[str] = None,
                     overrides: Optional[Mapping[str, Any]] = None,
                     num_points: Optional[int] = None) -> Dict[str, Any]:
        """Trace on a flat RGBA buffer of width * height * 4 bytes."""
        image = PixelImage.from_buffer(data, width, height)
        return self.trace(image, x, y, preset_id, overrides, num_points)

    def trace_file(self, path: Union[str, Path], x: float, y: float,
                   preset_id: Optional[str] = None,
                   overrides: Optional[Mapping[str, Any]] = None,
                   num_points: Optional[int] = None) -> Dict[str, Any]:
        """Trace on an image file."""
        return self.trace(load_pixel_image(path), x, y, preset_id, overrides, num_points)

    def variations(self, image: PixelImage, x: float, y: float,
                   overrides: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """Trace (x, y) under every preset.

        Args:
            overrides: Applied to the defaults before each preset's own
                overrides, so presets still win on the fields they set.

        Returns:
            List of {'preset': {...}, 'points': [...]} in catalog order.
        """
        base = WandOptions().merged(overrides)
        generator = VariationGenerator(WAND_PRESETS, base, max_workers=self.max_workers)
        return [v.to_dict() for v in generator.generate(image, Point(float(x), float(y)))]
