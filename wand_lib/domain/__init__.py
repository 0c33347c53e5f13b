"""Domain objects for smart wand tracing.

This module provides the value objects passed between pipeline stages and
returned to callers.

Geometry classes:
    Point: Immutable 2D point with vector operations.
    TracePath: Ordered open polyline of points.

Image and parameter classes:
    PixelImage: Read-only RGBA snapshot.
    WandOptions: Frozen bundle of tunable parameters.
    WandPreset: Named option overrides from the fixed catalog.

Result classes:
    TraceResult: Path and diagnostics of one trace.
    Variation: One preset together with the path it produced.

Example usage:
    Working with options and presets::

        from wand_lib.domain import WandOptions, get_preset

        opts = get_preset('tolerant').options()
        assert opts.thickness_keep_frac == 0.3
"""

from .geometry import Point, TracePath
from .image import PixelImage
from .options import WandOptions
from .presets import WAND_PRESETS, WandPreset, get_preset, preset_ids
from .results import TraceResult, Variation

__all__ = [
    'Point', 'TracePath',
    'PixelImage', 'WandOptions',
    'WandPreset', 'WAND_PRESETS', 'get_preset', 'preset_ids',
    'TraceResult', 'Variation',
]
