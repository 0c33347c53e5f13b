"""Smart wand pipeline facade.

Runs the full trace for one click: binarize the snapshot, drop specks,
build the distance field, walk the ridge from the seed, then simplify
(and optionally resample) the walked path.

The per-image work (mask and distance field) is split out into
SmartWand.prepare so several option sets sharing the same threshold
parameters can reuse one read-only PreparedImage.

Example usage:
    Trace a click with the default options::

        from wand_lib.analysis.wand import SmartWand
        from wand_lib.domain import Point

        wand = SmartWand()
        result = wand.trace(image, Point(120, 64))
        if result.found:
            print(result.path.to_tuples())
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import numpy as np

from .. import config
from ..domain.geometry import Point, TracePath
from ..domain.image import PixelImage
from ..domain.options import WandOptions
from ..domain.results import TraceResult
from ..utils.geometry import resample_by_step, simplify_rdp
from .components import remove_small_components
from .distance import DistanceField, build_distance_field
from .ridge_walker import RidgeWalker
from .threshold import adaptive_threshold, luminance

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class PreparedImage:
    """Read-only per-image fields shared by every walk over the same mask.

    Attributes:
        mask: Despeckled boolean ink mask, not writeable.
        field: Distance field of the mask.
    """
    mask: np.ndarray
    field: DistanceField

    def __post_init__(self):
        self.mask.setflags(write=False)


class SmartWand:
    """Facade over the smart wand pipeline for one set of options.

    Attributes:
        options: Resolved WandOptions used for every stage.
    """

    def __init__(self, options: Optional[WandOptions] = None,
                 overrides: Optional[Mapping[str, Any]] = None):
        self.options = (options or WandOptions()).merged(overrides)

    def prepare(self, image: PixelImage, luma: Optional[np.ndarray] = None) -> PreparedImage:
        """Build the despeckled mask and distance field for an image.

        Args:
            image: The pixel snapshot.
            luma: Precomputed luminance of the image, to share the work
                across option sets.
        """
        opts = self.options
        started = time.perf_counter()
        if luma is None:
            luma = luminance(image)
        mask = adaptive_threshold(luma, opts.threshold_window, opts.threshold_bias)
        mask = remove_small_components(mask, opts.min_component)
        field = build_distance_field(mask)
        logger.debug("Prepared %dx%d image in %.2f ms (%d ink pixels)",
                     image.width, image.height, (time.perf_counter() - started) * 1000,
                     int(mask.sum()))
        return PreparedImage(mask, field)

    def trace(self, image: PixelImage, seed: Point) -> TraceResult:
        """Run the full pipeline for a click on image."""
        return self.trace_prepared(self.prepare(image), seed)

    def trace_prepared(self, prepared: PreparedImage, seed: Point) -> TraceResult:
        """Walk, simplify and resample on an already prepared image.

        Returns:
            TraceResult whose path is empty when fewer than two points were
            walked (seed not on a stroke, blank image, unusable seed).
        """
        opts = self.options
        started = time.perf_counter()
        field = prepared.field

        if seed.is_finite():
            thickness = field.seed_thickness(seed.x, seed.y, config.SEED_THICKNESS_WINDOW,
                                             config.MIN_SEED_THICKNESS)
        else:
            thickness = config.MIN_SEED_THICKNESS

        walk = RidgeWalker(field, thickness, opts).walk(seed)
        raw = [p.to_tuple() for p in walk.points]

        if len(raw) < 2:
            points = []
        else:
            points = simplify_rdp(raw, opts.simplify_eps)
            if opts.resample_step is not None:
                points = resample_by_step(points, opts.resample_step)

        result = TraceResult(
            path=TracePath.from_tuples(points),
            raw_point_count=len(raw),
            seed_thickness=thickness,
            start=walk.start,
            terminations={'forward': walk.forward.value, 'backward': walk.backward.value},
        )
        logger.debug("Traced seed (%.1f, %.1f): %d raw -> %d points in %.2f ms",
                     seed.x, seed.y, len(raw), len(points),
                     (time.perf_counter() - started) * 1000)
        return result


def smart_wand_trace(image: PixelImage, seed: Point,
                     overrides: Optional[Mapping[str, Any]] = None) -> TracePath:
    """Trace the stroke under seed with default options plus overrides.

    Returns:
        The simplified path, empty when no stroke was detected.
    """
    return SmartWand(overrides=overrides).trace(image, seed).path
