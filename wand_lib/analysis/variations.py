"""Variation generation: one trace per preset for the same click.

All presets read the same PixelImage. Luminance is computed once, and
presets sharing threshold window, bias and minimum component size share
one PreparedImage. Every shared field is fully built before the walkers
start, after which the per-preset walks only read and can run on a thread
pool without locks.

Example usage:
    Offer every preset for a click::

        from wand_lib.analysis.variations import VariationGenerator

        generator = VariationGenerator(max_workers=4)
        for variation in generator.generate(image, seed):
            print(variation.preset.name, len(variation.path))
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Sequence

from .. import config
from ..domain.geometry import Point
from ..domain.image import PixelImage
from ..domain.options import WandOptions
from ..domain.presets import WAND_PRESETS, WandPreset
from ..domain.results import TraceResult, Variation
from .threshold import luminance
from .wand import PreparedImage, SmartWand

logger = logging.getLogger(__name__)


class VariationGenerator:
    """Runs the smart wand once per preset.

    Attributes:
        presets: Ordered presets to evaluate.
        base_options: Options each preset's overrides are applied to.
        max_workers: Thread pool size; 1 runs the walks inline.
    """

    def __init__(self, presets: Sequence[WandPreset] = WAND_PRESETS,
                 base_options: Optional[WandOptions] = None,
                 max_workers: int = config.VARIATION_MAX_WORKERS):
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.presets = tuple(presets)
        self.base_options = base_options or WandOptions()
        self.max_workers = max_workers

    def generate(self, image: PixelImage, seed: Point) -> List[Variation]:
        """Trace seed under every preset.

        Returns:
            One Variation per preset, in preset order.

        Raises:
            Exception: The first error raised by a preset's run, after all
                submitted runs have finished.
        """
        started = time.perf_counter()
        wands = [SmartWand(preset.options(self.base_options)) for preset in self.presets]
        prepared = self._prepare_shared(image, wands)

        results: Dict[int, TraceResult] = {}
        if self.max_workers == 1 or len(wands) <= 1:
            for i, wand in enumerate(wands):
                results[i] = wand.trace_prepared(prepared[wand.options.mask_key], seed)
        else:
            results = self._run_parallel(wands, prepared, seed)

        variations = [Variation(preset, results[i]) for i, preset in enumerate(self.presets)]
        logger.info("Generated %d variations at (%.1f, %.1f) in %.2f ms (%d found)",
                    len(variations), seed.x, seed.y, (time.perf_counter() - started) * 1000,
                    sum(1 for v in variations if v.result.found))
        return variations

    def _prepare_shared(self, image: PixelImage,
                        wands: Sequence[SmartWand]) -> Dict[tuple, PreparedImage]:
        luma = luminance(image)
        prepared: Dict[tuple, PreparedImage] = {}
        for wand in wands:
            key = wand.options.mask_key
            if key not in prepared:
                prepared[key] = wand.prepare(image, luma=luma)
        logger.debug("Built %d shared field set(s) for %d presets", len(prepared), len(wands))
        return prepared

    def _run_parallel(self, wands: Sequence[SmartWand], prepared: Dict[tuple, PreparedImage],
                      seed: Point) -> Dict[int, TraceResult]:
        results: Dict[int, TraceResult] = {}
        first_error: Optional[BaseException] = None

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                executor.submit(wand.trace_prepared, prepared[wand.options.mask_key], seed): i
                for i, wand in enumerate(wands)
            }
            for future in as_completed(futures):
                i = futures[future]
                try:
                    results[i] = future.result()
                except Exception as e:
                    logger.error("Preset '%s' failed: %s", self.presets[i].id, e)
                    if first_error is None:
                        first_error = e

        if first_error is not None:
            raise first_error
        return results


def generate_wand_variations(image: PixelImage, seed: Point,
                             presets: Sequence[WandPreset] = WAND_PRESETS) -> List[Variation]:
    """Trace seed under each preset with the default worker count."""
    return VariationGenerator(presets).generate(image, seed)
