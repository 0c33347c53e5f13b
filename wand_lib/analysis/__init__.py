"""Pipeline stages of the smart wand.

This module provides the image analysis stages and the facades that chain
them for a single click.

Stages:
    luminance / adaptive_threshold: Intensity field and local-mean ink mask.
    remove_small_components: 8-connected despeckling.
    build_distance_field: Two-pass chamfer distance field.
    RidgeWalker: Bidirectional ridge walking with momentum and gap bridging.

Facades:
    SmartWand: Full pipeline for one set of options.
    VariationGenerator: One SmartWand run per preset over shared fields.

Example usage:
    Trace a click::

        from wand_lib.analysis import SmartWand

        result = SmartWand(overrides={'max_gap': 30}).trace(image, seed)
"""

from .components import remove_small_components
from .distance import DistanceField, build_distance_field, chamfer_distance
from .ridge_walker import RidgeWalker, Termination, WalkResult
from .threshold import adaptive_threshold, binarize, luminance
from .variations import VariationGenerator, generate_wand_variations
from .wand import PreparedImage, SmartWand, smart_wand_trace

__all__ = [
    'luminance', 'adaptive_threshold', 'binarize',
    'remove_small_components',
    'DistanceField', 'build_distance_field', 'chamfer_distance',
    'RidgeWalker', 'Termination', 'WalkResult',
    'SmartWand', 'PreparedImage', 'smart_wand_trace',
    'VariationGenerator', 'generate_wand_variations',
]
