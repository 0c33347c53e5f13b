"""Smart Wand Package.

Interactive line tracing for plot digitizing: from a single clicked pixel
on a rendered curve, recover an ordered polyline along that curve's
centreline through noise, anti-aliasing, dashes and crossings, without
knowing the curve's colour or shape in advance.

Architecture Overview:
    Every stage is a pure function over a read-only pixel snapshot:

    - luminance and adaptive thresholding produce an ink mask
    - small 8-connected components are removed
    - a chamfer distance field estimates stroke half-width per pixel
    - the ridge walker follows the field's ridge in both directions from
      the seed, with momentum and bounded gap bridging
    - Ramer-Douglas-Peucker simplification reduces the walked path

The package is organized into the following modules:
    domain: Value objects (Point, TracePath, PixelImage, WandOptions,
        WandPreset, TraceResult, Variation) and the preset catalog.
    analysis: Pipeline stages plus the SmartWand and VariationGenerator
        facades.
    utils: Path geometry (simplification, resampling) and image loading
        and rendering.
    api: WandService, the JSON-friendly entry point.
    config: Defaults, engine constants and logging setup.
    cli: The plot-wand command.

Example usage:
    Trace a click::

        from wand_lib import SmartWand, Point
        from wand_lib.utils import load_pixel_image

        image = load_pixel_image('plot.png')
        result = SmartWand().trace(image, Point(120, 64))
        print(result.path.to_tuples())

    Compare presets::

        from wand_lib.api import WandService

        for v in WandService().variations(image, 120, 64):
            print(v['preset']['name'], len(v['points']))

Attributes:
    __version__ (str): Package version string.
    __all__ (list): List of public symbols exported by this package.
"""

from .analysis import SmartWand, VariationGenerator, generate_wand_variations, smart_wand_trace
from .api import WandService
from .domain import (
    WAND_PRESETS,
    PixelImage,
    Point,
    TracePath,
    TraceResult,
    Variation,
    WandOptions,
    WandPreset,
    get_preset,
)

__all__ = [
    # Domain objects
    'Point', 'TracePath', 'PixelImage', 'WandOptions', 'WandPreset',
    'TraceResult', 'Variation', 'WAND_PRESETS', 'get_preset',
    # Pipeline
    'SmartWand', 'VariationGenerator', 'smart_wand_trace', 'generate_wand_variations',
    # Services
    'WandService',
]

__version__ = '1.0.0'
