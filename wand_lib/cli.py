"""Command-line interface for the smart wand.

Traces the curve under a clicked pixel of a plot image and prints the
resulting points as JSON. Can also run every preset at once, or list the
preset catalog.

Usage:
    plot-wand plot.png 120 64
    plot-wand plot.png 120 64 --preset jumpy --resample 50
    plot-wand plot.png 120 64 --set max_gap=25 --set momentum=0.9
    plot-wand plot.png 120 64 --variations --output variations.json
    plot-wand plot.png 120 64 --overlay trace.png
    plot-wand --list-presets

Or run via the module:
    python -m wand_lib.cli plot.png 120 64
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .api.services import WandService
from .config import configure_logging
from .domain.geometry import TracePath
from .domain.presets import preset_ids
from .utils.rendering import load_pixel_image, render_trace_overlay

logger = logging.getLogger(__name__)


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog='plot-wand',
        description='Trace a plotted curve from a single clicked pixel'
    )
    parser.add_argument('image', nargs='?', type=Path,
                        help='Plot image (PNG, JPEG, ...)')
    parser.add_argument('x', nargs='?', type=float, help='Seed x in pixels')
    parser.add_argument('y', nargs='?', type=float, help='Seed y in pixels')
    parser.add_argument('--preset', '-p', choices=preset_ids(), default=None,
                        help='Preset to trace with (default: balanced options)')
    parser.add_argument('--variations', action='store_true',
                        help='Trace with every preset and print all results')
    parser.add_argument('--set', dest='overrides', action='append', default=[],
                        metavar='KEY=VALUE',
                        help='Override an option, e.g. --set max_gap=25 (repeatable)')
    parser.add_argument('--resample', type=int, default=None, metavar='N',
                        help='Resample the traced path to N evenly spaced points')
    parser.add_argument('--output', '-o', type=Path, default=None,
                        help='Write JSON here instead of stdout')
    parser.add_argument('--overlay', type=Path, default=None,
                        help='Save a PNG with the trace drawn over the image')
    parser.add_argument('--workers', type=int, default=None,
                        help='Worker threads for --variations')
    parser.add_argument('--list-presets', action='store_true',
                        help='Print the preset catalog and exit')
    parser.add_argument('--log-level', default='WARNING', type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Log level (default: WARNING)')
    parser.add_argument('--log-file', default=None,
                        help='Also write logs to this file')
    return parser


def parse_overrides(items: Sequence[str]) -> Dict[str, Any]:
    """Parse KEY=VALUE strings into an overrides mapping.

    Values are read as JSON where possible (numbers, null, booleans) and
    kept as plain strings otherwise.

    Raises:
        ValueError: If an item has no '='.
    """
    overrides: Dict[str, Any] = {}
    for item in items:
        key, sep, raw = item.partition('=')
        if not sep or not key.strip():
            raise ValueError(f"Expected KEY=VALUE, got '{item}'")
        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            value = raw
        overrides[key.strip()] = value
    return overrides


def _emit(payload: Any, output: Optional[Path]) -> None:
    text = json.dumps(payload, indent=2)
    if output:
        output.write_text(text + '\n')
        print(f"Saved to {output}", file=sys.stderr)
    else:
        print(text)


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line interface for the smart wand.

    Returns:
        Process exit code: 0 on success (even when nothing was traced),
        2 on invalid arguments or options.
    """
    parser = _create_argument_parser()
    args = parser.parse_args(argv)
    configure_logging(level=args.log_level, log_file=args.log_file)

    service = WandService() if args.workers is None else WandService(max_workers=args.workers)

    if args.list_presets:
        _emit(service.list_presets(), args.output)
        return 0

    if args.image is None or args.x is None or args.y is None:
        parser.error('image, x and y are required unless --list-presets is given')

    try:
        overrides = parse_overrides(args.overrides)
        image = load_pixel_image(args.image)
        if args.variations:
            payload = service.variations(image, args.x, args.y, overrides=overrides)
        else:
            payload = service.trace(image, args.x, args.y, preset_id=args.preset,
                                    overrides=overrides, num_points=args.resample)
    except (ValueError, FileNotFoundError) as e:
        print(f"plot-wand: error: {e}", file=sys.stderr)
        return 2

    if args.overlay and not args.variations:
        path = TracePath.from_tuples([(p['x'], p['y']) for p in payload['points']])
        render_trace_overlay(image, path).save(args.overlay)
        logger.info("Overlay saved to %s", args.overlay)

    _emit(payload, args.output)
    return 0


if __name__ == '__main__':
    sys.exit(main())
