"""Image loading and synthetic plot rendering.

This module converts image files into PixelImage snapshots and draws the
simple plots used for demos and tests: solid and dashed strokes on a paper
background, and trace overlays for inspecting results.

The module provides the following functions:
    load_pixel_image: Read an image file into a PixelImage.
    to_pixel_image: Snapshot a Pillow image as a PixelImage.
    new_canvas: Create a blank RGBA canvas.
    draw_hline / draw_vline: Axis-aligned strokes with exact pixel extents.
    draw_dashed_hline: Horizontal dashed stroke with fixed dash and gap.
    draw_polyline: Arbitrary polyline stroke.
    render_trace_overlay: Draw a traced path on top of the source image.

Example usage:
    Render a dashed plot and trace it::

        from wand_lib.utils.rendering import new_canvas, draw_dashed_hline, to_pixel_image

        canvas = new_canvas(200, 100)
        draw_dashed_hline(canvas, 10, 190, 50, dash=20, gap=8)
        image = to_pixel_image(canvas)
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, Tuple, Union

import numpy as np
from PIL import Image, ImageDraw

from ..domain.geometry import TracePath
from ..domain.image import PixelImage

Color = Tuple[int, int, int, int]

WHITE: Color = (255, 255, 255, 255)
BLACK: Color = (0, 0, 0, 255)
TRACE_COLOR: Color = (255, 80, 80, 255)


def to_pixel_image(img: Image.Image) -> PixelImage:
    """Snapshot a Pillow image (any mode) as a PixelImage."""
    return PixelImage(np.array(img.convert('RGBA'), dtype=np.uint8))


def load_pixel_image(path: Union[str, Path]) -> PixelImage:
    """Read an image file into a PixelImage.

    Raises:
        FileNotFoundError: If the file does not exist.
        PIL.UnidentifiedImageError: If the file is not a readable image.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Could not load image from: {path}")
    with Image.open(path) as img:
        return to_pixel_image(img)


def new_canvas(width: int, height: int, background: Color = WHITE) -> Image.Image:
    """Create a blank RGBA canvas."""
    return Image.new('RGBA', (width, height), background)


def draw_hline(canvas: Image.Image, x0: int, x1: int, y: int,
               thickness: int = 3, color: Color = BLACK) -> None:
    """Horizontal stroke covering columns x0..x1 and thickness rows centred on y."""
    top = y - (thickness - 1) // 2
    ImageDraw.Draw(canvas).rectangle([x0, top, x1, top + thickness - 1], fill=color)


def draw_vline(canvas: Image.Image, x: int, y0: int, y1: int,
               thickness: int = 3, color: Color = BLACK) -> None:
    """Vertical stroke covering rows y0..y1 and thickness columns centred on x."""
    left = x - (thickness - 1) // 2
    ImageDraw.Draw(canvas).rectangle([left, y0, left + thickness - 1, y1], fill=color)


def draw_dashed_hline(canvas: Image.Image, x0: int, x1: int, y: int, dash: int, gap: int,
                      thickness: int = 3, color: Color = BLACK) -> None:
    """Horizontal dashed stroke: dash pixels on, gap pixels off, from x0 to x1."""
    if dash <= 0 or gap < 0:
        raise ValueError("dash must be positive and gap non-negative")
    x = x0
    while x <= x1:
        draw_hline(canvas, x, min(x + dash - 1, x1), y, thickness, color)
        x += dash + gap


def draw_polyline(canvas: Image.Image, points: Sequence[Tuple[float, float]],
                  width: int = 3, color: Color = BLACK) -> None:
    """Stroke an arbitrary polyline with rounded joints."""
    if len(points) < 2:
        return
    ImageDraw.Draw(canvas).line([tuple(p) for p in points], fill=color, width=width, joint='curve')


def render_trace_overlay(image: PixelImage, path: TracePath, color: Color = TRACE_COLOR,
                         width: int = 2, marker_radius: int = 2) -> Image.Image:
    """Draw a traced path and its vertices on top of the source image."""
    canvas = Image.fromarray(np.array(image.rgba))
    draw = ImageDraw.Draw(canvas)
    points = path.to_tuples()
    if len(points) >= 2:
        draw.line(points, fill=color, width=width, joint='curve')
    for x, y in points:
        draw.ellipse([x - marker_radius, y - marker_radius, x + marker_radius, y + marker_radius],
                     outline=color)
    return canvas
