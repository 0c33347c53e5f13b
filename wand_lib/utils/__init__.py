"""Utility functions for the smart wand.

Geometry utilities:
    simplify_rdp: Ramer-Douglas-Peucker polyline simplification.
    resample_path: Resample a path to a fixed number of points.
    resample_by_step: Resample a path at a fixed spacing.
    point_distance, segment_distance, path_length: Small helpers.

Rendering utilities:
    load_pixel_image, to_pixel_image: Build PixelImage snapshots.
    new_canvas, draw_hline, draw_vline, draw_dashed_hline, draw_polyline:
        Draw synthetic plots.
    render_trace_overlay: Visualize a traced path.

Example usage:
    Simplify and resample::

        from wand_lib.utils import simplify_rdp, resample_path

        simplified = simplify_rdp(points, eps=1.0)
        captured = resample_path(simplified, num_points=20)
"""

from .geometry import (
    path_length,
    point_distance,
    resample_by_step,
    resample_path,
    segment_distance,
    simplify_rdp,
)
from .rendering import (
    draw_dashed_hline,
    draw_hline,
    draw_polyline,
    draw_vline,
    load_pixel_image,
    new_canvas,
    render_trace_overlay,
    to_pixel_image,
)

__all__ = [
    'simplify_rdp', 'resample_path', 'resample_by_step',
    'point_distance', 'segment_distance', 'path_length',
    'load_pixel_image', 'to_pixel_image', 'new_canvas',
    'draw_hline', 'draw_vline', 'draw_dashed_hline', 'draw_polyline',
    'render_trace_overlay',
]
