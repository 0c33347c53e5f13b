"""Path geometry utilities.

This module provides the output-side helpers applied to walked paths:
simplification, arc-length resampling and a few small vector helpers used
by the tests and the CLI.

The module provides the following functions:
    point_distance: Euclidean distance between two (x, y) tuples.
    segment_distance: Distance from a point to a chord segment.
    simplify_rdp: Ramer-Douglas-Peucker polyline simplification.
    resample_path: Resample to a fixed number of evenly spaced points.
    resample_by_step: Resample at a fixed arc-length spacing.
    path_length: Total arc length of a polyline.

Example usage:
    Simplify then resample a walked path::

        from wand_lib.utils.geometry import simplify_rdp, resample_path

        raw = [(0, 0), (1, 0.2), (2, -0.1), (3, 0), (10, 0)]
        simplified = simplify_rdp(raw, eps=1.0)  # [(0, 0), (10, 0)]
        captured = resample_path(simplified, num_points=5)
"""

from __future__ import annotations

import math

import numpy as np


def point_distance_squared(p1: tuple[float, float], p2: tuple[float, float]) -> float:
    """Squared Euclidean distance, for comparisons without the sqrt."""
    dx = p1[0] - p2[0]
    dy = p1[1] - p2[1]
    return dx * dx + dy * dy


def point_distance(p1: tuple[float, float], p2: tuple[float, float]) -> float:
    """Euclidean distance between two points."""
    return point_distance_squared(p1, p2) ** 0.5


def segment_distance_squared(p: tuple[float, float], a: tuple[float, float],
                             b: tuple[float, float]) -> float:
    """Squared distance from p to the segment a-b.

    The projection of p is clamped onto the segment, so the result is never
    smaller than the perpendicular distance to the infinite chord. A
    degenerate segment (a == b) measures the distance to a.
    """
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    len_sq = dx * dx + dy * dy
    if len_sq == 0:
        return point_distance_squared(p, a)
    t = ((p[0] - a[0]) * dx + (p[1] - a[1]) * dy) / len_sq
    t = max(0.0, min(1.0, t))
    proj = (a[0] + t * dx, a[1] + t * dy)
    return point_distance_squared(p, proj)


def segment_distance(p: tuple[float, float], a: tuple[float, float],
                     b: tuple[float, float]) -> float:
    """Distance from p to the segment a-b."""
    return segment_distance_squared(p, a, b) ** 0.5


def simplify_rdp(points: list[tuple[float, float]], eps: float) -> list[tuple[float, float]]:
    """Simplify a polyline with Ramer-Douglas-Peucker.

    For each span the point farthest from the chord is kept and both halves
    are processed again if that distance exceeds eps; otherwise the span
    collapses to its endpoints. Runs with an explicit stack, so long walks
    cannot hit the recursion limit.

    Args:
        points: Ordered (x, y) points.
        eps: Maximum allowed deviation in pixels (>= 0).

    Returns:
        Subsequence of points with the same first and last point. Paths
        with fewer than 3 points are returned as a copy.

    Example:
        >>> simplify_rdp([(0, 0), (5, 0.5), (10, 0)], eps=1.0)
        [(0, 0), (10, 0)]
    """
    if eps < 0:
        raise ValueError(f"eps must be non-negative, got {eps}")
    n = len(points)
    if n < 3:
        return list(points)

    eps_sq = eps * eps
    keep = [False] * n
    keep[0] = keep[-1] = True
    stack = [(0, n - 1)]

    while stack:
        first, last = stack.pop()
        a = points[first]
        b = points[last]
        max_sq = 0.0
        index = -1
        for i in range(first + 1, last):
            d_sq = segment_distance_squared(points[i], a, b)
            if d_sq > max_sq:
                max_sq = d_sq
                index = i
        if index >= 0 and max_sq > eps_sq:
            keep[index] = True
            stack.append((first, index))
            stack.append((index, last))

    return [p for p, k in zip(points, keep) if k]


def path_length(path: list[tuple[float, float]]) -> float:
    """Total arc length of a polyline."""
    total = 0.0
    for i in range(1, len(path)):
        total += point_distance(path[i - 1], path[i])
    return total


def _cumulative_lengths(path: list[tuple[float, float]]) -> np.ndarray:
    pts = np.asarray(path, dtype=np.float64)
    seg = np.hypot(np.diff(pts[:, 0]), np.diff(pts[:, 1]))
    return np.concatenate(([0.0], np.cumsum(seg)))


def _interpolate_at(path: list[tuple[float, float]], arc: np.ndarray,
                    targets: np.ndarray) -> list[tuple[float, float]]:
    pts = np.asarray(path, dtype=np.float64)
    xs = np.interp(targets, arc, pts[:, 0])
    ys = np.interp(targets, arc, pts[:, 1])
    return [(float(x), float(y)) for x, y in zip(xs, ys)]


def resample_path(path: list[tuple[float, float]], num_points: int) -> list[tuple[float, float]]:
    """Resample a path to num_points evenly spaced by arc length.

    Args:
        path: Ordered (x, y) points.
        num_points: Desired number of output points.

    Returns:
        New list that always starts and ends at the original endpoints.
        Returns the input unchanged if it has fewer than 2 points, if
        num_points is less than 2, or if the path has no length.

    Example:
        >>> resample_path([(0, 0), (100, 0), (100, 100)], num_points=5)
        [(0.0, 0.0), (50.0, 0.0), (100.0, 0.0), (100.0, 50.0), (100.0, 100.0)]
    """
    if len(path) < 2 or num_points < 2:
        return path

    arc = _cumulative_lengths(path)
    total = arc[-1]
    if total < 0.001:
        return path

    targets = np.linspace(0.0, total, num_points)
    result = _interpolate_at(path, arc, targets)
    result[0] = (float(path[0][0]), float(path[0][1]))
    result[-1] = (float(path[-1][0]), float(path[-1][1]))
    return result


def resample_by_step(path: list[tuple[float, float]], step: float) -> list[tuple[float, float]]:
    """Resample a path at a fixed arc-length spacing.

    Points are placed every step pixels from the start; the last point of
    the original path is always appended, so the final gap may be shorter.

    Args:
        path: Ordered (x, y) points.
        step: Spacing in pixels (> 0).

    Returns:
        New list of points, or the input unchanged if it has fewer than
        2 points or no length.
    """
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    if len(path) < 2:
        return path

    arc = _cumulative_lengths(path)
    total = arc[-1]
    if total < 0.001:
        return path

    count = int(math.floor(total / step + 1e-9))
    targets = np.arange(count + 1, dtype=np.float64) * step
    result = _interpolate_at(path, arc, targets)
    end = (float(path[-1][0]), float(path[-1][1]))
    if point_distance(result[-1], end) > 1e-9:
        result.append(end)
    else:
        result[-1] = end
    return result
