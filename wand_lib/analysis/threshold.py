"""Luminance sampling and adaptive binarization.

Converts the RGBA snapshot into a single intensity channel, then marks each
pixel as ink when it is strictly darker than a fraction of the mean of its
local window. Window means come from an integral image so each lookup is
O(1) regardless of window size.

Windows at the image border are clipped to the image and averaged over the
pixels they actually cover, so a faint background gradient or a scan
shadow near the edge does not turn into ink.

Example usage:
    Binarize a snapshot::

        from wand_lib.analysis.threshold import luminance, adaptive_threshold

        luma = luminance(image)
        mask = adaptive_threshold(luma, window=15, bias=0.9)
        print(f"{mask.sum()} ink pixels")
"""

from __future__ import annotations

import logging

import numpy as np

from .. import config
from ..domain.image import PixelImage

logger = logging.getLogger(__name__)


def luminance(image: PixelImage) -> np.ndarray:
    """Compute per-pixel luminance of an RGBA snapshot.

    Translucent pixels are composited over a white background first, so
    a transparent canvas reads as blank paper rather than black.

    Args:
        image: The pixel snapshot.

    Returns:
        float64 array of shape (height, width) with values in [0, 255].
    """
    rgba = image.rgba.astype(np.float64)
    rgb = rgba[..., :3]
    alpha = rgba[..., 3:] / 255.0
    composited = rgb * alpha + 255.0 * (1.0 - alpha)
    wr, wg, wb = config.LUMA_WEIGHTS
    return wr * composited[..., 0] + wg * composited[..., 1] + wb * composited[..., 2]


def integral_image(values: np.ndarray) -> np.ndarray:
    """Build a zero-padded 2-D prefix sum.

    The result has shape (H + 1, W + 1) and entry [y, x] holds the sum of
    values[:y, :x], so any rectangle sum needs four lookups.
    """
    h, w = values.shape
    integral = np.zeros((h + 1, w + 1), dtype=np.float64)
    integral[1:, 1:] = values.cumsum(axis=0).cumsum(axis=1)
    return integral


def local_mean(values: np.ndarray, window: int) -> np.ndarray:
    """Mean over a window x window box centred on every pixel.

    Boxes are clipped to the image bounds; the divisor is the number of
    pixels actually covered, which is always at least one.
    """
    h, w = values.shape
    half = window // 2
    integral = integral_image(values)

    ys = np.arange(h)
    xs = np.arange(w)
    y0 = np.clip(ys - half, 0, h)[:, None]
    y1 = np.clip(ys + half + 1, 0, h)[:, None]
    x0 = np.clip(xs - half, 0, w)[None, :]
    x1 = np.clip(xs + half + 1, 0, w)[None, :]

    sums = integral[y1, x1] - integral[y0, x1] - integral[y1, x0] + integral[y0, x0]
    counts = (y1 - y0) * (x1 - x0)
    return sums / counts


def adaptive_threshold(luma: np.ndarray, window: int, bias: float) -> np.ndarray:
    """Classify pixels as ink using a locally computed threshold.

    Args:
        luma: Intensity field from luminance().
        window: Odd, positive side length of the local window.
        bias: Fraction of the local mean a pixel must fall below, in (0, 1].

    Returns:
        Boolean mask of the same shape, True for ink. An all-light or
        all-dark image yields an empty mask.

    Raises:
        ValueError: If window is not a positive odd integer or bias is
            outside (0, 1].
    """
    if window <= 0 or window % 2 == 0:
        raise ValueError(f"Threshold window must be a positive odd integer, got {window}")
    if not 0 < bias <= 1:
        raise ValueError(f"Threshold bias must be in (0, 1], got {bias}")

    mask = luma < local_mean(luma, window) * bias
    logger.debug("Adaptive threshold (window=%d, bias=%.2f): %d ink pixels",
                 window, bias, int(mask.sum()))
    return mask


def binarize(image: PixelImage, window: int, bias: float) -> np.ndarray:
    """Luminance followed by adaptive thresholding."""
    return adaptive_threshold(luminance(image), window, bias)
