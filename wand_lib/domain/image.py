"""Pixel snapshot taken at trace time.

A PixelImage wraps an RGBA buffer as a read-only numpy array of shape
(height, width, 4). The constructor copies the input once and flags the
copy non-writeable, so every pipeline stage and every preset reads the
same pixels no matter what the caller later does to its own array.

Example usage:
    From a raw canvas buffer::

        from wand_lib.domain.image import PixelImage

        image = PixelImage.from_buffer(buffer, width=640, height=480)
        print(image.shape)  # (480, 640)

    From an existing array::

        image = PixelImage.from_array(np.zeros((100, 200, 3), np.uint8))
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass(frozen=True, eq=False)
class PixelImage:
    """Immutable RGBA pixel snapshot.

    Attributes:
        rgba: uint8 array of shape (height, width, 4), not writeable.
    """
    rgba: np.ndarray

    def __post_init__(self):
        rgba = np.asarray(self.rgba)
        if rgba.ndim != 3 or rgba.shape[2] != 4:
            raise ValueError(f"RGBA array must have shape (H, W, 4), got {rgba.shape}")
        if rgba.shape[0] <= 0 or rgba.shape[1] <= 0:
            raise ValueError("Image dimensions must be positive")
        if rgba.dtype != np.uint8:
            raise ValueError(f"RGBA array must be uint8, got {rgba.dtype}")
        # Private copy; the caller's array stays writeable and unshared
        snapshot = np.array(rgba, dtype=np.uint8, order='C', copy=True)
        snapshot.setflags(write=False)
        object.__setattr__(self, 'rgba', snapshot)

    @property
    def width(self) -> int:
        return int(self.rgba.shape[1])

    @property
    def height(self) -> int:
        return int(self.rgba.shape[0])

    @property
    def shape(self) -> Tuple[int, int]:
        """(height, width), matching the per-pixel field arrays."""
        return (self.height, self.width)

    def contains(self, x: float, y: float) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    @classmethod
    def from_buffer(cls, data, width: int, height: int) -> PixelImage:
        """Create from a flat row-major RGBA byte buffer.

        Args:
            data: bytes, bytearray, memoryview or 1-D uint8 array holding
                width * height * 4 values.
            width: Image width in pixels.
            height: Image height in pixels.

        Raises:
            ValueError: If the dimensions are not positive or the buffer
                length does not match them.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        flat = np.frombuffer(bytes(data), dtype=np.uint8) if not isinstance(data, np.ndarray) \
            else np.asarray(data, dtype=np.uint8).ravel()
        expected = width * height * 4
        if flat.size != expected:
            raise ValueError(
                f"RGBA buffer has {flat.size} values, expected {expected} for {width}x{height}"
            )
        return cls(flat.reshape(height, width, 4))

    @classmethod
    def from_array(cls, array: np.ndarray) -> PixelImage:
        """Create from a grayscale (H, W), RGB (H, W, 3) or RGBA (H, W, 4) array.

        Missing channels are filled in: gray is replicated to RGB and alpha
        defaults to fully opaque.
        """
        arr = np.asarray(array)
        if arr.dtype != np.uint8:
            arr = np.clip(arr, 0, 255).astype(np.uint8)
        if arr.ndim == 2:
            arr = np.stack([arr, arr, arr], axis=-1)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise ValueError(f"Unsupported image array shape {arr.shape}")
        if arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr, alpha], axis=-1)
        return cls(arr)
