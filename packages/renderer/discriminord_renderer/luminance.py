"""Grayscale intensity extraction for pixels of any channel layout."""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np
from PIL import Image

FALLBACK_LUMA = 1.0

Pixel = Union[int, float, Sequence[int]]

# Rec. 709 weights scaled to integers; the sum is 10000.
LUMA_WEIGHTS = (2126, 7152, 722)

_GRAY_MODES = ("1", "L", "LA")
_WIDE_MODES = ("I", "I;16", "I;16L", "I;16B", "I;16N")
_WIDE_MAX = np.float32(65535.0)


def luma8(r: int, g: int, b: int) -> int:
    wr, wg, wb = LUMA_WEIGHTS
    return (wr * r + wg * g + wb * b) // 10000


def _clamp8(value: float) -> int:
    return max(0, min(255, int(value)))


def pixel_luma(pixel: Pixel) -> float:
    """Return the normalized intensity of one pixel.

    Accepts a bare grayscale value or a tuple in L, LA, RGB or RGBA layout.
    Alpha channels are ignored.
    """
    if isinstance(pixel, (int, float)):
        return _clamp8(pixel) / 255.0

    channels = tuple(pixel)
    if len(channels) in (1, 2):
        return _clamp8(channels[0]) / 255.0
    if len(channels) in (3, 4):
        r, g, b = (_clamp8(c) for c in channels[:3])
        return luma8(r, g, b) / 255.0
    raise ValueError(f"Unsupported pixel layout with {len(channels)} channels")


def image_luma(image: Image.Image) -> np.ndarray:
    """Luma plane of a whole image, shape (height, width), float32 in [0, 1].

    16-bit and 32-bit integer grayscale is scaled from the 16-bit range, float
    grayscale is taken as already normalized.
    """
    if image.mode in _WIDE_MODES:
        wide = np.asarray(image, dtype=np.float32)
        return np.clip(wide / _WIDE_MAX, 0.0, 1.0).astype(np.float32)
    if image.mode == "F":
        return np.clip(np.asarray(image, dtype=np.float32), 0.0, 1.0).astype(np.float32)

    if image.mode in _GRAY_MODES:
        gray = np.asarray(image.convert("L"), dtype=np.uint32)
    else:
        rgb = np.asarray(image.convert("RGB"), dtype=np.uint32)
        wr, wg, wb = LUMA_WEIGHTS
        gray = (wr * rgb[..., 0] + wg * rgb[..., 1] + wb * rgb[..., 2]) // 10000
    return gray.astype(np.float32) / np.float32(255.0)
