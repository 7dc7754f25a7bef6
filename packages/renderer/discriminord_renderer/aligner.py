"""Centering of two differently sized sources on one shared canvas."""

from __future__ import annotations

import numpy as np

from discriminord_core.errors import DimensionMismatch

from .luminance import FALLBACK_LUMA
from .models import CanvasGeometry, Placement


def _check_size(size: tuple[int, int]) -> tuple[int, int]:
    width, height = int(size[0]), int(size[1])
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    return width, height


def _center(canvas_width: int, canvas_height: int, width: int, height: int) -> Placement:
    return Placement(
        x=(canvas_width - width) // 2,
        y=(canvas_height - height) // 2,
        width=width,
        height=height,
    )


def align(dark_size: tuple[int, int], light_size: tuple[int, int], strict: bool = False) -> CanvasGeometry:
    """Canvas covering both sources, each one centered inside it.

    With ``strict`` the sizes must match and ``DimensionMismatch`` is raised
    otherwise.
    """
    dark_w, dark_h = _check_size(dark_size)
    light_w, light_h = _check_size(light_size)
    if strict and (dark_w, dark_h) != (light_w, light_h):
        raise DimensionMismatch((dark_w, dark_h), (light_w, light_h))

    width = max(dark_w, light_w)
    height = max(dark_h, light_h)
    return CanvasGeometry(
        width=width,
        height=height,
        dark=_center(width, height, dark_w, dark_h),
        light=_center(width, height, light_w, light_h),
    )


def sample(luma: np.ndarray, placement: Placement, x: int, y: int) -> float:
    """Luma of a source at canvas coordinate (x, y), or the fallback outside it."""
    if not placement.contains(x, y):
        return FALLBACK_LUMA
    return float(luma[y - placement.y, x - placement.x])


def place(luma: np.ndarray, placement: Placement, geometry: CanvasGeometry) -> np.ndarray:
    """Full-canvas luma plane with the source pasted at its placement."""
    if luma.shape != (placement.height, placement.width):
        raise ValueError("Luma plane does not match its placement size")
    plane = np.full((geometry.height, geometry.width), FALLBACK_LUMA, dtype=np.float32)
    plane[placement.y : placement.y + placement.height, placement.x : placement.x + placement.width] = luma
    return plane
