"""Renderer package for theme-dependent image synthesis."""

from .aligner import align, place, sample
from .compositor import (
    DEFAULT_MODE,
    Compositor,
    DiscreteCompositor,
    SmoothCompositor,
    composite_pixel,
    get_compositor,
    list_compositors,
    solve_alpha_and_t,
)
from .convert import convert, convert_image
from .imaging import decode_bytes, encode_png, load_image, render_preview, save_image, write_previews
from .luminance import FALLBACK_LUMA, image_luma, pixel_luma
from .models import CanvasGeometry, ConversionResult, LumaSummary, Placement

__all__ = [
    "CanvasGeometry",
    "Compositor",
    "ConversionResult",
    "DEFAULT_MODE",
    "DiscreteCompositor",
    "FALLBACK_LUMA",
    "LumaSummary",
    "Placement",
    "SmoothCompositor",
    "align",
    "composite_pixel",
    "convert",
    "convert_image",
    "decode_bytes",
    "encode_png",
    "get_compositor",
    "image_luma",
    "list_compositors",
    "load_image",
    "pixel_luma",
    "place",
    "render_preview",
    "sample",
    "save_image",
    "solve_alpha_and_t",
    "write_previews",
]
