"""Dark/light image pair to single theme-dependent RGBA image."""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor

import numpy as np
from PIL import Image

from discriminord_core.colors import DEFAULT_PALETTE, Palette
from discriminord_core.logging_setup import get_logger

from .aligner import align, place
from .compositor import DEFAULT_MODE, get_compositor
from .luminance import image_luma
from .models import ConversionResult

logger = get_logger("convert")

MIN_BAND_ROWS = 16


def _bands(height: int, workers: int) -> list[tuple[int, int]]:
    count = max(1, min(workers, height // MIN_BAND_ROWS or 1))
    step = -(-height // count)
    return [(top, min(height, top + step)) for top in range(0, height, step)]


def convert(
    dark_image: Image.Image,
    light_image: Image.Image,
    palette: Palette = DEFAULT_PALETTE,
    mode: str = DEFAULT_MODE,
    strict: bool = False,
    workers: int = 1,
) -> ConversionResult:
    """Build the output image for a dark/light pair.

    Sources of different sizes are centered on a canvas covering both, and
    canvas pixels a source does not reach read as luma 1.0. Rows are split
    into disjoint bands when ``workers`` is above one.
    """
    compositor = get_compositor(mode)
    geometry = align(dark_image.size, light_image.size, strict=strict)
    start = time.perf_counter()
    logger.info(
        f"converting {dark_image.size} + {light_image.size} -> {geometry.size} mode={compositor.name}",
        extra={"event": "conversion_started"},
    )

    dark_luma = image_luma(dark_image)
    light_luma = image_luma(light_image)
    # Summaries cover each source's own pixels and must exist before any pixel is emitted.
    dark_summary = compositor.summarize(dark_luma)
    light_summary = compositor.summarize(light_luma)

    dark_plane = place(dark_luma, geometry.dark, geometry)
    light_plane = place(light_luma, geometry.light, geometry)
    output = np.empty((geometry.height, geometry.width, 4), dtype=np.uint8)

    def _render_band(band: tuple[int, int]) -> None:
        top, bottom = band
        output[top:bottom] = compositor.composite(
            dark_plane[top:bottom],
            light_plane[top:bottom],
            palette,
            dark_summary,
            light_summary,
        )

    bands = _bands(geometry.height, max(1, int(workers)))
    if len(bands) == 1:
        _render_band(bands[0])
    else:
        with ThreadPoolExecutor(max_workers=len(bands), thread_name_prefix="discriminord-band") as pool:
            list(pool.map(_render_band, bands))

    elapsed = time.perf_counter() - start
    logger.info(
        f"converted {geometry.width}x{geometry.height} in {elapsed:.3f}s bands={len(bands)}",
        extra={"event": "conversion_finished"},
    )
    return ConversionResult(
        image=Image.fromarray(output),
        geometry=geometry,
        mode=compositor.name,
        dark_summary=dark_summary,
        light_summary=light_summary,
    )


def convert_image(
    dark_image: Image.Image,
    light_image: Image.Image,
    palette: Palette = DEFAULT_PALETTE,
    mode: str = DEFAULT_MODE,
) -> Image.Image:
    return convert(dark_image, light_image, palette=palette, mode=mode).image
