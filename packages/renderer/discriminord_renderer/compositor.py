"""Per-pixel solvers that turn two luma samples into one RGBA pixel.

A pixel ``(c, a)`` composited over a background ``bg`` is perceived as
``a * luma(c) + (1 - a) * luma(bg)``. Treating the dark background as luma 0
and the light background as luma 1, and placing ``c`` on the straight line
between the two theme colors at position ``t``, the two theme equations give

    alpha = (dark - light + 1) / 2
    t     = dark / 2 / alpha

The real theme colors only enter when ``t`` is turned back into a color.
All math is float32 and every float to 8-bit conversion truncates.
"""

from __future__ import annotations

import numpy as np

from discriminord_core.colors import Color, Palette

from .models import LumaSummary

_ZERO = np.float32(0.0)
_ONE = np.float32(1.0)
_TWO = np.float32(2.0)
_SCALE = np.float32(255.0)

HALF_ALPHA = int(0.5 * 255)
OPAQUE = 255


def _channels(color: Color) -> np.ndarray:
    return np.asarray(color.as_tuple(), dtype=np.float32)


def _to_u8(values: np.ndarray) -> np.ndarray:
    return np.clip(values, _ZERO, _SCALE).astype(np.uint8)


def _solve(dark: np.ndarray, light: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    alpha = np.clip((dark - light + _ONE) / _TWO, _ZERO, _ONE)
    transparent = alpha == _ZERO
    safe_alpha = np.where(transparent, _ONE, alpha)
    t = np.where(transparent, _ZERO, np.clip(dark / _TWO / safe_alpha, _ZERO, _ONE))
    return alpha.astype(np.float32), t.astype(np.float32)


def solve_alpha_and_t(dark_luma: float, light_luma: float) -> tuple[float, float]:
    """Scalar form of the smooth solver: output alpha and gradient position."""
    alpha, t = _solve(np.float32(dark_luma), np.float32(light_luma))
    return float(alpha), float(t)


class Compositor:
    """Strategy interface: whole-image summary pass, then per-pixel composite."""

    name = ""

    def summarize(self, luma: np.ndarray) -> LumaSummary:
        height, width = luma.shape
        return LumaSummary(mean=float(np.mean(luma, dtype=np.float64)), width=width, height=height)

    def composite(
        self,
        dark: np.ndarray,
        light: np.ndarray,
        palette: Palette,
        dark_summary: LumaSummary | None = None,
        light_summary: LumaSummary | None = None,
    ) -> np.ndarray:
        raise NotImplementedError


class SmoothCompositor(Compositor):
    """Alpha and color solved from the two samples; produces a smooth gradient."""

    name = "smooth"

    def composite(self, dark, light, palette, dark_summary=None, light_summary=None):
        dark = np.asarray(dark, dtype=np.float32)
        light = np.asarray(light, dtype=np.float32)
        if dark.shape != light.shape:
            raise ValueError("Luma planes must have the same shape")

        alpha, t = _solve(dark, light)
        t = t[..., np.newaxis]
        rgb = _channels(palette.dark) * (_ONE - t) + _channels(palette.light) * t

        out = np.empty(dark.shape + (4,), dtype=np.uint8)
        out[..., :3] = _to_u8(rgb)
        out[..., 3] = _to_u8(alpha * _SCALE)
        return out


class DiscreteCompositor(Compositor):
    """Four-color posterization around each image's own mean luma."""

    name = "discrete"

    @staticmethod
    def lookup_table(palette: Palette) -> np.ndarray:
        """RGBA outputs indexed by ``[dark_above, light_above]``."""
        dark = palette.dark.as_tuple()
        light = palette.light.as_tuple()
        average = tuple((d + l) // 2 for d, l in zip(dark, light))

        table = np.zeros((2, 2, 4), dtype=np.uint8)
        table[0, 0] = dark + (HALF_ALPHA,)
        table[1, 1] = light + (HALF_ALPHA,)
        table[0, 1] = (0, 0, 0, 0)
        table[1, 0] = average + (OPAQUE,)
        return table

    def composite(self, dark, light, palette, dark_summary=None, light_summary=None):
        if dark_summary is None or light_summary is None:
            raise ValueError("Discrete compositing needs both image summaries")
        dark = np.asarray(dark, dtype=np.float32)
        light = np.asarray(light, dtype=np.float32)
        if dark.shape != light.shape:
            raise ValueError("Luma planes must have the same shape")

        dark_above = (dark > np.float32(dark_summary.mean)).astype(np.intp)
        light_above = (light > np.float32(light_summary.mean)).astype(np.intp)
        return self.lookup_table(palette)[dark_above, light_above]


_COMPOSITORS: dict[str, Compositor] = {
    SmoothCompositor.name: SmoothCompositor(),
    DiscreteCompositor.name: DiscreteCompositor(),
}

DEFAULT_MODE = SmoothCompositor.name


def list_compositors() -> list[str]:
    return sorted(_COMPOSITORS.keys())


def get_compositor(name: str | None = None) -> Compositor:
    if not name:
        return _COMPOSITORS[DEFAULT_MODE]
    try:
        return _COMPOSITORS[name]
    except KeyError:
        raise ValueError(f"Unknown compositing mode: {name}") from None


def composite_pixel(
    dark_luma: float,
    light_luma: float,
    palette: Palette,
    mode: str = DEFAULT_MODE,
    dark_summary: LumaSummary | None = None,
    light_summary: LumaSummary | None = None,
) -> tuple[int, int, int, int]:
    compositor = get_compositor(mode)
    dark = np.full((1, 1), dark_luma, dtype=np.float32)
    light = np.full((1, 1), light_luma, dtype=np.float32)
    r, g, b, a = compositor.composite(dark, light, palette, dark_summary, light_summary)[0, 0]
    return (int(r), int(g), int(b), int(a))
