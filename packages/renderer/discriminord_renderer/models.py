"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image


@dataclass(frozen=True)
class Placement:
    x: int
    y: int
    width: int
    height: int

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


@dataclass(frozen=True)
class CanvasGeometry:
    width: int
    height: int
    dark: Placement
    light: Placement

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)


@dataclass(frozen=True)
class LumaSummary:
    """Whole-image aggregate a strategy needs before any pixel is emitted."""

    mean: float
    width: int
    height: int


@dataclass(frozen=True)
class ConversionResult:
    image: Image.Image
    geometry: CanvasGeometry
    mode: str
    dark_summary: LumaSummary
    light_summary: LumaSummary
