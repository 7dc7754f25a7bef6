"""Core services for colors, settings, errors, and logging."""

from .colors import DEFAULT_PALETTE, Color, Palette
from .config import AppConfig, load_config, save_config
from .errors import (
    DimensionMismatch,
    DiscriminordError,
    ImageDecodeFailure,
    InvalidColorFormat,
    OutputWriteFailure,
)

__all__ = [
    "AppConfig",
    "Color",
    "DEFAULT_PALETTE",
    "DimensionMismatch",
    "DiscriminordError",
    "ImageDecodeFailure",
    "InvalidColorFormat",
    "OutputWriteFailure",
    "Palette",
    "load_config",
    "save_config",
]
