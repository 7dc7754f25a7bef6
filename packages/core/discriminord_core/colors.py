"""Theme background colors and their #rrggbb text form."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import InvalidColorFormat

_HEX_RE = re.compile(r"#([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})")
_FORMAT_MESSAGE = "Invalid format for color, expected #rrggbb"

DEFAULT_DARK_BACKGROUND = "#36393f"
DEFAULT_LIGHT_BACKGROUND = "#ffffff"


@dataclass(frozen=True)
class Color:
    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for value in (self.red, self.green, self.blue):
            if not 0 <= int(value) <= 255:
                raise ValueError("Color channels must be in 0..255")

    @classmethod
    def parse(cls, text: str) -> "Color":
        match = _HEX_RE.fullmatch(text) if isinstance(text, str) else None
        if match is None:
            raise InvalidColorFormat(_FORMAT_MESSAGE)
        r, g, b = (int(part, 16) for part in match.groups())
        return cls(r, g, b)

    def to_hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.red, self.green, self.blue)

    def __str__(self) -> str:
        return self.to_hex()


@dataclass(frozen=True)
class Palette:
    """Dark and light theme backgrounds handed to the compositor."""

    dark: Color
    light: Color

    @classmethod
    def from_hex(cls, dark: str, light: str) -> "Palette":
        return cls(dark=Color.parse(dark), light=Color.parse(light))


DEFAULT_PALETTE = Palette.from_hex(DEFAULT_DARK_BACKGROUND, DEFAULT_LIGHT_BACKGROUND)


def is_valid_color(text: str) -> bool:
    try:
        Color.parse(text)
    except InvalidColorFormat:
        return False
    return True
