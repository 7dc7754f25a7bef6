"""Error types surfaced to callers of the conversion pipeline."""

from __future__ import annotations


class DiscriminordError(Exception):
    """Base for every failure the CLI reports as a clean error message."""


class InvalidColorFormat(DiscriminordError, ValueError):
    pass


class ImageDecodeFailure(DiscriminordError, OSError):
    pass


class DimensionMismatch(DiscriminordError, ValueError):
    def __init__(self, dark_size: tuple[int, int], light_size: tuple[int, int]) -> None:
        self.dark_size = dark_size
        self.light_size = light_size
        super().__init__(
            f"Image sizes differ: dark is {dark_size[0]}x{dark_size[1]}, "
            f"light is {light_size[0]}x{light_size[1]}"
        )


class OutputWriteFailure(DiscriminordError, OSError):
    pass
