"""Image decode/encode and theme previews."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from discriminord_core.colors import Color, Palette
from discriminord_core.errors import ImageDecodeFailure, OutputWriteFailure
from discriminord_core.logging_setup import get_logger

logger = get_logger("imaging")


def _first_frame(image: Image.Image) -> Image.Image:
    if getattr(image, "n_frames", 1) > 1:
        image.seek(0)
    image.load()
    return image


def load_image(path: Path | str) -> Image.Image:
    path = Path(path)
    try:
        with Image.open(path) as opened:
            image = _first_frame(opened).copy()
    except FileNotFoundError as exc:
        raise ImageDecodeFailure(f"Could not open image {path}: file not found") from exc
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        raise ImageDecodeFailure(f"Could not decode image {path}: {exc}") from exc

    logger.info(f"loaded {path} {image.mode} {image.size}", extra={"event": "image_loaded"})
    return image


def decode_bytes(data: bytes) -> Image.Image:
    try:
        with Image.open(BytesIO(data)) as opened:
            return _first_frame(opened).copy()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        raise ImageDecodeFailure(f"Could not decode image data: {exc}") from exc


def save_image(image: Image.Image, path: Path | str) -> Path:
    """Encode by file extension; PNG keeps the alpha channel lossless."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        image.save(path)
    except (OSError, ValueError, KeyError) as exc:
        raise OutputWriteFailure(f"Could not write image {path}: {exc}") from exc

    logger.info(f"saved {path}", extra={"event": "image_saved"})
    return path


def encode_png(image: Image.Image) -> bytes:
    buf = BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def render_preview(image: Image.Image, background: Color) -> Image.Image:
    """What a viewer sees with ``image`` shown on a ``background`` colored theme."""
    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    base = Image.new("RGBA", rgba.size, background.as_tuple() + (255,))
    return Image.alpha_composite(base, rgba).convert("RGB")


def write_previews(image: Image.Image, palette: Palette, out_dir: Path | str, stem: str) -> dict[str, Path]:
    out_dir = Path(out_dir)
    return {
        "dark": save_image(render_preview(image, palette.dark), out_dir / f"{stem}.dark.png"),
        "light": save_image(render_preview(image, palette.light), out_dir / f"{stem}.light.png"),
    }
