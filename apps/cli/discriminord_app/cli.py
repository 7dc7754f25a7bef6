"""CLI entrypoint: build one image that looks different on dark and light themes."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from discriminord_core import AppConfig, DiscriminordError, load_config, save_config
from discriminord_core.config import MAX_WORKERS, MODES
from discriminord_core.logging_setup import configure_logging, get_logger
from discriminord_renderer import convert, load_image, save_image, write_previews

logger = get_logger("cli")


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _worker_count(value: str) -> int:
    try:
        count = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if not 1 <= count <= MAX_WORKERS:
        raise argparse.ArgumentTypeError(f"workers must be between 1 and {MAX_WORKERS}")
    return count


def apply_overrides(cfg: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Fold command line flags over the stored settings and validate colors."""
    if args.dark_background is not None:
        cfg.theme.dark_background = args.dark_background
    if args.light_background is not None:
        cfg.theme.light_background = args.light_background
    if args.mode is not None:
        cfg.render.mode = args.mode
    if args.strict_size:
        cfg.render.align = "strict"
    if args.workers is not None:
        cfg.render.workers = args.workers

    palette = cfg.palette()
    cfg.theme.dark_background = palette.dark.to_hex()
    cfg.theme.light_background = palette.light.to_hex()
    return cfg


def cmd_convert(args: argparse.Namespace, cfg: AppConfig, config_file: Path | None = None) -> int:
    cfg = apply_overrides(cfg, args)
    palette = cfg.palette()

    dark_image = load_image(args.dark_file)
    light_image = load_image(args.light_file)
    result = convert(
        dark_image,
        light_image,
        palette=palette,
        mode=cfg.render.mode,
        strict=cfg.render.align == "strict",
        workers=cfg.render.workers,
    )
    output = save_image(result.image, args.output_file)

    payload: dict[str, object] = {
        "output": str(output),
        "width": result.geometry.width,
        "height": result.geometry.height,
        "mode": result.mode,
        "dark_background": palette.dark.to_hex(),
        "light_background": palette.light.to_hex(),
    }
    if args.preview_dir:
        previews = write_previews(result.image, palette, args.preview_dir, Path(args.output_file).stem)
        payload["previews"] = {k: str(v) for k, v in previews.items()}
    # Settings are stored only once every output file is written.
    if args.save_config:
        saved = save_config(cfg, config_file)
        logger.info(f"saved settings to {saved}", extra={"event": "config_saved"})

    if not args.quiet:
        _print_json(payload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="discriminord",
        description="Create images that look different in dark and light themes.",
    )
    parser.add_argument(
        "-d",
        "--dark-background",
        default=None,
        metavar="#rrggbb",
        help="Background color of dark mode (default: settings file, then #36393f)",
    )
    parser.add_argument(
        "-l",
        "--light-background",
        default=None,
        metavar="#rrggbb",
        help="Background color of light mode (default: settings file, then #ffffff)",
    )
    parser.add_argument("--mode", choices=list(MODES), default=None, help="Compositing strategy")
    parser.add_argument(
        "--strict-size",
        action="store_true",
        help="Fail when image sizes differ instead of centering them",
    )
    parser.add_argument("--workers", type=_worker_count, default=None, help="Row bands rendered concurrently")
    parser.add_argument("--preview-dir", default=None, help="Also write the output composited on each background")
    parser.add_argument("--config", default=None, help="Settings file path override")
    parser.add_argument("--save-config", action="store_true", help="Store the effective settings")
    parser.add_argument("-q", "--quiet", action="store_true", help="Do not print the JSON summary")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log to stderr at debug level")
    parser.add_argument("dark_file", metavar="DARK_FILE", help="The image to be displayed in dark mode")
    parser.add_argument("light_file", metavar="LIGHT_FILE", help="The image to be displayed in light mode")
    parser.add_argument("output_file", metavar="OUT_FILE", help="Where to write the output")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config_file = Path(args.config).expanduser() if args.config else None
    cfg = load_config(config_file)
    configure_logging(
        keep_files=cfg.logging.keep_files,
        console=args.verbose,
        level="DEBUG" if args.verbose else cfg.logging.level,
    )

    try:
        return int(cmd_convert(args, cfg, config_file))
    except DiscriminordError as exc:
        logger.error(f"conversion failed: {exc}", extra={"event": "conversion_failed"})
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
