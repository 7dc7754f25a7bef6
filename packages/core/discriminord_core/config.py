"""Persistent converter settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from .colors import DEFAULT_DARK_BACKGROUND, DEFAULT_LIGHT_BACKGROUND, Palette, is_valid_color


CONFIG_VERSION = 2
CONFIG_ENV = "DISCRIMINORD_CONFIG"

MODES = ("smooth", "discrete")
ALIGN_MODES = ("center", "strict")
MAX_WORKERS = 64


@dataclass
class ThemeConfig:
    dark_background: str = DEFAULT_DARK_BACKGROUND
    light_background: str = DEFAULT_LIGHT_BACKGROUND


@dataclass
class RenderConfig:
    mode: str = "smooth"
    align: str = "center"
    workers: int = 1


@dataclass
class LoggingConfig:
    keep_files: int = 7
    level: str = "INFO"


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    theme: ThemeConfig = field(default_factory=ThemeConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def palette(self) -> Palette:
        return Palette.from_hex(self.theme.dark_background, self.theme.light_background)


DEFAULT_CONFIG = AppConfig()


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "Discriminord"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "Discriminord"
    return Path.home() / ".config" / "discriminord"


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV)
    if override:
        return Path(override).expanduser()
    return config_root() / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_theme(cfg: AppConfig) -> None:
    if not is_valid_color(cfg.theme.dark_background):
        cfg.theme.dark_background = DEFAULT_DARK_BACKGROUND
    if not is_valid_color(cfg.theme.light_background):
        cfg.theme.light_background = DEFAULT_LIGHT_BACKGROUND
    cfg.theme.dark_background = cfg.theme.dark_background.lower()
    cfg.theme.light_background = cfg.theme.light_background.lower()


def _normalize_render(cfg: AppConfig) -> None:
    if cfg.render.mode not in MODES:
        cfg.render.mode = "smooth"
    if cfg.render.align not in ALIGN_MODES:
        cfg.render.align = "center"
    try:
        workers = int(cfg.render.workers)
    except (TypeError, ValueError):
        workers = 1
    cfg.render.workers = max(1, min(MAX_WORKERS, workers))


def _normalize_logging(cfg: AppConfig) -> None:
    try:
        cfg.logging.keep_files = max(2, int(cfg.logging.keep_files))
    except (TypeError, ValueError):
        cfg.logging.keep_files = 7
    level = str(cfg.logging.level).upper()
    cfg.logging.level = level if level in ("DEBUG", "INFO", "WARNING", "ERROR") else "INFO"


def _migrate(raw: dict[str, Any]) -> dict[str, Any]:
    version = int(raw.get("config_version", 1))
    data = dict(raw)

    if version < 2:
        # v1 kept the two colors at the top level.
        theme = dict(data.get("theme", {}) or {})
        if "dark_color" in data:
            theme.setdefault("dark_background", data.pop("dark_color"))
        if "light_color" in data:
            theme.setdefault("light_background", data.pop("light_color"))
        data["theme"] = theme
        data.setdefault("render", {})
        data.setdefault("logging", {})
        data["config_version"] = 2

    return data


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()

    data = _migrate(raw)
    cfg = AppConfig(
        config_version=int(data.get("config_version", CONFIG_VERSION)),
        theme=_merge(ThemeConfig, data.get("theme", {})),
        render=_merge(RenderConfig, data.get("render", {})),
        logging=_merge(LoggingConfig, data.get("logging", {})),
    )

    _normalize_theme(cfg)
    _normalize_render(cfg)
    _normalize_logging(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
