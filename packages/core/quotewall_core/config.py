"""Persistent app settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from quotewall_renderer import Color, FontWeight, StyleConfig, TextAlignment, get_size, list_sizes

CONFIG_VERSION = 1

IMAGE_SIZES = ("1024x1024", "1024x1792", "1792x1024")
IMAGE_QUALITIES = ("standard", "hd")
IMAGE_STYLES = ("vivid", "natural")


@dataclass
class EditorConfig:
    background_color: str = "#007AFF"
    font_size: float = 24.0
    font_weight: str = "medium"
    alignment: str = "center"
    size: str = "iphone_portrait"
    font_path: str | None = None


@dataclass
class ImageGenerationConfig:
    base_url: str = "https://api.openai.com/v1"
    model: str = "dall-e-3"
    size: str = "1024x1792"
    quality: str = "standard"
    style: str = "vivid"
    timeout_s: int = 60


@dataclass
class QuotesConfig:
    path: str | None = None


@dataclass
class DiagnosticsConfig:
    keep_log_files: int = 7


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    editor: EditorConfig = field(default_factory=EditorConfig)
    image_generation: ImageGenerationConfig = field(default_factory=ImageGenerationConfig)
    quotes: QuotesConfig = field(default_factory=QuotesConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)


def app_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "QuoteWall"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "QuoteWall"
    return Path.home() / ".config" / "quotewall"


def config_path() -> Path:
    return app_root() / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_editor(cfg: AppConfig) -> None:
    editor = cfg.editor
    defaults = EditorConfig()
    try:
        Color.parse(str(editor.background_color))
    except ValueError:
        editor.background_color = defaults.background_color
    try:
        editor.font_size = float(max(8.0, min(200.0, float(editor.font_size))))
    except (TypeError, ValueError):
        editor.font_size = defaults.font_size
    if str(editor.font_weight).upper() not in FontWeight.__members__:
        editor.font_weight = defaults.font_weight
    if editor.alignment not in [a.value for a in TextAlignment]:
        editor.alignment = defaults.alignment
    if editor.size not in list_sizes():
        editor.size = defaults.size


def _normalize_image_generation(cfg: AppConfig) -> None:
    gen = cfg.image_generation
    defaults = ImageGenerationConfig()
    if gen.size not in IMAGE_SIZES:
        gen.size = defaults.size
    if gen.quality not in IMAGE_QUALITIES:
        gen.quality = defaults.quality
    if gen.style not in IMAGE_STYLES:
        gen.style = defaults.style
    try:
        gen.timeout_s = int(max(5, min(300, int(gen.timeout_s))))
    except (TypeError, ValueError):
        gen.timeout_s = defaults.timeout_s


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

    cfg = AppConfig(
        config_version=CONFIG_VERSION,
        editor=_merge(EditorConfig, raw.get("editor", {})),
        image_generation=_merge(ImageGenerationConfig, raw.get("image_generation", {})),
        quotes=_merge(QuotesConfig, raw.get("quotes", {})),
        diagnostics=_merge(DiagnosticsConfig, raw.get("diagnostics", {})),
    )

    _normalize_editor(cfg)
    _normalize_image_generation(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path


def style_from_config(cfg: AppConfig) -> StyleConfig:
    editor = cfg.editor
    return StyleConfig(
        background_color=Color.parse(editor.background_color),
        font_size=float(editor.font_size),
        font_weight=FontWeight.from_name(editor.font_weight),
        alignment=TextAlignment(editor.alignment),
        size=get_size(editor.size),
    )
