import json
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "quotes"))

from quotewall_core.config import AppConfig, load_config, save_config, style_from_config
from quotewall_renderer import Color, FontWeight, TextAlignment


class ConfigTests(unittest.TestCase):
    def test_load_default_when_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            cfg = load_config(Path(tmp) / "missing.json")
            self.assertIsInstance(cfg, AppConfig)
            self.assertEqual(cfg.editor.background_color, "#007AFF")
            self.assertEqual(cfg.editor.size, "iphone_portrait")
            self.assertEqual(cfg.image_generation.model, "dall-e-3")

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            cfg = load_config(path)
            cfg.editor.font_weight = "bold"
            cfg.image_generation.style = "natural"
            save_config(cfg, path)
            reloaded = load_config(path)
            self.assertEqual(reloaded.editor.font_weight, "bold")
            self.assertEqual(reloaded.image_generation.style, "natural")

    def test_invalid_values_normalized(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {
                "editor": {
                    "background_color": "chartreuse-ish",
                    "font_size": 5000,
                    "font_weight": "wobbly",
                    "alignment": "justified",
                    "size": "poster",
                },
                "image_generation": {"size": "64x64", "quality": "ultra", "timeout_s": 1},
                "unknown_section": {"x": 1},
            }
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.editor.background_color, "#007AFF")
            self.assertEqual(cfg.editor.font_size, 200.0)
            self.assertEqual(cfg.editor.font_weight, "medium")
            self.assertEqual(cfg.editor.alignment, "center")
            self.assertEqual(cfg.editor.size, "iphone_portrait")
            self.assertEqual(cfg.image_generation.size, "1024x1792")
            self.assertEqual(cfg.image_generation.quality, "standard")
            self.assertEqual(cfg.image_generation.timeout_s, 5)

    def test_corrupt_file_gives_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("[[[", encoding="utf-8")
            self.assertEqual(load_config(path), AppConfig())

    def test_style_from_config(self):
        cfg = AppConfig()
        cfg.editor.font_weight = "semibold"
        cfg.editor.alignment = "end"
        cfg.editor.size = "square"
        style = style_from_config(cfg)
        self.assertEqual(style.background_color, Color(0, 122, 255))
        self.assertEqual(style.font_weight, FontWeight.SEMIBOLD)
        self.assertEqual(style.alignment, TextAlignment.END)
        self.assertEqual(style.size.dimensions, (1080, 1080))
        self.assertIsNone(style.background_image)


if __name__ == "__main__":
    unittest.main()
