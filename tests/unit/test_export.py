import sys
import tempfile
import unittest
from pathlib import Path

from PIL import Image

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "quotes"))

from quotewall_renderer.export import encode_image, format_for_path, preview_data_url, save_image


class ExportTests(unittest.TestCase):
    def test_png_signature(self):
        data = encode_image(Image.new("RGB", (4, 4), (1, 2, 3)))
        self.assertTrue(data.startswith(b"\x89PNG"))

    def test_jpeg_from_rgba(self):
        data = encode_image(Image.new("RGBA", (4, 4), (1, 2, 3, 100)), "jpeg")
        self.assertTrue(data.startswith(b"\xff\xd8"))

    def test_save_picks_format_from_suffix(self):
        with tempfile.TemporaryDirectory() as tmp:
            out = save_image(Image.new("RGB", (10, 6)), Path(tmp) / "sub" / "wall.jpg")
            with Image.open(out) as img:
                self.assertEqual(img.format, "JPEG")
                self.assertEqual(img.size, (10, 6))

    def test_unknown_suffix(self):
        with self.assertRaises(ValueError):
            format_for_path(Path("wall.bmpx"))

    def test_data_url(self):
        self.assertTrue(preview_data_url(Image.new("RGB", (2, 2))).startswith("data:image/png;base64,"))


if __name__ == "__main__":
    unittest.main()
