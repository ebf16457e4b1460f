"""Encoding helpers for handing rendered wallpapers to save/share sinks."""

from __future__ import annotations

import base64
from io import BytesIO
from pathlib import Path

from PIL import Image

_SUFFIX_FORMATS = {
    ".png": "PNG",
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".webp": "WEBP",
}


def encode_image(image: Image.Image, fmt: str = "PNG") -> bytes:
    fmt = fmt.upper()
    buf = BytesIO()
    if fmt == "JPEG":
        image.convert("RGB").save(buf, format="JPEG", quality=95)
    else:
        image.save(buf, format=fmt)
    return buf.getvalue()


def format_for_path(path: Path) -> str:
    try:
        return _SUFFIX_FORMATS[path.suffix.lower()]
    except KeyError:
        raise ValueError(f"Unsupported image extension: {path.suffix or '(none)'}") from None


def save_image(image: Image.Image, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(encode_image(image, format_for_path(path)))
    return path


def preview_data_url(image: Image.Image) -> str:
    b64 = base64.b64encode(encode_image(image, "PNG")).decode("ascii")
    return f"data:image/png;base64,{b64}"
