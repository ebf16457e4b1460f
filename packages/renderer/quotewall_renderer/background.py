"""Background layer: stretched image with tint, or flat color with diagonal gradient."""

from __future__ import annotations

import numpy as np
from PIL import Image

from .color import gradient_stops
from .models import Color, StyleConfig

TINT_ALPHA = 0.3
GRADIENT_DARKEN = 0.15
GRADIENT_LIGHTEN = 0.10


def diagonal_gradient(width: int, height: int, start: Color, end: Color) -> Image.Image:
    """Linear gradient from the top-left corner (``start``) to the bottom-right corner (``end``).

    Each pixel center is projected onto the diagonal, so every pixel of the
    canvas lies between the two stops and nothing is left unpainted.
    """
    xs = (np.arange(width, dtype=np.float32) + 0.5) * width
    ys = (np.arange(height, dtype=np.float32) + 0.5) * height
    t = (ys[:, None] + xs[None, :]) / float(width * width + height * height)
    np.clip(t, 0.0, 1.0, out=t)

    channels = []
    for a, b in zip(start.rgba, end.rgba):
        channel = a + (b - a) * t
        channels.append(np.rint(channel).astype(np.uint8))
    return Image.fromarray(np.dstack(channels))


def paint_background(canvas: Image.Image, style: StyleConfig) -> None:
    width, height = canvas.size
    base = style.background_color

    if style.background_image is not None:
        source = style.background_image.convert("RGBA")
        if source.size != canvas.size:
            source = source.resize(canvas.size, Image.Resampling.LANCZOS)
        canvas.alpha_composite(source)
        canvas.alpha_composite(Image.new("RGBA", canvas.size, base.with_alpha(TINT_ALPHA).rgba))
        return

    canvas.alpha_composite(Image.new("RGBA", canvas.size, base.rgba))
    dark, light = gradient_stops(base, darken=GRADIENT_DARKEN, lighten=GRADIENT_LIGHTEN)
    canvas.alpha_composite(diagonal_gradient(width, height, dark, light))
