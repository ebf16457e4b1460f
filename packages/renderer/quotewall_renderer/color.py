"""Hue/saturation/brightness helpers for gradient stops."""

from __future__ import annotations

import colorsys

from .models import Color


def to_hsb(color: Color) -> tuple[float, float, float, float]:
    h, s, v = colorsys.rgb_to_hsv(color.r / 255.0, color.g / 255.0, color.b / 255.0)
    return h, s, v, color.a / 255.0


def from_hsb(hue: float, saturation: float, brightness: float, alpha: float = 1.0) -> Color:
    r, g, b = colorsys.hsv_to_rgb(hue, saturation, brightness)
    return Color(
        int(round(r * 255)),
        int(round(g * 255)),
        int(round(b * 255)),
        int(round(alpha * 255)),
    )


def adjust_brightness(color: Color, amount: float) -> Color:
    """Shift HSB brightness by ``amount``, clamped to [0, 1]; hue, saturation and alpha are kept."""
    h, s, v, _ = to_hsb(color)
    v = max(0.0, min(1.0, v + amount))
    adjusted = from_hsb(h, s, v)
    return Color(adjusted.r, adjusted.g, adjusted.b, color.a)


def gradient_stops(base: Color, darken: float = 0.15, lighten: float = 0.10) -> tuple[Color, Color]:
    return adjust_brightness(base, -darken), adjust_brightness(base, lighten)
