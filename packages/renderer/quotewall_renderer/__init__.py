"""Renderer package for quote wallpaper composition."""

from .color import adjust_brightness, gradient_stops
from .compositor import WallpaperCompositor, compose, text_region
from .errors import CompositionError, InvalidDimensions, RenderingUnavailable
from .export import encode_image, preview_data_url, save_image
from .models import CanvasSize, Color, FontWeight, Rect, StyleConfig, TextAlignment
from .sizes import DEFAULT_SIZE_NAME, get_size, list_sizes
from .textfit import FontLibrary, fit_font_size

__all__ = [
    "CanvasSize",
    "Color",
    "CompositionError",
    "DEFAULT_SIZE_NAME",
    "FontLibrary",
    "FontWeight",
    "InvalidDimensions",
    "Rect",
    "RenderingUnavailable",
    "StyleConfig",
    "TextAlignment",
    "WallpaperCompositor",
    "adjust_brightness",
    "compose",
    "encode_image",
    "fit_font_size",
    "get_size",
    "gradient_stops",
    "list_sizes",
    "preview_data_url",
    "save_image",
    "text_region",
]
