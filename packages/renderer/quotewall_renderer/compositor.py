"""Wallpaper composer: background, fitted quote body and attribution line."""

from __future__ import annotations

import logging

from PIL import Image, ImageDraw, ImageFilter

from quotewall_quotes.models import Quote

from .background import paint_background
from .errors import InvalidDimensions, RenderingUnavailable
from .models import BLACK, WHITE, Color, FontWeight, Rect, StyleConfig, TextAlignment
from .textfit import FontLibrary, TextBlock, fit_font_size, layout_text

PADDING_RATIO = 0.08
MIN_PADDING = 40.0
LINE_SPACING_RATIO = 0.2
BODY_VERTICAL_BIAS = 0.4
ATTRIBUTION_SCALE = 0.6
ATTRIBUTION_BOTTOM_INSET = 0.15
ATTRIBUTION_ALPHA = 0.9
SHADOW_ALPHA = 0.4
SHADOW_OFFSET = (2, 2)
SHADOW_BLUR = 4.0

logger = logging.getLogger("quotewall.renderer")


def text_region(width: int, height: int) -> Rect:
    padding = max(width * PADDING_RATIO, MIN_PADDING)
    return Rect(0, 0, width, height).inset(padding, padding)


def body_top(region: Rect, block_height: float) -> float:
    return region.y + (region.height - block_height) * BODY_VERTICAL_BIAS


def attribution_top(region: Rect, block_height: float) -> float:
    return region.bottom - region.height * ATTRIBUTION_BOTTOM_INSET - block_height


class WallpaperCompositor:
    """Stateless renderer; one instance may serve concurrent compose calls."""

    def __init__(self, fonts: FontLibrary | None = None) -> None:
        self.fonts = fonts or FontLibrary()

    def compose(self, quote: Quote, style: StyleConfig) -> Image.Image:
        width, height = style.size.width, style.size.height
        if width <= 0 or height <= 0:
            raise InvalidDimensions(width, height)

        canvas = self._allocate(width, height)
        paint_background(canvas, style)

        region = text_region(width, height)
        text_layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
        shadow_layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))

        fitted = fit_font_size(quote.text, region, style.font_size, style.font_weight, self.fonts)
        body = layout_text(
            quote.text,
            self.fonts.font(fitted, style.font_weight),
            region.width,
            spacing=fitted * LINE_SPACING_RATIO,
        )
        self._draw_block(text_layer, shadow_layer, body, region, body_top(region, body.height), style.alignment, WHITE)

        if quote.author:
            author_font = self.fonts.font(fitted * ATTRIBUTION_SCALE, FontWeight.LIGHT)
            attribution = layout_text(f"— {quote.author}", author_font, region.width)
            self._draw_block(
                text_layer,
                shadow_layer,
                attribution,
                region,
                attribution_top(region, attribution.height),
                style.alignment,
                WHITE.with_alpha(ATTRIBUTION_ALPHA),
            )

        # Pillow's radius is the Gaussian deviation; a shadow blur radius spans about two.
        canvas.alpha_composite(shadow_layer.filter(ImageFilter.GaussianBlur(SHADOW_BLUR / 2)))
        canvas.alpha_composite(text_layer)

        logger.debug(
            "wallpaper composed size=%sx%s font=%.2f lines=%d",
            width,
            height,
            fitted,
            len(body.lines),
            extra={"event": "wallpaper_composed"},
        )
        return canvas.convert("RGB")

    @staticmethod
    def _allocate(width: int, height: int) -> Image.Image:
        try:
            return Image.new("RGBA", (width, height), BLACK.rgba)
        except (MemoryError, ValueError, OSError) as exc:
            raise RenderingUnavailable(f"Cannot allocate {width}x{height} canvas") from exc

    @staticmethod
    def _line_x(region: Rect, line_width: float, alignment: TextAlignment) -> float:
        if alignment is TextAlignment.CENTER:
            return region.x + (region.width - line_width) / 2
        if alignment is TextAlignment.END:
            return region.right - line_width
        return region.x

    def _draw_block(
        self,
        text_layer: Image.Image,
        shadow_layer: Image.Image,
        block: TextBlock,
        region: Rect,
        top: float,
        alignment: TextAlignment,
        fill: Color,
    ) -> None:
        text_draw = ImageDraw.Draw(text_layer)
        shadow_draw = ImageDraw.Draw(shadow_layer)
        shadow_fill = BLACK.with_alpha(SHADOW_ALPHA * fill.a / 255).rgba
        dx, dy = SHADOW_OFFSET

        y = top
        for line in block.lines:
            if line:
                x = self._line_x(region, block.font.getlength(line), alignment)
                shadow_draw.text((x + dx, y + dy), line, font=block.font, fill=shadow_fill, anchor="la")
                text_draw.text((x, y), line, font=block.font, fill=fill.rgba, anchor="la")
            y += block.line_height + block.spacing


def compose(quote: Quote, style: StyleConfig, fonts: FontLibrary | None = None) -> Image.Image:
    return WallpaperCompositor(fonts).compose(quote, style)
