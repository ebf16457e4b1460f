"""Font resolution, word wrapping and the quote font-size fit."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from PIL import ImageFont

from .errors import RenderingUnavailable
from .models import FontWeight, Rect

MAX_FONT_SIZE = 60.0
MIN_FONT_SIZE = 16.0
MAX_FONT_WIDTH_RATIO = 0.08
MAX_TEXT_HEIGHT_RATIO = 0.6

_LIGHT_FILES = ("SpaceGrotesk-Light.ttf", "DejaVuSans-ExtraLight.ttf", "DejaVuSans.ttf", "Arial.ttf")
_REGULAR_FILES = ("SpaceGrotesk-Regular.ttf", "DejaVuSans.ttf", "Arial.ttf")
_MEDIUM_FILES = ("SpaceGrotesk-Medium.ttf", "DejaVuSans.ttf", "Arial.ttf")
_BOLD_FILES = ("SpaceGrotesk-Bold.ttf", "DejaVuSans-Bold.ttf", "Arial Bold.ttf")

_WEIGHT_FILES: dict[FontWeight, tuple[str, ...]] = {
    FontWeight.ULTRALIGHT: _LIGHT_FILES,
    FontWeight.THIN: _LIGHT_FILES,
    FontWeight.LIGHT: _LIGHT_FILES,
    FontWeight.REGULAR: _REGULAR_FILES,
    FontWeight.MEDIUM: _MEDIUM_FILES,
    FontWeight.SEMIBOLD: ("SpaceGrotesk-SemiBold.ttf",) + _BOLD_FILES,
    FontWeight.BOLD: _BOLD_FILES,
    FontWeight.HEAVY: _BOLD_FILES,
    FontWeight.BLACK: _BOLD_FILES,
}


@lru_cache(maxsize=256)
def _truetype(path: str, size: float) -> ImageFont.FreeTypeFont:
    return ImageFont.truetype(path, size)


@lru_cache(maxsize=32)
def _first_available(names: tuple[str, ...]) -> str | None:
    # Misses trigger a walk of the system font directories, so remember them.
    for name in names:
        try:
            ImageFont.truetype(name, MIN_FONT_SIZE)
        except OSError:
            continue
        return name
    return None


@lru_cache(maxsize=64)
def _bundled_default(size: float) -> ImageFont.FreeTypeFont:
    font = ImageFont.load_default(size)
    if not isinstance(font, ImageFont.FreeTypeFont):
        raise RenderingUnavailable("Pillow was built without FreeType support")
    return font


class FontLibrary:
    """Resolves a font file per weight, falling back to Pillow's bundled face."""

    def __init__(self, font_path: str | None = None) -> None:
        self.font_path = font_path

    def resolve(self, weight: FontWeight) -> str | None:
        if self.font_path:
            return self.font_path
        return _first_available(_WEIGHT_FILES[weight])

    def font(self, size: float, weight: FontWeight) -> ImageFont.FreeTypeFont:
        path = self.resolve(weight)
        if path is None:
            return _bundled_default(size)
        try:
            return _truetype(path, size)
        except OSError as exc:
            raise RenderingUnavailable(f"Cannot load font {path}") from exc


@dataclass(frozen=True)
class TextBlock:
    lines: tuple[str, ...]
    font: ImageFont.FreeTypeFont
    line_height: float
    spacing: float

    @property
    def height(self) -> float:
        if not self.lines:
            return 0.0
        return len(self.lines) * self.line_height + (len(self.lines) - 1) * self.spacing


def _split_long_word(word: str, font: ImageFont.FreeTypeFont, max_width: float) -> list[str]:
    pieces = []
    current = ""
    for ch in word:
        if current and font.getlength(current + ch) > max_width:
            pieces.append(current)
            current = ch
        else:
            current += ch
    if current:
        pieces.append(current)
    return pieces


def wrap_lines(text: str, font: ImageFont.FreeTypeFont, max_width: float) -> list[str]:
    """Greedy word wrap; a word wider than the line is broken between characters."""
    lines: list[str] = []
    for paragraph in text.split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue

        current = ""
        for word in words:
            candidate = f"{current} {word}" if current else word
            if font.getlength(candidate) <= max_width:
                current = candidate
                continue
            if current:
                lines.append(current)
            pieces = _split_long_word(word, font, max_width)
            lines.extend(pieces[:-1])
            current = pieces[-1]
        lines.append(current)
    return lines


def layout_text(text: str, font: ImageFont.FreeTypeFont, max_width: float, spacing: float = 0.0) -> TextBlock:
    ascent, descent = font.getmetrics()
    return TextBlock(
        lines=tuple(wrap_lines(text, font, max_width)),
        font=font,
        line_height=float(ascent + descent),
        spacing=spacing,
    )


def font_size_bounds(region_width: float) -> tuple[float, float]:
    ceiling = min(region_width * MAX_FONT_WIDTH_RATIO, MAX_FONT_SIZE)
    return MIN_FONT_SIZE, max(ceiling, MIN_FONT_SIZE)


def fit_font_size(
    text: str,
    region: Rect,
    base_size: float,
    weight: FontWeight,
    fonts: FontLibrary,
) -> float:
    """Largest size up to the ceiling whose wrapped height stays within 60% of the region.

    The correction is one proportional step, assuming wrapped height scales
    linearly with font size; it is not re-measured afterwards.
    """
    floor, ceiling = font_size_bounds(region.width)
    size = max(min(base_size, ceiling), floor)

    measured = layout_text(text, fonts.font(size, weight), region.width).height
    limit = region.height * MAX_TEXT_HEIGHT_RATIO
    if measured > limit:
        size = max(size * (limit / measured), floor)
    return size
