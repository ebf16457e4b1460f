"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from PIL import Image, ImageColor


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int
    a: int = 255

    @classmethod
    def parse(cls, value: str) -> "Color":
        """Accept ``#RGB``, ``#RRGGBB``, ``#RRGGBBAA`` or any CSS color name."""
        rgba = ImageColor.getrgb(value)
        if len(rgba) == 3:
            return cls(rgba[0], rgba[1], rgba[2])
        return cls(rgba[0], rgba[1], rgba[2], rgba[3])

    def with_alpha(self, alpha: float) -> "Color":
        return Color(self.r, self.g, self.b, int(round(max(0.0, min(1.0, alpha)) * 255)))

    @property
    def rgba(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    @property
    def hex(self) -> str:
        if self.a == 255:
            return f"#{self.r:02X}{self.g:02X}{self.b:02X}"
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}{self.a:02X}"


SYSTEM_BLUE = Color(0, 122, 255)
WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)


class FontWeight(int, Enum):
    ULTRALIGHT = 1
    THIN = 2
    LIGHT = 3
    REGULAR = 4
    MEDIUM = 5
    SEMIBOLD = 6
    BOLD = 7
    HEAVY = 8
    BLACK = 9

    @classmethod
    def from_name(cls, name: str) -> "FontWeight":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown font weight: {name}") from None


class TextAlignment(str, Enum):
    START = "start"
    CENTER = "center"
    END = "end"


@dataclass(frozen=True)
class CanvasSize:
    name: str
    display_name: str
    width: int
    height: int

    @classmethod
    def custom(cls, width: int, height: int) -> "CanvasSize":
        return cls(name="custom", display_name="Custom Size", width=int(width), height=int(height))

    @property
    def dimensions(self) -> tuple[int, int]:
        return (self.width, self.height)


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def inset(self, dx: float, dy: float) -> "Rect":
        return Rect(
            x=self.x + dx,
            y=self.y + dy,
            width=max(self.width - 2 * dx, 1.0),
            height=max(self.height - 2 * dy, 1.0),
        )


def _default_size() -> CanvasSize:
    from .sizes import get_size

    return get_size(None)


@dataclass(frozen=True)
class StyleConfig:
    """Every visual parameter of one compose call."""

    background_color: Color = SYSTEM_BLUE
    font_size: float = 24.0
    font_weight: FontWeight = FontWeight.MEDIUM
    alignment: TextAlignment = TextAlignment.CENTER
    size: CanvasSize = field(default_factory=_default_size)
    background_image: Image.Image | None = field(default=None, hash=False)

    def __post_init__(self) -> None:
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive, got {self.font_size}")
