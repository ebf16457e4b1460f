"""Named canvas presets."""

from __future__ import annotations

from .models import CanvasSize

DEFAULT_SIZE_NAME = "iphone_portrait"

SIZES: dict[str, CanvasSize] = {
    "iphone_portrait": CanvasSize(
        name="iphone_portrait",
        display_name="iPhone (Portrait)",
        width=1170,
        height=2532,
    ),
    "iphone_landscape": CanvasSize(
        name="iphone_landscape",
        display_name="iPhone (Landscape)",
        width=2532,
        height=1170,
    ),
    "ipad_portrait": CanvasSize(
        name="ipad_portrait",
        display_name="iPad (Portrait)",
        width=1668,
        height=2388,
    ),
    "square": CanvasSize(
        name="square",
        display_name="Square (Social)",
        width=1080,
        height=1080,
    ),
}


def list_sizes() -> list[str]:
    return list(SIZES.keys())


def get_size(name: str | None) -> CanvasSize:
    if not name:
        return SIZES[DEFAULT_SIZE_NAME]
    try:
        return SIZES[name]
    except KeyError:
        raise ValueError(f"Unknown canvas size: {name}") from None
