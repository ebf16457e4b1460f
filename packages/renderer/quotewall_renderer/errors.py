"""Compositor error taxonomy."""

from __future__ import annotations


class CompositionError(Exception):
    """Base class for failures raised by the wallpaper compositor."""


class InvalidDimensions(CompositionError):
    def __init__(self, width: float, height: float) -> None:
        super().__init__(f"Canvas dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height


class RenderingUnavailable(CompositionError):
    """The drawing backend could not allocate a canvas or load a font."""
