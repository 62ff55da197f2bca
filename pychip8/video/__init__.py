"""Video helpers for the CHIP-8 interpreter."""

from __future__ import annotations

from .framebuffer import DISPLAY_HEIGHT, DISPLAY_WIDTH, PIXEL_OFF, PIXEL_ON, Framebuffer
from .palette import MONOCHROME, PALETTES, PHOSPHOR, validate_palette
from .renderer import RenderResult, Renderer

__all__ = [
    "Framebuffer",
    "Renderer",
    "RenderResult",
    "MONOCHROME",
    "PALETTES",
    "PHOSPHOR",
    "validate_palette",
    "DISPLAY_WIDTH",
    "DISPLAY_HEIGHT",
    "PIXEL_OFF",
    "PIXEL_ON",
]
