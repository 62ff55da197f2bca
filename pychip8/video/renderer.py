"""Convert the framebuffer into scaled RGB frames."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .framebuffer import PIXEL_ON, Framebuffer
from .palette import MONOCHROME, RGBColor, validate_palette


@dataclass
class RenderResult:
    """Packed RGB image produced by :class:`Renderer`."""

    width: int
    height: int
    pixels: bytes

    def get_pixel(self, x: int, y: int) -> RGBColor:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} frame")
        offset = (y * self.width + x) * 3
        return (self.pixels[offset], self.pixels[offset + 1], self.pixels[offset + 2])

    def to_surface(self):
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to build surfaces") from exc
        return pygame.image.frombuffer(self.pixels, (self.width, self.height), "RGB")


class Renderer:
    """Expand each framebuffer pixel into a ``scale`` x ``scale`` RGB block."""

    def __init__(self, palette: Sequence[RGBColor] = MONOCHROME) -> None:
        self._background, self._foreground = validate_palette(palette)

    def render(self, framebuffer: Framebuffer, *, scale: int = 1) -> RenderResult:
        if scale <= 0:
            raise ValueError("scale must be positive")
        width = framebuffer.width * scale
        height = framebuffer.height * scale
        background = bytes(self._background)
        foreground = bytes(self._foreground)

        out = bytearray()
        for row in framebuffer.rows():
            line = b"".join((foreground if value == PIXEL_ON else background) * scale for value in row)
            out += line * scale
        return RenderResult(width, height, bytes(out))
