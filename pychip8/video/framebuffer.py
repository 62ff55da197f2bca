"""64x32 monochrome framebuffer."""

from __future__ import annotations

from typing import Final, Iterator, Sequence

DISPLAY_WIDTH: Final[int] = 64
DISPLAY_HEIGHT: Final[int] = 32
PIXEL_OFF: Final[int] = 0x00000000
PIXEL_ON: Final[int] = 0xFFFFFFFF


class Framebuffer:
    """Grid of 32-bit pixels that are either fully off or fully on.

    ``redraw`` is raised whenever the contents change and stays set until the
    host consumes it with :meth:`consume_redraw`.
    """

    def __init__(self) -> None:
        self._pixels: list[int] = [PIXEL_OFF] * (DISPLAY_WIDTH * DISPLAY_HEIGHT)
        self.redraw = False

    @property
    def width(self) -> int:
        return DISPLAY_WIDTH

    @property
    def height(self) -> int:
        return DISPLAY_HEIGHT

    def clear(self) -> None:
        self._pixels[:] = [PIXEL_OFF] * len(self._pixels)
        self.redraw = True

    def get_pixel(self, x: int, y: int) -> int:
        return self._pixels[self._offset(x, y)]

    def is_on(self, x: int, y: int) -> bool:
        return self.get_pixel(x, y) == PIXEL_ON

    def xor_pixel(self, x: int, y: int) -> bool:
        """Toggle the pixel at ``(x, y)`` and return True if it was switched off."""

        offset = self._offset(x, y)
        collided = self._pixels[offset] == PIXEL_ON
        self._pixels[offset] ^= PIXEL_ON
        self.redraw = True
        return collided

    def consume_redraw(self) -> bool:
        pending = self.redraw
        self.redraw = False
        return pending

    def rows(self) -> Iterator[Sequence[int]]:
        for y in range(DISPLAY_HEIGHT):
            start = y * DISPLAY_WIDTH
            yield tuple(self._pixels[start : start + DISPLAY_WIDTH])

    def snapshot(self) -> tuple[int, ...]:
        return tuple(self._pixels)

    def lit_count(self) -> int:
        return sum(1 for value in self._pixels if value == PIXEL_ON)

    @staticmethod
    def _offset(x: int, y: int) -> int:
        if not (0 <= x < DISPLAY_WIDTH and 0 <= y < DISPLAY_HEIGHT):
            raise IndexError(f"pixel ({x}, {y}) outside {DISPLAY_WIDTH}x{DISPLAY_HEIGHT} display")
        return y * DISPLAY_WIDTH + x
