"""Python CHIP-8 interpreter.

The interpreter core lives in :mod:`pychip8.cpu`; the remaining packages
provide the memory, keypad, framebuffer, ROM loader and an optional pygame
frontend used by ``run.py``.
"""

from __future__ import annotations

from . import bus, cpu, io, loader, system, ui, utils, video

__all__: list[str] = [
    "cpu",
    "bus",
    "video",
    "io",
    "loader",
    "system",
    "ui",
    "utils",
]
