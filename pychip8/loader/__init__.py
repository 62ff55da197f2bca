"""Loaders for CHIP-8 program images."""

from __future__ import annotations

from .rom import (
    MAX_ROM_SIZE,
    RomFormatError,
    load_rom,
    load_rom_from_path,
    load_rom_from_stream,
)

__all__ = [
    "MAX_ROM_SIZE",
    "RomFormatError",
    "load_rom",
    "load_rom_from_path",
    "load_rom_from_stream",
]
