"""Bus-related helpers for the CHIP-8 interpreter."""

from .memory import (
    FONT_END,
    FONT_SET,
    FONT_START,
    MEMORY_SIZE,
    PROGRAM_START,
    Memory,
    MemoryError,
)

__all__ = [
    "FONT_END",
    "FONT_SET",
    "FONT_START",
    "MEMORY_SIZE",
    "PROGRAM_START",
    "Memory",
    "MemoryError",
]
